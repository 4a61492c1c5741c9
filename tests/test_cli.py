"""Smoke tests: verify CLI --help works for all entry points."""

import json
import subprocess
import sys

import pytest

from quake_risk import predict

MODULES = [
    "quake_risk.predict",
    "quake_risk.score",
    "quake_risk.risk_classifier.evaluate",
]


@pytest.mark.parametrize("module", MODULES)
def test_cli_help(module):
    result = subprocess.run(
        [sys.executable, "-m", module, "--help"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0, f"{module} --help failed: {result.stderr}"
    assert "usage:" in result.stdout.lower()


def test_predict_sample_json(capsys):
    predict.main(["--sample", "hiroshima", "--no-delay", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert out["risk"] == "low"
    assert out["accuracy"] == 95


def test_predict_explicit_values(capsys):
    predict.main(["--lat", "35.6895", "--lng", "139.6917", "--depth", "80.4",
                  "--magnitude", "6.2", "--days", "1", "--no-delay"])
    assert "HIGH" in capsys.readouterr().out


def test_predict_rejects_coordinates_outside_japan(capsys):
    with pytest.raises(SystemExit) as exc:
        predict.main(["--lat", "51.5", "--lng", "-0.12", "--depth", "10",
                      "--magnitude", "5", "--days", "3", "--no-delay"])
    assert exc.value.code == 2
    assert "outside Japan" in capsys.readouterr().err


def test_evaluate_runs():
    result = subprocess.run(
        [sys.executable, "-m", "quake_risk.risk_classifier.evaluate", "--show-misses"],
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert "Leave-one-out accuracy" in result.stdout
    # Per-stage diagnostics stay off stdout at the default log level
    assert "risk_threshold" not in result.stdout
