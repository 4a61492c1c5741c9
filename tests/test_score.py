import pandas as pd
import pytest
from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.score import main, score_frame


NO_DELAY = ClassifierConfig(min_delay_ms=0.0, max_delay_ms=0.0)


def _frame():
    return pd.DataFrame({
        "latitude": [35.6895, 34.3853, 0.0],
        "longitude": [139.6917, 132.4553, 0.0],
        "depth": [80.4, 42.8, 10.0],
        "magnitude": [6.2, 4.2, 5.0],
        "days_since_last_eq": [1, 10, 3],
    })


class TestScoreFrame:
    def test_scores_valid_rows(self):
        out = score_frame(_frame(), NO_DELAY)
        assert list(out["risk"][:2]) == ["high", "low"]
        assert out["accuracy"][0] == 95

    def test_invalid_row_left_unscored(self):
        out = score_frame(_frame(), NO_DELAY)
        assert out["risk"][2] is None
        assert "outside Japan" in out["error"][2]

    def test_repeated_index_labels(self):
        tokyo = _frame().iloc[[0]]
        hiroshima = _frame().iloc[[1]].reset_index(drop=True)
        df = pd.concat([tokyo, hiroshima])
        assert list(df.index) == [0, 0]
        out = score_frame(df, NO_DELAY)
        assert list(out["risk"]) == ["high", "low"]
        assert list(out["error"]) == ["", ""]

    def test_input_not_modified(self):
        df = _frame()
        score_frame(df, NO_DELAY)
        assert "risk" not in df.columns

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="days_since_last_eq"):
            score_frame(_frame().drop(columns=["days_since_last_eq"]), NO_DELAY)


class TestScoreMain:
    def test_writes_output(self, tmp_path):
        src = tmp_path / "queries.csv"
        dst = tmp_path / "scored.csv"
        _frame().to_csv(src, index=False)
        main([str(src), "--output", str(dst), "--no-delay"])
        scored = pd.read_csv(dst)
        assert list(scored["risk"][:2]) == ["high", "low"]

    def test_missing_input_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            main([str(tmp_path / "nope.csv")])
