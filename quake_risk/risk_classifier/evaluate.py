#!/usr/bin/env python3
"""Evaluation metrics for the earthquake risk classifier.

Usage:
  python -m quake_risk.risk_classifier.evaluate
  python -m quake_risk.risk_classifier.evaluate --show-misses --log-level DEBUG
"""

import argparse

import numpy as np

from quake_risk.logging_setup import configure_logging
from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.decision import OVERRIDE_RULES, assess
from quake_risk.risk_classifier.reference import REFERENCE_SAMPLES, ReferenceTable
from quake_risk.risk_classifier.types import RISK_LABELS


def confusion_matrix(y_true: list, y_pred: list) -> np.ndarray:
    """3x3 count matrix indexed by risk ordinal, rows = true, cols = predicted."""
    index = {label: i for i, label in enumerate(RISK_LABELS)}
    cm = np.zeros((len(RISK_LABELS), len(RISK_LABELS)), dtype=int)
    if len(y_true) > 0:
        rows = [index[t] for t in y_true]
        cols = [index[p] for p in y_pred]
        np.add.at(cm, (rows, cols), 1)
    return cm


def classification_report(y_true: list, y_pred: list) -> dict:
    """Accuracy plus per-class precision/recall/F1 derived from the confusion matrix.

    Labels are "low" | "medium" | "high". Returns a dict with keys: accuracy,
    n, classes, confusion_matrix (nested dict, true label -> predicted label).
    """
    cm = confusion_matrix(y_true, y_pred)
    n = int(cm.sum())
    tp = np.diag(cm)
    predicted = cm.sum(axis=0)
    actual = cm.sum(axis=1)

    with np.errstate(divide="ignore", invalid="ignore"):
        precision = np.where(predicted > 0, tp / predicted, 0.0)
        recall = np.where(actual > 0, tp / actual, 0.0)
        f1 = np.where(precision + recall > 0,
                      2 * precision * recall / (precision + recall), 0.0)

    classes = {
        label: {
            "precision": float(precision[i]),
            "recall": float(recall[i]),
            "f1": float(f1[i]),
            "support": int(actual[i]),
        }
        for i, label in enumerate(RISK_LABELS)
    }
    return {
        "accuracy": float(tp.sum() / n) if n > 0 else 0.0,
        "n": n,
        "classes": classes,
        "confusion_matrix": {
            t: {p: int(cm[i, j]) for j, p in enumerate(RISK_LABELS)}
            for i, t in enumerate(RISK_LABELS)
        },
    }


def leave_one_out(samples=REFERENCE_SAMPLES, cfg: ClassifierConfig = None) -> dict:
    """Classify each reference sample against a table built from all the others.

    Returns dict with y_true, y_pred, overrides (rule name or None per sample)
    and names.
    """
    if cfg is None:
        cfg = ClassifierConfig()
    full = ReferenceTable(samples, cfg)

    y_true, y_pred, overrides = [], [], []
    for idx, sample in enumerate(full.samples):
        held_out = full.without(idx, cfg)
        assessment = assess(full.features[idx], cfg, held_out)
        y_true.append(RISK_LABELS[sample.risk_class])
        y_pred.append(assessment.label)
        overrides.append(assessment.override)

    return {
        "y_true": y_true,
        "y_pred": y_pred,
        "overrides": overrides,
        "names": [s.name for s in full.samples],
    }


def override_histogram(overrides: list) -> dict:
    """Count how often each override rule decided the final class."""
    n = len(overrides)
    out = {}
    names = [rule[0] for rule in OVERRIDE_RULES] + [None]
    for name in names:
        count = sum(1 for o in overrides if o == name)
        out[name or "none"] = {"count": count, "fraction": count / n if n > 0 else 0.0}
    return out


def print_report(results: dict, overrides: dict = None, misses: list = None):
    """Pretty-print evaluation results to stdout."""
    print(f"\nLeave-one-out accuracy {results['accuracy']:.1%} over {results['n']} reference samples\n")

    print(f"  {'class':<8} {'support':>7} {'precision':>9} {'recall':>7} {'f1':>6}")
    for label, m in results["classes"].items():
        print(f"  {label:<8} {m['support']:>7} {m['precision']:>9.2f} {m['recall']:>7.2f} {m['f1']:>6.2f}")

    print("\n  true \\ pred " + "".join(f"{p:>8}" for p in RISK_LABELS))
    for t, row in results["confusion_matrix"].items():
        print(f"  {t:<12}" + "".join(f"{row[p]:>8}" for p in RISK_LABELS))

    if overrides:
        print(f"\n  Override rules:")
        for name, m in overrides.items():
            print(f"    {name:<20} {m['fraction']:.1%} ({m['count']})")

    if misses:
        print(f"\n  Misclassified samples:")
        for name, true, pred in misses:
            print(f"    {name:<20} true={true:<7} pred={pred}")

    print()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Leave-one-out evaluation of the risk classifier on its reference table.",
    )
    parser.add_argument("--show-misses", action="store_true",
                        help="List misclassified reference samples")
    parser.add_argument("--log-level", default="WARNING",
                        help="Log level for diagnostics on stderr (default: WARNING)")
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)

    loo = leave_one_out()
    results = classification_report(loo["y_true"], loo["y_pred"])
    misses = None
    if args.show_misses:
        misses = [(name, t, p) for name, t, p in zip(loo["names"], loo["y_true"], loo["y_pred"])
                  if t != p]
    print_report(results, override_histogram(loo["overrides"]), misses)


if __name__ == "__main__":
    main()
