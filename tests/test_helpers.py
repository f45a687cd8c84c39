import numpy as np
import pandas as pd
import pytest

from modeling_notes.ml_helpers import holdout_split, regression_metrics
from modeling_notes.stats_helpers import (
    correlation_by_group,
    descriptive_stats,
    group_summary,
    smooth_trend,
)


def test_descriptive_stats():
    s = pd.Series([1.0, 2.0, 3.0, 4.0])
    out = descriptive_stats(s)
    assert out["count"] == 4
    assert out["mean"] == 2.5
    assert out["iqr"] == pytest.approx(out["q75"] - out["q25"])


def test_group_summary(crickets):
    summary = group_summary(crickets, "species", ["temp", "rate"])
    assert len(summary) == 4
    counts = summary.set_index(["species", "variable"])["count"]
    assert counts[("O. niveus", "rate")] == 17


def test_correlation_by_group(crickets):
    corr = correlation_by_group(crickets, "species", "temp", "rate")
    assert list(corr["species"]) == ["O. exclamationis", "O. niveus"]
    assert (corr["r"] > 0.9).all()
    assert (corr["p_value"] < 0.001).all()


def test_smooth_trend_is_sorted(crickets):
    xs, ys = smooth_trend(crickets["temp"], crickets["rate"])
    assert len(xs) == len(ys) == 31
    assert np.all(np.diff(xs) >= 0)


def test_holdout_split_stratified(crickets):
    train, test = holdout_split(crickets, test_size=0.25, seed=0)
    assert len(train) + len(test) == 31
    assert set(train.index).isdisjoint(test.index)
    assert test["species"].nunique() == 2


def test_regression_metrics():
    y = np.array([1.0, 2.0, 3.0])
    perfect = regression_metrics(y, y)
    assert perfect["rmse"] == 0
    assert perfect["r2"] == 1
    off = regression_metrics(y, y + 1)
    assert off["mae"] == pytest.approx(1)
    assert off["rmse"] == pytest.approx(1)
