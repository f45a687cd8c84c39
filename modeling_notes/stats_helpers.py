"""Reusable statistics computation helpers for exploratory summaries."""
import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.nonparametric.smoothers_lowess import lowess


def descriptive_stats(series):
    """Compute comprehensive descriptive statistics for a numeric series."""
    return {
        "count": len(series),
        "mean": series.mean(),
        "median": series.median(),
        "std": series.std(),
        "min": series.min(),
        "max": series.max(),
        "q25": series.quantile(0.25),
        "q75": series.quantile(0.75),
        "iqr": series.quantile(0.75) - series.quantile(0.25),
    }


def group_summary(df, group, cols):
    """Descriptive statistics for each column within each group, one row per pair."""
    rows = []
    for level, subset in df.groupby(group, observed=True):
        for col in cols:
            rows.append({group: level, "variable": col, **descriptive_stats(subset[col])})
    return pd.DataFrame(rows)


def correlation_by_group(df, group, x, y):
    """Pearson correlation of x and y within each group."""
    rows = []
    for level, subset in df.groupby(group, observed=True):
        if len(subset) < 3:
            continue
        r, p = stats.pearsonr(subset[x], subset[y])
        rows.append({group: level, "n": len(subset), "r": r, "p_value": p})
    return pd.DataFrame(rows)


def smooth_trend(x, y, frac=2 / 3):
    """LOWESS smoother through (x, y); returns sorted x and smoothed y arrays."""
    fitted = lowess(np.asarray(y, dtype=float), np.asarray(x, dtype=float), frac=frac)
    return fitted[:, 0], fitted[:, 1]
