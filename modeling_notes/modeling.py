"""Formula-interface helpers: fit, compare, tidy and predict with statsmodels.

Nothing here estimates anything by itself. Design matrices come from patsy,
fits and ANOVA tables from statsmodels; these functions only arrange their
output into the tables and frames the chapters display:

- ``formula_terms`` / ``design_matrix`` show what a formula expands into,
- ``fit_ols`` fits a formula and keeps any warnings the library raised,
- ``anova_table`` / ``compare_models`` produce ANOVA tables,
- ``tidy`` / ``glance`` / ``augment`` give coefficient-, model- and
  observation-level summaries as DataFrames,
- ``fit_by_group`` fits one model per group and stacks the coefficients,
- ``predict_new`` predicts for new rows with explicit missing-value handling.
"""
import logging
import threading
import warnings
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
import patsy
import statsmodels.formula.api as smf
from statsmodels.stats.anova import anova_lm

from modeling_notes.settings import CONF_LEVEL

logger = logging.getLogger(__name__)

NA_ACTIONS = ("fail", "omit", "pass")
INTERVALS = ("confidence", "prediction")

# catch_warnings swaps process-wide filters; Streamlit runs each session in its own thread.
_WARNINGS_LOCK = threading.Lock()


class FormulaError(ValueError):
    """A formula could not be parsed or evaluated against the data."""


class MissingDataError(ValueError):
    """New data holds missing predictor values and ``na_action="fail"``."""


@dataclass
class FitResult:
    """A fitted formula with the warnings statsmodels raised while fitting."""

    formula: str
    results: object
    warnings: list = field(default_factory=list)

    @property
    def nobs(self):
        return int(self.results.nobs)


def formula_terms(formula):
    """Split a formula into its outcome and the names of its right-hand terms.

    Returns:
        tuple[str, list[str]]: outcome expression and term names, with the
        intercept reported as ``"Intercept"``.
    """
    try:
        desc = patsy.ModelDesc.from_formula(formula)
    except patsy.PatsyError as exc:
        raise FormulaError(f"Could not parse formula {formula!r}: {exc}") from exc
    outcome = " + ".join(term.name() for term in desc.lhs_termlist)
    return outcome, [term.name() for term in desc.rhs_termlist]


def design_matrix(formula, data):
    """Expand a formula against data into outcome and predictor DataFrames."""
    try:
        y, X = patsy.dmatrices(formula, data, return_type="dataframe")
    except patsy.PatsyError as exc:
        raise FormulaError(f"Could not build design matrix for {formula!r}: {exc}") from exc
    logger.debug("%s -> %d rows x %d columns", formula, X.shape[0], X.shape[1])
    return y, X


def _capture(func, *args, **kwargs):
    """Call ``func`` and return its value with the messages of any warnings it raised."""
    with _WARNINGS_LOCK, warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        value = func(*args, **kwargs)
    return value, [str(w.message) for w in caught]


def fit_ols(formula, data):
    """Fit an ordinary least-squares model from a formula."""
    try:
        results, messages = _capture(lambda: smf.ols(formula, data=data).fit())
    except patsy.PatsyError as exc:
        raise FormulaError(f"Could not fit {formula!r}: {exc}") from exc
    for msg in messages:
        logger.warning("%s: %s", formula, msg)
    logger.info("Fitted %s on %d rows (R-squared %.4f)", formula, int(results.nobs), results.rsquared)
    return FitResult(formula=formula, results=results, warnings=messages)


def model_summary(fit):
    """Return the statsmodels text summary of a fit."""
    summary, messages = _capture(fit.results.summary)
    for msg in messages:
        logger.warning("%s summary: %s", fit.formula, msg)
    return str(summary)


def anova_table(fit, typ=1):
    """ANOVA table of a single model: sequential sums of squares by default."""
    table = anova_lm(fit.results, typ=typ)
    table = table.rename(columns={
        "sum_sq": "sumsq", "mean_sq": "meansq", "F": "statistic", "PR(>F)": "p_value",
    })
    table.index.name = "term"
    return table.reset_index()


def compare_models(reduced, full):
    """F test of a reduced model nested inside a fuller one."""
    if reduced.nobs != full.nobs:
        raise ValueError(
            f"Models were fit on different data ({reduced.nobs} vs {full.nobs} rows); "
            "nested comparison needs the same observations"
        )
    table = anova_lm(reduced.results, full.results)
    table = table.rename(columns={
        "df_resid": "df_residual", "ssr": "rss", "df_diff": "df",
        "ss_diff": "sumsq", "F": "statistic", "Pr(>F)": "p_value",
    })
    table.insert(0, "term", [reduced.formula, full.formula])
    logger.info(
        "Compared %s vs %s: F = %.3f, p = %.4g",
        reduced.formula, full.formula, table["statistic"].iloc[1], table["p_value"].iloc[1],
    )
    return table.reset_index(drop=True)


def tidy(fit, conf_int=False, conf_level=CONF_LEVEL):
    """One row per coefficient: estimate, standard error, t statistic, p-value."""
    res = fit.results
    out = pd.DataFrame({
        "term": res.params.index,
        "estimate": res.params.values,
        "std_error": res.bse.values,
        "statistic": res.tvalues.values,
        "p_value": res.pvalues.values,
    })
    if conf_int:
        ci = res.conf_int(alpha=1 - conf_level)
        out["conf_low"] = ci[0].values
        out["conf_high"] = ci[1].values
    return out


def glance(fit):
    """One-row summary of model-level fit statistics."""
    res = fit.results
    return pd.DataFrame([{
        "r_squared": res.rsquared,
        "adj_r_squared": res.rsquared_adj,
        "sigma": np.sqrt(res.scale),
        "statistic": res.fvalue,
        "p_value": res.f_pvalue,
        "df": res.df_model,
        "log_lik": res.llf,
        "aic": res.aic,
        "bic": res.bic,
        "deviance": res.ssr,
        "df_residual": res.df_resid,
        "nobs": int(res.nobs),
    }])


def augment(fit, data=None):
    """Attach fitted values, residuals and influence measures to each observation.

    ``data`` defaults to the frame the model was fit on; rows the fit dropped
    for missing values are left out.
    """
    res = fit.results
    frame = res.model.data.frame if data is None else data
    out = frame.loc[res.fittedvalues.index].copy()
    influence = res.get_influence()
    out[".fitted"] = res.fittedvalues.values
    out[".resid"] = res.resid.values
    out[".hat"] = influence.hat_matrix_diag
    out[".sigma"] = np.sqrt(influence.sigma2_not_obsi)
    out[".cooksd"] = influence.cooks_distance[0]
    out[".std_resid"] = influence.resid_studentized_internal
    return out


def fit_by_group(data, group, formula, conf_int=False):
    """Fit ``formula`` separately within each level of ``group`` and stack the coefficients."""
    if group not in data.columns:
        raise ValueError(f"Unknown grouping column: {group}")
    frames = []
    for level, subset in data.groupby(group, observed=True):
        coefs = tidy(fit_ols(formula, subset), conf_int=conf_int)
        coefs.insert(0, group, level)
        frames.append(coefs)
    if not frames:
        raise ValueError(f"No rows to fit in any level of {group}")
    return pd.concat(frames, ignore_index=True)


def predict_new(fit, new_data, na_action="fail", interval=None, conf_level=CONF_LEVEL):
    """Predict the outcome for new rows.

    Args:
        fit: A ``FitResult``.
        new_data: DataFrame holding the predictor columns the formula uses.
        na_action: ``"fail"`` raises ``MissingDataError`` if a needed predictor
            is missing, ``"omit"`` drops those rows, ``"pass"`` keeps them with
            NaN predictions.
        interval: ``None``, ``"confidence"`` or ``"prediction"``; adds
            ``.pred_lower`` and ``.pred_upper`` columns.
        conf_level: Coverage of the interval.

    Returns:
        pandas.DataFrame: ``new_data`` with a ``.pred`` column (and bounds).

    Raises:
        FormulaError: A predictor column is absent or holds a level the model
            never saw, whatever ``na_action`` is.
    """
    if na_action not in NA_ACTIONS:
        raise ValueError(f"na_action must be one of {NA_ACTIONS}, got {na_action!r}")
    if interval is not None and interval not in INTERVALS:
        raise ValueError(f"interval must be one of {INTERVALS} or None, got {interval!r}")

    # Rows are matched by position so duplicate index labels survive.
    design_info = fit.results.model.data.design_info
    try:
        (X,) = patsy.build_design_matrices(
            [design_info], new_data.reset_index(drop=True),
            NA_action=patsy.NAAction(on_NA="drop"),
            return_type="dataframe",
        )
    except patsy.PatsyError as exc:
        raise FormulaError(f"Could not build predictors for {fit.formula!r}: {exc}") from exc

    keep = X.index.to_numpy()
    dropped = len(new_data) - len(keep)
    if dropped and na_action == "fail":
        raise MissingDataError(f"Missing predictor values in {dropped} row(s) of new data")
    if dropped:
        logger.info("%d row(s) with missing predictors %s", dropped,
                    "dropped" if na_action == "omit" else "predicted as NaN")

    cols = [".pred"] + ([".pred_lower", ".pred_upper"] if interval else [])
    preds = {col: np.full(len(new_data), np.nan) for col in cols}
    if len(keep):
        frame = fit.results.get_prediction(X, transform=False).summary_frame(alpha=1 - conf_level)
        preds[".pred"][keep] = frame["mean"].to_numpy()
        if interval == "confidence":
            preds[".pred_lower"][keep] = frame["mean_ci_lower"].to_numpy()
            preds[".pred_upper"][keep] = frame["mean_ci_upper"].to_numpy()
        elif interval == "prediction":
            preds[".pred_lower"][keep] = frame["obs_ci_lower"].to_numpy()
            preds[".pred_upper"][keep] = frame["obs_ci_upper"].to_numpy()

    if na_action == "omit":
        out = new_data.iloc[keep].copy()
        for col in cols:
            out[col] = preds[col][keep]
    else:
        out = new_data.copy()
        for col in cols:
            out[col] = preds[col]
    return out
