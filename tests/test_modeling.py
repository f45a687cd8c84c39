import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pandas as pd
import pytest

from modeling_notes.modeling import (
    FitResult,
    FormulaError,
    MissingDataError,
    anova_table,
    augment,
    compare_models,
    design_matrix,
    fit_by_group,
    fit_ols,
    formula_terms,
    glance,
    model_summary,
    predict_new,
    tidy,
)

INTERACTION = "rate ~ temp * species"
MAIN = "rate ~ temp + species"
NIVEUS = "species[T.O. niveus]"
LOG_SHIFTED = "rate ~ np.log(temp - 25)"


@pytest.fixture
def main_fit(crickets):
    return fit_ols(MAIN, crickets)


@pytest.fixture
def interaction_fit(crickets):
    return fit_ols(INTERACTION, crickets)


# ═══════════════════════════════════════════════════════════════════════
# formulas
# ═══════════════════════════════════════════════════════════════════════


class TestFormulas:

    def test_terms_of_interaction_formula(self):
        outcome, terms = formula_terms(INTERACTION)
        assert outcome == "rate"
        assert terms == ["Intercept", "temp", "species", "temp:species"]

    def test_intercept_removed(self):
        _, terms = formula_terms("rate ~ temp - 1")
        assert terms == ["temp"]

    def test_unparseable_formula(self):
        with pytest.raises(FormulaError):
            formula_terms("rate ~ temp +")

    def test_design_matrix_dummy_and_interaction_columns(self, crickets):
        y, X = design_matrix(INTERACTION, crickets)
        assert list(y.columns) == ["rate"]
        assert set(X.columns) == {"Intercept", "temp", NIVEUS, f"temp:{NIVEUS}"}
        assert X[NIVEUS].sum() == 17
        niveus = X[NIVEUS] == 1
        assert np.allclose(X.loc[niveus, f"temp:{NIVEUS}"], X.loc[niveus, "temp"])
        assert (X.loc[~niveus, f"temp:{NIVEUS}"] == 0).all()

    def test_no_intercept_gives_every_level_a_column(self, crickets):
        _, X = design_matrix("rate ~ temp + species - 1", crickets)
        assert "Intercept" not in X.columns
        assert {"species[O. exclamationis]", "species[O. niveus]"} <= set(X.columns)

    def test_inline_transforms(self, crickets):
        _, X = design_matrix("rate ~ I(temp ** 2) + np.log(temp)", crickets)
        assert np.allclose(X["I(temp ** 2)"], crickets["temp"] ** 2)
        assert np.allclose(X["np.log(temp)"], np.log(crickets["temp"]))

    def test_unknown_column(self, crickets):
        with pytest.raises(FormulaError):
            design_matrix("rate ~ humidity", crickets)

    def test_formula_error_is_value_error(self):
        assert issubclass(FormulaError, ValueError)
        assert issubclass(MissingDataError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
# fitting and comparing
# ═══════════════════════════════════════════════════════════════════════


class TestFitting:

    def test_fit_result(self, main_fit):
        assert isinstance(main_fit, FitResult)
        assert main_fit.formula == MAIN
        assert main_fit.nobs == 31
        assert isinstance(main_fit.warnings, list)

    def test_main_effect_coefficients(self, main_fit):
        params = main_fit.results.params
        assert params["temp"] == pytest.approx(3.60, abs=0.05)
        assert params[NIVEUS] == pytest.approx(-10.07, abs=0.15)

    def test_fit_logs(self, crickets, caplog):
        with caplog.at_level(logging.INFO, logger="modeling_notes.modeling"):
            fit_ols(MAIN, crickets)
        assert any(MAIN in rec.getMessage() for rec in caplog.records)

    def test_fit_unknown_column(self, crickets):
        with pytest.raises(FormulaError):
            fit_ols("rate ~ humidity", crickets)

    def test_compare_interaction_not_needed(self, main_fit, interaction_fit):
        table = compare_models(main_fit, interaction_fit)
        assert list(table.columns) == [
            "term", "df_residual", "rss", "df", "sumsq", "statistic", "p_value",
        ]
        assert list(table["term"]) == [MAIN, INTERACTION]
        assert table["df_residual"].tolist() == [28, 27]
        assert table["df"].iloc[1] == 1
        assert table["rss"].iloc[0] > table["rss"].iloc[1]
        assert 0.05 < table["p_value"].iloc[1] < 0.5

    def test_compare_different_rows(self, crickets, main_fit):
        smaller = fit_ols(INTERACTION, crickets.iloc[:25])
        with pytest.raises(ValueError):
            compare_models(main_fit, smaller)

    def test_anova_table(self, interaction_fit):
        table = anova_table(interaction_fit)
        assert list(table["term"]) == ["species", "temp", "temp:species", "Residual"]
        assert {"df", "sumsq", "meansq", "statistic", "p_value"} <= set(table.columns)
        assert table.loc[table["term"] == "Residual", "df"].iloc[0] == 27

    def test_model_summary_text(self, main_fit):
        text = model_summary(main_fit)
        assert "OLS Regression Results" in text
        assert "temp" in text

    def test_fit_keeps_library_warnings(self, crickets, caplog):
        # log of a negative number is NaN, and numpy warns about it
        with caplog.at_level(logging.WARNING, logger="modeling_notes.modeling"):
            fit = fit_ols(LOG_SHIFTED, crickets)
        assert fit.nobs < len(crickets)
        assert any("invalid value" in msg for msg in fit.warnings)
        warned = [rec for rec in caplog.records if rec.levelno == logging.WARNING]
        assert any("invalid value" in rec.getMessage() for rec in warned)

    def test_summary_small_sample_warning(self, crickets, caplog):
        fit = fit_ols("rate ~ temp", crickets.head(5))
        with caplog.at_level(logging.WARNING, logger="modeling_notes.modeling"):
            text = model_summary(fit)
        assert "OLS Regression Results" in text
        warned = [rec for rec in caplog.records if rec.levelno == logging.WARNING]
        assert any("summary" in rec.getMessage() for rec in warned)

    def test_concurrent_fits_keep_their_own_warnings(self, crickets):
        formulas = [LOG_SHIFTED, MAIN] * 4
        with ThreadPoolExecutor(max_workers=4) as pool:
            fits = list(pool.map(lambda f: fit_ols(f, crickets), formulas))
        for fit in fits:
            noisy = any("invalid value" in msg for msg in fit.warnings)
            assert noisy == (fit.formula == LOG_SHIFTED)


# ═══════════════════════════════════════════════════════════════════════
# tidy / glance / augment
# ═══════════════════════════════════════════════════════════════════════


class TestTidying:

    def test_tidy_columns(self, main_fit):
        coefs = tidy(main_fit)
        assert list(coefs.columns) == ["term", "estimate", "std_error", "statistic", "p_value"]
        assert set(coefs["term"]) == {"Intercept", "temp", NIVEUS}
        assert np.allclose(coefs["statistic"], coefs["estimate"] / coefs["std_error"])

    def test_tidy_conf_int(self, main_fit):
        coefs = tidy(main_fit, conf_int=True)
        assert (coefs["conf_low"] < coefs["estimate"]).all()
        assert (coefs["estimate"] < coefs["conf_high"]).all()
        narrow = tidy(main_fit, conf_int=True, conf_level=0.5)
        assert ((narrow["conf_high"] - narrow["conf_low"]) < (coefs["conf_high"] - coefs["conf_low"])).all()

    def test_glance(self, main_fit):
        row = glance(main_fit).iloc[0]
        assert row["nobs"] == 31
        assert row["df_residual"] == 28
        assert row["df"] == 2
        assert 0.9 < row["r_squared"] <= 1
        assert row["adj_r_squared"] < row["r_squared"]
        assert row["deviance"] == pytest.approx(row["sigma"] ** 2 * 28)

    def test_augment(self, crickets, main_fit):
        aug = augment(main_fit)
        assert len(aug) == 31
        for col in [".fitted", ".resid", ".hat", ".sigma", ".cooksd", ".std_resid"]:
            assert col in aug.columns
        assert np.allclose(aug[".fitted"] + aug[".resid"], crickets["rate"])
        assert aug[".hat"].sum() == pytest.approx(3)
        assert aug[".resid"].sum() == pytest.approx(0, abs=1e-8)

    def test_augment_skips_rows_with_missing_values(self, crickets):
        gappy = crickets.copy()
        gappy.loc[0, "temp"] = np.nan
        aug = augment(fit_ols(MAIN, gappy))
        assert len(aug) == 30
        assert 0 not in aug.index

    def test_fit_by_group(self, crickets):
        coefs = fit_by_group(crickets, "species", "rate ~ temp")
        assert coefs.columns[0] == "species"
        assert len(coefs) == 4
        slopes = coefs[coefs["term"] == "temp"].set_index("species")["estimate"]
        assert set(slopes.index) == {"O. exclamationis", "O. niveus"}
        assert (slopes > 0).all()

    def test_fit_by_group_unknown_column(self, crickets):
        with pytest.raises(ValueError):
            fit_by_group(crickets, "habitat", "rate ~ temp")


# ═══════════════════════════════════════════════════════════════════════
# prediction
# ═══════════════════════════════════════════════════════════════════════


class TestPrediction:

    @pytest.fixture
    def new_values(self):
        return pd.DataFrame({
            "species": "O. niveus",
            "temp": [15.0, np.nan, 17.0, 18.0],
        })

    def test_matches_coefficients(self, main_fit):
        new = pd.DataFrame({"species": ["O. exclamationis", "O. niveus"], "temp": [20.0, 20.0]})
        preds = predict_new(main_fit, new)
        p = main_fit.results.params
        assert preds[".pred"].iloc[0] == pytest.approx(p["Intercept"] + 20 * p["temp"])
        assert preds[".pred"].iloc[1] == pytest.approx(p["Intercept"] + 20 * p["temp"] + p[NIVEUS])

    def test_fail_raises(self, main_fit, new_values):
        with pytest.raises(MissingDataError):
            predict_new(main_fit, new_values, na_action="fail")

    def test_omit_drops_rows(self, main_fit, new_values):
        preds = predict_new(main_fit, new_values, na_action="omit")
        assert list(preds.index) == [0, 2, 3]
        assert preds[".pred"].notna().all()

    def test_pass_keeps_rows(self, main_fit, new_values):
        preds = predict_new(main_fit, new_values, na_action="pass")
        assert list(preds.index) == [0, 1, 2, 3]
        assert np.isnan(preds.loc[1, ".pred"])
        assert preds.drop(index=1)[".pred"].notna().all()

    def test_intervals(self, main_fit, new_values):
        conf = predict_new(main_fit, new_values, na_action="omit", interval="confidence")
        pred = predict_new(main_fit, new_values, na_action="omit", interval="prediction")
        assert (conf[".pred_lower"] < conf[".pred"]).all()
        assert (conf[".pred"] < conf[".pred_upper"]).all()
        conf_width = conf[".pred_upper"] - conf[".pred_lower"]
        pred_width = pred[".pred_upper"] - pred[".pred_lower"]
        assert (pred_width > conf_width).all()

    def test_pass_with_interval_fills_bounds_with_nan(self, main_fit, new_values):
        preds = predict_new(main_fit, new_values, na_action="pass", interval="confidence")
        assert preds.loc[1, [".pred", ".pred_lower", ".pred_upper"]].isna().all()

    def test_bad_arguments(self, main_fit, new_values):
        with pytest.raises(ValueError, match="na_action"):
            predict_new(main_fit, new_values, na_action="ignore")
        with pytest.raises(ValueError, match="interval"):
            predict_new(main_fit, new_values, na_action="omit", interval="credible")

    def test_duplicate_labels_omit(self, main_fit, crickets):
        new = pd.concat([crickets.head(2)] * 2)
        new["temp"] = [15.0, np.nan, 17.0, 18.0]
        preds = predict_new(main_fit, new, na_action="omit")
        assert len(preds) == 3
        assert preds["temp"].tolist() == [15.0, 17.0, 18.0]
        assert preds[".pred"].notna().all()

    def test_duplicate_labels_pass(self, main_fit, crickets):
        new = pd.concat([crickets.head(2)] * 2)
        new["temp"] = [15.0, np.nan, 17.0, 18.0]
        preds = predict_new(main_fit, new, na_action="pass", interval="prediction")
        assert list(preds.index) == list(new.index)
        assert preds[".pred"].isna().tolist() == [False, True, False, False]
        assert preds[".pred_upper"].isna().tolist() == [False, True, False, False]

    def test_duplicate_labels_without_missing(self, main_fit, crickets):
        new = pd.concat([crickets.head(2)] * 2)
        preds = predict_new(main_fit, new)
        assert len(preds) == 4
        assert preds[".pred"].iloc[0] == pytest.approx(preds[".pred"].iloc[2])

    @pytest.mark.parametrize("na_action", ["fail", "omit", "pass"])
    def test_unseen_level_is_formula_error(self, main_fit, na_action):
        new = pd.DataFrame({"species": ["O. unknownus"], "temp": [20.0]})
        with pytest.raises(FormulaError) as excinfo:
            predict_new(main_fit, new, na_action=na_action)
        assert not isinstance(excinfo.value, MissingDataError)

    @pytest.mark.parametrize("na_action", ["fail", "omit", "pass"])
    def test_absent_column_is_formula_error(self, main_fit, na_action):
        new = pd.DataFrame({"temp": [20.0]})
        with pytest.raises(FormulaError):
            predict_new(main_fit, new, na_action=na_action)
