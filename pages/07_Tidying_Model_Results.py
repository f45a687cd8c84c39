"""Chapter 7: Tidying Model Results — coefficient, model and observation tables; per-group fits; prediction."""
import numpy as np
import pandas as pd
import streamlit as st

from modeling_notes.data_loader import load_data, sidebar_filters
from modeling_notes.log import setup_logging
from modeling_notes.modeling import (
    MissingDataError, augment, fit_by_group, fit_ols, glance, predict_new, tidy,
)
from modeling_notes.plotting import coefficient_chart
from modeling_notes.ui_components import (
    chapter_header, concept_box, insight_box, warning_box, library_warnings,
    code_example, quiz, takeaways, navigation,
)
from modeling_notes.settings import CONF_LEVEL, GROUP_FORMULA, MAIN_EFFECTS_FORMULA, PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 7: Tidying Model Results", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()
fdf = sidebar_filters(df)

chapter_header(7, "Tidying Model Results", part="III")

concept_box(
    "Model Output Should Be Data Too",
    "A printed model summary is built for eyes, not for code. The moment you want to plot the "
    "coefficients, stack results from several models, or join residuals back onto the data, the "
    "summary is in the way. The fix is to turn every fit into ordinary DataFrames at three levels: "
    "<b>tidy</b> (one row per coefficient), <b>glance</b> (one row per model), and <b>augment</b> "
    "(one row per observation).",
)

if fdf["species"].nunique() < 2 or len(fdf) < 6:
    st.warning("Not enough data. Adjust sidebar filters.")
    st.stop()

fit = fit_ols(MAIN_EFFECTS_FORMULA, fdf)
library_warnings(fit)

# ---------------------------------------------------------------------------
# 1. Three levels
# ---------------------------------------------------------------------------
tab_tidy, tab_glance, tab_augment = st.tabs(["tidy: coefficients", "glance: model", "augment: observations"])

with tab_tidy:
    show_ci = st.checkbox(f"Add {CONF_LEVEL:.0%} confidence intervals", value=True, key="ch7_ci")
    coefs = tidy(fit, conf_int=show_ci)
    st.dataframe(coefs.round(4), use_container_width=True, hide_index=True)
with tab_glance:
    st.dataframe(glance(fit).round(4), use_container_width=True, hide_index=True)
with tab_augment:
    st.dataframe(augment(fit).round(4), use_container_width=True, hide_index=True)
    st.caption(
        "`.hat` is leverage, `.sigma` the residual standard deviation with that row left out, "
        "`.cooksd` Cook's distance, `.std_resid` the standardized residual."
    )

insight_box(
    "Because these are plain tables, everything downstream is ordinary DataFrame work: "
    "sort by p-value, filter high-leverage rows, or hand the coefficient table straight to a plot."
)

st.divider()

# ---------------------------------------------------------------------------
# 2. One model per group
# ---------------------------------------------------------------------------
st.subheader("One Model per Species, Stacked")

st.markdown(
    f"Instead of one model with a species term, fit `{GROUP_FORMULA}` separately within each "
    "species, tidy each fit, and stack the tables. The result is one row per species per coefficient."
)

by_species = fit_by_group(fdf, "species", GROUP_FORMULA, conf_int=True)
st.dataframe(by_species.round(4), use_container_width=True, hide_index=True)

slopes = by_species[by_species["term"] == "temp"].copy()
slopes["term"] = slopes["species"].astype(str) + ": temp"
st.plotly_chart(
    coefficient_chart(slopes, title="Temperature Slope Estimated Within Each Species"),
    use_container_width=True,
)
st.caption(
    "The intervals overlap heavily, which tells the same story as the F test in Chapter 6: "
    "no convincing evidence that the slopes differ."
)

st.divider()

# ---------------------------------------------------------------------------
# 3. Prediction and missing values
# ---------------------------------------------------------------------------
st.subheader("Predicting New Crickets, and What to Do With Missing Values")

t_lo, t_hi = st.slider("Temperatures to predict (°C)", 10, 35, (15, 20), key="ch7_temps")
species = st.selectbox("Species", sorted(fdf["species"].unique()), key="ch7_species")
interval = st.radio(
    "Interval", ["none", "confidence", "prediction"], horizontal=True, key="ch7_interval",
)
add_missing = st.checkbox("Make the second temperature missing", value=True, key="ch7_missing")
na_action = st.radio(
    "Missing-value handling", ["fail", "omit", "pass"], index=1, horizontal=True, key="ch7_na",
)

new_values = pd.DataFrame({
    "species": species,
    "temp": np.arange(t_lo, t_hi + 1, dtype=float),
})
if add_missing and len(new_values) > 1:
    new_values.loc[1, "temp"] = np.nan

try:
    preds = predict_new(
        fit, new_values, na_action=na_action,
        interval=None if interval == "none" else interval,
    )
    st.dataframe(preds.round(3), use_container_width=True, hide_index=True)
except MissingDataError as exc:
    st.error(f"na_action='fail' refused to predict: {exc}")

warning_box(
    "Predicting far outside the observed temperatures. The crickets were measured between about "
    "17 and 30 °C; a prediction at 10 °C is an extrapolation the data cannot vouch for.",
    label="Extrapolation",
)

st.markdown(
    "- **fail**: stop with an error if any needed predictor is missing. Safest default.\n"
    "- **omit**: silently drop those rows. The output has fewer rows than the input.\n"
    "- **pass**: keep every row, with a missing prediction where a predictor was missing. "
    "Output lines up with input row for row."
)

st.divider()

code_example("""
import pandas as pd
import statsmodels.formula.api as smf

fit = smf.ols('rate ~ temp + species', data=crickets).fit()

# tidy: one row per coefficient
coefs = pd.DataFrame({'estimate': fit.params, 'std_error': fit.bse,
                      'statistic': fit.tvalues, 'p_value': fit.pvalues})

# one model per species, stacked
per_species = pd.concat(
    {sp: smf.ols('rate ~ temp', data=grp).fit().params
     for sp, grp in crickets.groupby('species')},
    names=['species', 'term'],
).reset_index(name='estimate')

# prediction for new data, dropping rows with a missing temperature
new_values = pd.DataFrame({'species': 'O. exclamationis', 'temp': [15, None, 17]})
print(fit.get_prediction(new_values.dropna()).summary_frame(alpha=0.05))
""")

st.divider()

quiz(
    "You need predictions that line up row for row with a new data frame that has some missing temperatures. Which handling fits?",
    ["fail", "omit", "pass", "Fill missing temperatures with zero"],
    correct_idx=2,
    explanation="`pass` keeps every input row and reports a missing prediction where it cannot compute one. `omit` would shift the rows, and filling with zero would quietly invent a 0 °C cricket.",
    key="ch7_quiz1",
)

quiz(
    "Which table has exactly one row per model?",
    ["tidy", "glance", "augment", "The design matrix"],
    correct_idx=1,
    explanation="glance summarizes a whole model (R-squared, AIC, residual df...) in a single row, which makes it easy to stack across many models.",
    key="ch7_quiz2",
)

st.divider()

takeaways([
    "tidy gives one row per coefficient, glance one row per model, augment one row per observation.",
    "Tidy tables make it trivial to stack results from many models, such as one fit per species.",
    "Prediction needs a decision about missing predictors: fail, omit, or pass them through as missing.",
    "Intervals matter: a confidence interval is about the mean rate, a prediction interval about one new cricket.",
])

navigation(7)
