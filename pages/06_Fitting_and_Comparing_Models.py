"""Chapter 6: Fitting and Comparing Models — OLS fits, ANOVA comparison, diagnostic plots."""
import streamlit as st

from modeling_notes.data_loader import load_data, sidebar_filters
from modeling_notes.log import setup_logging
from modeling_notes.modeling import (
    anova_table, augment, compare_models, fit_ols, model_summary, tidy,
)
from modeling_notes.plotting import coefficient_chart, diagnostic_panel, fitted_lines_chart
from modeling_notes.ui_components import (
    chapter_header, concept_box, formula_box, insight_box, warning_box, library_warnings,
    code_example, quiz, takeaways, navigation,
)
from modeling_notes.settings import ALPHA, INTERACTION_FORMULA, MAIN_EFFECTS_FORMULA, PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 6: Fitting and Comparing Models", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()
fdf = sidebar_filters(df)

chapter_header(6, "Fitting and Comparing Models", part="III")

# ---------------------------------------------------------------------------
# 1. Theory
# ---------------------------------------------------------------------------
concept_box(
    "Start Big, Then Ask What You Can Drop",
    "Chapter 4 left us with a question: are the two species' lines parallel? The formula "
    "interface makes the question concrete. The <b>interaction model</b> "
    f"<code>{INTERACTION_FORMULA}</code> lets each species have its own slope. The <b>additive "
    f"model</b> <code>{MAIN_EFFECTS_FORMULA}</code> forces one shared slope. The additive model "
    "is nested inside the interaction model, so an <b>F test</b> can ask whether the extra "
    "interaction column buys enough reduction in residual error to be worth keeping.",
)

formula_box(
    "Nested-Model F Test",
    r"F = \frac{(RSS_{\text{reduced}} - RSS_{\text{full}}) / (df_{\text{reduced}} - df_{\text{full}})}{RSS_{\text{full}} / df_{\text{full}}}",
    "RSS is the residual sum of squares and df the residual degrees of freedom. A large F means the full model's extra terms explain much more than chance would.",
)

if fdf["species"].nunique() < 2 or len(fdf) < 8:
    st.warning("Comparing species needs both species and at least 8 rows. Adjust sidebar filters.")
    st.stop()

st.divider()

# ---------------------------------------------------------------------------
# 2. Fit both models
# ---------------------------------------------------------------------------
st.subheader("Fit the Interaction Model")

interaction_fit = fit_ols(INTERACTION_FORMULA, fdf)
library_warnings(interaction_fit)
st.plotly_chart(
    fitted_lines_chart(fdf, interaction_fit, title="Separate Slopes per Species"),
    use_container_width=True,
)
st.dataframe(tidy(interaction_fit).round(4), use_container_width=True, hide_index=True)

st.subheader("Is the Interaction Needed?")

main_fit = fit_ols(MAIN_EFFECTS_FORMULA, fdf)
library_warnings(main_fit)
comparison = compare_models(main_fit, interaction_fit)
st.dataframe(comparison.round(4), use_container_width=True, hide_index=True)

p_interaction = comparison["p_value"].iloc[1]
if p_interaction < ALPHA:
    insight_box(
        f"p = {p_interaction:.3f} is below {ALPHA}: the slopes differ enough between species that "
        "the interaction earns its place. Keep the interaction model."
    )
    chosen = interaction_fit
else:
    insight_box(
        f"p = {p_interaction:.3f} is above {ALPHA}: the interaction reduces residual error by about "
        "as much as a random extra column would. The simpler additive model, with one shared slope, "
        "is the one to carry forward."
    )
    chosen = main_fit

st.markdown(f"#### Sequential ANOVA Table for `{chosen.formula}`")
st.dataframe(anova_table(chosen).round(4), use_container_width=True, hide_index=True)
st.caption(
    "Sequential (type I) sums of squares: each row is the variation explained by that term "
    "after the terms above it. Change the term order in the formula and the rows can change."
)

st.markdown(f"#### Coefficients of `{chosen.formula}`")
st.plotly_chart(coefficient_chart(tidy(chosen, conf_int=True)), use_container_width=True)

with st.expander("Full statsmodels summary"):
    st.text(model_summary(chosen))

st.divider()

# ---------------------------------------------------------------------------
# 3. Diagnostics
# ---------------------------------------------------------------------------
st.subheader("Diagnostic Plots: Did the Fit Behave?")

st.markdown(
    "Four plots, the same four that every linear-model course shows, each checking one assumption:\n"
    "- **Residuals vs Fitted**: curvature here means the linear form is missing something.\n"
    "- **Normal Q-Q**: points far off the line mean non-normal residuals.\n"
    "- **Scale-Location**: a trend means the residual spread changes with the fitted value.\n"
    "- **Residuals vs Leverage**: points far right and far from zero are influential."
)

st.plotly_chart(diagnostic_panel(augment(chosen)), use_container_width=True)

warning_box(
    "Reading too much into 31 points. With samples this small a couple of stray residuals can make "
    "a Q-Q plot wobble. Look for clear patterns, not perfection."
)

st.divider()

# ---------------------------------------------------------------------------
# 4. Your own model
# ---------------------------------------------------------------------------
st.subheader("Try It: Compare Your Own Pair of Models")

c1, c2 = st.columns(2)
with c1:
    reduced_formula = st.text_input("Reduced model", value="rate ~ temp", key="ch6_reduced")
with c2:
    full_formula = st.text_input("Full model", value="rate ~ temp + I(temp ** 2) + species", key="ch6_full")

try:
    custom = compare_models(fit_ols(reduced_formula, fdf), fit_ols(full_formula, fdf))
    st.dataframe(custom.round(4), use_container_width=True, hide_index=True)
except ValueError as exc:
    st.error(str(exc))

st.caption("The F test is only meaningful when the reduced model's terms are a subset of the full model's.")

st.divider()

code_example("""
import statsmodels.formula.api as smf
from statsmodels.stats.anova import anova_lm

interaction_fit = smf.ols('rate ~ temp * species', data=crickets).fit()
main_effect_fit = smf.ols('rate ~ temp + species', data=crickets).fit()

# Nested-model comparison: does the interaction help?
print(anova_lm(main_effect_fit, interaction_fit))

# Sequential ANOVA table and full summary of the chosen model
print(anova_lm(main_effect_fit))
print(main_effect_fit.summary())
""")

st.divider()

quiz(
    "The comparison of `rate ~ temp + species` against `rate ~ temp * species` gives a large p-value. What do you conclude?",
    [
        "Temperature has no effect on chirp rate",
        "The species have the same intercept",
        "There is no evidence the slopes differ; the additive model is adequate",
        "The interaction model is proven wrong",
    ],
    correct_idx=2,
    explanation="The test only concerns the extra interaction term. A large p-value means no evidence that it is needed, so the simpler model with one shared slope is preferred. It says nothing about temperature's main effect.",
    key="ch6_quiz1",
)

st.divider()

takeaways([
    "Fit the richer model first, then test whether its extra terms are needed.",
    "Nested models can be compared with an F test on the drop in residual sum of squares.",
    "For the crickets, the interaction is not needed: both species share one temperature slope.",
    "Sequential ANOVA tables depend on term order.",
    "Always look at the four diagnostic plots before trusting a p-value.",
])

navigation(6)
