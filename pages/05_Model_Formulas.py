"""Chapter 5: Model Formulas — what a formula expands into before any fitting happens."""
import streamlit as st

from modeling_notes.constants import FORMULA_EXAMPLES
from modeling_notes.data_loader import load_data
from modeling_notes.log import setup_logging
from modeling_notes.modeling import FormulaError, design_matrix, formula_terms
from modeling_notes.ui_components import (
    chapter_header, concept_box, definition_box, insight_box, warning_box,
    model_formula_box, code_example, quiz, takeaways, navigation,
)
from modeling_notes.settings import PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 5: Model Formulas", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()

chapter_header(5, "Model Formulas", part="III")

# ---------------------------------------------------------------------------
# 1. Theory
# ---------------------------------------------------------------------------
definition_box("Model formula")

concept_box(
    "Outcome on the Left, Predictors on the Right",
    "A formula like <code>rate ~ temp + species</code> reads as 'model rate as a function of "
    "temp and species.' It is a tiny language, and most of its power is in what it does "
    "<i>for</i> you: turning the qualitative <code>species</code> column into a 0/1 dummy "
    "column, adding an intercept, building interaction columns, evaluating transformations "
    "inline. The result is a <b>design matrix</b>: a plain numeric table that a fitting "
    "routine can consume. Seeing that matrix is the fastest way to understand what a model "
    "actually estimates.",
)

st.markdown("### A Tour of Formula Syntax")
for formula, meaning in FORMULA_EXAMPLES.items():
    model_formula_box(formula, meaning)

st.divider()

# ---------------------------------------------------------------------------
# 2. Interactive: expand a formula
# ---------------------------------------------------------------------------
st.subheader("Try It: See the Design Matrix")

choice = st.selectbox("Start from an example", list(FORMULA_EXAMPLES), index=2, key="ch5_example")
formula = st.text_input("Or edit the formula", value=choice, key=f"ch5_formula_{choice}")

try:
    outcome, terms = formula_terms(formula)
    y, X = design_matrix(formula, df)
except FormulaError as exc:
    st.error(f"That formula does not work on the crickets data: {exc}")
    st.stop()

m1, m2, m3 = st.columns(3)
m1.metric("Outcome", outcome)
m2.metric("Terms", len(terms))
m3.metric("Design matrix columns", X.shape[1])

st.markdown("**Terms:** " + ", ".join(f"`{t}`" for t in terms))
st.markdown("**Design matrix columns:** " + ", ".join(f"`{c}`" for c in X.columns))

rows = st.radio(
    "Rows to show", ["First rows of each species", "All rows"],
    horizontal=True, key="ch5_rows",
)
shown = X.join(df["species"])
if rows == "First rows of each species":
    shown = shown.groupby("species", observed=True).head(3)
st.dataframe(shown.round(3), use_container_width=True)

insight_box(
    "Look at the column named like `species[T.O. niveus]`. It is 1 for O. niveus and 0 "
    "for O. exclamationis. O. exclamationis has no column of its own: it is the **reference "
    "level**, absorbed into the intercept. An interaction column like `temp:species[T.O. niveus]` "
    "is just temperature multiplied by that dummy, which is why it lets the slope change by species."
)

warning_box(
    "Writing `temp ** 2` without `I()`. Inside a formula, `**` means "
    "'interactions up to this order', not 'square'. For a single numeric term it silently does nothing."
)

st.divider()

code_example("""
import patsy

y, X = patsy.dmatrices('rate ~ temp * species', crickets, return_type='dataframe')
print(X.columns.tolist())
# ['Intercept', 'species[T.O. niveus]', 'temp', 'temp:species[T.O. niveus]']

desc = patsy.ModelDesc.from_formula('rate ~ temp * species')
print([term.name() for term in desc.rhs_termlist])
# ['Intercept', 'temp', 'species', 'temp:species']
""")

st.divider()

quiz(
    "How many design-matrix columns does `rate ~ temp * species` produce on the crickets data?",
    ["2", "3", "4", "6"],
    correct_idx=2,
    explanation="Intercept, temp, one dummy for O. niveus, and the temp-by-dummy interaction: four columns.",
    key="ch5_quiz1",
)

quiz(
    "What does `- 1` at the end of a formula do?",
    [
        "Subtracts one from the outcome",
        "Drops the last predictor",
        "Removes the intercept column",
        "Uses the last level as the reference",
    ],
    correct_idx=2,
    explanation="`- 1` removes the intercept. With a qualitative predictor in the model, every level then gets its own column instead of one being absorbed into the intercept.",
    key="ch5_quiz2",
)

st.divider()

takeaways([
    "A formula names the outcome and the predictors and decides how each predictor is encoded.",
    "Qualitative predictors become dummy columns; the first level is the reference and has no column.",
    "`a:b` is an interaction, `a * b` is main effects plus interaction, `(a + b) ** 2` is all two-way interactions.",
    "Use `I()` for inline arithmetic, any numpy function for transforms, `- 1` to drop the intercept and `C(x, Treatment(...))` to change the reference level.",
    "The design matrix is what actually gets fit. When a coefficient confuses you, look at its column.",
])

navigation(5)
