"""Chapter 1: Types of Models — descriptive, inferential and predictive models."""
import streamlit as st
import plotly.graph_objects as go

from modeling_notes.data_loader import load_data, sidebar_filters
from modeling_notes.log import setup_logging
from modeling_notes.ml_helpers import holdout_split, regression_metrics
from modeling_notes.modeling import fit_ols, predict_new, tidy
from modeling_notes.plotting import apply_common_layout, scatter_chart
from modeling_notes.stats_helpers import smooth_trend
from modeling_notes.ui_components import (
    chapter_header, concept_box, definition_box, insight_box, warning_box,
    code_example, quiz, takeaways, navigation,
)
from modeling_notes.constants import MODEL_TYPES, FEATURE_LABELS, FEATURE_UNITS
from modeling_notes.settings import ALPHA, MAIN_EFFECTS_FORMULA, PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 1: Types of Models", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()
fdf = sidebar_filters(df)

chapter_header(1, "Types of Models", part="I")

# ---------------------------------------------------------------------------
# 1. Theory
# ---------------------------------------------------------------------------
concept_box(
    "What Is a Model For?",
    "Before anyone writes a formula, someone should answer a boring-sounding question: "
    "<b>what is this model going to be used for?</b> The same regression fit to the same "
    "data can be a description, a hypothesis test or a prediction engine, and each use "
    "asks different things of it. A model that is fine for drawing a trend line may be "
    "useless for a p-value, and a model with beautiful p-values may predict new data badly.",
)

cols = st.columns(len(MODEL_TYPES))
for col, (name, info) in zip(cols, MODEL_TYPES.items()):
    with col:
        st.markdown(f"#### {name}")
        st.caption(info["description"])
        st.markdown(f"*Question:* {info['question']}")
        st.markdown(f"*Crickets example:* {info['example']}")

st.divider()

if fdf["species"].nunique() < 2 or fdf["species"].value_counts().min() < 4:
    st.warning("These demos need at least 4 crickets of each species. Widen the sidebar filters.")
    st.stop()

# ---------------------------------------------------------------------------
# 2. Descriptive
# ---------------------------------------------------------------------------
st.subheader("Descriptive: Just Show Me the Shape")

definition_box("Descriptive model")

frac = st.slider("Smoother span (fraction of points used per local fit)", 0.2, 1.0, 0.67, 0.01, key="ch1_frac")
fig_desc = scatter_chart(fdf, title="Chirp Rate vs Temperature, with a LOWESS Smoother")
for species, subset in fdf.groupby("species", observed=True):
    if len(subset) < 3:
        continue
    xs, ys = smooth_trend(subset["temp"], subset["rate"], frac=frac)
    fig_desc.add_trace(go.Scatter(x=xs, y=ys, mode="lines", name=f"{species} (smoother)",
                                  line=dict(width=2, dash="dot")))
st.plotly_chart(fig_desc, use_container_width=True)

insight_box(
    "The smoother makes no claim about the population and no promise about new crickets. "
    "It answers one question: what does the trend in *this* data look like? Drag the span "
    "down and it starts chasing individual points. That is fine for description and a disaster "
    "for anything else."
)

st.divider()

# ---------------------------------------------------------------------------
# 3. Inferential
# ---------------------------------------------------------------------------
st.subheader("Inferential: Is the Effect Real?")

definition_box("Inferential model")

main_fit = fit_ols(MAIN_EFFECTS_FORMULA, fdf)
coefs = tidy(main_fit, conf_int=True)
temp_row = coefs[coefs["term"] == "temp"].iloc[0]

st.markdown(
    f"Suppose the hypothesis, written down *before* looking at the data, is: "
    f"**chirp rate increases with temperature, after accounting for species**. "
    f"Fitting `{MAIN_EFFECTS_FORMULA}` gives a temperature slope of "
    f"**{temp_row['estimate']:.2f} {FEATURE_UNITS['rate']} per {FEATURE_UNITS['temp']}** "
    f"(95% CI {temp_row['conf_low']:.2f} to {temp_row['conf_high']:.2f}), "
    f"with p = {temp_row['p_value']:.2e}."
)

m1, m2, m3 = st.columns(3)
m1.metric("Slope (temp)", f"{temp_row['estimate']:.3f}")
m2.metric("t statistic", f"{temp_row['statistic']:.2f}")
m3.metric("p-value", f"{temp_row['p_value']:.2e}")

if temp_row["p_value"] < ALPHA:
    st.success(f"At alpha = {ALPHA}, the data are inconsistent with a zero temperature effect.")
else:
    st.info(f"At alpha = {ALPHA}, the data do not rule out a zero temperature effect.")

warning_box(
    "An inferential conclusion is only as good as the model's assumptions. If the residuals "
    "are badly behaved (Chapter 6 shows how to look), that p-value is a number with no meaning attached.",
    label="Caveat",
)

st.divider()

# ---------------------------------------------------------------------------
# 4. Predictive
# ---------------------------------------------------------------------------
st.subheader("Predictive: How Close Do the Guesses Land?")

definition_box("Predictive model")

st.markdown(
    "A predictive model is judged on data it has never seen. Here the crickets are split into a "
    "training set and a held-out test set (stratified by species), the model is fit on the "
    "training rows only, and we measure how far off its predictions are on the test rows."
)

test_size = st.slider("Fraction held out for testing", 0.15, 0.4, 0.25, 0.05, key="ch1_test")
train, test = holdout_split(fdf, test_size=test_size)
train_fit = fit_ols(MAIN_EFFECTS_FORMULA, train)
test_pred = predict_new(train_fit, test)
metrics = regression_metrics(test["rate"], test_pred[".pred"])

p1, p2, p3, p4 = st.columns(4)
p1.metric("Train rows", len(train))
p2.metric("Test rows", len(test))
p3.metric("Test RMSE", f"{metrics['rmse']:.2f}")
p4.metric("Test R-squared", f"{metrics['r2']:.3f}")

fig_pred = go.Figure()
fig_pred.add_trace(go.Scatter(
    x=test["rate"], y=test_pred[".pred"], mode="markers",
    marker=dict(color="#2A9D8F", size=10), name="Test crickets",
))
lo, hi = fdf["rate"].min(), fdf["rate"].max()
fig_pred.add_trace(go.Scatter(
    x=[lo, hi], y=[lo, hi], mode="lines",
    line=dict(color="#E63946", dash="dash"), name="Perfect prediction",
))
apply_common_layout(fig_pred, title="Held-Out Crickets: Observed vs Predicted")
fig_pred.update_xaxes(title_text=f"Observed {FEATURE_LABELS['rate']}")
fig_pred.update_yaxes(title_text=f"Predicted {FEATURE_LABELS['rate']}")
st.plotly_chart(fig_pred, use_container_width=True)

st.markdown("#### Two Flavors of Predictive Model")
c1, c2 = st.columns(2)
with c1:
    definition_box("Mechanistic model")
    st.caption(
        "For crickets, a mechanistic model would start from the physiology of how temperature "
        "speeds up muscle contraction, and only use the data to pin down the constants."
    )
with c2:
    definition_box("Empirically driven model")
    st.caption(
        "The regression above is empirically driven: nobody derived 'linear in temperature' "
        "from first principles. It was chosen because it fits, and it is judged by how well it predicts."
    )

st.divider()

# ---------------------------------------------------------------------------
# 5. Code Example
# ---------------------------------------------------------------------------
code_example("""
import statsmodels.formula.api as smf
from statsmodels.nonparametric.smoothers_lowess import lowess
from sklearn.model_selection import train_test_split
from sklearn.metrics import mean_squared_error

# Descriptive: a smoother through the data
smoothed = lowess(crickets['rate'], crickets['temp'], frac=2/3)

# Inferential: test the temperature slope
fit = smf.ols('rate ~ temp + species', data=crickets).fit()
print(fit.pvalues['temp'])

# Predictive: fit on a training split, score on held-out rows
train, test = train_test_split(crickets, test_size=0.25, random_state=42,
                               stratify=crickets['species'])
model = smf.ols('rate ~ temp + species', data=train).fit()
rmse = mean_squared_error(test['rate'], model.predict(test)) ** 0.5
print(f"Test RMSE: {rmse:.2f}")
""")

st.divider()

# ---------------------------------------------------------------------------
# 6. Quiz
# ---------------------------------------------------------------------------
quiz(
    "A team fits a model to decide whether a new fertilizer changes crop yield, and plans to "
    "confirm the result in next year's harvest. What kind of model is this?",
    ["Descriptive", "Inferential", "Predictive", "Unsupervised"],
    correct_idx=1,
    explanation="The hypothesis (fertilizer changes yield) comes first, and validation of the conclusion is delayed until next year. That is the signature of an inferential model.",
    key="ch1_quiz1",
)

quiz(
    "Which quantity is the natural yardstick for a predictive model?",
    [
        "The p-value of each coefficient",
        "The R-squared on the training data",
        "The error of its predictions on data it was not fit to",
        "The number of predictors",
    ],
    correct_idx=2,
    explanation="Predictive models are optimized for new, unseen inputs, so their quality is measured on held-out data. Training R-squared rewards memorizing; p-values answer a different question.",
    key="ch1_quiz2",
)

st.divider()

# ---------------------------------------------------------------------------
# 7. Takeaways
# ---------------------------------------------------------------------------
takeaways([
    "Descriptive models summarize the data in hand. They make no claim beyond it.",
    "Inferential models test a hypothesis stated in advance, and their conclusions depend on the model's assumptions holding.",
    "Predictive models are judged by accuracy on new data, not by p-values.",
    "Predictive models can be mechanistic (derived from first principles) or empirically driven (chosen because they fit).",
    "One fitted regression can play all three roles. What changes is the question, and so the checks you owe it.",
])

navigation(1)
