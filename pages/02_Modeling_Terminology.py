"""Chapter 2: Modeling Terminology — supervised vs unsupervised, regression vs classification."""
import streamlit as st

from modeling_notes.data_loader import load_data, column_roles
from modeling_notes.log import setup_logging
from modeling_notes.plotting import scatter_chart
from modeling_notes.ui_components import (
    chapter_header, concept_box, definition_box, insight_box, warning_box,
    glossary_lookup, quiz, takeaways, navigation,
)
from modeling_notes.settings import PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 2: Modeling Terminology", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()

chapter_header(2, "Modeling Terminology", part="I")

# ---------------------------------------------------------------------------
# 1. Supervised vs Unsupervised
# ---------------------------------------------------------------------------
concept_box(
    "Vocabulary Is Cheap, Confusion Is Expensive",
    "Modeling has accumulated names from statistics, machine learning and every applied field "
    "in between, so the same idea often answers to three words. This chapter pins down the "
    "handful you need to read the rest of these notes, and to read everyone else's code.",
)

col1, col2 = st.columns(2)
with col1:
    definition_box("Supervised")
with col2:
    definition_box("Unsupervised")

st.markdown(
    "Same data, two regimes. Below, the left plot treats **chirp rate as the outcome** "
    "(supervised: we know which column we are trying to explain). The right plot drops the "
    "species labels entirely and just asks whether the points fall into groups on their own "
    "(unsupervised: there is no answer column to check against)."
)

s1, s2 = st.columns(2)
with s1:
    st.plotly_chart(scatter_chart(df, title="Supervised: species and temperature explain rate", height=400),
                    use_container_width=True)
with s2:
    unlabeled = df.assign(group="unlabeled")
    fig_u = scatter_chart(unlabeled, color="group", title="Unsupervised: any structure without labels?", height=400)
    fig_u.update_layout(showlegend=False)
    st.plotly_chart(fig_u, use_container_width=True)

st.divider()

# ---------------------------------------------------------------------------
# 2. Regression vs Classification
# ---------------------------------------------------------------------------
st.subheader("Regression vs Classification")

col1, col2 = st.columns(2)
with col1:
    definition_box("Regression")
with col2:
    definition_box("Classification")

task = st.radio(
    "Which column should be the outcome?",
    ["rate", "species"],
    format_func=lambda c: f"{c} ({'numeric' if c == 'rate' else 'categorical'})",
    horizontal=True, key="ch2_outcome",
)
if task == "rate":
    st.success("Outcome `rate` is numeric, so predicting it is a **regression** problem.")
else:
    st.success("Outcome `species` is categorical, so predicting it is a **classification** problem.")

warning_box(
    "Logistic regression is a classification model despite its name. The word 'regression' in a "
    "model's name tells you about its history, not about its outcome."
)

st.divider()

# ---------------------------------------------------------------------------
# 3. Roles and kinds of columns
# ---------------------------------------------------------------------------
st.subheader("Outcomes, Predictors, and Kinds of Data")

c1, c2 = st.columns(2)
with c1:
    definition_box("Outcome")
    definition_box("Quantitative")
with c2:
    definition_box("Predictor")
    definition_box("Qualitative")

roles = column_roles(df, outcome=task)
st.markdown(f"With `{task}` as the outcome, every crickets column gets a role and a kind:")
st.dataframe(roles, use_container_width=True, hide_index=True)

insight_box(
    "The kind of a column decides how a model formula encodes it. Quantitative predictors enter "
    "the model as they are. Qualitative predictors like species must be turned into numbers first, "
    "usually as 0/1 dummy columns. Chapter 5 shows exactly what that looks like."
)

st.divider()

# ---------------------------------------------------------------------------
# 4. Glossary
# ---------------------------------------------------------------------------
st.subheader("Glossary")
glossary_lookup(key="ch2_glossary")

st.divider()

# ---------------------------------------------------------------------------
# 5. Quiz
# ---------------------------------------------------------------------------
quiz(
    "You group customers by purchasing behaviour with no label telling you which group is right. This is:",
    ["Supervised regression", "Supervised classification", "Unsupervised learning", "An inferential model"],
    correct_idx=2,
    explanation="There is no outcome column to learn from, only the predictors themselves. That is unsupervised.",
    key="ch2_quiz1",
)

quiz(
    "In the crickets data with chirp rate as the outcome, species is a:",
    ["Quantitative outcome", "Qualitative predictor", "Quantitative predictor", "Qualitative outcome"],
    correct_idx=1,
    explanation="Species is used to explain the rate (predictor), and its values are categories, not numbers (qualitative).",
    key="ch2_quiz2",
)

st.divider()

takeaways([
    "Supervised models learn from a designated outcome; unsupervised models have none.",
    "Regression predicts a numeric outcome; classification predicts a categorical one.",
    "Outcomes are also called targets or dependent variables; predictors are also called features or independent variables.",
    "Quantitative data are numbers; qualitative data are categories and need encoding before most models can use them.",
])

navigation(2)
