"""Chapter 3: The Data Science Workflow — where modeling sits, and why it loops."""
import streamlit as st
import pandas as pd

from modeling_notes.constants import MODELING_PROCESS, UNDERSTAND_STAGES, WORKFLOW_STAGES
from modeling_notes.log import setup_logging
from modeling_notes.plotting import workflow_diagram
from modeling_notes.ui_components import (
    chapter_header, concept_box, insight_box, warning_box, quiz, takeaways, navigation,
)
from modeling_notes.settings import PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 3: The Data Science Workflow", layout=PAGE_LAYOUT)
setup_logging()

chapter_header(3, "The Data Science Workflow", part="II")

# ---------------------------------------------------------------------------
# 1. The big picture
# ---------------------------------------------------------------------------
concept_box(
    "Modeling Is One Box in a Bigger Diagram",
    "It is tempting to think of a data analysis as 'get data, fit model, done.' In practice the "
    "model is one step in a cycle: you <b>import</b> data, <b>tidy</b> it, then go around the "
    "<b>understand</b> loop of transforming, visualizing and modeling as many times as it takes, "
    "and finally <b>communicate</b> what you learned. The loop is the point. Each model you fit "
    "tells you something that sends you back to transform or plot the data differently.",
)

st.plotly_chart(
    workflow_diagram(WORKFLOW_STAGES, highlight=UNDERSTAND_STAGES, title="The Data Science Workflow"),
    use_container_width=True,
)
st.caption("Highlighted: the 'understand' loop, which repeats until the data stop surprising you.")

stage_df = pd.DataFrame(WORKFLOW_STAGES, columns=["Stage", "What happens"])
stage_df["Part of the understand loop"] = stage_df["Stage"].isin(UNDERSTAND_STAGES)
st.dataframe(stage_df, use_container_width=True, hide_index=True)

st.divider()

# ---------------------------------------------------------------------------
# 2. The modeling process
# ---------------------------------------------------------------------------
st.subheader("Zooming In: The Modeling Process")

st.markdown(
    "Inside the 'model' box there is another sequence, and it loops too. A typical project "
    "moves through these phases, usually more than once:"
)

st.plotly_chart(
    workflow_diagram(MODELING_PROCESS, title="Phases of a Modeling Project"),
    use_container_width=True,
)

selected = st.selectbox(
    "Pick a phase to read about",
    [name for name, _ in MODELING_PROCESS],
    key="ch3_phase",
)
descriptions = dict(MODELING_PROCESS)
st.markdown(f"**{selected}**: {descriptions[selected]}")

crickets_examples = {
    "Exploratory data analysis": "Plot rate against temperature and notice the two species form two parallel-ish bands (Chapter 4).",
    "Feature engineering": "Decide that species should enter the model as a dummy column, and ask whether temp needs a squared term (Chapter 5).",
    "Model tuning and selection": "Fit the interaction model and the additive model, then compare them with an F test (Chapter 6).",
    "Model evaluation": "Check residual plots and tidy the coefficients into tables you can report (Chapters 6 and 7).",
}
st.caption(f"With the crickets: {crickets_examples[selected]}")

insight_box(
    "Notice how little of this is fitting. The fit itself is one function call. The work is "
    "in deciding what to fit, checking whether it behaved, and going back when it did not."
)

warning_box(
    "Skipping exploratory analysis because the model 'will figure it out.' A model only sees the "
    "columns and terms you give it. If you never looked at the data, you do not know what you forgot."
)

st.divider()

# ---------------------------------------------------------------------------
# 3. Quiz
# ---------------------------------------------------------------------------
quiz(
    "Which stages make up the iterative 'understand' loop?",
    [
        "Import, tidy, communicate",
        "Transform, visualize, model",
        "Feature engineering, tuning, evaluation",
        "Visualize and communicate",
    ],
    correct_idx=1,
    explanation="Transforming, visualizing and modeling feed each other: a plot suggests a transformation, a model suggests a new plot, and round it goes.",
    key="ch3_quiz1",
)

st.divider()

takeaways([
    "Modeling is one part of a cycle: import, tidy, understand (transform, visualize, model), communicate.",
    "The understand loop is iterative; every model is a reason to look at the data again.",
    "A modeling project moves through exploratory analysis, feature engineering, tuning and selection, and evaluation, usually several times.",
    "The fitting call is the cheapest part. Deciding what to fit and checking it is where the time goes.",
])

navigation(3)
