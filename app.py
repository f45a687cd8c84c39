"""Statistical Modeling Notes — Main Entry Point."""
import streamlit as st

from modeling_notes.data_loader import load_data
from modeling_notes.log import setup_logging
from modeling_notes.settings import PAGE_LAYOUT

setup_logging()

st.set_page_config(
    page_title="Statistical Modeling Notes",
    page_icon="🦗",
    layout=PAGE_LAYOUT,
    initial_sidebar_state="expanded",
)

st.title("Statistical Modeling Notes")
st.subheader("Companion walkthroughs for a textbook on modeling practice, told through 31 crickets")

st.markdown("""
Most modeling books spend their first chapters on vocabulary and process, and most readers skip them
to get to the code. That is a mistake, and not a small one: the words *descriptive*, *inferential*
and *predictive* decide which diagnostics you run, what a p-value is allowed to mean, and whether
anyone should trust your model on next year's data.

These notes go through those chapters one page at a time, and then get their hands dirty with the
**formula interface**: fitting linear regressions, comparing fits with ANOVA, and turning the
results into tidy tables you can actually work with.

### The Dataset

One small, fixed dataset carries the whole way through: **31 observations of cricket chirp rates**
for two species, *O. exclamationis* and *O. niveus*, recorded at different temperatures.
Three columns: species, temperature (°C) and chirps per minute.

Small enough to read every row. Big enough to show an interaction term failing a significance test.

### How to Use These Notes

1. **Navigate** via the sidebar. The chapters build on each other, but each one stands alone
2. **Filter** species and temperature in the sidebar where a chapter offers it, and watch every fit update
3. **Open the code** under each demo: every number on screen is one statsmodels call away
4. **Test yourself** with the quizzes at the end of each chapter

### Course Outline
""")

parts = {
    "Part I: Foundations (Ch 1-2)": "Types of models, supervised vs unsupervised, regression vs classification",
    "Part II: The Modeling Process (Ch 3-4)": "The data science workflow, exploring the crickets",
    "Part III: Modeling Fundamentals (Ch 5-7)": "Model formulas, fitting and comparing models, tidying results",
}

for part, desc in parts.items():
    st.markdown(f"**{part}** -- {desc}")

st.divider()
st.markdown("**Pick a chapter from the sidebar. The crickets are waiting.**")

st.subheader("Dataset Preview")
df = load_data()
st.dataframe(df, use_container_width=True)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Rows", f"{len(df):,}")
col2.metric("Species", df["species"].nunique())
col3.metric("Temperature Range", f"{df['temp'].min():.1f} to {df['temp'].max():.1f} °C")
col4.metric("Columns", len(df.columns))
