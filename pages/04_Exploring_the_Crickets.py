"""Chapter 4: Exploring the Crickets — summaries, correlations and a first look at fits."""
import streamlit as st

from modeling_notes.constants import FEATURE_COLS, FEATURE_LABELS
from modeling_notes.data_loader import get_species_data, load_data, sidebar_filters
from modeling_notes.log import setup_logging
from modeling_notes.modeling import fit_ols
from modeling_notes.plotting import fitted_lines_chart, scatter_chart
from modeling_notes.stats_helpers import correlation_by_group, group_summary
from modeling_notes.ui_components import (
    chapter_header, concept_box, insight_box, library_warnings,
    code_example, quiz, takeaways, navigation,
)
from modeling_notes.settings import INTERACTION_FORMULA, PAGE_LAYOUT

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Ch 4: Exploring the Crickets", layout=PAGE_LAYOUT)
setup_logging()
df = load_data()
fdf = sidebar_filters(df)

chapter_header(4, "Exploring the Crickets", part="II")

concept_box(
    "Thirty-One Crickets and a Thermometer",
    "In 1897 a physicist noticed that snowy tree crickets chirp faster when it is warm, and the "
    "observation has been a statistics-class favorite ever since. Our data hold <b>31 chirp rates</b> "
    "from two species, <i>O. exclamationis</i> and <i>O. niveus</i>, each recorded at a known "
    "temperature. Before fitting anything, the workflow from Chapter 3 says: look first.",
)

if len(fdf) < 3:
    st.warning("Not enough data. Adjust sidebar filters.")
    st.stop()

# ---------------------------------------------------------------------------
# 1. Raw data
# ---------------------------------------------------------------------------
st.subheader("Every Single Row")
st.dataframe(fdf, use_container_width=True, hide_index=True, height=300)

cols = st.columns(max(fdf["species"].nunique(), 1))
for col, species in zip(cols, fdf["species"].cat.categories):
    sp = get_species_data(fdf, species)
    col.metric(species, f"{len(sp)} crickets", f"{sp['temp'].min():.1f} to {sp['temp'].max():.1f} °C",
               delta_color="off")

st.subheader("Summaries by Species")
summary = group_summary(fdf, "species", FEATURE_COLS).round(2)
summary["variable"] = summary["variable"].map(FEATURE_LABELS)
st.dataframe(summary, use_container_width=True, hide_index=True)

st.divider()

# ---------------------------------------------------------------------------
# 2. The plot
# ---------------------------------------------------------------------------
st.subheader("Rate vs Temperature")

show_fit = st.checkbox(f"Overlay the fitted lines from `{INTERACTION_FORMULA}`", value=True, key="ch4_fit")
if show_fit and fdf["species"].nunique() == 2:
    fit = fit_ols(INTERACTION_FORMULA, fdf)
    library_warnings(fit)
    fig = fitted_lines_chart(fdf, fit, title="Chirp Rate vs Temperature by Species")
else:
    fig = scatter_chart(fdf, title="Chirp Rate vs Temperature by Species")
st.plotly_chart(fig, use_container_width=True)

insight_box(
    "Two things jump out. First, within each species the relationship is close to a straight "
    "line. Second, the lines look roughly **parallel**: O. niveus chirps slower at every "
    "temperature, but warming seems to speed both species up by a similar amount. Whether "
    "'roughly parallel' is really parallel is a question for a model comparison (Chapter 6)."
)

st.subheader("Correlation Within Each Species")
corr = correlation_by_group(fdf, "species", "temp", "rate")
if len(corr):
    st.dataframe(corr.round(4), use_container_width=True, hide_index=True)
else:
    st.info("Each species needs at least 3 rows for a correlation.")

st.divider()

code_example("""
import pandas as pd
import plotly.express as px

crickets = pd.read_csv('crickets.csv')
print(crickets.groupby('species')[['temp', 'rate']].describe())

fig = px.scatter(crickets, x='temp', y='rate', color='species',
                 trendline='ols')
fig.show()
""")

st.divider()

quiz(
    "If the two species' lines were exactly parallel, which formula would be enough?",
    ["rate ~ temp", "rate ~ temp + species", "rate ~ temp * species", "rate ~ species"],
    correct_idx=1,
    explanation="Parallel lines share a slope and differ only in intercept. The additive model gives each species its own intercept and one common temperature slope.",
    key="ch4_quiz1",
)

st.divider()

takeaways([
    "Look at every row of a small dataset. With 31 rows there is no excuse not to.",
    "Within each species, chirp rate rises almost linearly with temperature.",
    "The species differ mainly in level, not obviously in slope; a model comparison can test that.",
])

navigation(4)
