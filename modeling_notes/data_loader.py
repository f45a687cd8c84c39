"""Cached data loading and filtering utilities."""
import logging

import pandas as pd
import streamlit as st

from modeling_notes.settings import DATA_PATH, OUTCOME

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["species", "temp", "rate"]


def read_crickets(path=None):
    """Read the crickets dataset with species as an ordered categorical.

    The first species level (alphabetical) is the reference level that
    dummy encoding drops.
    """
    path = path or DATA_PATH
    df = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Crickets data at {path} is missing columns: {missing}")
    levels = sorted(df["species"].dropna().unique())
    df["species"] = pd.Categorical(df["species"], categories=levels)
    logger.debug("Loaded %d rows, %d species from %s", len(df), len(levels), path)
    return df[REQUIRED_COLUMNS]


@st.cache_data
def load_data():
    """Load the bundled crickets dataset."""
    return read_crickets()


def sidebar_filters(df):
    """Render sidebar species and temperature filters; return filtered DataFrame."""
    from modeling_notes.constants import SPECIES_LIST
    st.sidebar.header("Filters")
    if "selected_species" not in st.session_state:
        st.session_state.selected_species = SPECIES_LIST.copy()
    selected = st.sidebar.multiselect(
        "Species", SPECIES_LIST,
        default=st.session_state.selected_species,
        key="species_filter"
    )
    st.session_state.selected_species = selected

    t_min = float(df["temp"].min())
    t_max = float(df["temp"].max())
    temp_range = st.sidebar.slider(
        "Temperature range (°C)", t_min, t_max, (t_min, t_max),
        step=0.1, key="temp_filter"
    )
    return filter_data(df, selected, temp_range)


def filter_data(df, species, temp_range):
    """Keep rows of the given species within an inclusive temperature range."""
    low, high = temp_range
    mask = (
        df["species"].isin(species) &
        (df["temp"] >= low) &
        (df["temp"] <= high)
    )
    out = df[mask].copy()
    # Dropped species would otherwise still get an all-zero dummy column
    if isinstance(out["species"].dtype, pd.CategoricalDtype):
        out["species"] = out["species"].cat.remove_unused_categories()
    return out


def get_species_data(df, species):
    """Filter DataFrame to a single species."""
    return df[df["species"] == species].copy()


def column_roles(df, outcome=OUTCOME):
    """Classify each column by modeling role and data kind."""
    rows = []
    for col in df.columns:
        numeric = pd.api.types.is_numeric_dtype(df[col])
        rows.append({
            "column": col,
            "role": "Outcome" if col == outcome else "Predictor",
            "kind": "Quantitative" if numeric else "Qualitative",
            "example": str(df[col].iloc[0]) if len(df) else "",
        })
    return pd.DataFrame(rows)
