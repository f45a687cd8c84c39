import pytest

from modeling_notes.constants import (
    FORMULA_EXAMPLES,
    GLOSSARY,
    MODEL_TYPES,
    MODELING_PROCESS,
    SPECIES_LIST,
    UNDERSTAND_STAGES,
    WORKFLOW_STAGES,
)
from modeling_notes.modeling import design_matrix


def test_glossary_covers_core_terms():
    for term in [
        "Descriptive model", "Inferential model", "Predictive model",
        "Supervised", "Unsupervised", "Regression", "Classification", "Model formula",
    ]:
        assert GLOSSARY[term]


def test_model_types():
    assert list(MODEL_TYPES) == ["Descriptive", "Inferential", "Predictive"]
    for info in MODEL_TYPES.values():
        assert {"description", "example", "question"} <= set(info)


def test_workflow_order():
    names = [name for name, _ in WORKFLOW_STAGES]
    assert names[0] == "Import"
    assert names[-1] == "Communicate"
    assert set(UNDERSTAND_STAGES) <= set(names)
    assert [name for name, _ in MODELING_PROCESS][0] == "Exploratory data analysis"


def test_species_list_matches_data(crickets):
    assert SPECIES_LIST == list(crickets["species"].cat.categories)


@pytest.mark.parametrize("formula", list(FORMULA_EXAMPLES))
def test_every_formula_example_expands(crickets, formula):
    y, X = design_matrix(formula, crickets)
    assert len(X) == len(crickets)
    assert X.shape[1] >= 1
