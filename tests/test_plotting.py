import plotly.graph_objects as go

from modeling_notes.constants import MODELING_PROCESS, WORKFLOW_STAGES
from modeling_notes.modeling import augment, fit_ols, tidy
from modeling_notes.plotting import (
    DIAGNOSTIC_TITLES,
    coefficient_chart,
    diagnostic_panel,
    fitted_lines_chart,
    scatter_chart,
    workflow_diagram,
)


def test_scatter_one_trace_per_species(crickets):
    fig = scatter_chart(crickets)
    assert isinstance(fig, go.Figure)
    assert {t.name for t in fig.data} == {"O. exclamationis", "O. niveus"}
    assert fig.layout.height == 500


def test_fitted_lines_add_a_line_per_species(crickets):
    fit = fit_ols("rate ~ temp * species", crickets)
    fig = fitted_lines_chart(crickets, fit)
    lines = [t for t in fig.data if t.mode == "lines"]
    assert len(lines) == 2
    for line in lines:
        # straight lines within each species
        ys = list(line.y)
        steps = [b - a for a, b in zip(ys, ys[1:])]
        assert max(steps) - min(steps) < 1e-8


def test_diagnostic_panel(crickets):
    fig = diagnostic_panel(augment(fit_ols("rate ~ temp + species", crickets)))
    titles = {a.text for a in fig.layout.annotations}
    assert set(DIAGNOSTIC_TITLES) <= titles
    assert len(fig.data) == 5
    assert all(len(t.x) == 31 for t in fig.data if t.mode == "markers")


def test_coefficient_chart_error_bars(crickets):
    coefs = tidy(fit_ols("rate ~ temp + species", crickets), conf_int=True)
    fig = coefficient_chart(coefs)
    assert len(fig.data) == 1
    assert fig.data[0].error_x.array is not None
    assert min(fig.data[0].error_x.array) > 0

    bare = coefficient_chart(tidy(fit_ols("rate ~ temp", crickets)))
    assert bare.data[0].error_x.array is None


def test_workflow_diagram_draws_every_stage():
    fig = workflow_diagram(WORKFLOW_STAGES, highlight=["Model"])
    assert len(fig.layout.shapes) == len(WORKFLOW_STAGES)
    labels = {a.text for a in fig.layout.annotations if a.text}
    assert "<b>Model</b>" in labels

    fig = workflow_diagram(MODELING_PROCESS)
    assert len(fig.layout.shapes) == len(MODELING_PROCESS)
