"""Shared Plotly plotting helpers."""
import numpy as np
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots
from scipy import stats

from modeling_notes.constants import FEATURE_LABELS, SPECIES_COLORS

DIAGNOSTIC_TITLES = ("Residuals vs Fitted", "Normal Q-Q", "Scale-Location", "Residuals vs Leverage")


def apply_common_layout(fig, title=None, height=500):
    """Apply common layout settings to a Plotly figure."""
    fig.update_layout(
        template="plotly_white",
        height=height,
        title=title,
        title_x=0.5,
        margin=dict(t=60, b=40, l=60, r=40),
    )
    return fig


def _labels(labels):
    lab = {**(labels or {})}
    for k, v in FEATURE_LABELS.items():
        lab.setdefault(k, v)
    return lab


def scatter_chart(df, x="temp", y="rate", color="species", title=None, labels=None, height=500, opacity=0.8):
    """Create a scatter plot with species colors."""
    fig = px.scatter(df, x=x, y=y, color=color, color_discrete_map=SPECIES_COLORS,
                     labels=_labels(labels), title=title, opacity=opacity)
    fig.update_traces(marker=dict(size=9))
    return apply_common_layout(fig, title, height)


def fitted_lines_chart(df, fit, x="temp", y="rate", group="species", title=None, height=500):
    """Scatter the data and overlay the model's fitted line within each group."""
    fig = scatter_chart(df, x=x, y=y, color=group, title=title, height=height)
    for level, subset in df.groupby(group, observed=True):
        grid = np.linspace(subset[x].min(), subset[x].max(), 50)
        new = subset.iloc[[0] * len(grid)].copy()
        new[x] = grid
        pred = fit.results.predict(new)
        fig.add_trace(go.Scatter(
            x=grid, y=np.asarray(pred), mode="lines", name=f"{level} (fit)",
            line=dict(color=SPECIES_COLORS.get(level, "#636EFA"), width=2),
        ))
    return fig


def coefficient_chart(coefs, title="Coefficient Estimates", height=400):
    """Horizontal point-and-interval chart from a tidied coefficient table."""
    fig = go.Figure()
    has_ci = {"conf_low", "conf_high"}.issubset(coefs.columns)
    error_x = None
    if has_ci:
        error_x = dict(
            type="data", symmetric=False,
            array=coefs["conf_high"] - coefs["estimate"],
            arrayminus=coefs["estimate"] - coefs["conf_low"],
        )
    fig.add_trace(go.Scatter(
        x=coefs["estimate"], y=coefs["term"], mode="markers",
        marker=dict(color="#264653", size=10), error_x=error_x, showlegend=False,
    ))
    fig.add_vline(x=0, line_dash="dash", line_color="gray")
    fig.update_xaxes(title_text="Estimate")
    return apply_common_layout(fig, title, height)


def diagnostic_panel(augmented, title="Regression Diagnostics", height=750):
    """Four standard linear-model diagnostic plots from an ``augment`` frame."""
    fitted = augmented[".fitted"].to_numpy()
    resid = augmented[".resid"].to_numpy()
    std_resid = augmented[".std_resid"].to_numpy()
    leverage = augmented[".hat"].to_numpy()

    fig = make_subplots(rows=2, cols=2, subplot_titles=DIAGNOSTIC_TITLES)
    marker = dict(color="#264653", size=7, opacity=0.7)

    fig.add_trace(go.Scatter(x=fitted, y=resid, mode="markers", marker=marker, showlegend=False), row=1, col=1)
    fig.add_hline(y=0, line_dash="dash", line_color="gray", row=1, col=1)

    (osm, osr), (slope, intercept, _) = stats.probplot(std_resid, dist="norm")
    fig.add_trace(go.Scatter(x=osm, y=osr, mode="markers", marker=marker, showlegend=False), row=1, col=2)
    fig.add_trace(go.Scatter(
        x=[osm.min(), osm.max()], y=[intercept + slope * osm.min(), intercept + slope * osm.max()],
        mode="lines", line=dict(color="#E63946", dash="dash"), showlegend=False,
    ), row=1, col=2)

    fig.add_trace(go.Scatter(
        x=fitted, y=np.sqrt(np.abs(std_resid)), mode="markers", marker=marker, showlegend=False,
    ), row=2, col=1)

    fig.add_trace(go.Scatter(x=leverage, y=std_resid, mode="markers", marker=marker, showlegend=False), row=2, col=2)
    fig.add_hline(y=0, line_dash="dash", line_color="gray", row=2, col=2)

    fig.update_xaxes(title_text="Fitted values", row=1, col=1)
    fig.update_yaxes(title_text="Residuals", row=1, col=1)
    fig.update_xaxes(title_text="Theoretical quantiles", row=1, col=2)
    fig.update_yaxes(title_text="Standardized residuals", row=1, col=2)
    fig.update_xaxes(title_text="Fitted values", row=2, col=1)
    fig.update_yaxes(title_text="√|Standardized residuals|", row=2, col=1)
    fig.update_xaxes(title_text="Leverage", row=2, col=2)
    fig.update_yaxes(title_text="Standardized residuals", row=2, col=2)
    return apply_common_layout(fig, title, height)


def workflow_diagram(stages, highlight=None, title=None, height=220):
    """Draw ordered stages as labelled boxes joined by arrows."""
    highlight = set(highlight or [])
    fig = go.Figure()
    for i, stage in enumerate(stages):
        name = stage[0] if isinstance(stage, tuple) else stage
        fill = "#2A9D8F" if name in highlight else "#264653"
        fig.add_shape(type="rect", x0=i, x1=i + 0.8, y0=0, y1=1,
                      fillcolor=fill, line=dict(color=fill))
        fig.add_annotation(x=i + 0.4, y=0.5, text=f"<b>{name}</b>", showarrow=False,
                           font=dict(color="white", size=12))
        if i < len(stages) - 1:
            fig.add_annotation(x=i + 1, y=0.5, ax=i + 0.8, ay=0.5,
                               xref="x", yref="y", axref="x", ayref="y",
                               showarrow=True, arrowhead=3, arrowwidth=2, text="")
    fig.update_xaxes(visible=False, range=[-0.1, len(stages) - 0.1])
    fig.update_yaxes(visible=False, range=[-0.2, 1.2])
    return apply_common_layout(fig, title, height)
