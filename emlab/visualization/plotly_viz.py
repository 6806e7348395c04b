"""
Interactive Plotly figures for engine results.

All functions return Plotly figure objects (go.Figure) suitable for
display in Streamlit via st.plotly_chart(). The engine does no formatting;
axis titles come from the curve and grid labels.
"""

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from ..results import Curve, FieldGrid
from ..transmission.smith import circle_points, constant_r_circle, constant_x_circle

_PALETTE = ['#1f77b4', '#FF6600', '#00CC66', '#d62728', '#9467bd', '#8c564b']


def plot_curve(curve: Curve, series: Optional[Sequence[str]] = None, title: str = "",
               log_x: bool = False, log_y: bool = False) -> go.Figure:
    """Line plot of some or all series of a curve against its x axis."""
    names = list(series) if series is not None else list(curve.series)
    fig = go.Figure()
    for i, name in enumerate(names):
        y = curve[name]
        if np.iscomplexobj(y):
            y = np.abs(y)
        fig.add_trace(go.Scatter(
            x=curve.x, y=y,
            mode='lines', name=name,
            line=dict(color=_PALETTE[i % len(_PALETTE)], width=2),
        ))

    fig.update_layout(
        title=title,
        xaxis_title=curve.x_label,
        xaxis_type='log' if log_x else 'linear',
        yaxis_type='log' if log_y else 'linear',
        height=400,
        hovermode='x unified',
    )
    return fig


def plot_smith(gamma: Sequence[complex] | np.ndarray, title: str = "Smith Chart",
               label: str = "Γ") -> go.Figure:
    """Smith chart grid with a Γ locus; start and end points marked."""
    fig = go.Figure()

    # Unit circle
    theta = np.linspace(0, 2 * np.pi, 200)
    fig.add_trace(go.Scatter(
        x=np.cos(theta), y=np.sin(theta),
        mode='lines', line=dict(color='black', width=1),
        showlegend=False, hoverinfo='skip',
    ))

    # Constant r circles and constant x arcs
    grid_circles = [constant_r_circle(r) for r in (0.2, 0.5, 1.0, 2.0, 5.0)]
    grid_circles += [constant_x_circle(s * x) for x in (0.2, 0.5, 1.0, 2.0, 5.0) for s in (1, -1)]
    for circle in grid_circles:
        pts = circle_points(circle, samples=200)
        fig.add_trace(go.Scatter(
            x=pts["re"], y=pts["im"], mode='lines',
            line=dict(color='lightgray', width=0.5),
            showlegend=False, hoverinfo='skip',
        ))

    # Real axis
    fig.add_trace(go.Scatter(
        x=[-1, 1], y=[0, 0], mode='lines',
        line=dict(color='lightgray', width=0.5),
        showlegend=False, hoverinfo='skip',
    ))

    g = np.asarray(gamma, dtype=complex)
    if g.size:
        fig.add_trace(go.Scatter(
            x=g.real, y=g.imag,
            mode='lines+markers', marker=dict(size=3),
            line=dict(color='#1f77b4', width=2),
            name=label,
        ))
        fig.add_trace(go.Scatter(
            x=[g.real[0]], y=[g.imag[0]],
            mode='markers', marker=dict(size=10, color='green', symbol='circle'),
            name='Start',
        ))
        fig.add_trace(go.Scatter(
            x=[g.real[-1]], y=[g.imag[-1]],
            mode='markers', marker=dict(size=10, color='red', symbol='square'),
            name='End',
        ))

    fig.update_layout(
        title=title,
        xaxis=dict(range=[-1.15, 1.15], scaleanchor="y", title="Real(Γ)"),
        yaxis=dict(range=[-1.15, 1.15], title="Imag(Γ)"),
        height=550, width=550,
    )
    return fig


def plot_field_heatmap(grid: FieldGrid, key: str, title: str = "Field Distribution",
                       log_scale: bool = False) -> go.Figure:
    """Heatmap of one grid quantity; ``log_scale`` shows 20·log10 over a 60 dB range."""
    data = np.asarray(grid[key])
    if np.iscomplexobj(data):
        data = np.abs(data)
    label = key
    zmin = zmax = None
    if log_scale:
        data = 20 * np.log10(np.maximum(np.abs(data), 1e-30))
        finite = data[np.isfinite(data)]
        if finite.size:
            zmax = float(np.max(finite))
            zmin = max(zmax - 60, float(np.min(finite)))
        label = f"|{key}| (dB rel.)"

    fig = go.Figure(data=go.Heatmap(
        x=grid.x, y=grid.y, z=data,
        colorscale='Hot', zmin=zmin, zmax=zmax,
        colorbar=dict(title=label),
        hovertemplate='x: %{x:.3g}<br>y: %{y:.3g}<br>value: %{z:.3g}<extra></extra>',
    ))

    fig.update_layout(
        title=title,
        xaxis_title="x",
        yaxis_title="y",
        height=500,
        yaxis=dict(scaleanchor="x"),
    )
    return fig


def plot_field_arrows(grid: FieldGrid, u_key: str, v_key: str, background: Optional[str] = None,
                      title: str = "Vector Field", max_arrows: int = 20) -> go.Figure:
    """Quiver plot from two grid components over an optional magnitude heatmap."""
    U = np.real(np.asarray(grid[u_key]))
    V = np.real(np.asarray(grid[v_key]))
    X, Y = np.meshgrid(grid.x, grid.y)

    # Subsample for readable arrows
    step = max(1, len(grid.x) // max_arrows)
    x = X[::step, ::step].flatten()
    y = Y[::step, ::step].flatten()
    u = U[::step, ::step].flatten()
    v = V[::step, ::step].flatten()

    mag = np.sqrt(u**2 + v**2)
    finite = np.isfinite(mag)
    max_mag = (np.max(mag[finite]) if finite.any() else 0.0) + 1e-30
    dx = (grid.x[1] - grid.x[0]) if len(grid.x) > 1 else 1.0
    scale = dx * step * 0.8
    u_norm = u / max_mag * scale
    v_norm = v / max_mag * scale

    if background is not None:
        fig = go.Figure(data=go.Heatmap(
            x=grid.x, y=grid.y, z=np.abs(np.asarray(grid[background])),
            colorscale='Blues', opacity=0.5,
            colorbar=dict(title=background),
        ))
    else:
        fig = go.Figure()

    for xi, yi, ui, vi, mi in zip(x, y, u_norm, v_norm, mag):
        if not np.isfinite(mi) or mi / max_mag <= 0.05:
            continue
        fig.add_annotation(
            x=xi + ui, y=yi + vi,
            ax=xi, ay=yi,
            xref="x", yref="y",
            axref="x", ayref="y",
            showarrow=True,
            arrowhead=2, arrowsize=1.5, arrowwidth=1.5,
            arrowcolor=f'rgba(255,{int(100 * (1 - mi / max_mag))},0,0.8)',
        )

    fig.update_layout(
        title=title,
        xaxis_title="x",
        yaxis_title="y",
        height=550,
        yaxis=dict(scaleanchor="x"),
    )
    return fig


def plot_polar_pattern(curve: Curve, series: str, title: str = "Radiation Pattern",
                       db_floor: Optional[float] = None) -> go.Figure:
    """
    Polar plot of a pattern curve whose x axis is an angle in degrees.

    With ``db_floor`` the series is shown as 20·log10 clipped at the floor.
    """
    r = np.asarray(curve[series], dtype=float)
    if db_floor is not None:
        r = np.maximum(20 * np.log10(np.maximum(r, 1e-30)), db_floor)

    fig = go.Figure(go.Scatterpolar(
        r=r, theta=curve.x,
        mode='lines', name=series,
        line=dict(color='#FF6600', width=2),
    ))
    fig.update_layout(
        title=title,
        polar=dict(angularaxis=dict(direction='clockwise', rotation=90)),
        height=500,
    )
    return fig


def _curve_figure(curve: Curve, title: str) -> go.Figure:
    if {"gamma_re", "gamma_im"} <= set(curve.series):
        return plot_smith(curve["gamma_re"] + 1j * curve["gamma_im"], title=title)
    if curve.x_label == "theta_deg":
        return plot_polar_pattern(curve, next(iter(curve.series)), title=title)
    return plot_curve(curve, title=title, log_x=curve.x_label in ("f_hz", "frequency_hz"))


def plot_result(result, title: str = "") -> list[go.Figure]:
    """One figure per curve or grid found in a result record."""
    figures = []
    if isinstance(result, Curve):
        return [_curve_figure(result, title)]
    if isinstance(result, FieldGrid):
        return [plot_field_heatmap(result, next(iter(result.values)), title=title)] if result.values else []
    if isinstance(result, (list, tuple)):
        for item in result:
            figures.extend(plot_result(item, title=title))
        return figures
    if not dataclasses.is_dataclass(result):
        return figures

    for f in dataclasses.fields(result):
        value = getattr(result, f.name)
        name = f"{title} · {f.name}" if title else f.name
        if isinstance(value, Curve) and value.series:
            figures.append(_curve_figure(value, name))
        elif isinstance(value, FieldGrid) and value.values:
            figures.append(plot_field_heatmap(value, next(iter(value.values)), title=name))
    return figures
