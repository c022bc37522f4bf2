# hexspring/viz/wireframe.py
"""
3D VISUALIZATION: Interactive Wireframe Viewer
==============================================

PURPOSE:
--------
Show the spring network of a relaxed mesh with Plotly:
- springs as line segments, coloured by strain if given
- the loaded configuration as a faint ghost, to see how far things moved
- pinned vertices highlighted

Output can be shown in a browser or written to a standalone HTML file.
"""

import logging
import os
from typing import Optional, Sequence, Tuple

import numpy as np
import plotly.graph_objects as go

logger = logging.getLogger(__name__)


def _segments(positions: np.ndarray, edges: Sequence[Tuple[int, int]], one_based: bool):
    """Line coordinates with None separators, the way Scatter3d breaks lines."""
    off = 1 if one_based else 0
    xs, ys, zs = [], [], []
    for a, b in edges:
        pa = positions[a - off]
        pb = positions[b - off]
        xs.extend([pa[0], pb[0], None])
        ys.extend([pa[1], pb[1], None])
        zs.extend([pa[2], pb[2], None])
    return xs, ys, zs


def create_wireframe_figure(
    positions: np.ndarray,
    edges: Sequence[Tuple[int, int]],
    fixed: Optional[np.ndarray] = None,
    initial: Optional[np.ndarray] = None,
    strains: Optional[np.ndarray] = None,
    title: str = "Relaxed Mesh",
    one_based: bool = True,
    show_nodes: bool = True,
) -> go.Figure:
    """
    Create a Plotly figure of a spring wireframe.

    Parameters:
    -----------
    positions : np.ndarray
        (N, 3) vertex positions to draw
    edges : Sequence[Tuple[int, int]]
        Spring endpoint pairs
    fixed : Optional[np.ndarray]
        (N,) bool mask of pinned vertices, drawn in red
    initial : Optional[np.ndarray]
        (N, 3) reference positions drawn as a light grey ghost
    strains : Optional[np.ndarray]
        Per-edge strain; when given, each spring is coloured
        red (stretched) to blue (compressed)
    one_based : bool
        Whether edges use 1-based vertex ids (as written to .obj)

    Returns:
    --------
    go.Figure
    """
    positions = np.asarray(positions, dtype=float)
    fig = go.Figure()

    if initial is not None:
        gx, gy, gz = _segments(np.asarray(initial, dtype=float), edges, one_based)
        fig.add_trace(go.Scatter3d(
            x=gx, y=gy, z=gz,
            mode='lines',
            line=dict(color='lightgray', width=2),
            name='Initial',
            hoverinfo='skip',
        ))

    if strains is None:
        sx, sy, sz = _segments(positions, edges, one_based)
        fig.add_trace(go.Scatter3d(
            x=sx, y=sy, z=sz,
            mode='lines',
            line=dict(color='steelblue', width=4),
            name='Springs',
            hoverinfo='skip',
        ))
    else:
        max_strain = float(np.max(np.abs(strains))) if len(strains) else 0.0
        for (a, b), strain in zip(edges, strains):
            level = int(255 * abs(strain) / max_strain) if max_strain > 0 else 0
            color = f'rgb({level}, 50, 50)' if strain > 0 else f'rgb(50, 50, {level})'
            sx, sy, sz = _segments(positions, [(a, b)], one_based)
            fig.add_trace(go.Scatter3d(
                x=sx, y=sy, z=sz,
                mode='lines',
                line=dict(color=color, width=4),
                showlegend=False,
                hovertext=f"Spring {a}-{b}: strain {strain:+.3%}",
                hoverinfo='text',
            ))

    if show_nodes and len(positions):
        off = 1 if one_based else 0
        if fixed is not None:
            colors = ['red' if f else 'darkgray' for f in fixed]
            sizes = [6 if f else 3 for f in fixed]
        else:
            colors, sizes = 'darkgray', 3
        fig.add_trace(go.Scatter3d(
            x=positions[:, 0], y=positions[:, 1], z=positions[:, 2],
            mode='markers',
            marker=dict(size=sizes, color=colors),
            name='Vertices',
            text=[f"Vertex {i + off}" for i in range(len(positions))],
            hoverinfo='text',
        ))

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X'),
            yaxis=dict(title='Y'),
            zaxis=dict(title='Z'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=1.0)),
        ),
        showlegend=True,
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def plot_wireframe(
    positions: np.ndarray,
    edges: Sequence[Tuple[int, int]],
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save a wireframe figure.

    kwargs are passed to create_wireframe_figure().
    """
    fig = create_wireframe_figure(positions, edges, **kwargs)

    if outpath:
        os.makedirs(os.path.dirname(outpath) or '.', exist_ok=True)
        fig.write_html(outpath)
        logger.info("3D visualization saved to %s", outpath)

    if show:
        fig.show()

    return fig
