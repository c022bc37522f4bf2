# hexspring/viz - Visualization Tools
"""
VIZ: Wireframe visualization (Plotly)
"""

from .wireframe import create_wireframe_figure, plot_wireframe

__all__ = ['create_wireframe_figure', 'plot_wireframe']
