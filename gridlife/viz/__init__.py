"""Visualization layer: trajectory figures."""

from gridlife.viz.render import render_trajectory

__all__ = ["render_trajectory"]
