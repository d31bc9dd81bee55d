"""Gridworld life simulation with exact and online planners."""

__version__ = "0.1.0"
