"""Exception and warning types raised by the simulation core."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a configuration value is out of its legal range."""


class InvalidAction(ValueError):
    """Raised when an action outside the closed action set reaches the model."""


class ConvergenceWarning(UserWarning):
    """Value iteration stopped at its iteration cap before converging."""
