"""Simulated EV device: sequence runner and dashboard state."""

from .runner import ISequenceRunner, SequenceRunner
from .state import DashboardState

__all__ = ["ISequenceRunner", "SequenceRunner", "DashboardState"]
