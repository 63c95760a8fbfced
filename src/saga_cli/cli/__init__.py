"""CLI helpers exposed for other modules."""

from .reporting import run_workflow
from .ui import SpinnerRenderer, StepTracker

__all__ = ["SpinnerRenderer", "StepTracker", "run_workflow"]
