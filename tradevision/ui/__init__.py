"""User interface helpers for the forward-bar simulator."""

from .interactive import run_interactive_session
from .qt import launch_qt_interface

__all__ = ["run_interactive_session", "launch_qt_interface"]
