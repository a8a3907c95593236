"""Controllers coordinating services and the terminal UI."""

from .application_controller import ApplicationController

__all__ = ["ApplicationController"]
