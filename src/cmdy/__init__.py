"""cmdy: named shell command sets, run per working directory."""

from .app import main

__version__ = "0.1.0"

__all__ = ["__version__", "main"]
