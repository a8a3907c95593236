"""Utility modules for paths, logging and error handling."""
