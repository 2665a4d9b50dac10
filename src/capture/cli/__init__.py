"""
Command-line interface for dataset-capture.

Provides commands for locating datasets on instrument shares and
fixing names that contain invalid characters.
"""

from .main import app, main

__all__ = ["main", "app"]
