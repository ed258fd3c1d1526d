"""OJT Tracker - log daily shift times and track progress toward required hours."""

__version__ = "0.1.0"
