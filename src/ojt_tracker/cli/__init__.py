"""Command-line interface for OJT Tracker."""
