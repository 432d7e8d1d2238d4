"""Command-line interface for tman."""
