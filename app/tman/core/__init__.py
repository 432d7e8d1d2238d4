"""Core trash store components."""
