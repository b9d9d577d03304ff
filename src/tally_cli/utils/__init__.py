"""Formatting helpers for dates and money."""
