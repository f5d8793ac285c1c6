"""Flet user interface for the ads dashboard."""
