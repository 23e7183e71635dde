"""Autocomplete suggestions for the news search box."""

__version__ = "0.1.0"
