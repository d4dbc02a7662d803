"""Snippet Converter - turn Alfred snippet exports into text replacement plists."""

__version__ = "0.1.0"
