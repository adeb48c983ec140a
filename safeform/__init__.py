"""Validated form state for the safety app's screens."""

__version__ = "0.1.0"
