"""Idears: a small idea-tracking service."""

__version__ = "0.1.0"
