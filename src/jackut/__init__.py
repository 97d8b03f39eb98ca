"""Jackut - a small in-memory social network."""

__version__ = "0.1.0"
