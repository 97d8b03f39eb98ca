"""Presentation helpers for facade return values."""

from collections.abc import Iterable


def format_collection(items: Iterable[str]) -> str:
    """Render items as ``{a,b,c}`` in iteration order; empty renders ``{}``."""
    return "{" + ",".join(items) + "}"
