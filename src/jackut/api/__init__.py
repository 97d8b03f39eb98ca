"""Facade layer consumed by external drivers."""

from jackut.api.facade import Facade
from jackut.api.formatting import format_collection

__all__ = [
    "Facade",
    "format_collection",
]
