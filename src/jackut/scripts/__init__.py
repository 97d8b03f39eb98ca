"""Acceptance script support."""

from jackut.scripts.runner import ScriptError, ScriptFailure, ScriptReport, ScriptRunner

__all__ = [
    "ScriptError",
    "ScriptFailure",
    "ScriptReport",
    "ScriptRunner",
]
