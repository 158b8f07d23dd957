"""
Errors raised while constructing model entities.

Both kinds derive from ValueError so callers translating parse failures
can catch either one, and expose a machine-readable ``kind`` and ``rule``
so they can branch without matching on messages.
"""

from __future__ import annotations


class ModelError(ValueError):
    """Base class for model construction failures."""

    kind = "model"

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule!r}, {str(self)!r})"


class ConstructionError(ModelError):
    """A required field is missing or empty, or has the wrong shape."""

    kind = "construction"


class ValidationError(ModelError):
    """A graph-based encoding (automaton, decision diagram) is inconsistent."""

    kind = "validation"


__all__ = ["ModelError", "ConstructionError", "ValidationError"]
