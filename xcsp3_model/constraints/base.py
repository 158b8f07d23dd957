"""
Helpers shared by the constraint families.

Every constraint carries an ``id``; ``None`` (no id attribute in the
document) and ``""`` both read back as the empty string.
"""

from __future__ import annotations

from typing import Iterable, Sized, Tuple

from xcsp3_model.errors import ConstructionError

Transition = Tuple[str, int, str]


def normalize_id(id) -> str:
    return "" if id is None else str(id)


def require_non_empty(value: Sized, rule: str, message: str) -> None:
    if len(value) == 0:
        raise ConstructionError(rule, message)


def coerce_transitions(transitions: Iterable, what: str) -> tuple[Transition, ...]:
    """
    Freeze transitions as ``(str, int, str)`` triples.

    ``what`` names the endpoints in error messages ("state" or "node").
    """
    coerced = []
    for t in transitions:
        if len(t) != 3:
            raise ConstructionError(
                "malformed_transition",
                f"Each transition must be a triple (source_{what}, value, destination_{what}), got {t!r}",
            )
        src, value, dst = t
        if not isinstance(value, int):
            try:
                value = int(value)
            except (TypeError, ValueError) as e:
                raise ConstructionError(
                    "malformed_transition", f"Transition value must be an integer, got {value!r}"
                ) from e
        coerced.append((str(src), value, str(dst)))
    return tuple(coerced)


__all__ = ["Transition", "normalize_id", "require_non_empty", "coerce_transitions"]
