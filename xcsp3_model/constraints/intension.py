from __future__ import annotations

from dataclasses import dataclass

from xcsp3_model.constraints.base import normalize_id
from xcsp3_model.errors import ConstructionError


@dataclass(frozen=True)
class IntensionConstraint:
    """
    Constraint given by a Boolean expression in functional notation.

    Both ``<intension> <function> eq(add(x,y),z) </function> </intension>``
    and the short ``<intension> eq(add(x,y),z) </intension>`` map here.
    The expression is stored verbatim; it is never parsed.
    """

    id: str
    expression: str

    def __post_init__(self):
        object.__setattr__(self, "id", normalize_id(self.id))
        if not self.expression:
            raise ConstructionError("empty_expression", "Function expression cannot be empty")

    @classmethod
    def from_element(cls, *, id: str | None = None, _function: str) -> "IntensionConstraint":
        return cls(id, _function)
