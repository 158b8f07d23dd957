"""
Table (extension) constraints.

Positive tables list ``supports``, negative ones ``conflicts``::

    <extension id="c1">
      <list> x1 x2 x3 </list>
      <supports> (0,1,0)(1,0,0)(1,1,0)(1,1,1) </supports>
    </extension>

Unary tables are flat value sequences (``<supports> 1 2 4 8..10 </supports>``
with intervals expanded). Short tables use ``"*"`` to match any value.
Tuple arity is not checked against ``list``, and nothing prevents both
collections from being filled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from xcsp3_model.constraints.base import normalize_id
from xcsp3_model.variables import Term

STAR = "*"


def _freeze_table(table: Iterable) -> tuple:
    return tuple(tuple(t) if isinstance(t, (list, tuple)) else t for t in table)


@dataclass(frozen=True)
class ExtensionConstraint:
    id: str = ""
    list: tuple[Term, ...] = ()
    supports: tuple = ()
    conflicts: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "id", normalize_id(self.id))
        object.__setattr__(self, "list", tuple(self.list))
        object.__setattr__(self, "supports", _freeze_table(self.supports))
        object.__setattr__(self, "conflicts", _freeze_table(self.conflicts))

    @classmethod
    def from_element(cls, *, id: str | None = "", list=(), supports=(), conflicts=()):
        return cls(id, list, supports, conflicts)

    @property
    def positive(self) -> bool:
        """True for a table of supports, False for a table of conflicts."""
        return len(self.supports) > 0 or len(self.conflicts) == 0

    @property
    def table(self) -> tuple:
        return self.supports if self.positive else self.conflicts

    @property
    def is_unary(self) -> bool:
        return len(self.list) == 1

    @property
    def is_short(self) -> bool:
        """Whether some tuple uses the ``*`` wildcard."""
        return any(
            isinstance(t, tuple) and STAR in t for t in (*self.supports, *self.conflicts)
        )


__all__ = ["STAR", "ExtensionConstraint"]
