"""
The Instance aggregate.

An instance owns its variables, constraints, objectives and annotations.
No cross-entity check is made: scopes may mention identifiers that are
not declared, that is left to whoever produced the entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from xcsp3_model.constraints import Constraint
from xcsp3_model.objectives import Objective
from xcsp3_model.variables import Variable


@dataclass(frozen=True)
class Instance:
    """
    An XCSP3 instance.

    Attributes:
        format: Format of the instance, "XCSP3"
        type: Framework type ("CSP", "COP", ...)
        variables: Declared variables, in declaration order
        constraints: Constraints, in declaration order
        objectives: Objectives, or None for a satisfaction problem
        annotations: Free-form metadata (read-only), or None
    """

    format: str = "XCSP3"
    type: str = ""
    variables: tuple[Variable, ...] = ()
    constraints: tuple[Constraint, ...] = ()
    objectives: tuple[Objective, ...] | None = None
    annotations: Mapping[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if self.objectives is not None:
            object.__setattr__(self, "objectives", tuple(self.objectives))
        if self.annotations is not None:
            object.__setattr__(self, "annotations", MappingProxyType(dict(self.annotations)))

    @classmethod
    def with_variables(cls, format: str, type: str, variables: Iterable[Variable]) -> "Instance":
        """Instance declaring variables only."""
        return cls(format, type, tuple(variables))

    @property
    def is_optimization(self) -> bool:
        return self.objectives is not None and len(self.objectives) > 0


__all__ = ["Instance"]
