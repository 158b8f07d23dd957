"""
Objectives of an XCSP3 optimization instance.

An objective is either an expression (``<minimize> add(x,y) </minimize>``)
or a structural aggregate over a list of terms with optional coefficients
(``<minimize type="sum"> <list> x y z </list> <coeffs> 2 4 1 </coeffs>``).
The two representations are mutually exclusive: the factory classmethods
pick exactly one of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterable, Union

from xcsp3_model.errors import ConstructionError
from xcsp3_model.variables import Term

if TYPE_CHECKING:
    from pycsp3.classes.auxiliary.enums import TypeObj


class ObjectiveType(Enum):
    """Value of the ``type`` attribute of ``<minimize>``/``<maximize>``."""

    EXPRESSION = "expression"
    SUM = "sum"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    NVALUES = "nValues"
    LEX = "lex"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "ObjectiveType":
        """Accept a member or an XCSP3 attribute value such as ``"nValues"``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise ConstructionError("unknown_objective_type", f"Unknown objective type {value!r}") from e

    @classmethod
    def from_type_obj(cls, obj_type: "TypeObj") -> "ObjectiveType":
        """Convert a pycsp3 TypeObj (as handed to objective callbacks)."""
        member = cls.__members__.get(obj_type.name)
        if member is None:
            raise NotImplementedError(f"Objective type {obj_type} not supported")
        return member

    def to_type_obj(self) -> "TypeObj":
        from pycsp3.classes.auxiliary.enums import TypeObj

        return TypeObj[self.name]


def _normalize_id(id) -> str:
    return "" if id is None else str(id)


@dataclass(frozen=True)
class _Objective:
    id: str = ""
    type: ObjectiveType = ObjectiveType.EXPRESSION
    variables: tuple[Term, ...] = ()
    coefficients: tuple[int, ...] = ()
    expression: str = ""

    minimize: ClassVar[bool]

    def __post_init__(self):
        object.__setattr__(self, "id", _normalize_id(self.id))
        object.__setattr__(self, "type", ObjectiveType.parse(self.type))
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "coefficients", tuple(int(c) for c in self.coefficients))

    @classmethod
    def of_expression(cls, id, expression: str):
        """Objective given by a functional expression, e.g. ``add(x,y)``."""
        return cls(id, ObjectiveType.EXPRESSION, (), (), expression)

    @classmethod
    def of_terms(
        cls,
        id,
        type: ObjectiveType,
        variables: Iterable[Term],
        coefficients: Iterable[int] = (),
    ):
        """
        Structural objective over ``variables``.

        An empty ``coefficients`` means every coefficient is 1.
        """
        return cls(id, type, tuple(variables), tuple(coefficients), "")

    @classmethod
    def from_element(
        cls,
        *,
        id: str | None = "",
        type: ObjectiveType = ObjectiveType.EXPRESSION,
        variables: Iterable[Term] = (),
        coefficients: Iterable[int] = (),
        expression: str = "",
    ):
        """
        Build from the options of an objective element.

        The expression branch is taken only for type EXPRESSION with a
        non-empty expression; anything else is treated as structural.
        """
        type = ObjectiveType.parse(type)
        if type == ObjectiveType.EXPRESSION and expression:
            return cls.of_expression(id, expression)
        return cls.of_terms(id, type, variables, coefficients)

    @property
    def is_expression(self) -> bool:
        return self.type == ObjectiveType.EXPRESSION and bool(self.expression)


@dataclass(frozen=True)
class MinimizeObjective(_Objective):
    """``<minimize>`` element."""

    minimize: ClassVar[bool] = True


@dataclass(frozen=True)
class MaximizeObjective(_Objective):
    """``<maximize>`` element."""

    minimize: ClassVar[bool] = False


Objective = Union[MinimizeObjective, MaximizeObjective]


__all__ = ["ObjectiveType", "MinimizeObjective", "MaximizeObjective", "Objective"]
