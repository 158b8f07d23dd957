"""
Constraint families of the model.

Each family is an independent frozen dataclass; ``Constraint`` is the
closed union of them.
"""

from typing import Union

from xcsp3_model.constraints.extension import STAR, ExtensionConstraint
from xcsp3_model.constraints.intension import IntensionConstraint
from xcsp3_model.constraints.mdd import MDDConstraint, validate_mdd
from xcsp3_model.constraints.regular import RegularConstraint, validate_automaton

Constraint = Union[IntensionConstraint, ExtensionConstraint, RegularConstraint, MDDConstraint]

__all__ = [
    "Constraint",
    "IntensionConstraint",
    "ExtensionConstraint",
    "RegularConstraint",
    "MDDConstraint",
    "STAR",
    "validate_automaton",
    "validate_mdd",
]
