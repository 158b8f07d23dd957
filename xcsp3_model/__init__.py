"""
xcsp3-model: A data model for XCSP3 instances.

This package represents constraint satisfaction/optimization instances
(variables, constraints, objectives) and validates the graph-based
encodings of regular and mdd constraints at construction time. It does
not solve instances.

Example usage:
    from xcsp3_model import Instance, IntegerVariable, IntensionConstraint

    x = IntegerVariable("x", [0, 1, 2])
    y = IntegerVariable("y", [0, 1, 2])
    instance = Instance(
        type="CSP",
        variables=[x, y],
        constraints=[IntensionConstraint(None, "lt(x,y)")],
    )

pycsp3's XCSP3 parser can fill an Instance through
xcsp3_model.builder.InstanceBuilder.
"""

from xcsp3_model.constraints import (
    STAR,
    Constraint,
    ExtensionConstraint,
    IntensionConstraint,
    MDDConstraint,
    RegularConstraint,
    validate_automaton,
    validate_mdd,
)
from xcsp3_model.errors import ConstructionError, ModelError, ValidationError
from xcsp3_model.instance import Instance
from xcsp3_model.objectives import MaximizeObjective, MinimizeObjective, Objective, ObjectiveType
from xcsp3_model.variables import (
    Domain,
    DomainValue,
    IntegerVariable,
    Term,
    Variable,
    VariableArray,
    VariableRef,
)

__version__ = "0.1.0"
__all__ = [
    "Domain",
    "DomainValue",
    "IntegerVariable",
    "VariableArray",
    "VariableRef",
    "Variable",
    "Term",
    "ObjectiveType",
    "MinimizeObjective",
    "MaximizeObjective",
    "Objective",
    "Constraint",
    "IntensionConstraint",
    "ExtensionConstraint",
    "RegularConstraint",
    "MDDConstraint",
    "STAR",
    "validate_automaton",
    "validate_mdd",
    "Instance",
    "ModelError",
    "ConstructionError",
    "ValidationError",
]
