"""
Build an Instance from pycsp3's XCSP3 parser.

InstanceBuilder is a Callbacks sink: pycsp3's CallbackerXCSP3 walks a
parsed document and calls ``var_*``, ``ctr_*`` and ``obj_*`` methods,
which are turned into model entities here. Only the families this model
knows are handled; the others keep pycsp3's default behaviour.

Example:
    from pycsp3.parser.xparser import ParserXCSP3, CallbackerXCSP3
    from xcsp3_model.builder import InstanceBuilder

    builder = InstanceBuilder()
    CallbackerXCSP3(ParserXCSP3("queens.xml"), builder).load_instance()
    instance = builder.build()
"""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Any

from pycsp3.classes.auxiliary.enums import TypeObj
from pycsp3.classes.main.variables import Variable
from pycsp3.classes.nodes import Node
from pycsp3.parser.callbacks import Callbacks

from xcsp3_model.constraints import (
    Constraint,
    ExtensionConstraint,
    IntensionConstraint,
    MDDConstraint,
    RegularConstraint,
)
from xcsp3_model.errors import ValidationError
from xcsp3_model.instance import Instance
from xcsp3_model.objectives import MaximizeObjective, MinimizeObjective, Objective, ObjectiveType
from xcsp3_model.variables import IntegerVariable, Term, VariableRef

_ARRAY_CELL = re.compile(r"^(?P<array>[^\[\]]+)(?P<indices>(\[\d+\])+)$")


def as_term(var: Any) -> Term:
    """Identifier of a parser variable; array cells become VariableRefs."""
    name = var if isinstance(var, str) else var.id
    match = _ARRAY_CELL.match(name)
    if match is None:
        return name
    indices = [int(i) for i in re.findall(r"\[(\d+)\]", match.group("indices"))]
    return VariableRef(match.group("array"), indices)


def _expand_values(values: list) -> list[int]:
    expanded = []
    for v in values:
        if isinstance(v, range):
            expanded.extend(v)
        else:
            expanded.append(v)
    return expanded


def infer_mdd_endpoints(transitions: list) -> tuple[str, str]:
    """Root is the only node without incoming edges, terminal the only one without outgoing edges."""
    indegree: dict[str, int] = defaultdict(int)
    outdegree: dict[str, int] = defaultdict(int)
    for src, _, dst in transitions:
        src, dst = str(src), str(dst)
        outdegree[src] += 1
        indegree[dst] += 1
        # Ensure keys exist for degree lookups
        indegree[src] += 0
        outdegree[dst] += 0

    roots = sorted(s for s in indegree if indegree[s] == 0)
    if len(roots) != 1:
        raise ValidationError("ambiguous_root", f"MDD must have exactly one root (found {len(roots)})")
    terminals = sorted(s for s in outdegree if outdegree[s] == 0)
    if len(terminals) != 1:
        raise ValidationError(
            "ambiguous_terminal", f"MDD must have exactly one terminal (found {len(terminals)})"
        )
    return roots[0], terminals[0]


class InstanceBuilder(Callbacks):
    """
    Callbacks collecting model entities.

    Attributes:
        format: Format tag of the built instance
        type: Framework type; inferred ("CSP"/"COP") when None
        annotations: Annotations attached to the built instance
        verbose: Verbosity level (0=quiet, 1=summary, 2=every entity)
    """

    def __init__(
        self,
        format: str = "XCSP3",
        type: str | None = None,
        annotations: dict[str, Any] | None = None,
        verbose: int = 0,
    ):
        super().__init__()
        self.print_general_methods = False
        self.print_specific_methods = False

        # Disable pattern recognition so every intension constraint
        # reaches ctr_intension unchanged
        self.recognize_unary_primitives = False
        self.recognize_binary_primitives = False
        self.recognize_ternary_primitives = False
        self.recognize_logic_intension = False
        self.recognize_sum_intension = False
        self.recognize_extremum_intension = False

        self.format = format
        self.type = type
        self.annotations = annotations
        self.verbose = verbose

        self.variables: list[IntegerVariable] = []
        self.constraints: list[Constraint] = []
        self.objectives: list[Objective] = []

    # ========== Variables ==========

    def var_integer_range(self, x: Variable, min_value: int, max_value: int):
        self.variables.append(IntegerVariable(x.id, [(min_value, max_value)]))
        self._log(2, f"Collected var {x.id} in [{min_value}, {max_value}]")

    def var_integer(self, x: Variable, values: list[int]):
        self.variables.append(IntegerVariable(x.id, values))
        self._log(2, f"Collected var {x.id} with {len(values)} values")

    # ========== Constraints ==========

    def ctr_intension(self, scope: list[Variable], tree: Node):
        self.constraints.append(IntensionConstraint(None, str(tree)))
        self._log(2, f"Collected intension constraint on {len(scope)} vars")

    def ctr_extension_unary(self, x: Variable, values: list[int], positive: bool, flags: set[str]):
        table = _expand_values(values)
        self._add_extension([x], table, positive)

    def ctr_extension(self, scope: list[Variable], tuples: list, positive: bool, flags: set[str]):
        self._add_extension(scope, tuples, positive)

    def _add_extension(self, scope: list[Variable], table: list, positive: bool):
        terms = [as_term(v) for v in scope]
        if positive:
            ctr = ExtensionConstraint(None, terms, supports=table)
        else:
            ctr = ExtensionConstraint(None, terms, conflicts=table)
        self.constraints.append(ctr)
        self._log(
            2,
            f"Collected {'positive' if positive else 'negative'} extension on {len(scope)} vars "
            f"with {len(table)} tuples",
        )

    def ctr_regular(self, scope: list[Variable], transitions: list, start_state: str, final_states: list[str]):
        ctr = RegularConstraint(None, [as_term(v) for v in scope], transitions, start_state, final_states)
        self.constraints.append(ctr)
        self._log(2, f"Collected regular constraint with {len(ctr.transitions)} transitions")

    def ctr_mdd(self, scope: list[Variable], transitions: list):
        root, terminal = infer_mdd_endpoints(transitions)
        ctr = MDDConstraint(None, [as_term(v) for v in scope], transitions, root, terminal)
        self.constraints.append(ctr)
        self._log(2, f"Collected mdd constraint with {len(ctr.levels)} levels")

    # ========== Objectives ==========

    def obj_minimize(self, term: Variable | Node):
        self._add_expression_objective(MinimizeObjective, term)

    def obj_maximize(self, term: Variable | Node):
        self._add_expression_objective(MaximizeObjective, term)

    def obj_minimize_special(self, obj_type: TypeObj, terms: list[Variable] | list[Node], coefficients: None | list[int]):
        self._add_special_objective(MinimizeObjective, obj_type, terms, coefficients)

    def obj_maximize_special(self, obj_type: TypeObj, terms: list[Variable] | list[Node], coefficients: None | list[int]):
        self._add_special_objective(MaximizeObjective, obj_type, terms, coefficients)

    def _add_expression_objective(self, cls, term: Variable | Node):
        expression = term.id if isinstance(term, Variable) else str(term)
        self.objectives.append(cls.of_expression(None, expression))
        self._log(1, f"Collected {'minimization' if cls.minimize else 'maximization'} objective")

    def _add_special_objective(self, cls, obj_type, terms, coefficients):
        kind = ObjectiveType.from_type_obj(obj_type)
        lst = [as_term(t) if isinstance(t, Variable) else str(t) for t in terms]
        self.objectives.append(cls.of_terms(None, kind, lst, coefficients or ()))
        self._log(1, f"Collected {kind} {'minimization' if cls.minimize else 'maximization'} objective")

    # ========== Result ==========

    def build(self) -> Instance:
        """Assemble the collected entities."""
        framework = self.type
        if framework is None:
            framework = "COP" if self.objectives else "CSP"
        instance = Instance(
            format=self.format,
            type=framework,
            variables=self.variables,
            constraints=self.constraints,
            objectives=self.objectives if self.objectives else None,
            annotations=self.annotations,
        )
        self._log(
            1,
            f"Built {framework} instance with {len(instance.variables)} variables, "
            f"{len(instance.constraints)} constraints",
        )
        return instance

    def _log(self, level: int, msg: str) -> None:
        """Log message if verbosity is high enough."""
        if self.verbose >= level:
            print(msg)


__all__ = ["InstanceBuilder", "as_term", "infer_mdd_endpoints"]
