"""
MDD constraints: the sequence of values of ``variables`` must label a
root-to-terminal path of a layered multi-valued decision diagram.

XML form::

    <mdd>
      <list> x1 x2 x3 </list>
      <transitions>
        (r,0,n1)(r,1,n2)
        (n1,0,n3)(n1,1,n4)
        (n2,0,n4)(n2,1,n5)
        (n3,0,t)(n3,1,t)(n4,0,t)(n4,1,t)(n5,0,t)(n5,1,t)
      </transitions>
      <root> r </root>
      <terminal> t </terminal>
    </mdd>
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from xcsp3_model.constraints.base import (
    Transition,
    coerce_transitions,
    normalize_id,
    require_non_empty,
)
from xcsp3_model.errors import ValidationError
from xcsp3_model.variables import Term


def validate_mdd(
    transitions: Iterable[Transition], root: str, terminal: str
) -> tuple[frozenset[str], ...]:
    """
    Check the structure of a decision diagram and return its levels.

    The root must only ever be a source and the terminal only ever a
    destination. Levels are built breadth-first from the root (edges into
    the terminal open no new level); every node of a level must offer
    exactly the union of the values offered at that level. Nodes without
    outgoing edges are not compared. Reachability of the terminal is not
    required.
    """
    sources: set[str] = set()
    destinations: set[str] = set()
    node_values: dict[str, set[int]] = defaultdict(set)
    successors: dict[str, set[str]] = defaultdict(set)

    for src, value, dst in transitions:
        sources.add(src)
        destinations.add(dst)
        node_values[src].add(value)
        if dst != terminal:
            successors[src].add(dst)

    if root not in sources:
        raise ValidationError("unknown_root", f"Root node '{root}' not found as a source in transitions")
    if root in destinations:
        raise ValidationError("root_is_destination", f"Root node '{root}' cannot be a destination node")

    if terminal not in destinations:
        raise ValidationError(
            "unknown_terminal", f"Terminal node '{terminal}' not found as a destination in transitions"
        )
    if terminal in sources:
        raise ValidationError("terminal_is_source", f"Terminal node '{terminal}' cannot be a source node")

    levels: list[frozenset[str]] = []
    current = frozenset([root])
    while current:
        # A DAG has at most one level per source node
        if len(levels) > len(sources):
            raise ValidationError("cyclic", "Decision diagram contains a cycle")
        levels.append(current)

        level_values: set[int] = set()
        next_nodes: set[str] = set()
        for node in current:
            if node in node_values:
                level_values |= node_values[node]
                next_nodes |= successors[node]

        for node in current:
            if node in node_values and node_values[node] != level_values:
                raise ValidationError(
                    "inconsistent_level",
                    f"Node '{node}' has inconsistent values with other nodes at same level",
                )

        current = frozenset(next_nodes)

    return tuple(levels)


@dataclass(frozen=True)
class MDDConstraint:
    id: str
    variables: tuple[Term, ...]
    transitions: tuple[Transition, ...]
    root: str
    terminal: str
    levels: tuple[frozenset[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "id", normalize_id(self.id))
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "transitions", tuple(self.transitions))
        object.__setattr__(self, "root", str(self.root))
        object.__setattr__(self, "terminal", str(self.terminal))

        require_non_empty(self.variables, "empty_variables", "Variables list cannot be empty")
        require_non_empty(self.transitions, "empty_transitions", "Transitions list cannot be empty")

        object.__setattr__(self, "transitions", coerce_transitions(self.transitions, "node"))

        object.__setattr__(self, "levels", validate_mdd(self.transitions, self.root, self.terminal))

    @classmethod
    def from_element(
        cls, *, id: str | None = None, variables, transitions, root: str, terminal: str
    ) -> "MDDConstraint":
        return cls(id, variables, transitions, root, terminal)

    @property
    def nodes(self) -> frozenset[str]:
        return frozenset(n for src, _, dst in self.transitions for n in (src, dst))


__all__ = ["MDDConstraint", "validate_mdd"]
