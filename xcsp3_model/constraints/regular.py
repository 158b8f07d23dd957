"""
Regular constraints: the sequence of values of ``variables`` must be a
word accepted by a deterministic finite automaton.

XML form::

    <regular>
      <list> x1 x2 x3 </list>
      <transitions> (q0,0,q1)(q0,1,q2)(q1,0,q2)(q1,1,q1)(q2,0,q0)(q2,1,q2) </transitions>
      <start> q0 </start>
      <final> q1 q2 </final>
    </regular>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from xcsp3_model.constraints.base import (
    Transition,
    coerce_transitions,
    normalize_id,
    require_non_empty,
)
from xcsp3_model.errors import ConstructionError, ValidationError
from xcsp3_model.variables import Term


def validate_automaton(
    transitions: Iterable[Transition], start: str, final: Iterable[str]
) -> set[str]:
    """
    Check that an automaton is well formed and deterministic.

    Start and final states must appear in some transition, and no two
    transitions may leave the same state on the same value. Unreachable
    or dead states are accepted. Returns the set of states.
    """
    transitions = list(transitions)
    states: set[str] = set()
    for src, _, dst in transitions:
        states.add(src)
        states.add(dst)

    if start not in states:
        raise ValidationError("unknown_start", f"Start state '{start}' not found in transitions")

    for state in final:
        if state not in states:
            raise ValidationError("unknown_final", f"Final state '{state}' not found in transitions")

    seen: set[tuple[str, int]] = set()
    for src, value, _ in transitions:
        key = (src, value)
        if key in seen:
            raise ValidationError(
                "non_deterministic",
                f"Non-deterministic transition found: state='{src}', value={value}",
            )
        seen.add(key)

    return states


@dataclass(frozen=True)
class RegularConstraint:
    id: str
    variables: tuple[Term, ...]
    transitions: tuple[Transition, ...]
    start: str
    final: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "id", normalize_id(self.id))
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "transitions", tuple(self.transitions))
        object.__setattr__(self, "start", str(self.start))

        require_non_empty(self.variables, "empty_variables", "Variables list cannot be empty")
        require_non_empty(self.transitions, "empty_transitions", "Transitions list cannot be empty")
        if isinstance(self.final, str):
            raise ConstructionError(
                "malformed_final", f"Final states must be a collection of states, got {self.final!r}"
            )
        object.__setattr__(self, "final", tuple(str(f) for f in self.final))
        require_non_empty(self.final, "empty_final", "Final states list cannot be empty")

        object.__setattr__(self, "transitions", coerce_transitions(self.transitions, "state"))
        validate_automaton(self.transitions, self.start, self.final)

    @classmethod
    def from_element(
        cls, *, id: str | None = None, variables, transitions, start: str, final
    ) -> "RegularConstraint":
        return cls(id, variables, transitions, start, final)

    @property
    def states(self) -> frozenset[str]:
        return frozenset(s for src, _, dst in self.transitions for s in (src, dst))

    @property
    def alphabet(self) -> frozenset[int]:
        """Values read by at least one transition."""
        return frozenset(value for _, value, _ in self.transitions)


__all__ = ["RegularConstraint", "validate_automaton"]
