"""
Variables of an XCSP3 instance.

A domain is an ordered tuple whose items are either single integers or
closed intervals ``(lo, hi)``. Declaration order is kept and nothing is
checked here; well-formedness of domains is the producer's business.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple, Union

DomainValue = Union[int, Tuple[int, int]]
Domain = Tuple[DomainValue, ...]


def as_domain(values: Iterable) -> Domain:
    """Freeze an iterable of values/intervals into a Domain."""
    return tuple(tuple(v) if isinstance(v, (list, tuple)) else v for v in values)


@dataclass(frozen=True)
class IntegerVariable:
    """A single integer variable ``<var id="x"> ... </var>``."""

    id: str
    domain: Domain = ()

    def __post_init__(self):
        object.__setattr__(self, "domain", as_domain(self.domain))


@dataclass(frozen=True)
class VariableArray:
    """
    An array of variables ``<array id="x" size="[2][3]"> ... </array>``.

    ``domains`` maps index-pattern specifiers (``"x[0][]"``) to domains;
    ``default_domain`` covers the cells no specifier mentions (``others``).
    ``domains`` is read-only and does not take part in hashing.
    """

    id: str
    size: tuple[int, ...]
    domains: Mapping[str, Domain] = field(default_factory=dict, hash=False)
    default_domain: Domain | None = None

    def __post_init__(self):
        object.__setattr__(self, "size", tuple(int(n) for n in self.size))
        object.__setattr__(
            self,
            "domains",
            MappingProxyType({key: as_domain(dom) for key, dom in dict(self.domains).items()}),
        )
        if self.default_domain is not None:
            object.__setattr__(self, "default_domain", as_domain(self.default_domain))

    @property
    def dimensions(self) -> int:
        return len(self.size)


@dataclass(frozen=True)
class VariableRef:
    """A named lookup of one cell of a VariableArray, e.g. ``x[1][2]``."""

    array_id: str
    indices: tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))

    def __str__(self) -> str:
        return self.array_id + "".join(f"[{i}]" for i in self.indices)


Variable = Union[IntegerVariable, VariableArray, VariableRef]

# Element type of constraint scopes and objective terms
Term = Union[str, VariableRef]


__all__ = [
    "DomainValue",
    "Domain",
    "as_domain",
    "IntegerVariable",
    "VariableArray",
    "VariableRef",
    "Variable",
    "Term",
]
