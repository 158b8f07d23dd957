"""
Row patterns - regular and mdd constraints over binary cells.

The automaton accepts rows of 5 cells matching the nonogram clue "2 1",
i.e. words of the form 0* 1 1 0+ 1 0*. The decision diagram requires an
even number of ones among the first 3 cells; the node 'f' is a dead end
standing for the rejected parity.
"""

from xcsp3_model import (
    Instance,
    IntegerVariable,
    MDDConstraint,
    RegularConstraint,
    ValidationError,
)

cells = [f"x{i}" for i in range(5)]


def clue_constraint() -> RegularConstraint:
    return RegularConstraint.from_element(
        id="clue",
        variables=cells,
        transitions=[
            ("a", 0, "a"), ("a", 1, "b"),
            ("b", 1, "c"),
            ("c", 0, "d"),
            ("d", 0, "d"), ("d", 1, "e"),
            ("e", 0, "e"),
        ],
        start="a",
        final=["e"],
    )


def parity_constraint() -> MDDConstraint:
    return MDDConstraint.from_element(
        id="parity",
        variables=cells[:3],
        transitions=[
            ("r", 0, "e1"), ("r", 1, "o1"),
            ("e1", 0, "e2"), ("e1", 1, "o2"),
            ("o1", 0, "o2"), ("o1", 1, "e2"),
            ("e2", 0, "t"), ("e2", 1, "f"),
            ("o2", 0, "f"), ("o2", 1, "t"),
        ],
        root="r",
        terminal="t",
    )


def main() -> None:
    instance = Instance(
        type="CSP",
        variables=[IntegerVariable(c, [(0, 1)]) for c in cells],
        constraints=[clue_constraint(), parity_constraint()],
    )
    print(f"{len(instance.variables)} variables, {len(instance.constraints)} constraints")

    clue = instance.constraints[0]
    print(f"clue states: {sorted(clue.states)}, alphabet: {sorted(clue.alphabet)}")

    # Dropping one edge leaves e2 with fewer values than o2 on the same level
    try:
        MDDConstraint(None, cells[:3], [t for t in parity_constraint().transitions if t != ("e2", 1, "f")], "r", "t")
    except ValidationError as e:
        print(f"rejected ({e.rule}): {e}")


if __name__ == "__main__":
    main()
