"""
Pytest configuration for xcsp3-model tests.

The builder tests import pycsp3, which inspects sys.argv[0] at import time
and registers an atexit hook compiling the "current model"; both are
neutralized here.
"""

import sys
import os
import atexit

# Store original argv
_original_argv = sys.argv.copy()

# Use the stub Python file for PyCSP3's import check
_fake_script = os.path.join(os.path.dirname(__file__), "_pytest_stub.py")

# Override sys.argv[0] before importing pycsp3
sys.argv[0] = _fake_script


import pytest

# Unregister pycsp3's atexit callback to prevent errors at exit
try:
    from pycsp3 import end as pycsp3_end
    atexit.unregister(pycsp3_end)
except (ImportError, AttributeError):
    pass


@pytest.fixture(autouse=True)
def reset_pycsp3_state():
    """Reset PyCSP3 state around each test; the parser registers variables globally."""
    from pycsp3 import clear
    from pycsp3.classes.main.variables import Variable

    clear()
    Variable.arrays = []

    yield

    clear()
    Variable.arrays = []


def pytest_unconfigure(config):
    """Called before test process is exited."""
    # Restore original argv
    sys.argv = _original_argv


# ========== Transition fixtures ==========

@pytest.fixture
def parity_automaton():
    """Three-state automaton from the regular constraint example."""
    return [
        ("q0", 0, "q1"), ("q0", 1, "q2"),
        ("q1", 0, "q2"), ("q1", 1, "q1"),
        ("q2", 0, "q0"), ("q2", 1, "q2"),
    ]


@pytest.fixture
def three_level_mdd():
    """Layered MDD over three binary variables."""
    return [
        ("r", 0, "n1"), ("r", 1, "n2"),
        ("n1", 0, "n3"), ("n1", 1, "n4"),
        ("n2", 0, "n4"), ("n2", 1, "n5"),
        ("n3", 0, "t"), ("n3", 1, "t"),
        ("n4", 0, "t"), ("n4", 1, "t"),
        ("n5", 0, "t"), ("n5", 1, "t"),
    ]


@pytest.fixture
def binary_tree_mdd():
    """Factory of perfect binary layered trees of a given depth ending in a single terminal 't'."""

    def build(depth: int) -> list[tuple[str, int, str]]:
        transitions = []
        frontier = ["r"]
        for level in range(depth):
            last = level == depth - 1
            nxt = []
            for node in frontier:
                for value in (0, 1):
                    child = "t" if last else f"{node}_{value}"
                    transitions.append((node, value, child))
                    if not last:
                        nxt.append(child)
            frontier = nxt
        return transitions

    return build
