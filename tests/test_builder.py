"""
Tests for xcsp3_model.builder.

These tests verify:
- Each supported callback produces the matching entity
- Array cell identifiers become VariableRefs
- MDD root/terminal inference
- Instance assembly and logging
- Loading a real document through pycsp3's parser
"""

import pytest
from unittest.mock import Mock

from pycsp3.classes.auxiliary.enums import TypeObj
from pycsp3.classes.main.variables import Variable
from pycsp3.classes.nodes import Node

from xcsp3_model import (
    ExtensionConstraint,
    IntegerVariable,
    IntensionConstraint,
    MaximizeObjective,
    MDDConstraint,
    MinimizeObjective,
    ObjectiveType,
    RegularConstraint,
    ValidationError,
    VariableRef,
)
from xcsp3_model.builder import InstanceBuilder, as_term, infer_mdd_endpoints


def make_var(var_id: str):
    var = Mock(spec=Variable)
    var.id = var_id
    return var


def make_node(text: str):
    node = Mock(spec=Node)
    node.__str__ = Mock(return_value=text)
    return node


class TestAsTerm:
    """Test identifier conversion."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("x", "x"),
            ("x[0]", VariableRef("x", [0])),
            ("grid[2][10]", VariableRef("grid", [2, 10])),
            ("x[]", "x[]"),
            ("y[1]z", "y[1]z"),
        ],
    )
    def test_names(self, name, expected):
        """Only full cell references are converted."""
        assert as_term(name) == expected

    def test_variable_object(self):
        """Objects are looked up by their id."""
        assert as_term(make_var("a[3]")) == VariableRef("a", [3])


class TestInferMddEndpoints:
    """Test root/terminal inference."""

    def test_single_root_and_terminal(self, three_level_mdd):
        """Layered diagram."""
        assert infer_mdd_endpoints(three_level_mdd) == ("r", "t")

    def test_two_roots(self):
        """Two nodes without incoming edges."""
        with pytest.raises(ValidationError, match="exactly one root") as exc_info:
            infer_mdd_endpoints([("a", 0, "t"), ("b", 0, "t")])
        assert exc_info.value.rule == "ambiguous_root"

    def test_two_terminals(self):
        """Two nodes without outgoing edges."""
        with pytest.raises(ValidationError, match="exactly one terminal") as exc_info:
            infer_mdd_endpoints([("r", 0, "t1"), ("r", 1, "t2")])
        assert exc_info.value.rule == "ambiguous_terminal"


class TestVariableCallbacks:
    """Test var_* callbacks."""

    def test_range(self):
        """Range domain becomes one interval."""
        builder = InstanceBuilder()
        builder.var_integer_range(make_var("x"), 1, 3)
        assert builder.variables == [IntegerVariable("x", [(1, 3)])]

    def test_values(self):
        """Enumerated domain keeps its values."""
        builder = InstanceBuilder()
        builder.var_integer(make_var("y"), [1, 4, 9])
        assert builder.variables == [IntegerVariable("y", [1, 4, 9])]


class TestConstraintCallbacks:
    """Test ctr_* callbacks."""

    def test_intension(self):
        """Tree is stored in functional notation."""
        builder = InstanceBuilder()
        builder.ctr_intension([make_var("x"), make_var("y")], make_node("lt(x,y)"))
        assert builder.constraints == [IntensionConstraint("", "lt(x,y)")]

    def test_extension_positive(self):
        """Positive table becomes supports."""
        builder = InstanceBuilder()
        builder.ctr_extension([make_var("x"), make_var("y[1]")], [(1, 2), (2, "*")], True, {"starred"})
        (ctr,) = builder.constraints
        assert isinstance(ctr, ExtensionConstraint)
        assert ctr.list == ("x", VariableRef("y", [1]))
        assert ctr.supports == ((1, 2), (2, "*"))
        assert ctr.conflicts == ()

    def test_extension_negative(self):
        """Negative table becomes conflicts."""
        builder = InstanceBuilder()
        builder.ctr_extension([make_var("x"), make_var("y")], [(1, 1)], False, set())
        (ctr,) = builder.constraints
        assert ctr.supports == ()
        assert ctr.conflicts == ((1, 1),)

    def test_extension_unary_expands_ranges(self):
        """Unary tables are flat values."""
        builder = InstanceBuilder()
        builder.ctr_extension_unary(make_var("x"), [1, 2, 4, range(8, 11)], True, set())
        (ctr,) = builder.constraints
        assert ctr.list == ("x",)
        assert ctr.supports == (1, 2, 4, 8, 9, 10)

    def test_regular(self, parity_automaton):
        """Automaton is validated on the way in."""
        builder = InstanceBuilder()
        scope = [make_var(f"x[{i}]") for i in range(3)]
        builder.ctr_regular(scope, parity_automaton, "q0", ["q1", "q2"])
        (ctr,) = builder.constraints
        assert isinstance(ctr, RegularConstraint)
        assert ctr.variables == tuple(VariableRef("x", [i]) for i in range(3))
        assert ctr.final == ("q1", "q2")

    def test_regular_invalid(self):
        """Validation errors propagate to the caller."""
        builder = InstanceBuilder()
        with pytest.raises(ValidationError):
            builder.ctr_regular([make_var("x")], [("q0", 0, "q1"), ("q0", 0, "q2")], "q0", ["q1"])
        assert builder.constraints == []

    def test_mdd(self, three_level_mdd):
        """Root and terminal are inferred."""
        builder = InstanceBuilder()
        builder.ctr_mdd([make_var("x"), make_var("y"), make_var("z")], three_level_mdd)
        (ctr,) = builder.constraints
        assert isinstance(ctr, MDDConstraint)
        assert (ctr.root, ctr.terminal) == ("r", "t")
        assert len(ctr.levels) == 3


class TestObjectiveCallbacks:
    """Test obj_* callbacks."""

    def test_minimize_variable(self):
        """A single variable is an expression objective."""
        builder = InstanceBuilder()
        builder.obj_minimize(make_var("z"))
        assert builder.objectives == [MinimizeObjective.of_expression("", "z")]

    def test_maximize_node(self):
        """A tree is stored in functional notation."""
        builder = InstanceBuilder()
        builder.obj_maximize(make_node("add(x,y)"))
        assert builder.objectives == [MaximizeObjective.of_expression("", "add(x,y)")]

    def test_minimize_sum(self):
        """Special objective with coefficients."""
        builder = InstanceBuilder()
        builder.obj_minimize_special(TypeObj.SUM, [make_var("x[0]"), make_var("x[1]")], [2, 3])
        (obj,) = builder.objectives
        assert isinstance(obj, MinimizeObjective)
        assert obj.type == ObjectiveType.SUM
        assert obj.variables == (VariableRef("x", [0]), VariableRef("x", [1]))
        assert obj.coefficients == (2, 3)

    def test_maximize_maximum_without_coefficients(self):
        """None coefficients mean all ones."""
        builder = InstanceBuilder()
        builder.obj_maximize_special(TypeObj.MAXIMUM, [make_var("a"), make_node("mul(b,c)")], None)
        (obj,) = builder.objectives
        assert isinstance(obj, MaximizeObjective)
        assert obj.variables == ("a", "mul(b,c)")
        assert obj.coefficients == ()

    def test_product_not_supported(self):
        """PRODUCT objectives have no counterpart."""
        builder = InstanceBuilder()
        with pytest.raises(NotImplementedError):
            builder.obj_minimize_special(TypeObj.PRODUCT, [make_var("a")], None)


class TestBuild:
    """Test instance assembly."""

    def test_satisfaction(self):
        """No objective: CSP with objectives None."""
        builder = InstanceBuilder()
        builder.var_integer(make_var("x"), [0, 1, 2])
        builder.var_integer(make_var("y"), [0, 1, 2])
        builder.ctr_intension([make_var("x"), make_var("y")], make_node("lt(x,y)"))
        instance = builder.build()
        assert instance.format == "XCSP3"
        assert instance.type == "CSP"
        assert len(instance.variables) == 2
        assert len(instance.constraints) == 1
        assert instance.objectives is None
        assert instance.annotations is None

    def test_optimization(self):
        """Objectives switch the inferred type to COP."""
        builder = InstanceBuilder()
        builder.obj_minimize(make_var("x"))
        instance = builder.build()
        assert instance.type == "COP"
        assert len(instance.objectives) == 1

    def test_explicit_configuration(self):
        """Configured type and annotations win."""
        builder = InstanceBuilder(type="WCSP", annotations={"source": "test"})
        instance = builder.build()
        assert instance.type == "WCSP"
        assert instance.annotations == {"source": "test"}

    def test_log_when_verbose(self, capsys):
        """Summary printed at verbose >= 1."""
        builder = InstanceBuilder(verbose=1)
        builder.build()
        assert "Built CSP instance" in capsys.readouterr().out

    def test_quiet_by_default(self, capsys):
        """Nothing printed at verbose 0."""
        builder = InstanceBuilder()
        builder.var_integer(make_var("x"), [0])
        builder.build()
        assert capsys.readouterr().out == ""


class TestParsedDocument:
    """Drive the builder with pycsp3's parser."""

    XML = '''<?xml version="1.0" encoding="UTF-8"?>
<instance format="XCSP3" type="COP">
  <variables>
    <var id="x"> 0..2 </var>
    <var id="y"> 0..2 </var>
    <array id="z" size="[3]"> 1..5 </array>
  </variables>
  <constraints>
    <intension> lt(x,y) </intension>
    <extension>
      <list> x y </list>
      <supports> (0,1)(1,2) </supports>
    </extension>
  </constraints>
  <objectives>
    <minimize type="sum"> z[] </minimize>
  </objectives>
</instance>'''

    def test_load(self, tmp_path):
        """Variables, constraints and objective reach the instance."""
        from pycsp3.parser.xparser import CallbackerXCSP3, ParserXCSP3

        path = tmp_path / "test.xml"
        path.write_text(self.XML)

        builder = InstanceBuilder()
        CallbackerXCSP3(ParserXCSP3(str(path)), builder).load_instance()
        instance = builder.build()

        ids = [v.id for v in instance.variables]
        assert ids[:2] == ["x", "y"]
        assert len(ids) == 5
        assert instance.variables[0].domain == ((0, 2),)

        intension, extension = instance.constraints
        assert isinstance(intension, IntensionConstraint)
        assert "x" in intension.expression and "y" in intension.expression
        assert isinstance(extension, ExtensionConstraint)
        assert extension.list == ("x", "y")
        assert extension.supports == ((0, 1), (1, 2))

        assert instance.type == "COP"
        (objective,) = instance.objectives
        assert isinstance(objective, MinimizeObjective)
        assert objective.type == ObjectiveType.SUM
        assert objective.variables == tuple(VariableRef("z", [i]) for i in range(3))
