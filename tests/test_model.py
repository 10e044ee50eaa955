"""
Tests for Form Model Objects and vocabularies.

These tests verify:
    - Basic model creation and defaults
    - Retrieval methods on FormDefinition and Element
    - Page ordering helpers
    - Operator vocabulary helpers
"""

from formlogic.model import (
    CalculationOperand,
    Condition,
    Element,
    FormDefinition,
    Logic,
    Option,
    Page,
)
from formlogic.operators import (
    ConditionOperator,
    operator_label,
    operators_for_type,
    parse_operator,
)


class TestCondition:
    """Test Condition objects."""

    def test_defaults(self):
        condition = Condition(id="c", target_id="a", operator="equals")
        assert condition.value == ""
        assert condition.action is None

    def test_operator_kept_raw(self):
        """Unknown operators are stored as-is."""
        condition = Condition(id="c", target_id="a", operator="sounds_like")
        assert condition.operator == "sounds_like"


class TestLogic:
    def test_defaults(self):
        logic = Logic()
        assert logic.combinator == "AND"
        assert logic.action == "show"
        assert logic.conditions == []


class TestCalculationOperand:
    def test_constant(self):
        operand = CalculationOperand.constant(2.5)
        assert operand.type == "constant"
        assert operand.value == 2.5

    def test_reference(self):
        operand = CalculationOperand.reference("qty")
        assert operand.type == "field"
        assert operand.field_id == "qty"


class TestElement:
    """Test Element objects."""

    def test_minimal_element(self):
        element = Element(id="name", type="text")
        assert element.label == ""
        assert not element.required
        assert element.logic is None
        assert element.conditions is None

    def test_get_option_by_value(self):
        element = Element(id="s", type="select", options=[Option(id="o", value="a", label="Apple")])
        assert element.get_option_by_value("a").label == "Apple"
        assert element.get_option_by_value("b") is None

    def test_get_option_without_options(self):
        assert Element(id="t", type="text").get_option_by_value("a") is None


class TestFormDefinition:
    """Test the root container."""

    def build(self):
        form = FormDefinition(name="F")
        form.elements = [Element(id="a", type="text"), Element(id="b", type="number")]
        form.pages = [Page(id="p1"), Page(id="p2"), Page(id="p3")]
        return form

    def test_get_element(self):
        form = self.build()
        assert form.get_element("b").type == "number"
        assert form.get_element("zzz") is None

    def test_get_page(self):
        form = self.build()
        assert form.get_page("p2").id == "p2"
        assert form.get_page("zzz") is None

    def test_page_ordering(self):
        form = self.build()
        assert form.page_ids() == ["p1", "p2", "p3"]
        assert form.pages_after("p1") == ["p2", "p3"]
        assert form.pages_after("p3") == []
        assert form.pages_after("zzz") == []


class TestOperators:
    """Test operator vocabulary helpers."""

    def test_parse_operator(self):
        assert parse_operator("greater_equal") is ConditionOperator.GREATER_EQUAL
        assert parse_operator("between") is None
        assert parse_operator(None) is None

    def test_operators_for_type(self):
        assert ConditionOperator.GREATER_THAN in operators_for_type("number")
        assert ConditionOperator.STARTS_WITH not in operators_for_type("number")
        assert ConditionOperator.CONTAINS in operators_for_type("checkbox")
        assert ConditionOperator.LESS_EQUAL not in operators_for_type("date")
        assert operators_for_type("email") == operators_for_type("text")

    def test_every_operator_has_labels(self):
        for operator in ConditionOperator:
            assert operator_label(operator, "en")
            assert operator_label(operator, "th")

    def test_label_falls_back_to_english(self):
        assert operator_label(ConditionOperator.EQUALS, "fr") == "Equals"
