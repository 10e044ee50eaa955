"""
Tests for serialization and deserialization of form definitions.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `formlogic.serialization`, and that stored
camelCase definitions load.
"""

import pytest
from formlogic.examples import build_example_order_form
from formlogic.model import Condition, Element, FormDefinition, Logic
from formlogic.serialization import (
    FormDefinitionError,
    form_from_dict,
    form_from_json,
    form_from_yaml,
    form_to_dict,
    form_to_json,
    form_to_yaml,
)
from formlogic.visibility import resolve_visibility


STORED_FORM = {
    "name": "Stored",
    "elements": [
        {
            "id": "qty",
            "type": "number",
            "label": "Quantity",
            "required": True,
            "validation": {"min": 1, "max": 10},
        },
        {
            "id": "total",
            "type": "number",
            "label": "Total",
            "calculation": {
                "enabled": True,
                "formula": [
                    {"operand": {"type": "field", "fieldId": "qty"}, "operator": "*"},
                    {"operand": {"type": "constant", "value": 2}},
                ],
                "decimalPlaces": 1,
                "suffix": " THB",
            },
        },
        {
            "id": "note",
            "type": "text",
            "label": "Note",
            "parentId": "qty",
            "pageId": "p1",
            "logic": {
                "combinator": "OR",
                "conditions": [{"id": "c1", "targetId": "qty", "operator": "greater_than", "value": "5"}],
            },
        },
        {
            "id": "legacy",
            "type": "text",
            "label": "Legacy",
            "validationType": "email",
            "validation": {"maxLength": 40},
            "conditions": [
                {"id": "c2", "targetId": "qty", "operator": "is_empty", "value": "", "action": "hide"},
            ],
        },
    ],
    "pages": [
        {
            "id": "p1",
            "label": "One",
            "skipRules": [
                {
                    "id": "s1",
                    "combinator": "AND",
                    "targetPageId": "p2",
                    "conditions": [{"id": "c3", "targetId": "qty", "operator": "equals", "value": "0"}],
                },
            ],
        },
        {"id": "p2", "label": "Two"},
    ],
    "metadata": {"author": "designer"},
}


def test_json_roundtrip():
    form = build_example_order_form()
    before = form_to_dict(form)
    restored = form_from_json(form_to_json(form))
    assert form_to_dict(restored) == before


def test_yaml_roundtrip():
    form = build_example_order_form()
    before = form_to_dict(form)
    restored = form_from_yaml(form_to_yaml(form))
    assert form_to_dict(restored) == before


def test_load_stored_definition():
    form = form_from_dict(STORED_FORM)

    total = form.get_element("total")
    assert total.calculation.formula[0].operand.field_id == "qty"
    assert total.calculation.decimal_places == 1
    assert total.calculation.suffix == " THB"

    note = form.get_element("note")
    assert note.parent_id == "qty"
    assert note.page_id == "p1"
    assert note.logic.combinator == "OR"
    assert note.logic.action == "show"
    assert note.logic.conditions[0].target_id == "qty"

    legacy = form.get_element("legacy")
    assert legacy.logic is None
    assert legacy.conditions[0].action == "hide"
    assert legacy.validation_type == "email"
    assert legacy.validation.max_length == 40
    assert legacy.validation.min_length is None

    qty = form.get_element("qty")
    assert (qty.validation.min, qty.validation.max) == (1, 10)

    assert form.get_page("p1").skip_rules[0].target_page_id == "p2"
    assert form.get_page("p2").skip_rules == []


def test_stored_roundtrip_is_lossless():
    form = form_from_dict(STORED_FORM)
    again = form_from_dict(form_to_dict(form))
    assert form_to_dict(again) == form_to_dict(form)
    assert form_to_dict(form)["elements"][1]["calculation"]["decimalPlaces"] == 1
    assert form_to_dict(form)["elements"][3]["validation"] == {"maxLength": 40}


def test_unknown_operator_survives_loading():
    data = {
        "name": "x",
        "elements": [
            {
                "id": "e",
                "type": "text",
                "logic": {"combinator": "AND", "action": "hide",
                          "conditions": [{"id": "c", "targetId": "a", "operator": "sounds_like", "value": "x"}]},
            }
        ],
    }
    element = form_from_dict(data).get_element("e")
    assert element.logic.conditions[0].operator == "sounds_like"
    # fail-open: the unknown condition matches, so the hide rule hides
    assert not resolve_visibility(element, {}).visible


def test_numeric_condition_value_becomes_string():
    data = {"name": "x", "elements": [
        {"id": "e", "type": "text", "conditions": [{"targetId": "a", "operator": "equals", "value": 3, "action": "show"}]},
    ]}
    assert form_from_dict(data).get_element("e").conditions[0].value == "3"


def test_unset_attributes_are_left_out():
    form = FormDefinition(name="x", elements=[Element(id="e", type="text",
                                                      logic=Logic(conditions=[Condition(id="c", target_id="a", operator="equals")]))])
    element = form_to_dict(form)["elements"][0]
    assert "calculation" not in element
    assert "options" not in element
    assert "validation" not in element
    assert "action" not in element["logic"]["conditions"][0]


class TestLoadingErrors:
    """Structural problems surface while loading, never while evaluating."""

    def test_unknown_operand_type(self):
        data = {"name": "x", "elements": [
            {"id": "e", "type": "number", "calculation": {"enabled": True, "formula": [{"operand": {"type": "formula"}}]}},
        ]}
        with pytest.raises(FormDefinitionError):
            form_from_dict(data)

    def test_missing_target(self):
        data = {"name": "x", "elements": [
            {"id": "e", "type": "text", "conditions": [{"operator": "equals", "value": "x"}]},
        ]}
        with pytest.raises(FormDefinitionError):
            form_from_dict(data)

    def test_element_without_id(self):
        with pytest.raises(FormDefinitionError):
            form_from_dict({"name": "x", "elements": [{"type": "text"}]})

    def test_not_a_mapping(self):
        with pytest.raises(FormDefinitionError):
            form_from_yaml("- just\n- a list\n")
