"""
Tests for the whole-form evaluation pass, using the example order form.
"""

import copy

from formlogic.config import EngineSettings
from formlogic.engine import evaluate_form, missing_required_fields
from formlogic.examples import build_example_order_form
from formlogic.serialization import form_to_dict


def test_delivery_order():
    form = build_example_order_form()
    answers = {"name": "Ann", "product": "apple", "quantity": "3", "fulfilment": "delivery"}

    result = evaluate_form(form, answers)

    assert result.is_visible("delivery_section")
    assert result.is_visible("address")
    assert not result.is_visible("gift_message")
    assert result.calculated["total"] == 37.5
    assert result.formatted["total"] == "$37.50"
    assert result.skip_targets == {"p_order": None, "p_delivery": None, "p_confirm": None}


def test_pickup_order_skips_delivery_page():
    form = build_example_order_form()
    answers = {"name": "Ann", "quantity": 2, "fulfilment": "pickup", "is_gift": True}

    result = evaluate_form(form, answers)

    assert result.skip_targets["p_order"] == "p_confirm"
    assert not result.is_visible("delivery_section")
    assert not result.is_visible("address")
    assert result.is_visible("gift_message")
    assert not result.is_enabled("gift_message")


def test_piped_text():
    form = build_example_order_form()
    answers = {"name": "Ann", "product": "pear", "quantity": 2}

    result = evaluate_form(form, answers, EngineSettings(language="en"))

    assert result.texts["gift_message"] == "Gift message for Ann"
    assert result.contents["summary"] == "Thanks Ann, you ordered 2 x Pear."
    assert "name" not in result.texts


def test_piped_text_default_language_and_fallbacks():
    result = evaluate_form(build_example_order_form(), {"product": "apple"})

    assert result.texts["gift_message"] == "Gift message for the recipient"
    assert result.contents["summary"] == "Thanks friend, you ordered 0 x แอปเปิล."


def test_inputs_not_modified():
    form = build_example_order_form()
    answers = {"name": "Ann", "quantity": "3", "fulfilment": "pickup"}
    before_form = copy.deepcopy(form_to_dict(form))
    before_answers = dict(answers)

    evaluate_form(form, answers)
    missing_required_fields(form, answers)

    assert form_to_dict(form) == before_form
    assert answers == before_answers


def test_repeated_evaluation_is_identical():
    form = build_example_order_form()
    answers = {"name": "Ann", "quantity": "3", "fulfilment": "delivery"}
    assert evaluate_form(form, answers) == evaluate_form(form, answers)


def test_unknown_element_defaults_visible():
    result = evaluate_form(build_example_order_form(), {})
    assert result.is_visible("not_there")
    assert result.is_enabled("not_there")


class TestMissingRequiredFields:
    """Required checks skip hidden and layout elements."""

    def test_everything_missing(self):
        form = build_example_order_form()
        assert missing_required_fields(form, {}) == ["name", "product", "quantity", "fulfilment"]

    def test_delivery_requires_address(self):
        form = build_example_order_form()
        answers = {"name": "Ann", "product": "apple", "quantity": 1, "fulfilment": "delivery"}
        assert missing_required_fields(form, answers) == ["address"]

    def test_pickup_complete(self):
        form = build_example_order_form()
        answers = {"name": "Ann", "product": "apple", "quantity": 1, "fulfilment": "pickup"}
        assert missing_required_fields(form, answers) == []
