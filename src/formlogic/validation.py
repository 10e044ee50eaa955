"""
Answer validation for submitted forms.

Checks a complete answer set the way the public form does before it
accepts a submission:

    required        -> visible required elements must be answered
    text / email    -> email format, validation.min_length / max_length
    number          -> numeric, validation.min / max

Hidden elements (including children of hidden sections) and layout
elements are never validated. Every element reports at most one code,
the first check that fails in the order above.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from .coercion import is_empty, parse_number
from .config import EngineSettings
from .model import AnswerValue, Answers, Element, FormDefinition
from .operators import ElementType, ValidationCode
from .visibility import resolve_form_visibility

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_TEXT_TYPES = (ElementType.TEXT, ElementType.TEXTAREA, ElementType.EMAIL)


def _is_email_element(element: Element) -> bool:
    return element.type == ElementType.EMAIL or element.validation_type == "email"


def _validate_text(element: Element, value: str) -> Optional[ValidationCode]:
    if _is_email_element(element) and not EMAIL_PATTERN.match(value):
        return ValidationCode.INVALID_EMAIL

    rules = element.validation
    if rules is None:
        return None
    if rules.min_length and len(value) < rules.min_length:
        return ValidationCode.TOO_SHORT
    if rules.max_length and len(value) > rules.max_length:
        return ValidationCode.TOO_LONG
    return None


def _validate_number(element: Element, value: AnswerValue) -> Optional[ValidationCode]:
    number = parse_number(value)
    if number is None:
        return ValidationCode.NOT_A_NUMBER

    rules = element.validation
    if rules is None:
        return None
    if rules.min is not None and number < rules.min:
        return ValidationCode.BELOW_MIN
    if rules.max is not None and number > rules.max:
        return ValidationCode.ABOVE_MAX
    return None


def validate_answer(element: Element, value: AnswerValue) -> Optional[ValidationCode]:
    """
    Check one answer against its element, ignoring visibility.

    Returns:
        The first failing ValidationCode, or None if the answer is fine.
        Empty answers only fail the required check.
    """
    if is_empty(value):
        return ValidationCode.REQUIRED if element.required else None

    if element.type in _TEXT_TYPES and isinstance(value, str):
        return _validate_text(element, value)
    if element.type == ElementType.NUMBER:
        return _validate_number(element, value)
    return None


def validate_answers(
    form: FormDefinition,
    answers: Answers,
    settings: Optional[EngineSettings] = None,
) -> Dict[str, ValidationCode]:
    """
    Validate a whole answer set.

    Args:
        form: Stored form definition
        answers: Submitted answer set (never modified)
        settings: Supplies the layout element types (defaults if omitted)

    Returns:
        Element id -> ValidationCode for every visible element that
        fails, in element order. Empty when the submission is valid.
    """
    settings = settings or EngineSettings()
    states = resolve_form_visibility(form.elements, answers)

    errors: Dict[str, ValidationCode] = {}
    for element in form.elements:
        if element.type in settings.layout_types or not states[element.id].visible:
            continue
        code = validate_answer(element, answers.get(element.id))
        if code is not None:
            errors[element.id] = code
    return errors
