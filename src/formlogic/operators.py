"""
Operator Vocabularies for Form Logic

Every rule stored in a form definition speaks one of these closed
vocabularies:
    - Condition operators (atomic comparisons)
    - Combinators (AND/OR joiners)
    - Actions (modern show/hide, legacy show/hide/enable/disable)
    - Calculation operators (arithmetic between formula steps)
    - Validation codes (why an answer was rejected)

ARCHITECTURAL RULE:
    Conditions keep their operator as the raw stored string.
    Parsing into these enums happens at evaluation time, so an
    operator this package does not know about still loads and
    evaluates fail-open instead of breaking the form.

    Adding an operator means updating ConditionOperator, the matcher
    in conditions.py and OPERATORS_BY_TYPE together.
"""

from enum import Enum
from typing import Dict, List, Optional


class ConditionOperator(str, Enum):
    """Atomic comparison operators understood by the condition matcher."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    NOT_STARTS_WITH = "not_starts_with"
    NOT_ENDS_WITH = "not_ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"


class Combinator(str, Enum):
    """Joiner applied across a list of conditions."""

    AND = "AND"
    OR = "OR"


class VisibilityAction(str, Enum):
    """Action of a modern Logic block: applies to the whole rule set."""

    SHOW = "show"
    HIDE = "hide"


class LegacyAction(str, Enum):
    """
    Per-condition action of the legacy model.

    Older stored definitions attach one of these to every condition
    individually. See visibility.py for how they aggregate.
    """

    SHOW = "show"
    HIDE = "hide"
    ENABLE = "enable"
    DISABLE = "disable"


class CalculationOperator(str, Enum):
    """Arithmetic operators between calculation steps (no precedence)."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"


class ValidationCode(str, Enum):
    """Why a submitted answer was rejected."""

    REQUIRED = "required"
    INVALID_EMAIL = "invalid_email"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    NOT_A_NUMBER = "not_a_number"
    BELOW_MIN = "below_min"
    ABOVE_MAX = "above_max"


class OperandType(str, Enum):
    CONSTANT = "constant"
    FIELD = "field"


class ElementType(str, Enum):
    """Element types a form definition may contain."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    TIME = "time"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    RATING = "rating"
    SIGNATURE = "signature"
    SECTION = "section"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    FILE = "file"


def parse_operator(raw: Optional[str]) -> Optional[ConditionOperator]:
    """
    Parse a stored operator string.

    Returns:
        The matching ConditionOperator, or None if the string is not
        part of the vocabulary (callers decide the fail-open behavior).
    """
    if raw is None:
        return None
    try:
        return ConditionOperator(raw)
    except ValueError:
        return None


# Per-type operator whitelist offered by the designer UI.
_TEXT_OPERATORS: List[ConditionOperator] = [
    ConditionOperator.EQUALS,
    ConditionOperator.NOT_EQUALS,
    ConditionOperator.CONTAINS,
    ConditionOperator.NOT_CONTAINS,
    ConditionOperator.STARTS_WITH,
    ConditionOperator.NOT_STARTS_WITH,
    ConditionOperator.ENDS_WITH,
    ConditionOperator.NOT_ENDS_WITH,
    ConditionOperator.IS_EMPTY,
    ConditionOperator.IS_NOT_EMPTY,
]

_NUMERIC_OPERATORS: List[ConditionOperator] = [
    ConditionOperator.EQUALS,
    ConditionOperator.NOT_EQUALS,
    ConditionOperator.IS_EMPTY,
    ConditionOperator.IS_NOT_EMPTY,
    ConditionOperator.GREATER_THAN,
    ConditionOperator.LESS_THAN,
    ConditionOperator.GREATER_EQUAL,
    ConditionOperator.LESS_EQUAL,
]

_CHOICE_OPERATORS: List[ConditionOperator] = [
    ConditionOperator.EQUALS,
    ConditionOperator.NOT_EQUALS,
    ConditionOperator.IS_EMPTY,
    ConditionOperator.IS_NOT_EMPTY,
    ConditionOperator.CONTAINS,
]

_TEMPORAL_OPERATORS: List[ConditionOperator] = [
    ConditionOperator.EQUALS,
    ConditionOperator.NOT_EQUALS,
    ConditionOperator.IS_EMPTY,
    ConditionOperator.IS_NOT_EMPTY,
    ConditionOperator.GREATER_THAN,
    ConditionOperator.LESS_THAN,
]

OPERATORS_BY_TYPE: Dict[str, List[ConditionOperator]] = {
    ElementType.NUMBER.value: _NUMERIC_OPERATORS,
    ElementType.RATING.value: _NUMERIC_OPERATORS,
    ElementType.SELECT.value: _CHOICE_OPERATORS,
    ElementType.RADIO.value: _CHOICE_OPERATORS,
    ElementType.CHECKBOX.value: _CHOICE_OPERATORS,
    ElementType.DATE.value: _TEMPORAL_OPERATORS,
    ElementType.TIME.value: _TEMPORAL_OPERATORS,
}


def operators_for_type(element_type: str) -> List[ConditionOperator]:
    """Operators that make sense against an element of the given type."""
    return list(OPERATORS_BY_TYPE.get(element_type, _TEXT_OPERATORS))


OPERATOR_LABELS: Dict[ConditionOperator, Dict[str, str]] = {
    ConditionOperator.EQUALS: {"th": "เท่ากับ", "en": "Equals"},
    ConditionOperator.NOT_EQUALS: {"th": "ไม่เท่ากับ", "en": "Is not equal to"},
    ConditionOperator.CONTAINS: {"th": "มีคำว่า", "en": "Contains"},
    ConditionOperator.NOT_CONTAINS: {"th": "ไม่มีคำว่า", "en": "Does not contain"},
    ConditionOperator.IS_EMPTY: {"th": "ว่างเปล่า (NULL)", "en": "Is NULL"},
    ConditionOperator.IS_NOT_EMPTY: {"th": "ไม่ว่างเปล่า (NOT NULL)", "en": "Is not NULL"},
    ConditionOperator.GREATER_THAN: {"th": "มากกว่า", "en": "Greater than"},
    ConditionOperator.LESS_THAN: {"th": "น้อยกว่า", "en": "Less than"},
    ConditionOperator.GREATER_EQUAL: {"th": "มากกว่าหรือเท่ากับ", "en": "Greater or equal"},
    ConditionOperator.LESS_EQUAL: {"th": "น้อยกว่าหรือเท่ากับ", "en": "Less or equal"},
    ConditionOperator.STARTS_WITH: {"th": "เริ่มต้นด้วย", "en": "Starts with"},
    ConditionOperator.ENDS_WITH: {"th": "ลงท้ายด้วย", "en": "Ends with"},
    ConditionOperator.NOT_STARTS_WITH: {"th": "ไม่เริ่มต้นด้วย", "en": "Does not start with"},
    ConditionOperator.NOT_ENDS_WITH: {"th": "ไม่ลงท้ายด้วย", "en": "Does not end with"},
}


def operator_label(operator: ConditionOperator, language: str = "en") -> str:
    labels = OPERATOR_LABELS[operator]
    return labels.get(language, labels["en"])
