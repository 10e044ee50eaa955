"""
Core Form Model Objects

Defines the fundamental data structures a form definition is made of.

These are pure data classes representing:
    - Options (choices of select/radio/checkbox elements)
    - Conditions (atomic comparisons against the answer set)
    - Logic (modern single-action rule sets)
    - Calculations (left-to-right formulas)
    - Validation (answer constraints checked on submission)
    - Elements (form fields and layout blocks)
    - Skip rules and Pages (multi-page navigation)
    - FormDefinition (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about rendering
        - Are never mutated by the evaluators
        - Are fully serializable (see serialization.py)
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .operators import (
    Combinator,
    OperandType,
    VisibilityAction,
)

# A label is either plain text or a per-language mapping, e.g. {"th": ..., "en": ...}
Text = Union[str, Dict[str, str]]

# Values an answer set may hold for one field
AnswerValue = Union[str, int, float, bool, List[str], None]
Answers = Dict[str, AnswerValue]


@dataclass
class Option:
    """
    One choice of a choice-typed element.

    Properties:
        id: Stable option identifier
        value: Raw value stored in the answer set when chosen
        label: Display text (plain or translatable)
    """

    id: str
    value: str
    label: Text = ""


@dataclass
class Condition:
    """
    Atomic comparison against one answer.

    Properties:
        id:
            Condition identifier
        target_id:
            Answer key (element id) the comparison reads
        operator:
            Raw operator string (see operators.ConditionOperator).
            Kept as a string so unknown operators survive loading.
        value:
            Comparison value. Always a string; numeric and boolean
            comparisons coerce at evaluation time.
        action:
            Legacy model only: show | hide | enable | disable.
            Ignored when the condition belongs to a Logic block.
    """

    id: str
    target_id: str
    operator: str
    value: str = ""
    action: Optional[str] = None


@dataclass
class Logic:
    """
    Modern visibility rule: one action for the whole condition set.

    Example:
        Show "company_name" when employment == "employed" OR
        employment == "self_employed":

        Logic(
            combinator=Combinator.OR,
            conditions=[...],
            action=VisibilityAction.SHOW,
        )
    """

    combinator: str = Combinator.AND.value
    conditions: List[Condition] = field(default_factory=list)
    action: str = VisibilityAction.SHOW.value


@dataclass
class CalculationOperand:
    """Either a literal constant or a reference to another field's value."""

    type: str
    value: Optional[float] = None
    field_id: Optional[str] = None

    @classmethod
    def constant(cls, value: float) -> "CalculationOperand":
        return cls(type=OperandType.CONSTANT.value, value=value)

    @classmethod
    def reference(cls, field_id: str) -> "CalculationOperand":
        return cls(type=OperandType.FIELD.value, field_id=field_id)


@dataclass
class CalculationStep:
    """
    One step of a formula.

    The designer writes the operator joining THIS step's operand to the
    NEXT one, leaving the last step without one. Formulas whose first
    step has no operator instead attach each operator to the step it
    precedes (see calculation.calculate_value).
    """

    operand: CalculationOperand
    operator: Optional[str] = None


@dataclass
class Calculation:
    """
    Derived value of a field.

    Properties:
        enabled: Disabled calculations always yield 0
        formula: Steps folded strictly left-to-right
        decimal_places: Round/format to this many places (optional)
        prefix: Prepended when formatting, e.g. "$"
        suffix: Appended when formatting, e.g. " THB"
    """

    enabled: bool = False
    formula: List[CalculationStep] = field(default_factory=list)
    decimal_places: Optional[int] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None


@dataclass
class Validation:
    """
    Answer constraints a submitted form must satisfy.

    Properties:
        min / max: Bounds of number answers
        min_length / max_length: Length bounds of text answers
    """

    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass
class Element:
    """
    A single form element, usually a question.

    Properties:
        id:
            Unique identifier, also the answer-set key
        type:
            ElementType value (text, select, section, ...)
        label:
            Question text, may contain piping tokens
        required:
            Whether a visible instance must be answered
        options:
            Choices for select/radio/checkbox elements
        conditions:
            Legacy per-condition visibility/enablement rules
        logic:
            Modern visibility rule; takes precedence over conditions
        calculation:
            Derived value definition (number fields)
        parent_id:
            Enclosing section, hidden sections hide their children
        page_id:
            Page the element is placed on
        content:
            Paragraph body text, may contain piping tokens
        validation:
            Length / range constraints checked on submission
        validation_type:
            "email" makes a text element require an email address

    ARCHITECTURAL RULE:
        conditions and logic are two different models. They are kept
        side by side, never merged (see visibility.VisibilityRule).
    """

    id: str
    type: str
    label: Text = ""
    required: bool = False
    options: Optional[List[Option]] = None
    conditions: Optional[List[Condition]] = None
    logic: Optional[Logic] = None
    calculation: Optional[Calculation] = None
    parent_id: Optional[str] = None
    page_id: Optional[str] = None
    content: Optional[Text] = None
    validation: Optional[Validation] = None
    validation_type: Optional[str] = None

    def get_option_by_value(self, value: str) -> Optional[Option]:
        for option in self.options or []:
            if option.value == value:
                return option
        return None


@dataclass
class SkipRule:
    """
    Rule-driven jump to a later page.

    Rules of a page are ordered; the first matching rule wins.
    """

    id: str
    target_page_id: str
    conditions: List[Condition] = field(default_factory=list)
    combinator: str = Combinator.AND.value


@dataclass
class Page:
    id: str
    label: Text = ""
    skip_rules: List[SkipRule] = field(default_factory=list)


@dataclass
class FormDefinition:
    """
    Root container for a stored form.

    This is the only input the engine needs besides the answer set.

    INVARIANTS (guaranteed by callers, reported by analyzer.py):
        - Element ids are unique
        - Condition targets and calculation fields reference elements
          earlier in evaluation order (no cycles)
        - Skip rules target pages strictly after their own page
    """

    name: str
    elements: List[Element] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    def get_element(self, element_id: str) -> Optional[Element]:
        """
        Retrieve an element by ID.

        Returns:
            Element object or None if not found
        """
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def get_page(self, page_id: str) -> Optional[Page]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def page_ids(self) -> List[str]:
        return [page.id for page in self.pages]

    def pages_after(self, page_id: str) -> List[str]:
        """IDs of the pages strictly after the given one (empty if unknown)."""
        ids = self.page_ids()
        if page_id not in ids:
            return []
        return ids[ids.index(page_id) + 1:]
