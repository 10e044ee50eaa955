"""
Visibility Resolver: decides whether elements are visible and enabled.

Two rule models exist in stored forms and both stay supported:

    ModernRule  (element.logic)
        One action (show | hide) for a whole AND/OR condition set.
        No enable/disable concept: hidden implies non-interactive.

    LegacyRule  (element.conditions)
        Every condition carries its own action. Actions aggregate per
        axis; negative actions (hide, disable) always dominate positive
        ones (show, enable), whatever the list order.

ARCHITECTURAL RULE:
    The two models are NOT equivalent. They are dispatched as tagged
    variants and never converted into each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .coercion import resolve_text
from .conditions import evaluate_condition, evaluate_conditions
from .model import Answers, Condition, Element, Logic
from .operators import Combinator, LegacyAction, VisibilityAction, operator_label, parse_operator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementState:
    """Per-element decision."""

    visible: bool = True
    enabled: bool = True


@dataclass(frozen=True)
class LegacyRule:
    conditions: List[Condition]


@dataclass(frozen=True)
class ModernRule:
    logic: Logic


VisibilityRule = Union[LegacyRule, ModernRule]


def visibility_rule(element: Element) -> Optional[VisibilityRule]:
    """
    Pick the rule model an element uses.

    A populated `logic` always wins; `conditions` are only consulted for
    elements that have no modern logic at all.
    """
    if element.logic is not None:
        return ModernRule(element.logic)
    if element.conditions:
        return LegacyRule(element.conditions)
    return None


def _resolve_modern(rule: ModernRule, answers: Answers) -> ElementState:
    logic = rule.logic
    if not logic.conditions:
        return ElementState()

    met = evaluate_conditions(logic.conditions, logic.combinator, answers)
    if logic.action == VisibilityAction.HIDE:
        return ElementState(visible=not met)
    return ElementState(visible=met)


def _resolve_axis(conditions: List[Condition], positive: str, negative: str, answers: Answers) -> bool:
    positives = [c for c in conditions if c.action == positive]
    negatives = [c for c in conditions if c.action == negative]

    result = True
    if positives:
        result = any(evaluate_condition(c, answers) for c in positives)
    if any(evaluate_condition(c, answers) for c in negatives):
        result = False
    return result


def _resolve_legacy(rule: LegacyRule, answers: Answers) -> ElementState:
    return ElementState(
        visible=_resolve_axis(rule.conditions, LegacyAction.SHOW, LegacyAction.HIDE, answers),
        enabled=_resolve_axis(rule.conditions, LegacyAction.ENABLE, LegacyAction.DISABLE, answers),
    )


def resolve_visibility(element: Element, answers: Answers) -> ElementState:
    """
    Resolve visibility and enablement of one element.

    Args:
        element: Element to resolve (its own rule only, parents ignored)
        answers: Current answer set

    Returns:
        ElementState(visible, enabled). Elements without any rule are
        visible and enabled.
    """
    rule = visibility_rule(element)
    if isinstance(rule, ModernRule):
        return _resolve_modern(rule, answers)
    if isinstance(rule, LegacyRule):
        return _resolve_legacy(rule, answers)
    return ElementState()


def resolve_form_visibility(elements: List[Element], answers: Answers) -> Dict[str, ElementState]:
    """
    Resolve every element of a form, including section nesting.

    An element inside a section (parent_id) is hidden whenever any of
    its ancestors is hidden, independently of element order. Enablement
    is not inherited.
    """
    by_id = {element.id: element for element in elements}
    own = {element.id: resolve_visibility(element, answers) for element in elements}
    resolved: Dict[str, ElementState] = {}

    def ancestors_visible(element: Element) -> bool:
        seen = {element.id}
        parent_id = element.parent_id
        while parent_id is not None and parent_id in by_id:
            if parent_id in seen:
                logger.warning("Parent cycle through element %s, treating it as top-level", parent_id)
                return True
            seen.add(parent_id)
            if not own[parent_id].visible:
                return False
            parent_id = by_id[parent_id].parent_id
        return True

    for element in elements:
        state = own[element.id]
        if state.visible and not ancestors_visible(element):
            state = ElementState(visible=False, enabled=state.enabled)
        resolved[element.id] = state

    return resolved


_DESCRIPTION_VERBS = {
    "equals": "is",
    "not_equals": "is not",
    "contains": "contains",
    "not_contains": "does not contain",
}


def describe_logic(element: Element, elements: List[Element], language: str = "en") -> Optional[str]:
    """
    Human-readable summary of an element's modern logic.

    Example:
        "Employment" is "employed" OR "Employment" is "self_employed"

    Conditions pointing at unknown elements are left out. Returns None
    when there is nothing to describe.
    """
    if element.logic is None or not element.logic.conditions:
        return None

    by_id = {el.id: el for el in elements}
    parts = []
    for condition in element.logic.conditions:
        target = by_id.get(condition.target_id)
        if target is None:
            continue
        verb = _DESCRIPTION_VERBS.get(condition.operator)
        if verb is None:
            operator = parse_operator(condition.operator)
            verb = operator_label(operator, language).lower() if operator else condition.operator
        parts.append(f'"{resolve_text(target.label, language)}" {verb} "{condition.value}"')

    if not parts:
        return None

    joiner = Combinator.AND.value if element.logic.combinator == Combinator.AND else Combinator.OR.value
    return f" {joiner} ".join(parts)
