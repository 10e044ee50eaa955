"""
Condition Matcher: evaluates atomic comparisons against an answer set.

This is the leaf every other evaluator builds on (visibility, skip
logic). It is pure: it reads the answer set and returns a bool.

FAIL-OPEN DEFAULTS:
    - Unknown or missing operator  -> True
    - Unparseable numeric value    -> 0
    - Boolean answers are never empty and otherwise only support
      equals / not_equals, everything else on a boolean is False
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .coercion import is_empty, parse_bool, to_number, to_text
from .model import Answers, Condition
from .operators import Combinator, ConditionOperator, parse_operator

logger = logging.getLogger(__name__)


def _text_matcher(test: Callable[[str, str], bool], negate: bool = False) -> Callable[[object, str], bool]:
    def match(target: object, expected: str) -> bool:
        result = test(to_text(target).lower(), to_text(expected).lower())
        return not result if negate else result
    return match


def _numeric_matcher(test: Callable[[float, float], bool]) -> Callable[[object, str], bool]:
    def match(target: object, expected: str) -> bool:
        return test(to_number(target), to_number(expected))
    return match


_MATCHERS: Dict[ConditionOperator, Callable[[object, str], bool]] = {
    ConditionOperator.EQUALS: lambda target, expected: to_text(target) == to_text(expected),
    ConditionOperator.NOT_EQUALS: lambda target, expected: to_text(target) != to_text(expected),
    ConditionOperator.CONTAINS: _text_matcher(lambda a, b: b in a),
    ConditionOperator.NOT_CONTAINS: _text_matcher(lambda a, b: b in a, negate=True),
    ConditionOperator.STARTS_WITH: _text_matcher(lambda a, b: a.startswith(b)),
    ConditionOperator.ENDS_WITH: _text_matcher(lambda a, b: a.endswith(b)),
    ConditionOperator.NOT_STARTS_WITH: _text_matcher(lambda a, b: a.startswith(b), negate=True),
    ConditionOperator.NOT_ENDS_WITH: _text_matcher(lambda a, b: a.endswith(b), negate=True),
    ConditionOperator.IS_EMPTY: lambda target, expected: is_empty(target),
    ConditionOperator.IS_NOT_EMPTY: lambda target, expected: not is_empty(target),
    ConditionOperator.GREATER_THAN: _numeric_matcher(lambda a, b: a > b),
    ConditionOperator.LESS_THAN: _numeric_matcher(lambda a, b: a < b),
    ConditionOperator.GREATER_EQUAL: _numeric_matcher(lambda a, b: a >= b),
    ConditionOperator.LESS_EQUAL: _numeric_matcher(lambda a, b: a <= b),
}


def _match_boolean(operator: Optional[ConditionOperator], target: bool, expected: str) -> bool:
    """Checkbox answers: compare against "true"/"false", nothing else applies."""
    if operator is ConditionOperator.EQUALS:
        return target == parse_bool(expected)
    if operator is ConditionOperator.NOT_EQUALS:
        return target != parse_bool(expected)
    return False


def evaluate_condition(condition: Condition, answers: Answers) -> bool:
    """
    Evaluate one condition against the answer set.

    Args:
        condition: The comparison to apply
        answers: Field id -> answer mapping (never modified)

    Returns:
        True if the condition matches. Unknown operators match.
    """
    target = answers.get(condition.target_id)
    operator = parse_operator(condition.operator)

    if operator in (ConditionOperator.IS_EMPTY, ConditionOperator.IS_NOT_EMPTY):
        return _MATCHERS[operator](target, condition.value)

    if isinstance(target, bool):
        return _match_boolean(operator, target, condition.value)

    if operator is None:
        logger.debug(
            "Unknown operator %r in condition %s, treating as matched",
            condition.operator,
            condition.id,
        )
        return True

    return _MATCHERS[operator](target, condition.value)


def evaluate_conditions(conditions: List[Condition], combinator: str, answers: Answers) -> bool:
    """
    Combine conditions with AND/OR.

    An empty list never gates anything and returns True. Any combinator
    other than AND behaves as OR.
    """
    if not conditions:
        return True

    results = [evaluate_condition(condition, answers) for condition in conditions]

    if combinator == Combinator.AND:
        return all(results)
    return any(results)
