"""
Calculation Evaluator: folds a formula into a numeric field value.

Formulas are a flat list of steps, evaluated strictly left-to-right
with no operator precedence and no parentheses:

    [10] [- qty] [* 2]      with qty = 3
    10   -> 10 - 3 = 7 -> 7 * 2 = 14

Stored formulas attach operators in one of two ways:

    leading   the first step has no operator, every later step carries
              the operator joining it to the running result
    trailing  each step's operator joins it to the NEXT step, the last
              step carries none (what the form designer writes)

A multi-step formula whose first step has no operator is leading;
anything else is folded as trailing.

SAFE DEFAULTS:
    - Disabled calculation or empty formula -> 0
    - Missing / non-numeric field value     -> 0
    - Division or modulo by 0               -> 0
    - Overflow to inf / nan                 -> 0
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from .coercion import to_number, to_text
from .model import Answers, Calculation, CalculationOperand
from .operators import CalculationOperator, OperandType

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _operand_value(operand: CalculationOperand, answers: Answers) -> Number:
    if operand.type == OperandType.FIELD:
        if operand.field_id is None:
            return 0
        return to_number(answers.get(operand.field_id))
    return to_number(operand.value)


def _apply(operator: Optional[str], result: Number, operand: Number) -> Number:
    if operator == CalculationOperator.ADD:
        return result + operand
    if operator == CalculationOperator.SUBTRACT:
        return result - operand
    if operator == CalculationOperator.MULTIPLY:
        return result * operand
    if operator == CalculationOperator.DIVIDE:
        return result / operand if operand != 0 else 0
    if operator == CalculationOperator.MODULO:
        # truncated remainder: sign follows the dividend
        return math.fmod(result, operand) if operand != 0 else 0
    logger.debug("Unsupported calculation operator %r, keeping running result", operator)
    return result


def _round_half_away(value: Number, places: int) -> Number:
    factor = 10 ** places
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def calculate_value(calculation: Calculation, answers: Answers) -> Number:
    """
    Evaluate a calculation against the answer set.

    Args:
        calculation: Formula definition
        answers: Current answer set (never modified)

    Returns:
        The folded result, rounded to decimal_places when set.
    """
    if not calculation.enabled or not calculation.formula:
        return 0

    formula = calculation.formula
    leading = formula[0].operator is None and len(formula) > 1

    result = _operand_value(formula[0].operand, answers)
    pending = formula[0].operator

    for step in formula[1:]:
        value = _operand_value(step.operand, answers)
        operator = step.operator if leading else pending
        # no operator between steps: the next operand replaces the result
        result = value if operator is None else _apply(operator, result, value)
        pending = step.operator

    if not math.isfinite(result):
        logger.debug("Calculation overflowed to %r, using 0", result)
        return 0

    if calculation.decimal_places is not None:
        result = _round_half_away(result, calculation.decimal_places)
        if result == 0:
            result = 0.0  # no negative zero

    return result


def format_calculated_value(value: Number, calculation: Calculation) -> str:
    """prefix + value + suffix, fixed to decimal_places when set."""
    prefix = calculation.prefix or ""
    suffix = calculation.suffix or ""
    if calculation.decimal_places is not None:
        formatted = f"{value:.{calculation.decimal_places}f}"
    else:
        formatted = to_text(float(value))
    return f"{prefix}{formatted}{suffix}"
