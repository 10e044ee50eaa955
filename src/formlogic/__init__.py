"""
Form Logic Engine Package

Pure evaluators deciding, for a form definition and the current answers:
    - which elements are visible / enabled       (visibility)
    - the value of calculated fields             (calculation)
    - text with recalled answers                 (piping)
    - the page to jump to                        (skip_logic)
    - which answers a submission must fix        (validation)

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Rendering
    - Persistence
    - Network access

Every evaluator is a pure function of its inputs. It never mutates the
form definition or the answer set and keeps no state between calls, so
preview, renderer and server-side validation always agree.
"""

from .calculation import calculate_value, format_calculated_value
from .conditions import evaluate_condition, evaluate_conditions
from .engine import FormEvaluation, evaluate_form, missing_required_fields
from .piping import extract_piped_field_ids, has_piping, resolve_piping
from .skip_logic import evaluate_skip_rules, next_page_id
from .validation import validate_answer, validate_answers
from .visibility import ElementState, resolve_form_visibility, resolve_visibility

__version__ = "0.1.0"

__all__ = [
    "evaluate_condition",
    "evaluate_conditions",
    "resolve_visibility",
    "resolve_form_visibility",
    "ElementState",
    "calculate_value",
    "format_calculated_value",
    "extract_piped_field_ids",
    "resolve_piping",
    "has_piping",
    "evaluate_skip_rules",
    "next_page_id",
    "evaluate_form",
    "missing_required_fields",
    "validate_answer",
    "validate_answers",
    "FormEvaluation",
]
