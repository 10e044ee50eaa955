"""
Form evaluation pass: (definition, answers) -> decisions.

Hosts (design-time preview, runtime renderer, server-side validator)
re-run this pass whenever the answer set changes. It combines the four
evaluators and returns fresh output on every call; nothing is cached
and neither input is modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .calculation import calculate_value, format_calculated_value
from .coercion import is_empty, resolve_text
from .config import EngineSettings
from .model import Answers, FormDefinition
from .piping import has_piping, resolve_piping
from .skip_logic import evaluate_skip_rules
from .visibility import ElementState, resolve_form_visibility


@dataclass
class FormEvaluation:
    """
    Decisions for one answer set.

    Properties:
        elements: Element id -> ElementState (section nesting applied)
        calculated: Element id -> calculated value (enabled calculations only)
        formatted: Element id -> formatted calculated value
        texts: Element id -> piping-resolved label, for labels with tokens
        contents: Element id -> piping-resolved content, for content with tokens
        skip_targets: Page id -> target page, or None to continue sequentially
    """

    elements: Dict[str, ElementState] = field(default_factory=dict)
    calculated: Dict[str, Union[int, float]] = field(default_factory=dict)
    formatted: Dict[str, str] = field(default_factory=dict)
    texts: Dict[str, str] = field(default_factory=dict)
    contents: Dict[str, str] = field(default_factory=dict)
    skip_targets: Dict[str, Optional[str]] = field(default_factory=dict)

    def is_visible(self, element_id: str) -> bool:
        state = self.elements.get(element_id)
        return state.visible if state is not None else True

    def is_enabled(self, element_id: str) -> bool:
        state = self.elements.get(element_id)
        return state.enabled if state is not None else True


def evaluate_form(
    form: FormDefinition,
    answers: Answers,
    settings: Optional[EngineSettings] = None,
) -> FormEvaluation:
    """
    Run every evaluator over a form.

    Args:
        form: Stored form definition
        answers: Current answer set
        settings: Language / separator settings (defaults if omitted)

    Returns:
        FormEvaluation with visibility, calculations, piped text and
        skip targets. Skip rules are only allowed to target pages after
        their own page.
    """
    settings = settings or EngineSettings()
    evaluation = FormEvaluation()

    evaluation.elements = resolve_form_visibility(form.elements, answers)

    for element in form.elements:
        calculation = element.calculation
        if calculation is not None and calculation.enabled:
            value = calculate_value(calculation, answers)
            evaluation.calculated[element.id] = value
            evaluation.formatted[element.id] = format_calculated_value(value, calculation)

        label = resolve_text(element.label, settings.language)
        if has_piping(label):
            evaluation.texts[element.id] = resolve_piping(
                label, answers, form.elements, settings.language, settings.list_separator
            )

        content = resolve_text(element.content, settings.language)
        if has_piping(content):
            evaluation.contents[element.id] = resolve_piping(
                content, answers, form.elements, settings.language, settings.list_separator
            )

    for page in form.pages:
        evaluation.skip_targets[page.id] = evaluate_skip_rules(
            page.skip_rules, answers, form.pages_after(page.id)
        )

    return evaluation


def missing_required_fields(
    form: FormDefinition,
    answers: Answers,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    """
    Required elements the answer set leaves empty.

    Hidden elements (including children of hidden sections) and layout
    elements are never required.
    """
    settings = settings or EngineSettings()
    states = resolve_form_visibility(form.elements, answers)

    missing = []
    for element in form.elements:
        if not element.required or element.type in settings.layout_types:
            continue
        if not states[element.id].visible:
            continue
        if is_empty(answers.get(element.id)):
            missing.append(element.id)
    return missing
