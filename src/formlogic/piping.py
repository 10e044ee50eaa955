"""
Piping Resolver: recalls earlier answers inside display text.

Token grammar:
    {answer:<fieldId>}
    {answer:<fieldId>|<fallback>}

    fieldId  -> any run of characters except "}" and "|"
    fallback -> any run of characters except "}"
    Both are trimmed of surrounding whitespace.

Example:
    "Thanks {answer:name|friend}, you chose {answer:fruit}"
    with {"name": "Ann", "fruit": "a"} and fruit option a -> "Apple"
    -> "Thanks Ann, you chose Apple"

The token pattern is compiled once and only used through finditer /
sub / search, which keep no scan position between calls.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .coercion import is_empty, resolve_text, to_text
from .model import Answers, AnswerValue, Element

PIPE_PATTERN = re.compile(r"\{answer:([^}|]+)(?:\|([^}]*))?\}")

DEFAULT_SEPARATOR = ", "


def has_piping(text: Optional[str]) -> bool:
    """Cheap check used to skip resolution of static text."""
    if not text:
        return False
    return PIPE_PATTERN.search(text) is not None


def extract_piped_field_ids(text: Optional[str]) -> List[str]:
    """
    Field ids referenced by the text.

    Returns:
        Distinct ids in order of first appearance.
    """
    if not text:
        return []
    ids: List[str] = []
    for match in PIPE_PATTERN.finditer(text):
        field_id = match.group(1).strip()
        if field_id not in ids:
            ids.append(field_id)
    return ids


def _option_label(element: Optional[Element], value: AnswerValue, language: str) -> Optional[str]:
    if element is None or not element.options:
        return None
    option = element.get_option_by_value(to_text(value))
    if option is None:
        return None
    return resolve_text(option.label, language)


def _render_value(
    value: AnswerValue,
    element: Optional[Element],
    language: str,
    separator: str,
) -> str:
    if isinstance(value, (list, tuple)):
        labels = []
        for entry in value:
            label = _option_label(element, entry, language)
            labels.append(label if label is not None else to_text(entry))
        return separator.join(labels)

    label = _option_label(element, value, language)
    if label is not None:
        return label
    return to_text(value)


def resolve_piping(
    text: Optional[str],
    answers: Answers,
    elements: Optional[List[Element]] = None,
    language: str = "th",
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """
    Substitute every piping token in the text.

    Args:
        text: Text containing tokens
        answers: Current answer set
        elements: Form elements, used to show option labels instead of
            raw option values (optional)
        language: Language picked from translatable option labels
        separator: Joiner for multi-select answers

    Returns:
        The text with each token replaced by the answer, its option
        label(s), the token's fallback, or "" when nothing applies.
    """
    if not text:
        return ""

    by_id: Dict[str, Element] = {el.id: el for el in elements} if elements else {}

    def substitute(match: re.Match) -> str:
        field_id = match.group(1).strip()
        fallback = match.group(2)
        value = answers.get(field_id)

        if is_empty(value):
            return fallback.strip() if fallback else ""
        return _render_value(value, by_id.get(field_id), language, separator)

    return PIPE_PATTERN.sub(substitute, text)
