"""
Engine settings.

The evaluators are pure functions: every setting is passed explicitly,
there is no global configuration. EngineSettings bundles the values a
host usually wants to keep consistent between preview, renderer and
server-side validation, and can be loaded from a YAML file:

    language: en
    list_separator: " / "
    layout_types: [section, paragraph, image]
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, FrozenSet

import yaml

from .operators import ElementType
from .piping import DEFAULT_SEPARATOR


class SettingsError(Exception):
    """Raised when a settings file cannot be turned into EngineSettings."""
    pass


_LAYOUT_TYPES = frozenset({
    ElementType.SECTION.value,
    ElementType.PARAGRAPH.value,
    ElementType.IMAGE.value,
})


@dataclass(frozen=True)
class EngineSettings:
    """
    Properties:
        language: Language used for translatable labels ("th" is the
            stored forms' default language)
        list_separator: Joiner for piped multi-select answers
        layout_types: Element types that never hold an answer and are
            skipped by required-field checks
    """

    language: str = "th"
    list_separator: str = DEFAULT_SEPARATOR
    layout_types: FrozenSet[str] = field(default_factory=lambda: _LAYOUT_TYPES)


def settings_from_dict(data: Dict[str, Any]) -> EngineSettings:
    known = {f.name for f in fields(EngineSettings)}
    unknown = set(data) - known
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")

    values = dict(data)
    if "layout_types" in values:
        values["layout_types"] = frozenset(values["layout_types"] or [])
    return EngineSettings(**values)


def load_settings(path: str) -> EngineSettings:
    """Read EngineSettings from a YAML file. An empty file yields defaults."""
    with open(path, encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid settings file '{path}': {e}")

    if data is None:
        return EngineSettings()
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file '{path}' must contain a mapping")
    return settings_from_dict(data)
