"""
Value coercion shared by the evaluators.

Answers arrive loosely typed (strings, numbers, booleans, lists of
option values). Every evaluator coerces them through these helpers:

    to_text       -> stringification used by string comparisons and piping
    to_number     -> best-effort numeric parse, never NaN
    is_empty      -> missing / None / "" / []
    resolve_text  -> plain or translatable label in one language
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"

# Leading numeric prefix, e.g. "12.5kg" -> 12.5, " -3" -> -3
_NUMBER_PREFIX_RE = re.compile(rf"^\s*({_NUMBER})")
_NUMBER_RE = re.compile(rf"\s*{_NUMBER}\s*")


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _float_text(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 0:
        # 1.5e-05 -> 0.000015
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-power - 1)}{digits}"
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def to_text(value: Any) -> str:
    """
    Stringify an answer the way stored form data expects.

    None -> "", True -> "true", 3.0 -> "3", ["a", "b"] -> "a,b".
    Small and huge floats use a short exponent: 1e-07 -> "1e-7".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    return str(value)


def to_number(value: Any) -> float:
    """
    Best-effort numeric parse.

    Numbers pass through; strings contribute their leading numeric
    prefix. Anything else (booleans, empty, unparseable text, NaN)
    yields 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return value
    match = _NUMBER_PREFIX_RE.match(to_text(value))
    if not match:
        return 0
    number = float(match.group(1))
    return number if math.isfinite(number) else 0


def parse_number(value: Any) -> Optional[float]:
    """Strict numeric parse: the whole value must be a number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and _NUMBER_RE.fullmatch(value):
        number = float(value)
        return number if math.isfinite(number) else None
    return None


def resolve_text(text: Any, language: str = "th") -> str:
    """
    Plain string, or the requested language of a translatable mapping.

    Falls back to "th", then to the first non-empty translation.
    """
    if text is None:
        return ""
    if isinstance(text, dict):
        for key in (language, "th"):
            if text.get(key):
                return text[key]
        for translation in text.values():
            if translation:
                return translation
        return ""
    return str(text)


def parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() == "true"
