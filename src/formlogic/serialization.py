"""
Serialization helpers for form definitions (FormDefinition, Element, Condition, etc.).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Dicts use the camelCase keys of stored form definitions (targetId,
fieldId, decimalPlaces, skipRules, targetPageId, parentId, pageId,
minLength, maxLength, validationType), so definitions saved by the
designer load unchanged.

Optional attributes that are unset are left out of the dicts, the
designer never writes them either.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import yaml

from formlogic.model import (
    Calculation,
    CalculationOperand,
    CalculationStep,
    Condition,
    Element,
    FormDefinition,
    Logic,
    Option,
    Page,
    SkipRule,
    Validation,
)
from formlogic.operators import Combinator, OperandType, VisibilityAction


class FormDefinitionError(Exception):
    """Raised when a stored form definition cannot be loaded."""
    pass


def _require(d: Dict[str, Any], key: str, what: str) -> Any:
    try:
        return d[key]
    except (KeyError, TypeError):
        raise FormDefinitionError(f"{what} is missing required key '{key}'")


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def option_to_dict(o: Option) -> Dict[str, Any]:
    return {"id": o.id, "value": o.value, "label": o.label}


def option_from_dict(d: Dict[str, Any]) -> Option:
    return Option(id=d.get("id", ""), value=_require(d, "value", "Option"), label=d.get("label", ""))


def condition_to_dict(c: Condition) -> Dict[str, Any]:
    return _drop_none({
        "id": c.id,
        "targetId": c.target_id,
        "operator": c.operator,
        "value": c.value,
        "action": c.action,
    })


def condition_from_dict(d: Dict[str, Any]) -> Condition:
    value = d.get("value", "")
    return Condition(
        id=d.get("id", ""),
        target_id=_require(d, "targetId", "Condition"),
        operator=_require(d, "operator", "Condition"),
        value="" if value is None else str(value),
        action=d.get("action"),
    )


def logic_to_dict(lg: Logic | None) -> Dict[str, Any] | None:
    if lg is None:
        return None
    return {
        "combinator": lg.combinator,
        "conditions": [condition_to_dict(c) for c in lg.conditions],
        "action": lg.action,
    }


def logic_from_dict(d: Dict[str, Any] | None) -> Logic | None:
    if d is None:
        return None
    return Logic(
        combinator=d.get("combinator", Combinator.AND.value),
        conditions=[condition_from_dict(c) for c in d.get("conditions", [])],
        action=d.get("action") or VisibilityAction.SHOW.value,
    )


def operand_to_dict(o: CalculationOperand) -> Dict[str, Any]:
    if o.type == OperandType.FIELD:
        return {"type": o.type, "fieldId": o.field_id}
    return {"type": o.type, "value": o.value}


def operand_from_dict(d: Dict[str, Any]) -> CalculationOperand:
    t = _require(d, "type", "Calculation operand")
    if t == OperandType.FIELD:
        return CalculationOperand(type=t, field_id=_require(d, "fieldId", "Field operand"))
    if t == OperandType.CONSTANT:
        return CalculationOperand(type=t, value=d.get("value"))
    raise FormDefinitionError(f"Unsupported calculation operand type: {t}")


def calculation_to_dict(c: Calculation | None) -> Dict[str, Any] | None:
    if c is None:
        return None
    return _drop_none({
        "enabled": c.enabled,
        "formula": [
            _drop_none({"operand": operand_to_dict(s.operand), "operator": s.operator})
            for s in c.formula
        ],
        "decimalPlaces": c.decimal_places,
        "prefix": c.prefix,
        "suffix": c.suffix,
    })


def calculation_from_dict(d: Dict[str, Any] | None) -> Calculation | None:
    if d is None:
        return None
    return Calculation(
        enabled=bool(d.get("enabled", False)),
        formula=[
            CalculationStep(
                operand=operand_from_dict(_require(s, "operand", "Calculation step")),
                operator=s.get("operator"),
            )
            for s in d.get("formula", [])
        ],
        decimal_places=d.get("decimalPlaces"),
        prefix=d.get("prefix"),
        suffix=d.get("suffix"),
    )


def validation_to_dict(v: Validation | None) -> Dict[str, Any] | None:
    if v is None:
        return None
    return _drop_none({
        "min": v.min,
        "max": v.max,
        "minLength": v.min_length,
        "maxLength": v.max_length,
    })


def validation_from_dict(d: Dict[str, Any] | None) -> Validation | None:
    if d is None:
        return None
    return Validation(
        min=d.get("min"),
        max=d.get("max"),
        min_length=d.get("minLength"),
        max_length=d.get("maxLength"),
    )


def _list_or_none(items: Optional[List[Any]], convert) -> Optional[List[Any]]:
    if items is None:
        return None
    return [convert(item) for item in items]


def element_to_dict(e: Element) -> Dict[str, Any]:
    return _drop_none({
        "id": e.id,
        "type": e.type,
        "label": e.label,
        "required": e.required,
        "options": _list_or_none(e.options, option_to_dict),
        "conditions": _list_or_none(e.conditions, condition_to_dict),
        "logic": logic_to_dict(e.logic),
        "calculation": calculation_to_dict(e.calculation),
        "parentId": e.parent_id,
        "pageId": e.page_id,
        "content": e.content,
        "validation": validation_to_dict(e.validation),
        "validationType": e.validation_type,
    })


def element_from_dict(d: Dict[str, Any]) -> Element:
    return Element(
        id=_require(d, "id", "Element"),
        type=_require(d, "type", "Element"),
        label=d.get("label", ""),
        required=bool(d.get("required", False)),
        options=_list_or_none(d.get("options"), option_from_dict),
        conditions=_list_or_none(d.get("conditions"), condition_from_dict),
        logic=logic_from_dict(d.get("logic")),
        calculation=calculation_from_dict(d.get("calculation")),
        parent_id=d.get("parentId"),
        page_id=d.get("pageId"),
        content=d.get("content"),
        validation=validation_from_dict(d.get("validation")),
        validation_type=d.get("validationType"),
    )


def skip_rule_to_dict(r: SkipRule) -> Dict[str, Any]:
    return {
        "id": r.id,
        "conditions": [condition_to_dict(c) for c in r.conditions],
        "combinator": r.combinator,
        "targetPageId": r.target_page_id,
    }


def skip_rule_from_dict(d: Dict[str, Any]) -> SkipRule:
    return SkipRule(
        id=d.get("id", ""),
        target_page_id=_require(d, "targetPageId", "Skip rule"),
        conditions=[condition_from_dict(c) for c in d.get("conditions", [])],
        combinator=d.get("combinator", Combinator.AND.value),
    )


def page_to_dict(p: Page) -> Dict[str, Any]:
    return {"id": p.id, "label": p.label, "skipRules": [skip_rule_to_dict(r) for r in p.skip_rules]}


def page_from_dict(d: Dict[str, Any]) -> Page:
    return Page(
        id=_require(d, "id", "Page"),
        label=d.get("label", ""),
        skip_rules=[skip_rule_from_dict(r) for r in d.get("skipRules") or []],
    )


def form_to_dict(f: FormDefinition) -> Dict[str, Any]:
    return {
        "name": f.name,
        "elements": [element_to_dict(e) for e in f.elements],
        "pages": [page_to_dict(p) for p in f.pages],
        "metadata": f.metadata,
    }


def form_from_dict(d: Dict[str, Any]) -> FormDefinition:
    if not isinstance(d, dict):
        raise FormDefinitionError(f"Form definition must be a mapping, got {type(d).__name__}")
    f = FormDefinition(name=d.get("name", ""))
    f.elements = [element_from_dict(e) for e in d.get("elements", [])]
    f.pages = [page_from_dict(p) for p in d.get("pages", [])]
    f.metadata = d.get("metadata", {})
    return f


def form_to_json(f: FormDefinition) -> str:
    return json.dumps(form_to_dict(f), sort_keys=True, ensure_ascii=False)


def form_from_json(s: str) -> FormDefinition:
    d = json.loads(s)
    return form_from_dict(d)


def form_to_yaml(f: FormDefinition) -> str:
    return yaml.safe_dump(form_to_dict(f), allow_unicode=True)


def form_from_yaml(s: str) -> FormDefinition:
    d = yaml.safe_load(s)
    return form_from_dict(d)
