"""
Form Analyzer: optional diagnostics of stored form definitions.

This module provides lightweight analysis of FormDefinition objects:
    - Reference inventory (conditions, calculations, piping tokens)
    - Undefined and forward references
    - Reference cycles
    - Skip rules with unknown or non-forward targets
    - Operators outside the target element's whitelist

IMPORTANT: The evaluators never call this module and never depend on
its findings. It only produces read-only reports for callers that want
to check a definition before publishing it.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from formlogic.coercion import resolve_text
from formlogic.model import Condition, Element, FormDefinition
from formlogic.operators import OperandType, operators_for_type, parse_operator
from formlogic.piping import extract_piped_field_ids


def _element_references(element: Element) -> Set[str]:
    """Every element id the given element reads."""
    refs: Set[str] = set()

    conditions: List[Condition] = list(element.conditions or [])
    if element.logic is not None:
        conditions.extend(element.logic.conditions)
    refs.update(c.target_id for c in conditions)

    if element.calculation is not None:
        for step in element.calculation.formula:
            if step.operand.type == OperandType.FIELD and step.operand.field_id:
                refs.add(step.operand.field_id)

    for text in (element.label, element.content):
        if isinstance(text, dict):
            for translation in text.values():
                refs.update(extract_piped_field_ids(translation))
        else:
            refs.update(extract_piped_field_ids(resolve_text(text)))

    return refs


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


@dataclass
class FormReport:
    """Analysis report for a form definition."""

    form_name: str
    total_elements: int = 0
    total_pages: int = 0
    total_skip_rules: int = 0

    # References: element id -> ids it reads
    references: Dict[str, Set[str]] = field(default_factory=dict)
    undefined_references: Set[str] = field(default_factory=set)
    forward_references: List[str] = field(default_factory=list)  # "consumer -> target"
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    # Rule models in use
    legacy_rule_elements: List[str] = field(default_factory=list)
    modern_rule_elements: List[str] = field(default_factory=list)
    calculated_elements: List[str] = field(default_factory=list)

    # Rule problems
    unknown_operators: List[str] = field(default_factory=list)
    mismatched_operators: List[str] = field(default_factory=list)
    invalid_skip_targets: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _check_conditions(report: FormReport, owner: str, conditions: List[Condition],
                      element_by_id: Dict[str, Element]) -> None:
    for condition in conditions:
        operator = parse_operator(condition.operator)
        if operator is None:
            report.unknown_operators.append(f"{owner}: {condition.operator}")
            continue
        target = element_by_id.get(condition.target_id)
        if target is not None and operator not in operators_for_type(target.type):
            report.mismatched_operators.append(
                f"{owner}: {operator.value} on {target.type} '{target.id}'"
            )


def analyze_form(form: FormDefinition) -> FormReport:
    """
    Perform analysis of a FormDefinition.

    Checks for:
    - Undefined, forward and cyclic references between elements
    - Skip rules targeting unknown pages or pages not after their own
    - Unknown operators and operators the designer would not offer for
      the target element's type

    Returns a FormReport with findings and warnings.
    """
    report = FormReport(form_name=form.name)

    report.total_elements = len(form.elements)
    report.total_pages = len(form.pages)
    report.total_skip_rules = sum(len(p.skip_rules) for p in form.pages)

    element_by_id = {e.id: e for e in form.elements}
    position = {e.id: i for i, e in enumerate(form.elements)}

    # =========================================================================
    # 1. REFERENCES
    # =========================================================================

    graph: Dict[str, List[str]] = defaultdict(list)

    for element in form.elements:
        refs = _element_references(element)
        report.references[element.id] = refs

        for ref in sorted(refs):
            if ref not in element_by_id:
                report.undefined_references.add(ref)
                continue
            graph[element.id].append(ref)
            if position[ref] >= position[element.id]:
                report.forward_references.append(f"{element.id} -> {ref}")

        if element.logic is not None:
            report.modern_rule_elements.append(element.id)
            _check_conditions(report, element.id, element.logic.conditions, element_by_id)
        elif element.conditions:
            report.legacy_rule_elements.append(element.id)
            _check_conditions(report, element.id, element.conditions, element_by_id)

        if element.calculation is not None and element.calculation.enabled:
            report.calculated_elements.append(element.id)

    visited: Set[str] = set()
    for element_id in list(graph.keys()):
        if element_id not in visited:
            cycle = _find_cycles_dfs(graph, element_id, visited, set(), [])
            if cycle:
                report.has_cycles = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 2. SKIP RULES
    # =========================================================================

    page_ids = form.page_ids()
    for page in form.pages:
        later = set(form.pages_after(page.id))
        for rule in page.skip_rules:
            _check_conditions(report, f"{page.id}/{rule.id}", rule.conditions, element_by_id)
            for condition in rule.conditions:
                if condition.target_id not in element_by_id:
                    report.undefined_references.add(condition.target_id)
            if rule.target_page_id not in page_ids:
                report.invalid_skip_targets.append(f"{page.id}/{rule.id} -> {rule.target_page_id} (unknown page)")
            elif rule.target_page_id not in later:
                report.invalid_skip_targets.append(f"{page.id}/{rule.id} -> {rule.target_page_id} (not a later page)")

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.undefined_references:
        report.add_warning(
            f"Undefined references: {', '.join(sorted(report.undefined_references))}"
        )

    if report.forward_references:
        report.add_warning(
            f"Forward references: {', '.join(report.forward_references)}"
        )

    if report.has_cycles:
        report.add_warning(
            f"Reference cycle detected: {' -> '.join(report.cycle_example)}"
        )

    if report.unknown_operators:
        report.add_warning(
            f"Unknown operators (always match): {', '.join(report.unknown_operators)}"
        )

    if report.mismatched_operators:
        report.add_warning(
            f"Operators not offered for target type: {', '.join(report.mismatched_operators)}"
        )

    if report.invalid_skip_targets:
        report.add_warning(
            f"Invalid skip targets: {', '.join(report.invalid_skip_targets)}"
        )

    return report
