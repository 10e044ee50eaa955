"""
Skip-Logic Resolver: rule-driven jumps between pages.

A page carries an ordered list of skip rules. The first rule whose
conditions match AND whose target is a valid page decides the jump.
None is not a failure: it means "continue to the next page".
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .conditions import evaluate_conditions
from .model import Answers, FormDefinition, SkipRule

logger = logging.getLogger(__name__)


def evaluate_skip_rules(
    rules: Optional[List[SkipRule]],
    answers: Answers,
    valid_page_ids: Iterable[str],
) -> Optional[str]:
    """
    First-match-wins evaluation of a page's skip rules.

    Args:
        rules: Ordered rules (None or empty means no jump)
        answers: Current answer set
        valid_page_ids: Pages a rule may target; other targets are skipped

    Returns:
        Target page id, or None to continue sequentially.
    """
    if not rules:
        return None

    valid = set(valid_page_ids)
    for rule in rules:
        if not evaluate_conditions(rule.conditions, rule.combinator, answers):
            continue
        if rule.target_page_id in valid:
            return rule.target_page_id
        logger.debug("Skip rule %s targets invalid page %r, ignoring", rule.id, rule.target_page_id)

    return None


def next_page_id(form: FormDefinition, current_page_id: str, answers: Answers) -> Optional[str]:
    """
    Page to show after the current one.

    Skip rules may only jump forward; without a matching rule the next
    sequential page follows. Returns None after the last page or for an
    unknown page.
    """
    page = form.get_page(current_page_id)
    if page is None:
        return None

    later = form.pages_after(current_page_id)
    target = evaluate_skip_rules(page.skip_rules, answers, later)
    if target is not None:
        return target
    return later[0] if later else None
