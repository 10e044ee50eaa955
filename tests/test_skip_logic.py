"""
Tests for the Skip-Logic Resolver.

Tests verify:
    - First-match-wins ordering
    - None as the "continue sequentially" sentinel
    - Targets outside the valid page set are skipped
    - Forward-only navigation through next_page_id
"""

from formlogic.model import Condition, FormDefinition, Page, SkipRule
from formlogic.skip_logic import evaluate_skip_rules, next_page_id


def rule(rid, target, value="x", combinator="AND", conditions=None):
    if conditions is None:
        conditions = [Condition(id=f"{rid}_c", target_id="A", operator="equals", value=value)]
    return SkipRule(id=rid, target_page_id=target, conditions=conditions, combinator=combinator)


PAGES = ["p1", "p2", "p3", "p4"]


class TestEvaluateSkipRules:
    """Test rule evaluation."""

    def test_no_rules(self):
        assert evaluate_skip_rules(None, {"A": "x"}, PAGES) is None
        assert evaluate_skip_rules([], {"A": "x"}, PAGES) is None

    def test_first_match_wins(self):
        rules = [rule("r1", "p3"), rule("r2", "p4")]
        assert evaluate_skip_rules(rules, {"A": "x"}, PAGES) == "p3"

    def test_later_rule_when_first_fails(self):
        rules = [rule("r1", "p3", value="y"), rule("r2", "p4")]
        assert evaluate_skip_rules(rules, {"A": "x"}, PAGES) == "p4"

    def test_no_match_returns_none(self):
        rules = [rule("r1", "p3", value="y")]
        assert evaluate_skip_rules(rules, {"A": "x"}, PAGES) is None

    def test_invalid_target_is_skipped(self):
        rules = [rule("r1", "gone"), rule("r2", "p4")]
        assert evaluate_skip_rules(rules, {"A": "x"}, PAGES) == "p4"

    def test_rule_without_conditions_always_matches(self):
        rules = [rule("r1", "p2", conditions=[])]
        assert evaluate_skip_rules(rules, {}, PAGES) == "p2"

    def test_or_combinator(self):
        conditions = [
            Condition(id="c1", target_id="A", operator="equals", value="y"),
            Condition(id="c2", target_id="B", operator="is_not_empty", value=""),
        ]
        rules = [rule("r1", "p4", combinator="OR", conditions=conditions)]
        assert evaluate_skip_rules(rules, {"B": "filled"}, PAGES) == "p4"


class TestNextPageId:
    """Test forward navigation."""

    def build(self):
        form = FormDefinition(name="Nav")
        form.pages = [
            Page(id="p1", skip_rules=[rule("back", "p1"), rule("jump", "p3")]),
            Page(id="p2"),
            Page(id="p3", skip_rules=[rule("to_p2", "p2")]),
        ]
        return form

    def test_skip_rule_jump(self):
        assert next_page_id(self.build(), "p1", {"A": "x"}) == "p3"

    def test_sequential_without_match(self):
        assert next_page_id(self.build(), "p1", {"A": "nope"}) == "p2"

    def test_backward_target_is_ignored(self):
        """A rule pointing at an earlier page never fires."""
        assert next_page_id(self.build(), "p3", {"A": "x"}) is None

    def test_unknown_page(self):
        assert next_page_id(self.build(), "zzz", {}) is None
