"""
Demo: Analyze the example order form and evaluate it for a few answer sets.
"""

from formlogic.analyzer import analyze_form
from formlogic.config import EngineSettings
from formlogic.engine import evaluate_form, missing_required_fields
from formlogic.examples import build_example_order_form
from formlogic.serialization import form_to_yaml
from formlogic.validation import validate_answers


def print_report(report):
    """Pretty-print a FormReport."""
    print()
    print("=" * 70)
    print(f"FORM ANALYSIS REPORT: {report.form_name}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Elements:        {report.total_elements}")
    print(f"  Total Pages:           {report.total_pages}")
    print(f"  Total Skip Rules:      {report.total_skip_rules}")
    print()

    print("🔗 REFERENCES")
    for element_id, refs in report.references.items():
        if refs:
            print(f"    {element_id} reads {', '.join(sorted(refs))}")
    print(f"  Undefined References:  {report.undefined_references if report.undefined_references else 'None'}")
    print(f"  Has Cycles:            {'YES' if report.has_cycles else 'NO'}")
    if report.has_cycles and report.cycle_example:
        print(f"    Example: {' -> '.join(report.cycle_example)}")
    print()

    print("📐 RULE MODELS")
    print(f"  Modern Logic:          {report.modern_rule_elements}")
    print(f"  Legacy Conditions:     {report.legacy_rule_elements}")
    print(f"  Calculated:            {report.calculated_elements}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Form looks clean!")
    print()


def print_evaluation(form, answers, settings):
    result = evaluate_form(form, answers, settings)
    print(f"Answers: {answers}")
    for element in form.elements:
        state = result.elements[element.id]
        flags = ("visible" if state.visible else "hidden") + ("" if state.enabled else ", disabled")
        print(f"  {element.id:<18} {flags}")
    for element_id, text in result.formatted.items():
        print(f"  = {element_id}: {text}")
    for element_id, text in {**result.texts, **result.contents}.items():
        print(f"  > {element_id}: {text}")
    print(f"  Skip targets:  {result.skip_targets}")
    print(f"  Missing:       {missing_required_fields(form, answers, settings)}")
    invalid = {element_id: code.value for element_id, code in validate_answers(form, answers, settings).items()}
    print(f"  Invalid:       {invalid}")
    print()


if __name__ == "__main__":
    form = build_example_order_form()
    settings = EngineSettings(language="en")

    print_report(analyze_form(form))

    print_evaluation(form, {"name": "Ann", "product": "apple", "quantity": "3", "fulfilment": "delivery"}, settings)
    print_evaluation(form, {"name": "Bo", "product": "pear", "quantity": 2, "fulfilment": "pickup", "is_gift": True}, settings)

    # Also save to YAML for inspection
    with open("example_form_output.yaml", "w", encoding="utf-8") as f:
        f.write(form_to_yaml(form))
    print("✅ Form exported to example_form_output.yaml")
