"""
Example form builder used by the demo and tests.

Builds a three-page order form exercising every rule kind:
    - modern logic (delivery address shown for delivery orders)
    - legacy per-condition actions (gift message show/disable)
    - a calculated total with prefix and rounding
    - piping in a paragraph and in a label
    - a skip rule jumping over the delivery page for pickup orders
    - a quantity range checked on submission
"""
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
from formlogic.operators import Combinator, ConditionOperator, LegacyAction, VisibilityAction


def build_example_order_form(unit_price: float = 12.5, currency: str = "$") -> FormDefinition:
    form = FormDefinition(name="Example Order Form")
    form.metadata = {"source": "formlogic.examples"}

    form.pages = [
        Page(
            id="p_order",
            label="Order",
            skip_rules=[
                SkipRule(
                    id="skip_delivery",
                    combinator=Combinator.AND.value,
                    conditions=[
                        Condition(
                            id="c_pickup",
                            target_id="fulfilment",
                            operator=ConditionOperator.EQUALS.value,
                            value="pickup",
                        ),
                    ],
                    target_page_id="p_confirm",
                ),
            ],
        ),
        Page(id="p_delivery", label="Delivery"),
        Page(id="p_confirm", label="Confirm"),
    ]

    name = Element(id="name", type="text", label="Your name", required=True, page_id="p_order")

    product = Element(
        id="product",
        type="select",
        label="Product",
        required=True,
        page_id="p_order",
        options=[
            Option(id="o_apple", value="apple", label={"th": "แอปเปิล", "en": "Apple"}),
            Option(id="o_pear", value="pear", label={"th": "ลูกแพร์", "en": "Pear"}),
        ],
    )

    quantity = Element(
        id="quantity",
        type="number",
        label="Quantity",
        required=True,
        page_id="p_order",
        validation=Validation(min=1, max=99),
    )

    total = Element(
        id="total",
        type="number",
        label="Total",
        page_id="p_order",
        calculation=Calculation(
            enabled=True,
            formula=[
                CalculationStep(operand=CalculationOperand.reference("quantity"), operator="*"),
                CalculationStep(operand=CalculationOperand.constant(unit_price)),
            ],
            decimal_places=2,
            prefix=currency,
        ),
    )

    fulfilment = Element(
        id="fulfilment",
        type="radio",
        label="Delivery or pickup?",
        required=True,
        page_id="p_order",
        options=[
            Option(id="o_delivery", value="delivery", label="Delivery"),
            Option(id="o_pickup", value="pickup", label="Pickup"),
        ],
    )

    is_gift = Element(id="is_gift", type="checkbox", label="This is a gift", page_id="p_order")

    # Legacy model: shown for gifts, disabled for pickup orders
    gift_message = Element(
        id="gift_message",
        type="textarea",
        label="Gift message for {answer:name|the recipient}",
        page_id="p_order",
        conditions=[
            Condition(
                id="c_gift_show",
                target_id="is_gift",
                operator=ConditionOperator.EQUALS.value,
                value="true",
                action=LegacyAction.SHOW.value,
            ),
            Condition(
                id="c_gift_disable",
                target_id="fulfilment",
                operator=ConditionOperator.EQUALS.value,
                value="pickup",
                action=LegacyAction.DISABLE.value,
            ),
        ],
    )

    delivery_section = Element(
        id="delivery_section",
        type="section",
        label="Delivery details",
        page_id="p_delivery",
        logic=Logic(
            combinator=Combinator.AND.value,
            action=VisibilityAction.SHOW.value,
            conditions=[
                Condition(
                    id="c_delivery",
                    target_id="fulfilment",
                    operator=ConditionOperator.EQUALS.value,
                    value="delivery",
                ),
            ],
        ),
    )

    address = Element(
        id="address",
        type="textarea",
        label="Address",
        required=True,
        page_id="p_delivery",
        parent_id="delivery_section",
        validation=Validation(min_length=5),
    )

    summary = Element(
        id="summary",
        type="paragraph",
        label="Summary",
        page_id="p_confirm",
        content="Thanks {answer:name|friend}, you ordered {answer:quantity|0} x {answer:product}.",
    )

    form.elements = [
        name,
        product,
        quantity,
        total,
        fulfilment,
        is_gift,
        gift_message,
        delivery_section,
        address,
        summary,
    ]
    return form
