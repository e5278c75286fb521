"""Order assembler - priced cart lines to one order row per unit.

A line with quantity N becomes N rows. The checkout's shipping charge is
carried by exactly one row (the first unit of the first line); every row
of one checkout shares a ``checkout_id``.

Rows are created one at a time. There is no surrounding transaction: if
a create fails, the rows already written stay and the result says which
unit failed.
"""

from collections.abc import Sequence
from decimal import Decimal

from printshop.infra.logging import get_logger
from printshop.models import new_id
from printshop.schemas.cart import CartLine
from printshop.schemas.fulfillment import Fulfillment, delivery_address, delivery_location
from printshop.schemas.order import AssemblyFailure, AssemblyResult, CustomerInfo, NewOrder
from printshop.services.persistence_gateway import OrderGateway

logger = get_logger(__name__)


class CheckoutValidationError(ValueError):
    """Raised before any order row is written."""


class OrderAssembler:
    """Turns a cart into persisted order rows."""

    def __init__(self, gateway: OrderGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def validate(lines: Sequence[CartLine], customer: CustomerInfo) -> None:
        if not lines:
            raise CheckoutValidationError("Cart is empty")
        if not customer.name.strip() or not str(customer.email).strip():
            raise CheckoutValidationError("Customer name and email are required")
        for line in lines:
            if line.quantity < 1:
                raise CheckoutValidationError(f"Invalid quantity {line.quantity} for {line.product_id}")

    def build_orders(
        self,
        lines: Sequence[CartLine],
        customer: CustomerInfo,
        fulfillment: Fulfillment,
        shipping_cost: Decimal,
        checkout_id: str,
        notes: str | None = None,
    ) -> list[tuple[int, int, NewOrder]]:
        """Expand lines into (line_index, unit_index, row) in creation order."""
        location = delivery_location(fulfillment)
        address = delivery_address(fulfillment)
        rows: list[tuple[int, int, NewOrder]] = []

        for line_index, line in enumerate(lines):
            for unit_index in range(line.quantity):
                carries_shipping = line_index == 0 and unit_index == 0
                shipping = shipping_cost if carries_shipping else Decimal("0")
                rows.append(
                    (
                        line_index,
                        unit_index,
                        NewOrder(
                            checkout_id=checkout_id,
                            product_id=line.product_id,
                            customer_name=customer.name,
                            customer_email=str(customer.email),
                            customer_phone=customer.phone,
                            fulfillment_type=fulfillment.mode,
                            delivery_location=location,
                            delivery_address=address,
                            shipping_cost=shipping,
                            product_price=line.unit_price,
                            total_amount=line.unit_price + shipping,
                            selected_color=", ".join(line.selected_colors) or None,
                            selected_material=line.selected_material,
                            selected_size=line.selected_size,
                            customization_details=line.customization_details,
                            notes=notes,
                        ),
                    )
                )
        return rows

    async def assemble(
        self,
        lines: Sequence[CartLine],
        customer: CustomerInfo,
        fulfillment: Fulfillment,
        shipping_cost: Decimal,
        notes: str | None = None,
    ) -> AssemblyResult:
        """Create every unit's order row, stopping at the first failure.

        Raises:
            CheckoutValidationError: If the cart or customer is invalid
                (nothing is written)
        """
        self.validate(lines, customer)

        checkout_id = new_id()
        rows = self.build_orders(lines, customer, fulfillment, shipping_cost, checkout_id, notes)
        result = AssemblyResult(checkout_id=checkout_id, expected_units=len(rows))

        logger.info(
            "Assembling checkout",
            checkout_id=checkout_id,
            lines=len(lines),
            units=len(rows),
            fulfillment_type=fulfillment.mode,
            shipping=str(shipping_cost),
        )

        for line_index, unit_index, new_order in rows:
            try:
                order = await self.gateway.create_order(new_order)
            except Exception as e:
                logger.error(
                    "Order creation failed, checkout is partial",
                    checkout_id=checkout_id,
                    created=len(result.orders),
                    expected=len(rows),
                    line_index=line_index,
                    unit_index=unit_index,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.failure = AssemblyFailure(
                    line_index=line_index,
                    unit_index=unit_index,
                    product_id=new_order.product_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return result
            result.orders.append(order)

        logger.info(
            "Checkout assembled",
            checkout_id=checkout_id,
            order_numbers=result.order_numbers,
        )
        return result
