"""Order aggregate — the immutable record of a completed checkout.

Each line snapshots the product price at checkout, so the order total never
follows later catalogue price changes.

State machines:
    order_status:   PENDING → PROCESSING → SHIPPED → DELIVERED
    payment_status: PENDING → PAID | FAILED, FAILED → PAID (retry)

Checkout only ever creates orders in PENDING/PENDING. The transitions exist
for fulfilment and payment collaborators.
"""

import json
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.order.events import (
    OrderDelivered,
    OrderPlaced,
    OrderProcessing,
    OrderShipped,
    PaymentRecorded,
)
from storefront.utils.query import fetch_all


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}

_VALID_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.PAID},
    PaymentStatus.PAID: set(),  # Terminal
}

_CENT = Decimal("0.01")


def compute_total(lines) -> float:
    """Sum of price × quantity, rounded to cents only once at the end."""
    total = sum((Decimal(str(line["price"])) * line["quantity"] for line in lines), Decimal("0"))
    return float(total.quantize(_CENT, rounding=ROUND_HALF_UP))


@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_price = Float(required=True, min_value=0.0)
    shipping_address = String(required=True, max_length=500)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines_data, shipping_address):
        """Create a pending order from price-snapshotted lines.

        Args:
            user_id: The user checking out.
            lines_data: List of dicts with product_id, quantity, price, in
                        cart order.
            shipping_address: Free-form delivery address.
        """
        if not lines_data:
            raise ValidationError({"lines": ["An order needs at least one line"]})
        if not shipping_address or not shipping_address.strip():
            raise ValidationError({"shipping_address": ["Shipping address is required"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            total_price=compute_total(lines_data),
            shipping_address=shipping_address.strip(),
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines_data:
            order.add_lines(OrderLine(product_id=line["product_id"], quantity=line["quantity"], price=line["price"]))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                lines=json.dumps(
                    [
                        {"product_id": str(line["product_id"]), "quantity": line["quantity"], "price": line["price"]}
                        for line in lines_data
                    ]
                ),
                total_price=order.total_price,
                shipping_address=order.shipping_address,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.order_status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"order_status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _transition_to(self, target_status):
        self._assert_can_transition(target_status)
        now = datetime.now(UTC)
        self.order_status = target_status.value
        self.updated_at = now
        return now

    # -------------------------------------------------------------------
    # Fulfilment
    # -------------------------------------------------------------------
    def mark_processing(self):
        now = self._transition_to(OrderStatus.PROCESSING)
        self.raise_(OrderProcessing(order_id=str(self.id), started_at=now))

    def record_shipment(self):
        now = self._transition_to(OrderStatus.SHIPPED)
        self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))

    def record_delivery(self):
        now = self._transition_to(OrderStatus.DELIVERED)
        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_payment(self, payment_status):
        """Record a payment outcome reported by the payment collaborator."""
        current = PaymentStatus(self.payment_status)
        try:
            target = PaymentStatus(payment_status)
        except ValueError as exc:
            raise ValidationError({"payment_status": [f"Unknown payment status: {payment_status}"]}) from exc

        if target not in _VALID_PAYMENT_TRANSITIONS[current]:
            raise ValidationError({"payment_status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now
        self.raise_(
            PaymentRecorded(
                order_id=str(self.id),
                previous_status=current.value,
                payment_status=target.value,
                recorded_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def placed_by(self, user_id) -> list[Order]:
        """Orders placed by ``user_id``, newest first."""
        return fetch_all(self._dao.query.filter(user_id=str(user_id)).order_by("-created_at"))
