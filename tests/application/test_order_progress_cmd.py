"""Application tests for fulfilment and payment commands."""

import pytest
from factories import add_product, add_to_cart
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.ordering.order.fulfillment import MarkProcessing, RecordDelivery, RecordPayment, RecordShipment
from storefront.ordering.order.order import Order, OrderStatus, PaymentStatus
from storefront.ordering.order.placement import PlaceOrder


@pytest.fixture()
def order_id():
    add_product()
    add_to_cart("user-001", "prod1", 1)
    return current_domain.process(PlaceOrder(user_id="user-001", shipping_address="1 Main St"), asynchronous=False)


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestFulfilmentCommands:
    def test_order_moves_through_fulfilment(self, order_id):
        for command in (MarkProcessing, RecordShipment, RecordDelivery):
            current_domain.process(command(order_id=order_id), asynchronous=False)
        assert _order(order_id).order_status == OrderStatus.DELIVERED.value

    def test_out_of_order_transition_rejected(self, order_id):
        with pytest.raises(ValidationError):
            current_domain.process(RecordDelivery(order_id=order_id), asynchronous=False)
        assert _order(order_id).order_status == OrderStatus.PENDING.value

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(MarkProcessing(order_id="no-such-order"), asynchronous=False)


class TestRecordPaymentCommand:
    def test_record_paid(self, order_id):
        current_domain.process(
            RecordPayment(order_id=order_id, payment_status=PaymentStatus.PAID.value),
            asynchronous=False,
        )
        assert _order(order_id).payment_status == PaymentStatus.PAID.value

    def test_failed_then_paid(self, order_id):
        for status in (PaymentStatus.FAILED, PaymentStatus.PAID):
            current_domain.process(RecordPayment(order_id=order_id, payment_status=status.value), asynchronous=False)
        assert _order(order_id).payment_status == PaymentStatus.PAID.value

    def test_unknown_payment_status_rejected_by_command(self, order_id):
        with pytest.raises(ValidationError):
            RecordPayment(order_id=order_id, payment_status="Refunded")
