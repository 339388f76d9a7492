"""Order fulfilment and payment — commands and handler.

These transitions are driven by fulfilment and payment collaborators; the
checkout flow never advances an order past Pending itself.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, PaymentStatus


@storefront.command(part_of="Order")
class MarkProcessing:
    """Signal that the warehouse has started picking and packing."""

    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class RecordShipment:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class RecordDelivery:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class RecordPayment:
    order_id = Identifier(required=True)
    payment_status = String(required=True, choices=PaymentStatus)


@storefront.command_handler(part_of=Order)
class OrderProgressHandler:
    @handle(MarkProcessing)
    def mark_processing(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_processing()
        repo.add(order)

    @handle(RecordShipment)
    def record_shipment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_shipment()
        repo.add(order)

    @handle(RecordDelivery)
    def record_delivery(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_delivery()
        repo.add(order)

    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment(command.payment_status)
        repo.add(order)
