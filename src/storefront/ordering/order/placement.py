"""Order placement — the checkout workflow.

Turns the user's active cart into an order. Everything runs inside the
command handler's unit of work, so the order insert, the stock decrements and
the cart check-out are committed together or not at all.

    1. load the active cart                 (EmptyCartError)
    2. load every product, pre-check stock  (ProductUnavailableError)
    3. snapshot prices into order lines
    4. create the order, total summed exactly
    5. decrement stock per line             (authoritative gate)
    6. check the cart out

No write happens before every line has passed step 2. Step 5 re-checks
against the product as loaded in this unit of work, and product writes are
version-checked, so a concurrent checkout that decremented the same product
first makes this commit fail. Protean then retries the command, which sees the
reduced stock at step 2.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.exceptions import EmptyCartError, ProductUnavailableError
from storefront.ordering.cart.cart import Cart
from storefront.ordering.order.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = String(required=True, max_length=500)


def _load_products(cart):
    """Resolve each cart line to its product, in cart order."""
    product_repo = current_domain.repository_for(Product)
    resolved = []
    for item in cart.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError as exc:
            raise ProductUnavailableError(item.product_id) from exc
        if not product.has_stock_for(item.quantity):
            raise ProductUnavailableError(item.product_id)
        resolved.append((item, product))
    return resolved


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.active_for(command.user_id)
        if cart is None or not cart.items:
            logger.info("checkout_rejected", user_id=str(command.user_id), reason="empty_cart")
            raise EmptyCartError()

        try:
            resolved = _load_products(cart)
        except ProductUnavailableError as exc:
            logger.info(
                "checkout_rejected",
                user_id=str(command.user_id),
                reason="product_unavailable",
                product_id=exc.product_id,
            )
            raise

        order = Order.place(
            user_id=command.user_id,
            lines_data=[
                {"product_id": str(item.product_id), "quantity": item.quantity, "price": product.price}
                for item, product in resolved
            ],
            shipping_address=command.shipping_address,
        )

        product_repo = current_domain.repository_for(Product)
        for item, product in resolved:
            product.decrement_stock(item.quantity, order_id=str(order.id))
            product_repo.add(product)

        current_domain.repository_for(Order).add(order)

        cart.check_out(order.id)
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            user_id=str(command.user_id),
            order_id=str(order.id),
            total_price=order.total_price,
            lines=len(resolved),
        )
        return str(order.id)
