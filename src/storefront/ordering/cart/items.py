"""Cart item management — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.exceptions import CartNotFoundError, ProductUnavailableError
from storefront.ordering.cart.cart import Cart


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Point-in-time availability check; nothing is reserved until checkout
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError as exc:
            raise ProductUnavailableError(command.product_id) from exc
        if not product.has_stock_for(command.quantity):
            raise ProductUnavailableError(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.active_for(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)

        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

        logger.info(
            "cart_item_added",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.active_for(command.user_id)
        if cart is None:
            raise CartNotFoundError()

        cart.remove_item(product_id=command.product_id)
        repo.add(cart)
        return str(cart.id)
