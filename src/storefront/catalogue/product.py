"""Product aggregate — the catalogue record checkout reads prices and stock from.

Products are keyed by their business identifier (``product_id``), which is
what carts and orders reference. Stock is only ever reduced by checkout,
through ``decrement_stock``, which refuses to take stock below zero.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String

from storefront.catalogue.events import ProductAdded, StockDecremented
from storefront.domain import storefront
from storefront.exceptions import ProductUnavailableError
from storefront.utils.query import fetch_all


@storefront.aggregate
class Product:
    product_id = Identifier(identifier=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def add(cls, product_id, name, price, stock):
        product = cls(product_id=product_id, name=name, price=price, stock=stock)
        product.raise_(
            ProductAdded(
                product_id=product_id,
                name=name,
                price=price,
                stock=stock,
            )
        )
        return product

    def has_stock_for(self, quantity) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity, order_id=None):
        """Take ``quantity`` units out of stock, failing if that would go negative."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise ProductUnavailableError(self.product_id)

        previous = self.stock
        self.stock = previous - quantity

        self.raise_(
            StockDecremented(
                product_id=self.product_id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                order_id=order_id,
            )
        )


@storefront.repository(part_of=Product)
class ProductRepository:
    def list_all(self) -> list[Product]:
        """Every product in the catalogue, ordered by product id."""
        return fetch_all(self._dao.query.order_by("product_id"))
