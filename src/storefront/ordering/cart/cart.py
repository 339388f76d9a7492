"""Cart aggregate — a user's staging list of products before checkout.

A user has at most one ACTIVE cart. It is created lazily on the first add and
stops being active when checkout turns it into an order; from then on the
user is treated as having no cart.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.exceptions import EmptyCartError
from storefront.ordering.cart.events import CartCheckedOut, CartItemAdded, CartItemRemoved


class CartStatus(Enum):
    ACTIVE = "Active"
    CHECKED_OUT = "Checked_Out"


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    order_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_ids_are_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return CartStatus(self.status) == CartStatus.ACTIVE

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _assert_active(self):
        if not self.is_active:
            raise ValidationError({"status": ["Cart is no longer active"]})

    def add_item(self, product_id, quantity):
        """Add a product line, or increase the quantity of the existing one."""
        self._assert_active()
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.item_for(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity))
            line_quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove the line for ``product_id``. Unknown products are ignored."""
        self._assert_active()

        item = self.item_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )

    def check_out(self, order_id):
        """Retire the cart once its contents have become ``order_id``."""
        self._assert_active()
        if not self.items:
            raise EmptyCartError()

        self.status = CartStatus.CHECKED_OUT.value
        self.order_id = order_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id),
            )
        )


@storefront.repository(part_of=Cart)
class CartRepository:
    def active_for(self, user_id) -> Cart | None:
        """The user's active cart, or None if they have none.

        Two first adds racing on separate workers can each create a cart. The
        oldest active cart is always the one returned, so every later add,
        read and checkout agrees on it.
        """
        results = (
            self._dao.query.filter(user_id=str(user_id), status=CartStatus.ACTIVE.value)
            .order_by("created_at")
            .limit(1)
            .all()
        )
        if not results.items:
            return None
        # Reload through the repository so the unit of work tracks it
        return self.get(results.items[0].id)
