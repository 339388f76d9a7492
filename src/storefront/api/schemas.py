"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Field names are camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterRequest(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "fullName": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "correct-horse",
                }
            ]
        },
    )

    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(ApiModel):
    email: str
    password: str


class AddToCartRequest(ApiModel):
    product_id: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(default=1, ge=1)


class PlaceOrderRequest(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"shippingAddress": "123 Main St, Springfield, IL 62701"}]},
    )

    shipping_address: str = Field(..., min_length=1, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class MessageResponse(ApiModel):
    message: str


class TokenResponse(ApiModel):
    token: str


class ProductResponse(ApiModel):
    product_id: str
    name: str
    price: float
    stock: int

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            product_id=str(product.product_id),
            name=product.name,
            price=product.price,
            stock=product.stock,
        )


class CartItemResponse(ApiModel):
    product_id: str
    quantity: int


class CartResponse(ApiModel):
    id: str | None = None
    user_id: str | None = None
    items: list[CartItemResponse] = []

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        if cart is None:
            return cls()
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            items=[CartItemResponse(product_id=str(i.product_id), quantity=i.quantity) for i in cart.items],
        )


class OrderLineResponse(ApiModel):
    product_id: str
    quantity: int
    price: float


class OrderResponse(ApiModel):
    id: str
    user_id: str
    lines: list[OrderLineResponse]
    total_price: float
    shipping_address: str
    payment_status: str
    order_status: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            lines=[
                OrderLineResponse(product_id=str(line.product_id), quantity=line.quantity, price=line.price)
                for line in order.lines
            ],
            total_price=order.total_price,
            shipping_address=order.shipping_address,
            payment_status=order.payment_status,
            order_status=order.order_status,
            created_at=order.created_at,
        )


class PlaceOrderResponse(ApiModel):
    message: str = "Order placed successfully"
    order: OrderResponse
