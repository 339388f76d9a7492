"""FastAPI routes for the Storefront — identity, catalogue, cart and orders.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts).
"""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.deps import current_user
from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    LoginRequest,
    MessageResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductResponse,
    RegisterRequest,
    TokenResponse,
)
from storefront.catalogue.product import Product
from storefront.catalogue.stocking import SeedProducts
from storefront.identity.authentication import login
from storefront.identity.registration import RegisterUser
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, RemoveFromCart
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder

# ---------------------------------------------------------------------------
# Identity Router
# ---------------------------------------------------------------------------
identity_router = APIRouter(tags=["identity"])


@identity_router.post("/register", status_code=201, response_model=MessageResponse)
async def register(body: RegisterRequest) -> MessageResponse:
    command = RegisterUser(
        full_name=body.full_name,
        email=body.email,
        password=body.password,
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="User registered successfully")


@identity_router.post("/login", response_model=TokenResponse)
async def login_user(body: LoginRequest) -> TokenResponse:
    return TokenResponse(token=login(body.email, body.password))


# ---------------------------------------------------------------------------
# Catalogue Router
# ---------------------------------------------------------------------------
product_router = APIRouter(tags=["products"])


@product_router.get("/products", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product).list_all()
    return [ProductResponse.from_product(p) for p in products]


@product_router.post("/seed-products", response_model=MessageResponse)
async def seed_products() -> MessageResponse:
    inserted = current_domain.process(SeedProducts(), asynchronous=False)
    return MessageResponse(message="Products seeded" if inserted else "Products already seeded")


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _active_cart(user) -> Cart | None:
    return current_domain.repository_for(Cart).active_for(user.id)


@cart_router.post("", response_model=CartResponse, response_model_exclude_none=True)
async def add_to_cart(body: AddToCartRequest, user=Depends(current_user)) -> CartResponse:
    command = AddToCart(
        user_id=str(user.id),
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(_active_cart(user))


@cart_router.get("", response_model=CartResponse, response_model_exclude_none=True)
async def get_cart(user=Depends(current_user)) -> CartResponse:
    return CartResponse.from_cart(_active_cart(user))


@cart_router.delete("/{product_id}", response_model=CartResponse, response_model_exclude_none=True)
async def remove_from_cart(product_id: str, user=Depends(current_user)) -> CartResponse:
    command = RemoveFromCart(user_id=str(user.id), product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(_active_cart(user))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, user=Depends(current_user)) -> PlaceOrderResponse:
    command = PlaceOrder(user_id=str(user.id), shipping_address=body.shipping_address)
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return PlaceOrderResponse(order=OrderResponse.from_order(order))


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user=Depends(current_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).placed_by(user.id)
    return [OrderResponse.from_order(o) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user=Depends(current_user)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(user.id):
        # Other users' orders are indistinguishable from missing ones
        raise ObjectNotFoundError({"order_id": ["Order not found"]})
    return OrderResponse.from_order(order)
