import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import (
    cart_router,
    identity_router,
    order_router,
    product_router,
    register_exception_handlers,
)


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def login_as(client):
    """Register a user over HTTP, log in and return the Authorization header."""

    def _login_as(email="jane@example.com", password="s3cret-pass", full_name="Jane Doe"):
        client.post("/register", json={"fullName": full_name, "email": email, "password": password})
        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login_as


@pytest.fixture()
def auth_headers(login_as):
    return login_as()
