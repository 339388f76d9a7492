"""Integration tests for the exception-to-response mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from storefront.api import register_exception_handlers
from storefront.exceptions import AuthenticationError, EmptyCartError


@pytest.fixture()
def failing_client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/version-conflict")
    async def version_conflict():
        raise ExpectedVersionError("Wrong expected version: 3 (Aggregate: Product(prod1), Version: 4)")

    @app.get("/not-found")
    async def not_found():
        raise ObjectNotFoundError({"product_id": ["Product not found"]})

    @app.get("/unauthenticated")
    async def unauthenticated():
        raise AuthenticationError("Signature has expired")

    @app.get("/empty-cart")
    async def empty_cart():
        raise EmptyCartError()

    return TestClient(app)


class TestExceptionHandlers:
    def test_version_conflict_is_409(self, failing_client):
        response = failing_client.get("/version-conflict")
        assert response.status_code == 409
        assert response.json() == {"error": "Stock changed during checkout, please retry"}

    def test_not_found_is_404(self, failing_client):
        response = failing_client.get("/not-found")
        assert response.status_code == 404
        assert response.json() == {"error": "Resource not found"}

    def test_authentication_error_hides_reason(self, failing_client):
        response = failing_client.get("/unauthenticated")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication failed"}

    def test_domain_validation_error_is_400(self, failing_client):
        response = failing_client.get("/empty-cart")
        assert response.status_code == 400
        assert response.json() == {"error": "Cart is empty"}
