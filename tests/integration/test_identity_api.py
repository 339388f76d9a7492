"""Integration tests for the registration and login endpoints."""

from protean import current_domain
from storefront.identity.security import validate_token
from storefront.identity.user import User


def _register(client, **overrides):
    body = {"fullName": "Jane Doe", "email": "jane@example.com", "password": "s3cret-pass"}
    body.update(overrides)
    return client.post("/register", json=body)


class TestRegisterEndpoint:
    def test_register_user(self, client):
        response = _register(client)
        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

        user = current_domain.repository_for(User).find_by_email("jane@example.com")
        assert user.full_name == "Jane Doe"

    def test_duplicate_email(self, client):
        _register(client)
        response = _register(client, fullName="Someone Else")
        assert response.status_code == 400
        assert response.json() == {"error": "Email already exists"}

    def test_invalid_email(self, client):
        response = _register(client, email="not-an-email")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid email format"}

    def test_short_password(self, client):
        response = _register(client, password="short")
        assert response.status_code == 400
        assert "password" in response.json()["error"]

    def test_missing_full_name(self, client):
        response = client.post("/register", json={"email": "jane@example.com", "password": "s3cret-pass"})
        assert response.status_code == 400
        assert "fullName" in response.json()["error"]


class TestLoginEndpoint:
    def test_login_returns_token(self, client):
        _register(client)
        response = client.post("/login", json={"email": "jane@example.com", "password": "s3cret-pass"})
        assert response.status_code == 200

        user = current_domain.repository_for(User).find_by_email("jane@example.com")
        assert validate_token(response.json()["token"]) == str(user.id)

    def test_wrong_password(self, client):
        _register(client)
        response = client.post("/login", json={"email": "jane@example.com", "password": "wrong-pass"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid login credentials"}

    def test_unknown_email(self, client):
        response = client.post("/login", json={"email": "nobody@example.com", "password": "s3cret-pass"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid login credentials"}
