"""Business-rule failures raised by the storefront domain.

All of them except ``AuthenticationError`` are Protean ``ValidationError``
subclasses, so anything that already handles validation failures handles
these too. Each carries a single human-readable message under one key.
"""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class CartNotFoundError(ValidationError):
    def __init__(self):
        super().__init__({"cart": ["Cart not found"]})


class ProductUnavailableError(ValidationError):
    """A product is missing from the catalogue or has too little stock."""

    def __init__(self, product_id):
        self.product_id = str(product_id)
        super().__init__({"product_id": [f"Product {product_id} not available or insufficient stock"]})


class DuplicateEmailError(ValidationError):
    def __init__(self):
        super().__init__({"email": ["Email already exists"]})


class InvalidCredentialsError(ValidationError):
    def __init__(self):
        super().__init__({"credentials": ["Invalid login credentials"]})


class AuthenticationError(Exception):
    """A bearer token was missing, malformed, expired or names an unknown user."""

    def __init__(self, reason="Authentication failed"):
        self.reason = reason
        super().__init__(reason)


def first_message(exc: ValidationError) -> str:
    """Flatten a Protean messages dict into the first message it holds."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(exc)
