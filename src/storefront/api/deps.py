"""Request dependencies shared by protected routes."""

from fastapi import Header

from storefront.exceptions import AuthenticationError
from storefront.identity.authentication import resolve_user
from storefront.utils.logging import add_context

_SCHEME = "Bearer "


async def current_user(authorization: str | None = Header(default=None)):
    """Resolve ``Authorization: Bearer <token>`` to the calling user."""
    if not authorization or not authorization.startswith(_SCHEME):
        raise AuthenticationError("Invalid or missing Authorization header")

    user = resolve_user(authorization[len(_SCHEME) :].strip())
    add_context(user_id=str(user.id))
    return user
