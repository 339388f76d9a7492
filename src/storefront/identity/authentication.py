"""Credential checks and token resolution.

Logging in does not change any aggregate, so these are plain functions
rather than commands.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.exceptions import AuthenticationError, InvalidCredentialsError
from storefront.identity.security import create_token, validate_token, verify_password
from storefront.identity.user import User


def login(email, password) -> str:
    """Check credentials and issue a bearer token for the matching user."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password or "", user.password_hash):
        logger.info("login_failed")
        raise InvalidCredentialsError()

    logger.info("login_succeeded", user_id=str(user.id))
    return create_token(str(user.id))


def resolve_user(token) -> User:
    """Validate a token and load the user it names."""
    user_id = validate_token(token)
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError as exc:
        raise AuthenticationError("User not found") from exc
