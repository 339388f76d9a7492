"""Password hashing and bearer-token primitives."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.config import settings
from storefront.exceptions import AuthenticationError

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)


def create_token(subject: str, expires_minutes: int | None = None, now: datetime | None = None) -> str:
    """Sign a token naming ``subject`` that expires after the configured lifetime."""
    issued_at = now or datetime.now(UTC)
    lifetime = timedelta(minutes=expires_minutes if expires_minutes is not None else settings.TOKEN_LIFETIME_MINUTES)
    to_encode = {"sub": str(subject), "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def validate_token(token: str) -> str:
    """Return the user id a token was issued for.

    Raises AuthenticationError when the signature is wrong, the token has
    expired or it carries no subject.
    """
    if not token:
        raise AuthenticationError("No token provided")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError(str(exc)) from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Token has no subject")
    return subject
