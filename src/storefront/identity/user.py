"""User aggregate and its repository.

Users are created once at registration and only read afterwards, either to
check credentials at login or to resolve the subject of a bearer token.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.email import EmailAddress, normalize_email
from storefront.identity.events import UserRegistered


@storefront.aggregate
class User:
    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    registered_at = DateTime()

    @classmethod
    def register(cls, full_name, email, password_hash):
        # Raises ValidationError for malformed addresses
        email_vo = EmailAddress(address=normalize_email(email))
        now = datetime.now(UTC)

        user = cls(
            full_name=full_name,
            email=email_vo.address,
            password_hash=password_hash,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                full_name=full_name,
                registered_at=now,
            )
        )
        return user


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        """Return the user registered under ``email``, or None."""
        results = self._dao.query.filter(email=normalize_email(email)).all()
        return results.items[0] if results.items else None
