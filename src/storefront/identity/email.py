"""EmailAddress value object for validated email addresses."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

# Something, an @, something, a dot, something. No whitespace and no second @.
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email):
    return (email or "").strip().lower()


@storefront.value_object
class EmailAddress:
    """A syntactically valid email address, stored normalized."""

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        if not _EMAIL_PATTERN.match(self.address or ""):
            raise ValidationError({"email": ["Invalid email format"]})
