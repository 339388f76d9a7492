"""User registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.exceptions import DuplicateEmailError
from storefront.identity.security import hash_password
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password = String(required=True, min_length=8, max_length=128)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        # Email uniqueness spans aggregates, so it is checked here
        if repo.find_by_email(command.email) is not None:
            logger.info("registration_rejected", reason="duplicate_email")
            raise DuplicateEmailError()

        user = User.register(
            full_name=command.full_name,
            email=command.email,
            password_hash=hash_password(command.password),
        )
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)
