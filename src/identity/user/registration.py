"""User registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.user.credentials import hash_password
from identity.user.queries import find_by_email
from identity.user.user import User
from shared.errors import DuplicateEntry


@identity.command(part_of="User")
class RegisterUser:
    """Self-service sign-up. Always creates a customer account."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=72)
    phone: String(max_length=20)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = EmailAddress.normalized(command.email)
        if find_by_email(email.address) is not None:
            raise DuplicateEntry("User already exists with this email")

        user = User.register(
            name=command.name,
            email=email,
            password_hash=hash_password(command.password),
            phone=command.phone,
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)
