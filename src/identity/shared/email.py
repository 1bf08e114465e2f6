"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


@identity.value_object
class EmailAddress:
    """A validated, lower-cased email address.

    Enforces structural validity: exactly one @, non-empty local and domain
    parts, a dotted domain, no whitespace and no consecutive dots. Addresses
    are compared case-insensitively, so they are stored lower-cased.
    """

    address: String(required=True, max_length=254)

    @classmethod
    def normalized(cls, raw: str) -> "EmailAddress":
        return cls(address=raw.strip().lower())

    @property
    def local_part(self) -> str:
        return self.address.split("@", 1)[0]

    @invariant.post
    def verify_email_address(self):
        """Ensure that the email address follows a basic valid structure."""
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        if ".." in email:
            raise _invalid(email)
