"""Contact phone number for a user account."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_ALLOWED = re.compile(r"^\+?[\d\s\-().]+$")

# E.164 caps a number at 15 digits; anything under 7 is not dialable
_MIN_DIGITS = 7
_MAX_DIGITS = 15


@identity.value_object
class PhoneNumber:
    """A phone number kept as the user typed it.

    Separators (spaces, hyphens, dots, parentheses) and a leading ``+`` are
    allowed; the digits alone must number between 7 and 15.
    """

    number: String(required=True, max_length=20)

    @property
    def digits(self) -> str:
        return re.sub(r"\D", "", self.number)

    @invariant.post
    def must_be_dialable(self):
        if not _ALLOWED.match(self.number) or not _MIN_DIGITS <= len(self.digits) <= _MAX_DIGITS:
            raise ValidationError({"phone": [f"Invalid phone number: {self.number!r}"]})
