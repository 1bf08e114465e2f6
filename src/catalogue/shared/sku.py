"""SKU value object for stock keeping unit codes."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from catalogue.domain import catalogue

_SKU_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9_-]*$")


@catalogue.value_object
class SKU:
    """Upper-case stock keeping unit code, e.g. ``"ELEC-PHN-001"``.

    Codes are unique across the catalogue; uniqueness is checked by the
    product creation handler since it needs a repository lookup.
    """

    code: String(required=True, max_length=50, min_length=2)

    @classmethod
    def normalized(cls, raw: str) -> "SKU":
        return cls(code=raw.strip().upper())

    @invariant.post
    def code_must_be_valid_format(self):
        if not _SKU_PATTERN.match(self.code):
            raise ValidationError(
                {"sku": ["SKU must be upper-case letters, digits, hyphens or underscores"]}
            )
