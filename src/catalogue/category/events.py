"""Domain events for the Category aggregate."""

from protean.fields import Boolean, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the catalogue."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category was renamed, re-described or (de)activated."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    is_active: Boolean(required=True)
