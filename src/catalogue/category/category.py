"""Category aggregate root for product categorization."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify


def _now():
    return datetime.now(UTC)


@catalogue.aggregate
class Category:
    """A flat grouping of products, addressable by id or by slug.

    Names are unique across the catalogue; the slug is derived from the name
    and follows it on rename.
    """

    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: String(max_length=500)
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    created_at: DateTime(default=_now)
    updated_at: DateTime(default=_now)

    @classmethod
    def create(cls, name, description=None, image_url=None):
        from catalogue.category.events import CategoryCreated

        now = _now()
        category = cls(
            name=name,
            slug=slugify(name),
            description=description,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=category.slug,
            )
        )
        return category

    def update_details(self, name=None, description=None, image_url=None, is_active=None):
        from catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = _now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                is_active=self.is_active,
            )
        )
