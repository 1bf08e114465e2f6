"""Read-side lookups for categories."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from shared.errors import NotFound
from shared.pagination import fetch_all


def list_categories(is_active: bool | None = None) -> list[Category]:
    """All categories sorted by name, optionally only (in)active ones."""
    categories = fetch_all(current_domain.repository_for(Category))
    if is_active is not None:
        categories = [c for c in categories if c.is_active == is_active]
    return sorted(categories, key=lambda c: c.name.lower())


def get_category(id_or_slug: str) -> Category:
    repo = current_domain.repository_for(Category)
    try:
        return repo.get(id_or_slug)
    except ObjectNotFoundError:
        pass

    for category in fetch_all(repo):
        if category.slug == id_or_slug:
            return category
    raise NotFound("Category not found")
