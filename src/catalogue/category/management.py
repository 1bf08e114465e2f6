"""Category management — commands and handlers."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from shared.errors import DuplicateEntry
from shared.pagination import fetch_all


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    image_url: String(max_length=500)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    image_url: String(max_length=500)
    is_active: Boolean()


@catalogue.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _assert_name_available(repo, name, category_id=None):
    for existing in fetch_all(repo):
        if existing.name.lower() == name.lower() and str(existing.id) != str(category_id):
            raise DuplicateEntry(f"Category {name!r} already exists")


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        _assert_name_available(repo, command.name)

        category = Category.create(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name is not None:
            _assert_name_available(repo, command.name, category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
