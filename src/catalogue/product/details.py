"""Product maintenance — update, bulk activation and removal."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: String(max_length=2000)
    price: Float(min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    category_id: Identifier()
    stock: Integer(min_value=0)
    images: Text()  # JSON array of URLs
    specifications: Text()  # JSON array of {key, value}
    is_featured: Boolean()
    is_active: Boolean()


@catalogue.command(part_of="Product")
class SetProductsActive:
    product_ids: Text(required=True)  # JSON array of product ids
    is_active: Boolean(required=True)


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id is not None:
            from catalogue.category.category import Category

            current_domain.repository_for(Category).get(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            compare_at_price=command.compare_at_price,
            category_id=command.category_id,
            images=json.loads(command.images) if command.images is not None else None,
            stock=command.stock,
            specifications=json.loads(command.specifications) if command.specifications is not None else None,
            is_featured=command.is_featured,
            is_active=command.is_active,
        )
        repo.add(product)

    @handle(SetProductsActive)
    def set_products_active(self, command):
        repo = current_domain.repository_for(Product)
        product_ids = json.loads(command.product_ids)
        for product_id in product_ids:
            product = repo.get(product_id)
            product.set_active(command.is_active)
            repo.add(product)
        return len(product_ids)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
