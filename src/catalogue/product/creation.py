"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.shared.sku import SKU
from shared.errors import DuplicateEntry
from shared.pagination import fetch_all


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    category_id: Identifier(required=True)
    sku: String(required=True, max_length=50)
    stock: Integer(default=0, min_value=0)
    images: Text(required=True)  # JSON array of URLs
    specifications: Text()  # JSON array of {key, value}
    is_featured: Boolean(default=False)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        # Unknown categories surface as ObjectNotFoundError
        current_domain.repository_for(Category).get(command.category_id)

        repo = current_domain.repository_for(Product)
        sku = SKU.normalized(command.sku)
        if any(existing.sku.code == sku.code for existing in fetch_all(repo)):
            raise DuplicateEntry(f"A product with SKU {sku.code} already exists")

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            compare_at_price=command.compare_at_price,
            category_id=command.category_id,
            sku=sku,
            images=json.loads(command.images),
            stock=command.stock,
            specifications=json.loads(command.specifications) if command.specifications else None,
            is_featured=command.is_featured,
        )
        repo.add(product)
        return str(product.id)
