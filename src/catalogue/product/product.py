"""Product aggregate root with Review, ProductImage and Specification entities."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from catalogue.domain import catalogue
from catalogue.shared.sku import SKU
from catalogue.shared.slug import slugify
from shared.errors import DuplicateEntry, InsufficientStock, InvalidState


def _now():
    return datetime.now(UTC)


@catalogue.entity(part_of="Product")
class ProductImage:
    """Product image. The image with the lowest display order is the primary one."""

    url: String(required=True, max_length=500)
    display_order: Integer(default=0, min_value=0)


@catalogue.entity(part_of="Product")
class Specification:
    key: String(required=True, max_length=100)
    value: String(required=True, max_length=500)


@catalogue.entity(part_of="Product")
class Review:
    """A customer's rating and comment. At most one per user per product."""

    user_id: Identifier(required=True)
    user_name: String(required=True, max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(required=True, max_length=500)
    created_at: DateTime(default=_now)


@catalogue.aggregate
class Product:
    """A sellable catalogue item.

    Stock and ``total_orders`` move together: every unit withdrawn for an order
    adds one to ``total_orders`` and every unit restored takes one away.
    """

    name: String(required=True, max_length=200)
    slug: String(max_length=220)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    category_id: Identifier(required=True)
    sku: ValueObject(SKU, required=True)
    images: HasMany(ProductImage)
    specifications: HasMany(Specification)
    reviews: HasMany(Review)
    stock: Integer(default=0, min_value=0)
    average_rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    total_reviews: Integer(default=0, min_value=0)
    total_orders: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    created_at: DateTime(default=_now)
    updated_at: DateTime(default=_now)

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        category_id,
        sku,
        images,
        stock=0,
        compare_at_price=None,
        specifications=None,
        is_featured=False,
    ):
        from catalogue.product.events import ProductAdded

        if not images:
            raise ValidationError({"images": ["At least one product image is required"]})

        sku_vo = SKU.normalized(sku) if isinstance(sku, str) else sku
        now = _now()

        product = cls(
            name=name,
            slug=slugify(name),
            description=description,
            price=price,
            compare_at_price=compare_at_price,
            category_id=category_id,
            sku=sku_vo,
            stock=stock,
            is_featured=is_featured,
            created_at=now,
            updated_at=now,
        )
        product._replace_images(images)
        product._replace_specifications(specifications or [])

        product.raise_(
            ProductAdded(
                product_id=product.id,
                sku=sku_vo.code,
                name=name,
                category_id=category_id,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    @property
    def primary_image(self) -> str | None:
        if not self.images:
            return None
        return min(self.images, key=lambda image: image.display_order).url

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in sorted(self.images, key=lambda image: image.display_order)]

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def _replace_images(self, urls):
        for image in list(self.images):
            self.remove_images(image)
        for position, url in enumerate(urls):
            self.add_images(ProductImage(url=url, display_order=position))

    def _replace_specifications(self, specifications):
        for spec in list(self.specifications):
            self.remove_specifications(spec)
        for spec in specifications:
            self.add_specifications(Specification(key=spec["key"], value=spec["value"]))

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        compare_at_price=None,
        category_id=None,
        images=None,
        stock=None,
        specifications=None,
        is_featured=None,
        is_active=None,
    ):
        """Apply a partial update. ``None`` leaves a field unchanged."""
        from catalogue.product.events import ProductDetailsUpdated

        if images is not None and not images:
            raise ValidationError({"images": ["At least one product image is required"]})

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if compare_at_price is not None:
            self.compare_at_price = compare_at_price
        if category_id is not None:
            self.category_id = category_id
        if stock is not None:
            self.stock = stock
        if is_featured is not None:
            self.is_featured = is_featured
        if is_active is not None:
            self.is_active = is_active
        if images is not None:
            self._replace_images(images)
        if specifications is not None:
            self._replace_specifications(specifications)

        self.updated_at = _now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                stock=self.stock,
                is_active=self.is_active,
            )
        )

    def set_active(self, is_active: bool):
        from catalogue.product.events import ProductActivationChanged

        self.is_active = is_active
        self.updated_at = _now()
        self.raise_(ProductActivationChanged(product_id=self.id, is_active=is_active))

    def add_review(self, user_id, user_name, rating, comment):
        from catalogue.product.events import ProductReviewed

        if any(str(review.user_id) == str(user_id) for review in self.reviews):
            raise DuplicateEntry("You have already reviewed this product")

        review = Review(user_id=user_id, user_name=user_name, rating=rating, comment=comment)
        self.add_reviews(review)
        self._recalculate_rating()

        self.updated_at = _now()

        self.raise_(
            ProductReviewed(
                product_id=self.id,
                review_id=review.id,
                user_id=user_id,
                rating=rating,
                average_rating=self.average_rating,
                total_reviews=self.total_reviews,
            )
        )
        return review

    def _recalculate_rating(self):
        ratings = [review.rating for review in self.reviews]
        self.total_reviews = len(ratings)
        self.average_rating = round(sum(ratings) / len(ratings), 2) if ratings else 0.0

    def withdraw_stock(self, quantity: int):
        """Take ``quantity`` units for an order."""
        from catalogue.product.events import StockWithdrawn

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.is_active:
            raise InvalidState(f"Product {self.name} is not available")
        if self.stock < quantity:
            raise InsufficientStock(
                f"Insufficient stock for {self.name}",
                product_id=self.id,
                requested=quantity,
            )

        self.stock = self.stock - quantity
        self.total_orders = self.total_orders + quantity
        self.updated_at = _now()
        self.raise_(StockWithdrawn(product_id=self.id, quantity=quantity, stock=self.stock))

    def restore_stock(self, quantity: int):
        """Give back ``quantity`` units taken by an order that did not go through."""
        from catalogue.product.events import StockRestored

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self.stock = self.stock + quantity
        self.total_orders = max(self.total_orders - quantity, 0)
        self.updated_at = _now()
        self.raise_(StockRestored(product_id=self.id, quantity=quantity, stock=self.stock))
