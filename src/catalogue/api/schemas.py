"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalogue.category.category import Category
from catalogue.product.product import Product

# --- Product Request Schemas ---


class SpecificationSchema(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=500)


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "description": "Over-ear headphones with active noise cancellation.",
                    "price": 199.99,
                    "compare_at_price": 249.99,
                    "category_id": "0b6f1c1e-6a3e-4c55-9a57-6d0c3c1f2a10",
                    "sku": "WH-1000",
                    "stock": 25,
                    "images": ["https://cdn.example.com/wh-1000/front.jpg"],
                    "specifications": [{"key": "Battery", "value": "30 hours"}],
                    "is_featured": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0)
    compare_at_price: float | None = Field(None, ge=0)
    category_id: str
    sku: str = Field(..., min_length=1, max_length=50)
    stock: int = Field(0, ge=0)
    images: list[str] = Field(..., min_length=1)
    specifications: list[SpecificationSchema] = Field(default_factory=list)
    is_featured: bool = False


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 179.99, "stock": 40}]}}

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=2000)
    price: float | None = Field(None, ge=0)
    compare_at_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    stock: int | None = Field(None, ge=0)
    images: list[str] | None = None
    specifications: list[SpecificationSchema] | None = None
    is_featured: bool | None = None
    is_active: bool | None = None


class BulkUpdateRequest(BaseModel):
    product_ids: list[str] = Field(..., min_length=1)
    is_active: bool


class SubmitReviewRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"rating": 5, "comment": "Great sound."}]}}

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=500)


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Audio",
                    "description": "Headphones, speakers and accessories",
                    "image_url": "https://cdn.example.com/categories/audio.jpg",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)
    is_active: bool | None = None


# --- Response Schemas ---


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    rating: int
    comment: str
    created_at: datetime | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    price: float
    compare_at_price: float | None = None
    category_id: str
    sku: str
    images: list[str]
    specifications: list[SpecificationSchema]
    reviews: list[ReviewResponse]
    stock: int
    average_rating: float
    total_reviews: int
    total_orders: int
    is_active: bool
    is_featured: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product: Product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            compare_at_price=product.compare_at_price,
            category_id=str(product.category_id),
            sku=product.sku.code,
            images=product.image_urls,
            specifications=[SpecificationSchema(key=s.key, value=s.value) for s in product.specifications],
            reviews=[
                ReviewResponse(
                    id=str(r.id),
                    user_id=str(r.user_id),
                    user_name=r.user_name,
                    rating=r.rating,
                    comment=r.comment,
                    created_at=r.created_at,
                )
                for r in product.reviews
            ],
            stock=product.stock,
            average_rating=product.average_rating,
            total_reviews=product.total_reviews,
            total_orders=product.total_orders,
            is_active=product.is_active,
            is_featured=product.is_featured,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    pagination: Pagination


class ProductStatisticsResponse(BaseModel):
    total_products: int
    active_products: int
    out_of_stock: int
    low_stock: int


class BulkUpdateResponse(BaseModel):
    modified_count: int


class ReviewIdResponse(BaseModel):
    review_id: str


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    is_active: bool
    created_at: datetime | None = None

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            image_url=category.image_url,
            is_active=category.is_active,
            created_at=category.created_at,
        )


class StatusResponse(BaseModel):
    status: str = "ok"
