"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    BulkUpdateRequest,
    BulkUpdateResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductListResponse,
    ProductResponse,
    ProductStatisticsResponse,
    ReviewIdResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from catalogue.category.queries import get_category, list_categories
from catalogue.product.creation import CreateProduct
from catalogue.product.details import DeleteProduct, SetProductsActive, UpdateProduct
from catalogue.product.queries import (
    Availability,
    FeaturedKind,
    ProductFilter,
    featured_products,
    get_product,
    list_products,
    product_statistics,
)
from catalogue.product.product import Product
from catalogue.product.reviews import SubmitReview
from identity.api.dependencies import current_principal, require_admin
from identity.user.credentials import Principal

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _specifications_json(specifications) -> str | None:
    if specifications is None:
        return None
    return json.dumps([spec.model_dump() for spec in specifications])


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def get_products(
    category: str | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    min_rating: float | None = Query(None, ge=0, le=5),
    search: str | None = None,
    availability: Availability = Availability.IN_STOCK,
    sort: str = "-created_at",
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
) -> ProductListResponse:
    product_filter = ProductFilter(
        category_id=category,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        search=search,
        availability=availability,
        sort=sort,
    )
    result = list_products(product_filter, page=page, limit=limit)
    return ProductListResponse(
        items=[ProductResponse.from_product(p) for p in result.items],
        pagination=result.meta(),
    )


@product_router.get("/featured", response_model=list[ProductResponse])
async def get_featured_products(
    kind: FeaturedKind = FeaturedKind.MOST_ORDERED,
    limit: int = Query(8, ge=1, le=50),
) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in featured_products(kind, limit=limit)]


@product_router.get("/admin/stats", response_model=ProductStatisticsResponse)
async def get_product_statistics(_: Principal = Depends(require_admin)) -> ProductStatisticsResponse:
    return ProductStatisticsResponse(**product_statistics())


@product_router.put("/bulk-update", response_model=BulkUpdateResponse)
async def bulk_update_products(body: BulkUpdateRequest, _: Principal = Depends(require_admin)) -> BulkUpdateResponse:
    command = SetProductsActive(product_ids=json.dumps(body.product_ids), is_active=body.is_active)
    modified = current_domain.process(command, asynchronous=False)
    return BulkUpdateResponse(modified_count=modified)


@product_router.get("/{id_or_slug}", response_model=ProductResponse)
async def get_product_details(id_or_slug: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(id_or_slug))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, _: Principal = Depends(require_admin)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        compare_at_price=body.compare_at_price,
        category_id=body.category_id,
        sku=body.sku,
        stock=body.stock,
        images=json.dumps(body.images),
        specifications=_specifications_json(body.specifications),
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    _: Principal = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        compare_at_price=body.compare_at_price,
        category_id=body.category_id,
        stock=body.stock,
        images=json.dumps(body.images) if body.images is not None else None,
        specifications=_specifications_json(body.specifications),
        is_featured=body.is_featured,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, _: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    principal: Principal = Depends(current_principal),
) -> ReviewIdResponse:
    command = SubmitReview(
        product_id=product_id,
        user_id=principal.user_id,
        user_name=principal.email.split("@", 1)[0],
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories(is_active: bool | None = None) -> list[CategoryResponse]:
    return [CategoryResponse.from_category(c) for c in list_categories(is_active=is_active)]


@category_router.get("/{id_or_slug}", response_model=CategoryResponse)
async def get_category_details(id_or_slug: str) -> CategoryResponse:
    return CategoryResponse.from_category(get_category(id_or_slug))


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest, _: Principal = Depends(require_admin)) -> CategoryResponse:
    command = CreateCategory(name=body.name, description=body.description, image_url=body.image_url)
    category_id = current_domain.process(command, asynchronous=False)
    return CategoryResponse.from_category(get_category(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    _: Principal = Depends(require_admin),
) -> CategoryResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return CategoryResponse.from_category(get_category(category_id))


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, _: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()
