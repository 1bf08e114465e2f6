import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Run every catalogue test inside the catalogue domain context."""
    from catalogue.domain import catalogue

    with catalogue.domain_context():
        yield


@pytest.fixture
def category():
    from catalogue.category.category import Category
    from protean import current_domain

    category = Category.create(name="Electronics")
    current_domain.repository_for(Category).add(category)
    return category


@pytest.fixture
def make_product(category):
    """Persist a product directly through the repository."""
    from catalogue.product.product import Product
    from protean import current_domain

    counter = iter(range(1, 10_000))

    def _make(**overrides):
        n = next(counter)
        params = {
            "name": f"Product {n}",
            "description": f"Description of product {n}",
            "price": 10.0 * n,
            "category_id": category.id,
            "sku": f"SKU-{n:04d}",
            "images": [f"https://img.example.com/{n}.jpg"],
            "stock": 10,
        }
        params.update(overrides)
        product = Product.create(**params)
        current_domain.repository_for(Product).add(product)
        return product

    return _make
