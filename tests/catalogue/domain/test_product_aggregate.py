"""Tests for Product creation, details and activation."""

import pytest
from catalogue.product.events import ProductActivationChanged, ProductAdded, ProductDetailsUpdated
from catalogue.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    params = {
        "name": "Wireless Mouse",
        "description": "Ergonomic mouse",
        "price": 25.0,
        "category_id": "cat-1",
        "sku": "ms-001",
        "images": ["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"],
        "stock": 10,
    }
    params.update(overrides)
    return Product.create(**params)


class TestProductCreation:
    def test_defaults(self):
        product = _product()
        assert product.slug == "wireless-mouse"
        assert product.sku.code == "MS-001"
        assert product.stock == 10
        assert product.average_rating == 0.0
        assert product.total_reviews == 0
        assert product.total_orders == 0
        assert product.is_active is True
        assert product.is_featured is False

    def test_images_keep_their_order(self):
        product = _product()
        assert product.image_urls == ["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"]
        assert product.primary_image == "https://img.example.com/1.jpg"

    def test_requires_an_image(self):
        with pytest.raises(ValidationError) as exc:
            _product(images=[])
        assert "images" in exc.value.messages

    def test_specifications(self):
        product = _product(specifications=[{"key": "DPI", "value": "1600"}])
        assert [(s.key, s.value) for s in product.specifications] == [("DPI", "1600")]

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _product(stock=-1)

    def test_raises_product_added(self):
        product = _product()
        event = product._events[-1]
        assert isinstance(event, ProductAdded)
        assert event.sku == "MS-001"
        assert event.stock == 10

    def test_in_stock(self):
        assert _product().in_stock is True
        assert _product(stock=0).in_stock is False


class TestUpdateDetails:
    def test_partial_update(self):
        product = _product()
        product.update_details(price=19.99, stock=3)
        assert product.price == 19.99
        assert product.stock == 3
        assert product.name == "Wireless Mouse"
        assert isinstance(product._events[-1], ProductDetailsUpdated)

    def test_rename_refreshes_slug(self):
        product = _product()
        product.update_details(name="Silent Mouse")
        assert product.slug == "silent-mouse"

    def test_replace_images(self):
        product = _product()
        product.update_details(images=["https://img.example.com/new.jpg"])
        assert product.image_urls == ["https://img.example.com/new.jpg"]

    def test_empty_images_rejected(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.update_details(images=[])

    def test_replace_specifications(self):
        product = _product(specifications=[{"key": "DPI", "value": "800"}])
        product.update_details(specifications=[{"key": "DPI", "value": "3200"}, {"key": "Color", "value": "Black"}])
        assert sorted((s.key, s.value) for s in product.specifications) == [("Color", "Black"), ("DPI", "3200")]


def test_set_active():
    product = _product()
    product.set_active(False)
    assert product.is_active is False
    event = product._events[-1]
    assert isinstance(event, ProductActivationChanged)
    assert event.is_active is False
