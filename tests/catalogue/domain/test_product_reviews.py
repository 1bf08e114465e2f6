"""Tests for reviews and rating aggregates on Product."""

import pytest
from catalogue.product.events import ProductReviewed
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from shared.errors import DuplicateEntry


@pytest.fixture
def product():
    return Product.create(
        name="Desk Lamp",
        description="LED lamp",
        price=40.0,
        category_id="cat-1",
        sku="LAMP-1",
        images=["https://img.example.com/lamp.jpg"],
    )


def test_no_reviews_means_zero_rating(product):
    assert product.average_rating == 0.0
    assert product.total_reviews == 0


def test_average_is_rounded_mean(product):
    product.add_review("u1", "ann", 5, "Great")
    product.add_review("u2", "ben", 4, "Good")
    product.add_review("u3", "cat", 4, "Fine")

    assert product.total_reviews == 3
    assert product.average_rating == 4.33


def test_review_raises_event(product):
    review = product.add_review("u1", "ann", 3, "Okay")
    event = product._events[-1]
    assert isinstance(event, ProductReviewed)
    assert event.review_id == review.id
    assert event.average_rating == 3.0
    assert event.total_reviews == 1


def test_duplicate_review_rejected(product):
    product.add_review("u1", "ann", 5, "Great")
    with pytest.raises(DuplicateEntry):
        product.add_review("u1", "ann", 1, "Changed my mind")

    assert product.total_reviews == 1
    assert product.average_rating == 5.0


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_out_of_range_rejected(product, rating):
    with pytest.raises(ValidationError):
        product.add_review("u1", "ann", rating, "Hmm")


def test_comment_length_limit(product):
    with pytest.raises(ValidationError):
        product.add_review("u1", "ann", 4, "x" * 501)
