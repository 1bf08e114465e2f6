"""Tests for slug generation."""

import pytest
from catalogue.shared.slug import slugify


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Wireless Mouse", "wireless-mouse"),
        ("Wireless Mouse (Black)", "wireless-mouse-black"),
        ("  Café  Crème ", "cafe-creme"),
        ("USB-C -- Charger!!", "usb-c-charger"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected
