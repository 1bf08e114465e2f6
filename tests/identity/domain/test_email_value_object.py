"""Tests for the EmailAddress value object."""

import pytest
from identity.shared.email import EmailAddress
from protean.exceptions import ValidationError


class TestEmailAddress:
    @pytest.mark.parametrize(
        "address",
        ["jane@example.com", "first.last@shop.co.uk", "a+tag@sub.example.org"],
        ids=["simple", "dotted-local", "plus-tag"],
    )
    def test_valid_addresses(self, address):
        assert EmailAddress(address=address).address == address

    @pytest.mark.parametrize(
        "address",
        [
            "no-at-sign.example.com",
            "two@@example.com",
            "@example.com",
            "jane@localhost",
            "jane@.example.com",
            "jane..doe@example.com",
            "jane doe@example.com",
            ".jane@example.com",
        ],
        ids=[
            "missing-at",
            "double-at",
            "empty-local",
            "undotted-domain",
            "leading-dot-domain",
            "consecutive-dots",
            "whitespace",
            "leading-dot-local",
        ],
    )
    def test_invalid_addresses_rejected(self, address):
        with pytest.raises(ValidationError):
            EmailAddress(address=address)

    def test_normalized_lowercases_and_strips(self):
        email = EmailAddress.normalized("  Jane.Doe@Example.COM ")
        assert email.address == "jane.doe@example.com"

    def test_local_part(self):
        assert EmailAddress(address="jane.doe@example.com").local_part == "jane.doe"

    def test_equality_by_value(self):
        assert EmailAddress(address="a@b.co") == EmailAddress(address="a@b.co")
