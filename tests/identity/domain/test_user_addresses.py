"""Tests for the User address book."""

import pytest
from identity.user.events import AddressAdded, AddressRemoved, AddressUpdated
from identity.user.user import User
from shared.errors import InvalidState, NotFound


def _user():
    return User.register(name="Jane Doe", email="jane@example.com", password_hash="hashed")


def _add(user, street="1 Market Street", city="Springfield", **extra):
    return user.add_address(street=street, city=city, zip_code="62701", country="US", **extra)


def _defaults(user):
    return [a.street for a in user.addresses if a.is_default]


class TestAddAddress:
    def test_first_address_becomes_default(self):
        user = _user()
        address = _add(user)

        assert address.id is not None
        assert user.addresses[0].is_default is True
        assert isinstance(user._events[-1], AddressAdded)

    def test_later_addresses_are_not_default(self):
        user = _user()
        _add(user)
        _add(user, street="2 Oak Avenue")

        assert _defaults(user) == ["1 Market Street"]

    def test_new_default_clears_the_others(self):
        user = _user()
        _add(user)
        _add(user, street="2 Oak Avenue")
        _add(user, street="3 Pine Road", is_default=True)

        assert _defaults(user) == ["3 Pine Road"]


class TestUpdateAddress:
    def test_changes_only_given_fields(self):
        user = _user()
        address = _add(user, state="IL")

        user.update_address(address.id, city="Chicago", zip_code=None)

        assert address.city == "Chicago"
        assert address.zip_code == "62701"
        assert address.state == "IL"
        assert isinstance(user._events[-1], AddressUpdated)

    def test_making_an_address_default(self):
        user = _user()
        _add(user)
        second = _add(user, street="2 Oak Avenue")

        user.update_address(second.id, is_default=True)

        assert _defaults(user) == ["2 Oak Avenue"]

    def test_default_flag_cannot_simply_be_cleared(self):
        user = _user()
        first = _add(user)

        with pytest.raises(InvalidState):
            user.update_address(first.id, is_default=False)
        assert first.is_default is True

    def test_unknown_address(self):
        user = _user()
        with pytest.raises(NotFound):
            user.update_address("missing", city="Chicago")


class TestRemoveAddress:
    def test_removing_the_default_passes_it_on(self):
        user = _user()
        first = _add(user)
        _add(user, street="2 Oak Avenue")
        _add(user, street="3 Pine Road")

        user.remove_address(first.id)

        assert [a.street for a in user.addresses] == ["2 Oak Avenue", "3 Pine Road"]
        assert _defaults(user) == ["2 Oak Avenue"]
        assert isinstance(user._events[-1], AddressRemoved)

    def test_removing_a_non_default_keeps_the_default(self):
        user = _user()
        _add(user)
        second = _add(user, street="2 Oak Avenue")

        user.remove_address(second.id)

        assert _defaults(user) == ["1 Market Street"]

    def test_last_address_can_be_removed(self):
        user = _user()
        only = _add(user)

        user.remove_address(only.id)

        assert len(user.addresses) == 0

    def test_unknown_address(self):
        user = _user()
        with pytest.raises(NotFound):
            user.remove_address("missing")
