"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    phone: String()


@identity.event(part_of="User")
class AddressAdded:
    """A delivery address was added to a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    city: String(required=True)
    country: String(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="User")
class AddressUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="User")
class AddressRemoved:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
