"""User aggregate root with its Address entity."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String, ValueObject

from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.shared.phone import PhoneNumber
from shared.errors import InvalidState, NotFound


def _now():
    return datetime.now(UTC)


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@identity.entity(part_of="User")
class Address:
    """A delivery address in a user's address book. Exactly one is the default."""

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)


@identity.aggregate
class User:
    """A registered account.

    Customers register themselves; administrators are provisioned out of band
    (see ``manage.py seed``). The password is only ever held as a bcrypt hash.
    """

    name: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    password_hash: String(required=True, max_length=128)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    phone: ValueObject(PhoneNumber)
    addresses: HasMany(Address)
    is_active: Boolean(default=True)
    created_at: DateTime(default=_now)
    updated_at: DateTime(default=_now)
    last_login_at: DateTime()

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @classmethod
    def register(cls, name, email, password_hash, phone=None, role=Role.CUSTOMER.value):
        from identity.user.events import UserRegistered

        email_vo = EmailAddress.normalized(email) if isinstance(email, str) else email
        now = _now()

        user = cls(
            name=name,
            email=email_vo,
            password_hash=password_hash,
            role=role,
            phone=PhoneNumber(number=phone) if phone else None,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email_vo.address,
                name=name,
                role=role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def update_profile(self, name=None, phone=None):
        from identity.user.events import ProfileUpdated

        if name is not None:
            self.name = name
        if phone is not None:
            self.phone = PhoneNumber(number=phone) if phone else None

        self.updated_at = _now()

        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                name=self.name,
                phone=self.phone.number if self.phone else None,
            )
        )

    def record_login(self):
        self.last_login_at = _now()

    def _address(self, address_id) -> Address:
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise NotFound("Address not found")
        return address

    def _make_default(self, address) -> None:
        for other in self.addresses:
            if other.is_default and other is not address:
                other.is_default = False
        address.is_default = True

    def add_address(self, street, city, zip_code, country, state=None, is_default=False) -> Address:
        from identity.user.events import AddressAdded

        # The first address is always the default
        is_default = bool(is_default) or not self.addresses

        with atomic_change(self):
            address = Address(
                street=street,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country,
            )
            self.add_addresses(address)
            if is_default:
                self._make_default(address)
            self.updated_at = _now()

        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                city=city,
                country=country,
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **fields) -> Address:
        """Change the given fields of an address.

        ``is_default=True`` makes it the default. The default flag cannot be
        cleared directly; another address has to be made the default instead.
        """
        from identity.user.events import AddressUpdated

        address = self._address(address_id)
        if is_default is False and address.is_default:
            raise InvalidState("Make another address the default instead")

        with atomic_change(self):
            for field, value in fields.items():
                if value is not None:
                    setattr(address, field, value)
            if is_default:
                self._make_default(address)
            self.updated_at = _now()

        self.raise_(
            AddressUpdated(
                user_id=self.id,
                address_id=address.id,
                is_default=address.is_default,
            )
        )
        return address

    def remove_address(self, address_id) -> None:
        from identity.user.events import AddressRemoved

        address = self._address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)
            # The default passes to the oldest remaining address
            if was_default and self.addresses:
                self.addresses[0].is_default = True
            self.updated_at = _now()

        self.raise_(AddressRemoved(user_id=self.id, address_id=address_id))
