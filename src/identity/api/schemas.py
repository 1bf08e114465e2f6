"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from identity.user.credentials import MAX_PASSWORD_BYTES, password_fits
from identity.user.user import User


def _password_within_bcrypt_limit(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
    return value


# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "phone": "+1-555-0123",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=72)
    phone: str | None = Field(None, max_length=20)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str) -> str:
        return _password_within_bcrypt_limit(value)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "s3cret-pass"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=72)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str) -> str:
        return _password_within_bcrypt_limit(value)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Jane Smith", "phone": "+1-555-0456"}]}}

    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "street": "1 Market Street",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "US",
                    "is_default": False,
                }
            ]
        }
    }

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    street: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, min_length=1, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    is_default: bool | None = None


# --- Response Schemas ---


class AddressResponse(BaseModel):
    id: str
    street: str
    city: str
    state: str | None = None
    zip_code: str
    country: str
    is_default: bool

    @classmethod
    def from_address(cls, address) -> AddressResponse:
        return cls(
            id=str(address.id),
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            is_default=address.is_default,
        )


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    phone: str | None = None
    is_active: bool
    created_at: datetime | None = None
    addresses: list[AddressResponse] = []

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email.address,
            role=user.role,
            phone=user.phone.number if user.phone else None,
            is_active=user.is_active,
            created_at=user.created_at,
            addresses=[AddressResponse.from_address(a) for a in user.addresses],
        )


class AddressBookResponse(BaseModel):
    addresses: list[AddressResponse]

    @classmethod
    def from_user(cls, user: User) -> AddressBookResponse:
        return cls(addresses=[AddressResponse.from_address(a) for a in user.addresses])


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class CustomerListResponse(BaseModel):
    items: list[UserResponse]
    pagination: Pagination


class CustomerCountsResponse(BaseModel):
    total_customers: int
    new_customers: int


class CustomerStatistics(BaseModel):
    total_orders: int
    total_spent: float


class CustomerDetailResponse(BaseModel):
    customer: UserResponse
    orders: list[dict]
    statistics: CustomerStatistics
