"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(EmailAddress VO, PhoneNumber VO, SKU VO) and match the exact field names
expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PAYMENT_METHODS = ["credit_card", "debit_card", "paypal", "cash_on_delivery"]

# ---------- Identity Domain ----------


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation.

    Rules: exactly one @, no whitespace, dotted domain, no leading/trailing
    dots, no consecutive dots.
    """
    local = fake.user_name()[:20].strip(".")
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def valid_phone() -> str:
    """A North American number in +1-AAA-PPP-LLLL form (11 digits)."""
    area = random.randint(200, 999)
    prefix = random.randint(200, 999)
    line = random.randint(1000, 9999)
    return f"+1-{area}-{prefix}-{line}"


def registration_data() -> dict:
    """Generate RegisterRequest payload."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": fake.password(length=12),
        "phone": valid_phone(),
    }


# ---------- Catalogue Domain ----------


def valid_sku(prefix: str = "LT") -> str:
    """Generate SKU passing SKU VO validation: upper-case alphanumerics, '-' and '_'."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def category_data() -> dict:
    """Generate CreateCategoryRequest payload with a unique name."""
    return {
        "name": f"{fake.word().capitalize()} {uuid.uuid4().hex[:6]}",
        "description": fake.sentence()[:500],
    }


def product_data(category_id: str, stock: int | None = None) -> dict:
    """Generate CreateProductRequest payload matching schema field names."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.word().capitalize()} {uuid.uuid4().hex[:4]}"[:200],
        "description": fake.paragraph(nb_sentences=3)[:2000],
        "price": round(random.uniform(5, 400), 2),
        "category_id": category_id,
        "sku": valid_sku("PROD"),
        "stock": stock if stock is not None else random.randint(50, 500),
        "images": [f"https://picsum.photos/seed/{uuid.uuid4().hex[:8]}/600/600"],
        "specifications": [{"key": "Material", "value": fake.word()}],
    }


def review_data() -> dict:
    return {"rating": random.randint(1, 5), "comment": fake.sentence()[:500]}


# ---------- Ordering Domain ----------


def shipping_address() -> dict:
    """Generate a ShippingAddressSchema payload."""
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode()[:20],
        "country": "US",
    }


def order_data(product_ids: list[str], max_quantity: int = 3) -> dict:
    """Generate PlaceOrderRequest payload over 1-3 of the given products."""
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, 3)))
    return {
        "items": [{"product_id": pid, "quantity": random.randint(1, max_quantity)} for pid in chosen],
        "shipping_address": shipping_address(),
        "payment_method": random.choice(PAYMENT_METHODS),
        "notes": fake.sentence()[:200] if random.random() < 0.3 else None,
    }
