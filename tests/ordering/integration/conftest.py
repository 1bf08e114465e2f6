import pytest
from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product
from identity.domain import identity
from identity.user.credentials import hash_password, issue_credential
from identity.user.user import Role, User


@pytest.fixture
def stock_product():
    """Persist catalogue products and return their ids."""

    def _make(name="Desk Lamp", price=40.0, stock=5, sku="HM-LAMP-01"):
        with catalogue.domain_context():
            category = Category.create(name=f"{name} Category")
            catalogue.repository_for(Category).add(category)
            product = Product.create(
                name=name,
                description=f"{name} for the integration suite",
                price=price,
                category_id=category.id,
                sku=sku,
                images=[f"https://img.example.com/{sku.lower()}.jpg"],
                stock=stock,
            )
            catalogue.repository_for(Product).add(product)
            return str(product.id)

    return _make


@pytest.fixture
def product_state():
    def _state(product_id):
        with catalogue.domain_context():
            product = catalogue.repository_for(Product).get(product_id)
            return product.stock, product.total_orders

    return _state


def _user(name, email, role=Role.CUSTOMER.value):
    with identity.domain_context():
        user = User.register(name=name, email=email, password_hash=hash_password("secret1"), role=role)
        identity.repository_for(User).add(user)
        return user


@pytest.fixture
def shopper():
    return _user("Sam Shopper", "sam@example.com")


@pytest.fixture
def other_shopper():
    return _user("Olive Other", "olive@example.com")


@pytest.fixture
def admin_user():
    return _user("Ada Admin", "ada@example.com", role=Role.ADMIN.value)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {issue_credential(user)}"}

    return _headers
