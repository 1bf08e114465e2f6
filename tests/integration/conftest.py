"""Fixtures for end-to-end tests against the assembled application.

Requests go through the real middleware, so each one runs inside the domain
context its URL prefix maps to.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from app import app

    return TestClient(app)


@pytest.fixture
def admin_token(client):
    """Create an administrator directly and log in through the API."""
    from identity.domain import identity
    from identity.user.credentials import hash_password
    from identity.user.user import Role, User

    with identity.domain_context():
        admin = User.register(
            name="Store Admin",
            email="admin@storefront.test",
            password_hash=hash_password("admin-pass"),
            role=Role.ADMIN.value,
        )
        identity.repository_for(User).add(admin)

    response = client.post("/auth/login", json={"email": "admin@storefront.test", "password": "admin-pass"})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def register(client):
    def _register(name="Casey Customer", email="casey@example.com", password="secret1"):
        response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201
        data = response.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register
