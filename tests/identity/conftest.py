import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Run every identity test inside the identity domain context."""
    from identity.domain import identity

    with identity.domain_context():
        yield
