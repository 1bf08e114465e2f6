import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize every bounded context once. Each context's conftest pushes its
    own domain context around the tests that live under it.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Cheap hashes keep registration and login tests fast
    os.environ.setdefault("BCRYPT_ROUNDS", "4")
    os.environ.setdefault("JWT_SECRET", "test-secret")

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    identity.init()
    catalogue.init()
    ordering.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    from shared.db import drop_db, setup_db

    for domain in (identity, catalogue, ordering):
        setup_db(domain)

    yield

    for domain in (identity, catalogue, ordering):
        drop_db(domain)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    from shared.db import reset_data

    for domain in (identity, catalogue, ordering):
        reset_data(domain)
