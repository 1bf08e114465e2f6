"""Schema management and data reset for the storefront domains.

``setup_db`` and ``drop_db`` only act on SQL providers (sqlite, postgresql);
the memory provider needs no schema. ``reset_data`` works on every provider
and is what the test suite calls between tests.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = frozenset({"sqlite", "postgresql"})


def _sql_providers(domain: Domain):
    return [p for _, p in domain.providers.items() if p.conn_info["provider"] in SQL_PROVIDERS]


def _register_tables(domain: Domain, provider) -> None:
    """Build the DAO of every element stored in ``provider``.

    A table only joins the provider's SQLAlchemy metadata once its DAO exists.
    """
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    outbox = getattr(domain, "_outbox_repos", {}).get(provider.name)
    if outbox is not None:
        outbox._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every SQL provider of ``domain``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _register_tables(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    """Drop the tables created by ``setup_db``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))


def reset_data(domain: Domain) -> None:
    """Delete every record held by the domain's providers and event store."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
        domain.event_store.store._data_reset()
