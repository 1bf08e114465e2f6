"""Read-side lookups over user accounts."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from identity.user.user import Role, User
from shared.errors import NotFound
from shared.pagination import Page, fetch_all, paginate


def find_by_email(email: str) -> User | None:
    address = email.strip().lower()
    for user in fetch_all(current_domain.repository_for(User)):
        if user.email.address == address:
            return user
    return None


@dataclass(frozen=True)
class CustomerFilter:
    """Admin customer listing: customers only, optional name/email search."""

    search: str | None = None

    def matches(self, user: User) -> bool:
        if user.role != Role.CUSTOMER.value:
            return False
        if self.search:
            needle = self.search.lower()
            return needle in user.name.lower() or needle in user.email.address
        return True


def list_customers(customer_filter: CustomerFilter, page: int = 1, limit: int = 20) -> Page:
    users = [u for u in fetch_all(current_domain.repository_for(User)) if customer_filter.matches(u)]
    users.sort(key=lambda u: u.created_at, reverse=True)
    return paginate(users, page, limit)


NEW_CUSTOMER_DAYS = 30


def customer_statistics(now: datetime | None = None) -> dict:
    """How many customers there are, and how many joined in the last 30 days."""
    now = now or datetime.now(UTC)
    since = now - timedelta(days=NEW_CUSTOMER_DAYS)
    customers = [u for u in fetch_all(current_domain.repository_for(User)) if u.role == Role.CUSTOMER.value]
    return {
        "total_customers": len(customers),
        "new_customers": sum(1 for u in customers if u.created_at >= since),
    }


def get_customer(user_id: str) -> User:
    """A customer account by id. Admin accounts are not customers."""
    user = current_domain.repository_for(User).get(user_id)
    if user.role != Role.CUSTOMER.value:
        raise NotFound("Customer not found")
    return user
