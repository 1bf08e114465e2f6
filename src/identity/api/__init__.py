"""Identity domain API package."""

from identity.api.routes import auth_router, customer_router

__all__ = ["auth_router", "customer_router"]
