"""Storefront FastAPI application.

One web process serves all three bounded contexts. Each request runs inside
the domain context that owns its URL prefix; the order workflow reaches the
catalogue and ordering stores through its own adapters.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time
import uuid

from catalogue.domain import catalogue
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from identity.domain import identity
from ordering.domain import ordering

from shared.errors import register_error_handlers
from shared.logging import bind_request, configure_logging, get_logger, log_request
from shared.settings import get_settings

configure_logging()
logger = get_logger(__name__)

# Initialised at import time so every uvicorn worker has registered domains
for _domain in (identity, catalogue, ordering):
    _domain.init()

from catalogue.api import category_router, product_router  # noqa: E402
from identity.api import auth_router, customer_router  # noqa: E402
from ordering.api.routes import order_router  # noqa: E402
from ordering.order.adapters import CatalogueProductStore, RepositoryOrderStore  # noqa: E402
from ordering.order.workflow import OrderWorkflow  # noqa: E402

settings = get_settings()

_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/customers": identity,
    "/products": catalogue,
    "/categories": catalogue,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """The domain serving ``path``, or None for unscoped paths like /health."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


def create_workflow() -> OrderWorkflow:
    return OrderWorkflow(
        products=CatalogueProductStore(attempts=settings.stock_retry_attempts),
        orders=RepositoryOrderStore(),
        settings=settings,
    )


app = FastAPI(
    title="Storefront API",
    description="Accounts, product catalogue and order workflow",
    version="0.1.0",
)
app.state.workflow = create_workflow()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Bind request log context and push the owning domain's context."""
    started = time.perf_counter()
    bind_request(
        request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
        method=request.method,
        path=request.url.path,
    )

    domain = _resolve_domain(request.url.path)
    if domain is None:
        response = await call_next(request)
    else:
        with domain.domain_context():
            response = await call_next(request)

    log_request(logger, started, response.status_code)
    return response


app.include_router(auth_router)
app.include_router(customer_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(order_router)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "domains": {domain.name: {"name": domain.name} for domain in (identity, catalogue, ordering)},
    }
