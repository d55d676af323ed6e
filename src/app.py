"""GoldenBite FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.domain import catalogue
from identity.domain import identity
from ordering.domain import ordering
from shared.errors import register_error_handlers
from shared.logging import add_context, clear_context, configure_logging

configure_logging()
logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay from domain.toml.
identity.init()
catalogue.init()
ordering.init()
logger.info("Domains initialized", domains=[identity.name, catalogue.name, ordering.name])

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
# /ai reads several domains and pushes each context itself.
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/products": catalogue,
    "/stores": catalogue,
    "/carts": ordering,
    "/deals": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="GoldenBite API",
    description="Food ordering storefront — menu, carts, deals, orders, stores and chat assistant",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    clear_context()
    add_context(
        request_id=request.headers.get("x-request-id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )

    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check, docs and the assistant pass through
    return await call_next(request)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from assistant.api import router as assistant_router  # noqa: E402
from catalogue.api import product_router, store_router  # noqa: E402
from identity.api import router as identity_router  # noqa: E402
from ordering.api import cart_router, deal_router, order_router  # noqa: E402

app.include_router(identity_router)
app.include_router(product_router)
app.include_router(store_router)
app.include_router(cart_router)
app.include_router(deal_router)
app.include_router(order_router)
app.include_router(assistant_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "catalogue": {"name": catalogue.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
