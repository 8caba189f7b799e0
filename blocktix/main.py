import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from blocktix.config import Settings, get_settings
from blocktix.errors import BlockTixError
from blocktix.middleware.security import setup_security_middleware
from blocktix.routers import (
    events_router,
    tickets_router,
    orders_router,
    admin_router,
    auth_router,
    accounts_router
)
from blocktix.routers.auth import limiter
from blocktix.services.otp import OtpStore
from blocktix.services.seed import seed_sample_events
from blocktix.stores import InMemoryTicketStore, TicketStore, build_store

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(BlockTixError)
    async def blocktix_error_handler(request: Request, exc: BlockTixError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(status_code=429, content={"message": f"Rate limit exceeded: {exc.detail}"})

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, store: Optional[TicketStore] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        current = app.state.store
        if (
            settings.auto_seed_sample_events
            and isinstance(current, InMemoryTicketStore)
            and not current.list_events()
        ):
            seed_sample_events(current)
        yield

    app = FastAPI(
        title="BlockTix",
        description="Event ticketing with resale rules and an append-only ledger",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.store = store if store is not None else build_store(settings)
    app.state.otp_store = OtpStore(ttl_seconds=settings.otp_ttl_seconds)

    # Add rate limiter to app state
    app.state.limiter = limiter

    if settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: settings

    setup_security_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(events_router)
    app.include_router(tickets_router)
    app.include_router(orders_router)
    app.include_router(admin_router)
    app.include_router(auth_router)
    app.include_router(accounts_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
