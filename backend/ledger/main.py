"""FastAPI application."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .clock import LogicalClock
from .config import Settings, settings as default_settings
from .domain_errors import DomainError
from .problem_details import build_problem_details_response
from .routers import devices, repairs, system
from .services.device_registry import DeviceRegistry
from .services.repair_tracking import RepairTracking
from .store import LedgerStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: LedgerStore | None = None,
    clock: LogicalClock | None = None,
) -> FastAPI:
    """Build the API with its own store, clock and registries."""
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    # Production safety checks (fail closed on permissive CORS).
    if settings.ENV.lower() == "production" and any(origin == "*" for origin in settings.cors_origins):
        raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard).")

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Device registry and repair tracking ledger",
        debug=settings.DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", settings.CALLER_HEADER, settings.CLOCK_HEADER],
    )

    store = store or LedgerStore.from_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    device_registry = DeviceRegistry(store)
    app.state.store = store
    app.state.clock = clock or LogicalClock(settings.GENESIS_CLOCK)
    app.state.device_registry = device_registry
    app.state.repair_tracking = RepairTracking(store, device_registry.ownership())

    async def _handle_domain_error(_: Request, exc: DomainError):
        return build_problem_details_response(exc)

    app.add_exception_handler(DomainError, _handle_domain_error)

    # Include routers
    app.include_router(devices.router, prefix="/api/v1")
    app.include_router(repairs.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")

    logger.info("app.ready name=%s env=%s", settings.APP_NAME, settings.ENV)
    return app


app = create_app()
