from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.application.interfaces.remote_backend import RemoteBackend
from pashuvision.application.sync.registration_sync import RegistrationSyncService
from pashuvision.config.settings import Settings, get_settings
from pashuvision.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_schema,
    create_session_factory,
)
from pashuvision.infrastructure.scheduler.sync_tasks import run_sync_loop
from pashuvision.infrastructure.services.breed_catalog import BreedCatalog
from pashuvision.infrastructure.sync.remote_backend import build_remote_backend
from pashuvision.interfaces.http.deps import get_app_settings
from pashuvision.interfaces.http.routers import (
    ai,
    analytics,
    breeds,
    dashboard,
    quick_id,
    registrations,
    reports,
)
from pashuvision.interfaces.http.routers import sync as sync_router
from pashuvision.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if settings.create_schema_on_startup:
        await create_schema(app.state.engine)

    stop_event = asyncio.Event()
    sync_task = None
    if settings.sync_interval_seconds > 0:
        sync_task = asyncio.create_task(
            run_sync_loop(app.state.sync_service, settings.sync_interval_seconds, stop_event)
        )
    try:
        yield
    finally:
        stop_event.set()
        if sync_task is not None:
            await sync_task
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def _build_ai_gateway(settings: Settings) -> AIGateway | None:
    if settings.openai_api_key is None:
        logger.warning("OPENAI_API_KEY is not set; AI endpoints will answer 503")
        return None
    from pashuvision.infrastructure.services.ai_gateway import OpenAIGateway

    return OpenAIGateway(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
        temperature=settings.openai_temperature,
    )


def create_app(
    *,
    settings: Settings | None = None,
    ai_gateway: AIGateway | None = None,
    remote_backend: RemoteBackend | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="PashuVision Backend",
        version="0.1.0",
        description="Cattle and buffalo registration with AI breed identification",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.ai_gateway = ai_gateway or _build_ai_gateway(settings)
    app.state.breed_catalog = BreedCatalog()
    remote = remote_backend or build_remote_backend(
        remote_url=settings.sync_remote_url,
        timeout=settings.sync_timeout_seconds,
        simulated_latency=settings.sync_simulated_latency_seconds,
    )
    app.state.sync_service = RegistrationSyncService(
        lambda: SQLAlchemyUnitOfWork(app.state.session_factory),
        remote,
        online=settings.sync_start_online,
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(registrations.router)
    api.include_router(dashboard.router)
    api.include_router(analytics.router)
    api.include_router(quick_id.router)
    api.include_router(ai.router)
    api.include_router(breeds.router)
    api.include_router(sync_router.router)
    api.include_router(reports.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
