from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from pashuvision.application.errors import ServiceUnavailable
from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.application.sync.registration_sync import RegistrationSyncService
from pashuvision.config.settings import Settings, get_settings
from pashuvision.infrastructure.db.session import SQLAlchemyUnitOfWork
from pashuvision.infrastructure.services.breed_catalog import BreedCatalog


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_optional_ai_gateway(request: Request) -> AIGateway | None:
    return getattr(request.app.state, "ai_gateway", None)


def get_ai_gateway(request: Request) -> AIGateway:
    gateway = get_optional_ai_gateway(request)
    if gateway is None:
        raise ServiceUnavailable("AI service is not configured")
    return gateway


def get_sync_service(request: Request) -> RegistrationSyncService:
    service = getattr(request.app.state, "sync_service", None)
    if service is None:
        raise RuntimeError("Sync service not configured")
    return service


def get_breed_catalog(request: Request) -> BreedCatalog:
    catalog = getattr(request.app.state, "breed_catalog", None)
    if catalog is None:
        raise RuntimeError("Breed catalog not configured")
    return catalog
