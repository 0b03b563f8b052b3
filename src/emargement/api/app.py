"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from emargement.ai.openai_client import ConventionParser, ObjectivesGenerator
from emargement.api.routes import router
from emargement.application.intake import IntakeService
from emargement.application.notification_log import NotificationLog
from emargement.application.notification_poller import NotificationPoller
from emargement.config.settings import Settings, get_settings
from emargement.domain.errors import (
    IntakeError,
    InvalidTransitionError,
    NotFoundError,
    TrainingDomainError,
    ValidationError,
)
from emargement.infra.notifiers import create_notifier
from emargement.infra.session_store_memory import InMemorySessionStore
from emargement.infra.snapshot import JsonSnapshotStore
from emargement.observability.logging import configure_logging, get_logger
from emargement.observability.middleware import CorrelationIdMiddleware, get_correlation_id

logger = get_logger(__name__)

_ERROR_STATUS: dict[type[TrainingDomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    IntakeError: status.HTTP_502_BAD_GATEWAY,
}


async def _domain_error_handler(request: Request, exc: TrainingDomainError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info("domain_error", extra={"code": exc.code, "path": request.url.path})
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "detail": exc.message,
            "correlation_id": get_correlation_id(),
        },
    )


def _local_clock(tz_name: str):
    """Relógio local naive no fuso configurado (mesma referência das datas)."""
    tz = ZoneInfo(tz_name)

    def now() -> datetime:
        return datetime.now(tz).replace(tzinfo=None)

    return now


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria a aplicação FastAPI."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_notifier_config())
    validation_errors.extend(settings.validate_openai_config())
    validation_errors.extend(settings.validate_poller_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    clock = _local_clock(settings.timezone)

    store = InMemorySessionStore()
    notification_log = NotificationLog()
    if settings.snapshot_path:
        snapshot = JsonSnapshotStore(settings.snapshot_path)
        sessions, notifications = snapshot.load()
        store = InMemorySessionStore(sessions)
        notification_log = NotificationLog(notifications)
        store.subscribe(snapshot.save_sessions)
        notification_log.subscribe(snapshot.save_notifications)

    notifier = create_notifier(settings)
    poller = NotificationPoller(
        store,
        notification_log,
        notifier,
        interval_seconds=settings.notification_poll_interval_seconds,
        pre_session_window=timedelta(minutes=settings.pre_session_window_minutes),
        clock=clock,
    )

    def today() -> date:
        return clock().date()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.notification_poller_enabled:
            poller.start()
        try:
            yield
        finally:
            await poller.stop()
            notifier.close()

    app = FastAPI(title=settings.service_name, version=settings.version, lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_exception_handler(TrainingDomainError, _domain_error_handler)
    app.include_router(router)

    app.state.settings = settings
    app.state.session_store = store
    app.state.notification_log = notification_log
    app.state.notification_poller = poller
    app.state.intake_service = IntakeService(
        ConventionParser(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout_seconds=settings.openai_timeout_seconds,
        ),
        store,
        trainer_name=settings.default_trainer_name,
        today=today,
    )
    app.state.objectives_generator = ObjectivesGenerator(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout_seconds=settings.openai_timeout_seconds,
        enabled=settings.openai_enabled,
    )

    return app
