"""Rotas HTTP (ações de operador sobre sessões e notificações)."""

from __future__ import annotations

import base64
import binascii
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from emargement.ai.openai_client import ObjectivesGenerator
from emargement.api.dependencies import (
    get_intake_service,
    get_notification_log,
    get_notification_poller,
    get_objectives_generator,
    get_session_store,
    get_settings,
)
from emargement.api.schemas import (
    IntakeRequest,
    NameRequest,
    ObjectivesResponse,
    SignatureRequest,
)
from emargement.application.intake import IntakeService
from emargement.application.notification_log import NotificationLog
from emargement.application.notification_poller import NotificationPoller
from emargement.config.settings import Settings
from emargement.domain.models import TrainingSession
from emargement.infra.session_store_memory import InMemorySessionStore
from emargement.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _dump(session: TrainingSession) -> dict[str, Any]:
    return session.model_dump(mode="json", by_alias=True)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/sessions")
def list_sessions(
    trainer: str | None = Query(None),
    day: date | None = Query(None, alias="date"),
    store: InMemorySessionStore = Depends(get_session_store),
) -> list[dict[str, Any]]:
    if trainer is not None:
        sessions = store.list_for_trainer(trainer)
    elif day is not None:
        sessions = store.list_for_date(day)
    else:
        sessions = store.list()
    return [_dump(s) for s in sessions]


@router.post("/sessions/intake", status_code=status.HTTP_201_CREATED)
async def intake_sessions(
    body: IntakeRequest,
    service: IntakeService = Depends(get_intake_service),
) -> list[dict[str, Any]]:
    """Cria sessões a partir de uma convenção enviada (base64)."""
    try:
        content = base64.b64decode(body.content_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="invalid_base64"
        ) from exc
    created = await service.ingest(content, body.mime_type)
    return [_dump(s) for s in created]


@router.get("/sessions/{session_id}")
def get_session(
    session_id: str, store: InMemorySessionStore = Depends(get_session_store)
) -> dict[str, Any]:
    return _dump(store.get(session_id))


@router.post("/sessions/{session_id}/participants", status_code=status.HTTP_201_CREATED)
def add_participant(
    session_id: str,
    body: NameRequest,
    store: InMemorySessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return _dump(store.add_participant(session_id, body.name))


@router.post("/sessions/{session_id}/participants/{participant_id}/signature")
def sign_participant(
    session_id: str,
    participant_id: str,
    body: SignatureRequest,
    store: InMemorySessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return _dump(store.sign_participant(session_id, participant_id, body.signature))


@router.put("/sessions/{session_id}/trainer")
def rename_trainer(
    session_id: str,
    body: NameRequest,
    store: InMemorySessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return _dump(store.rename_trainer(session_id, body.name))


@router.put("/sessions/{session_id}/company")
def rename_company(
    session_id: str,
    body: NameRequest,
    store: InMemorySessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return _dump(store.rename_company(session_id, body.name))


@router.post("/sessions/{session_id}/finalize")
def finalize_session(
    session_id: str,
    body: SignatureRequest,
    store: InMemorySessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return _dump(store.finalize(session_id, body.signature))


@router.get("/sessions/{session_id}/objectives")
async def session_objectives(
    session_id: str,
    store: InMemorySessionStore = Depends(get_session_store),
    generator: ObjectivesGenerator = Depends(get_objectives_generator),
) -> ObjectivesResponse:
    session = store.get(session_id)
    objectives = await generator.generate(session.training_name)
    return ObjectivesResponse(training_name=session.training_name, objectives=objectives)


@router.get("/notifications")
def list_notifications(
    log: NotificationLog = Depends(get_notification_log),
) -> dict[str, Any]:
    return {
        "unread": log.unread_count(),
        "items": [n.model_dump(mode="json", by_alias=True) for n in log.list()],
    }


@router.post("/notifications/check")
def check_notifications_now(
    poller: NotificationPoller = Depends(get_notification_poller),
) -> list[dict[str, Any]]:
    """Executa uma passada do motor imediatamente."""
    return [n.model_dump(mode="json", by_alias=True) for n in poller.run_once()]


@router.post("/notifications/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    log: NotificationLog = Depends(get_notification_log),
) -> dict[str, Any]:
    return log.mark_read(notification_id).model_dump(mode="json", by_alias=True)


@router.delete("/notifications")
def clear_notifications(log: NotificationLog = Depends(get_notification_log)) -> dict[str, int]:
    return {"removed": log.clear()}
