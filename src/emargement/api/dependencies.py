"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from emargement.ai.openai_client import ObjectivesGenerator
from emargement.application.intake import IntakeService
from emargement.application.notification_log import NotificationLog
from emargement.application.notification_poller import NotificationPoller
from emargement.config.settings import Settings
from emargement.infra.session_store_memory import InMemorySessionStore


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_session_store(request: Request) -> InMemorySessionStore:
    """Retorna o store de sessões ativo."""

    return request.app.state.session_store


def get_notification_log(request: Request) -> NotificationLog:
    return request.app.state.notification_log


def get_notification_poller(request: Request) -> NotificationPoller:
    return request.app.state.notification_poller


def get_intake_service(request: Request) -> IntakeService:
    return request.app.state.intake_service


def get_objectives_generator(request: Request) -> ObjectivesGenerator:
    return request.app.state.objectives_generator
