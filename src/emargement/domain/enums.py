"""Enums de domínio para status de sessão e tipos de notificação."""

from __future__ import annotations

from enum import StrEnum


class TrainingStatus(StrEnum):
    """Ciclo de vida de uma sessão de formação."""

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class NotificationType(StrEnum):
    """Tipos de notificação emitidos pelo motor."""

    ALERT = "alert"
    """Sessão iminente (lembrete pré-sessão)."""

    REMINDER = "reminder"
    """Sessão não encerrada pelo formador (lembrete pós-sessão)."""
