"""Motor de notificações — fonte única da aritmética temporal.

Função pura de (sessões, notificações existentes, agora) → novas notificações.
Sem estado interno: o chamador é dono do log acumulado e da entrega.

Regras por sessão (independentes):
- "pre-<id>"  (alert):    status SCHEDULED e início em (0, 15] minutos
- "post-<id>" (reminder): agora >= meia-noite de (data + 1 dia) e status != COMPLETED

A deduplicação é feita contra a união de `existing` (lidas ou não) e do que
já foi emitido nesta mesma chamada.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, time, timedelta

from emargement.domain.enums import NotificationType, TrainingStatus
from emargement.domain.models import Notification, TrainingSession
from emargement.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

PRE_SESSION_PREFIX = "pre-"
POST_SESSION_PREFIX = "post-"
DEFAULT_PRE_SESSION_WINDOW = timedelta(minutes=15)


def pre_session_id(session_id: str) -> str:
    return f"{PRE_SESSION_PREFIX}{session_id}"


def post_session_id(session_id: str) -> str:
    return f"{POST_SESSION_PREFIX}{session_id}"


def format_date_fr(session: TrainingSession) -> str:
    """Data no formato DD/MM/YYYY."""
    return session.date.strftime("%d/%m/%Y")


def start_of_day_after(session: TrainingSession) -> datetime:
    """Meia-noite local do dia seguinte à sessão."""
    return datetime.combine(session.date + timedelta(days=1), time.min)


def is_pre_session_due(
    session: TrainingSession,
    now: datetime,
    window: timedelta = DEFAULT_PRE_SESSION_WINDOW,
) -> bool:
    if session.status != TrainingStatus.SCHEDULED:
        return False
    remaining = session.start_at() - now
    return timedelta(0) < remaining <= window


def is_post_session_overdue(session: TrainingSession, now: datetime) -> bool:
    if session.status == TrainingStatus.COMPLETED:
        return False
    return now >= start_of_day_after(session)


def _pre_session_notification(session: TrainingSession, now: datetime) -> Notification:
    return Notification(
        id=pre_session_id(session.id),
        title="Formation imminente",
        message=(
            f'La formation "{session.training_name}" commence dans 15 min. '
            "Pensez à faire signer les participants."
        ),
        type=NotificationType.ALERT,
        timestamp=now,
        training_id=session.id,
    )


def _post_session_notification(session: TrainingSession, now: datetime) -> Notification:
    return Notification(
        id=post_session_id(session.id),
        title="Session non clôturée",
        message=(
            f'Oubli de signature ? La session "{session.training_name}" '
            f"du {format_date_fr(session)} n'est pas clôturée par le formateur."
        ),
        type=NotificationType.REMINDER,
        timestamp=now,
        training_id=session.id,
    )


def check_notifications(
    sessions: Iterable[TrainingSession],
    existing: Iterable[Notification],
    now: datetime,
    pre_session_window: timedelta = DEFAULT_PRE_SESSION_WINDOW,
) -> list[Notification]:
    """Deriva as notificações novas para o instante `now`.

    `now` é um datetime local naive, na mesma referência que as datas das
    sessões. Nunca bloqueia nem faz I/O.
    """
    seen: set[str] = {n.id for n in existing}
    emitted: list[Notification] = []

    for session in sessions:
        pre_id = pre_session_id(session.id)
        if pre_id not in seen and is_pre_session_due(session, now, pre_session_window):
            emitted.append(_pre_session_notification(session, now))
            seen.add(pre_id)

        post_id = post_session_id(session.id)
        if post_id not in seen and is_post_session_overdue(session, now):
            emitted.append(_post_session_notification(session, now))
            seen.add(post_id)

    if emitted:
        logger.info(
            "notifications_derived",
            extra={"count": len(emitted), "ids": [n.id for n in emitted]},
        )
    return emitted
