"""Poller cooperativo do motor de notificações.

Uma execução imediata no startup e depois a cada intervalo fixo (60s por
padrão). O poller (chamador) é quem registra no log e entrega ao Notifier,
exatamente uma vez por notificação nova.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from emargement.application.notification_engine import (
    DEFAULT_PRE_SESSION_WINDOW,
    check_notifications,
)
from emargement.application.notification_log import NotificationLog
from emargement.domain.models import Notification
from emargement.domain.protocols.notifier import Notifier
from emargement.domain.protocols.session_store import SessionStoreProtocol
from emargement.observability.logging import get_logger
from emargement.observability.middleware import correlation_scope

logger: logging.Logger = get_logger(__name__)

Clock = Callable[[], datetime]


class NotificationPoller:
    """Executa o motor sobre o estado atual do store e do log."""

    def __init__(
        self,
        store: SessionStoreProtocol,
        log: NotificationLog,
        notifier: Notifier,
        interval_seconds: float = 60.0,
        pre_session_window: timedelta = DEFAULT_PRE_SESSION_WINDOW,
        clock: Clock = datetime.now,
    ) -> None:
        self._store = store
        self._log = log
        self._notifier = notifier
        self._interval = interval_seconds
        self._window = pre_session_window
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        # Serializa derivar+registrar entre o loop e a rota de check manual
        self._run_lock = threading.Lock()

    def run_once(self, now: datetime | None = None) -> list[Notification]:
        """Uma passada síncrona: derivar, registrar, entregar."""
        now = now or self._clock()
        with correlation_scope("poll"):
            with self._run_lock:
                new = check_notifications(
                    self._store.list(), self._log.list(), now, self._window
                )
                self._log.extend(new)
            if new:
                logger.info("notifications_emitted", extra={"ids": [n.id for n in new]})
            for notification in new:
                self._deliver(notification)
        return new

    def _deliver(self, notification: Notification) -> None:
        try:
            self._notifier.deliver(notification.title, notification.message)
        except Exception as e:
            # A notificação continua no log para exibição in-app
            logger.warning(
                "notification_delivery_failed",
                extra={
                    "notification_id": notification.id,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )

    async def run_forever(self) -> None:
        """Loop periódico; cada passada roda fora do event loop.

        Entregas de Notifier podem bloquear (webhook HTTP), então nenhuma
        rota assíncrona espera por elas.
        """
        while True:
            try:
                await asyncio.to_thread(self.run_once)
            except Exception as e:
                logger.error(
                    "notification_poll_failed",
                    extra={"error": str(e), "error_type": type(e).__name__},
                )
            await asyncio.sleep(self._interval)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Agenda o loop no event loop corrente."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run_forever())
        logger.info("notification_poller_started", extra={"interval_seconds": self._interval})

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("notification_poller_stopped")
