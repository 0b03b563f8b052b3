"""Log de notificações do operador (mais recentes primeiro)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from emargement.domain.errors import NotFoundError
from emargement.domain.models import Notification
from emargement.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

LogListener = Callable[[list[Notification]], None]


class NotificationLog:
    """Coleção acumulada de notificações; é o conjunto de supressão do motor."""

    def __init__(self, notifications: list[Notification] | None = None) -> None:
        self._lock = threading.RLock()
        self._items: list[Notification] = [n.model_copy() for n in notifications or []]
        self._listeners: list[LogListener] = []

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def list(self) -> list[Notification]:  # noqa: A003
        with self._lock:
            return [n.model_copy() for n in self._items]

    def extend(self, notifications: list[Notification]) -> None:
        """Adiciona novas notificações no topo, preservando a ordem do lote."""
        if not notifications:
            return
        with self._lock:
            self._items = [n.model_copy() for n in notifications] + self._items
            self._notify(self._snapshot_locked())

    def mark_read(self, notification_id: str) -> Notification:
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == notification_id:
                    updated = item.model_copy(update={"read": True})
                    self._items[index] = updated
                    self._notify(self._snapshot_locked())
                    break
            else:
                raise NotFoundError(f"Notification {notification_id} not found")
        return updated.model_copy()

    def clear(self) -> int:
        """Remove todas as notificações; retorna quantas foram removidas."""
        with self._lock:
            removed = len(self._items)
            self._items = []
            self._notify([])
        logger.info("notifications_cleared", extra={"count": removed})
        return removed

    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.read)

    def _snapshot_locked(self) -> list[Notification]:
        return [n.model_copy() for n in self._items]

    def _notify(self, snapshot: list[Notification]) -> None:
        # Sob o lock, para que a persistência veja os estados na ordem de commit
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(
                    "notification_log_listener_failed",
                    extra={"error": str(e), "error_type": type(e).__name__},
                )
