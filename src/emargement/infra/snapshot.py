"""Persistência opcional em JSON (sessões + log de notificações).

Formato: {"sessions": [...], "notifications": [...]} com os campos camelCase.
Falhas são do colaborador: registradas em log, nunca propagadas às mutações.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from pydantic import TypeAdapter

from emargement.domain.models import Notification, TrainingSession
from emargement.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_sessions_adapter = TypeAdapter(list[TrainingSession])
_notifications_adapter = TypeAdapter(list[Notification])


class JsonSnapshotStore:
    """Grava e relê o estado persistido do host."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._sessions: list[TrainingSession] = []
        self._notifications: list[Notification] = []

    def load(self) -> tuple[list[TrainingSession], list[Notification]]:
        if not self._path.exists():
            return [], []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            sessions = _sessions_adapter.validate_python(data.get("sessions", []))
            notifications = _notifications_adapter.validate_python(data.get("notifications", []))
        except (OSError, ValueError) as e:
            logger.error(
                "snapshot_load_failed",
                extra={"path": str(self._path), "error_type": type(e).__name__},
            )
            return [], []
        with self._lock:
            self._sessions = sessions
            self._notifications = notifications
        logger.info(
            "snapshot_loaded",
            extra={"sessions": len(sessions), "notifications": len(notifications)},
        )
        return sessions, notifications

    def save_sessions(self, sessions: list[TrainingSession]) -> None:
        with self._lock:
            self._sessions = list(sessions)
            self._write_locked()

    def save_notifications(self, notifications: list[Notification]) -> None:
        with self._lock:
            self._notifications = list(notifications)
            self._write_locked()

    def _write_locked(self) -> None:
        payload = {
            "sessions": _sessions_adapter.dump_python(self._sessions, mode="json", by_alias=True),
            "notifications": _notifications_adapter.dump_python(
                self._notifications, mode="json", by_alias=True
            ),
        }
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            logger.error(
                "snapshot_write_failed",
                extra={"path": str(self._path), "error_type": type(e).__name__},
            )
