"""SessionStore em memória — dono exclusivo da coleção de sessões.

Disciplina single-writer: toda mutação é ler → copiar → aplicar → trocar
sob o mesmo lock, de modo que o poller nunca observa uma sessão com
invariantes quebradas.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import date
from typing import Any

from emargement.application.fsm_engine import SessionFSMEngine
from emargement.domain.errors import NotFoundError, ValidationError
from emargement.domain.models import TrainingSession
from emargement.domain.protocols.session_store import SessionStoreProtocol
from emargement.domain.session.actions import SessionAction
from emargement.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

ChangeListener = Callable[[list[TrainingSession]], None]


class InMemorySessionStore(SessionStoreProtocol):
    """Armazenamento em memória com mutações atômicas."""

    def __init__(
        self,
        sessions: list[TrainingSession] | None = None,
        engine: SessionFSMEngine | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._sessions: list[TrainingSession] = [s.model_copy(deep=True) for s in sessions or []]
        self._engine = engine or SessionFSMEngine()
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        """Registra observador chamado após cada mutação confirmada.

        O observador roda sob o lock do store; não deve mutar o store.
        """
        self._listeners.append(listener)

    def list(self) -> list[TrainingSession]:  # noqa: A003
        with self._lock:
            return [s.model_copy(deep=True) for s in self._sessions]

    def get(self, session_id: str) -> TrainingSession:
        with self._lock:
            return self._index_of(session_id)[1].model_copy(deep=True)

    def list_for_trainer(self, trainer_name: str) -> list[TrainingSession]:
        """Sessões de um formador, da mais recente para a mais antiga."""
        sessions = [s for s in self.list() if s.trainer_name == trainer_name]
        return sorted(sessions, key=lambda s: s.date, reverse=True)

    def list_for_date(self, day: date) -> list[TrainingSession]:
        """Sessões de um dia (visão calendário)."""
        return [s for s in self.list() if s.date == day]

    def create(self, sessions: list[TrainingSession]) -> list[TrainingSession]:
        """Insere um lote no início da lista, preservando a ordem do lote."""
        batch = [s.model_copy(deep=True) for s in sessions]
        with self._lock:
            known = {s.id for s in self._sessions}
            batch_ids = [s.id for s in batch]
            duplicates = (known & set(batch_ids)) or {
                sid for sid in batch_ids if batch_ids.count(sid) > 1
            }
            if duplicates:
                raise ValidationError(f"Duplicate session ids: {sorted(duplicates)}")

            self._sessions = batch + self._sessions
            self._notify(self._snapshot_locked())

        logger.info("sessions_created", extra={"count": len(batch)})
        return [s.model_copy(deep=True) for s in batch]

    def sign_participant(
        self, session_id: str, participant_id: str, signature: str
    ) -> TrainingSession:
        return self._mutate(
            session_id,
            SessionAction.SIGN_PARTICIPANT,
            participant_id=participant_id,
            signature=signature,
        )

    def add_participant(self, session_id: str, name: str) -> TrainingSession:
        return self._mutate(session_id, SessionAction.ADD_PARTICIPANT, name=name)

    def rename_trainer(self, session_id: str, new_name: str) -> TrainingSession:
        return self._mutate(session_id, SessionAction.RENAME_TRAINER, name=new_name)

    def rename_company(self, session_id: str, new_name: str) -> TrainingSession:
        return self._mutate(session_id, SessionAction.RENAME_COMPANY, name=new_name)

    def finalize(self, session_id: str, trainer_signature: str) -> TrainingSession:
        return self._mutate(session_id, SessionAction.FINALIZE, signature=trainer_signature)

    def _mutate(self, session_id: str, action: SessionAction, **payload: Any) -> TrainingSession:
        with self._lock:
            index, current = self._index_of(session_id)
            result = self._engine.apply(current, action, **payload)
            if not result.changed:
                return result.session
            self._sessions[index] = result.session
            self._notify(self._snapshot_locked())

        logger.info(
            "session_mutated",
            extra={
                "session_id": session_id,
                "action": action,
                "status": result.session.status,
            },
        )
        return result.session.model_copy(deep=True)

    def _index_of(self, session_id: str) -> tuple[int, TrainingSession]:
        for index, session in enumerate(self._sessions):
            if session.id == session_id:
                return index, session
        raise NotFoundError(f"Session {session_id} not found")

    def _snapshot_locked(self) -> list[TrainingSession]:
        return [s.model_copy(deep=True) for s in self._sessions]

    def _notify(self, snapshot: list[TrainingSession]) -> None:
        # Chamado sob o lock: observadores recebem os snapshots na ordem de commit
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                # Persistência é problema do colaborador; a mutação já foi confirmada
                logger.error(
                    "session_listener_failed",
                    extra={"error": str(e), "error_type": type(e).__name__},
                )
