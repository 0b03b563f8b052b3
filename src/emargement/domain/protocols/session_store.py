"""Protocolo de domínio para o armazenamento de sessões."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emargement.domain.models import TrainingSession


class SessionStoreProtocol(ABC):
    """Contrato do dono exclusivo da coleção de sessões.

    Leituras devolvem cópias; mutações são atômicas (tudo ou nada) e
    serializadas entre si.
    """

    @abstractmethod
    def list(self) -> list[TrainingSession]: ...  # noqa: A003

    @abstractmethod
    def get(self, session_id: str) -> TrainingSession: ...

    @abstractmethod
    def create(self, sessions: list[TrainingSession]) -> list[TrainingSession]: ...

    @abstractmethod
    def sign_participant(
        self, session_id: str, participant_id: str, signature: str
    ) -> TrainingSession: ...

    @abstractmethod
    def add_participant(self, session_id: str, name: str) -> TrainingSession: ...

    @abstractmethod
    def rename_trainer(self, session_id: str, new_name: str) -> TrainingSession: ...

    @abstractmethod
    def rename_company(self, session_id: str, new_name: str) -> TrainingSession: ...

    @abstractmethod
    def finalize(self, session_id: str, trainer_signature: str) -> TrainingSession: ...

    @abstractmethod
    def list_for_trainer(self, trainer_name: str) -> list[TrainingSession]: ...

    @abstractmethod
    def list_for_date(self, day: date) -> list[TrainingSession]: ...
