"""Modelos de domínio: Participant, TrainingSession, Notification.

Serializam com os nomes camelCase do formato JSON persistido
(`model_dump(by_alias=True, mode="json")`) e aceitam snake_case na entrada.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from emargement.domain.enums import NotificationType, TrainingStatus
from emargement.domain.session.states import DEFAULT_START_TIME


class _DomainModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Participant(_DomainModel):
    """Participante de uma sessão.

    Invariante: has_signed implica signature presente e is_present.
    """

    id: str
    name: str
    email: str = ""
    role: str = ""
    has_signed: bool = False
    signature: str | None = None  # Imagem opaca (data URL base64)
    is_present: bool = False

    @model_validator(mode="after")
    def _check_signed(self) -> Participant:
        if self.has_signed and (not self.signature or not self.is_present):
            raise ValueError("hasSigned exige signature e isPresent")
        return self


class TrainingSession(_DomainModel):
    """Uma ocorrência de formação para uma empresa em uma data.

    Invariante: status COMPLETED implica trainer_signature presente.
    """

    id: str
    company_name: str
    training_name: str
    date: dt.date
    start_time: dt.time | None = None
    status: TrainingStatus = TrainingStatus.SCHEDULED
    trainer_name: str
    trainer_signature: str | None = None
    participants: list[Participant] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_completed(self) -> TrainingSession:
        if self.status == TrainingStatus.COMPLETED and not self.trainer_signature:
            raise ValueError("status COMPLETED exige trainerSignature")
        return self

    @property
    def effective_start_time(self) -> dt.time:
        """Horário de início (09:30 quando não informado)."""
        return self.start_time or DEFAULT_START_TIME

    def start_at(self) -> dt.datetime:
        """Início local (naive) da sessão: data + horário efetivo."""
        return dt.datetime.combine(self.date, self.effective_start_time)

    def find_participant(self, participant_id: str) -> Participant | None:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    @property
    def signed_count(self) -> int:
        return sum(1 for p in self.participants if p.has_signed)

    @property
    def signature_progress(self) -> int:
        """Percentual (0-100) de participantes que assinaram."""
        if not self.participants:
            return 0
        return round(self.signed_count * 100 / len(self.participants))

    @property
    def is_closed(self) -> bool:
        return self.status == TrainingStatus.COMPLETED


class Notification(_DomainModel):
    """Notificação derivada pelo motor.

    O id é determinístico ("pre-<sessão>" / "post-<sessão>") e funciona
    como chave de deduplicação.
    """

    id: str
    title: str
    message: str
    type: NotificationType
    timestamp: dt.datetime
    training_id: str | None = None
    read: bool = False
