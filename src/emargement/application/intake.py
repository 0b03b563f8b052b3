"""Intake de convenções: resultado do parser → sessões de formação.

Uma sessão por data extraída. Para formações multi-dia, cada sessão recebe
o sufixo " (Jour k)" e cópias próprias dos participantes. Sem datas, usa
a data de hoje.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Protocol

from emargement.ai.contracts.intake import IntakeResult
from emargement.domain.enums import TrainingStatus
from emargement.domain.models import Participant, TrainingSession
from emargement.domain.protocols.session_store import SessionStoreProtocol
from emargement.observability.logging import get_logger
from emargement.utils.ids import new_id

logger: logging.Logger = get_logger(__name__)


class DocumentParser(Protocol):
    async def parse(self, content: bytes, mime_type: str) -> IntakeResult: ...


def build_sessions_from_intake(
    result: IntakeResult,
    trainer_name: str,
    today: date,
    id_factory: Callable[[], str] = new_id,
) -> list[TrainingSession]:
    """Expande o resultado do intake em N sessões irmãs (função pura)."""
    dates = result.dates or [today]
    multi_day = len(dates) > 1

    sessions: list[TrainingSession] = []
    for index, session_date in enumerate(dates, start=1):
        suffix = f" (Jour {index})" if multi_day else ""
        sessions.append(
            TrainingSession(
                id=id_factory(),
                company_name=result.company_name,
                training_name=result.training_name + suffix,
                date=session_date,
                status=TrainingStatus.SCHEDULED,
                trainer_name=trainer_name,
                participants=[
                    Participant(id=id_factory(), name=p.name, email=p.email, role=p.role)
                    for p in result.participants
                ],
            )
        )
    return sessions


class IntakeService:
    """Orquestra parser → expansão → store.create (tudo ou nada)."""

    def __init__(
        self,
        parser: DocumentParser,
        store: SessionStoreProtocol,
        trainer_name: str,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._parser = parser
        self._store = store
        self._trainer_name = trainer_name
        self._today = today

    async def ingest(self, content: bytes, mime_type: str) -> list[TrainingSession]:
        """Raises IntakeError sem criar nenhuma sessão se o parser falhar."""
        result = await self._parser.parse(content, mime_type)
        if not result.dates:
            logger.info("intake_dates_missing_using_today")
        sessions = build_sessions_from_intake(result, self._trainer_name, self._today())
        created = self._store.create(sessions)
        logger.info(
            "intake_completed",
            extra={"sessions": len(created), "participants": len(result.participants)},
        )
        return created
