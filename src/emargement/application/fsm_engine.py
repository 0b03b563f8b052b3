"""Engine FSM de sessões de formação — aplicação pura de ações.

- Puro: recebe uma sessão e devolve uma NOVA sessão (cópia profunda)
- Tudo ou nada: em erro, nada é devolvido e a entrada fica intacta
- Auditável: logs estruturados sem assinaturas nem e-mails
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from emargement.domain.enums import TrainingStatus
from emargement.domain.errors import InvalidTransitionError, NotFoundError, ValidationError
from emargement.domain.models import Participant, TrainingSession
from emargement.domain.session.actions import SessionAction
from emargement.domain.session.transitions import validate_transition
from emargement.observability.logging import get_logger
from emargement.utils.ids import new_id

logger: logging.Logger = get_logger(__name__)


@dataclass(slots=True)
class FSMDispatchResult:
    """Resultado da aplicação de uma ação.

    Contém:
    - session: sessão resultante (cópia; igual à entrada se changed=False)
    - changed: se algum campo foi alterado
    - actions: efeitos colaterais aplicados (ex.: CLEAR_TRAINER_SIGNATURE)
    """

    session: TrainingSession
    changed: bool = False
    actions: list[str] = field(default_factory=list)


def _require_text(value: str | None, field_name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name} must not be blank")
    return cleaned


class SessionFSMEngine:
    """Dispatcher determinístico das ações de operador."""

    def __init__(self, id_factory: Callable[[], str] = new_id) -> None:
        self._id_factory = id_factory
        self._handlers: dict[SessionAction, Callable[..., FSMDispatchResult]] = {
            SessionAction.FINALIZE: self._finalize,
            SessionAction.RENAME_TRAINER: self._rename_trainer,
            SessionAction.RENAME_COMPANY: self._rename_company,
            SessionAction.SIGN_PARTICIPANT: self._sign_participant,
            SessionAction.ADD_PARTICIPANT: self._add_participant,
        }

    def apply(
        self,
        session: TrainingSession,
        action: SessionAction,
        **payload: Any,
    ) -> FSMDispatchResult:
        """Aplica uma ação sobre uma cópia da sessão.

        Raises:
            InvalidTransitionError: ação ilegal no status atual
            ValidationError: campo obrigatório vazio
            NotFoundError: participante desconhecido
        """
        is_valid, reason = validate_transition(session.status, action)
        if not is_valid:
            logger.info(
                "session_transition_rejected",
                extra={
                    "session_id": session.id,
                    "status": session.status,
                    "action": action,
                    "reason": reason,
                },
            )
            raise InvalidTransitionError(reason, status=session.status, action=action)

        result = self._handlers[action](session, **payload)

        logger.debug(
            "session_transition_applied",
            extra={
                "session_id": session.id,
                "action": action,
                "from_status": session.status,
                "to_status": result.session.status,
                "changed": result.changed,
                "side_effects": result.actions,
            },
        )
        return result

    def _finalize(self, session: TrainingSession, signature: str) -> FSMDispatchResult:
        signature = _require_text(signature, "trainer signature")
        updated = session.model_copy(deep=True)
        updated.trainer_signature = signature
        updated.status = TrainingStatus.COMPLETED
        return FSMDispatchResult(session=updated, changed=True, actions=["STORE_TRAINER_SIGNATURE"])

    def _rename_trainer(self, session: TrainingSession, name: str) -> FSMDispatchResult:
        name = _require_text(name, "trainer name")
        if name == session.trainer_name:
            return FSMDispatchResult(session=session.model_copy(deep=True))

        updated = session.model_copy(deep=True)
        updated.trainer_name = name
        actions: list[str] = []
        # A assinatura capturada não atesta mais o novo nome
        if session.status == TrainingStatus.COMPLETED:
            updated.trainer_signature = None
            updated.status = TrainingStatus.IN_PROGRESS
            actions = ["CLEAR_TRAINER_SIGNATURE", "REOPEN_SESSION"]
        return FSMDispatchResult(session=updated, changed=True, actions=actions)

    def _rename_company(self, session: TrainingSession, name: str) -> FSMDispatchResult:
        name = _require_text(name, "company name")
        if name == session.company_name:
            return FSMDispatchResult(session=session.model_copy(deep=True))
        updated = session.model_copy(deep=True)
        updated.company_name = name
        return FSMDispatchResult(session=updated, changed=True)

    def _sign_participant(
        self, session: TrainingSession, participant_id: str, signature: str
    ) -> FSMDispatchResult:
        signature = _require_text(signature, "participant signature")
        if session.find_participant(participant_id) is None:
            raise NotFoundError(f"Participant {participant_id} not found in session {session.id}")

        updated = session.model_copy(deep=True)
        participant = updated.find_participant(participant_id)
        assert participant is not None
        if participant.has_signed:
            # Re-assinatura não é permitida por esta operação
            return FSMDispatchResult(session=updated)

        participant.signature = signature
        participant.is_present = True
        participant.has_signed = True
        return FSMDispatchResult(session=updated, changed=True)

    def _add_participant(self, session: TrainingSession, name: str) -> FSMDispatchResult:
        name = _require_text(name, "participant name")
        updated = session.model_copy(deep=True)
        updated.participants.append(Participant(id=self._id_factory(), name=name))
        return FSMDispatchResult(session=updated, changed=True, actions=["APPEND_PARTICIPANT"])
