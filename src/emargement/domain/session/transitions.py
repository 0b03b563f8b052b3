"""Tabela de legalidade das ações por status.

- ALLOWED_ACTIONS[status] = ações permitidas
- Estados terminais não aceitam nenhuma ação
- Validação pura: sem side effects
"""

from __future__ import annotations

from emargement.domain.enums import TrainingStatus
from emargement.domain.session.actions import SessionAction
from emargement.domain.session.states import TERMINAL_STATUSES

_OPEN_ACTIONS = frozenset(SessionAction)

ALLOWED_ACTIONS: dict[TrainingStatus, frozenset[SessionAction]] = {
    TrainingStatus.SCHEDULED: _OPEN_ACTIONS,
    TrainingStatus.IN_PROGRESS: _OPEN_ACTIONS,
    # Sessão encerrada: apenas correções de identidade
    TrainingStatus.COMPLETED: frozenset({
        SessionAction.RENAME_TRAINER,
        SessionAction.RENAME_COMPANY,
    }),
    TrainingStatus.ARCHIVED: frozenset(),
}


def validate_transition(
    status: TrainingStatus, action: SessionAction
) -> tuple[bool, str]:
    """Valida se uma ação é permitida no status atual.

    Retorna:
    - (True, ""): ação válida
    - (False, motivo): ação inválida

    Nunca lança exceção; apenas valida.
    """
    if status in TERMINAL_STATUSES:
        return False, f"Terminal status {status} accepts no action"

    if action not in ALLOWED_ACTIONS.get(status, frozenset()):
        return False, f"Action {action} not allowed from {status}"

    return True, ""
