"""FSM de sessão de formação — status, ações e transições.

Exporta:
- SessionAction: ações de operador que passam pela máquina de estados
- validate_transition: validador puro
- TERMINAL_STATUSES / LOCKED_STATUSES
"""

from emargement.domain.session.actions import SessionAction
from emargement.domain.session.states import (
    DEFAULT_START_TIME,
    LOCKED_STATUSES,
    TERMINAL_STATUSES,
)
from emargement.domain.session.transitions import validate_transition

__all__ = [
    "SessionAction",
    "validate_transition",
    "TERMINAL_STATUSES",
    "LOCKED_STATUSES",
    "DEFAULT_START_TIME",
]
