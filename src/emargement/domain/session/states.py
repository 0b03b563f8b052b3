"""Conjuntos auxiliares de status.

SCHEDULED → IN_PROGRESS → COMPLETED; ARCHIVED é terminal e reservado
para arquivamento externo.
"""

from __future__ import annotations

from datetime import time

from emargement.domain.enums import TrainingStatus

DEFAULT_START_TIME: time = time(9, 30)
"""Início de sessão quando startTime não é informado."""

TERMINAL_STATUSES = frozenset({TrainingStatus.ARCHIVED})
"""Status sem nenhuma transição de saída."""

LOCKED_STATUSES = frozenset({TrainingStatus.COMPLETED, TrainingStatus.ARCHIVED})
"""Status em que a lista de presença está fechada (sem assinaturas/inclusões)."""
