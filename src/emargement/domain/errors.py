"""Taxonomia de erros do domínio.

Todos os erros são locais e recuperáveis: reportados ao chamador,
nunca derrubam o processo.
"""

from __future__ import annotations


class TrainingDomainError(Exception):
    """Erro base do domínio de sessões de formação."""

    code: str = "domain_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(TrainingDomainError):
    """Sessão, participante ou notificação desconhecido."""

    code = "not_found"


class InvalidTransitionError(TrainingDomainError):
    """Operação viola as regras de legalidade da máquina de estados."""

    code = "invalid_transition"

    def __init__(self, message: str, status: str | None = None, action: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.action = action


class ValidationError(TrainingDomainError):
    """Campo obrigatório vazio (nome de formador, empresa, participante...)."""

    code = "validation_error"


class IntakeError(TrainingDomainError):
    """Falha do colaborador de intake; nenhuma sessão é criada."""

    code = "intake_failed"
