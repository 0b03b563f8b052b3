"""Ações de operador que alteram uma sessão de formação."""

from __future__ import annotations

from enum import StrEnum


class SessionAction(StrEnum):
    """Ações canônicas aplicadas via máquina de estados."""

    FINALIZE = "FINALIZE"
    """Formador assina e encerra a sessão (→ COMPLETED)."""

    RENAME_TRAINER = "RENAME_TRAINER"
    """Troca do formador; invalida a assinatura de uma sessão encerrada."""

    RENAME_COMPANY = "RENAME_COMPANY"
    """Troca da empresa cliente; sem efeitos colaterais."""

    SIGN_PARTICIPANT = "SIGN_PARTICIPANT"
    """Assinatura de presença de um participante."""

    ADD_PARTICIPANT = "ADD_PARTICIPANT"
    """Inclusão de participante não previsto na convenção."""
