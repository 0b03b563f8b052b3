"""Geradores de identificadores."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Gera um identificador único (sessões e participantes)."""

    return str(uuid.uuid4())
