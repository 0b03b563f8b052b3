"""Contrato Pydantic da geração de objetivos pedagógicos."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ObjectivesResult(BaseModel):
    """Lista ordenada de objetivos curtos para o certificado."""

    objectives: list[str] = Field(..., min_length=1)
