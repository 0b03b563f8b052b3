"""Contrato Pydantic do intake de convenções de formação."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IntakeParticipant(BaseModel):
    """Participante extraído do documento."""

    name: str = Field(..., min_length=1)
    email: str = ""
    role: str = ""


class IntakeResult(BaseModel):
    """Output do parser: dados estruturados da convenção."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str = Field(..., min_length=1)
    """Empresa cliente (identificada pelo SIRET, não o organismo de formação)."""

    training_name: str = Field(..., min_length=1)

    dates: list[date] = Field(default_factory=list)
    """Datas ISO 8601 (YYYY-MM-DD), em ordem; várias para formações multi-dia."""

    participants: list[IntakeParticipant] = Field(default_factory=list)
