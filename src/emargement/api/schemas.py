"""Payloads HTTP das ações de operador."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NameRequest(BaseModel):
    name: str


class SignatureRequest(BaseModel):
    signature: str
    """Imagem da assinatura (data URL base64), opaca para o núcleo."""


class IntakeRequest(BaseModel):
    content_base64: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)


class ObjectivesResponse(BaseModel):
    training_name: str
    objectives: list[str]
