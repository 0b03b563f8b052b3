"""Clientes OpenAI para os colaboradores externos.

- ConventionParser: documento (imagem/PDF) → IntakeResult; falha → IntakeError
- ObjectivesGenerator: nome da formação → objetivos; falha → lista padrão
"""

from __future__ import annotations

import base64
import logging

from openai import APIError, APITimeoutError, AsyncOpenAI, OpenAIError
from openai.types.chat import ChatCompletion
from pydantic import ValidationError as PydanticValidationError

from emargement.ai import prompts
from emargement.ai.contracts.intake import IntakeResult
from emargement.ai.contracts.objectives import ObjectivesResult
from emargement.domain.errors import IntakeError
from emargement.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)

DEFAULT_OBJECTIVES: tuple[str, ...] = (
    "Acquérir les compétences clés liées à la formation",
    "Comprendre les enjeux théoriques et pratiques",
    "Mettre en œuvre les stratégies apprises",
    "Autonomie sur les outils présentés",
)


def _document_part(content: bytes, mime_type: str) -> dict[str, object]:
    data_url = f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"
    if mime_type == "application/pdf":
        return {"type": "file", "file": {"filename": "convention.pdf", "file_data": data_url}}
    return {"type": "image_url", "image_url": {"url": data_url}}


def _first_content(response: ChatCompletion) -> str:
    """Texto da primeira escolha; vazio quando o modelo não retorna nenhuma."""
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


class ConventionParser:
    """Extrai dados estruturados de uma convenção de formação."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout_seconds: float = 30.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._model = model
        self._timeout = timeout_seconds

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = AsyncOpenAI(api_key=self._api_key)
            except OpenAIError as e:
                raise IntakeError("Document parser is not configured") from e
        return self._client

    async def parse(self, content: bytes, mime_type: str) -> IntakeResult:
        """Chama o modelo e valida a resposta.

        Raises:
            IntakeError: erro de API, resposta vazia ou JSON fora do contrato
        """
        try:
            response = await self._get_client().chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": prompts.get_intake_prompt()},
                    {"role": "user", "content": [_document_part(content, mime_type)]},
                ],
                response_format={"type": "json_object"},
                temperature=0.0,
                timeout=self._timeout,
            )
        except (APIError, APITimeoutError) as e:
            logger.warning(
                "convention_parse_error",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise IntakeError(f"Document parsing failed: {type(e).__name__}") from e

        result_text = _first_content(response)
        if not result_text.strip():
            raise IntakeError("No data returned from document parser")
        try:
            return IntakeResult.model_validate_json(result_text)
        except PydanticValidationError as e:
            logger.warning("convention_parse_invalid", extra={"error_count": e.error_count()})
            raise IntakeError("Document parser returned an invalid payload") from e


class ObjectivesGenerator:
    """Gera objetivos pedagógicos para o certificado; nunca lança."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout_seconds: float = 10.0,
        enabled: bool = True,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._enabled = enabled
        self._client = client if client is not None else (
            AsyncOpenAI(api_key=api_key) if enabled else None
        )
        self._model = model
        self._timeout = timeout_seconds

    async def generate(self, training_name: str) -> list[str]:
        if not self._enabled or self._client is None:
            log_fallback(logger, "objectives_generation", reason="disabled")
            return list(DEFAULT_OBJECTIVES)

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompts.get_objectives_prompt(training_name)}],
                response_format={"type": "json_object"},
                temperature=0.4,
                max_tokens=300,
                timeout=self._timeout,
            )
            result_text = _first_content(response)
            if not result_text.strip():
                log_fallback(logger, "objectives_generation", reason="empty_response")
                return list(DEFAULT_OBJECTIVES)
            return ObjectivesResult.model_validate_json(result_text).objectives
        except (APIError, APITimeoutError) as e:
            log_fallback(logger, "objectives_generation", reason=type(e).__name__)
        except PydanticValidationError:
            log_fallback(logger, "objectives_generation", reason="parse_error")
        return list(DEFAULT_OBJECTIVES)
