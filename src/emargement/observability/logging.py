"""Logging JSON do emargement.

Cada linha carrega `service` e `correlation_id` (request HTTP ou passada
do poller). Assinaturas são data URLs de imagem e e-mails são dados
pessoais dos participantes: ambos são mascarados antes da formatação.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from emargement.observability.middleware import get_correlation_id

REDACTED = "[redacted]"

_SENSITIVE_FIELDS = frozenset({"signature", "trainer_signature", "email"})


class SessionContextFilter(logging.Filter):
    """Completa o record com service/correlation_id e mascara dados pessoais."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        record.service = self._service_name
        for field in _SENSITIVE_FIELDS:
            if getattr(record, field, None):
                setattr(record, field, REDACTED)
        return True


def configure_logging(level: str, service_name: str) -> None:
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s %(service)s",
        rename_fields={"levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(SessionContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(logger: logging.Logger, component: str, reason: str | None = None) -> None:
    """Registra que um colaborador externo caiu no valor padrão.

    Ex.: objetivos do certificado sem OpenAI → `reason="disabled"`.
    """
    logger.info(
        "fallback_applied",
        extra={"fallback_used": True, "component": component, "reason": reason or "unknown"},
    )
