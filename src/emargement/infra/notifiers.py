"""Adaptadores de Notifier (log, noop, webhook HTTP).

Entrega é best-effort: nenhuma implementação propaga erro ao chamador.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from emargement.domain.protocols.notifier import Notifier
from emargement.observability.logging import get_logger

if TYPE_CHECKING:
    from emargement.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


class LoggingNotifier(Notifier):
    """Ambientes sem canal de alerta: registra a notificação no log."""

    def deliver(self, title: str, body: str) -> None:
        logger.info("notification_delivered", extra={"title": title, "body": body})


class NoopNotifier(Notifier):
    """Descarta entregas (testes, ambientes headless)."""

    def deliver(self, title: str, body: str) -> None:
        return None


class WebhookNotifier(Notifier):
    """Publica {"title", "body"} em uma URL de webhook."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def deliver(self, title: str, body: str) -> None:
        try:
            response = self._client.post(self._url, json={"title": title, "body": body})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(
                "webhook_notification_failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return
        logger.debug("webhook_notification_sent", extra={"status_code": response.status_code})

    def close(self) -> None:
        self._client.close()


def create_notifier(settings: Settings) -> Notifier:
    """Factory conforme NOTIFIER_BACKEND."""
    backend = settings.notifier_backend.lower()
    if backend == "webhook":
        if not settings.notifier_webhook_url:
            raise ValueError("notifier_backend=webhook requer NOTIFIER_WEBHOOK_URL")
        return WebhookNotifier(
            settings.notifier_webhook_url,
            timeout_seconds=settings.notifier_timeout_seconds,
        )
    if backend == "noop":
        return NoopNotifier()
    return LoggingNotifier()
