"""Configurações da aplicação via variáveis de ambiente.

Nunca hardcode secrets (OPENAI_API_KEY, URL de webhook com token).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from emargement.domain.session.states import DEFAULT_START_TIME  # noqa: F401


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "emargement"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    timezone: str = "Europe/Paris"

    # Sessões
    default_trainer_name: str = "Rali El kohen"

    # Motor de notificações
    pre_session_window_minutes: int = 15  # Janela do lembrete pré-sessão
    notification_poll_interval_seconds: float = 60.0
    notification_poller_enabled: bool = True

    # Notifier (entrega ao ambiente do operador)
    notifier_backend: str = "log"  # log | noop | webhook
    notifier_webhook_url: str | None = None
    notifier_timeout_seconds: float = 5.0

    # OpenAI / IA (intake de convenções e objetivos de certificado)
    openai_api_key: str | None = None
    openai_enabled: bool = False  # Feature flag (fail-safe: false)
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 30.0

    # Persistência opcional (snapshot JSON de sessões + notificações)
    snapshot_path: str | None = None

    def validate_notifier_config(self) -> list[str]:
        """Valida backend do notifier.

        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        backend = self.notifier_backend.lower()
        valid_backends = {"log", "noop", "webhook"}
        if backend not in valid_backends:
            errors.append(
                f"NOTIFIER_BACKEND '{backend}' inválido. Valores válidos: {valid_backends}"
            )
        if backend == "webhook" and not self.notifier_webhook_url:
            errors.append("NOTIFIER_BACKEND=webhook requer NOTIFIER_WEBHOOK_URL configurado")
        if self.notifier_timeout_seconds <= 0:
            errors.append("NOTIFIER_TIMEOUT_SECONDS deve ser > 0")
        return errors

    def validate_openai_config(self) -> list[str]:
        """Se openai_enabled=True, exige OPENAI_API_KEY."""
        errors: list[str] = []
        if self.openai_enabled and not self.openai_api_key:
            errors.append("OPENAI_ENABLED=true requer OPENAI_API_KEY configurado")
        return errors

    def validate_poller_config(self) -> list[str]:
        """Valida cadência e janela do motor de notificações."""
        errors: list[str] = []
        if self.notification_poll_interval_seconds <= 0:
            errors.append("NOTIFICATION_POLL_INTERVAL_SECONDS deve ser > 0")
        if self.pre_session_window_minutes <= 0:
            errors.append("PRE_SESSION_WINDOW_MINUTES deve ser > 0")
        return errors

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings."""
    return Settings()
