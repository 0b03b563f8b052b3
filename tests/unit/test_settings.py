"""Testes unitários para config/settings.py."""

from __future__ import annotations

from datetime import time

import pytest

from emargement.config.settings import DEFAULT_START_TIME, Settings, get_settings
from emargement.domain.session import states


class TestSettingsDefaults:
    """Valores padrão."""

    def test_default_environment_is_development(self) -> None:
        s = Settings()
        assert s.environment == "development"
        assert s.is_development is True
        assert s.is_production is False

    def test_default_poll_cadence_and_window(self) -> None:
        s = Settings()
        assert s.notification_poll_interval_seconds == 60.0
        assert s.pre_session_window_minutes == 15

    def test_default_start_time_is_owned_by_domain(self) -> None:
        assert DEFAULT_START_TIME == time(9, 30)
        assert DEFAULT_START_TIME is states.DEFAULT_START_TIME

    def test_openai_disabled_by_default(self) -> None:
        assert Settings().openai_enabled is False


class TestSettingsValidation:
    """Métodos validate_* retornam listas de erros."""

    def test_invalid_notifier_backend(self) -> None:
        errors = Settings(notifier_backend="carrier-pigeon").validate_notifier_config()
        assert errors and "inválido" in errors[0]

    def test_webhook_requires_url(self) -> None:
        errors = Settings(notifier_backend="webhook").validate_notifier_config()
        assert any("NOTIFIER_WEBHOOK_URL" in e for e in errors)

    def test_webhook_with_url_is_valid(self) -> None:
        s = Settings(notifier_backend="webhook", notifier_webhook_url="https://hooks.example.com/x")
        assert s.validate_notifier_config() == []

    def test_openai_enabled_requires_key(self) -> None:
        assert Settings(openai_enabled=True).validate_openai_config()
        assert Settings(openai_enabled=True, openai_api_key="sk-test").validate_openai_config() == []

    def test_poller_interval_must_be_positive(self) -> None:
        assert Settings(notification_poll_interval_seconds=0).validate_poller_config()


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTIFIER_BACKEND", "noop")
    monkeypatch.setenv("PRE_SESSION_WINDOW_MINUTES", "20")
    get_settings.cache_clear()
    try:
        s = get_settings()
        assert s.notifier_backend == "noop"
        assert s.pre_session_window_minutes == 20
    finally:
        get_settings.cache_clear()
