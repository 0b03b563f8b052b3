from __future__ import annotations

from datetime import date, datetime, time

import pytest
from fastapi.testclient import TestClient

from emargement.api.app import create_app
from emargement.config.settings import Settings, get_settings
from emargement.domain.enums import TrainingStatus
from emargement.domain.models import Participant, TrainingSession


def make_session(
    session_id: str = "s1",
    day: date = date(2024, 1, 10),
    start: time | None = None,
    status: TrainingStatus = TrainingStatus.SCHEDULED,
    trainer_signature: str | None = None,
    participants: list[Participant] | None = None,
    trainer_name: str = "Marie Curie",
) -> TrainingSession:
    if status == TrainingStatus.COMPLETED and trainer_signature is None:
        trainer_signature = "data:image/png;base64,TRAINER"
    return TrainingSession(
        id=session_id,
        company_name="ACME",
        training_name="Sécurité incendie",
        date=day,
        start_time=start,
        status=status,
        trainer_name=trainer_name,
        trainer_signature=trainer_signature,
        participants=participants
        if participants is not None
        else [
            Participant(id="p1", name="Alice", email="alice@acme.fr", role="RH"),
            Participant(id="p2", name="Bob"),
        ],
    )


@pytest.fixture()
def session_factory():
    return make_session


@pytest.fixture()
def now() -> datetime:
    return datetime(2024, 1, 10, 9, 20)


@pytest.fixture()
def settings() -> Settings:
    return Settings(notification_poller_enabled=False, notifier_backend="noop")


@pytest.fixture()
def client(settings: Settings):
    get_settings.cache_clear()
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
