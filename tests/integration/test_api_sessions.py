"""Fluxo HTTP das ações de operador sobre sessões."""

from __future__ import annotations

import base64
from datetime import date
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from emargement.ai.contracts.intake import IntakeResult
from emargement.domain.errors import IntakeError
from tests.conftest import make_session

SIG = "data:image/png;base64,SIG"


@pytest.fixture()
def seeded(client: TestClient) -> TestClient:
    client.app.state.session_store.create([make_session()])
    return client


def test_list_and_get(seeded: TestClient) -> None:
    listed = seeded.get("/sessions").json()
    assert [s["id"] for s in listed] == ["s1"]

    session = seeded.get("/sessions/s1").json()
    assert session["companyName"] == "ACME"
    assert session["participants"][0]["hasSigned"] is False


def test_filter_by_trainer_and_date(seeded: TestClient) -> None:
    assert len(seeded.get("/sessions", params={"trainer": "Marie Curie"}).json()) == 1
    assert seeded.get("/sessions", params={"trainer": "Nobody"}).json() == []
    assert len(seeded.get("/sessions", params={"date": "2024-01-10"}).json()) == 1


def test_unknown_session_is_404(client: TestClient) -> None:
    response = client.get("/sessions/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_sign_finalize_and_reopen(seeded: TestClient) -> None:
    signed = seeded.post("/sessions/s1/participants/p1/signature", json={"signature": SIG})
    assert signed.status_code == 200
    assert signed.json()["participants"][0]["isPresent"] is True

    finalized = seeded.post("/sessions/s1/finalize", json={"signature": SIG})
    assert finalized.json()["status"] == "COMPLETED"

    again = seeded.post("/sessions/s1/finalize", json={"signature": SIG})
    assert again.status_code == 409
    assert again.json()["error"] == "invalid_transition"

    blocked = seeded.post("/sessions/s1/participants", json={"name": "Carol"})
    assert blocked.status_code == 409

    renamed = seeded.put("/sessions/s1/trainer", json={"name": "Rali El kohen"})
    body = renamed.json()
    assert body["status"] == "IN_PROGRESS"
    assert body["trainerSignature"] is None


def test_add_participant_and_rename_company(seeded: TestClient) -> None:
    added = seeded.post("/sessions/s1/participants", json={"name": "Carol"})
    assert added.status_code == 201
    assert added.json()["participants"][-1]["name"] == "Carol"

    renamed = seeded.put("/sessions/s1/company", json={"name": "Globex"})
    assert renamed.json()["companyName"] == "Globex"


def test_blank_name_is_422(seeded: TestClient) -> None:
    response = seeded.put("/sessions/s1/company", json={"name": "  "})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_intake_creates_sessions(client: TestClient) -> None:
    result = IntakeResult.model_validate(
        {
            "companyName": "ACME",
            "trainingName": "SST",
            "dates": ["2024-01-10", "2024-01-11"],
            "participants": [{"name": "Alice"}],
        }
    )
    service = client.app.state.intake_service
    service._parser = AsyncMock()
    service._parser.parse.return_value = result

    response = client.post(
        "/sessions/intake",
        json={"content_base64": base64.b64encode(b"%PDF").decode(), "mime_type": "application/pdf"},
    )

    assert response.status_code == 201
    names = [s["trainingName"] for s in response.json()]
    assert names == ["SST (Jour 1)", "SST (Jour 2)"]
    assert len(client.get("/sessions").json()) == 2


def test_intake_failure_is_502_and_creates_nothing(client: TestClient) -> None:
    service = client.app.state.intake_service
    service._parser = AsyncMock()
    service._parser.parse.side_effect = IntakeError("parser down")

    response = client.post(
        "/sessions/intake",
        json={"content_base64": base64.b64encode(b"x").decode(), "mime_type": "image/png"},
    )

    assert response.status_code == 502
    assert client.get("/sessions").json() == []


def test_intake_rejects_invalid_base64(client: TestClient) -> None:
    response = client.post(
        "/sessions/intake", json={"content_base64": "###", "mime_type": "image/png"}
    )
    assert response.status_code == 422


def test_objectives_fallback_when_openai_disabled(seeded: TestClient) -> None:
    response = seeded.get("/sessions/s1/objectives")
    assert response.status_code == 200
    assert len(response.json()["objectives"]) == 4


def test_intake_uses_today_when_no_dates(client: TestClient, monkeypatch) -> None:
    service = client.app.state.intake_service
    service._parser = AsyncMock()
    service._parser.parse.return_value = IntakeResult(company_name="ACME", training_name="SST")
    monkeypatch.setattr(service, "_today", lambda: date(2024, 5, 2))

    response = client.post(
        "/sessions/intake",
        json={"content_base64": base64.b64encode(b"x").decode(), "mime_type": "image/png"},
    )

    assert [s["date"] for s in response.json()] == ["2024-05-02"]
