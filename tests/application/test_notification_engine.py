"""Testes do motor de notificações (janelas temporais e dedupe)."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from emargement.application.notification_engine import (
    check_notifications,
    is_post_session_overdue,
    is_pre_session_due,
    start_of_day_after,
)
from emargement.domain.enums import NotificationType, TrainingStatus
from tests.conftest import make_session

TODAY = date(2024, 1, 10)


class TestPreSessionRule:
    def test_session_in_ten_minutes_fires_alert(self) -> None:
        now = datetime(2024, 1, 10, 13, 50)
        session = make_session(day=TODAY, start=time(14, 0))

        result = check_notifications([session], [], now)

        assert len(result) == 1
        assert result[0].id == "pre-s1"
        assert result[0].type == NotificationType.ALERT
        assert result[0].training_id == "s1"
        assert result[0].read is False
        assert "Sécurité incendie" in result[0].message
        assert result[0].timestamp == now

    def test_default_start_time_is_used(self) -> None:
        session = make_session(day=TODAY)
        assert is_pre_session_due(session, datetime(2024, 1, 10, 9, 20))
        assert not is_pre_session_due(session, datetime(2024, 1, 10, 9, 14))

    def test_window_boundaries(self) -> None:
        session = make_session(day=TODAY, start=time(14, 0))
        start = datetime(2024, 1, 10, 14, 0)
        assert is_pre_session_due(session, start - timedelta(minutes=15))
        assert not is_pre_session_due(session, start - timedelta(minutes=15, seconds=1))
        assert not is_pre_session_due(session, start)
        assert is_pre_session_due(session, start - timedelta(seconds=1))

    def test_only_scheduled_sessions(self) -> None:
        now = datetime(2024, 1, 10, 9, 20)
        for status in (TrainingStatus.IN_PROGRESS, TrainingStatus.COMPLETED):
            assert check_notifications([make_session(day=TODAY, status=status)], [], now) == []

    def test_not_regenerated_inside_window(self) -> None:
        session = make_session(day=TODAY, start=time(14, 0))
        log = []
        for minute in range(46, 60):
            log += check_notifications([session], log, datetime(2024, 1, 10, 13, minute))
        assert [n.id for n in log] == ["pre-s1"]

    def test_read_notification_still_suppresses(self) -> None:
        session = make_session(day=TODAY, start=time(14, 0))
        first = check_notifications([session], [], datetime(2024, 1, 10, 13, 50))
        first[0].read = True
        assert check_notifications([session], first, datetime(2024, 1, 10, 13, 55)) == []


class TestPostSessionRule:
    def test_yesterday_in_progress_fires_reminder(self) -> None:
        now = datetime(2024, 1, 11, 8, 0)
        session = make_session(day=TODAY, status=TrainingStatus.IN_PROGRESS)

        result = check_notifications([session], [], now)

        assert len(result) == 1
        assert result[0].id == "post-s1"
        assert result[0].type == NotificationType.REMINDER
        assert "10/01/2024" in result[0].message

        assert check_notifications([session], result, now) == []

    def test_threshold_is_midnight_of_next_day(self) -> None:
        session = make_session(day=TODAY)
        assert start_of_day_after(session) == datetime(2024, 1, 11, 0, 0)
        assert not is_post_session_overdue(session, datetime(2024, 1, 10, 23, 59, 59))
        assert is_post_session_overdue(session, datetime(2024, 1, 11, 0, 0))

    def test_completed_session_never_reminded(self) -> None:
        session = make_session(day=TODAY, status=TrainingStatus.COMPLETED)
        assert check_notifications([session], [], datetime(2024, 2, 1)) == []

    def test_scheduled_session_also_reminded(self) -> None:
        session = make_session(day=TODAY)
        result = check_notifications([session], [], datetime(2024, 1, 12))
        assert [n.id for n in result] == ["post-s1"]

    def test_cold_start_with_empty_log_refires_once(self) -> None:
        session = make_session(day=TODAY)
        now = datetime(2024, 1, 15)
        assert len(check_notifications([session], [], now)) == 1
        # Novo processo, log vazio: dispara de novo (trade-off aceito)
        assert len(check_notifications([session], [], now)) == 1


class TestDedupe:
    def test_duplicate_session_ids_in_one_call(self) -> None:
        sessions = [make_session(day=TODAY), make_session(day=TODAY)]
        result = check_notifications(sessions, [], datetime(2024, 1, 12))
        assert [n.id for n in result] == ["post-s1"]

    def test_both_rules_are_independent(self) -> None:
        # Hoje às 09:20 com uma sessão de ontem e outra de hoje
        now = datetime(2024, 1, 10, 9, 20)
        sessions = [
            make_session("today", day=TODAY),
            make_session("yesterday", day=TODAY - timedelta(days=1)),
        ]
        ids = {n.id for n in check_notifications(sessions, [], now)}
        assert ids == {"pre-today", "post-yesterday"}

    def test_accumulated_runs_never_repeat_ids(self) -> None:
        sessions = [
            make_session("a", day=TODAY, start=time(9, 0)),
            make_session("b", day=TODAY, start=time(10, 0)),
            make_session("c", day=TODAY + timedelta(days=1), status=TrainingStatus.COMPLETED),
        ]
        log = []
        clock = datetime(2024, 1, 10, 8, 0)
        while clock < datetime(2024, 1, 12, 12, 0):
            log = check_notifications(sessions, log, clock) + log
            clock += timedelta(minutes=7)

        ids = [n.id for n in log]
        assert len(ids) == len(set(ids))
        assert set(ids) == {"pre-a", "pre-b", "post-a", "post-b"}
