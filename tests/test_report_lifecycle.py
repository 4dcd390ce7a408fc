"""Report lifecycle service tests."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from factories import make_account, make_report, make_user
from modboard.core.exceptions import ReportNotFoundError, ReportValidationError
from modboard.models import Account, ActionLog, Report
from modboard.services import report_service
from modboard.services.report_service import ReportLifecycleManager


def _setup(session_local) -> tuple[int, int, int]:
    _, moderator_id = make_user(session_local, "mod", role="MODERATOR")
    reporter_id = make_account(session_local, "alice")
    target_id = make_account(session_local, "spammer")
    return moderator_id, reporter_id, target_id


def _log_count(db, report_id: int) -> int:
    return db.scalar(select(func.count(ActionLog.id)).where(ActionLog.target_type == "Report", ActionLog.target_id == report_id))


def test_resolve_sets_actor_time_and_logs_once(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, comment="spam")
    fixed_now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    with session_local() as db:
        manager = ReportLifecycleManager(db, clock=lambda: fixed_now)
        moderator = db.get(Account, moderator_id)
        report = manager.resolve(manager.get_report(report_id), moderator)

        assert report.action_taken
        assert report.action_taken_at.replace(tzinfo=timezone.utc) == fixed_now
        assert report.action_taken_by_account_id == moderator_id
        logs = manager.history(report)
        assert [(log.action, log.account_id, log.target_id) for log in logs] == [("resolve", moderator_id, report_id)]


def test_resolving_twice_overwrites_actor(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    _, admin_account_id = make_user(session_local, "boss", role="ADMIN")
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, resolved_by=moderator_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        report = manager.resolve(manager.get_report(report_id), db.get(Account, admin_account_id))
        assert report.action_taken_by_account_id == admin_account_id
        assert _log_count(db, report_id) == 1


def test_reopen_clears_resolution_fields(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, resolved_by=moderator_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        report = manager.reopen(manager.get_report(report_id), db.get(Account, moderator_id))
        assert report.action_taken_at is None
        assert report.action_taken_by_account_id is None
        assert not report.action_taken
        assert manager.history(report)[0].action == "reopen"


def test_reopen_on_open_report_still_logs(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        manager.reopen(manager.get_report(report_id), db.get(Account, moderator_id))
        assert _log_count(db, report_id) == 1


def test_assign_overwrites_and_unassign_is_idempotent(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    _, other_moderator_id = make_user(session_local, "mod2", role="MODERATOR")
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, assigned_account_id=other_moderator_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        moderator = db.get(Account, moderator_id)
        report = manager.assign_to_self(manager.get_report(report_id), moderator)
        assert report.assigned_account_id == moderator_id

        manager.unassign(report, moderator)
        report = manager.unassign(report, moderator)
        assert report.assigned_account_id is None
        assert [log.action for log in manager.history(report)] == ["unassign", "unassign", "assign_to_self"]


def test_assignment_is_independent_of_resolution(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        moderator = db.get(Account, moderator_id)
        report = manager.resolve(manager.get_report(report_id), moderator)
        report = manager.assign_to_self(report, moderator)
        assert report.action_taken
        assert report.assigned_account_id == moderator_id


def test_failed_log_write_rolls_back_state_change(session_local, monkeypatch) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    report_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id)

    def _broken_log_action(*args, **kwargs):
        raise RuntimeError("audit storage unavailable")

    monkeypatch.setattr(report_service, "log_action", _broken_log_action)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        with pytest.raises(RuntimeError):
            manager.resolve(manager.get_report(report_id), db.get(Account, moderator_id))

    with session_local() as db:
        report = db.get(Report, report_id)
        assert report.action_taken_at is None
        assert report.action_taken_by_account_id is None
        assert _log_count(db, report_id) == 0


def test_missing_report_raises(session_local) -> None:
    with session_local() as db:
        with pytest.raises(ReportNotFoundError):
            ReportLifecycleManager(db).get_report(404)


def test_list_reports_filters_by_resolution_and_target(session_local) -> None:
    moderator_id, reporter_id, target_id = _setup(session_local)
    other_target_id = make_account(session_local, "troll")
    open_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, comment="open")
    other_open_id = make_report(session_local, reporter_id=reporter_id, target_id=other_target_id, comment="open too")
    resolved_id = make_report(session_local, reporter_id=reporter_id, target_id=target_id, resolved_by=moderator_id)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        assert [report.id for report in manager.list_reports()] == [other_open_id, open_id]
        assert [report.id for report in manager.list_reports(resolved=True)] == [resolved_id]
        assert [report.id for report in manager.list_reports(target_account_id=target_id)] == [open_id]


def test_file_report_validates_target_and_comment(session_local) -> None:
    _, reporter_id, target_id = _setup(session_local)

    with session_local() as db:
        manager = ReportLifecycleManager(db)
        reporter = db.get(Account, reporter_id)
        report = manager.file_report(reporter, target_id, "  harassment  ")
        assert report.comment == "harassment"
        assert not report.action_taken

        with pytest.raises(ReportValidationError):
            manager.file_report(reporter, 9999, "nobody")
        with pytest.raises(ReportValidationError):
            manager.file_report(reporter, target_id, "x" * 1001)
