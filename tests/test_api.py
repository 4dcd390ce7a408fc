"""JSON API tests: auth, reports, suggestions and relationships."""

from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import select

from factories import bearer, make_account, make_report, make_user
from modboard.core.config import settings
from modboard.main import app
from modboard.models import ActionLog, Follow, FollowRecommendation, FollowRecommendationMute


def test_login_returns_token_usable_for_me(session_local) -> None:
    user_id, account_id = make_user(session_local, "alice")

    with TestClient(app) as client:
        rejected = client.post("/api/v1/auth/login", json={"username": "alice", "password": "wrong"})
        token_response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret123"})
        token = token_response.json()["access_token"]
        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert rejected.status_code == 401
    assert token_response.status_code == 200
    assert me.status_code == 200
    assert me.json() == {"id": user_id, "username": "alice", "role": "USER", "account_id": account_id}


def test_file_report_and_moderate_it_over_api(session_local) -> None:
    reporter_user_id, reporter_account_id = make_user(session_local, "alice")
    moderator_user_id, moderator_account_id = make_user(session_local, "mod", role="MODERATOR")
    target_id = make_account(session_local, "spammer")

    with TestClient(app) as client:
        created = client.post(
            "/api/v1/reports",
            json={"account_id": target_id, "comment": "Buy followers"},
            headers=bearer(reporter_user_id),
        )
        assert created.status_code == 201
        report_id = created.json()["id"]
        assert created.json()["account_id"] == reporter_account_id
        assert created.json()["action_taken"] is False

        forbidden = client.post(f"/api/v1/admin/reports/{report_id}/resolve", headers=bearer(reporter_user_id))
        assert forbidden.status_code == 403

        resolved = client.post(f"/api/v1/admin/reports/{report_id}/resolve", headers=bearer(moderator_user_id))
        assert resolved.status_code == 200
        assert resolved.json()["action_taken"] is True
        assert resolved.json()["action_taken_by_account_id"] == moderator_account_id

        assigned = client.post(f"/api/v1/admin/reports/{report_id}/assign_to_self", headers=bearer(moderator_user_id))
        assert assigned.json()["assigned_account_id"] == moderator_account_id

        listing = client.get("/api/v1/admin/reports", params={"resolved": "true"}, headers=bearer(moderator_user_id))
        assert [item["id"] for item in listing.json()] == [report_id]

        reopened = client.post(f"/api/v1/admin/reports/{report_id}/reopen", headers=bearer(moderator_user_id))
        assert reopened.json()["action_taken"] is False
        assert reopened.json()["action_taken_by_account_id"] is None

        unassigned = client.post(f"/api/v1/admin/reports/{report_id}/unassign", headers=bearer(moderator_user_id))
        assert unassigned.json()["assigned_account_id"] is None

        missing = client.get("/api/v1/admin/reports/9999", headers=bearer(moderator_user_id))
        assert missing.status_code == 404

    with session_local() as db:
        actions = db.scalars(select(ActionLog.action).where(ActionLog.target_id == report_id).order_by(ActionLog.id)).all()
    assert actions == ["resolve", "assign_to_self", "reopen", "unassign"]


def test_report_for_unknown_account_is_rejected(session_local) -> None:
    user_id, _ = make_user(session_local, "alice")

    with TestClient(app) as client:
        response = client.post("/api/v1/reports", json={"account_id": 9999, "comment": "?"}, headers=bearer(user_id))

    assert response.status_code == 422


def test_admin_reports_require_token(session_local) -> None:
    reporter_id = make_account(session_local, "alice")
    target_id = make_account(session_local, "bob")
    make_report(session_local, reporter_id=reporter_id, target_id=target_id)

    with TestClient(app) as client:
        response = client.get("/api/v1/admin/reports")

    assert response.status_code in {401, 403}


def test_suggestions_merge_sources_and_skip_followed_and_muted(session_local) -> None:
    user_id, account_id = make_user(session_local, "alice")
    staff_pick = make_account(session_local, "staffpick")
    popular = make_account(session_local, "popular")
    followed = make_account(session_local, "friend")
    muted = make_account(session_local, "dismissed")

    with session_local() as db:
        db.add_all(
            [
                FollowRecommendation(account_id=account_id, target_account_id=staff_pick, source="past_interactions"),
                FollowRecommendation(account_id=None, target_account_id=staff_pick, source="staff"),
                FollowRecommendation(account_id=None, target_account_id=popular, source="global"),
                FollowRecommendation(account_id=None, target_account_id=followed, source="global"),
                FollowRecommendation(account_id=None, target_account_id=muted, source="global"),
                FollowRecommendation(account_id=None, target_account_id=account_id, source="global"),
                Follow(account_id=account_id, target_account_id=followed),
                FollowRecommendationMute(account_id=account_id, target_account_id=muted),
            ]
        )
        db.commit()

    with TestClient(app) as client:
        response = client.get("/api/v2/suggestions", params={"limit": 20}, headers=bearer(user_id))
        limited = client.get("/api/v2/suggestions", params={"limit": 1}, headers=bearer(user_id))

    assert response.status_code == 200
    body = response.json()
    assert [(entry["account"]["username"], entry["source"], entry["sources"]) for entry in body] == [
        ("staffpick", "past_interactions", ["past_interactions", "staff"]),
        ("popular", "global", ["global"]),
    ]
    assert len(limited.json()) == 1


def test_dismiss_suggestion_hides_global_recommendation(session_local) -> None:
    user_id, account_id = make_user(session_local, "alice")
    other_user_id, _ = make_user(session_local, "bob")
    popular = make_account(session_local, "popular")
    with session_local() as db:
        db.add(FollowRecommendation(account_id=None, target_account_id=popular, source="global"))
        db.commit()

    with TestClient(app) as client:
        dismissed = client.delete(f"/api/v1/suggestions/{popular}", headers=bearer(user_id))
        again = client.delete(f"/api/v1/suggestions/{popular}", headers=bearer(user_id))
        mine = client.get("/api/v2/suggestions", headers=bearer(user_id))
        theirs = client.get("/api/v2/suggestions", headers=bearer(other_user_id))

    assert dismissed.status_code == 200
    assert again.status_code == 200
    assert mine.json() == []
    assert [entry["account"]["id"] for entry in theirs.json()] == [popular]
    with session_local() as db:
        mutes = db.scalars(select(FollowRecommendationMute).where(FollowRecommendationMute.account_id == account_id)).all()
    assert len(mutes) == 1


def test_relationships_follow_request_order(session_local) -> None:
    user_id, account_id = make_user(session_local, "alice")
    bob = make_account(session_local, "bob")
    carol = make_account(session_local, "carol")
    with session_local() as db:
        db.add_all([Follow(account_id=account_id, target_account_id=bob), Follow(account_id=carol, target_account_id=account_id)])
        db.commit()

    with TestClient(app) as client:
        response = client.get(
            "/api/v1/accounts/relationships",
            params=[("id[]", str(carol)), ("id[]", str(bob)), ("id[]", "9999")],
            headers=bearer(user_id),
        )

    assert response.status_code == 200
    assert response.json() == [
        {"id": carol, "following": False, "followed_by": True},
        {"id": bob, "following": True, "followed_by": False},
    ]


def test_token_without_numeric_subject_is_rejected(session_local) -> None:
    make_user(session_local, "alice")
    token = jwt.encode({"sub": "alice"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    with TestClient(app) as client:
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_admin_report_lookup_requires_staff_and_existing_report(session_local) -> None:
    user_id, _ = make_user(session_local, "alice")
    moderator_user_id, _ = make_user(session_local, "mod", role="MODERATOR")

    with TestClient(app) as client:
        missing = client.get("/api/v1/admin/reports/9999", headers=bearer(moderator_user_id))
        forbidden = client.get("/api/v1/admin/reports/9999", headers=bearer(user_id))

    assert missing.status_code == 404
    assert missing.json() == {"detail": "Report not found"}
    assert forbidden.status_code == 403
