"""Record builders shared by the test modules."""

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from modboard.core.security import create_access_token, get_password_hash
from modboard.models import Account, Report
from modboard.services.account_service import create_user


def make_user(session_local, username: str, role: str = "USER", password: str = "secret123") -> tuple[int, int]:
    """Create a login and return ``(user_id, account_id)``."""
    with session_local() as db:
        user = create_user(db, username=username, hashed_password=get_password_hash(password), role=role)
        return user.id, user.account_id


def make_account(session_local, username: str) -> int:
    with session_local() as db:
        account = Account(username=username, display_name=username.title())
        db.add(account)
        db.commit()
        return account.id


def make_report(session_local, *, reporter_id: int, target_id: int, comment: str = "", resolved_by: int | None = None, **fields) -> int:
    if resolved_by is not None:
        fields.setdefault("action_taken_at", datetime.now(timezone.utc))
        fields["action_taken_by_account_id"] = resolved_by
    with session_local() as db:
        report = Report(account_id=reporter_id, target_account_id=target_id, comment=comment, **fields)
        db.add(report)
        db.commit()
        return report.id


def login(client: TestClient, username: str, password: str = "secret123"):
    return client.post("/login", data={"username": username, "password": password}, follow_redirects=False)


def bearer(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
