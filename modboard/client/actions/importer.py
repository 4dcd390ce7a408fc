"""Import fetched API entities into the normalized store."""

from typing import Any

from modboard.client.store import on
from modboard.client.thunks import Action

ACCOUNTS_IMPORT = "accounts/import"


def import_fetched_accounts(accounts: list[dict[str, Any]]) -> Action:
    unique: dict[Any, dict[str, Any]] = {}
    for account in accounts:
        unique[account["id"]] = account
    return Action(ACCOUNTS_IMPORT, payload=list(unique.values()))


@on(ACCOUNTS_IMPORT)
def _import_accounts(state: dict[str, Any], action: Action) -> None:
    for account in action.payload:
        state["accounts"][account["id"]] = dict(account)
