"""Follow suggestion actions."""

from __future__ import annotations

from typing import Any

from modboard.client.actions.accounts import fetch_relationships
from modboard.client.actions.importer import import_fetched_accounts
from modboard.client.store import on
from modboard.client.thunks import Action, Pending, create_data_loading_thunk

SUGGESTIONS_FETCH = "suggestions/fetch"
SUGGESTIONS_DISMISS = "suggestions/dismiss"
SUGGESTIONS_LIMIT = 20


async def _load_suggestions(api) -> list[dict[str, Any]]:
    return await api.get_suggestions(SUGGESTIONS_LIMIT)


async def _import_suggested_accounts(data: list[dict[str, Any]], dispatch, get_state) -> list[dict[str, Any]]:
    dispatch(import_fetched_accounts([entry["account"] for entry in data]))
    await dispatch(fetch_relationships([entry["account"]["id"] for entry in data]))
    return data


def _not_already_loading(state: dict[str, Any]) -> bool:
    return not isinstance(state["loading"].get(SUGGESTIONS_FETCH), Pending)


fetch_suggestions = create_data_loading_thunk(
    SUGGESTIONS_FETCH,
    _load_suggestions,
    _import_suggested_accounts,
    condition=_not_already_loading,
)


async def _delete_suggestion(api, account_id: Any) -> None:
    await api.delete_suggestion(account_id)


dismiss_suggestion = create_data_loading_thunk(SUGGESTIONS_DISMISS, _delete_suggestion)


@on(f"{SUGGESTIONS_FETCH}/fulfilled")
def _suggestions_fetched(state: dict[str, Any], action: Action) -> None:
    state["suggestions"] = [
        {"source": entry.get("source"), "sources": list(entry.get("sources", [])), "account_id": entry["account"]["id"]}
        for entry in action.payload
    ]


def _dismissed_account_id(action: Action) -> Any:
    if action.meta["args"]:
        return action.meta["args"][0]
    return action.meta["kwargs"]["account_id"]


@on(f"{SUGGESTIONS_DISMISS}/fulfilled")
def _suggestion_dismissed(state: dict[str, Any], action: Action) -> None:
    account_id = _dismissed_account_id(action)
    state["suggestions"] = [entry for entry in state["suggestions"] if entry["account_id"] != account_id]
