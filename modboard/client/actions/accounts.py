"""Relationship fetching with in-flight de-duplication."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from modboard.client.store import on
from modboard.client.thunks import Action, create_data_loading_thunk, resolved

RELATIONSHIPS_FETCH = "relationships/fetch"


async def _load_relationships(api, account_ids: list[Any]) -> list[dict[str, Any]]:
    return await api.get_relationships(account_ids)


_fetch_relationship_batch = create_data_loading_thunk(RELATIONSHIPS_FETCH, _load_relationships)


def fetch_relationships(account_ids: Iterable[Any]):
    """Fetch relationships for ids that are neither loaded nor already requested."""
    requested = list(dict.fromkeys(account_ids))

    def thunk(dispatch, get_state, api):
        state = get_state()
        new_ids = [
            account_id
            for account_id in requested
            if account_id not in state["relationships"] and account_id not in state["relationships_pending"]
        ]
        if not new_ids:
            return resolved(None)
        return dispatch(_fetch_relationship_batch(new_ids))

    return thunk


def _batch_ids(action: Action) -> list[Any]:
    return list(action.meta["args"][0])


@on(f"{RELATIONSHIPS_FETCH}/pending")
def _relationships_pending(state: dict[str, Any], action: Action) -> None:
    state["relationships_pending"].update(_batch_ids(action))


@on(f"{RELATIONSHIPS_FETCH}/fulfilled")
def _relationships_fulfilled(state: dict[str, Any], action: Action) -> None:
    state["relationships_pending"].difference_update(_batch_ids(action))
    for relationship in action.payload:
        state["relationships"][relationship["id"]] = dict(relationship)


@on(f"{RELATIONSHIPS_FETCH}/rejected")
def _relationships_rejected(state: dict[str, Any], action: Action) -> None:
    state["relationships_pending"].difference_update(_batch_ids(action))
