"""Normalized client-side state for accounts, relationships and suggestions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from modboard.client.api import ApiClient
from modboard.client.thunks import Action, Err, LoadState, Ok, Pending

logger = logging.getLogger(__name__)

Reducer = Callable[[dict[str, Any], Action], None]
Listener = Callable[[Action], None]

_REDUCERS: dict[str, list[Reducer]] = {}


def on(action_type: str) -> Callable[[Reducer], Reducer]:
    """Register a state handler for one action type."""

    def register(reducer: Reducer) -> Reducer:
        _REDUCERS.setdefault(action_type, []).append(reducer)
        return reducer

    return register


def initial_state() -> dict[str, Any]:
    return {
        "accounts": {},
        "relationships": {},
        "relationships_pending": set(),
        "suggestions": [],
        "loading": {},
    }


def _track_loading(state: dict[str, Any], action: Action) -> None:
    loading: dict[str, LoadState] = state["loading"]
    prefix, _, stage = action.type.rpartition("/")
    if stage == "pending":
        loading[prefix] = Pending(action.meta.get("request_id", ""))
    elif stage == "fulfilled":
        loading[prefix] = Ok(action.payload)
    elif stage == "rejected" and action.error is not None:
        loading[prefix] = Err(action.error)


class Store:
    """Holds state, runs thunks and notifies subscribers of every plain action."""

    def __init__(self, api: ApiClient, state: dict[str, Any] | None = None) -> None:
        self.api = api
        self._state = state if state is not None else initial_state()
        self._listeners: list[Listener] = []

    def get_state(self) -> dict[str, Any]:
        return self._state

    def dispatch(self, action: Action | Callable[..., Any]) -> Any:
        if not isinstance(action, Action):
            return action(self.dispatch, self.get_state, self.api)

        _track_loading(self._state, action)
        for reducer in _REDUCERS.get(action.type, []):
            reducer(self._state, action)
        for listener in list(self._listeners):
            listener(action)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
