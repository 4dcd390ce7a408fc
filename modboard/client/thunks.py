"""Data-loading thunks with explicit pending / fulfilled / rejected outcomes.

An action creator built by :func:`create_data_loading_thunk` returns a thunk.
Dispatching the thunk dispatches ``<name>/pending`` immediately and returns an
awaitable; awaiting it runs the loader, then ``on_data`` side effects, then
dispatches ``<name>/fulfilled``. Any failure dispatches ``<name>/rejected``
instead, and nothing scheduled after the failing step runs.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import uuid4

if TYPE_CHECKING:
    from modboard.client.api import ApiClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

GetState = Callable[[], dict[str, Any]]
Dispatch = Callable[[Any], Any]
Thunk = Callable[[Dispatch, GetState, "ApiClient"], Awaitable[Any]]


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None
    error: BaseException | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Pending:
    request_id: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Err:
    reason: BaseException


LoadState = Pending | Ok | Err


async def resolved(value: Any = None) -> Any:
    return value


def create_data_loading_thunk(
    name: str,
    loader: Callable[..., Awaitable[Any]],
    on_data: Callable[[Any, Dispatch, GetState], Any] | None = None,
    condition: Callable[..., bool] | None = None,
) -> Callable[..., Thunk]:
    """Build an action creator for ``name``.

    ``loader(api, *args, **kwargs)`` fetches the data. ``on_data(data,
    dispatch, get_state)`` may be sync or async; its return value becomes the
    fulfilled payload. ``condition(state, *args, **kwargs)`` returning False
    skips the thunk entirely and the awaitable resolves to ``None``.
    """

    def action_creator(*args: Any, **kwargs: Any) -> Thunk:
        def thunk(dispatch: Dispatch, get_state: GetState, api: ApiClient) -> Awaitable[Ok | Err | None]:
            if condition is not None and not condition(get_state(), *args, **kwargs):
                return resolved(None)

            meta = {"request_id": uuid4().hex, "args": args, "kwargs": kwargs}
            dispatch(Action(f"{name}/pending", meta=meta))

            async def run() -> Ok | Err:
                try:
                    data = await loader(api, *args, **kwargs)
                    if on_data is not None:
                        data = on_data(data, dispatch, get_state)
                        if inspect.isawaitable(data):
                            data = await data
                except Exception as exc:
                    logger.warning("%s rejected: %s", name, exc)
                    dispatch(Action(f"{name}/rejected", error=exc, meta=meta))
                    return Err(exc)

                dispatch(Action(f"{name}/fulfilled", payload=data, meta=meta))
                return Ok(data)

            return run()

        return thunk

    return action_creator
