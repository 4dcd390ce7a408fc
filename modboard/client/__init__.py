"""Async client for follow suggestions with a normalized local store."""

from modboard.client.actions.accounts import fetch_relationships
from modboard.client.actions.importer import import_fetched_accounts
from modboard.client.actions.suggestions import dismiss_suggestion, fetch_suggestions
from modboard.client.api import ApiClient
from modboard.client.store import Store
from modboard.client.thunks import Action, Err, Ok, Pending, create_data_loading_thunk

__all__ = [
    "ApiClient",
    "Store",
    "Action",
    "Pending",
    "Ok",
    "Err",
    "create_data_loading_thunk",
    "fetch_suggestions",
    "dismiss_suggestion",
    "fetch_relationships",
    "import_fetched_accounts",
]
