"""Account, relationship and suggestion schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AccountRead(BaseModel):
    id: int
    username: str
    display_name: str
    note: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RelationshipRead(BaseModel):
    id: int
    following: bool
    followed_by: bool


class SuggestionRead(BaseModel):
    source: str
    sources: list[str]
    account: AccountRead
