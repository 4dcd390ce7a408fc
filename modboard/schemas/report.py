"""Report schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from modboard.core.config import settings


class ReportCreate(BaseModel):
    account_id: int
    comment: str = Field(default="", max_length=settings.report_comment_max_length)


class ReportRead(BaseModel):
    id: int
    account_id: int
    target_account_id: int
    comment: str
    action_taken: bool
    action_taken_at: datetime | None = None
    action_taken_by_account_id: int | None = None
    assigned_account_id: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
