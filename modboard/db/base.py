"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from modboard.models import account as _account  # noqa: E402,F401
from modboard.models import action_log as _action_log  # noqa: E402,F401
from modboard.models import featured_tag as _featured_tag  # noqa: E402,F401
from modboard.models import follow as _follow  # noqa: E402,F401
from modboard.models import report as _report  # noqa: E402,F401
