from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from modboard.db import session as db_session
from modboard.db.base import Base


@pytest.fixture()
def session_local(tmp_path: Path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'modboard_test.db'}", connect_args={"check_same_thread": False})
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr("modboard.main.engine", engine)
    monkeypatch.setattr("modboard.main.SessionLocal", testing_session_local)
    yield testing_session_local
    engine.dispose()
