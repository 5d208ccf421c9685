"""Shared fixtures: a throwaway SQLite database with the full schema."""

from __future__ import annotations

from pathlib import Path

import pytest

from db import create_db_engine, create_session_factory, ensure_schema


@pytest.fixture
def session_factory(tmp_path: Path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'rosterstats.db'}")
    ensure_schema(engine)
    factory = create_session_factory(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def session(session_factory):
    with session_factory() as session:
        yield session
