"""Shared fixtures: a TestClient bound to a throwaway SQLite database."""

from typing import Any, Dict, Iterator, List

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import event

from userposts import database
from userposts.core.config import get_settings
from userposts.main import app

fake = Faker()


def make_user_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": fake.name(),
        "mobile_number": fake.unique.random_number(digits=10, fix_len=True),
        "address": fake.address(),
    }
    payload.update(overrides)
    return payload


def make_post_payload(user_id: int, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "title": fake.sentence(nb_words=4),
        "description": fake.text(max_nb_chars=120),
        "user_id": user_id,
        "images": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def client(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    get_settings.cache_clear()
    with TestClient(app) as c:
        yield c
    get_settings.cache_clear()


@pytest.fixture
def sql_statements(client: TestClient) -> Iterator[List[str]]:
    """Every SQL statement sent to the database while the test runs."""
    statements: List[str] = []
    engine = database.engine

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def user(client: TestClient) -> Dict[str, Any]:
    resp = client.post("/users", json=make_user_payload())
    assert resp.status_code == 201
    return resp.json()["user"]
