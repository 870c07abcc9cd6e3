from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Sequence

import pytest
from fastapi.testclient import TestClient

from recommendations_api.app.core.config import settings
from recommendations_api.app.core.db import init_db
from recommendations_api.app.main import create_app


class ScriptedRandom:
    """Random source returning preset rolls and recording choice() pools."""

    def __init__(self, rolls: Sequence[float], pick: int = 0) -> None:
        self.rolls = list(rolls)
        self.pick = pick
        self.pools: list[list[int]] = []

    def random(self) -> float:
        return self.rolls.pop(0)

    def choice(self, seq: Sequence[int]) -> int:
        self.pools.append(list(seq))
        return seq[self.pick % len(seq)]


@pytest.fixture
def sqlite_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    db_path = tmp_path / "test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client(sqlite_db: Path) -> Generator[TestClient, None, None]:
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def recommendation_body() -> dict[str, str]:
    return {"name": "Falamansa - Xote dos Milagres", "link": "https://www.youtube.com/watch?v=chwyjJbcs1Y"}


@pytest.fixture
def scripted_random() -> type[ScriptedRandom]:
    return ScriptedRandom
