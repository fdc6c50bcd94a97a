from __future__ import annotations

import pytest
from loguru import logger


class FakeResult:
    def __init__(self, rows: int) -> None:
        self.rows = rows

    async def rows_updated(self) -> int:
        return self.rows


class FakeStatement:
    def __init__(self, conn: "FakeConnection", sql: str) -> None:
        self.conn = conn
        self.sql = sql

    async def execute(self):
        self.conn.executed.append(self.sql)
        if self.sql in self.conn.failing:
            raise RuntimeError(f"boom: {self.sql}")
        for rows in self.conn.segments.get(self.sql, [1]):
            yield FakeResult(rows)


class FakeConnection:
    """Records every statement it is asked to run, in order."""

    def __init__(self, failing=(), segments=None) -> None:
        self.failing = set(failing)
        self.segments = segments or {}
        self.executed: list[str] = []

    def create_statement(self, sql: str) -> FakeStatement:
        return FakeStatement(self, sql)


@pytest.fixture
def fake_connection():
    return FakeConnection


@pytest.fixture
def log_messages():
    messages: list[str] = []
    logger.enable("dbscript")
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
    logger.disable("dbscript")
