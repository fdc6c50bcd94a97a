from __future__ import annotations

import asyncio

import pytest

from dbscript.config import ScriptConfig
from dbscript.errors import (
    ScriptParseError,
    ScriptReadError,
    ScriptStatementFailedError,
    UncategorizedScriptError,
)
from dbscript.executor import execute_sql_script, run_statement
from dbscript.source import ScriptSource

THREE = ScriptSource.from_string(
    "CREATE TABLE t (id INT);\nINSERT INTO missing VALUES (1);\nINSERT INTO t VALUES (2);\n",
    name="three.sql",
)


@pytest.mark.asyncio
async def test_statements_run_in_order(fake_connection):
    conn = fake_connection()
    await execute_sql_script(conn, THREE)
    assert conn.executed == [
        "CREATE TABLE t (id INT)",
        "INSERT INTO missing VALUES (1)",
        "INSERT INTO t VALUES (2)",
    ]


@pytest.mark.asyncio
async def test_failure_stops_remaining_statements(fake_connection):
    conn = fake_connection(failing={"INSERT INTO missing VALUES (1)"})
    with pytest.raises(ScriptStatementFailedError) as excinfo:
        await execute_sql_script(conn, THREE)

    err = excinfo.value
    assert conn.executed == ["CREATE TABLE t (id INT)", "INSERT INTO missing VALUES (1)"]
    assert err.statement_number == 2
    assert err.statement == "INSERT INTO missing VALUES (1)"
    assert err.source is THREE
    assert isinstance(err.__cause__, RuntimeError)
    assert str(err) == (
        "Failed to execute SQL script statement #2 of string [three.sql]: "
        "INSERT INTO missing VALUES (1)"
    )


@pytest.mark.asyncio
async def test_continue_on_error_runs_everything(fake_connection):
    conn = fake_connection(failing={"INSERT INTO missing VALUES (1)"})
    await execute_sql_script(conn, THREE, ScriptConfig(continue_on_error=True))
    assert len(conn.executed) == 3
    assert conn.executed[-1] == "INSERT INTO t VALUES (2)"


@pytest.mark.asyncio
async def test_ignore_failed_drops(fake_connection):
    source = ScriptSource.from_string("drop table missing;\nCREATE TABLE t (id INT);")
    conn = fake_connection(failing={"drop table missing"})
    await execute_sql_script(conn, source, ScriptConfig(ignore_failed_drops=True))
    assert conn.executed == ["drop table missing", "CREATE TABLE t (id INT)"]


@pytest.mark.asyncio
async def test_ignore_failed_drops_still_aborts_other_failures(fake_connection):
    source = ScriptSource.from_string("DROP TABLE missing;\nCREATE TABLE t (id INT);\nSELECT 1;")
    conn = fake_connection(failing={"DROP TABLE missing", "CREATE TABLE t (id INT)"})
    with pytest.raises(ScriptStatementFailedError) as excinfo:
        await execute_sql_script(conn, source, ScriptConfig(ignore_failed_drops=True))
    assert excinfo.value.statement_number == 2
    assert conn.executed == ["DROP TABLE missing", "CREATE TABLE t (id INT)"]


@pytest.mark.asyncio
async def test_failed_drop_aborts_without_policy(fake_connection):
    source = ScriptSource.from_string("DROP TABLE missing;\nCREATE TABLE t (id INT);")
    conn = fake_connection(failing={"DROP TABLE missing"})
    with pytest.raises(ScriptStatementFailedError):
        await execute_sql_script(conn, source)
    assert conn.executed == ["DROP TABLE missing"]


@pytest.mark.asyncio
async def test_parse_error_before_any_statement(fake_connection):
    source = ScriptSource.from_string("CREATE TABLE t (id INT);\nSELECT 1 /* oops")
    conn = fake_connection()
    with pytest.raises(ScriptParseError):
        await execute_sql_script(conn, source)
    assert conn.executed == []


@pytest.mark.asyncio
async def test_read_error_is_terminal(fake_connection, tmp_path):
    conn = fake_connection()
    with pytest.raises(ScriptReadError):
        await execute_sql_script(conn, tmp_path / "nope.sql")
    assert conn.executed == []


@pytest.mark.asyncio
async def test_path_source_accepted(fake_connection, tmp_path):
    path = tmp_path / "data.sql"
    path.write_text("INSERT INTO t VALUES (1);\nINSERT INTO t VALUES (2);\n", encoding="utf-8")
    conn = fake_connection()
    await execute_sql_script(conn, str(path))
    assert conn.executed == ["INSERT INTO t VALUES (1)", "INSERT INTO t VALUES (2)"]


@pytest.mark.asyncio
async def test_other_failures_are_uncategorized():
    class Broken:
        def create_statement(self, sql):
            return object()

    source = ScriptSource.from_string("SELECT 1;")
    # a statement without execute() is an error the policy cannot tolerate
    with pytest.raises(ScriptStatementFailedError):
        await execute_sql_script(Broken(), source)

    def explode():
        raise LookupError("no such resource")

    weird = ScriptSource("weird", opener=explode)
    with pytest.raises(UncategorizedScriptError) as excinfo:
        await execute_sql_script(Broken(), weird)
    assert isinstance(excinfo.value.__cause__, LookupError)
    assert excinfo.value.source is weird
    assert "weird" in str(excinfo.value)


@pytest.mark.asyncio
async def test_run_statement_sums_result_segments(fake_connection):
    conn = fake_connection(segments={"UPDATE t SET x = 1": [2, 3, 0]})
    rows = await run_statement(conn, "UPDATE t SET x = 1", 1, THREE, ScriptConfig())
    assert rows == 5


@pytest.mark.asyncio
async def test_run_statement_returns_none_when_tolerated(fake_connection):
    conn = fake_connection(failing={"  DROP TABLE x"})
    config = ScriptConfig(ignore_failed_drops=True)
    assert await run_statement(conn, "  DROP TABLE x", 1, THREE, config) is None


@pytest.mark.asyncio
async def test_tolerated_failures_are_logged(fake_connection, log_messages):
    conn = fake_connection(failing={"INSERT INTO missing VALUES (1)"})
    await execute_sql_script(conn, THREE, ScriptConfig(continue_on_error=True))
    assert any("statement #2 of string [three.sql]" in m for m in log_messages)
    assert any(m.startswith("1 returned as update count") for m in log_messages)
    assert any(m.startswith("Executed SQL script from string [three.sql]") for m in log_messages)


@pytest.mark.asyncio
async def test_statement_waits_for_previous_one():
    events: list[str] = []

    class Result:
        async def rows_updated(self):
            return 0

    class Statement:
        def __init__(self, sql):
            self.sql = sql

        async def execute(self):
            events.append(f"start {self.sql}")
            await asyncio.sleep(0.01 if self.sql == "A" else 0)
            events.append(f"end {self.sql}")
            yield Result()

    class Conn:
        def create_statement(self, sql):
            return Statement(sql)

    await execute_sql_script(Conn(), ScriptSource.from_string("A;B;C"))
    assert events == ["start A", "end A", "start B", "end B", "start C", "end C"]


@pytest.mark.asyncio
async def test_cancellation_is_not_wrapped():
    started = asyncio.Event()

    class Statement:
        async def execute(self):
            started.set()
            await asyncio.sleep(10)
            yield None

    class Conn:
        def create_statement(self, sql):
            return Statement()

    task = asyncio.create_task(execute_sql_script(Conn(), ScriptSource.from_string("SELECT 1;")))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_comments_only_script_runs_nothing(fake_connection):
    source = ScriptSource.from_string("-- nothing to do yet\n/* placeholder */\n")
    conn = fake_connection()
    await execute_sql_script(conn, source)
    assert conn.executed == []
