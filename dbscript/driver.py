from __future__ import annotations
import typing as t
from contextlib import asynccontextmanager

import mysql.connector
from mysql.connector import errorcode
from mysql.connector.aio import connect
from loguru import logger

from dbscript.config import Environment


class CursorResult:
    """Result segment of one executed statement."""

    def __init__(self, rowcount: int) -> None:
        self.rowcount = rowcount

    async def rows_updated(self) -> int:
        # rowcount is -1 when the server reported nothing
        return max(self.rowcount, 0)


class MySQLStatement:
    def __init__(self, conn: t.Any, sql: str) -> None:
        self.conn = conn
        self.sql = sql

    async def execute(self) -> t.AsyncIterator[CursorResult]:
        async with await self.conn.cursor() as cur:
            await cur.execute(self.sql)
            if cur.description is not None:
                # SELECTs in a script still have to be drained; they
                # affect no rows
                await cur.fetchall()
                yield CursorResult(0)
            else:
                yield CursorResult(cur.rowcount)


class MySQLScriptConnection:
    """
    Adapts a ``mysql.connector.aio`` connection to
    :class:`dbscript.protocols.Connection`.  Each statement gets its own
    cursor; transaction handling stays with the owner of *conn*.
    """

    def __init__(self, conn: t.Any) -> None:
        self.conn = conn

    def create_statement(self, sql: str) -> MySQLStatement:
        return MySQLStatement(self.conn, sql)


async def _create_database(env: Environment) -> None:
    bootstrap_dsn = env.dsn().copy()
    bootstrap_dsn.pop("database", None)          # connect to server only
    tmp = await connect(**bootstrap_dsn, autocommit=True)
    try:
        async with await tmp.cursor() as cur:
            logger.info("Database {!r} not found – creating ...", env.database)
            await cur.execute(
                f"CREATE DATABASE `{env.database}` "
                "DEFAULT CHARACTER SET utf8mb4 "
                "COLLATE utf8mb4_unicode_ci"
            )
    finally:
        await tmp.close()


@asynccontextmanager
async def connection(env: Environment) -> t.AsyncIterator[MySQLScriptConnection]:
    """
    Async context‑manager that yields a **connection already inside the
    target database**, committing on a clean exit.  If the database does
    not yet exist (error 1049) it is created, but only when
    ``env.allow_destructive`` is *True* so production mis‑spells still fail
    loudly.
    """
    try:
        conn = await connect(**env.dsn(), autocommit=False)

    except mysql.connector.Error as err:
        if err.errno == errorcode.ER_BAD_DB_ERROR and env.allow_destructive:
            await _create_database(env)
            conn = await connect(**env.dsn(), autocommit=False)
        else:
            raise

    try:
        yield MySQLScriptConnection(conn)
        await conn.commit()
    finally:
        await conn.close()
