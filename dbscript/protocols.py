"""
What the executor needs from a database connection.

Any object with these shapes works; :mod:`dbscript.driver` provides one for
``mysql.connector.aio``.
"""
from __future__ import annotations
import typing as t


@t.runtime_checkable
class Result(t.Protocol):
    async def rows_updated(self) -> int:
        """Number of rows affected by this result segment."""
        ...


@t.runtime_checkable
class Statement(t.Protocol):
    def execute(self) -> t.AsyncIterator[Result]:
        """Run the statement, yielding one or more result segments."""
        ...


@t.runtime_checkable
class Connection(t.Protocol):
    def create_statement(self, sql: str) -> Statement:
        ...
