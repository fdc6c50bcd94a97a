"""
Exceptions raised while reading, parsing or executing an SQL script.

Every error carries the ``source`` it relates to (a
:class:`dbscript.source.ScriptSource` or ``None``) so callers can tell
*which* script broke without parsing the message.
"""
from __future__ import annotations

import typing as t


class ScriptError(RuntimeError):
    """Base class for everything that goes wrong with a script."""

    def __init__(self, message: str, source: t.Any = None) -> None:
        super().__init__(message)
        self.source = source


class ScriptReadError(ScriptError):
    """The script text could not be obtained from its source."""

    def __init__(self, source: t.Any) -> None:
        super().__init__(f"Cannot read SQL script from {source}", source)


class ScriptParseError(ScriptError):
    """The script is structurally broken (e.g. an unterminated block comment)."""

    def __init__(self, reason: str, source: t.Any = None) -> None:
        self.reason = reason
        where = source if source is not None else "<unknown>"
        super().__init__(
            f"Failed to parse SQL script from resource [{where}]: {reason}", source
        )


def build_error_message(statement: str, statement_number: int, source: t.Any) -> str:
    return (
        f"Failed to execute SQL script statement #{statement_number} "
        f"of {source}: {statement}"
    )


class ScriptStatementFailedError(ScriptError):
    """One statement failed and the error policy did not tolerate it."""

    def __init__(self, statement: str, statement_number: int, source: t.Any) -> None:
        self.statement = statement
        self.statement_number = statement_number
        super().__init__(build_error_message(statement, statement_number, source), source)


class UncategorizedScriptError(ScriptError):
    """Any other failure surfaced while executing a script."""
