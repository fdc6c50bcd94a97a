"""
Turn script text into individual statements.

Comments are dropped and runs of whitespace outside literals collapse to a
single space, so ``"SELECT   1\\n  FROM t;"`` becomes ``"SELECT 1 FROM t"``.
"""
from __future__ import annotations
import typing as t

from dbscript.config import ScriptConfig
from dbscript.constants import (
    DEFAULT_BLOCK_COMMENT_END_DELIMITER,
    DEFAULT_BLOCK_COMMENT_START_DELIMITER,
    DEFAULT_COMMENT_PREFIX,
    DEFAULT_STATEMENT_SEPARATOR,
    EOF_STATEMENT_SEPARATOR,
    FALLBACK_STATEMENT_SEPARATOR,
)
from dbscript.errors import ScriptParseError
from dbscript.scanner import ScannerState, contains_sql_script_delimiters

_WHITESPACE = frozenset(" \r\n\t")


def split_sql_script(
    script: str,
    separator: str = DEFAULT_STATEMENT_SEPARATOR,
    comment_prefix: str = DEFAULT_COMMENT_PREFIX,
    block_comment_start: str = DEFAULT_BLOCK_COMMENT_START_DELIMITER,
    block_comment_end: str = DEFAULT_BLOCK_COMMENT_END_DELIMITER,
    *,
    source: t.Any = None,
) -> list[str]:
    """
    Split *script* on *separator*, honouring quotes, escapes and comments.

    Separators are not part of the returned statements.  A line comment
    without a trailing newline ends the scan; a block comment without its
    end delimiter raises :class:`ScriptParseError` naming *source*.
    """
    for name, value in (
        ("separator", separator),
        ("comment_prefix", comment_prefix),
        ("block_comment_start", block_comment_start),
        ("block_comment_end", block_comment_end),
    ):
        if not value:
            raise ValueError(f"{name!r} must not be empty")

    statements: list[str] = []
    buf: list[str] = []
    state = ScannerState()
    i, n = 0, len(script)

    while i < n:
        ch = script[i]
        if state.advance(ch):
            buf.append(ch)
            i += 1
            continue

        if not state.quoted:
            if script.startswith(separator, i):
                if buf:
                    statements.append("".join(buf))
                    buf = []
                i += len(separator)
                continue
            if script.startswith(comment_prefix, i):
                eol = script.find("\n", i)
                if eol < 0:
                    break
                i = eol + 1
                continue
            if script.startswith(block_comment_start, i):
                end = script.find(block_comment_end, i)
                if end < 0:
                    raise ScriptParseError(
                        f"Missing block comment end delimiter: {block_comment_end}", source
                    )
                i = end + len(block_comment_end)
                continue
            if ch in _WHITESPACE:
                if not buf or buf[-1] == " ":
                    i += 1
                    continue
                ch = " "

        buf.append(ch)
        i += 1

    tail = "".join(buf)
    if tail.strip():
        statements.append(tail)
    return statements


def resolve_separator(script: str, separator: str | None = None) -> str:
    """
    Pick the separator actually used for *script*: ``;`` when none is
    configured, newline when the chosen one never occurs outside quotes.
    """
    if separator is None:
        separator = DEFAULT_STATEMENT_SEPARATOR
    if separator != EOF_STATEMENT_SEPARATOR and not contains_sql_script_delimiters(
        script, separator
    ):
        separator = FALLBACK_STATEMENT_SEPARATOR
    return separator


def split_statements(
    script: str, config: ScriptConfig | None = None, source: t.Any = None
) -> list[str]:
    """
    Resolve the separator for *script* and split it using *config*.

    A blank script, including one that held only whole‑line comments before
    reading, yields no statements instead of an error.
    """
    config = config or ScriptConfig()
    if not script.strip():
        return []
    return split_sql_script(
        script,
        resolve_separator(script, config.separator),
        config.comment_prefix,
        config.block_comment_start,
        config.block_comment_end,
        source=source,
    )
