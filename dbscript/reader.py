from __future__ import annotations
import asyncio
import typing as t

from dbscript.constants import (
    DEFAULT_BLOCK_COMMENT_END_DELIMITER,
    DEFAULT_COMMENT_PREFIX,
    DEFAULT_STATEMENT_SEPARATOR,
)
from dbscript.errors import ScriptReadError
from dbscript.source import ScriptSource


def read_script_lines(
    lines: t.Iterable[str],
    comment_prefix: str | None = DEFAULT_COMMENT_PREFIX,
    separator: str | None = DEFAULT_STATEMENT_SEPARATOR,
    block_comment_end: str | None = DEFAULT_BLOCK_COMMENT_END_DELIMITER,
) -> str:
    """
    Join *lines* into one script, dropping lines that *start* with
    *comment_prefix*.  Comments further along a line are left for the
    splitter, and a line containing *block_comment_end* is always kept so
    block comments stay closed.
    """
    kept: list[str] = []
    for line in lines:
        if line.endswith("\n"):
            line = line[:-1]
        if (block_comment_end and block_comment_end in line) or not (
            comment_prefix and line.startswith(comment_prefix)
        ):
            kept.append(line)

    script = "\n".join(kept)
    return _append_separator_if_necessary(script, separator)


def _append_separator_if_necessary(script: str, separator: str | None) -> str:
    if separator is None:
        return script
    trimmed = separator.strip()
    if len(trimmed) == len(separator):
        return script
    # The separator carries trailing whitespace; give the last statement
    # the same ending if it already has the visible part.
    if script.endswith(trimmed):
        return script + separator[len(trimmed):]
    return script


def _read_source(
    source: ScriptSource,
    comment_prefix: str | None,
    separator: str | None,
    block_comment_end: str | None,
) -> str:
    with source.open_text() as fh:
        return read_script_lines(fh, comment_prefix, separator, block_comment_end)


async def read_script(
    source: ScriptSource,
    comment_prefix: str | None = DEFAULT_COMMENT_PREFIX,
    separator: str | None = DEFAULT_STATEMENT_SEPARATOR,
    block_comment_end: str | None = DEFAULT_BLOCK_COMMENT_END_DELIMITER,
) -> str:
    """
    Read *source* off the event loop and return the assembled script.

    I/O and decoding failures are raised as :class:`ScriptReadError`.
    """
    try:
        return await asyncio.to_thread(
            _read_source, source, comment_prefix, separator, block_comment_end
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptReadError(source) from exc
