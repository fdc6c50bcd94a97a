from __future__ import annotations
import pathlib
import time

from loguru import logger

from dbscript.config import ScriptConfig
from dbscript.errors import (
    ScriptError,
    ScriptStatementFailedError,
    UncategorizedScriptError,
    build_error_message,
)
from dbscript.protocols import Connection
from dbscript.reader import read_script
from dbscript.source import ScriptSource
from dbscript.splitter import split_statements


def _is_drop(statement: str) -> bool:
    return statement.strip().lower().startswith("drop")


async def run_statement(
    connection: Connection,
    statement: str,
    statement_number: int,
    source: ScriptSource,
    config: ScriptConfig,
) -> int | None:
    """
    Execute one statement and return the rows it affected, summed over all
    result segments.  Returns ``None`` when the statement failed and the
    error policy tolerated it.
    """
    try:
        rows_affected = 0
        async for result in connection.create_statement(statement).execute():
            rows_affected += await result.rows_updated()
    except Exception as exc:
        if config.continue_on_error or (config.ignore_failed_drops and _is_drop(statement)):
            logger.opt(exception=exc).debug(
                build_error_message(statement, statement_number, source)
            )
            return None
        raise ScriptStatementFailedError(statement, statement_number, source) from exc

    logger.debug("{} returned as update count for SQL: {}", rows_affected, statement)
    return rows_affected


async def execute_sql_script(
    connection: Connection,
    source: ScriptSource | pathlib.Path | str,
    config: ScriptConfig | None = None,
) -> None:
    """
    Read, split and execute *source* against *connection*, one statement at
    a time and in script order.

    Statement *n + 1* is only submitted once statement *n* has finished.
    The first failure the error policy does not tolerate stops the script
    and is raised as :class:`ScriptStatementFailedError`; already executed
    statements are not rolled back.  A blank or comments‑only script
    succeeds without running anything.  The connection is neither opened
    nor closed here.
    """
    if not isinstance(source, ScriptSource):
        source = ScriptSource.from_path(source)
    config = config or ScriptConfig()

    logger.debug("Executing SQL script from {}", source)
    start = time.perf_counter()

    try:
        script = await read_script(
            source, config.comment_prefix, config.separator, config.block_comment_end
        )
        # Split everything up front: a parse error must surface before any
        # statement has run.
        statements = split_statements(script, config, source)
        for number, statement in enumerate(statements, start=1):
            await run_statement(connection, statement, number, source, config)
    except ScriptError:
        raise
    except Exception as exc:
        raise UncategorizedScriptError(
            f"Failed to execute database script from resource [{source}]", source
        ) from exc

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.debug("Executed SQL script from {} in {} ms.", source, elapsed_ms)
