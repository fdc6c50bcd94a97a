"""
dbscript – run SQL scripts statement by statement over an async connection.

Logging goes through loguru and is off by default; turn it on with
``logger.enable("dbscript")``.
"""
from __future__ import annotations

from loguru import logger

from dbscript.config import ConfigError, Environment, ScriptConfig, load
from dbscript.constants import (
    DEFAULT_BLOCK_COMMENT_END_DELIMITER,
    DEFAULT_BLOCK_COMMENT_START_DELIMITER,
    DEFAULT_COMMENT_PREFIX,
    DEFAULT_STATEMENT_SEPARATOR,
    EOF_STATEMENT_SEPARATOR,
    FALLBACK_STATEMENT_SEPARATOR,
)
from dbscript.errors import (
    ScriptError,
    ScriptParseError,
    ScriptReadError,
    ScriptStatementFailedError,
    UncategorizedScriptError,
)
from dbscript.executor import execute_sql_script, run_statement
from dbscript.reader import read_script, read_script_lines
from dbscript.scanner import contains_sql_script_delimiters
from dbscript.source import ScriptSource
from dbscript.splitter import resolve_separator, split_sql_script, split_statements

__version__ = "0.1.0"

logger.disable("dbscript")

__all__ = [
    "ConfigError",
    "DEFAULT_BLOCK_COMMENT_END_DELIMITER",
    "DEFAULT_BLOCK_COMMENT_START_DELIMITER",
    "DEFAULT_COMMENT_PREFIX",
    "DEFAULT_STATEMENT_SEPARATOR",
    "EOF_STATEMENT_SEPARATOR",
    "Environment",
    "FALLBACK_STATEMENT_SEPARATOR",
    "ScriptConfig",
    "ScriptError",
    "ScriptParseError",
    "ScriptReadError",
    "ScriptSource",
    "ScriptStatementFailedError",
    "UncategorizedScriptError",
    "contains_sql_script_delimiters",
    "execute_sql_script",
    "load",
    "read_script",
    "read_script_lines",
    "resolve_separator",
    "run_statement",
    "split_sql_script",
    "split_statements",
]
