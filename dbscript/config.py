from __future__ import annotations
import os
import pathlib
import typing as t
import yaml

from dbscript.constants import (
    DEFAULT_BLOCK_COMMENT_END_DELIMITER,
    DEFAULT_BLOCK_COMMENT_START_DELIMITER,
    DEFAULT_COMMENT_PREFIX,
    DEFAULT_STATEMENT_SEPARATOR,
)

_DEFAULT_PATH = pathlib.Path("dbscript.config.yml")


class ConfigError(RuntimeError):
    """Raised for any user‑visible configuration problem."""


class ScriptConfig:
    """
    How a script is split and how statement failures are treated.

    ``separator=None`` means "use ``;``"; either way the executor falls back
    to a newline when the separator never occurs in the script.
    """

    def __init__(
        self,
        *,
        comment_prefix: str = DEFAULT_COMMENT_PREFIX,
        block_comment_start: str = DEFAULT_BLOCK_COMMENT_START_DELIMITER,
        block_comment_end: str = DEFAULT_BLOCK_COMMENT_END_DELIMITER,
        separator: str | None = DEFAULT_STATEMENT_SEPARATOR,
        continue_on_error: bool = False,
        ignore_failed_drops: bool = False,
    ) -> None:
        for name, value in (
            ("comment_prefix", comment_prefix),
            ("block_comment_start", block_comment_start),
            ("block_comment_end", block_comment_end),
        ):
            if not value or not value.strip():
                raise ConfigError(f"{name!r} must not be empty")
        if separator == "":
            raise ConfigError("'separator' must not be empty")

        self.comment_prefix: str = comment_prefix
        self.block_comment_start: str = block_comment_start
        self.block_comment_end: str = block_comment_end
        self.separator: str | None = separator
        self.continue_on_error: bool = continue_on_error
        self.ignore_failed_drops: bool = ignore_failed_drops

    @classmethod
    def from_dict(cls, d: dict[str, t.Any] | None) -> "ScriptConfig":
        d = dict(d or {})
        known = {
            "comment_prefix", "block_comment_start", "block_comment_end",
            "separator", "continue_on_error", "ignore_failed_drops",
        }
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Unknown script option(s): {', '.join(unknown)}")
        return cls(**d)

    def __repr__(self) -> str:
        return (
            f"ScriptConfig(separator={self.separator!r}, "
            f"comment_prefix={self.comment_prefix!r}, "
            f"block_comment=({self.block_comment_start!r}, {self.block_comment_end!r}), "
            f"continue_on_error={self.continue_on_error}, "
            f"ignore_failed_drops={self.ignore_failed_drops})"
        )


class Environment:
    """
    A thin value‑object holding the attributes required to open a MariaDB
    connection plus the script settings for that environment.  Nothing here
    talks to the database.
    """

    def __init__(self, name: str, d: dict[str, t.Any]) -> None:
        try:
            self.name: str = name
            self.host: str = d["host"]
            self.port: int = d.get("port", 3306)
            self.database: str = d["database"]
            self.user: str = d["user"]
            raw_pwd: str = str(d["password"])
        except KeyError as exc:
            raise ConfigError(f"Environment {name!r} is missing {exc.args[0]!r}") from exc

        # Allow `${ENV_VAR}` syntax for secrets
        self.password: str = (
            os.getenv(raw_pwd[2:-1], "") if raw_pwd.startswith("${") else raw_pwd
        )

        # Lets the driver create a missing database
        self.allow_destructive: bool = d.get("allow_destructive", False)

        self.script: ScriptConfig = ScriptConfig.from_dict(d.get("script"))

    def dsn(self) -> dict[str, t.Any]:
        """Return kwargs that mysql‑connector understands."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


def load(path: pathlib.Path | str | None = None, env: str | None = None) -> Environment:
    """
    Parse *path* (or the default YAML) and return an :class:`Environment`.
    """
    cfg_file = pathlib.Path(path) if path else _DEFAULT_PATH
    if not cfg_file.exists():
        raise ConfigError(f"Config file {cfg_file} not found.")

    with cfg_file.open() as fh:
        raw = yaml.safe_load(fh) or {}

    env_name = env or raw.get("default_env")
    if not env_name:
        raise ConfigError("No environment specified and no default_env in config")

    try:
        section = raw["environments"][env_name]
    except KeyError as exc:
        raise ConfigError(f"Environment {env_name!r} not found in config") from exc
    return Environment(env_name, section)
