"""Typed configuration loading and access.

The dashboard needs three things from its environment: how to invoke the
changelog helper, which two repositories to compare, and which environment
variable carries the credential. All of them have defaults; an optional
``relboard.toml`` overrides them.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_list,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "Config",
    "ConfigError",
    "HelperConfig",
    "RepositoryConfig",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_TOKEN_ENV",
    "find_config_path",
    "load_config",
    "load_config_or_default",
    "resolve_credential",
]

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_CONFIG_NAME = "relboard.toml"
CONFIG_ENV_VAR = "RELBOARD_CONFIG"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"

DEFAULT_HELPER_COMMAND = ("php", "etc/change_log_generator.php", "--format=json")
DEFAULT_REPOSITORY_FLAG = "--projectId="
DEFAULT_CREDENTIAL_FLAG = "--token="


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded, or a required setting is missing."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RepositoryConfig:
    """One reviewed repository: the id passed to the helper and a panel label."""

    id: str
    label: str


def _default_repositories() -> tuple[RepositoryConfig, RepositoryConfig]:
    return (RepositoryConfig(id="251", label="Sulu"), RepositoryConfig(id="65", label="Sylius"))


@dataclass(frozen=True, slots=True)
class HelperConfig:
    """How to invoke the changelog helper process."""

    command: tuple[str, ...] = DEFAULT_HELPER_COMMAND
    repository_flag: str = DEFAULT_REPOSITORY_FLAG
    credential_flag: str = DEFAULT_CREDENTIAL_FLAG
    cwd: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    token_env: str = DEFAULT_TOKEN_ENV
    helper: HelperConfig = field(default_factory=HelperConfig)
    repositories: tuple[RepositoryConfig, RepositoryConfig] = field(
        default_factory=_default_repositories
    )

    @property
    def repository_ids(self) -> tuple[str, str]:
        left, right = self.repositories
        return left.id, right.id

    @property
    def labels(self) -> tuple[str, str]:
        left, right = self.repositories
        return left.label, right.label

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a present section has the wrong shape.
        """
        helper_table = get_table(data, "helper")
        if "helper" in data and helper_table is None:
            raise ValueError("[helper] must be a table")
        helper: StrDict = helper_table or {}

        command: tuple[str, ...] = DEFAULT_HELPER_COMMAND
        if "command" in helper:
            items = get_str_list(helper, "command")
            if not items:
                raise ValueError("helper.command must be a non-empty list of strings")
            command = tuple(items)

        cwd_raw = get_str(helper, "cwd")

        repositories = _default_repositories()
        if "repositories" in data:
            repositories = _parse_repositories(get_list(data, "repositories"))

        return cls(
            token_env=get_str(data, "token_env") or DEFAULT_TOKEN_ENV,
            helper=HelperConfig(
                command=command,
                repository_flag=_get_flag(helper, "repository_flag", DEFAULT_REPOSITORY_FLAG),
                credential_flag=_get_flag(helper, "credential_flag", DEFAULT_CREDENTIAL_FLAG),
                cwd=Path(cwd_raw).expanduser() if cwd_raw else None,
            ),
            repositories=repositories,
        )


def _get_flag(table: Mapping[str, object], key: str, default: str) -> str:
    # An explicit empty string means "pass the bare value".
    value = table.get(key)
    if isinstance(value, str):
        return value
    return default


def _parse_repositories(
    items: list[object] | None,
) -> tuple[RepositoryConfig, RepositoryConfig]:
    if items is None or len(items) != 2:
        raise ValueError("exactly two [[repositories]] entries are required (left, right)")

    parsed: list[RepositoryConfig] = []
    for index, item in enumerate(items):
        table = as_str_dict(item)
        if table is None:
            raise ValueError(f"repositories[{index}] must be a table")
        repo_id = get_str(table, "id")
        if repo_id is None:
            raise ValueError(f"repositories[{index}].id is required")
        parsed.append(RepositoryConfig(id=repo_id, label=get_str(table, "label") or repo_id))

    return parsed[0], parsed[1]


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relboard.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def find_config_path(
    explicit: Path | None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> Path | None:
    """Locate the config file.

    ``--config`` wins over ``$RELBOARD_CONFIG``, which wins over
    ``./relboard.toml``. Explicit paths are returned even if missing so the
    loader reports them; the implicit file is optional.
    """
    env = os.environ if environ is None else environ
    if explicit is not None:
        return explicit.expanduser()

    from_env = env.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()

    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None


def load_config_or_default(
    explicit: Path | None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> Result[Config, ConfigError]:
    """Load config from the located file, or return defaults when there is none."""
    path = find_config_path(explicit, environ=environ, cwd=cwd)
    if path is None:
        return Ok(Config())
    return load_config(path)


def resolve_credential(
    config: Config, environ: Mapping[str, str] | None = None
) -> Result[str, ConfigError]:
    """Read the helper credential from the configured environment variable."""
    env = os.environ if environ is None else environ
    token = env.get(config.token_env, "").strip()
    if not token:
        return Err(ConfigError(f"{config.token_env} not set"))
    return Ok(token)
