"""Core types shared by every layer: results, exit codes, config."""

from .config import Config, ConfigError, load_config, load_config_or_default, resolve_credential
from .errors import ErrorCode, TerminalError
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "resolve_credential",
    # errors
    "ErrorCode",
    "TerminalError",
    # result
    "Err",
    "Ok",
    "Result",
]
