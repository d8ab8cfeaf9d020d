"""Core domain types: configuration, results and exit codes."""

from .config import ConfigError, RunConfiguration, load_run_configuration
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "RunConfiguration",
    "load_run_configuration",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
