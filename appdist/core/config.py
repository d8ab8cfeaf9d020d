"""Typed run configuration.

Options are read from three layers, highest precedence first:

1. explicit overrides (CLI flags)
2. the GitHub Actions input environment (``INPUT_<NAME>``)
3. an optional TOML file with a ``[distribute]`` table

Option names are the action's camelCase input names in every layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool_text, get_str, get_table

__all__ = [
    "ConfigError",
    "RunConfiguration",
    "OPTION_NAMES",
    "REQUIRED_OPTIONS",
    "input_env_name",
    "load_config_file",
    "load_run_configuration",
    "parse_boolean_input",
]

OPTION_NAMES = (
    "serviceCredentialsFile",
    "serviceCredentialsFileContent",
    "file",
    "appId",
    "groups",
    "testers",
    "releaseNotes",
    "releaseNotesFile",
    "includeFileNameInReleaseNotes",
    "debug",
)
REQUIRED_OPTIONS = ("file", "appId")
BOOLEAN_OPTIONS = ("includeFileNameInReleaseNotes", "debug")

CONFIG_TABLE = "distribute"

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when options cannot be loaded or validated."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RunConfiguration:
    """Immutable snapshot of the recognized options for one run.

    At most one credential source is used: when both are set the file path
    wins and the inline content is ignored.
    """

    file: str
    app_id: str
    service_credentials_file: str | None = None
    service_credentials_file_content: str | None = None
    groups: str | None = None
    testers: str | None = None
    release_notes: str | None = None
    release_notes_file: str | None = None
    include_file_name_in_release_notes: bool = False
    debug: bool = False


def input_env_name(name: str) -> str:
    """Environment variable the Actions runner sets for an input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def parse_boolean_input(name: str, raw: str | None) -> Result[bool, ConfigError]:
    """Parse a boolean input the way the Actions toolkit does.

    Only the YAML 1.2 core schema spellings are accepted. A missing value
    means False.
    """
    if raw is None or raw in _FALSE_VALUES:
        return Ok(False)
    if raw in _TRUE_VALUES:
        return Ok(True)
    return Err(
        ConfigError(
            f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}",
            hint="Support boolean input list: `true | True | TRUE | false | False | FALSE`",
        )
    )


def load_config_file(path: Path) -> Result[StrDict, ConfigError]:
    """Load the ``[distribute]`` table of a TOML file.

    A file without the table yields an empty mapping.
    """
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))

    if CONFIG_TABLE in data and get_table(data, CONFIG_TABLE) is None:
        return Err(ConfigError(f"[{CONFIG_TABLE}] must be a TOML table", path=path))
    return Ok(get_table(data, CONFIG_TABLE) or {})


def _collect(
    *,
    env: Mapping[str, str],
    overrides: Mapping[str, str | bool | None],
    file_values: Mapping[str, object],
) -> dict[str, str]:
    env_values = {name: env.get(input_env_name(name), "") for name in OPTION_NAMES}
    flag_values = {name: value for name, value in overrides.items() if value is not None}

    values: dict[str, str] = {}
    for name in OPTION_NAMES:
        if name in BOOLEAN_OPTIONS:
            raw = (
                get_bool_text(flag_values, name)
                or get_str(env_values, name)
                or get_bool_text(file_values, name)
            )
        else:
            raw = get_str(flag_values, name) or get_str(env_values, name) or get_str(
                file_values, name
            )
        if raw is not None:
            values[name] = raw
    return values


def load_run_configuration(
    *,
    env: Mapping[str, str],
    overrides: Mapping[str, str | bool | None] | None = None,
    config_file: Path | None = None,
) -> Result[RunConfiguration, ConfigError]:
    """Build a RunConfiguration from flags, Actions inputs and a config file.

    Args:
        env: Process environment (``INPUT_*`` variables are read).
        overrides: CLI values keyed by option name; None means "not given".
        config_file: Optional TOML file providing defaults.

    Returns:
        Ok(RunConfiguration), or Err(ConfigError) when a required option is
        missing or a boolean option is malformed.
    """
    file_values: Mapping[str, object] = {}
    if config_file is not None:
        loaded = load_config_file(config_file)
        if isinstance(loaded, Err):
            return loaded
        file_values = loaded.value

    values = _collect(env=env, overrides=overrides or {}, file_values=file_values)

    for name in REQUIRED_OPTIONS:
        if name not in values:
            return Err(ConfigError(f"Input required and not supplied: {name}"))

    include_name = parse_boolean_input(
        "includeFileNameInReleaseNotes", values.get("includeFileNameInReleaseNotes")
    )
    if isinstance(include_name, Err):
        return include_name
    debug = parse_boolean_input("debug", values.get("debug"))
    if isinstance(debug, Err):
        return debug

    return Ok(
        RunConfiguration(
            file=values["file"],
            app_id=values["appId"],
            service_credentials_file=values.get("serviceCredentialsFile"),
            service_credentials_file_content=values.get("serviceCredentialsFileContent"),
            groups=values.get("groups"),
            testers=values.get("testers"),
            release_notes=values.get("releaseNotes"),
            release_notes_file=values.get("releaseNotesFile"),
            include_file_name_in_release_notes=include_name.value,
            debug=debug.value,
        )
    )
