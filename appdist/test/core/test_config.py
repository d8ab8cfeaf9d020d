"""Tests for appdist.core.config module."""

from __future__ import annotations

from pathlib import Path

from appdist.core.config import (
    RunConfiguration,
    input_env_name,
    load_config_file,
    load_run_configuration,
    parse_boolean_input,
)
from appdist.core.result import Err, Ok


def _env(**inputs: str) -> dict[str, str]:
    return {input_env_name(name): value for name, value in inputs.items()}


class TestInputEnvName:
    def test_upper_cases_name(self) -> None:
        assert input_env_name("appId") == "INPUT_APPID"
        assert input_env_name("serviceCredentialsFile") == "INPUT_SERVICECREDENTIALSFILE"

    def test_spaces_become_underscores(self) -> None:
        assert input_env_name("release notes") == "INPUT_RELEASE_NOTES"


class TestParseBooleanInput:
    def test_accepts_core_schema_spellings(self) -> None:
        for raw in ("true", "True", "TRUE"):
            assert parse_boolean_input("debug", raw) == Ok(True)
        for raw in ("false", "False", "FALSE"):
            assert parse_boolean_input("debug", raw) == Ok(False)

    def test_missing_is_false(self) -> None:
        assert parse_boolean_input("debug", None) == Ok(False)

    def test_rejects_other_values(self) -> None:
        result = parse_boolean_input("debug", "yes")
        assert isinstance(result, Err)
        assert "debug" in result.error.message
        assert result.error.hint is not None


class TestLoadRunConfiguration:
    def test_reads_actions_inputs(self) -> None:
        env = _env(
            file="build/*.apk",
            appId="1:123:android:abc",
            serviceCredentialsFile="key.json",
            groups="qa",
            testers="a@example.com",
            releaseNotes="Fixes",
            includeFileNameInReleaseNotes="true",
            debug="TRUE",
        )

        result = load_run_configuration(env=env)

        assert result == Ok(
            RunConfiguration(
                file="build/*.apk",
                app_id="1:123:android:abc",
                service_credentials_file="key.json",
                groups="qa",
                testers="a@example.com",
                release_notes="Fixes",
                include_file_name_in_release_notes=True,
                debug=True,
            )
        )

    def test_empty_inputs_are_unset(self) -> None:
        env = _env(file="a.apk", appId="app", groups="", testers="   ", debug="")

        result = load_run_configuration(env=env)

        assert isinstance(result, Ok)
        assert result.value.groups is None
        assert result.value.testers is None
        assert result.value.debug is False

    def test_missing_required_file(self) -> None:
        result = load_run_configuration(env=_env(appId="app"))

        assert isinstance(result, Err)
        assert result.error.message == "Input required and not supplied: file"

    def test_missing_required_app_id(self) -> None:
        result = load_run_configuration(env=_env(file="a.apk"))

        assert isinstance(result, Err)
        assert result.error.message == "Input required and not supplied: appId"

    def test_invalid_boolean_fails(self) -> None:
        env = _env(file="a.apk", appId="app", includeFileNameInReleaseNotes="on")

        result = load_run_configuration(env=env)

        assert isinstance(result, Err)
        assert "includeFileNameInReleaseNotes" in result.error.message

    def test_overrides_win_over_env(self) -> None:
        env = _env(file="a.apk", appId="app", groups="qa", debug="true")

        result = load_run_configuration(
            env=env,
            overrides={"groups": "beta", "debug": False, "testers": None},
        )

        assert isinstance(result, Ok)
        assert result.value.groups == "beta"
        assert result.value.debug is False
        assert result.value.testers is None

    def test_config_file_supplies_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "appdist.toml"
        config_file.write_text(
            '[distribute]\nappId = "from-file"\ngroups = "qa"\ndebug = true\n',
            encoding="utf-8",
        )

        result = load_run_configuration(
            env=_env(file="a.apk", groups="beta"),
            config_file=config_file,
        )

        assert isinstance(result, Ok)
        assert result.value.app_id == "from-file"
        assert result.value.groups == "beta"
        assert result.value.debug is True

    def test_config_file_error_propagates(self, tmp_path: Path) -> None:
        result = load_run_configuration(
            env=_env(file="a.apk", appId="app"),
            config_file=tmp_path / "missing.toml",
        )

        assert isinstance(result, Err)
        assert "not found" in result.error.message


class TestLoadConfigFile:
    def test_without_table_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "appdist.toml"
        path.write_text('[other]\nkey = "value"\n', encoding="utf-8")

        assert load_config_file(path) == Ok({})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "appdist.toml"
        path.write_text("[distribute\n", encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_table_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "appdist.toml"
        path.write_text('distribute = "nope"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)

