from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from appdist import __version__
from appdist.cli.app import app
from appdist.cli.context import CLIContext
from appdist.core.errors import ErrorCode
from appdist.core.result import Ok
from appdist.output.actions import MemoryOutputs
from appdist.output.console import MockConsole
from appdist.services.firebase import parse_distribution_output


def _ctx(tmp_path: Path, env: dict[str, str]) -> CLIContext:
    return CLIContext(cwd=tmp_path, env=env, console=MockConsole(), outputs=MemoryOutputs())


def _patch_context(
    monkeypatch: pytest.MonkeyPatch, ctx: CLIContext
) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    monkeypatch.setattr(distribute_cmd, "build_context", lambda debug=False: ctx)


class FakeDistributor:
    def __init__(self, **kwargs: object) -> None:
        self.kwargs = kwargs

    def distribute(self, config: object, file: object, note: object):
        del config, file, note
        return Ok(parse_distribution_output("Share this release with testers: https://t/1"))


def test_execute_reads_actions_inputs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    (tmp_path / "app.apk").write_bytes(b"")
    ctx = _ctx(
        tmp_path,
        {
            "INPUT_FILE": "*.apk",
            "INPUT_APPID": "1:123:android:abc",
            "INPUT_SERVICECREDENTIALSFILE": "key.json",
            "INPUT_RELEASENOTES": "Beta",
        },
    )
    _patch_context(monkeypatch, ctx)
    monkeypatch.setattr(distribute_cmd, "FirebaseCliDistributor", FakeDistributor)

    distribute_cmd.execute()

    assert isinstance(ctx.outputs, MemoryOutputs)
    assert ctx.outputs.values == {"testing-uri": "https://t/1"}


def test_execute_missing_input_exits_user_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    ctx = _ctx(tmp_path, {"INPUT_FILE": "*.apk", "GITHUB_ACTIONS": "true"})
    _patch_context(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        distribute_cmd.execute()

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("Input required and not supplied: appId")


def test_execute_no_match_emits_annotation(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    ctx = _ctx(
        tmp_path,
        {
            "INPUT_FILE": "build/*.apk",
            "INPUT_APPID": "app",
            "INPUT_SERVICECREDENTIALSFILE": "key.json",
            "GITHUB_ACTIONS": "true",
        },
    )
    _patch_context(monkeypatch, ctx)
    monkeypatch.setattr(distribute_cmd, "FirebaseCliDistributor", FakeDistributor)

    with pytest.raises(typer.Exit) as exc:
        distribute_cmd.execute()

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert "::error::No files found matching pattern: build/*.apk" in capsys.readouterr().out


def test_execute_unexpected_exception_is_reported(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    class ExplodingRun:
        def __init__(self, **_: object) -> None:
            pass

        def run(self) -> None:
            raise RuntimeError("disk on fire")

    ctx = _ctx(tmp_path, {"INPUT_FILE": "*.apk", "INPUT_APPID": "app"})
    _patch_context(monkeypatch, ctx)
    monkeypatch.setattr(distribute_cmd, "DistributionRun", ExplodingRun)

    with pytest.raises(typer.Exit) as exc:
        distribute_cmd.execute()

    assert exc.value.exit_code == int(ErrorCode.INTERNAL_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("disk on fire")


def test_flags_override_inputs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import appdist.cli.commands.distribute as distribute_cmd

    (tmp_path / "app.apk").write_bytes(b"")
    seen: list[str] = []

    class RecordingDistributor(FakeDistributor):
        def distribute(self, config: object, file: object, note: object):
            seen.append(getattr(config, "groups"))
            return super().distribute(config, file, note)

    ctx = _ctx(tmp_path, {"INPUT_GROUPS": "qa"})
    _patch_context(monkeypatch, ctx)
    monkeypatch.setattr(distribute_cmd, "FirebaseCliDistributor", RecordingDistributor)

    result = CliRunner().invoke(
        app,
        [
            "distribute",
            "--file",
            "*.apk",
            "--app-id",
            "app",
            "--service-credentials-file",
            "key.json",
            "--release-notes",
            "Beta",
            "--groups",
            "beta",
        ],
    )

    assert result.exit_code == 0, result.output
    assert seen == ["beta"]


def test_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__
