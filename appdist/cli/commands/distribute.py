from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import typer

from appdist.cli.commands._helpers import fail_run
from appdist.cli.context import build_context
from appdist.core.config import load_run_configuration
from appdist.core.result import Err
from appdist.services.auth import Credentials
from appdist.services.errors import UnexpectedError
from appdist.services.firebase import DEFAULT_FIREBASE_BIN, FirebaseCliDistributor
from appdist.services.sequencer import DistributionRun

FIREBASE_BIN_ENV_VAR = "FIREBASE_BIN"


def distribute(
    file: str | None = typer.Option(
        None, "--file", help="Glob pattern of artifacts to upload (e.g. build/*.apk)"
    ),
    app_id: str | None = typer.Option(None, "--app-id", help="Firebase app id"),
    service_credentials_file: str | None = typer.Option(
        None, "--service-credentials-file", help="Path to a service account key file"
    ),
    service_credentials_file_content: str | None = typer.Option(
        None,
        "--service-credentials-file-content",
        help="Service account key JSON (staged to a local file)",
    ),
    groups: str | None = typer.Option(None, "--groups", help="Comma-separated tester groups"),
    testers: str | None = typer.Option(None, "--testers", help="Comma-separated tester emails"),
    release_notes: str | None = typer.Option(None, "--release-notes", help="Release notes text"),
    release_notes_file: str | None = typer.Option(
        None, "--release-notes-file", help="Release notes file (overrides --release-notes)"
    ),
    include_file_name_in_release_notes: bool | None = typer.Option(
        None,
        "--include-file-name-in-release-notes/--no-include-file-name-in-release-notes",
        help="Append the file name and position to notes when uploading several files",
    ),
    debug: bool | None = typer.Option(None, "--debug/--no-debug", help="Verbose firebase output"),
    config_file: Path | None = typer.Option(
        None, "--config", help="TOML file with a [distribute] table of defaults"
    ),
    firebase_bin: str | None = typer.Option(
        None, "--firebase-bin", help="Firebase CLI command (default: firebase)"
    ),
) -> None:
    """Upload artifacts to Firebase App Distribution.

    Options not given as flags are read from the GitHub Actions inputs
    (INPUT_FILE, INPUT_APPID, ...), then from --config.
    """
    execute(
        overrides={
            "file": file,
            "appId": app_id,
            "serviceCredentialsFile": service_credentials_file,
            "serviceCredentialsFileContent": service_credentials_file_content,
            "groups": groups,
            "testers": testers,
            "releaseNotes": release_notes,
            "releaseNotesFile": release_notes_file,
            "includeFileNameInReleaseNotes": include_file_name_in_release_notes,
            "debug": debug,
        },
        config_file=config_file,
        firebase_bin=firebase_bin,
    )


def execute(
    *,
    overrides: Mapping[str, str | bool | None] | None = None,
    config_file: Path | None = None,
    firebase_bin: str | None = None,
) -> None:
    """Run one distribution and exit non-zero on failure."""
    ctx = build_context()
    loaded = load_run_configuration(env=ctx.env, overrides=overrides, config_file=config_file)
    if isinstance(loaded, Err):
        fail_run(loaded.error, ctx)

    config = loaded.value
    if config.debug:
        ctx = build_context(debug=True)

    bin_cmd = firebase_bin or ctx.env.get(FIREBASE_BIN_ENV_VAR) or DEFAULT_FIREBASE_BIN

    def make_distributor(credentials: Credentials) -> FirebaseCliDistributor:
        return FirebaseCliDistributor(
            cwd=ctx.cwd,
            credentials=credentials,
            console=ctx.console,
            firebase_bin=bin_cmd,
        )

    run = DistributionRun(
        config=config,
        cwd=ctx.cwd,
        env=ctx.env,
        console=ctx.console,
        outputs=ctx.outputs,
        distributor_factory=make_distributor,
    )
    try:
        result = run.run()
    except Exception as e:  # noqa: BLE001
        fail_run(UnexpectedError(reason=str(e)), ctx)

    if result.error is not None:
        fail_run(result.error, ctx)
