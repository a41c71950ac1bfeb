"""CLI commands for files and scripts on the device."""

from pathlib import Path

import typer

from tizenbridge.cli.common import (
    AppScriptOption,
    ConfigFileOption,
    ConnectionOptions,
    RootOption,
    SdbOption,
    TimeoutOption,
    file_spec,
    run_request,
    run_with,
)
from tizenbridge.utils.output import console

app = typer.Typer(no_args_is_help=True)


@app.command("push")
def push(
    files: list[str] | None = typer.Argument(
        None,
        help="Local files to push.",
    ),
    remote_dir: str = typer.Option(
        ...,
        "--remote-dir",
        "-r",
        help="Directory on the device to push files into.",
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Glob selecting local files (instead of listing them).",
    ),
    latest: bool = typer.Option(
        False,
        "--latest",
        help="With --pattern, push only the most recently modified match.",
    ),
    no_overwrite: bool = typer.Option(
        False,
        "--no-overwrite",
        help="Skip files which already exist on the device.",
    ),
    chmod: str = typer.Option(
        None,
        "--chmod",
        help="chmod mode to apply after pushing, e.g. '+x'.",
    ),
    root: bool = RootOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
) -> None:
    """Push local files to a directory on the device.

    Examples:
        # Push the newest build
        tizenbridge device push -p 'build/*.wgt' --latest -r /home/developer
    """
    run_request(
        ConnectionOptions(sdb=sdb, timeout=timeout),
        action="push",
        as_root=root,
        local_files=file_spec(files, pattern, latest),
        remote_dir=remote_dir,
        overwrite=not no_overwrite,
        chmod=chmod,
    )


@app.command("script")
def script(
    remote_script: str = typer.Argument(
        ...,
        help="Path of the script on the device.",
    ),
    args: list[str] | None = typer.Argument(
        None,
        help="Extra arguments, passed after the package name and app ID.",
    ),
    root: bool = RootOption,
    config_file: Path = ConfigFileOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
) -> None:
    """Run a script on the device with /bin/sh.

    The script receives the package name and the app ID from config.xml
    as its first two arguments.
    """
    run_request(
        ConnectionOptions(sdb=sdb, timeout=timeout, config_file=config_file),
        action="script",
        as_root=root,
        remote_script=remote_script,
        args=args or [],
    )


@app.command("prepare")
def prepare(
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Push tizen-app.sh to the device and make it executable.

    Reads app_script_local and app_script_dir from ~/.tizenbridge/config.json.
    """
    run_with(
        ConnectionOptions(sdb=sdb, timeout=timeout, app_script=app_script),
        lambda orchestrator: orchestrator.prepare(),
    )
    console.print_success("tizen-app.sh ready on device")
