"""CLI commands for installing and running the widget on the device."""

from pathlib import Path

import typer

from tizenbridge.cli.common import (
    AppScriptOption,
    ConfigFileOption,
    ConnectionOptions,
    RootOption,
    SdbOption,
    StopOnFailureOption,
    TimeoutOption,
    file_spec,
    run_request,
)
from tizenbridge.models.action import DEFAULT_LOCAL_DEBUG_PORT
from tizenbridge.utils.config import get_config_value

app = typer.Typer(no_args_is_help=True)


@app.command("install")
def install(
    files: list[str] | None = typer.Argument(
        None,
        help="Package files already on the device.",
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Shell glob selecting package files on the device.",
    ),
    latest: bool = typer.Option(
        False,
        "--latest",
        help="With --pattern, install only the newest match.",
    ),
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Install package files which are already on the device.

    Always runs with sdb root mode on.

    Examples:
        tizenbridge app install -p '/home/developer/*.wgt' --latest
    """
    run_request(
        ConnectionOptions(sdb=sdb, timeout=timeout, app_script=app_script),
        action="install",
        remote_files=file_spec(files, pattern, latest),
    )


@app.command("uninstall")
def uninstall(
    stop_on_failure: bool = StopOnFailureOption,
    root: bool = RootOption,
    config_file: Path = ConfigFileOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Uninstall the package named in config.xml."""
    run_request(
        ConnectionOptions(
            sdb=sdb, timeout=timeout, config_file=config_file, app_script=app_script
        ),
        action="uninstall",
        as_root=root,
        stop_on_failure=stop_on_failure,
    )


def _launch(
    action: str,
    stop_on_failure: bool,
    root: bool,
    options: ConnectionOptions,
    **extra: object,
) -> None:
    run_request(
        options,
        action=action,
        as_root=root,
        stop_on_failure=stop_on_failure,
        **extra,
    )


@app.command("start")
def start(
    stop_on_failure: bool = StopOnFailureOption,
    root: bool = RootOption,
    config_file: Path = ConfigFileOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Start the app."""
    _launch(
        "start",
        stop_on_failure,
        root,
        ConnectionOptions(
            sdb=sdb, timeout=timeout, config_file=config_file, app_script=app_script
        ),
    )


@app.command("stop")
def stop(
    stop_on_failure: bool = StopOnFailureOption,
    root: bool = RootOption,
    config_file: Path = ConfigFileOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Stop the app."""
    _launch(
        "stop",
        stop_on_failure,
        root,
        ConnectionOptions(
            sdb=sdb, timeout=timeout, config_file=config_file, app_script=app_script
        ),
    )


@app.command("debug")
def debug(
    local_port: int = typer.Option(
        DEFAULT_LOCAL_DEBUG_PORT,
        "--local-port",
        "-l",
        help="Local port forwarded to the app's debug port.",
    ),
    browser: str = typer.Option(
        None,
        "--browser",
        "-b",
        help="Browser command to open the inspector; %URL% is replaced "
        "with the debug URL, e.g. 'google-chrome %URL%'.",
    ),
    stop_on_failure: bool = StopOnFailureOption,
    root: bool = RootOption,
    config_file: Path = ConfigFileOption,
    sdb: str = SdbOption,
    timeout: float = TimeoutOption,
    app_script: str = AppScriptOption,
) -> None:
    """Start the app in debug mode and forward its debug port.

    Examples:
        tizenbridge app debug --browser 'google-chrome %URL%'
    """
    _launch(
        "debug",
        stop_on_failure,
        root,
        ConnectionOptions(
            sdb=sdb, timeout=timeout, config_file=config_file, app_script=app_script
        ),
        local_port=local_port,
        browser_cmd=browser or get_config_value("browser_cmd"),
    )
