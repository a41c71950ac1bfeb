"""Shared CLI options and the code that wires collaborators together."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from tizenbridge.core.bridge import Bridge, BridgeConfig
from tizenbridge.core.browser import BrowserLauncher
from tizenbridge.core.file_lister import FileLister
from tizenbridge.core.sdb import SdbWrapper
from tizenbridge.core.tasks import TaskOrchestrator
from tizenbridge.core.tizen_config import TizenConfig
from tizenbridge.exceptions import AggregateOperationError, TizenBridgeError
from tizenbridge.models.files import FileFilter, FilePattern, FileSpec
from tizenbridge.utils.config import (
    DEFAULT_APP_SCRIPT_PATH,
    DEFAULT_CONFIG_XML,
    get_config_value,
    get_sdb_command,
)
from tizenbridge.utils.deps import require
from tizenbridge.utils.output import console

SdbOption = typer.Option(
    None,
    "--sdb",
    help="sdb executable (default: $TIZENBRIDGE_SDB, config sdb_path, or sdb).",
)
TimeoutOption = typer.Option(
    None,
    "--timeout",
    "-t",
    help="Seconds to wait for each sdb command (default: wait forever).",
)
ConfigFileOption = typer.Option(
    None,
    "--config-file",
    "-c",
    help="Widget config.xml to read app metadata from.",
)
AppScriptOption = typer.Option(
    None,
    "--app-script",
    help="Path to tizen-app.sh on the device.",
)
RootOption = typer.Option(
    False,
    "--root",
    help="Run the action with sdb root mode on.",
)
StopOnFailureOption = typer.Option(
    False,
    "--stop-on-failure",
    help="Fail instead of warning when the device reports a failure.",
)


@dataclass
class ConnectionOptions:
    """Options every device command accepts."""

    sdb: str | None = None
    timeout: float | None = None
    config_file: Path | None = None
    app_script: str | None = None


def file_spec(paths: list[str] | None, pattern: str | None, latest: bool) -> FileSpec:
    """Build a FileSpec from CLI arguments."""
    if pattern:
        return FilePattern(
            pattern=pattern, filter=FileFilter.LATEST if latest else None
        )
    if not paths:
        console.print_error("Give at least one file or --pattern")
        raise typer.Exit(1)
    if len(paths) == 1:
        return paths[0]
    return list(paths)


def build_orchestrator(options: ConnectionOptions) -> TaskOrchestrator:
    """Compose sdb, file lister, config.xml reader and bridge."""
    sdb_cmd = options.sdb or get_sdb_command()
    require(sdb_cmd)

    timeout = options.timeout
    if timeout is None:
        timeout = get_config_value("timeout")

    bridge = Bridge(
        BridgeConfig(
            sdb=SdbWrapper(sdb_cmd, timeout=timeout),
            file_lister=FileLister(),
            logger=console,
            browser_launcher=BrowserLauncher(),
            app_script_path=(
                options.app_script
                or get_config_value("app_script_path", DEFAULT_APP_SCRIPT_PATH)
            ),
            app_script_local=get_config_value("app_script_local"),
            app_script_dir=get_config_value("app_script_dir"),
        )
    )
    config_file = options.config_file or get_config_value(
        "config_file", DEFAULT_CONFIG_XML
    )
    return TaskOrchestrator(bridge, TizenConfig(config_file))


def run_request(options: ConnectionOptions, **fields: Any) -> Any:
    """Build an ActionRequest from ``fields`` and run it to completion."""
    return run_with(options, lambda o: o.run(fields))


def run_with(
    options: ConnectionOptions,
    task: Callable[[TaskOrchestrator], Awaitable[Any]],
) -> Any:
    """Run ``task`` against a freshly built orchestrator, exiting 1 on error."""
    try:
        orchestrator = build_orchestrator(options)
        return asyncio.run(task(orchestrator))
    except AggregateOperationError as e:
        console.print_error(str(e))
        for item, error in e.failures:
            console.print_error(f"  {item}: {error}")
        raise typer.Exit(1) from None
    except TizenBridgeError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None
