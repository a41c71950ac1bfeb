"""Bridge between the host and a Tizen device.

Wraps sdb and the device-side tizen-app.sh script. Each method performs one
remote (or local/remote) operation and turns the device's text output into
a return value or an exception. The device tooling has no reliable exit
codes, so several failures are only detectable from stdout.
"""

import asyncio
import os
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tizenbridge.core.file_lister import FileLister
from tizenbridge.core.sdb import SdbWrapper
from tizenbridge.exceptions import (
    AggregateOperationError,
    ConfigurationError,
    InstallError,
    LaunchError,
    PortForwardError,
    ProcessError,
    PushError,
    ScriptError,
    SdbError,
    UninstallError,
)
from tizenbridge.models.files import FileFilter, FilePattern, FileSpec
from tizenbridge.utils.output import Logger

SCRIPT_INTERPRETER = "/bin/sh"

PUSH_FAILURE = re.compile(r"failed to copy|cannot stat|device not found")
INSTALL_FAILURE_TOKEN = "key[end] val[fail]"
UNINSTALL_FAILURE = re.compile(r"not installed|failed")
LAUNCH_FAILURE = re.compile(r"running|does not exist|failed")
LAUNCH_SUBCOMMANDS = ("start", "stop", "debug")

# Failures of the sdb call itself, as opposed to configuration errors
REMOTE_ERRORS = (SdbError, ProcessError)

BrowserLauncherFn = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class BridgeConfig:
    """Collaborators and settings for a Bridge.

    ``sdb``, ``file_lister`` and ``logger`` are required; everything else is
    optional.
    """

    sdb: SdbWrapper | None = None
    file_lister: FileLister | None = None
    logger: Logger | None = None
    browser_launcher: BrowserLauncherFn | None = None
    app_script_path: str | None = None
    """Path to tizen-app.sh on the device; needed by install/uninstall/launch."""

    app_script_local: str | None = None
    """Local copy of tizen-app.sh pushed by the prepare task."""

    app_script_dir: str | None = None
    """Remote directory the prepare task pushes tizen-app.sh to."""

    def __post_init__(self) -> None:
        if self.sdb is None:
            raise ConfigurationError("Bridge must be initialised with an sdb wrapper")
        if self.file_lister is None:
            raise ConfigurationError("Bridge must be initialised with a file lister")
        if self.logger is None:
            raise ConfigurationError("Bridge must be initialised with a logger")


class Bridge:
    """Runs file transfer and app lifecycle operations on the device."""

    def __init__(self, config: BridgeConfig):
        """Initialize bridge.

        Args:
            config: Validated collaborators and settings.
        """
        self.sdb = config.sdb
        self.file_lister = config.file_lister
        self.logger: Logger = config.logger
        self.browser_launcher = config.browser_launcher
        self.app_script_path = config.app_script_path
        self.app_script_local = config.app_script_local
        self.app_script_dir = config.app_script_dir
        self.script_interpreter = SCRIPT_INTERPRETER

    async def file_exists(self, remote_path: str) -> bool:
        """Test whether a file exists on the device."""
        try:
            await self.sdb.shell(f"stat {remote_path}")
        except SdbError as e:
            if "No such file or directory" in str(e):
                return False
            self.logger.error(str(e))
            raise
        return True

    async def chmod(self, remote_path: str, mode: str) -> None:
        """Apply chmod (e.g. '+x', '0777') to a remote path."""
        try:
            stdout = await self.sdb.shell(f"chmod {mode} {remote_path}")
        except Exception as e:
            self.logger.error(str(e))
            self.logger.error(f"could not chmod {remote_path}")
            raise

        self.logger.write(stdout)
        self.logger.ok(f"did chmod {mode} on {remote_path}")

    async def list_remote_files(self, remote_files: FileSpec) -> list[str]:
        """Resolve a FileSpec against the device filesystem.

        Strings and lists are returned as given. For a FilePattern the
        pattern is listed with ``ls -1 -c``, which puts the newest file
        first; with the 'latest' filter only that file is returned.
        """
        if isinstance(remote_files, str):
            return [remote_files]

        if isinstance(remote_files, list):
            return list(remote_files)

        if not isinstance(remote_files, FilePattern):
            raise ConfigurationError(
                "remote files specification was not valid; "
                "use a string, string list, or pattern object"
            )

        try:
            stdout = await self.sdb.shell(f"ls -1 -c {remote_files.pattern}")
        except Exception as e:
            self.logger.error("could not run ls on device")
            self.logger.error(str(e))
            raise

        stdout = stdout.replace("\r", "")
        if not stdout.strip():
            return []

        file_list = [line for line in stdout.split("\n") if line]
        if remote_files.filter == FileFilter.LATEST:
            return file_list[:1]
        return file_list

    def get_destination(self, local_file: str, remote_dir: str) -> str:
        """Build the device path for ``local_file`` inside ``remote_dir``.

        Only one trailing slash is removed from ``remote_dir``. The result
        is always a POSIX path since it names a file on the device.
        """
        basename = os.path.basename(local_file)
        if remote_dir.endswith("/"):
            remote_dir = remote_dir[:-1]
        return f"{remote_dir}/{basename}"

    async def push_raw(self, local_file: str, remote_path: str) -> None:
        """Push one file to an exact path on the device."""
        try:
            await self.sdb.push(local_file, remote_path)
        except SdbError as e:
            if PUSH_FAILURE.search(str(e)):
                self.logger.error(str(e))
                raise PushError("could not push file to device") from e
            raise

        self.logger.ok(f"pushed local:{local_file} to remote:{remote_path}")

    async def push_one(
        self,
        local_file: str,
        remote_dir: str,
        overwrite: bool,
        chmod: str | None = None,
    ) -> None:
        """Push one file into ``remote_dir``.

        If ``overwrite`` is False and the destination exists, the push is
        skipped with a warning. ``chmod`` is applied after a push.
        """
        remote_path = self.get_destination(local_file, remote_dir)

        if not overwrite and await self.file_exists(remote_path):
            self.logger.warn(
                f"not pushing to {remote_path} as file exists and overwrite is false"
            )
            return

        await self.push_raw(local_file, remote_path)
        if chmod:
            await self.chmod(remote_path, chmod)

    async def push(
        self,
        local_files: FileSpec,
        remote_dir: str,
        overwrite: bool = True,
        chmod: str | None = None,
    ) -> None:
        """Push every file matched by ``local_files`` concurrently.

        Every push runs to completion; if any failed, AggregateOperationError
        is raised afterwards.
        """
        files_to_push = await self.file_lister.list(local_files)

        await self._run_all(
            files_to_push,
            lambda f: self.push_one(f, remote_dir, overwrite, chmod),
            "error while pushing files",
        )
        self.logger.ok("all files pushed")

    async def run_script(self, remote_script: str, args: list[str] | None = None) -> str:
        """Run a script on the device with /bin/sh and return its stdout."""
        cmd = f"{self.script_interpreter} {remote_script}"
        if args:
            cmd += " " + " ".join(args)

        self.logger.ok(f"running: {cmd}")

        try:
            stdout = await self.sdb.shell(cmd)
        except Exception as e:
            self.logger.error(str(e))
            raise ScriptError(f"error occurred while running command {cmd}") from e

        self.logger.write(stdout)
        return stdout

    async def run_tizen_app_script(self, command: str, args: list[str]) -> str:
        """Run ``tizen-app.sh <command> [args...]`` on the device.

        Output is returned uninterpreted.

        Raises:
            ConfigurationError: If no app script path is configured.
        """
        if not self.app_script_path:
            raise ConfigurationError(
                "cannot run tizen-app.sh as app_script_path is not set on Bridge"
            )

        cmd = f"{self.app_script_path} {command}"
        if args:
            cmd += " " + " ".join(args)

        return await self.sdb.shell(cmd)

    async def install_one(self, remote_file: str) -> None:
        """Install one package file which is already on the device."""
        stdout = await self.run_tizen_app_script("install", [remote_file])
        self.logger.write(stdout)

        if INSTALL_FAILURE_TOKEN in stdout:
            self.logger.error(f"error installing package {remote_file}")
            self.logger.error(stdout)
            raise InstallError("installation failed")

        self.logger.ok(f"installed package {remote_file}")

    async def install(self, remote_files: FileSpec) -> None:
        """Install every package file matched by ``remote_files`` concurrently.

        An empty match only logs a warning.
        """
        files_to_install = await self.list_remote_files(remote_files)

        await self._run_all(
            files_to_install, self.install_one, "error while installing package"
        )

        if not files_to_install:
            self.logger.warn("no packages to install")
        else:
            self.logger.ok("all packages installed")

    async def uninstall(self, package_name: str, stop_on_failure: bool = False) -> None:
        """Uninstall a package by name.

        Failures raise UninstallError only if ``stop_on_failure`` is True;
        otherwise they are logged and ignored.
        """
        try:
            stdout = await self.run_tizen_app_script("uninstall", [package_name])
            self.logger.write(stdout)
            if UNINSTALL_FAILURE.search(stdout):
                raise UninstallError(f"package {package_name} could not be uninstalled")
        except (*REMOTE_ERRORS, UninstallError) as e:
            if stop_on_failure:
                self.logger.error(str(e))
                raise
            self.logger.warn("could not uninstall package; continuing anyway")
            return

        self.logger.ok(f"package with name {package_name} uninstalled")

    async def launch(
        self, subcommand: str, app_uri: str, stop_on_failure: bool = False
    ) -> str | None:
        """Start, stop or debug an app.

        Returns:
            Raw stdout of the launcher; for 'debug' it carries ``PORT <n>``.
            None if the launch failed and ``stop_on_failure`` is False.

        Raises:
            LaunchError: If the launch failed and ``stop_on_failure`` is True.
        """
        if subcommand not in LAUNCH_SUBCOMMANDS:
            raise ConfigurationError(f"unknown launch subcommand {subcommand!r}")

        action_done = "stopped" if subcommand == "stop" else "launched"
        warning = f"app with id {app_uri} could not be {action_done}"

        try:
            stdout = await self.run_tizen_app_script(subcommand, [app_uri])
            if LAUNCH_FAILURE.search(stdout):
                raise LaunchError(stdout.strip() or warning)
        except (*REMOTE_ERRORS, LaunchError) as e:
            if stop_on_failure:
                self.logger.error(warning)
                self.logger.error(str(e))
                if isinstance(e, LaunchError):
                    raise
                raise LaunchError(str(e)) from e
            self.logger.warn(f"{warning}; continuing anyway")
            return None

        self.logger.write(stdout)
        self.logger.ok(f"app with id {app_uri} {action_done}")
        return stdout

    def get_debug_url(self, local_port: int) -> str:
        """Construct the inspector URL for a forwarded debug port."""
        return f"http://localhost:{local_port}/inspector.html?page=1"

    async def run_browser(self, browser_cmd: str, local_port: int) -> str:
        """Open the debug inspector with a browser command.

        ``%URL%`` in ``browser_cmd`` is replaced by the debug URL, e.g.
        "google-chrome %URL%".
        """
        if self.browser_launcher is None:
            raise ConfigurationError(
                "cannot run browser: no browser launcher configured for Bridge"
            )

        browser_cmd = browser_cmd.replace("%URL%", self.get_debug_url(local_port))

        try:
            stdout = await self.browser_launcher(browser_cmd)
        except Exception as e:
            self.logger.error(str(e))
            raise

        self.logger.write(stdout)
        return stdout

    async def port_forward(self, local_port: int, remote_port: int) -> str:
        """Forward a local port to the app's remote debug port."""
        try:
            stdout = await self.sdb.forward(local_port, remote_port)
        except Exception as e:
            self.logger.error(str(e))
            self.logger.error("could not forward local port to remote port")
            raise PortForwardError(
                f"could not forward local port to remote port: {e}"
            ) from e

        self.logger.ok(
            f"app is ready for debugging at \n{self.get_debug_url(local_port)}"
        )
        return stdout

    async def root(self, on: bool) -> None:
        """Turn sdb root mode on or off."""
        state = "on" if on else "off"

        try:
            stdout = await self.sdb.root(on)
        except Exception as e:
            self.logger.error(str(e))
            raise

        self.logger.write(stdout)
        if on:
            self.logger.warn(
                f'*** called "sdb root {state}"; commands now running as root ***'
            )
        else:
            self.logger.ok(
                f'*** called "sdb root {state}"; commands no longer running as root ***'
            )

    async def _run_all(
        self,
        items: list[str],
        operation: Callable[[str], Awaitable[None]],
        message: str,
    ) -> None:
        """Run ``operation`` for every item concurrently, without fail-fast."""
        results = await asyncio.gather(
            *(operation(item) for item in items), return_exceptions=True
        )

        failures: list[tuple[str, BaseException]] = []
        for item, result in zip(items, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self.logger.error(f"{item}: {result}")
                failures.append((item, result))

        if failures:
            raise AggregateOperationError(message, failures)
