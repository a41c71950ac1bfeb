"""Minimal async wrapper around the Tizen sdb command-line tool."""

import asyncio
import re
import shlex
from pathlib import Path

from tizenbridge.exceptions import ConfigurationError, SdbError
from tizenbridge.utils.process import run_tool

# sdb often exits 0 even when the command it ran failed, so output is checked too
_STDOUT_FAILURE = re.compile(r"command not found|No such file or directory")
_STDERR_FAILURE = re.compile(r"failed")


class SdbWrapper:
    """Runs sdb subcommands and device shell commands."""

    def __init__(self, sdb_cmd: str, timeout: float | None = None):
        """Initialize sdb wrapper.

        Args:
            sdb_cmd: sdb executable (name on PATH or full path).
            timeout: Optional per-command timeout in seconds. None waits forever.
        """
        if not sdb_cmd:
            raise ConfigurationError("sdb_cmd must be set on SdbWrapper")

        self.sdb_cmd = sdb_cmd
        self.timeout = timeout

    async def execute(self, command: str) -> str:
        """Run ``<sdb_cmd> <command>`` and return its stdout.

        Raises:
            SdbError: On non-zero exit, or when the output signals failure.
            ProcessError: If sdb could not be started or timed out.
        """
        result = await run_tool(
            f"{self.sdb_cmd} {command}", check=False, timeout=self.timeout
        )

        if not result.success:
            detail = (result.stderr.strip() or result.stdout.strip())
            message = f"sdb {command} failed (exit {result.returncode})"
            if detail:
                message += f": {detail}"
            raise SdbError(message, stdout=result.stdout, stderr=result.stderr)

        if _STDOUT_FAILURE.search(result.stdout):
            raise SdbError(result.stdout, stdout=result.stdout, stderr=result.stderr)

        if _STDERR_FAILURE.search(result.stderr):
            raise SdbError(result.stderr, stdout=result.stdout, stderr=result.stderr)

        return result.stdout

    async def shell(self, remote_command: str) -> str:
        """Run a command on the device via ``sdb shell``."""
        return await self.execute(f'shell "{remote_command}"')

    async def push(self, local_file: str, remote_path: str) -> str:
        """Push a local file to the device.

        Raises:
            SdbError: If the local file does not exist or the push fails.
        """
        exists = await asyncio.to_thread(Path(local_file).is_file)
        if not exists:
            raise SdbError(f"cannot stat '{local_file}': No such file or directory")

        return await self.execute(
            f"push {shlex.quote(local_file)} {shlex.quote(remote_path)}"
        )

    async def forward(self, local_port: int, remote_port: int) -> str:
        """Forward a local TCP port to a TCP port on the device."""
        return await self.execute(f"forward tcp:{local_port} tcp:{remote_port}")

    async def root(self, on: bool) -> str:
        """Turn root mode on or off for subsequent sdb commands.

        Only supported by sdb 2.0 and later.
        """
        return await self.execute("root " + ("on" if on else "off"))
