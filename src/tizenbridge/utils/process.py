"""Async subprocess wrapper for all external tool invocations."""

import asyncio
from dataclasses import dataclass

from tizenbridge.exceptions import ProcessError


@dataclass
class ProcessResult:
    """Result of a subprocess execution."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """Check if the command succeeded."""
        return self.returncode == 0


async def run_tool(
    command: str,
    *,
    check: bool = True,
    timeout: float | None = None,
) -> ProcessResult:
    """Run an external tool command line through the shell.

    Args:
        command: Full command line to run.
        check: If True, raise ProcessError on non-zero exit.
        timeout: Optional timeout in seconds. None waits forever.

    Returns:
        ProcessResult with decoded command output.

    Raises:
        ProcessError: If the command cannot be started, times out, or
            check=True and it returns non-zero.
    """
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ProcessError(command, -1, f"Could not start command: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError as e:
        proc.kill()
        await proc.wait()
        raise ProcessError(command, -1, f"Command timed out after {timeout}s") from e

    result = ProcessResult(
        command=command,
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )

    if check and not result.success:
        raise ProcessError(command, result.returncode, result.stderr or result.stdout)

    return result
