"""Launch a local browser detached from this process."""

import asyncio
import shlex
import tempfile

from tizenbridge.exceptions import ConfigurationError, ProcessError


class BrowserLauncher:
    """Spawns a browser command line and leaves it running.

    The browser is started in its own session so it outlives the CLI.
    Output written during the first ``settle_time`` seconds is returned;
    if the command exits non-zero inside that window it is treated as a
    failure.
    """

    def __init__(self, settle_time: float = 1.0):
        self.settle_time = settle_time

    async def __call__(self, command: str) -> str:
        args = shlex.split(command)
        if not args:
            raise ConfigurationError("browser command is empty")

        with tempfile.TemporaryFile() as out, tempfile.TemporaryFile() as err:
            try:
                proc = await asyncio.create_subprocess_exec(
                    *args,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=out,
                    stderr=err,
                    start_new_session=True,
                )
            except OSError as e:
                raise ProcessError(command, -1, f"Could not start browser: {e}") from e

            try:
                returncode = await asyncio.wait_for(proc.wait(), self.settle_time)
            except asyncio.TimeoutError:
                returncode = None

            out.seek(0)
            err.seek(0)
            stdout = out.read().decode(errors="replace")
            stderr = err.read().decode(errors="replace")

        if returncode:
            raise ProcessError(command, returncode, stderr)

        return stdout
