"""Map action requests onto sequences of Bridge calls."""

import asyncio
import re
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import ValidationError

from tizenbridge.core.bridge import Bridge
from tizenbridge.core.tizen_config import TizenConfig
from tizenbridge.exceptions import (
    ConfigurationError,
    DebugPortNotFoundError,
    RequestValidationError,
    RootBracketError,
)
from tizenbridge.models.action import Action, ActionRequest
from tizenbridge.models.app import AppMetadata

DEBUG_PORT = re.compile(r"PORT (\d+)")

# pkgcmd refuses to install packages as the developer user
ALWAYS_ROOT = frozenset({Action.INSTALL})


def extract_debug_port(stdout: str | None) -> int:
    """Get the remote debug port from ``debug`` launch output.

    Raises:
        DebugPortNotFoundError: If the output has no ``PORT <n>`` token.
    """
    match = DEBUG_PORT.search(stdout or "")
    if not match:
        raise DebugPortNotFoundError(stdout)
    return int(match.group(1))


class TaskOrchestrator:
    """Validates action requests and runs them against a Bridge."""

    def __init__(self, bridge: Bridge | None, tizen_config: TizenConfig | None):
        if bridge is None:
            raise ConfigurationError("Bridge instance is required by TaskOrchestrator")
        if tizen_config is None:
            raise ConfigurationError(
                "TizenConfig instance is required by TaskOrchestrator"
            )

        self.bridge = bridge
        self.tizen_config = tizen_config
        self._commands: dict[Action, Callable[[ActionRequest, Action], Awaitable[Any]]] = {
            Action.PUSH: self._push,
            Action.INSTALL: self._install,
            Action.UNINSTALL: self._uninstall,
            Action.SCRIPT: self._script,
            Action.START: self._launch,
            Action.STOP: self._launch,
            Action.DEBUG: self._launch,
        }

    async def run(self, request: ActionRequest | Mapping[str, Any]) -> Any:
        """Run one action request.

        The request is fully validated before any Bridge call. If it asks
        for root (or the action always needs it), the command runs inside
        the root bracket.

        Returns:
            The command's result: stdout for script/start/stop, else None.
        """
        request = self._coerce(request)
        action = self._resolve_action(request)
        self._validate(action, request)

        command = self._commands[action]
        if request.as_root or action in ALWAYS_ROOT:
            return await self.as_root(lambda: command(request, action))
        return await command(request, action)

    async def prepare(self) -> None:
        """Push tizen-app.sh to the device and make it executable."""
        local_script = self.bridge.app_script_local
        remote_dir = self.bridge.app_script_dir

        if not local_script or not remote_dir:
            raise ConfigurationError(
                "prepare needs app_script_local and app_script_dir set on Bridge"
            )

        await self.bridge.push(local_script, remote_dir, overwrite=True, chmod="+x")

    async def as_root(self, command: Callable[[], Awaitable[Any]]) -> Any:
        """Run ``command`` between ``root(True)`` and ``root(False)``.

        root(False) always follows a successful root(True). If both the
        command and root(False) fail, RootBracketError keeps both errors.
        """
        await self.bridge.root(True)

        try:
            result = await command()
        except Exception as command_error:
            try:
                await self.bridge.root(False)
            except Exception as cleanup_error:
                raise RootBracketError(command_error, cleanup_error) from cleanup_error
            raise

        await self.bridge.root(False)
        return result

    async def get_meta(self) -> AppMetadata:
        return await asyncio.to_thread(self.tizen_config.get_meta)

    @staticmethod
    def _coerce(request: ActionRequest | Mapping[str, Any]) -> ActionRequest:
        if isinstance(request, ActionRequest):
            return request
        try:
            return ActionRequest.model_validate(request)
        except ValidationError as e:
            raise RequestValidationError(f"invalid action request: {e}") from e

    @staticmethod
    def _resolve_action(request: ActionRequest) -> Action:
        if not request.action:
            raise RequestValidationError("task requires an action argument")
        try:
            return Action(request.action)
        except ValueError:
            raise RequestValidationError(
                f'action "{request.action}" was not recognised as valid'
            ) from None

    @staticmethod
    def _validate(action: Action, request: ActionRequest) -> None:
        required: dict[Action, tuple[str, ...]] = {
            Action.PUSH: ("local_files", "remote_dir"),
            Action.INSTALL: ("remote_files",),
            Action.SCRIPT: ("remote_script",),
        }
        for field in required.get(action, ()):
            if getattr(request, field) in (None, ""):
                raise RequestValidationError(
                    f'"{action}" action needs a {field} property'
                )

    async def _push(self, request: ActionRequest, action: Action) -> None:
        await self.bridge.push(
            request.local_files,
            request.remote_dir,
            overwrite=request.overwrite,
            chmod=request.chmod or None,
        )

    async def _install(self, request: ActionRequest, action: Action) -> None:
        await self.bridge.install(request.remote_files)

    async def _uninstall(self, request: ActionRequest, action: Action) -> None:
        meta = await self.get_meta()
        await self.bridge.uninstall(meta.package_name, request.stop_on_failure)

    async def _script(self, request: ActionRequest, action: Action) -> str:
        meta = await self.get_meta()
        args = [meta.package_name, meta.id, *request.args]
        return await self.bridge.run_script(request.remote_script, args)

    async def _launch(self, request: ActionRequest, action: Action) -> str | None:
        meta = await self.get_meta()
        stdout = await self.bridge.launch(
            action.value, meta.id, request.stop_on_failure
        )

        if action != Action.DEBUG:
            return stdout

        remote_port = extract_debug_port(stdout)
        await self.bridge.port_forward(request.local_port, remote_port)

        if request.browser_cmd:
            await self.bridge.run_browser(request.browser_cmd, request.local_port)

        return None
