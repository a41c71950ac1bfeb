"""Pydantic models for action requests handled by the task orchestrator."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from tizenbridge.models.files import FileSpec


class Action(StrEnum):
    """Actions the orchestrator knows how to run."""

    PUSH = "push"
    INSTALL = "install"
    UNINSTALL = "uninstall"
    SCRIPT = "script"
    START = "start"
    STOP = "stop"
    DEBUG = "debug"


DEFAULT_LOCAL_DEBUG_PORT = 8888


class ActionRequest(BaseModel):
    """One invocation of an action, with its action-specific options."""

    model_config = ConfigDict(frozen=True)

    action: str | None = None
    """Name of the action; checked against Action by the orchestrator."""

    as_root: bool = False
    """Run the action between "sdb root on" and "sdb root off"."""

    # push
    local_files: FileSpec | None = None
    remote_dir: str | None = None
    overwrite: bool = True
    chmod: str | None = None

    # install
    remote_files: FileSpec | None = None

    # uninstall, start, stop, debug
    stop_on_failure: bool = False

    # script
    remote_script: str | None = None
    args: list[str] = []

    # debug
    local_port: int = DEFAULT_LOCAL_DEBUG_PORT
    browser_cmd: str | None = None
