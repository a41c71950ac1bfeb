"""Typed exception hierarchy for tizenbridge."""


class TizenBridgeError(Exception):
    """Base exception for all tizenbridge errors."""

    pass


class ToolNotFoundError(TizenBridgeError):
    """Raised when a required external tool is not installed."""

    def __init__(self, tool: str, install_hint: str | None = None):
        self.tool = tool
        self.install_hint = install_hint
        message = f"Required tool not found: {tool}"
        if install_hint:
            message += f"\nInstall: {install_hint}"
        super().__init__(message)


class ConfigurationError(TizenBridgeError):
    """Raised when a required collaborator or setting is missing."""

    pass


class RequestValidationError(ConfigurationError):
    """Raised when an action request is missing fields or names no known action."""

    pass


class ProcessError(TizenBridgeError):
    """Raised when a subprocess command cannot be run or fails."""

    def __init__(self, command: str | list[str], returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        cmd_str = command if isinstance(command, str) else " ".join(command)
        super().__init__(f"Command failed (exit {returncode}): {cmd_str}\n{stderr}")


class SdbError(TizenBridgeError):
    """Raised when an sdb command fails or its output signals a failure."""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class PushError(SdbError):
    """Raised when a file could not be pushed to the device."""

    pass


class ScriptError(TizenBridgeError):
    """Raised when a script run on the device fails."""

    pass


class InstallError(TizenBridgeError):
    """Raised when the device reports a failed package installation."""

    pass


class UninstallError(TizenBridgeError):
    """Raised when a package could not be uninstalled."""

    pass


class LaunchError(TizenBridgeError):
    """Raised when an app could not be started, stopped or debugged."""

    pass


class PortForwardError(TizenBridgeError):
    """Raised when a local port could not be forwarded to the device."""

    pass


class DebugPortNotFoundError(LaunchError):
    """Raised when debug launch output carries no remote port."""

    def __init__(self, stdout: str | None = None):
        self.stdout = stdout
        super().__init__("no remote port available for debugging")


class MetadataError(TizenBridgeError):
    """Raised when the package description file cannot be read or parsed."""

    pass


class AggregateOperationError(TizenBridgeError):
    """Raised when one or more items of a multi-file operation failed.

    The message stays generic; ``failures`` keeps every failed item with
    the exception it raised.
    """

    def __init__(self, message: str, failures: list[tuple[str, BaseException]]):
        self.failures = failures
        super().__init__(message)

    @property
    def failed_items(self) -> list[str]:
        """Items that failed, in dispatch order."""
        return [item for item, _ in self.failures]


class RootBracketError(TizenBridgeError):
    """Raised when both a root-mode command and the following root off failed."""

    def __init__(self, command_error: BaseException, cleanup_error: BaseException):
        self.command_error = command_error
        self.cleanup_error = cleanup_error
        super().__init__(
            f"{command_error}; additionally, turning root off failed: {cleanup_error}"
        )
