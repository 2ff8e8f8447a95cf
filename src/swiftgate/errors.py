"""Exception types raised by swiftgate."""


class SwiftGateError(Exception):
    """Base class for all swiftgate errors."""


class CheckerUnavailableError(SwiftGateError):
    """The syntax checker binary could not be started."""

    def __init__(self, command: list[str], reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"cannot run {' '.join(command)!r}: {reason}")


class ConfigError(SwiftGateError):
    """A configuration file or override is invalid."""
