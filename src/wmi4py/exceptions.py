"""Error hierarchy raised by wmi4py."""

from __future__ import annotations


class WMIError(Exception):
    """Base failure for every WMI operation.

    Connection operations wrap engine failures in this type; the original
    exception is kept as ``__cause__``.
    """


class EngineUnavailable(WMIError):
    """The external interpreter could not be found or started."""


class CommandExecutionFailed(WMIError):
    """The engine reported an error (or timed out) for a single command."""

    def __init__(self, message: str, command: str | None = None, output: str = ""):
        super().__init__(message)
        self.command = command
        self.output = output


class ConnectionClosed(WMIError):
    """An operation was attempted on a connection that was already closed."""
