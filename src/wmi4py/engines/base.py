"""WMIEngine abstract base class -- open/execute/close over an interpreter."""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger

from wmi4py.config import Config
from wmi4py.exceptions import CommandExecutionFailed, EngineUnavailable
from wmi4py.models import EngineKind, EngineResponse


class WMIEngine(ABC):
    """Abstract base class for the external interpreters that run WMI queries.

    Subclasses define KIND and implement _start(), _execute() and _stop().
    The public open/execute/close methods enforce the session lifecycle:
    an engine is opened once, executes any number of commands and is closed
    once. Closing twice is harmless.

    The process model (persistent session or one process per command) is
    private to each subclass.
    """

    KIND: EngineKind = EngineKind.POWERSHELL

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self._opened = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> WMIEngine:
        """Start the interpreter.

        Raises:
            EngineUnavailable: the interpreter could not be found or started.
        """
        if self._closed:
            raise EngineUnavailable(f"{self.KIND.value} engine was already closed")
        if not self._opened:
            self._start()
            self._opened = True
            logger.debug(f"[{self.KIND.value}] engine opened")
        return self

    def execute(self, command: str, timeout: float | None = None) -> EngineResponse:
        """Run one command and return its raw output with the error status.

        Raises:
            CommandExecutionFailed: the engine is not open or the command
                did not complete within ``timeout`` seconds.
        """
        if not self._opened or self._closed:
            raise CommandExecutionFailed(f"{self.KIND.value} engine is not open", command=command)
        if timeout is None:
            timeout = self.config.timeout
        logger.debug(f"[{self.KIND.value}] executing: {command}")
        return self._execute(command, timeout)

    def run(self, command: str, timeout: float | None = None) -> str:
        """Execute ``command`` and return its trimmed output.

        Raises:
            CommandExecutionFailed: the engine reported an error status.
        """
        response = self.execute(command, timeout)
        if response.is_error:
            raise CommandExecutionFailed(
                f"WMI operation finished in error: {response.output}",
                command=command,
                output=response.output,
            )
        return response.output.strip()

    def close(self) -> None:
        """Release the interpreter. Safe to call more than once."""
        if self._closed:
            logger.debug(f"[{self.KIND.value}] engine already closed")
            return
        self._closed = True
        if self._opened:
            self._stop()
            logger.debug(f"[{self.KIND.value}] engine closed")

    def __enter__(self) -> WMIEngine:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def _start(self) -> None:
        """Acquire the interpreter; raise EngineUnavailable on failure."""
        ...

    @abstractmethod
    def _execute(self, command: str, timeout: float) -> EngineResponse:
        """Send ``command`` to the interpreter and wait for its output."""
        ...

    @abstractmethod
    def _stop(self) -> None:
        """Release the interpreter. Must not raise."""
        ...
