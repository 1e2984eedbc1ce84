"""Shared test fixtures and a scripted in-memory engine."""

from __future__ import annotations

import sys

import pytest

from wmi4py.config import Config
from wmi4py.engines.base import WMIEngine
from wmi4py.models import EngineKind, EngineResponse

windows_only = pytest.mark.skipif(
    sys.platform != "win32",
    reason="Test requires Windows",
)

BASEBOARD_OUTPUT = (
    "\r\n"
    "Manufacturer : ASUSTeK COMPUTER INC.\r\n"
    "Product      : PRIME B450M-A\r\n"
    "SerialNumber : 190455802702017\r\n"
    "Status       : OK\r\n"
    "\r\n"
)

PROCESSOR_LIST_OUTPUT = (
    "Name          : Intel(R) Core(TM) i7-1365U\n"
    "NumberOfCores : 10\n"
    "DeviceID      : CPU0\n"
    "\n"
    "Name          : Intel(R) Core(TM) i7-1365U\n"
    "NumberOfCores : 10\n"
    "DeviceID      : CPU1\n"
    "\n"
)


class FakeEngine(WMIEngine):
    """In-memory engine returning queued responses and recording commands."""

    KIND = EngineKind.POWERSHELL

    def __init__(self, config: Config | None = None) -> None:
        super().__init__(config)
        self.responses: list[EngineResponse | Exception] = []
        self.commands: list[str] = []
        self.timeouts: list[float] = []
        self.start_calls = 0
        self.stop_calls = 0

    def queue(self, output: str = "", is_error: bool = False) -> None:
        self.responses.append(EngineResponse(output=output, is_error=is_error))

    def _start(self) -> None:
        self.start_calls += 1

    def _execute(self, command: str, timeout: float) -> EngineResponse:
        self.commands.append(command)
        self.timeouts.append(timeout)
        if not self.responses:
            return EngineResponse()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def _stop(self) -> None:
        self.stop_calls += 1


@pytest.fixture
def default_config() -> Config:
    """Return a default Config instance."""
    return Config()


@pytest.fixture
def fake_engine(default_config: Config) -> FakeEngine:
    """Return an unopened FakeEngine."""
    return FakeEngine(default_config)


@pytest.fixture
def patched_engine(monkeypatch: pytest.MonkeyPatch, fake_engine: FakeEngine) -> FakeEngine:
    """Make every new connection use ``fake_engine``."""
    def _open_engine(kind, config=None):
        fake_engine.config = config or fake_engine.config
        return fake_engine.open()

    monkeypatch.setattr("wmi4py.client.open_engine", _open_engine)
    return fake_engine


@pytest.fixture
def baseboard_output() -> str:
    """Format-List output for a single Win32_BaseBoard instance (CRLF)."""
    return BASEBOARD_OUTPUT


@pytest.fixture
def processor_list_output() -> str:
    """Format-List output for two Win32_Processor instances (LF)."""
    return PROCESSOR_LIST_OUTPUT
