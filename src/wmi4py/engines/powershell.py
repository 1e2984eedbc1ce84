"""Persistent interactive PowerShell session.

One ``powershell.exe -Command -`` process is started per engine and fed one
command line at a time on stdin. Every command is wrapped so that its output
is framed by a begin marker and an end marker carrying the success status,
which lets the engine tell where one command's output stops and whether it
failed.
"""

from __future__ import annotations

import contextlib
import itertools
import queue
import subprocess
import threading
import time
from typing import IO

import psutil
from loguru import logger

from wmi4py.config import Config
from wmi4py.engines.base import WMIEngine
from wmi4py.exceptions import CommandExecutionFailed, EngineUnavailable
from wmi4py.models import EngineKind, EngineResponse
from wmi4py.platform import get_powershell_path, is_windows

MARKER_PREFIX = "__WMI4PY"
OUTPUT_WIDTH = 4096
EXIT_WAIT_SECONDS = 2

SESSION_SETUP = (
    "$ErrorActionPreference = 'Stop'; "
    "$ProgressPreference = 'SilentlyContinue'; "
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8"
)


class PowerShellEngine(WMIEngine):
    """WMI engine backed by a long-lived PowerShell process."""

    KIND = EngineKind.POWERSHELL

    def __init__(self, config: Config | None = None) -> None:
        super().__init__(config)
        self._process: subprocess.Popen | None = None
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._reader: threading.Thread | None = None
        self._sequence = itertools.count(1)

    def _start(self) -> None:
        if not is_windows():
            raise EngineUnavailable("PowerShell engine requires Windows")

        ps_path = get_powershell_path(self.config.powershell_executables)
        if ps_path is None:
            raise EngineUnavailable("PowerShell not found on this system")

        args = [
            ps_path,
            "-NoLogo",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy", "Bypass",
            "-Command", "-",
        ]
        try:
            self._process = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise EngineUnavailable(f"OS error starting PowerShell: {e}") from e

        self._reader = threading.Thread(
            target=_pump_lines,
            args=(self._process.stdout, self._lines),
            name="wmi4py-powershell-reader",
            daemon=True,
        )
        self._reader.start()
        logger.debug(f"[powershell] started {ps_path} (pid {self._process.pid})")

        try:
            response = self._execute(SESSION_SETUP, self.config.startup_timeout)
        except CommandExecutionFailed as e:
            self._stop()
            raise EngineUnavailable(f"PowerShell session did not start: {e}") from e
        if response.is_error:
            self._stop()
            raise EngineUnavailable(f"PowerShell session setup failed: {response.output}")

    def _execute(self, command: str, timeout: float) -> EngineResponse:
        sequence = next(self._sequence)
        begin = f"{MARKER_PREFIX}_BEGIN_{sequence}__"
        end = f"{MARKER_PREFIX}_END_{sequence}__"

        self._send(_wrap_command(command, begin, end), command)

        deadline = time.monotonic() + timeout
        collecting = False
        output: list[str] = []
        while True:
            remaining = deadline - time.monotonic()
            try:
                if remaining <= 0:
                    raise queue.Empty
                line = self._lines.get(timeout=remaining)
            except queue.Empty:
                raise CommandExecutionFailed(
                    f"PowerShell command timed out after {timeout} seconds",
                    command=command,
                    output="\n".join(output),
                ) from None

            if line is None:
                raise CommandExecutionFailed(
                    "PowerShell session ended unexpectedly",
                    command=command,
                    output="\n".join(output),
                )

            # PowerShell emits a BOM after the output encoding changes
            line = line.rstrip("\r\n").replace("\ufeff", "")
            if begin in line:
                collecting = True
                output = []
            elif end in line:
                status = line.rsplit(":", 1)[-1].strip()
                return EngineResponse(output="\n".join(output), is_error=status != "0")
            elif collecting:
                output.append(line)
            # Anything else is left over from an earlier, timed-out command

    def _send(self, line: str, command: str) -> None:
        process = self._process
        if process is None or process.poll() is not None:
            raise CommandExecutionFailed("PowerShell session is no longer running", command=command)
        try:
            process.stdin.write(line + "\n")
            process.stdin.flush()
        except OSError as e:
            raise CommandExecutionFailed(f"Failed writing to PowerShell: {e}", command=command) from e

    def _stop(self) -> None:
        process = self._process
        if process is None:
            return
        self._process = None

        if process.poll() is None:
            try:
                process.stdin.write("exit\n")
                process.stdin.flush()
                process.wait(timeout=EXIT_WAIT_SECONDS)
            except (OSError, subprocess.TimeoutExpired) as e:
                logger.debug(f"[powershell] session did not exit cleanly ({e}), killing")
                _kill_tree(process.pid)

        for stream in (process.stdin, process.stdout):
            if stream is not None:
                with contextlib.suppress(OSError):
                    stream.close()


def _wrap_command(command: str, begin: str, end: str) -> str:
    """Frame ``command`` with markers on a single input line."""
    body = " ".join(command.splitlines())
    return (
        f"Write-Output '{begin}'; "
        f"try {{ . {{ {body} }} | Out-String -Stream -Width {OUTPUT_WIDTH}; Write-Output '{end}:0' }} "
        f"catch {{ Write-Output ($_ | Out-String -Width {OUTPUT_WIDTH}); Write-Output '{end}:1' }}"
    )


def _pump_lines(stream: IO[str], lines: queue.Queue) -> None:
    """Copy ``stream`` into ``lines`` until EOF, then post a None sentinel."""
    try:
        for line in iter(stream.readline, ""):
            lines.put(line)
    except (OSError, ValueError) as e:
        logger.debug(f"[powershell] reader stopped: {e}")
    finally:
        lines.put(None)


def _kill_tree(pid: int) -> None:
    """Kill a process and all of its descendants."""
    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return
    for child in parent.children(recursive=True):
        with contextlib.suppress(psutil.NoSuchProcess):
            child.kill()
    with contextlib.suppress(psutil.NoSuchProcess):
        parent.kill()
