"""VBScript engine: one Windows Script Host process per command.

Each command is a complete script produced by :mod:`wmi4py.commands`. It is
written to a temporary ``.vbs`` file and run with ``cscript``; a non-zero
exit code or anything printed on stderr marks the response as an error.
"""

from __future__ import annotations

import os
import subprocess
import tempfile

from loguru import logger

from wmi4py.engines.base import WMIEngine
from wmi4py.exceptions import CommandExecutionFailed, EngineUnavailable
from wmi4py.models import EngineKind, EngineResponse
from wmi4py.platform import CSCRIPT_CANDIDATES, get_cscript_path, is_windows


class VBScriptEngine(WMIEngine):
    """WMI engine that spawns ``cscript`` for every command."""

    KIND = EngineKind.VBSCRIPT

    _cscript_path: str | None = None

    def _start(self) -> None:
        if not is_windows():
            raise EngineUnavailable("VBScript engine requires Windows")

        self._cscript_path = get_cscript_path(
            [self.config.cscript_executable, *CSCRIPT_CANDIDATES]
        )
        if self._cscript_path is None:
            raise EngineUnavailable("cscript not found on this system")

    def _execute(self, command: str, timeout: float) -> EngineResponse:
        fd, script_path = tempfile.mkstemp(prefix="wmi4py_", suffix=".vbs")
        try:
            # UTF-16 with BOM is the only Unicode encoding cscript reads
            with os.fdopen(fd, "w", encoding="utf-16") as f:
                f.write(command)

            args = [self._cscript_path, "//NoLogo", "//E:vbscript", script_path]
            try:
                proc = subprocess.run(
                    args,
                    capture_output=True,
                    timeout=timeout,
                    # cscript writes piped output in the console OEM code page
                    encoding="oem",
                    errors="replace",
                )
            except subprocess.TimeoutExpired:
                raise CommandExecutionFailed(
                    f"VBScript command timed out after {timeout} seconds",
                    command=command,
                ) from None
            except OSError as e:
                raise CommandExecutionFailed(
                    f"OS error executing cscript: {e}",
                    command=command,
                ) from e
        finally:
            try:
                os.remove(script_path)
            except OSError as e:
                logger.debug(f"[vbscript] could not remove {script_path}: {e}")

        stderr = proc.stderr.strip() if proc.stderr else ""
        if proc.returncode != 0 or stderr:
            return EngineResponse(
                output=stderr or proc.stdout or f"cscript exited with code {proc.returncode}",
                is_error=True,
            )
        return EngineResponse(output=proc.stdout, is_error=False)

    def _stop(self) -> None:
        self._cscript_path = None
