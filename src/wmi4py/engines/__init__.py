"""Interpreters able to run WMI queries."""

from __future__ import annotations

from wmi4py.config import Config
from wmi4py.engines.base import WMIEngine
from wmi4py.engines.powershell import PowerShellEngine
from wmi4py.engines.vbscript import VBScriptEngine
from wmi4py.models import EngineKind

ENGINES: dict[EngineKind, type[WMIEngine]] = {
    EngineKind.POWERSHELL: PowerShellEngine,
    EngineKind.VBSCRIPT: VBScriptEngine,
}


def open_engine(kind: EngineKind, config: Config | None = None) -> WMIEngine:
    """Create and open the engine selected by ``kind``.

    Raises:
        EngineUnavailable: the interpreter could not be started.
    """
    engine = ENGINES[EngineKind(kind)](config)
    return engine.open()


__all__ = ["ENGINES", "PowerShellEngine", "VBScriptEngine", "WMIEngine", "open_engine"]
