"""wmi4py - fluent WMI queries through PowerShell or VBScript."""

from wmi4py.client import WMI4Py, WMIConnection
from wmi4py.config import Config
from wmi4py.exceptions import (
    CommandExecutionFailed,
    ConnectionClosed,
    EngineUnavailable,
    WMIError,
)
from wmi4py.models import EngineKind, QueryConfiguration, WMIClass

__version__ = "1.0.0"

__all__ = [
    "CommandExecutionFailed",
    "Config",
    "ConnectionClosed",
    "EngineKind",
    "EngineUnavailable",
    "QueryConfiguration",
    "WMI4Py",
    "WMIClass",
    "WMIConnection",
    "WMIError",
    "__version__",
]
