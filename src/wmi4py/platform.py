"""Platform detection and interpreter lookup."""

from __future__ import annotations

import shutil
import sys
from collections.abc import Iterable

# Get-WMIObject is only available in Windows PowerShell 5.1, not in pwsh
POWERSHELL_CANDIDATES = ("powershell.exe", "powershell")
CSCRIPT_CANDIDATES = ("cscript.exe", "cscript")


def is_windows() -> bool:
    """Return True if running on Windows."""
    return sys.platform == "win32"


def find_executable(names: Iterable[str]) -> str | None:
    """Return the full path of the first name found on PATH, or None."""
    for name in names:
        path = shutil.which(name)
        if path:
            return path
    return None


def get_powershell_path(candidates: Iterable[str] = POWERSHELL_CANDIDATES) -> str | None:
    """Return path to the first PowerShell executable found, or None."""
    return find_executable(candidates)


def get_cscript_path(candidates: Iterable[str] = CSCRIPT_CANDIDATES) -> str | None:
    """Return path to the console Windows Script Host, or None if not found."""
    return find_executable(candidates)
