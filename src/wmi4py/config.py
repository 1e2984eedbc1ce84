"""YAML configuration loader with defaults."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import yaml

from wmi4py.models import ANY_NAMESPACE, LOCAL_COMPUTER, EngineKind
from wmi4py.platform import POWERSHELL_CANDIDATES

_DEFAULT_CONFIG_RESOURCE = "wmi4py.data"
_DEFAULT_CONFIG_FILE = "defaults.yaml"

DEFAULT_TIMEOUT = 20
DEFAULT_STARTUP_TIMEOUT = 30


class Config:
    """Engine and query defaults loaded from YAML with CLI overrides."""

    def __init__(
        self,
        engine: EngineKind = EngineKind.POWERSHELL,
        timeout: float = DEFAULT_TIMEOUT,
        startup_timeout: float = DEFAULT_STARTUP_TIMEOUT,
        namespace: str = ANY_NAMESPACE,
        computer_name: str = LOCAL_COMPUTER,
        powershell_executables: list[str] | None = None,
        cscript_executable: str = "cscript.exe",
        verbose: bool = False,
    ):
        self.engine = engine
        self.timeout = timeout
        self.startup_timeout = startup_timeout
        self.namespace = namespace
        self.computer_name = computer_name
        self.powershell_executables = powershell_executables or list(POWERSHELL_CANDIDATES)
        self.cscript_executable = cscript_executable
        self.verbose = verbose

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return cls._from_dict(raw)

    @classmethod
    def from_defaults(cls) -> Config:
        """Load built-in default configuration."""
        try:
            ref = resources.files(_DEFAULT_CONFIG_RESOURCE).joinpath(_DEFAULT_CONFIG_FILE)
            raw = yaml.safe_load(ref.read_text(encoding="utf-8")) or {}
            return cls._from_dict(raw)
        except (FileNotFoundError, TypeError):
            return cls()

    @classmethod
    def _from_dict(cls, raw: dict) -> Config:
        """Parse a raw dict into Config."""
        engine_section = raw.get("engine", {}) or {}
        query_section = raw.get("query", {}) or {}

        try:
            kind = EngineKind(str(engine_section.get("kind", "powershell")).lower())
        except ValueError:
            kind = EngineKind.POWERSHELL

        return cls(
            engine=kind,
            timeout=float(engine_section.get("timeout", DEFAULT_TIMEOUT)),
            startup_timeout=float(engine_section.get("startup_timeout", DEFAULT_STARTUP_TIMEOUT)),
            namespace=str(query_section.get("namespace", ANY_NAMESPACE)),
            computer_name=str(query_section.get("computer_name", LOCAL_COMPUTER)),
            powershell_executables=engine_section.get("powershell_executables"),
            cscript_executable=engine_section.get("cscript_executable", "cscript.exe"),
        )

    def apply_overrides(
        self,
        engine: str | None = None,
        timeout: float | None = None,
        namespace: str | None = None,
        computer_name: str | None = None,
        verbose: bool = False,
    ) -> None:
        """Apply CLI flag overrides to this config."""
        if engine:
            try:
                self.engine = EngineKind(engine.lower())
            except ValueError:
                pass  # keep existing
        if timeout is not None and timeout > 0:
            self.timeout = timeout
        if namespace:
            self.namespace = namespace
        if computer_name is not None:
            self.computer_name = computer_name
        if verbose:
            self.verbose = True
