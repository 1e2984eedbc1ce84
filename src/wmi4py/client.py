"""Fluent WMI client.

Example::

    board = WMI4Py.get().namespace("root/cimv2").get_wmi_object(WMIClass.WIN32_BASEBOARD)

    with WMI4Py.get().properties(["Name", "Status"]).open_connection() as conn:
        fans = conn.get_wmi_object_list("Win32_Fan")
        disks = conn.get_wmi_object_list(WMIClass.WIN32_DISKDRIVE)

The default computer name is ``"."`` and the default namespace is the
engine's own default (``root/cimv2``). PowerShell is used unless the
VBScript engine is selected.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from wmi4py.commands import (
    build_list_classes_command,
    build_list_object_command,
    build_list_properties_command,
    build_query_object_command,
)
from wmi4py.config import Config
from wmi4py.engines import WMIEngine, open_engine
from wmi4py.exceptions import ConnectionClosed, EngineUnavailable, WMIError
from wmi4py.models import EngineKind, QueryConfiguration, WMIClass
from wmi4py.parsers import (
    parse_class_list,
    parse_flat_object,
    parse_object_list,
    parse_property_list,
)

GENERIC_ERROR_MSG = "Error calling WMI"


def _class_name(wmi_class: WMIClass | str) -> str:
    if isinstance(wmi_class, WMIClass):
        return wmi_class.value
    return str(wmi_class)


class WMI4Py:
    """Immutable, chainable WMI query configuration.

    Every setter returns a new instance, so a configured client can be kept
    and reused. The single-call operations open a connection, run one
    operation and close it again; when running several operations use
    :meth:`open_connection` instead to reuse one engine session.
    """

    def __init__(self, query: QueryConfiguration | None = None, config: Config | None = None):
        self._config = config or Config.from_defaults()
        if query is None:
            query = QueryConfiguration(
                namespace=self._config.namespace,
                computer_name=self._config.computer_name,
                engine=self._config.engine,
            )
        self._query = query

    @classmethod
    def get(cls, config: Config | None = None) -> WMI4Py:
        """Create a client with the default configuration."""
        return cls(config=config)

    @property
    def query(self) -> QueryConfiguration:
        return self._query

    @property
    def config(self) -> Config:
        return self._config

    def _with(self, **changes) -> WMI4Py:
        return WMI4Py(self._query.model_copy(update=changes), self._config)

    def namespace(self, namespace: str) -> WMI4Py:
        """Set the namespace, e.g. ``"root/WMI"``. ``"*"`` means the engine default."""
        return self._with(namespace=namespace)

    def computer_name(self, computer_name: str) -> WMI4Py:
        """Set the computer to query; ``"."`` is this one."""
        return self._with(computer_name=computer_name)

    def engine(self, kind: EngineKind | str) -> WMI4Py:
        return self._with(engine=EngineKind(kind))

    def powershell_engine(self) -> WMI4Py:
        return self.engine(EngineKind.POWERSHELL)

    def vbscript_engine(self) -> WMI4Py:
        return self.engine(EngineKind.VBSCRIPT)

    def properties(self, properties: Iterable[str] | None) -> WMI4Py:
        """Restrict object operations to the named properties.

        Any list, even an empty one, routes object operations through the
        query command. Pass None to go back to listing all fields.
        """
        return self._with(properties=None if properties is None else tuple(properties))

    def filters(self, filters: Iterable[str] | None) -> WMI4Py:
        """Set filter expressions; an object must match all of them.

        PowerShell filters are FilterScript expressions
        (``$_.Status -eq 'OK'``); VBScript filters are WQL conditions
        (``Status='OK'``).
        """
        return self._with(filters=None if filters is None else tuple(filters))

    def with_config(self, config: Config) -> WMI4Py:
        return WMI4Py(self._query, config)

    def open_connection(self) -> WMIConnection:
        """Open a connection to the selected engine.

        Close it when done, with a ``with`` block or an explicit
        :meth:`WMIConnection.close`.
        """
        return WMIConnection(self._query, self._config)

    def list_classes(self) -> list[str]:
        """Single-operation version of :meth:`WMIConnection.list_classes`."""
        with self.open_connection() as connection:
            return connection.list_classes()

    def list_properties(self, wmi_class: WMIClass | str) -> list[str]:
        """Single-operation version of :meth:`WMIConnection.list_properties`."""
        with self.open_connection() as connection:
            return connection.list_properties(wmi_class)

    def get_wmi_object(self, wmi_class: WMIClass | str) -> dict[str, str]:
        """Single-operation version of :meth:`WMIConnection.get_wmi_object`."""
        with self.open_connection() as connection:
            return connection.get_wmi_object(wmi_class)

    def get_wmi_object_list(self, wmi_class: WMIClass | str) -> list[dict[str, str]]:
        """Single-operation version of :meth:`WMIConnection.get_wmi_object_list`."""
        with self.open_connection() as connection:
            return connection.get_wmi_object_list(wmi_class)

    def get_raw_wmi_object_output(self, wmi_class: WMIClass | str) -> str:
        """Single-operation version of :meth:`WMIConnection.get_raw_wmi_object_output`."""
        with self.open_connection() as connection:
            return connection.get_raw_wmi_object_output(wmi_class)


class WMIConnection:
    """An open session with one WMI engine.

    The engine is started on construction and released by :meth:`close`.
    Any operation on a closed connection raises :class:`ConnectionClosed`.
    Engine failures are logged and re-raised as :class:`WMIError` with the
    original exception as the cause; the connection stays usable after a
    failed command.

    Not safe for concurrent use; open one connection per thread.
    """

    def __init__(
        self,
        query: QueryConfiguration | None = None,
        config: Config | None = None,
        engine: WMIEngine | None = None,
    ):
        self.query = query or QueryConfiguration()
        self.config = config or Config()
        self._closed = False
        try:
            if engine is not None:
                self._engine = engine.open()
            else:
                self._engine = open_engine(self.query.engine, self.config)
        except EngineUnavailable as ex:
            logger.error(f"{GENERIC_ERROR_MSG}: {ex}")
            raise

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the engine. Closing an already closed connection does nothing."""
        if self._closed:
            return
        self._closed = True
        self._engine.close()

    def __enter__(self) -> WMIConnection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def list_classes(self) -> list[str]:
        """Return the sorted names of the classes in the configured namespace."""
        command = build_list_classes_command(self.query.namespace, self.query.engine)
        return parse_class_list(self._run(command))

    def list_properties(self, wmi_class: WMIClass | str) -> list[str]:
        """Return the property names of ``wmi_class``."""
        command = build_list_properties_command(
            _class_name(wmi_class),
            self.query.namespace,
            self.query.computer_name,
            self.query.engine,
        )
        return parse_property_list(self._run(command))

    def get_wmi_object(self, wmi_class: WMIClass | str) -> dict[str, str]:
        """Return the properties of ``wmi_class`` as one flat mapping.

        Warning: when the class has several instances their properties are
        merged and later values overwrite earlier ones. Use
        :meth:`get_wmi_object_list` to retrieve every instance.
        """
        return parse_flat_object(self._run(self._object_command(wmi_class)))

    def get_wmi_object_list(self, wmi_class: WMIClass | str) -> list[dict[str, str]]:
        """Return one mapping per instance of ``wmi_class``.

        Use this for hardware lists such as processors, printers or disks.
        """
        return parse_object_list(self._run(self._object_command(wmi_class)))

    def get_raw_wmi_object_output(self, wmi_class: WMIClass | str) -> str:
        """Return the unparsed engine output for ``wmi_class``."""
        return self._run(self._object_command(wmi_class))

    def _object_command(self, wmi_class: WMIClass | str) -> str:
        name = _class_name(wmi_class)
        if self.query.uses_query:
            return build_query_object_command(
                name,
                self.query.properties,
                self.query.filters,
                self.query.namespace,
                self.query.computer_name,
                self.query.engine,
            )
        return build_list_object_command(
            name,
            self.query.namespace,
            self.query.computer_name,
            self.query.engine,
        )

    def _run(self, command: str) -> str:
        if self._closed:
            raise ConnectionClosed("WMI connection is closed")
        try:
            return self._engine.run(command, self.config.timeout)
        except Exception as ex:
            logger.error(f"{GENERIC_ERROR_MSG}: {ex}")
            raise WMIError(f"{GENERIC_ERROR_MSG}: {ex}") from ex
