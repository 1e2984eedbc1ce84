"""Core Pydantic models for wmi4py."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# Namespace sentinel: no -Namespace clause, engine default namespace
ANY_NAMESPACE = "*"
LOCAL_COMPUTER = "."


class EngineKind(str, Enum):
    POWERSHELL = "powershell"
    VBSCRIPT = "vbscript"


class WMIClass(str, Enum):
    """Commonly queried classes of the root/cimv2 namespace."""
    WIN32_1394CONTROLLER = "Win32_1394Controller"
    WIN32_BASEBOARD = "Win32_BaseBoard"
    WIN32_BATTERY = "Win32_Battery"
    WIN32_BIOS = "Win32_BIOS"
    WIN32_BUS = "Win32_Bus"
    WIN32_CACHEMEMORY = "Win32_CacheMemory"
    WIN32_CDROMDRIVE = "Win32_CDROMDrive"
    WIN32_COMPUTERSYSTEM = "Win32_ComputerSystem"
    WIN32_COMPUTERSYSTEMPRODUCT = "Win32_ComputerSystemProduct"
    WIN32_DESKTOPMONITOR = "Win32_DesktopMonitor"
    WIN32_DISKDRIVE = "Win32_DiskDrive"
    WIN32_DISKPARTITION = "Win32_DiskPartition"
    WIN32_ENVIRONMENT = "Win32_Environment"
    WIN32_FAN = "Win32_Fan"
    WIN32_GROUP = "Win32_Group"
    WIN32_IDECONTROLLER = "Win32_IDEController"
    WIN32_KEYBOARD = "Win32_Keyboard"
    WIN32_LOGICALDISK = "Win32_LogicalDisk"
    WIN32_MEMORYDEVICE = "Win32_MemoryDevice"
    WIN32_NETWORKADAPTER = "Win32_NetworkAdapter"
    WIN32_NETWORKADAPTERCONFIGURATION = "Win32_NetworkAdapterConfiguration"
    WIN32_OPERATINGSYSTEM = "Win32_OperatingSystem"
    WIN32_PHYSICALMEDIA = "Win32_PhysicalMedia"
    WIN32_PHYSICALMEMORY = "Win32_PhysicalMemory"
    WIN32_PNPENTITY = "Win32_PnPEntity"
    WIN32_POINTINGDEVICE = "Win32_PointingDevice"
    WIN32_PORTABLEBATTERY = "Win32_PortableBattery"
    WIN32_PRINTER = "Win32_Printer"
    WIN32_PROCESS = "Win32_Process"
    WIN32_PROCESSOR = "Win32_Processor"
    WIN32_PRODUCT = "Win32_Product"
    WIN32_SERVICE = "Win32_Service"
    WIN32_SHARE = "Win32_Share"
    WIN32_SOUNDDEVICE = "Win32_SoundDevice"
    WIN32_STARTUPCOMMAND = "Win32_StartupCommand"
    WIN32_SYSTEMENCLOSURE = "Win32_SystemEnclosure"
    WIN32_TEMPERATUREPROBE = "Win32_TemperatureProbe"
    WIN32_USBCONTROLLER = "Win32_USBController"
    WIN32_USBHUB = "Win32_USBHub"
    WIN32_USERACCOUNT = "Win32_UserAccount"
    WIN32_VIDEOCONTROLLER = "Win32_VideoController"
    WIN32_VOLUME = "Win32_Volume"


class QueryConfiguration(BaseModel):
    """Immutable scope of a WMI query.

    ``properties`` and ``filters`` are tri-state: ``None`` means not
    configured, while any list (even an empty one) switches object
    operations to the query command.
    """
    model_config = ConfigDict(frozen=True)

    namespace: str = ANY_NAMESPACE
    computer_name: str = LOCAL_COMPUTER
    engine: EngineKind = EngineKind.POWERSHELL
    properties: tuple[str, ...] | None = None
    filters: tuple[str, ...] | None = None

    @property
    def uses_query(self) -> bool:
        """True when object operations must go through the query command."""
        return self.properties is not None or self.filters is not None


class EngineResponse(BaseModel):
    """Output of one command executed by an engine."""
    output: str = ""
    is_error: bool = False
