"""Builders for the commands sent to the WMI engines.

PowerShell commands are single pipelines around ``Get-WMIObject``. VBScript
commands are complete scripts run by the Windows Script Host that print the
same text layout as the PowerShell pipelines, so a single set of parsers
handles both engines.

Class names, property names and filters are passed through verbatim; the
engine is responsible for rejecting invalid ones.
"""

from __future__ import annotations

from collections.abc import Sequence

from wmi4py.models import ANY_NAMESPACE, EngineKind

NAMESPACE_PARAM = "-Namespace "
COMPUTERNAME_PARAM = "-ComputerName "
GETWMIOBJECT_COMMAND = "Get-WMIObject "
EXCLUDE_INTERNAL = '-excludeproperty "_*"'

VBS_DEFAULT_NAMESPACE = "root\\cimv2"
VBS_LOCAL_COMPUTER = "."


def build_list_classes_command(namespace: str, engine: EngineKind = EngineKind.POWERSHELL) -> str:
    """Command listing every class of ``namespace``, sorted by name."""
    if engine is EngineKind.VBSCRIPT:
        return _vbs_script(
            namespace,
            "",
            [
                "Set colClasses = objWMIService.SubclassesOf()",
                "For Each objClass In colClasses",
                "    WScript.Echo objClass.Path_.Class",
                "Next",
            ],
        )

    namespace_clause = ""
    if namespace != ANY_NAMESPACE:
        namespace_clause = NAMESPACE_PARAM + namespace
    return GETWMIOBJECT_COMMAND + namespace_clause + " -List | Sort Name"


def build_list_properties_command(
    wmi_class: str,
    namespace: str,
    computer_name: str,
    engine: EngineKind = EngineKind.POWERSHELL,
) -> str:
    """Command printing the property names of ``wmi_class``, one per line."""
    if engine is EngineKind.VBSCRIPT:
        return _vbs_script(
            namespace,
            computer_name,
            [
                f'Set objClass = objWMIService.Get("{_vbs_escape(wmi_class)}")',
                "For Each objProperty In objClass.Properties_",
                '    If Left(objProperty.Name, 1) <> "_" Then',
                "        WScript.Echo objProperty.Name",
                "    End If",
                "Next",
            ],
        )

    command = _init_command(wmi_class, namespace, computer_name)
    command += " | "
    command += f"Select-Object * {EXCLUDE_INTERNAL} | "
    command += "Get-Member | select name | format-table -hidetableheader"
    return command


def build_list_object_command(
    wmi_class: str,
    namespace: str,
    computer_name: str,
    engine: EngineKind = EngineKind.POWERSHELL,
) -> str:
    """Command dumping every field of every instance of ``wmi_class``."""
    if engine is EngineKind.VBSCRIPT:
        return _vbs_object_dump(f"SELECT * FROM {wmi_class}", namespace, computer_name)

    command = _init_command(wmi_class, namespace, computer_name)
    command += " | "
    command += f"Select-Object * {EXCLUDE_INTERNAL} | "
    command += "Format-List *"
    return command


def build_query_object_command(
    wmi_class: str,
    properties: Sequence[str] | None,
    filters: Sequence[str] | None,
    namespace: str,
    computer_name: str,
    engine: EngineKind = EngineKind.POWERSHELL,
) -> str:
    """Command dumping the selected fields of the instances matching ``filters``.

    Each filter is applied in sequence, so an instance must satisfy all of
    them. ``None`` or empty ``properties`` selects every field.
    """
    used_properties = list(properties) if properties else ["*"]
    conditions = list(filters) if filters else []

    if engine is EngineKind.VBSCRIPT:
        wql = f"SELECT {', '.join(used_properties)} FROM {wmi_class}"
        if conditions:
            wql += " WHERE " + " AND ".join(f"({condition})" for condition in conditions)
        return _vbs_object_dump(wql, namespace, computer_name)

    command = _init_command(wmi_class, namespace, computer_name)
    command += " | "
    for condition in conditions:
        command += "Where-Object -FilterScript {" + condition + "} | "
    command += f"Select-Object {', '.join(used_properties)} {EXCLUDE_INTERNAL} | "
    command += "Format-List *"
    return command


def _init_command(wmi_class: str, namespace: str, computer_name: str) -> str:
    command = GETWMIOBJECT_COMMAND + wmi_class + " "
    if namespace != ANY_NAMESPACE:
        command += NAMESPACE_PARAM + namespace + " "
    if computer_name:
        command += COMPUTERNAME_PARAM + computer_name + " "
    return command


def _vbs_escape(value: str) -> str:
    """Escape a value for use inside a VBScript string literal."""
    return value.replace('"', '""')


def _vbs_moniker(namespace: str, computer_name: str) -> str:
    ns = VBS_DEFAULT_NAMESPACE if namespace == ANY_NAMESPACE else namespace.replace("/", "\\")
    computer = computer_name or VBS_LOCAL_COMPUTER
    return f"winmgmts:{{impersonationLevel=impersonate}}!\\\\{computer}\\{ns}"


def _vbs_script(namespace: str, computer_name: str, body: list[str]) -> str:
    lines = [
        "Option Explicit",
        "Dim objWMIService, colClasses, objClass, colItems, objItem, objProperty, strValue",
        f'Set objWMIService = GetObject("{_vbs_escape(_vbs_moniker(namespace, computer_name))}")',
    ]
    lines.extend(body)
    return "\n".join(lines) + "\n"


def _vbs_object_dump(wql: str, namespace: str, computer_name: str) -> str:
    # 48 = wbemFlagReturnImmediately + wbemFlagForwardOnly
    return _vbs_script(
        namespace,
        computer_name,
        [
            f'Set colItems = objWMIService.ExecQuery("{_vbs_escape(wql)}", "WQL", 48)',
            "For Each objItem In colItems",
            "    For Each objProperty In objItem.Properties_",
            '        If Left(objProperty.Name, 1) <> "_" Then',
            "            If IsArray(objProperty.Value) Then",
            '                strValue = Join(objProperty.Value, ", ")',
            "            Else",
            '                strValue = objProperty.Value & ""',
            "            End If",
            '            WScript.Echo objProperty.Name & " : " & strValue',
            "        End If",
            "    Next",
            '    WScript.Echo ""',
            "Next",
        ],
    )
