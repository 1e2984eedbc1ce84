"""Tests for the PowerShell and VBScript command builders."""

from __future__ import annotations

import pytest

from wmi4py.commands import (
    build_list_classes_command,
    build_list_object_command,
    build_list_properties_command,
    build_query_object_command,
)
from wmi4py.models import EngineKind


class TestPowerShellCommands:
    def test_list_classes_default_namespace(self):
        command = build_list_classes_command("*")
        assert command.startswith("Get-WMIObject ")
        assert "-Namespace" not in command
        assert command.endswith("-List | Sort Name")

    def test_list_classes_with_namespace(self):
        command = build_list_classes_command("root/WMI")
        assert "-Namespace root/WMI" in command
        assert "-ComputerName" not in command

    def test_list_properties(self):
        command = build_list_properties_command("Win32_BIOS", "*", ".")
        assert command.startswith("Get-WMIObject Win32_BIOS ")
        assert '-excludeproperty "_*"' in command
        assert "Get-Member | select name | format-table -hidetableheader" in command

    def test_list_object(self):
        command = build_list_object_command("Win32_BaseBoard", "root/cimv2", "SERVER01")
        assert "-Namespace root/cimv2" in command
        assert "-ComputerName SERVER01" in command
        assert 'Select-Object * -excludeproperty "_*"' in command
        assert command.endswith("Format-List *")

    @pytest.mark.parametrize(
        "namespace, computer_name, has_namespace, has_computer",
        [
            ("*", "", False, False),
            ("*", ".", False, True),
            ("root/WMI", "", True, False),
            ("root/WMI", "HOST", True, True),
        ],
    )
    def test_optional_clauses(self, namespace, computer_name, has_namespace, has_computer):
        for command in (
            build_list_properties_command("Win32_Fan", namespace, computer_name),
            build_list_object_command("Win32_Fan", namespace, computer_name),
            build_query_object_command("Win32_Fan", None, None, namespace, computer_name),
        ):
            assert ("-Namespace" in command) is has_namespace
            assert ("-ComputerName" in command) is has_computer

    def test_query_with_properties_and_filter(self):
        command = build_query_object_command("Win32_Fan", ["Name", "Status"], ["Status='OK'"], "*", "")
        assert "Where-Object -FilterScript {Status='OK'}" in command
        assert 'Select-Object Name, Status -excludeproperty "_*"' in command
        assert "-Namespace" not in command
        assert "-ComputerName" not in command
        assert command.endswith("Format-List *")

    def test_query_filters_are_piped_in_order(self):
        filters = ["$_.Status -eq 'OK'", "$_.Name -like 'CPU*'"]
        command = build_query_object_command("Win32_Fan", None, filters, "*", ".")
        first = command.index("{$_.Status -eq 'OK'}")
        second = command.index("{$_.Name -like 'CPU*'}")
        assert first < second
        assert command.count("Where-Object -FilterScript") == 2

    @pytest.mark.parametrize("properties", [None, []])
    def test_query_without_properties_selects_all(self, properties):
        command = build_query_object_command("Win32_Fan", properties, [], "*", ".")
        assert 'Select-Object * -excludeproperty "_*"' in command
        assert "Where-Object" not in command


class TestVBScriptCommands:
    def test_list_classes_uses_default_namespace(self):
        script = build_list_classes_command("*", EngineKind.VBSCRIPT)
        assert "\\\\.\\root\\cimv2" in script
        assert "SubclassesOf()" in script
        assert "objClass.Path_.Class" in script

    def test_namespace_slashes_converted(self):
        script = build_list_classes_command("root/WMI", EngineKind.VBSCRIPT)
        assert "\\\\.\\root\\WMI" in script

    def test_computer_name_in_moniker(self):
        script = build_list_object_command("Win32_BIOS", "*", "SERVER01", EngineKind.VBSCRIPT)
        assert "\\\\SERVER01\\root\\cimv2" in script

    def test_empty_computer_name_is_local(self):
        script = build_list_object_command("Win32_BIOS", "*", "", EngineKind.VBSCRIPT)
        assert "\\\\.\\root\\cimv2" in script

    def test_list_properties(self):
        script = build_list_properties_command("Win32_BIOS", "*", ".", EngineKind.VBSCRIPT)
        assert 'objWMIService.Get("Win32_BIOS")' in script
        assert "objClass.Properties_" in script

    def test_list_object_dumps_name_value_pairs(self):
        script = build_list_object_command("Win32_BIOS", "*", ".", EngineKind.VBSCRIPT)
        assert "SELECT * FROM Win32_BIOS" in script
        assert 'WScript.Echo objProperty.Name & " : " & strValue' in script
        assert 'WScript.Echo ""' in script

    def test_query_joins_filters_with_and(self):
        script = build_query_object_command(
            "Win32_Fan",
            ["Name", "Status"],
            ["Status='OK'", "Name LIKE '%CPU%'"],
            "*",
            ".",
            EngineKind.VBSCRIPT,
        )
        assert "SELECT Name, Status FROM Win32_Fan WHERE (Status='OK') AND (Name LIKE '%CPU%')" in script

    def test_query_escapes_double_quotes(self):
        script = build_query_object_command(
            "Win32_Service", None, ['Name="Spooler"'], "*", ".", EngineKind.VBSCRIPT
        )
        assert 'WHERE (Name=""Spooler"")' in script
        assert "SELECT * FROM Win32_Service" in script
