"""Click CLI interface for wmi4py."""

from __future__ import annotations

import sys
from collections.abc import Callable

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape

from wmi4py import __version__
from wmi4py.client import WMI4Py
from wmi4py.config import Config
from wmi4py.exceptions import WMIError
from wmi4py.models import EngineKind
from wmi4py.reporters import console_reporter, json_reporter

console = Console()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def query_options(func: Callable) -> Callable:
    """Options shared by every query command."""
    options = [
        click.option("--namespace", default=None, help='WMI namespace, e.g. root/WMI (default: "*", engine default)'),
        click.option("--computer", "computer_name", default=None, help='Computer to query (default: ".")'),
        click.option(
            "--engine",
            default=None,
            type=click.Choice([kind.value for kind in EngineKind]),
            help="Engine used to run queries (default: powershell)",
        ),
        click.option("--timeout", default=None, type=float, help="Per-command timeout in seconds (default: 20)"),
        click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to config YAML"),
        click.option("--json", "as_json", is_flag=True, help="Print results as JSON"),
        click.option("--verbose", is_flag=True, help="Log engine activity to stderr"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_client(
    namespace: str | None,
    computer_name: str | None,
    engine: str | None,
    timeout: float | None,
    config_path: str | None,
    verbose: bool,
) -> WMI4Py:
    if config_path:
        config = Config.from_yaml(config_path)
    else:
        config = Config.from_defaults()

    config.apply_overrides(
        engine=engine,
        timeout=timeout,
        namespace=namespace,
        computer_name=computer_name,
        verbose=verbose,
    )
    _configure_logging(config.verbose)
    return WMI4Py.get(config)


def _fail(exc: WMIError) -> None:
    console.print(f"[bold red]ERROR: {escape(str(exc))}[/bold red]", soft_wrap=True)
    if exc.__cause__ is not None:
        console.print(f"  caused by: {escape(str(exc.__cause__))}", soft_wrap=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="wmi4py")
def main():
    """wmi4py - query WMI through PowerShell or VBScript."""


@main.command()
@query_options
def classes(namespace, computer_name, engine, timeout, config_path, as_json, verbose):
    """List the WMI classes of a namespace."""
    client = _build_client(namespace, computer_name, engine, timeout, config_path, verbose)
    try:
        names = client.list_classes()
    except WMIError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json_reporter.render(names))
    else:
        console_reporter.print_names(names, "WMI Classes", console=console)


@main.command()
@click.argument("wmi_class")
@query_options
def properties(wmi_class, namespace, computer_name, engine, timeout, config_path, as_json, verbose):
    """List the properties of WMI_CLASS."""
    client = _build_client(namespace, computer_name, engine, timeout, config_path, verbose)
    try:
        names = client.list_properties(wmi_class)
    except WMIError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json_reporter.render(names))
    else:
        console_reporter.print_names(names, f"{wmi_class} Properties", console=console)


@main.command(name="object")
@click.argument("wmi_class")
@click.option("--property", "props", multiple=True, help="Property to select (repeatable)")
@click.option("--filter", "filters", multiple=True, help="Filter expression, all must match (repeatable)")
@click.option("--list", "as_list", is_flag=True, help="Return every instance instead of one flat object")
@click.option("--raw", is_flag=True, help="Print the unparsed engine output")
@click.option("--output", default=None, help="Write the JSON result to this file")
@query_options
def get_object(
    wmi_class,
    props,
    filters,
    as_list,
    raw,
    output,
    namespace,
    computer_name,
    engine,
    timeout,
    config_path,
    as_json,
    verbose,
):
    """Query the instances of WMI_CLASS."""
    client = _build_client(namespace, computer_name, engine, timeout, config_path, verbose)
    if props:
        client = client.properties(props)
    if filters:
        client = client.filters(filters)

    try:
        if raw:
            click.echo(client.get_raw_wmi_object_output(wmi_class))
            return
        if as_list:
            result = client.get_wmi_object_list(wmi_class)
        else:
            result = client.get_wmi_object(wmi_class)
    except WMIError as exc:
        _fail(exc)
        return

    if output:
        path = json_reporter.generate(result, output)
        console.print(f"Result written to: {path}")
    elif as_json:
        click.echo(json_reporter.render(result))
    elif as_list:
        console_reporter.print_object_list(result, wmi_class, console=console)
    else:
        console_reporter.print_object(result, wmi_class, console=console)
