"""
Kindle Fastboot CLI

Command-line front end: scans the command tokens into a queue of device
operations and hands the finished queue to the execution engine.
"""

import sys
import json
import logging
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.logging import RichHandler

from kindle_fastboot.core import (
    DeviceFilterContext,
    Diagnostic,
    FastbootError,
    QueueConsumer,
    QueuedOperation,
    ScanResult,
    UsageError,
    build_queue,
    hand_off,
)
from kindle_fastboot.core.scanner import COMMANDS
from kindle_fastboot.devices import find_devices

# Setup Rich consoles
console = Console()
err_console = Console(stderr=True)

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
)
logger = logging.getLogger("kindle_fastboot")
logger.setLevel(logging.INFO)

app = typer.Typer(
    help="Kindle Fastboot - queue bootloader operations from the command line",
    add_completion=False,
)


def print_header(text: str) -> None:
    """Print fancy header."""
    console.print(Panel(text, expand=False, style="bold blue"))


def print_success(text: str) -> None:
    """Print success message."""
    console.print(f"✓ {text}", style="green")


def print_error(text: str) -> None:
    """Print error message."""
    err_console.print(text, style="red", markup=False, highlight=False)


def print_usage() -> None:
    """Print the short command list to stderr."""
    err_console.print("usage: kindle-fastboot [ <option> ] <command>", markup=False, highlight=False)
    err_console.print()
    err_console.print("commands:", markup=False, highlight=False)
    for spec in COMMANDS.values():
        err_console.print(f"  {spec.usage}", markup=False, highlight=False)
    err_console.print("  devices", markup=False, highlight=False)
    err_console.print()
    err_console.print("options:", markup=False, highlight=False)
    err_console.print("  -s <serial number>", markup=False, highlight=False)
    err_console.print("  -i <vendor id>", markup=False, highlight=False)


class PlanPrinter:
    """Default queue consumer: renders the queued plan instead of executing it."""

    def __init__(self, output_json: bool = False):
        self.output_json = output_json

    def consume(self, operations, context: DeviceFilterContext) -> None:
        result = ScanResult(operations=operations, context=context)
        if self.output_json:
            typer.echo(json.dumps(result.to_dict(), indent=2))
            return

        print_header("Queued Operations")
        if context.serial or context.vendor_id is not None:
            filters = []
            if context.serial:
                filters.append(f"serial {context.serial}")
            if context.vendor_id is not None:
                filters.append(f"vendor 0x{context.vendor_id:04X}")
            console.print(f"Device filter: {', '.join(filters)}")

        if not operations:
            console.print("[yellow]Nothing queued[/yellow]")
            return

        table = Table(title="Plan")
        table.add_column("#", style="dim")
        table.add_column("Kind", style="cyan")
        table.add_column("Target", style="magenta")
        table.add_column("Detail", style="green")

        for index, operation in enumerate(operations, 1):
            table.add_row(
                str(index),
                operation.kind.value,
                _target_of(operation),
                operation.describe(),
            )

        console.print(table)
        print_success(f"{len(operations)} operation(s) ready")


def _target_of(operation: QueuedOperation) -> str:
    for attr in ("partition", "command", "name"):
        value = getattr(operation, attr, None)
        if value:
            return value
    return "-"


def list_devices(context: DeviceFilterContext) -> None:
    """Print matching devices, one per line."""
    for device in find_devices(context):
        typer.echo(device.to_line())


def run(tokens: List[str], consumer: QueueConsumer) -> int:
    """
    Scan tokens and hand the queue to consumer.

    This is the single place that decides the exit status.

    Returns:
        0 on success, 1 on any scan error.
    """
    try:
        result = build_queue(tokens)
    except FastbootError as e:
        diagnostic = Diagnostic.from_error(e)
        verbose = logger.isEnabledFor(logging.DEBUG)
        print_error(diagnostic.to_cli_string(verbose=verbose))
        if isinstance(e, UsageError):
            print_usage()
        return 1

    logger.debug(result.to_summary())

    if result.list_devices:
        list_devices(result.context)
        return 0

    hand_off(result, consumer)
    return 0


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
def fastboot(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Print the queued plan as JSON"),
) -> None:
    """
    Queue bootloader commands.

    Options -s <serial> and -i <vendor id> select the device; they may be
    mixed with commands. Run with 'devices' to list attached devices.
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    code = run(list(ctx.args), PlanPrinter(output_json=output_json))
    if code:
        raise typer.Exit(code=code)


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
