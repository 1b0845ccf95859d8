"""
Command-line interface for Asset Probe.

Running `asset-probe` without a command collects the host's asset record
and reports it once.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from asset_probe import __version__
from asset_probe.collectors import COLLECTORS
from asset_probe.config import Config, ConfigError
from asset_probe.core import AssetProbe, ReportError, SystemInfo

console = Console()


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging with rich handler."""
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="asset-probe")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-V",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """
    Asset Probe - host inventory reporter.

    Collects CPU, memory, storage, OS and vendor asset information and
    reports it to the asset inventory endpoint.
    """
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = Config.load(config)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    log_level = "DEBUG" if verbose else ctx.obj["config"].log_level
    setup_logging(log_level, ctx.obj["config"].log_file)
    ctx.obj["verbose"] = verbose

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


def _collect_with_progress(probe: AssetProbe) -> SystemInfo:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Collecting host facts...", total=None)
        info = probe.collect()
        progress.update(task, completed=True)
    return info


def _display_record(info: SystemInfo) -> None:
    """Display the collected record as a table."""
    table = Table(title="Asset Record", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for key, value in info.to_dict().items():
        if value in ("", 0):
            table.add_row(key, "[dim]unavailable[/]")
        else:
            table.add_row(key, escape(str(value)))

    console.print(table)


@main.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """
    Collect the asset record and report it.

    Exits with status 1 if the record could not be sent.
    """
    config: Config = ctx.obj["config"]
    probe = AssetProbe(config)

    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Asset Probe v{__version__}[/]\nCollecting host information...",
            border_style="blue",
        )
    )
    console.print()

    info = _collect_with_progress(probe)
    _display_record(info)

    try:
        result = probe.report(info)
    except ReportError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        sys.exit(1)

    if not result.delivered:
        console.print(f"[red]✗ Report failed: {escape(str(result.error))}[/]")
        sys.exit(1)

    if result.success:
        console.print(
            f"[green]✓ Reported to {config.report_url}[/] "
            f"({result.status}, {result.duration_ms:.0f}ms)"
        )
    else:
        console.print(f"[yellow]Server answered {result.status}[/]")


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the record to file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.pass_context
def collect(ctx: click.Context, output: Path | None, format: str) -> None:
    """
    Collect the asset record without reporting it.
    """
    config: Config = ctx.obj["config"]
    probe = AssetProbe(config)

    info = _collect_with_progress(probe)

    try:
        document = info.to_json(indent=2)
    except ReportError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        sys.exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document)
        console.print(f"[dim]Record saved to: {output}[/]")
    elif format == "json":
        console.print_json(document)
    else:
        _display_record(info)


@main.command("version", short_help="Display version information")
def version() -> None:
    """Display version information for Asset Probe."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Asset Probe[/]\nVersion: [cyan]{__version__}[/]",
            border_style="blue",
            title="Version Information",
        )
    )
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="dim", width=20)
    table.add_column("Version", style="cyan")

    table.add_row("Asset Probe", __version__)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)
    console.print()


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current configuration and endpoint status."""
    config: Config = ctx.obj["config"]

    console.print()
    console.print(
        Panel.fit(
            "[bold]Asset Probe Status[/]",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Report URL", config.report_url)
    table.add_row("Report Timeout", _format_timeout(config.report_timeout))
    table.add_row("Command Timeout", _format_timeout(config.command_timeout))
    table.add_row("Storage Path", config.storage_path)
    table.add_row("Log Level", config.log_level)

    console.print(table)
    console.print()

    collectors_table = Table(title="Collectors", show_header=True)
    collectors_table.add_column("Name", style="cyan")
    collectors_table.add_column("Description")

    for name, collector_cls in COLLECTORS.items():
        collectors_table.add_row(name, collector_cls.description)

    console.print(collectors_table)
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Testing connection...", total=None)
        from asset_probe.uploader import Reporter

        connected = Reporter(config).test_connection()
        progress.update(task, completed=True)

    if connected:
        console.print("[green]✓ Server is reachable[/]")
    else:
        console.print("[red]✗ Server is not reachable[/]")


def _format_timeout(value: float | None) -> str:
    return f"{value:g}s" if value is not None else "[dim]None (wait forever)[/]"


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.
    """
    sample_config = """# Asset Probe Configuration

# Report settings
report:
  # Endpoint the asset record is POSTed to
  url: http://localhost:8000/api/v1/asset/useragent

  # Request timeout in seconds (null = wait forever)
  timeout: null

# Collection settings
collection:
  # Timeout for inventory tool commands in seconds (null = wait forever)
  command_timeout: null

  # Volume whose size is reported as total storage
  storage_path: /

# Logging
logging:
  # Log level: DEBUG, INFO, WARNING, ERROR
  level: INFO

  # Log file path (null = console only)
  file: null
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sample_config)
    console.print(f"[green]✓ Configuration file created: {output_path}[/]")


if __name__ == "__main__":
    main()
