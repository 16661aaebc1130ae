# yanker/commands/yank.py

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yanker.core.cargo import CargoYanker, YankReport
from yanker.core.console import ConsoleAware
from yanker.core.constants import get_package_version
from yanker.core.exceptions import YankerError, RegistryError
from yanker.core.file_reading import load_cargo_manifest
from yanker.core.global_config import get_cargo_command, get_http_timeout, is_global_fail_fast
from yanker.core.models import CrateVersion
from yanker.core.registry import Registry
from yanker.core.version_handling import (
    VersionRange,
    parse_version_range,
    select_yankable,
    validate_version,
)

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def _print_selection(crate_name: str, version_range: VersionRange, selected: List[str], console_awr: ConsoleAware):
    table = Table(title=f"📦 {crate_name} {version_range}", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Version", style="cyan")
    for index, version in enumerate(selected, start=1):
        table.add_row(str(index), version)
    console_awr.print(table)


async def _run_pipeline(crate_name: str,
                        version_range: VersionRange,
                        registry: Registry,
                        yanker: CargoYanker,
                        dry_run: bool,
                        fail_fast: bool,
                        console_awr: ConsoleAware) -> Optional[YankReport]:
    versions: List[CrateVersion] = await registry.fetch_versions(crate_name)

    invalid = [v.version for v in versions if not validate_version(v.version)]
    if invalid:
        console_awr.log(f"Skipping non-SemVer versions: {', '.join(invalid)}")

    selected = select_yankable(versions, version_range)
    if not selected:
        console_awr.print(f"[cyan]Nothing to yank for {crate_name} in {version_range}.[/cyan]")
        return None

    _print_selection(crate_name, version_range, selected, console_awr)

    if dry_run:
        console_awr.print(f"\n[yellow]Dry run:[/yellow] {len(selected)} version(s) would be yanked.")
        return None

    console_awr.print("")
    return await yanker.yank_all(selected, fail_fast=fail_fast)


def yank_command(version_range: VersionRange,
                 manifest_path: Optional[Path],
                 dry_run: bool,
                 fail_fast: bool,
                 console_awr: ConsoleAware,
                 verbose: bool):
    """Command wrapper for the yank pipeline."""
    manifest = load_cargo_manifest(manifest_path)
    crate_name = manifest.package.name
    console_awr.log(f"Crate: {crate_name} (local version {manifest.package.version or 'unknown'})")

    if version_range.is_empty:
        console_awr.warn(f"Range {version_range} is empty: the lower bound is not below the upper bound.")

    registry = Registry(timeout=get_http_timeout(), console=console_awr.console, verbose=verbose)
    yanker = CargoYanker(get_cargo_command(), console=console_awr.console, verbose=verbose)

    report = asyncio.run(
        _run_pipeline(crate_name, version_range, registry, yanker, dry_run, fail_fast, console_awr)
    )
    if report is None:
        return

    report.raise_for_failures()
    console_awr.print(f"\n✅ [bold green]Yanked {len(report.yanked)} version(s) of {crate_name}[/bold green]")


def _version_callback(value: bool):
    if value:
        console = Console(log_path=False)
        console.print(f"[bold green]yanker[/] version [cyan]{get_package_version()}[/]")
        raise typer.Exit()


def register(app):
    """Register the yank command with the Typer app."""

    @app.command(context_settings={"help_option_names": ["-h", "--help"]})
    def yank(
        ctx: typer.Context,
        version_range: Optional[str] = typer.Argument(
            None,
            metavar="RANGE",
            help='Versions to yank, e.g. "[0.1.0, 0.2.0]" (lower bound included, upper bound excluded).',
            show_default=False,
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            "-n",
            help="List the versions that would be yanked and exit."
        ),
        fail_fast: Optional[bool] = typer.Option(
            None,
            "--fail-fast/--keep-going",
            help="Stop at the first failing 'cargo yank' (default: keep going, or yank.fail_fast from ~/.yanker/config.yaml).",
            show_default=False,
        ),
        manifest_path: Optional[Path] = typer.Option(
            None,
            "--manifest-path",
            help="Path to Cargo.toml or to the directory holding it."
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        ),
        version: bool = typer.Option(
            False,
            "--version",
            "-v",
            help="Show the version of yanker and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ):
        """Yank every published version of the local crate within a version range."""
        if version_range is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            console_awr.print("")
            parsed_range = parse_version_range(version_range)
            if fail_fast is None:
                fail_fast = is_global_fail_fast()

            yank_command(parsed_range, manifest_path, dry_run, fail_fast, console_awr, verbose)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Yank cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except RegistryError as e:
            console_awr.print(f"\n[bold red]❌ Registry error:[/bold red] {escape(str(e))}. Reason: {e.reason} ")
            if verbose:
                console_awr.log(f"  Status Code: {e.status_code}")
                console_awr.log(f"  Error type: {e.error_type}")
                console_awr.log(f"  Request URL: {e.request_url}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except YankerError as e:
            console_awr.print(f"\n[bold red]❌ Yank failed:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)
