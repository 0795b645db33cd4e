from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from click.core import ParameterSource
from rich.console import Console

from azsize import __version__
from azsize.auth import looks_like_api_key, mask_api_key
from azsize.catalog import AZURE_REGIONS, VM_SERIES, split_regions
from azsize.client import AsyncAzSizeClient
from azsize.config import AzSizeConfig, CredentialStore, config_payload, load_config
from azsize.constants import AUTHENTICATED_MONTHLY_CHECKS, DASHBOARD_URL, DEFAULT_HISTORY_DAYS, SIGNUP_URL
from azsize.errors import AzSizeError
from azsize.logs import setup_logging
from azsize.render import (
    check_payload,
    comparison_payload,
    emit_comparison_csv,
    emit_find_csv,
    emit_vm_csv,
    find_payload,
    render_check_table,
    render_comparison_table,
    render_find_table,
    render_regions_table,
    render_series_table,
)
from azsize.utils.output import OutputFormat, emit

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Check Azure VM availability across regions")
config_app = typer.Typer(no_args_is_help=True, help="Config commands")

app.add_typer(config_app, name="config")

_REDACTED = "<redacted>"
_RATE_LIMIT_HINT = "Some regions hit the rate limit. Authenticate with an API key to get more checks. Run: azsize auth"


class CLIState:
    def __init__(
        self,
        *,
        config_file: Path | None,
        output: OutputFormat,
        output_explicit: bool,
        timeout: float | None,
    ) -> None:
        self.config_file = config_file
        self.output = output
        self.output_explicit = output_explicit
        self.timeout = timeout
        self._config: AzSizeConfig | None = None

    @property
    def config(self) -> AzSizeConfig:
        # Read once per invocation.
        if self._config is None:
            self._config = CredentialStore(self.config_file).load()
        return self._config


T = TypeVar("T")


def _run(awaitable: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(awaitable)


def _state(ctx: typer.Context) -> CLIState:
    obj = ctx.obj
    if not isinstance(obj, CLIState):
        raise typer.BadParameter("CLI context was not initialized")
    return obj


def _stderr() -> Console:
    return Console(stderr=True)


@contextmanager
def _status(message: str) -> Iterator[None]:
    with _stderr().status(message):
        yield


def _succeed(message: str) -> None:
    _stderr().print(f"[green]✓[/green] {message}")


def _fail(message: str, *, hint: str | None = None) -> None:
    console = _stderr()
    console.print(f"[red]✗ Error: {message}[/red]")
    if hint:
        console.print(hint)
    raise typer.Exit(code=1)


def _output_mode(state: CLIState, *, as_json: bool = False, as_csv: bool = False) -> OutputFormat:
    if as_json:
        return "json"
    if as_csv:
        return "csv"
    return state.output


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"azsize {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[
        Path | None,
        typer.Option("--config-file", "-c", help="Path to the azsize config file"),
    ] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = "table",
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.1, help="Per-region query timeout in seconds"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    _ = version
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    source = ctx.get_parameter_source("output")
    output_explicit = source is not None and source is not ParameterSource.DEFAULT
    ctx.obj = CLIState(config_file=config_file, output=output, output_explicit=output_explicit, timeout=timeout)


def _make_client(state: CLIState) -> AsyncAzSizeClient:
    return AsyncAzSizeClient(state.config, query_timeout_seconds=state.timeout)


@app.command("check")
def check(
    ctx: typer.Context,
    vm_size: Annotated[str, typer.Argument(help="VM size, e.g. Standard_D4s_v5")],
    region: Annotated[str | None, typer.Option("--region", "-r", help="Azure region (e.g., eastus, westus2)")] = None,
    as_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    as_csv: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
    history: Annotated[bool, typer.Option("--history/--no-history", help="Fetch 7-day availability history")] = True,
) -> None:
    """Check if a VM size is available in a specific region."""

    state = _state(ctx)
    target = region or state.config.default_region

    async def run() -> Any:
        async with _make_client(state) as client:
            return await client.check(vm_size, target, history=history, days=DEFAULT_HISTORY_DAYS)

    with _status(f"Checking {vm_size} in {target}..."):
        result = _run(run())

    if result.vm is None:
        _fail(
            f"VM size {vm_size} not found in series {result.series_filter}.",
            hint="Try 'azsize list series' to see available series.",
        )
    _succeed(f"Found {vm_size} in {target}")

    output_mode = _output_mode(state, as_json=as_json, as_csv=as_csv)
    if output_mode == "csv":
        emit_vm_csv([result.vm], target)
        return
    if output_mode in {"json", "yaml"}:
        emit(check_payload(result), output=output_mode)
        return

    render_check_table(result)


@app.command("compare")
def compare(
    ctx: typer.Context,
    vm_size: Annotated[str, typer.Argument(help="VM size, e.g. Standard_D4s_v5")],
    regions: Annotated[
        list[str] | None,
        typer.Option("--regions", "-r", help="Regions, repeatable or comma-separated"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    as_csv: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
) -> None:
    """Compare VM availability across multiple regions."""

    state = _state(ctx)
    targets = split_regions(regions) or list(state.config.compare_regions)

    async def run() -> Any:
        async with _make_client(state) as client:
            return await client.compare(vm_size, targets)

    with _status(f"Comparing {vm_size} across {len(targets)} regions..."):
        report = _run(run())
    _succeed(f"Compared {vm_size} across {len(targets)} regions")
    if report.rate_limited:
        _stderr().print(f"[yellow]{_RATE_LIMIT_HINT}[/yellow]")

    output_mode = _output_mode(state, as_json=as_json, as_csv=as_csv)
    if output_mode == "csv":
        emit_comparison_csv(report)
        return
    if output_mode in {"json", "yaml"}:
        emit(comparison_payload(report), output=output_mode)
        return

    render_comparison_table(report)


@app.command("find")
def find(
    ctx: typer.Context,
    vm_size: Annotated[str, typer.Argument(help="VM size, e.g. Standard_D4s_v5")],
    limit: Annotated[int | None, typer.Option("--limit", "-l", min=1, help="Show only the N cheapest regions")] = None,
    regions: Annotated[
        list[str] | None,
        typer.Option("--regions", "-r", help="Search only these regions (default: all known regions)"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    as_csv: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
) -> None:
    """Find all regions where a VM size is available, cheapest first."""

    state = _state(ctx)
    targets = split_regions(regions) or None
    total = len(targets) if targets else len(AZURE_REGIONS)

    async def run() -> Any:
        async with _make_client(state) as client:
            return await client.find(vm_size, regions=targets, limit=limit)

    with _status(f"Searching {total} regions for {vm_size}..."):
        report = _run(run())
    _succeed(f"Searched {report.total_regions} regions, found {report.available_count} available")
    if report.rate_limited:
        _stderr().print(f"[yellow]{_RATE_LIMIT_HINT}[/yellow]")

    output_mode = _output_mode(state, as_json=as_json, as_csv=as_csv)
    if output_mode == "csv":
        emit_find_csv(report)
        return
    if output_mode in {"json", "yaml"}:
        emit(find_payload(report), output=output_mode)
        return

    render_find_table(report)


@app.command("list")
def list_catalog(
    ctx: typer.Context,
    kind: Annotated[str, typer.Argument(metavar="TYPE", help="What to list: regions or series")],
) -> None:
    """List available regions or VM series."""

    state = _state(ctx)
    if kind == "regions":
        if state.output_explicit and state.output != "table":
            emit(list(AZURE_REGIONS), output=state.output)
            return
        render_regions_table(AZURE_REGIONS)
        return
    if kind == "series":
        if state.output_explicit and state.output != "table":
            emit(list(VM_SERIES), output=state.output)
            return
        render_series_table(VM_SERIES)
        return

    _fail(f"Invalid list type: {kind}. Use 'regions' or 'series'", hint="Usage: azsize list <regions|series>")


@app.command("auth")
def auth(
    ctx: typer.Context,
    action: Annotated[
        str | None,
        typer.Argument(help="API key to save, or 'logout' to remove it; omit to show status"),
    ] = None,
) -> None:
    """Manage the API key used to raise the rate limit."""

    state = _state(ctx)
    store = CredentialStore(state.config_file)
    console = Console()

    if action is None:
        key = store.get_api_key()
        if key:
            console.print("[green]✓ Authenticated[/green]")
            console.print(f"API Key: {mask_api_key(key)}")
            console.print(f"\nYou have access to {AUTHENTICATED_MONTHLY_CHECKS} checks per month.")
            console.print(f"Visit {DASHBOARD_URL} to view your usage.")
        else:
            console.print("[yellow]Not authenticated[/yellow]")
            console.print("\nYou can make 1 free check without authentication.")
            console.print(f"\nTo get {AUTHENTICATED_MONTHLY_CHECKS} checks per month:")
            console.print(f"1. Sign up at [cyan]{SIGNUP_URL}[/cyan]")
            console.print(f"2. Generate an API key at [cyan]{DASHBOARD_URL}[/cyan]")
            console.print("3. Run: [cyan]azsize auth <your-api-key>[/cyan]")
        return

    if action in {"logout", "clear"}:
        if not store.clear_api_key():
            console.print("[yellow]No API key configured[/yellow]")
            return
        console.print("[green]✓ API key removed[/green]")
        return

    if looks_like_api_key(action):
        store.set_api_key(action)
        logger.debug("saved API key to %s", store.path)
        console.print("[green]✓ API key saved successfully![/green]")
        console.print(f"\nYou now have access to {AUTHENTICATED_MONTHLY_CHECKS} checks per month.")
        console.print(f"View your usage at [cyan]{DASHBOARD_URL}[/cyan]")
        return

    console.print("[red]Invalid action or API key[/red]")
    console.print("\nUsage:")
    console.print("  azsize auth                  [dim]# Show auth status[/dim]")
    console.print("  azsize auth <api-key>        [dim]# Set API key[/dim]")
    console.print("  azsize auth logout           [dim]# Remove API key[/dim]")
    raise typer.Exit(code=1)


@config_app.command("info")
def config_info(ctx: typer.Context) -> None:
    """Show the resolved configuration with the API key redacted."""

    state = _state(ctx)
    cfg = load_config(config_path=state.config_file)
    payload: dict[str, Any] = config_payload(cfg.data)
    if "api_key" in payload:
        payload["api_key"] = _REDACTED
    payload["_source"] = cfg.source
    payload["_path"] = str(cfg.path) if cfg.path else None
    emit(payload, output=state.output if state.output_explicit else "json")


def run() -> None:
    try:
        app()
    except AzSizeError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    run()
