"""Rich/CSV renderers for the azsize CLI commands."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from azsize.aggregate import available_count, price_range
from azsize.models import CheckResult, ComparisonReport, FindReport, RegionInfo, SeriesInfo, VmRecord
from azsize.utils.output import emit_csv

NOT_AVAILABLE = "N/A"


def format_number(value: float | int | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_price(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"${format_number(value)}"


def format_percentage(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}%"


def _available_cell(available: bool) -> str:
    return "[green]✓ Yes[/green]" if available else "[red]✗ No[/red]"


# check ------------------------------------------------------------------------


def render_check_table(result: CheckResult) -> None:
    console = Console()
    vm = result.vm
    if vm is None:
        return

    table = Table(title=f"Region: {escape(result.region)}", show_header=True, header_style="bold cyan")
    table.add_column("VM Size")
    table.add_column("vCPUs", justify="right")
    table.add_column("Memory (GB)", justify="right")
    table.add_column("Price/mo", justify="right")
    table.add_column("Available")
    table.add_column("7-day %", justify="right")
    table.add_row(
        escape(vm.name),
        format_number(vm.vcpus),
        format_number(vm.memory_gb),
        format_price(vm.price_per_month),
        _available_cell(vm.available),
        format_percentage(result.historical),
    )
    console.print(table)

    if not vm.available and vm.restriction:
        console.print("[yellow]Restrictions:[/yellow]")
        console.print(f"  [dim]{escape(vm.name)}[/dim]: {escape(vm.restriction)}")

    if vm.available:
        console.print(f"\n✓ {escape(vm.name)} is [green]AVAILABLE[/green] in {escape(result.region)}")
    else:
        console.print(f"\n✗ {escape(vm.name)} is [red]NOT AVAILABLE[/red] in {escape(result.region)}")
        if vm.restriction:
            console.print(f"  Reason: {escape(vm.restriction)}")


def check_payload(result: CheckResult) -> dict[str, object]:
    return {"region": result.region, "vm": result.vm, "historical": result.historical}


def emit_vm_csv(vms: Sequence[VmRecord], region: str) -> None:
    emit_csv(
        ["VM Size", "vCPUs", "Memory (GB)", "Price/mo", "Available", "Restriction", "Region"],
        [
            [
                vm.name,
                format_number(vm.vcpus),
                format_number(vm.memory_gb),
                format_number(vm.price_per_month),
                str(vm.available).lower(),
                vm.restriction or "None",
                region,
            ]
            for vm in vms
        ],
    )


# compare ----------------------------------------------------------------------


def render_comparison_table(report: ComparisonReport) -> None:
    console = Console()
    console.print(f"\n[bold]Comparing {escape(report.vm_size)} across {len(report.rows)} regions[/bold]\n")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Region")
    table.add_column("Available")
    table.add_column("Price/mo", justify="right")
    table.add_column("Restriction")
    for row in report.rows:
        region = escape(row.region)
        if row.error is not None:
            table.add_row(region, "[red]Error[/red]", f"[dim]{NOT_AVAILABLE}[/dim]", f"[dim]{escape(row.error)}[/dim]")
        elif not row.found:
            table.add_row(region, "[dim]Not found[/dim]", f"[dim]{NOT_AVAILABLE}[/dim]", f"[dim]{NOT_AVAILABLE}[/dim]")
        else:
            table.add_row(
                region,
                _available_cell(row.available),
                format_price(row.price),
                escape(row.restriction or "None"),
            )
    console.print(table)
    console.print(f"\n{escape(report.vm_size)} is available in {available_count(report.rows)}/{len(report.rows)} regions")


def comparison_payload(report: ComparisonReport) -> dict[str, object]:
    # Keyed by region; a duplicated region keeps its last result.
    payload: dict[str, object] = {}
    for result in report.results:
        if not result.ok:
            payload[result.region] = {"error": result.error}
            continue
        vm = result.find(report.vm_size)
        payload[result.region] = vm if vm is not None else {"error": "VM not found"}
    return payload


def emit_comparison_csv(report: ComparisonReport) -> None:
    rows: list[list[str]] = []
    for row in report.rows:
        if row.found:
            rows.append(
                [
                    row.region,
                    row.vm_size,
                    str(row.available).lower(),
                    format_number(row.price),
                    row.restriction or "None",
                ]
            )
        else:
            rows.append([row.region, row.vm_size, "false", NOT_AVAILABLE, row.error or "Not found"])
    emit_csv(["Region", "VM Size", "Available", "Price/mo", "Restriction"], rows)


# find -------------------------------------------------------------------------


def render_find_table(report: FindReport) -> None:
    console = Console()
    if not report.regions:
        console.print(f"\n[yellow]{escape(report.vm_size)} is not available in any region right now.[/yellow]\n")
        return

    table = Table(
        title=f"{escape(report.vm_size)} - Available Regions",
        caption="Sorted by price (cheapest first)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Region")
    table.add_column("Display Name")
    table.add_column("Price/mo", justify="right")
    table.add_column("vCPUs", justify="right")
    table.add_column("Memory", justify="right")
    for entry in report.regions:
        table.add_row(
            escape(entry.region),
            escape(entry.label or ""),
            f"[green]{format_price(entry.price)}[/green]",
            format_number(entry.vcpus),
            f"{format_number(entry.memory_gb)} GB" if entry.memory_gb is not None else NOT_AVAILABLE,
        )
    console.print(table)

    console.print(f"\n[green]✓[/green] Available in {report.available_count}/{report.total_regions} regions")
    bounds = price_range(report.available)
    if bounds is not None:
        cheapest, most_expensive = bounds
        console.print(f"[dim]  Cheapest: {escape(cheapest.region)} ({format_price(cheapest.price)}/mo)[/dim]")
        console.print(f"[dim]  Most expensive: {escape(most_expensive.region)} ({format_price(most_expensive.price)}/mo)[/dim]")
    if report.truncated:
        console.print(
            f"[dim]\n  Showing {report.limit} of {report.available_count} regions. Use --limit to see more.[/dim]"
        )


def find_payload(report: FindReport) -> dict[str, object]:
    return {
        "vmSize": report.vm_size,
        "totalRegions": report.total_regions,
        "availableRegions": len(report.regions),
        "regions": report.regions,
    }


def emit_find_csv(report: FindReport) -> None:
    emit_csv(
        ["Region", "Display Name", "Price/mo", "vCPUs", "Memory (GB)", "Restriction"],
        [
            [
                entry.region,
                entry.label or "",
                format_price(entry.price),
                format_number(entry.vcpus),
                format_number(entry.memory_gb),
                entry.restriction,
            ]
            for entry in report.regions
        ],
    )


# list -------------------------------------------------------------------------


def render_regions_table(regions: Sequence[RegionInfo]) -> None:
    console = Console()
    table = Table(title=f"Azure Regions ({len(regions)} total)", show_header=True, header_style="bold cyan")
    table.add_column("Region Code")
    table.add_column("Display Name")
    for region in regions:
        table.add_row(region.value, region.label)
    console.print(table)
    console.print("[dim]\nExample: azsize check Standard_D4s_v5 --region eastus\n[/dim]")


def render_series_table(series: Sequence[SeriesInfo]) -> None:
    console = Console()
    table = Table(title="Azure VM Series", show_header=True, header_style="bold cyan")
    table.add_column("Series Code")
    table.add_column("Description")
    for item in series:
        table.add_row(item.value, item.label)
    console.print(table)
    console.print("[dim]\nExample: azsize check Standard_D4s_v5 --region eastus\n[/dim]")
