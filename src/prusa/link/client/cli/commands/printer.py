"""Printer status commands."""

import typing

import cyclopts

from prusa.link.client import models
from prusa.link.client.cli import common, config

printer_app = cyclopts.App(name="printer", help="Printer state")


def _format_bytes(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def _format_axis(value: float | None) -> str:
    return f"{value:.2f}" if value is not None else "N/A"


def _storage_row(name: str, info: models.StorageInfo | None) -> list[str]:
    if info is None:
        return [name, "[dim]not mounted[/dim]", "", ""]
    used = info.total_space - info.free_space
    percent = (used / info.total_space * 100) if info.total_space else 0.0
    return [name, _format_bytes(info.free_space), _format_bytes(info.total_space), f"{percent:.1f}%"]


@printer_app.command(name="status")
def printer_status(
    force: typing.Annotated[bool, cyclopts.Parameter(name=["--force", "-f"], help="Skip the cache")] = False,
):
    """Show state, temperatures, telemetry and storage of the printer."""
    common.logger.debug("Command started", command="printer status", force=force)
    with common.get_client() as client:
        snapshot = client.get_snapshot(force=force)

    if common.get_output_format() == config.OutputFormat.JSON:
        print(snapshot.model_dump_json())
        return

    flags = snapshot.flags
    active_flags = [name for name, value in flags.model_dump().items() if value is True]
    telemetry = snapshot.telemetry

    rows = [
        ["State", snapshot.state_text],
        ["Link State", snapshot.link_state],
        ["Flags", ", ".join(active_flags) or "none"],
        ["Nozzle", f"{snapshot.actual_nozzle_temp:.1f} / {snapshot.target_nozzle_temp:.1f} °C"],
        ["Bed", f"{snapshot.actual_bed_temp:.1f} / {snapshot.target_bed_temp:.1f} °C"],
        ["Material", telemetry.material],
        ["Z Height", f"{telemetry.z_height:.2f} mm"],
        ["Print Speed", f"{telemetry.print_speed:.0f}%"],
        [
            "Axis (X/Y/Z)",
            " / ".join(_format_axis(v) for v in (telemetry.axis_x, telemetry.axis_y, telemetry.axis_z)),
        ],
        ["SD Ready", "yes" if snapshot.sd_ready else "no"],
    ]
    if flags.error or flags.closed_or_error:
        rows[0][1] = f"[red]{snapshot.state_text}[/red]"
    elif flags.printing:
        rows[0][1] = f"[green]{snapshot.state_text}[/green]"

    common.output_table(f"Printer: {client.address}", ["Field", "Value"], rows, column_styles=["cyan", "magenta"])


@printer_app.command(name="temps")
def printer_temps():
    """Show actual and target temperatures."""
    common.logger.debug("Command started", command="printer temps")
    with common.get_client() as client:
        snapshot = client.get_snapshot()

    rows = [
        ["Nozzle", f"{snapshot.actual_nozzle_temp:.1f}", f"{snapshot.target_nozzle_temp:.1f}"],
        ["Bed", f"{snapshot.actual_bed_temp:.1f}", f"{snapshot.target_bed_temp:.1f}"],
    ]
    common.output_table("Temperatures (°C)", ["Heater", "Actual", "Target"], rows, column_styles=["cyan"])


@printer_app.command(name="storage")
def printer_storage():
    """Show free and total space of the printer storages."""
    common.logger.debug("Command started", command="printer storage")
    with common.get_client() as client:
        storage = client.get_storage()

    rows = [_storage_row("Local", storage.local), _storage_row("SD Card", storage.sd_card)]
    common.output_table("Storage", ["Storage", "Free", "Total", "Used"], rows, column_styles=["cyan"])


def status_alias(
    force: typing.Annotated[bool, cyclopts.Parameter(name=["--force", "-f"], help="Skip the cache")] = False,
):
    """Show printer status (alias for 'printer status')."""
    printer_status(force=force)
