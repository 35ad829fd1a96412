"""Commands to inspect and persist CLI settings."""

import typing

import cyclopts

from prusa.link.client.cli import common, config

config_app = cyclopts.App(name="config", help="Show or change CLI settings")


@config_app.command(name="show")
def config_show():
    """Show the resolved settings. The API key is masked."""
    settings = config.settings
    api_key = "[green]set[/green]" if settings.api_key is not None else "[red]not set[/red]"
    rows = [
        ["Address", settings.address or "[red]not set[/red]"],
        ["API Key", api_key],
        ["Port", str(settings.port)],
        ["Refresh TTL (s)", f"{settings.refresh_ttl:g}"],
        ["Timeout (s)", f"{settings.timeout:g}"],
        ["Strict Status", "yes" if settings.strict_status else "no"],
        ["Config File", str(config.get_config_file())],
    ]
    common.output_table("Settings", ["Setting", "Value"], rows, column_styles=["cyan", "magenta"])


@config_app.command(name="set")
def config_set(
    address: typing.Annotated[str | None, cyclopts.Parameter(help="Printer hostname or IP")] = None,
    port: typing.Annotated[int | None, cyclopts.Parameter(help="PrusaLink HTTP port")] = None,
    refresh_ttl: typing.Annotated[float | None, cyclopts.Parameter(help="Snapshot time-to-live in seconds")] = None,
    timeout: typing.Annotated[float | None, cyclopts.Parameter(help="Request timeout in seconds")] = None,
    output_format: typing.Annotated[
        config.OutputFormat | None, cyclopts.Parameter(name=["--output-format"], help="Default output format")
    ] = None,
):
    """Persist settings to config.json. The API key is only read from the environment."""
    updates = {
        "address": address,
        "port": port,
        "refresh_ttl": refresh_ttl,
        "timeout": timeout,
        "output_format": output_format,
    }
    if all(v is None for v in updates.values()):
        common.output_message("Nothing to change.", error=True)
        return

    path = config.save_json_config(updates)
    config.reset_settings()
    common.output_message(f"[green]Settings saved to {path}[/green]")
