"""Main entry point for the CLI."""

import sys
import typing

import cyclopts

from prusa.link.client import __version__, exceptions
from prusa.link.client.cli import common
from prusa.link.client.cli.commands import printer, settings, version

# Define the App
app = cyclopts.App(
    name="prusalink",
    help="PrusaLink printer status CLI",
    version=__version__,
    version_flags=["--version"],
    help_flags=["--help"],
)

# Mount Sub-Apps
app.command(printer.printer_app)
app.command(settings.config_app)

# Register Aliases and Commands
app.command(printer.status_alias, name="status")
app.command(version.version_command, name="version")


@app.meta.default
def entry_point(
    *tokens: typing.Annotated[str, cyclopts.Parameter(show=False, allow_leading_hyphen=True)],
    verbose: typing.Annotated[
        bool, cyclopts.Parameter(name=["--verbose", "-v"], help="Enable verbose logging")
    ] = False,
    debug: typing.Annotated[bool, cyclopts.Parameter(name=["--debug"], help="Enable debug logging")] = False,
    output_format: typing.Annotated[
        str | None, cyclopts.Parameter(name=["--format"], help="Output format: rich, plain or json")
    ] = None,
):
    """Main entry point handling global flags."""
    # Configure logging
    common.configure_logging(verbose, debug)
    common.set_output_format(output_format)

    # Let cyclopts handle the full command parsing (subcommands, help, etc)
    try:
        app(tokens)
    except cyclopts.exceptions.CycloptsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def main(args: list[str] | None = None):
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    try:
        app.meta(args)
    except cyclopts.exceptions.CycloptsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except exceptions.PrusaLinkApiError as e:
        print(f"API Error: {e}", file=sys.stderr)
        if e.response_body:
            print(f"Details: {e.response_body}", file=sys.stderr)
        sys.exit(1)
    except exceptions.PrusaLinkNetworkError as e:
        print(f"Network Error: {e}", file=sys.stderr)
        sys.exit(1)
    except exceptions.PrusaLinkDecodeError as e:
        print(f"Response Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected Error: {e}", file=sys.stderr)
        common.logger.exception("An unexpected error occurred")
        sys.exit(1)


if __name__ == "__main__":
    main()
