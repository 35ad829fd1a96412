"""Server version command."""

import typing

import cyclopts

from prusa.link.client.cli import common


def version_command(
    raw: typing.Annotated[bool, cyclopts.Parameter(help="Print the response body unparsed")] = False,
):
    """Show the PrusaLink server and API version."""
    common.logger.debug("Command started", command="version", raw=raw)
    with common.get_client() as client:
        if raw:
            print(client.get_version())
            return
        info = client.get_version_info()

    rows = [[name.capitalize(), value] for name, value in info.model_dump().items() if value is not None]
    common.output_table("PrusaLink Version", ["Field", "Value"], rows, column_styles=["cyan", "magenta"])
