"""Models for the `/api/version` endpoint."""

from .common import IgnoreExtraFieldsModel


class VersionInfo(IgnoreExtraFieldsModel):
    """Server and API versions reported by PrusaLink.

    Every field is optional since older firmware omits most of them.
    """

    api: str | None = None
    server: str | None = None
    text: str | None = None
    hostname: str | None = None
    firmware: str | None = None
