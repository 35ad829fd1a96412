"""PrusaLink REST API Client.

This module provides a high-level interface to a printer's local PrusaLink API,
handling the API key header, snapshot decoding and a staleness-gated cache of
the last printer state.

How to use the most important parts:
- `PrusaLinkClient`: The core class. Instantiate it with the printer address and API key.
- `PrusaLinkClient.get_snapshot()`: Returns the current `PrinterSnapshot`, answering from the
  cache while the configured `RefreshPolicy` considers it fresh. Every typed getter
  (`get_nozzle_temp()`, `get_printing()`, `get_local_storage()`, ...) is a projection over it.
"""

import threading
import time
import typing

import pydantic
import structlog

from prusa.link.client import consts, exceptions, models
from prusa.link.client.config import PrusaLinkConfig, RefreshPolicy
from prusa.link.client.transport import PrinterTransport, RequestsTransport

__all__ = ["CachedSnapshot", "PrusaLinkClient"]

logger = structlog.get_logger(__name__)


class CachedSnapshot(typing.NamedTuple):
    """A snapshot together with the monotonic time it was fetched at."""

    snapshot: models.PrinterSnapshot
    fetched_at: float


class PrusaLinkClient:
    """Client for a single printer's PrusaLink API.

    The client keeps the last successfully decoded snapshot. Reads are answered
    from it until the refresh policy marks it stale; a failed refresh raises and
    leaves the cached snapshot untouched.

    Usage Example:
    ```python
        >>> from prusa.link.client import PrusaLinkClient, RefreshPolicy
        >>> client = PrusaLinkClient("192.168.1.20", "my-api-key", refresh_policy=RefreshPolicy.time_to_live(2))
        >>> client.get_nozzle_temp()
        220.2
    ```
    """

    def __init__(
        self,
        address: str,
        api_key: str,
        port: int = consts.DEFAULT_PORT,
        refresh_policy: RefreshPolicy | None = None,
        timeout: float = consts.DEFAULT_TIMEOUT,
        strict_status: bool = False,
        transport: PrinterTransport | None = None,
        clock: typing.Callable[[], float] = time.monotonic,
    ) -> None:
        """Initializes the client.

        Args:
            address: Hostname or IP address of the printer.
            api_key: PrusaLink API key, sent as the `X-Api-Key` header.
            port: HTTP port of the PrusaLink server.
            refresh_policy: When to go back to the printer. Defaults to a short time-to-live.
            timeout: Timeout for each request in seconds.
            strict_status: Raise on non-2xx responses instead of trying to decode the body.
            transport: Optional override of the HTTP transport (useful for tests).
            clock: Monotonic clock used to age the cached snapshot.
        """
        self._config = PrusaLinkConfig(
            address=address,
            api_key=pydantic.SecretStr(api_key),
            port=port,
            refresh_policy=refresh_policy or RefreshPolicy(),
            timeout=timeout,
            strict_status=strict_status,
        )
        self._transport: PrinterTransport = transport or RequestsTransport(
            timeout=timeout, strict_status=strict_status
        )
        self._clock = clock
        self._cache: CachedSnapshot | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: PrusaLinkConfig,
        transport: PrinterTransport | None = None,
        clock: typing.Callable[[], float] = time.monotonic,
    ) -> "PrusaLinkClient":
        """Build a client from an existing `PrusaLinkConfig`."""
        return cls(
            address=config.address,
            api_key=config.api_key.get_secret_value(),
            port=config.port,
            refresh_policy=config.refresh_policy,
            timeout=config.timeout,
            strict_status=config.strict_status,
            transport=transport,
            clock=clock,
        )

    # -- Lifecycle ----------------------------------------------------------

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._transport.close()

    def __enter__(self) -> typing.Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Configuration ------------------------------------------------------

    @property
    def config(self) -> PrusaLinkConfig:
        """The current connection settings."""
        return self._config

    @property
    def address(self) -> str:
        return self._config.address

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def api_key(self) -> str:
        return self._config.api_key.get_secret_value()

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def refresh_policy(self) -> RefreshPolicy:
        return self._config.refresh_policy

    def _update_config(self, **changes: typing.Any) -> None:
        self._config = PrusaLinkConfig.model_validate({**self._config.model_dump(), **changes})

    def change_address(self, address: str) -> None:
        """Point the client at another address.

        The cached snapshot is kept; call `clear_cache()` if it belongs to another printer.
        """
        self._update_config(address=address)

    def change_api_key(self, api_key: str) -> None:
        """Use another API key for subsequent requests. The cached snapshot is kept."""
        self._update_config(api_key=api_key)

    # -- Raw requests -------------------------------------------------------

    def _fetch(self, endpoint: str) -> str:
        return self._transport.fetch(self._config.url_for(endpoint), self.api_key)

    def get_version(self) -> str:
        """Fetch the raw `/api/version` body. Never cached.

        Returns:
            The response body as sent by the printer.
        """
        return self._fetch(consts.VERSION_ENDPOINT)

    def get_version_info(self) -> models.VersionInfo:
        """Fetch and parse `/api/version`. Never cached.

        Raises:
            exceptions.PrusaLinkEmptyResponseError: The printer returned an empty body.
            exceptions.PrusaLinkMalformedResponseError: The body is not a JSON object.
        """
        body = self._fetch(consts.VERSION_ENDPOINT)
        if not body.strip():
            raise exceptions.PrusaLinkEmptyResponseError()
        try:
            return models.VersionInfo.model_validate_json(body)
        except pydantic.ValidationError as e:
            raise exceptions.PrusaLinkMalformedResponseError(str(e)) from e

    # -- Snapshot cache -----------------------------------------------------

    @property
    def last_refresh(self) -> float | None:
        """Monotonic time of the last successful fetch, or None if nothing is cached."""
        cache = self._cache
        return cache.fetched_at if cache else None

    def clear_cache(self) -> None:
        """Drop the cached snapshot so the next read goes to the printer."""
        with self._lock:
            self._cache = None

    def _needs_refresh(self, force: bool) -> bool:
        if force:
            return True
        if self._cache is None:
            return True
        age = self._clock() - self._cache.fetched_at
        stale = self._config.refresh_policy.is_stale(age)
        logger.debug("Snapshot age", age=age, stale=stale, policy=self._config.refresh_policy.mode)
        return stale

    def get_snapshot(self, force: bool = False) -> models.PrinterSnapshot:
        """Return the printer state, fetching it if the cache is empty or stale.

        Args:
            force: Skip the staleness check and always fetch.

        Returns:
            The cached `PrinterSnapshot`, or a freshly fetched one.

        Raises:
            exceptions.PrusaLinkNetworkError: The printer could not be reached.
            exceptions.PrusaLinkDecodeError: The printer answered with an unusable body.
        """
        with self._lock:
            if not self._needs_refresh(force):
                return typing.cast(CachedSnapshot, self._cache).snapshot

            body = self._fetch(consts.PRINTER_ENDPOINT)
            snapshot = models.decode_snapshot(body)
            self._cache = CachedSnapshot(snapshot=snapshot, fetched_at=self._clock())
            logger.debug("Snapshot refreshed", state=snapshot.state_text, link_state=snapshot.link_state)
            return snapshot

    def refresh(self) -> models.PrinterSnapshot:
        """Fetch a new snapshot regardless of the refresh policy."""
        return self.get_snapshot(force=True)

    # -- Temperatures -------------------------------------------------------

    def get_target_nozzle_temp(self) -> float:
        return self.get_snapshot().target_nozzle_temp

    def get_target_bed_temp(self) -> float:
        return self.get_snapshot().target_bed_temp

    def get_actual_nozzle_temp(self) -> float:
        return self.get_snapshot().actual_nozzle_temp

    def get_actual_bed_temp(self) -> float:
        return self.get_snapshot().actual_bed_temp

    # -- State --------------------------------------------------------------

    def get_sd_ready(self) -> bool:
        return self.get_snapshot().sd_ready

    def get_state_text(self) -> str:
        return self.get_snapshot().state_text

    def get_flags(self) -> models.PrinterFlags:
        return self.get_snapshot().flags

    def get_operational(self) -> bool:
        return self.get_snapshot().flags.operational

    def get_paused(self) -> bool:
        return self.get_snapshot().flags.paused

    def get_printing(self) -> bool:
        return self.get_snapshot().flags.printing

    def get_cancelling(self) -> bool:
        return self.get_snapshot().flags.cancelling

    def get_pausing(self) -> bool:
        return self.get_snapshot().flags.pausing

    def get_error(self) -> bool:
        return self.get_snapshot().flags.error

    def get_ready(self) -> bool:
        return self.get_snapshot().flags.ready

    def get_closed_or_error(self) -> bool:
        return self.get_snapshot().flags.closed_or_error

    def get_finished(self) -> bool:
        return self.get_snapshot().flags.finished

    def get_prepared(self) -> bool:
        return self.get_snapshot().flags.prepared

    def get_link_state(self) -> str:
        return self.get_snapshot().link_state

    # -- Telemetry ----------------------------------------------------------

    def get_telemetry(self) -> models.Telemetry:
        return self.get_snapshot().telemetry

    def get_bed_temp(self) -> float:
        """Bed temperature as reported by telemetry."""
        return self.get_snapshot().telemetry.bed_temp

    def get_nozzle_temp(self) -> float:
        """Nozzle temperature as reported by telemetry."""
        return self.get_snapshot().telemetry.nozzle_temp

    def get_material(self) -> str:
        return self.get_snapshot().telemetry.material

    def get_z_height(self) -> float:
        return self.get_snapshot().telemetry.z_height

    def get_print_speed(self) -> float:
        return self.get_snapshot().telemetry.print_speed

    def get_axis_x(self) -> float | None:
        return self.get_snapshot().telemetry.axis_x

    def get_axis_y(self) -> float | None:
        return self.get_snapshot().telemetry.axis_y

    def get_axis_z(self) -> float | None:
        return self.get_snapshot().telemetry.axis_z

    # -- Storage ------------------------------------------------------------

    def get_storage(self) -> models.Storage:
        return self.get_snapshot().storage

    def get_local_storage(self) -> models.StorageInfo | None:
        """Local (USB/flash) storage, or None when not mounted."""
        return self.get_snapshot().storage.local

    def get_sd_storage(self) -> models.StorageInfo | None:
        """SD card storage, or None when no card is inserted."""
        return self.get_snapshot().storage.sd_card
