"""Printer snapshot models and the `/api/printer` decoder."""

import pydantic
import structlog

from prusa.link.client import exceptions

from .common import U64, Flag, IgnoreExtraFieldsModel, Number, Text

logger = structlog.get_logger(__name__)


class TemperatureReading(IgnoreExtraFieldsModel):
    """Actual and target temperature of one heater."""

    actual: Number
    target: Number


class Temperatures(IgnoreExtraFieldsModel):
    """Nozzle and bed heaters. The nozzle is reported as `tool0` on the wire."""

    nozzle: TemperatureReading = pydantic.Field(validation_alias=pydantic.AliasChoices("tool0", "nozzle"))
    bed: TemperatureReading


class SdCard(IgnoreExtraFieldsModel):
    """SD card presence."""

    ready: Flag


class PrinterFlags(IgnoreExtraFieldsModel):
    """Operational flags reported by the printer."""

    operational: Flag
    paused: Flag
    printing: Flag
    cancelling: Flag
    pausing: Flag
    sd_ready: Flag = pydantic.Field(validation_alias=pydantic.AliasChoices("sdReady", "sd_ready"))
    error: Flag
    ready: Flag
    closed_or_error: Flag = pydantic.Field(validation_alias=pydantic.AliasChoices("closedOrError", "closed_or_error"))
    finished: Flag
    prepared: Flag
    link_state: Text


class PrinterStatus(IgnoreExtraFieldsModel):
    """Human readable state text plus the flag set."""

    text: Text
    flags: PrinterFlags


class Telemetry(IgnoreExtraFieldsModel):
    """Live sensor readings.

    Firmware releases use dashed names (`temp-bed`, `z-height`, ...) for some
    of these fields, both spellings are accepted.
    """

    bed_temp: Number = pydantic.Field(validation_alias=pydantic.AliasChoices("bed_temp", "temp-bed"))
    nozzle_temp: Number = pydantic.Field(validation_alias=pydantic.AliasChoices("nozzle_temp", "temp-nozzle"))
    material: Text
    z_height: Number = pydantic.Field(validation_alias=pydantic.AliasChoices("z_height", "z-height"))
    print_speed: Number = pydantic.Field(validation_alias=pydantic.AliasChoices("print_speed", "print-speed"))
    axis_x: Number | None = None
    axis_y: Number | None = None
    axis_z: Number | None = None


class StorageInfo(IgnoreExtraFieldsModel):
    """Free and total space of one storage, in bytes."""

    free_space: U64
    total_space: U64


class Storage(IgnoreExtraFieldsModel):
    """Storages attached to the printer. A slot is `None` when nothing is mounted."""

    local: StorageInfo | None = None
    sd_card: StorageInfo | None = None


class PrinterSnapshot(IgnoreExtraFieldsModel):
    """One consistent copy of the state reported by `/api/printer`.

    Usage Example:
    ```python
        >>> snapshot = decode_snapshot(body)
        >>> snapshot.target_nozzle_temp
        220.0
        >>> snapshot.storage.sd_card is None
        True
    ```
    """

    temperature: Temperatures
    sd: SdCard
    state: PrinterStatus
    telemetry: Telemetry
    storage: Storage

    @property
    def target_nozzle_temp(self) -> float:
        return self.temperature.nozzle.target

    @property
    def target_bed_temp(self) -> float:
        return self.temperature.bed.target

    @property
    def actual_nozzle_temp(self) -> float:
        return self.temperature.nozzle.actual

    @property
    def actual_bed_temp(self) -> float:
        return self.temperature.bed.actual

    @property
    def sd_ready(self) -> bool:
        return self.sd.ready

    @property
    def state_text(self) -> str:
        return self.state.text

    @property
    def flags(self) -> PrinterFlags:
        return self.state.flags

    @property
    def link_state(self) -> str:
        return self.state.flags.link_state


def _summarize(error: pydantic.ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def decode_snapshot(raw_text: str) -> PrinterSnapshot:
    """Decode an `/api/printer` response body.

    Args:
        raw_text: The response body as returned by the printer.

    Returns:
        A fully validated `PrinterSnapshot`.

    Raises:
        exceptions.PrusaLinkEmptyResponseError: The body is empty or whitespace only.
        exceptions.PrusaLinkMalformedResponseError: The body is not JSON, or a required field is
            missing or has the wrong type.
    """
    if not raw_text.strip():
        raise exceptions.PrusaLinkEmptyResponseError()

    try:
        return PrinterSnapshot.model_validate_json(raw_text)
    except pydantic.ValidationError as e:
        detail = _summarize(e)
        logger.debug("Snapshot validation failed", errors=e.error_count(), detail=detail)
        raise exceptions.PrusaLinkMalformedResponseError(detail) from e
