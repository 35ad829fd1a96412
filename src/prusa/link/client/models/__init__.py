"""Pydantic models for PrusaLink API responses.

This module defines the data structures used by the client to parse
API responses into typed objects.
"""

from .common import IgnoreExtraFieldsModel
from .printer import (
    PrinterFlags,
    PrinterSnapshot,
    PrinterStatus,
    SdCard,
    Storage,
    StorageInfo,
    Telemetry,
    TemperatureReading,
    Temperatures,
    decode_snapshot,
)
from .version import VersionInfo

# ruff: noqa: RUF022
__all__ = [
    # Common
    "IgnoreExtraFieldsModel",
    # Printer
    "PrinterFlags",
    "PrinterSnapshot",
    "PrinterStatus",
    "SdCard",
    "Storage",
    "StorageInfo",
    "Telemetry",
    "TemperatureReading",
    "Temperatures",
    "decode_snapshot",
    # Version
    "VersionInfo",
]
