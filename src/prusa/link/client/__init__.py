"""PrusaLink Client SDK.

This package provides a Python client for the local PrusaLink API served by Prusa printers.

How to use the most important parts:
- Explore the submodules to understand the available features. Look closely at
  `config`, `models`, `sdk` and `transport`.
- `PrusaLinkClient`: Reads the printer state. Start here for temperatures, flags and storage.
- `RefreshPolicy`: Pass one to `PrusaLinkClient` to control how long a fetched snapshot is reused.
"""

import logging

import structlog

# Set default library logging level to WARNING if the user hasn't configured structlog
if not structlog.is_configured():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))

from prusa.link.client.__version__ import __version__
from prusa.link.client.config import PrusaLinkConfig, RefreshMode, RefreshPolicy
from prusa.link.client.models import PrinterSnapshot, decode_snapshot
from prusa.link.client.sdk import PrusaLinkClient
from prusa.link.client.transport import PrinterTransport, RequestsTransport

__all__ = [
    "PrinterSnapshot",
    "PrinterTransport",
    "PrusaLinkClient",
    "PrusaLinkConfig",
    "RefreshMode",
    "RefreshPolicy",
    "RequestsTransport",
    "__version__",
    "decode_snapshot",
]
