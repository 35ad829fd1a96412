import json
from unittest.mock import patch

import pytest
import structlog

from prusa.link.client import exceptions

SAMPLE_PRINTER = {
    "temperature": {
        "tool0": {"actual": 220.2, "target": 220.0},
        "bed": {"actual": 69.7, "target": 70.0},
    },
    "sd": {"ready": False},
    "state": {
        "text": "Printing",
        "flags": {
            "operational": False,
            "paused": False,
            "printing": True,
            "cancelling": False,
            "pausing": False,
            "sdReady": False,
            "error": False,
            "ready": False,
            "closedOrError": False,
            "finished": False,
            "prepared": False,
            "link_state": "PRINTING",
        },
    },
    "telemetry": {
        "bed_temp": 69.7,
        "nozzle_temp": 220.2,
        "material": " - ",
        "z_height": 16.8,
        "print_speed": 100,
        "axis_x": None,
        "axis_y": None,
        "axis_z": 16.8,
    },
    "storage": {
        "local": {"free_space": 56813572096, "total_space": 61273088000},
        "sd_card": None,
    },
}


class FakeClock:
    """Monotonic clock whose time only moves when a test says so."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeTransport:
    """Transport returning queued bodies (or raising queued exceptions) and recording calls."""

    def __init__(self, *responses: str | Exception):
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def queue(self, *responses: str | Exception) -> None:
        self.responses.extend(responses)

    def fetch(self, url: str, api_key: str) -> str:
        self.calls.append((url, api_key))
        if not self.responses:
            raise exceptions.PrusaLinkNetworkError(f"No response queued for {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sample_printer() -> dict:
    return json.loads(json.dumps(SAMPLE_PRINTER))


@pytest.fixture
def sample_body() -> str:
    return json.dumps(SAMPLE_PRINTER)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    saved = structlog.get_config()
    yield
    structlog.reset_defaults()
    structlog.configure(**saved)


@pytest.fixture(autouse=True)
def isolate_cli_config(tmp_path):
    """Keep CLI settings away from the user's real config directory."""
    from prusa.link.client.cli import config

    config.reset_settings()
    with patch("prusa.link.client.cli.config.get_config_file", return_value=tmp_path / "config.json"):
        yield
    config.reset_settings()
