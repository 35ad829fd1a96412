import json
import sys
from unittest.mock import patch

import pytest

from prusa.link.client.cli import common, config


@pytest.fixture(autouse=True)
def reset_output_format():
    """Reset the global output format before and after each test."""
    common._output_format = None
    yield
    common._output_format = None


def test_set_output_format_valid():
    common.set_output_format("json")
    assert common.get_output_format() == config.OutputFormat.JSON

    common.set_output_format("plain")
    assert common.get_output_format() == config.OutputFormat.PLAIN


def test_set_output_format_invalid():
    with pytest.raises(SystemExit) as excinfo:
        common.set_output_format("invalid")
    assert excinfo.value.code == 1


def test_get_output_format_tty_detection(monkeypatch):
    monkeypatch.delenv("PRUSALINK_OUTPUT_FORMAT", raising=False)

    monkeypatch.setattr(sys.stdout, "isatty", lambda: True)
    assert common.get_output_format() == config.OutputFormat.RICH

    monkeypatch.setattr(sys.stdout, "isatty", lambda: False)
    assert common.get_output_format() == config.OutputFormat.PLAIN


def test_get_output_format_from_config():
    with patch("prusa.link.client.cli.config.settings") as mock_settings:
        mock_settings.output_format = config.OutputFormat.JSON
        assert common.get_output_format() == config.OutputFormat.JSON


def test_output_message_rich():
    common.set_output_format("rich")
    with patch("prusa.link.client.cli.common.console") as mock_console:
        common.output_message("Hello [bold]World[/bold]")
        mock_console.print.assert_called_once_with("Hello [bold]World[/bold]")


def test_output_message_plain_and_json(capsys):
    common.set_output_format("plain")
    common.output_message("Hello [bold]World[/bold]")
    assert capsys.readouterr().out == "Hello World\n"

    common.set_output_format("json")
    common.output_message("Hello [bold]World[/bold]")
    assert "Hello World" in capsys.readouterr().err


def test_output_table_plain(capsys):
    common.set_output_format("plain")
    common.output_table("Temps", ["Heater", "Actual"], [["Nozzle", "[red]220.2[/red]"], ["Bed", "69.7"]])
    assert capsys.readouterr().out == "# Temps\nHeater\tActual\nNozzle\t220.2\nBed\t69.7\n"


def test_output_table_json(capsys):
    common.set_output_format("json")
    common.output_table("Temps", ["Heater", "Target (C)"], [["Nozzle", "220.0"]])
    assert json.loads(capsys.readouterr().out) == [{"heater": "Nozzle", "target_c": "220.0"}]
