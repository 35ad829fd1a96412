"""Tests for RefreshPolicy and PrusaLinkConfig."""

import pydantic
import pytest

from prusa.link.client import PrusaLinkConfig, RefreshMode, RefreshPolicy, consts


def test_default_policy():
    policy = RefreshPolicy()

    assert policy.mode == RefreshMode.TIME_TO_LIVE
    assert policy.ttl == consts.DEFAULT_REFRESH_TTL


@pytest.mark.parametrize("age,stale", [(0.0, False), (4.999, False), (5.0, False), (5.001, True), (60.0, True)])
def test_ttl_staleness(age, stale):
    assert RefreshPolicy.time_to_live(5).is_stale(age) is stale


@pytest.mark.parametrize("age", [0.0, 5.0, 1e9])
def test_disabled_never_stale(age):
    assert RefreshPolicy.disabled().is_stale(age) is False


@pytest.mark.parametrize("age", [0.0, 1e-9, 5.0])
def test_always_stale(age):
    assert RefreshPolicy.always().is_stale(age) is True


def test_zero_ttl_refreshes_on_any_elapsed_time():
    policy = RefreshPolicy.time_to_live(0)

    assert policy.is_stale(0.0) is False
    assert policy.is_stale(0.001) is True


def test_policy_validation():
    with pytest.raises(pydantic.ValidationError):
        RefreshPolicy.time_to_live(-1)
    with pytest.raises(pydantic.ValidationError, match="requires a ttl"):
        RefreshPolicy(mode=RefreshMode.TIME_TO_LIVE, ttl=None)
    with pytest.raises(pydantic.ValidationError, match="does not take a ttl"):
        RefreshPolicy(mode=RefreshMode.DISABLED, ttl=3)


@pytest.mark.parametrize(
    "data,mode,ttl",
    [
        ({}, RefreshMode.TIME_TO_LIVE, consts.DEFAULT_REFRESH_TTL),
        ({"mode": "ttl"}, RefreshMode.TIME_TO_LIVE, consts.DEFAULT_REFRESH_TTL),
        ({"mode": "ttl", "ttl": 2}, RefreshMode.TIME_TO_LIVE, 2.0),
        ({"mode": "disabled"}, RefreshMode.DISABLED, None),
        ({"mode": "always"}, RefreshMode.ALWAYS, None),
    ],
)
def test_policy_from_mode_alone(data, mode, ttl):
    policy = RefreshPolicy.model_validate(data)

    assert policy.mode == mode
    assert policy.ttl == ttl


def test_policy_keyword_mode_only():
    assert RefreshPolicy(mode="disabled") == RefreshPolicy.disabled()
    assert RefreshPolicy(mode=RefreshMode.ALWAYS) == RefreshPolicy.always()


def test_config_policy_from_dict():
    config = PrusaLinkConfig(address="printer.local", api_key="k", refresh_policy={"mode": "disabled"})

    assert config.refresh_policy == RefreshPolicy.disabled()


def test_policy_is_frozen():
    policy = RefreshPolicy.time_to_live(5)

    with pytest.raises(pydantic.ValidationError):
        policy.ttl = 10  # type: ignore[misc]


def test_config_defaults():
    config = PrusaLinkConfig(address="printer.local", api_key="key")

    assert config.port == 80
    assert config.refresh_policy == RefreshPolicy.time_to_live(5)
    assert config.timeout == consts.DEFAULT_TIMEOUT
    assert config.strict_status is False
    assert config.base_url == "http://printer.local:80"
    assert config.url_for("/api/printer") == "http://printer.local:80/api/printer"
    assert config.url_for("api/version") == "http://printer.local:80/api/version"


def test_config_hides_api_key():
    config = PrusaLinkConfig(address="printer.local", api_key="super-secret")

    assert "super-secret" not in repr(config)
    assert config.api_key.get_secret_value() == "super-secret"


@pytest.mark.parametrize(
    "address,expected",
    [
        ("192.168.1.20", "192.168.1.20"),
        ("  printer.local  ", "printer.local"),
        ("http://printer.local/", "printer.local"),
        ("printer.local//", "printer.local"),
        ("HTTP://mk4.lan", "mk4.lan"),
    ],
)
def test_config_normalizes_address(address, expected):
    assert PrusaLinkConfig(address=address, api_key="k").address == expected


@pytest.mark.parametrize(
    "kwargs",
    [
        {"address": ""},
        {"address": "http://"},
        {"address": "https://mk4.lan/"},
        {"address": "ftp://mk4.lan"},
        {"port": 0},
        {"port": 70000},
        {"timeout": 0},
    ],
)
def test_config_rejects_invalid(kwargs):
    values = {"address": "printer.local", "api_key": "k", **kwargs}

    with pytest.raises(pydantic.ValidationError):
        PrusaLinkConfig(**values)


def test_config_is_frozen():
    config = PrusaLinkConfig(address="printer.local", api_key="k")

    with pytest.raises(pydantic.ValidationError):
        config.port = 8080  # type: ignore[misc]


def test_config_rejects_https_scheme():
    with pytest.raises(pydantic.ValidationError, match="unsupported scheme 'https'"):
        PrusaLinkConfig(address="https://mk4.lan/", api_key="k")
