"""Client configuration for the PrusaLink SDK.

How to use the most important parts:
- `RefreshPolicy`: Decides when `PrusaLinkClient` goes back to the printer instead of answering
  from its cached snapshot. Build one with `RefreshPolicy.disabled()`, `RefreshPolicy.always()`
  or `RefreshPolicy.time_to_live(seconds)`.
- `PrusaLinkConfig`: The immutable bundle of address, port, API key and refresh policy a client
  is built from. Use `model_copy(update=...)` to derive a changed copy.
"""

import typing
from enum import StrEnum

import pydantic

from prusa.link.client import consts


class RefreshMode(StrEnum):
    """How a cached snapshot ages."""

    DISABLED = "disabled"
    TIME_TO_LIVE = "ttl"
    ALWAYS = "always"


class RefreshPolicy(pydantic.BaseModel):
    """Staleness policy for the cached printer snapshot.

    A snapshot is never considered stale under `DISABLED`, always stale under
    `ALWAYS`, and stale under `TIME_TO_LIVE` once its age is strictly greater
    than `ttl` seconds.

    Usage Example:
    ```python
        >>> policy = RefreshPolicy.time_to_live(5)
        >>> policy.is_stale(5.0)
        False
        >>> policy.is_stale(5.001)
        True
    ```
    """

    model_config = pydantic.ConfigDict(frozen=True)

    mode: RefreshMode = RefreshMode.TIME_TO_LIVE
    ttl: pydantic.NonNegativeFloat | None = None

    @pydantic.model_validator(mode="before")
    @classmethod
    def default_ttl(cls, data: typing.Any) -> typing.Any:
        """Fill in the default TTL when a time-to-live policy is given without one."""
        if isinstance(data, dict) and "ttl" not in data:
            if data.get("mode", RefreshMode.TIME_TO_LIVE) == RefreshMode.TIME_TO_LIVE:
                return {**data, "ttl": consts.DEFAULT_REFRESH_TTL}
        return data

    @pydantic.model_validator(mode="after")
    def check_ttl(self) -> typing.Self:
        """A TTL is required by, and only meaningful for, the time-to-live mode."""
        if self.mode == RefreshMode.TIME_TO_LIVE and self.ttl is None:
            raise ValueError("time-to-live policy requires a ttl")
        if self.mode != RefreshMode.TIME_TO_LIVE and self.ttl is not None:
            raise ValueError(f"{self.mode} policy does not take a ttl")
        return self

    @classmethod
    def disabled(cls) -> "RefreshPolicy":
        """Never refresh automatically, only fetch when nothing is cached yet."""
        return cls(mode=RefreshMode.DISABLED, ttl=None)

    @classmethod
    def always(cls) -> "RefreshPolicy":
        """Fetch on every read."""
        return cls(mode=RefreshMode.ALWAYS, ttl=None)

    @classmethod
    def time_to_live(cls, seconds: float) -> "RefreshPolicy":
        """Refresh once the cached snapshot is older than `seconds`."""
        return cls(mode=RefreshMode.TIME_TO_LIVE, ttl=seconds)

    def is_stale(self, age: float) -> bool:
        """Whether a snapshot captured `age` seconds ago must be fetched again."""
        if self.mode == RefreshMode.ALWAYS:
            return True
        if self.mode == RefreshMode.DISABLED:
            return False
        return age > typing.cast(float, self.ttl)


class PrusaLinkConfig(pydantic.BaseModel):
    """Immutable connection settings for one printer."""

    model_config = pydantic.ConfigDict(frozen=True)

    address: str
    api_key: pydantic.SecretStr
    port: int = pydantic.Field(consts.DEFAULT_PORT, ge=1, le=65535)
    refresh_policy: RefreshPolicy = pydantic.Field(default_factory=RefreshPolicy)
    timeout: pydantic.PositiveFloat = consts.DEFAULT_TIMEOUT
    strict_status: bool = False

    @pydantic.field_validator("address")
    @classmethod
    def normalize_address(cls, v: str) -> str:
        """Strip whitespace, an `http://` scheme and trailing slashes.

        Any scheme other than `http` is rejected.
        """
        v = v.strip()
        scheme, sep, rest = v.partition("://")
        if sep:
            if scheme.lower() != "http":
                raise ValueError(f"unsupported scheme '{scheme}', only http is supported")
            v = rest
        v = v.rstrip("/")
        if not v:
            raise ValueError("address must not be empty")
        return v

    @property
    def base_url(self) -> str:
        return f"http://{self.address}:{self.port}"

    def url_for(self, endpoint: str) -> str:
        """Absolute URL of an API endpoint such as `/api/printer`."""
        return f"{self.base_url}/{endpoint.lstrip('/')}"
