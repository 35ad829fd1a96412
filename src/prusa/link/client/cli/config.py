"""Configuration handling for the CLI."""

import json
import pathlib
import typing
from enum import StrEnum

import platformdirs
import pydantic
import pydantic_settings
import structlog

from prusa.link.client import consts as sdk_consts
from prusa.link.client.cli import consts

logger = structlog.get_logger(sdk_consts.APP_NAME)


class OutputFormat(StrEnum):
    """Output formats supported by the CLI."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


def get_config_file() -> pathlib.Path:
    """Location of config.json in the user's config directory."""
    config_dir = pathlib.Path(platformdirs.user_config_dir(sdk_consts.APP_NAME, sdk_consts.APP_AUTHOR))
    return config_dir / consts.CONFIG_FILENAME


def load_json_config() -> dict[str, typing.Any]:
    """Load configuration from config.json."""
    config_file = get_config_file()
    logger.info("Attempting to load config.json", config_file=config_file)
    if config_file.exists():
        try:
            with config_file.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            # Fallback if JSON is malformed
            logger.exception("Failed to read config.json", config_file=config_file)
            return {}
    logger.info("No config.json found.")
    return {}


class Settings(pydantic_settings.BaseSettings):
    """Application-wide settings loaded from environment variables, .env or config.json."""

    address: str | None = None
    api_key: pydantic.SecretStr | None = None
    port: int = pydantic.Field(sdk_consts.DEFAULT_PORT, ge=1, le=65535)
    refresh_ttl: pydantic.NonNegativeFloat = sdk_consts.DEFAULT_REFRESH_TTL
    timeout: pydantic.PositiveFloat = sdk_consts.DEFAULT_TIMEOUT
    strict_status: bool = False
    output_format: OutputFormat | None = None

    model_config = pydantic_settings.SettingsConfigDict(env_prefix=consts.ENV_PREFIX, env_file=".env", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: pydantic_settings.PydanticBaseSettingsSource,
        env_settings: pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[pydantic_settings.PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include config.json."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            pydantic_settings.InitSettingsSource(settings_cls, load_json_config()),
            file_secret_settings,
        )


def save_json_config(updates: dict[str, typing.Any]) -> pathlib.Path:
    """Merge `updates` into config.json and return its path.

    Only keys listed in `consts.PERSISTED_KEYS` are written.
    """
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    save_data = load_json_config()
    for key, value in updates.items():
        if key in consts.PERSISTED_KEYS and value is not None:
            save_data[key] = str(value) if isinstance(value, StrEnum) else value

    with config_file.open("w", encoding="utf-8") as f:
        json.dump(save_data, f, indent=4)
    return config_file


def reset_settings() -> None:
    """Forget the loaded settings so the next access reads them again."""
    global _settings
    _settings = None


if typing.TYPE_CHECKING:
    settings: Settings

_settings: Settings | None = None


def __getattr__(name: str) -> typing.Any:
    """Implement lazy loading for settings to allow logging initialization first."""
    if name == "settings":
        global _settings
        if _settings is None:
            _settings = Settings()
        return _settings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
