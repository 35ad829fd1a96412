"""Common models for the PrusaLink client."""

import typing

import pydantic
import structlog

logger = structlog.get_logger(__name__)

# Strict leaf types: strings are never coerced into bools or numbers, ints are accepted as floats.
Flag = pydantic.StrictBool
Text = pydantic.StrictStr
Number = typing.Annotated[float, pydantic.Strict()]
U64 = typing.Annotated[int, pydantic.Strict(), pydantic.Field(ge=0, le=2**64 - 1)]


def _known_keys(model: type[pydantic.BaseModel]) -> set[str]:
    keys: set[str] = set()
    for name, field in model.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
        if isinstance(field.validation_alias, str):
            keys.add(field.validation_alias)
        elif isinstance(field.validation_alias, pydantic.AliasChoices):
            keys.update(choice for choice in field.validation_alias.choices if isinstance(choice, str))
    return keys


class IgnoreExtraFieldsModel(pydantic.BaseModel):
    """Base model that drops unknown fields and logs their names at debug level.

    Instances are frozen once validated.
    """

    model_config = pydantic.ConfigDict(extra="ignore", frozen=True)

    @pydantic.model_validator(mode="before")
    @classmethod
    def log_unknown_fields(cls, data: typing.Any) -> typing.Any:
        """Report fields the printer sent that this model does not know about."""
        if isinstance(data, dict):
            unknown = sorted(str(key) for key in data if key not in _known_keys(cls))
            if unknown:
                logger.debug("Ignoring unknown fields", model=cls.__name__, fields=unknown)
        return data
