"""
Build options that take part in the cache key.

A transpilation option is either a plain value or a zero-argument callable
producing it; both are normalised into a `BuildOption` and resolved once
before hashing.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import constants


@dataclass(frozen=True)
class StaticOption:
    value: Any = None

    def resolve(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ComputedOption:
    compute: Callable[[], Any]

    def resolve(self) -> Any:
        return self.compute()


BuildOption = Union[StaticOption, ComputedOption]


def as_build_option(value: Any) -> BuildOption:
    """Wrap a raw option value, treating callables as computed options."""
    if isinstance(value, (StaticOption, ComputedOption)):
        return value
    if callable(value):
        return ComputedOption(value)
    return StaticOption(value)


class AddonOptions(BaseModel):
    """
        Class Model describe the build options of an addon
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    babel: Any = Field(default_factory=StaticOption)
    ember_cli_babel: Optional[Dict[str, Any]] = Field(None, alias=constants.COMPANION_OPTION)

    @field_validator("babel", mode="before")
    @classmethod
    def wrap_babel(cls, value: Any) -> BuildOption:
        return as_build_option(value)

    def resolved_babel(self) -> Any:
        return self.babel.resolve()
