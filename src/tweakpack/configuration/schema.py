"""Lobby configuration schema.

The configuration is a closed record: every field below has a default and the
declaration order is the order in which settings are mapped to tweaks.
Serialized documents use camelCase keys (``gameMap``, ``incomeMult``); Python
code uses the snake_case attributes.
"""

from collections.abc import Iterator
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    """Base model with camelCase serialization."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


GameMap = Literal[
    "Full Metal Plate",
    "Raptor Crater",
    "Supreme Isthmus",
    "Ancient Bastion Remake",
    "Eye of Horus",
]

StartOption = Literal["No rush", "Zero grace", "Surrounded"]

Difficulty = Literal["Very easy", "Easy", "Normal", "Hard", "Very hard", "Epic"]

MAPS: tuple[str, ...] = get_args(GameMap)
START_OPTIONS: tuple[str, ...] = get_args(StartOption)
DIFFICULTIES: tuple[str, ...] = get_args(Difficulty)


class Configuration(CamelModel):
    """A complete raptors lobby configuration."""

    lobby_name: str = ""
    """Custom name tag for the lobby (optional)."""

    game_map: GameMap = "Full Metal Plate"
    start: StartOption = "No rush"
    difficulty: Difficulty = "Epic"

    income_mult: float = Field(default=1, ge=0.1, le=10, multiple_of=0.1)
    """Multiplier for resource income."""

    build_dist_mult: float = Field(default=1.5, ge=0.5, le=10, multiple_of=0.1)
    """Multiplier for build distance."""

    build_power_mult: float = Field(default=1, ge=0.1, le=10, multiple_of=0.1)
    """Multiplier for build power."""

    queen_count: int = Field(default=8, ge=1, le=100)
    """Number of raptor queens."""

    raptor_health_mult: float = Field(default=1, ge=0.5, le=5, multiple_of=0.25)
    """Health multiplier applied to every raptor unit."""

    evolving_commanders: bool = False
    t4_units: bool = False
    lrpc_rebalance: bool = False

    def setting_items(self) -> Iterator[tuple[str, object]]:
        """Yield (setting key, value) pairs in schema order."""
        for name in type(self).model_fields:
            yield to_camel(name), getattr(self, name)


SETTING_KEYS: tuple[str, ...] = tuple(to_camel(name) for name in Configuration.model_fields)
"""Setting keys (camelCase) in declared schema order."""

DEFAULT_CONFIGURATION = Configuration()


def stringify_setting_value(value: object) -> str:
    """Render a setting value as the key used for mapping lookups.

    Integral floats drop their fractional part so that ``1.0`` and ``1``
    select the same entry, and booleans render in lower case.

    Examples:
        >>> stringify_setting_value(1.0)
        '1'
        >>> stringify_setting_value(1.5)
        '1.5'
        >>> stringify_setting_value(True)
        'true'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
