"""Static configuration mapping table.

Maps each setting value to the commands and Lua references it contributes.
The table is read from YAML once, expanded into plain lookup dictionaries and
frozen; callers only ever see read-only views through
``get_configuration_mapping()``.

YAML layout::

    base:
      command: ["!preset coop"]
      tweakdefs: ["~lua/main-defs.lua"]
      tweakunits: ["~lua/main-units.lua"]

    settings:
      gameMap:
        values:
          "Full Metal Plate":
            command: ["!map Full Metal Plate"]
      incomeMult:
        range: {min: 0.1, max: 10, step: 0.1}
        template:
          command: ["!bset multiplier_resourceincome $VALUE$"]
        values:
          "1": {}

``range`` + ``template`` entries are expanded into one value entry per step,
with ``$VALUE$`` replaced by the stringified value. Explicit ``values`` win
over expanded ones; an empty entry contributes nothing, exactly like a
missing one.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from tweakpack.configuration.schema import SETTING_KEYS, stringify_setting_value
from tweakpack.foundation.errors import ErrorCode, TweakpackError

logger = logging.getLogger(__name__)

MAX_COMMAND_LENGTH = 50_000
"""Maximum characters in a single lobby command (and in a transmitted section)."""

MAX_SLOTS_PER_TYPE = 10
"""Maximum slots per category: tweakdefs, tweakdefs1 ... tweakdefs9."""

TWEAK_CATEGORIES: tuple[str, ...] = ("tweakdefs", "tweakunits")

VALUE_PLACEHOLDER = "$VALUE$"

_MAX_RANGE_ENTRIES = 10_000


@dataclass(frozen=True, slots=True)
class TweakValue:
    """What one setting value contributes to the lobby.

    Attributes:
        command: Literal lobby commands
        tweakdefs: Lua references packed into tweakdefs slots
        tweakunits: Lua references packed into tweakunits slots
    """

    command: tuple[str, ...] = ()
    tweakdefs: tuple[str, ...] = ()
    tweakunits: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.command or self.tweakdefs or self.tweakunits)

    def references(self, category: str) -> tuple[str, ...]:
        """Get the references destined for a category."""
        return self.tweakdefs if category == "tweakdefs" else self.tweakunits

    def substitute(self, text: str) -> "TweakValue":
        """Return a copy with ``$VALUE$`` replaced by ``text`` everywhere."""
        return TweakValue(
            command=tuple(c.replace(VALUE_PLACEHOLDER, text) for c in self.command),
            tweakdefs=tuple(r.replace(VALUE_PLACEHOLDER, text) for r in self.tweakdefs),
            tweakunits=tuple(r.replace(VALUE_PLACEHOLDER, text) for r in self.tweakunits),
        )

    @classmethod
    def from_dict(cls, data: Any, *, where: str, source: str) -> "TweakValue":
        """Create from a YAML table.

        Raises:
            TweakpackError: If the table is not a mapping of string lists
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise _invalid(source, f"{where} must be a table")

        unknown = set(data) - {"command", "tweakdefs", "tweakunits"}
        if unknown:
            raise _invalid(source, f"{where} has unknown fields: {', '.join(sorted(unknown))}")

        lists: dict[str, tuple[str, ...]] = {}
        for name in ("command", "tweakdefs", "tweakunits"):
            items = data.get(name) or []
            if isinstance(items, str):
                items = [items]
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise _invalid(source, f"{where}.{name} must be a list of strings")
            lists[name] = tuple(items)
        return cls(**lists)


@dataclass(frozen=True, slots=True)
class SettingMapping:
    """Value table for a single setting."""

    values: Mapping[str, TweakValue] = field(default_factory=lambda: MappingProxyType({}))

    ranged: bool = False
    """Whether the table was expanded from a range (every valid value has an entry)."""

    def lookup(self, value: object) -> TweakValue | None:
        """Get the entry for a setting value, if any."""
        return self.values.get(stringify_setting_value(value))


@dataclass(frozen=True, slots=True)
class ConfigurationMapping:
    """Immutable mapping from settings to tweaks, plus the always-on baseline."""

    base: TweakValue
    """Config-independent commands and references, emitted first."""

    settings: Mapping[str, SettingMapping]
    """Setting key (camelCase) -> value table."""

    @property
    def base_commands(self) -> tuple[str, ...]:
        return self.base.command

    def get(self, key: str) -> SettingMapping | None:
        return self.settings.get(key)

    def iter_references(self) -> Iterator[tuple[str, str]]:
        """Yield every (category, reference) pair the table can produce."""
        for category in TWEAK_CATEGORIES:
            for ref in self.base.references(category):
                yield category, ref
        for setting in self.settings.values():
            for entry in setting.values.values():
                for category in TWEAK_CATEGORIES:
                    for ref in entry.references(category):
                        yield category, ref


def _invalid(source: str, detail: str) -> TweakpackError:
    return TweakpackError(
        code=ErrorCode.MAPPING_INVALID,
        context={"path": source, "detail": detail},
    )


def _expand_range(
    bounds: Any,
    template: TweakValue,
    *,
    where: str,
    source: str,
) -> dict[str, TweakValue]:
    """Expand a ``range`` block into concrete value entries.

    Steps are computed in Decimal so that 0.1-step ranges produce "0.3", not
    "0.30000000000000004".
    """
    if not isinstance(bounds, dict) or not {"min", "max", "step"} <= set(bounds):
        raise _invalid(source, f"{where}.range needs min, max and step")
    try:
        low = Decimal(str(bounds["min"]))
        high = Decimal(str(bounds["max"]))
        step = Decimal(str(bounds["step"]))
    except ArithmeticError as e:
        raise _invalid(source, f"{where}.range is not numeric: {e}") from e
    if step <= 0 or high < low:
        raise _invalid(source, f"{where}.range must have step > 0 and max >= min")

    count = int((high - low) / step) + 1
    if count > _MAX_RANGE_ENTRIES:
        raise _invalid(source, f"{where}.range expands to {count} entries")

    expanded: dict[str, TweakValue] = {}
    for i in range(count):
        current = low + step * i
        number: int | float = int(current) if current == current.to_integral_value() else float(current)
        text = stringify_setting_value(number)
        expanded[text] = template.substitute(text)
    return expanded


def build_configuration_mapping(
    data: Any,
    *,
    source: str = "<memory>",
) -> ConfigurationMapping:
    """Build a frozen mapping from parsed YAML data.

    Args:
        data: Parsed YAML document
        source: Where the data came from, for error messages

    Returns:
        ConfigurationMapping with read-only views

    Raises:
        TweakpackError: MAPPING_INVALID for malformed data,
            MAPPING_UNKNOWN_SETTING for keys absent from the schema
    """
    if not isinstance(data, dict):
        raise _invalid(source, "top level must be a table")

    base = TweakValue.from_dict(data.get("base"), where="base", source=source)

    raw_settings = data.get("settings") or {}
    if not isinstance(raw_settings, dict):
        raise _invalid(source, "settings must be a table")

    settings: dict[str, SettingMapping] = {}
    for key, raw in raw_settings.items():
        if key not in SETTING_KEYS:
            raise TweakpackError(
                code=ErrorCode.MAPPING_UNKNOWN_SETTING,
                context={"key": key, "path": source},
            )
        if not isinstance(raw, dict):
            raise _invalid(source, f"settings.{key} must be a table")

        values: dict[str, TweakValue] = {}
        if "range" in raw:
            template = TweakValue.from_dict(
                raw.get("template"), where=f"settings.{key}.template", source=source
            )
            values.update(
                _expand_range(raw["range"], template, where=f"settings.{key}", source=source)
            )

        raw_values = raw.get("values") or {}
        if not isinstance(raw_values, dict):
            raise _invalid(source, f"settings.{key}.values must be a table")
        for value_key, entry in raw_values.items():
            value_text = stringify_setting_value(value_key)
            values[value_text] = TweakValue.from_dict(
                entry, where=f"settings.{key}.values.{value_text}", source=source
            )

        settings[key] = SettingMapping(values=MappingProxyType(values), ranged="range" in raw)

    logger.debug("Built configuration mapping from %s: %d settings", source, len(settings))
    return ConfigurationMapping(base=base, settings=MappingProxyType(settings))


def default_mapping_path() -> Path:
    """Path of the mapping YAML shipped with the package."""
    return Path(str(files("tweakpack") / "data" / "configuration_mapping.yaml"))


def load_configuration_mapping(path: str | Path | None = None) -> ConfigurationMapping:
    """Load and build a mapping from a YAML file.

    Args:
        path: Mapping YAML (None = packaged mapping)

    Raises:
        TweakpackError: If the file is missing or malformed
    """
    mapping_path = Path(path) if path else default_mapping_path()
    if not mapping_path.is_file():
        raise TweakpackError(code=ErrorCode.FILE_NOT_FOUND, context={"path": str(mapping_path)})
    try:
        data = yaml.safe_load(mapping_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise TweakpackError(
            code=ErrorCode.MAPPING_INVALID,
            context={"path": str(mapping_path), "detail": str(e)},
            cause=e,
        ) from e
    return build_configuration_mapping(data, source=str(mapping_path))


# Process-wide mapping (lazy-loaded, thread-safe, never mutated)
_mapping: ConfigurationMapping | None = None
_mapping_lock = threading.Lock()


def get_configuration_mapping() -> ConfigurationMapping:
    """Get the packaged configuration mapping, loading it on first use."""
    global _mapping

    if _mapping is not None:
        return _mapping

    with _mapping_lock:
        if _mapping is None:
            _mapping = load_configuration_mapping()
        return _mapping


def reset_configuration_mapping() -> None:
    """Drop the cached mapping (useful for testing)."""
    global _mapping
    with _mapping_lock:
        _mapping = None
