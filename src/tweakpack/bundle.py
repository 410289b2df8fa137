"""Lua bundle loading.

A bundle maps forward-slash relative paths (``lua/main-defs.lua``) to Lua
source. It can come from a directory of ``.lua`` files or from a JSON
document shaped like ``{"files": {"lua/main-defs.lua": "..."}}``.
"""

import json
import logging
from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType

from tweakpack.foundation.errors import ErrorCode, bundle_error

logger = logging.getLogger(__name__)

LUA_SUFFIX = ".lua"


def default_bundle_path() -> Path:
    """Path of the sample bundle shipped with the package."""
    return Path(str(files("tweakpack") / "data" / "bundle"))


def load_bundle_directory(root: Path) -> Mapping[str, str]:
    """Collect every ``.lua`` file under ``root``, keyed by relative posix path."""
    bundle = {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob(f"*{LUA_SUFFIX}"))
        if path.is_file()
    }
    logger.debug("Loaded %d Lua files from %s", len(bundle), root)
    return MappingProxyType(bundle)


def load_bundle_json(path: Path) -> Mapping[str, str]:
    """Read a bundle JSON document.

    Raises:
        TweakpackError: BUNDLE_INVALID if the document is not a path -> text map
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise bundle_error(ErrorCode.BUNDLE_INVALID, str(path), detail=str(e), cause=e) from e

    files_map = data.get("files") if isinstance(data, dict) else None
    if not isinstance(files_map, dict):
        raise bundle_error(ErrorCode.BUNDLE_INVALID, str(path), detail="missing 'files' object")
    for key, value in files_map.items():
        if not isinstance(value, str):
            raise bundle_error(
                ErrorCode.BUNDLE_INVALID, str(path), detail=f"entry '{key}' is not a string"
            )
    logger.debug("Loaded %d Lua files from %s", len(files_map), path)
    return MappingProxyType(dict(files_map))


def load_bundle(path: str | Path | None = None) -> Mapping[str, str]:
    """Load a bundle from a directory or JSON file.

    Args:
        path: Bundle location (None = packaged sample bundle)

    Returns:
        Read-only path -> Lua source mapping

    Raises:
        TweakpackError: BUNDLE_NOT_FOUND or BUNDLE_INVALID
    """
    bundle_path = Path(path) if path else default_bundle_path()
    if bundle_path.is_dir():
        return load_bundle_directory(bundle_path)
    if bundle_path.is_file():
        return load_bundle_json(bundle_path)
    raise bundle_error(ErrorCode.BUNDLE_NOT_FOUND, str(bundle_path))
