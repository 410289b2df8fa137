"""Tweakpack Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints
- Context for debugging

Only fatal conditions are raised as errors. Recoverable problems found while
resolving references (bad tokens, missing files, unsupported expressions) go
through the diagnostic sink instead.
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Lobby configuration errors
        2xxx - Configuration mapping errors
        3xxx - Bundle errors
        4xxx - Packing errors
        5xxx - Encoding errors
        6xxx - Runtime errors
        7xxx - IO errors
    """

    # 1xxx - Lobby configuration errors
    CONFIG_INVALID = 1001
    CONFIG_PARSE_ERROR = 1002
    SETTINGS_INVALID = 1003

    # 2xxx - Mapping errors
    MAPPING_INVALID = 2001
    MAPPING_UNKNOWN_SETTING = 2002

    # 3xxx - Bundle errors
    BUNDLE_NOT_FOUND = 3001
    BUNDLE_INVALID = 3002

    # 4xxx - Packing errors
    PACK_FRAGMENT_TOO_LARGE = 4001
    PACK_SLOT_LIMIT_EXCEEDED = 4002
    PACK_UNKNOWN_CATEGORY = 4003

    # 5xxx - Encoding errors
    PAYLOAD_DECODE_FAILED = 5001

    # 6xxx - Runtime errors
    RUNTIME_STATE_INVALID = 6001

    # 7xxx - IO errors
    FILE_NOT_FOUND = 7003
    FILE_WRITE_FAILED = 7005

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "config",
            2: "mapping",
            3: "bundle",
            4: "packing",
            5: "encoding",
            6: "runtime",
            7: "io",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.MAPPING_INVALID,
            ErrorCode.PACK_FRAGMENT_TOO_LARGE,
            ErrorCode.PACK_SLOT_LIMIT_EXCEEDED,
        }
        return self not in non_recoverable


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Lobby configuration errors
    ErrorCode.CONFIG_INVALID: "Invalid lobby configuration for '{key}': {detail}",
    ErrorCode.CONFIG_PARSE_ERROR: "Failed to parse lobby configuration '{path}': {detail}",
    ErrorCode.SETTINGS_INVALID: "Invalid tweakpack setting '{key}': {detail}",

    # Mapping errors
    ErrorCode.MAPPING_INVALID: "Invalid configuration mapping '{path}': {detail}",
    ErrorCode.MAPPING_UNKNOWN_SETTING: "Configuration mapping references unknown setting '{key}'.",

    # Bundle errors
    ErrorCode.BUNDLE_NOT_FOUND: "Lua bundle not found at '{path}'.",
    ErrorCode.BUNDLE_INVALID: "Invalid Lua bundle '{path}': {detail}",

    # Packing errors
    ErrorCode.PACK_FRAGMENT_TOO_LARGE: (
        "Fragment '{source}' needs {length} characters in a {category} slot "
        "but the command limit is {limit}."
    ),
    ErrorCode.PACK_SLOT_LIMIT_EXCEEDED: (
        "{category} needs {slots} slots but at most {limit} are allowed."
    ),
    ErrorCode.PACK_UNKNOWN_CATEGORY: "Unknown tweak category '{category}'.",

    # Encoding errors
    ErrorCode.PAYLOAD_DECODE_FAILED: "Could not decode payload: {detail}",

    # Runtime errors
    ErrorCode.RUNTIME_STATE_INVALID: "Invalid runtime state: {detail}",

    # IO errors
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
    ErrorCode.FILE_WRITE_FAILED: "Failed to write file: {path}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.CONFIG_INVALID: [
        "Run 'tweakpack config defaults' to see valid values",
        "Remove '{key}' from the file to fall back to its default",
    ],
    ErrorCode.SETTINGS_INVALID: [
        "Fix '{key}' in .tweakpack/config.yaml or its TWEAKPACK_* environment variable",
    ],
    ErrorCode.MAPPING_UNKNOWN_SETTING: [
        "Check the setting name against 'tweakpack config defaults'",
    ],
    ErrorCode.BUNDLE_NOT_FOUND: [
        "Pass --bundle with a directory of Lua files or a bundle JSON file",
        "Omit --bundle to use the packaged sample bundle",
    ],
    ErrorCode.PACK_FRAGMENT_TOO_LARGE: [
        "Split '{source}' into smaller Lua files",
        "Raise limits.max_command_length if the lobby accepts longer commands",
    ],
    ErrorCode.PACK_SLOT_LIMIT_EXCEEDED: [
        "Disable some options that add {category} code",
        "Raise limits.max_slots_per_type if the lobby accepts more slots",
    ],
}


class TweakpackError(Exception):
    """Base error type for all Tweakpack errors.

    Example:
        >>> err = TweakpackError(
        ...     code=ErrorCode.PACK_UNKNOWN_CATEGORY,
        ...     context={"category": "tweakmaps"},
        ... )
        >>> print(err)
        [TP-4003] Unknown tweak category 'tweakmaps'.
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'TP-4002')."""
        return f"TP-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"TweakpackError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging and JSON output."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


# Convenience factory functions

def config_error(
    code: ErrorCode,
    key: str = "",
    path: str = "",
    detail: str = "",
    cause: Exception | None = None,
) -> TweakpackError:
    """Create a lobby configuration error."""
    return TweakpackError(
        code=code,
        context={"key": key, "path": path, "detail": detail},
        cause=cause,
    )


def bundle_error(
    code: ErrorCode,
    path: str,
    detail: str = "",
    cause: Exception | None = None,
) -> TweakpackError:
    """Create a bundle-related error."""
    return TweakpackError(
        code=code,
        context={"path": path, "detail": detail},
        cause=cause,
    )


def pack_error(
    code: ErrorCode,
    category: str,
    limit: int = 0,
    **extra: Any,
) -> TweakpackError:
    """Create a packing (capacity) error."""
    return TweakpackError(
        code=code,
        context={"category": category, "limit": limit, **extra},
    )
