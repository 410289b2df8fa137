"""Error system for Tweakpack."""

from tweakpack.foundation.errors.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ErrorCode,
    TweakpackError,
    bundle_error,
    config_error,
    pack_error,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "TweakpackError",
    "bundle_error",
    "config_error",
    "pack_error",
]
