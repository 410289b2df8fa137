"""Foundation domain - errors, diagnostics, logging and app config.

Everything else imports from here. Config is imported from
``tweakpack.foundation.config`` directly since it depends on the mapping
constants.
"""

from tweakpack.foundation.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from tweakpack.foundation.errors import (
    ErrorCode,
    TweakpackError,
    bundle_error,
    config_error,
    pack_error,
)

__all__ = [
    # === Diagnostics ===
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    # === Errors ===
    "ErrorCode",
    "TweakpackError",
    "bundle_error",
    "config_error",
    "pack_error",
]
