"""Payload encoding for tweakdefs/tweakunits commands.

Payloads are UTF-8 Lua source in URL-safe base64 with the ``=`` padding
removed, which the lobby accepts and which never contains whitespace or
control characters that would break line-based transmission.
"""

import base64
import binascii
import re

from tweakpack.foundation.errors import ErrorCode, TweakpackError

_PAYLOAD_PATTERN = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


def encode(text: str) -> str:
    """Encode Lua source as an unpadded URL-safe base64 payload."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def encoded_length(byte_count: int) -> int:
    """Length of the unpadded base64 text for ``byte_count`` bytes."""
    return (4 * byte_count + 2) // 3


def decode(payload: str) -> str:
    """Decode a payload produced by ``encode`` (padding optional).

    Standard-alphabet payloads (``+`` and ``/``) are accepted as well.

    Raises:
        TweakpackError: PAYLOAD_DECODE_FAILED if the payload is not base64 UTF-8
    """
    cleaned = payload.strip().replace("+", "-").replace("/", "_")
    if not _PAYLOAD_PATTERN.match(cleaned):
        raise TweakpackError(
            code=ErrorCode.PAYLOAD_DECODE_FAILED,
            context={"detail": "payload contains non-base64 characters"},
        )
    cleaned = cleaned.rstrip("=")
    padded = cleaned + "=" * (-len(cleaned) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise TweakpackError(
            code=ErrorCode.PAYLOAD_DECODE_FAILED,
            context={"detail": str(e)},
            cause=e,
        ) from e
