"""Tests for payload encoding."""

import pytest

from tweakpack.commands.encoding import decode, encode, encoded_length
from tweakpack.foundation.errors import ErrorCode, TweakpackError


class TestEncode:
    def test_url_safe_without_padding(self) -> None:
        payload = encode("-- Source: ~lua/a.lua\n?>?>")

        assert "=" not in payload
        assert "+" not in payload and "/" not in payload
        assert decode(payload) == "-- Source: ~lua/a.lua\n?>?>"

    def test_encoded_length_matches(self) -> None:
        for text in ("", "a", "ab", "abc", "unitDef.health = 1"):
            assert encoded_length(len(text.encode("utf-8"))) == len(encode(text))

    def test_non_ascii_source(self) -> None:
        assert decode(encode("-- Queen ♛")) == "-- Queen ♛"


class TestDecode:
    def test_accepts_padding_and_standard_alphabet(self) -> None:
        assert decode("YQ==") == "a"
        assert decode("Pz4/") == "?>?"

    def test_rejects_garbage(self) -> None:
        with pytest.raises(TweakpackError) as exc_info:
            decode("not base64!")

        assert exc_info.value.code == ErrorCode.PAYLOAD_DECODE_FAILED

    def test_rejects_invalid_utf8(self) -> None:
        with pytest.raises(TweakpackError) as exc_info:
            decode("_w")

        assert exc_info.value.code == ErrorCode.PAYLOAD_DECODE_FAILED
