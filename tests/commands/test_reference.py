"""Tests for Lua reference parsing."""

import pytest

from tweakpack.commands.reference import ParsedReference, parse_reference
from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics


class TestParseReference:
    """Tests for parse_reference."""

    def test_plain_reference(self) -> None:
        """A reference without variables has an empty variable map."""
        parsed = parse_reference("~lua/main-defs.lua")

        assert parsed == ParsedReference(file_path="lua/main-defs.lua", variables={})

    def test_reference_with_variables(self) -> None:
        """Variables are split on commas and trimmed."""
        parsed = parse_reference("~lua/hp.lua{HP_MULTIPLIER=1.5, QUEEN_COUNT = 8}")

        assert parsed is not None
        assert parsed.file_path == "lua/hp.lua"
        assert parsed.variables == {"HP_MULTIPLIER": "1.5", "QUEEN_COUNT": "8"}

    def test_value_keeps_later_equals_signs(self) -> None:
        """Pairs are split on the first '=' only."""
        parsed = parse_reference("~lua/a.lua{EXPR=a=b}")

        assert parsed is not None
        assert parsed.variables == {"EXPR": "a=b"}

    def test_duplicate_key_last_wins(self) -> None:
        parsed = parse_reference("~lua/a.lua{X=1,X=2}")

        assert parsed is not None
        assert parsed.variables == {"X": "2"}

    def test_missing_sigil_rejected(self) -> None:
        """Tokens without '~' are rejected with a parse diagnostic."""
        diagnostics = Diagnostics()

        assert parse_reference("lua/main-defs.lua", diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.PARSE]
        assert "missing ~ prefix" in diagnostics.entries[0].message

    def test_malformed_token_rejected(self) -> None:
        """Unterminated variable blocks do not match the reference grammar."""
        diagnostics = Diagnostics()

        assert parse_reference("~lua/a.lua{X=1", diagnostics) is None
        assert parse_reference("~", diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.PARSE, DiagnosticKind.PARSE]

    @pytest.mark.parametrize("ref", ["~lua/x.lua{A=1}\n", "~lua/x.lua{A=1} "])
    def test_trailing_text_after_block_rejected(self, ref: str) -> None:
        diagnostics = Diagnostics()

        assert parse_reference(ref, diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.PARSE]

    def test_malformed_pair_skipped(self) -> None:
        """A bad pair is skipped and the remaining pairs still parse."""
        diagnostics = Diagnostics()

        parsed = parse_reference("~lua/a.lua{GOOD=1,bad,=2}", diagnostics)

        assert parsed is not None
        assert parsed.variables == {"GOOD": "1"}
        assert diagnostics.kinds() == [DiagnosticKind.PARSE, DiagnosticKind.PARSE]
        assert all(d.subject == "~lua/a.lua{GOOD=1,bad,=2}" for d in diagnostics.entries)

    def test_rejection_is_logged(self, caplog) -> None:
        """Diagnostics also go to the module logger at WARNING."""
        with caplog.at_level("WARNING", logger="tweakpack.commands.reference"):
            parse_reference("nope")

        assert "Invalid Lua reference" in caplog.text
