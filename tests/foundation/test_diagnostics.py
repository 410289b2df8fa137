"""Tests for the diagnostic sink."""

import logging

from tweakpack.foundation.diagnostics import Diagnostic, DiagnosticKind, Diagnostics


class TestDiagnostics:
    def test_records_in_order(self) -> None:
        diagnostics = Diagnostics()

        diagnostics.warn(DiagnosticKind.PARSE, "first", "a")
        diagnostics.warn(DiagnosticKind.LOOKUP, "second", "b")

        assert diagnostics.kinds() == [DiagnosticKind.PARSE, DiagnosticKind.LOOKUP]
        assert diagnostics.of_kind(DiagnosticKind.LOOKUP) == [
            Diagnostic(DiagnosticKind.LOOKUP, "second", "b")
        ]
        assert len(diagnostics) == 2

    def test_empty_sink_is_truthy(self) -> None:
        assert Diagnostics()

    def test_logs_to_given_logger(self, caplog) -> None:
        log = logging.getLogger("tweakpack.test")

        with caplog.at_level(logging.WARNING, logger="tweakpack.test"):
            Diagnostics().warn(DiagnosticKind.EVALUATION, "bad expression", log=log)

        assert caplog.records[0].name == "tweakpack.test"
        assert caplog.records[0].getMessage() == "bad expression"

    def test_to_dict(self) -> None:
        diagnostic = Diagnostic(DiagnosticKind.UNUSED_VARIABLE, "unused: X", "X")

        assert diagnostic.to_dict() == {
            "kind": "unused_variable",
            "message": "unused: X",
            "subject": "X",
        }
