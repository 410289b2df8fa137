"""Diagnostic sink for recoverable pipeline problems.

Reference parsing, bundle lookups and template evaluation never raise on bad
input. They report through a ``Diagnostics`` instance passed down the
pipeline, which keeps an ordered record (for tests and the CLI) and forwards
every entry to the calling module's logger at WARNING level.

Usage:
    diagnostics = Diagnostics()
    process_lua_reference("~lua/missing.lua", bundle, diagnostics)
    assert diagnostics.kinds() == [DiagnosticKind.LOOKUP]
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Category of a recoverable problem."""

    PARSE = "parse"
    """Malformed reference token or variable pair."""

    LOOKUP = "lookup"
    """Referenced file absent from the bundle."""

    EVALUATION = "evaluation"
    """Unsafe or unsupported arithmetic expression."""

    UNDEFINED_VARIABLE = "undefined_variable"
    """Template placeholder with no supplied value."""

    UNUSED_VARIABLE = "unused_variable"
    """Supplied variable that no placeholder consumed."""

    OVERSIZED_COMMAND = "oversized_command"
    """Literal command longer than the section limit."""

    UNMAPPED_VALUE = "unmapped_value"
    """Ranged setting value that falls outside the mapped steps."""


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single recorded problem.

    Attributes:
        kind: Problem category
        message: Human-readable description
        subject: The token, expression or command that caused it
    """

    kind: DiagnosticKind
    message: str
    subject: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "subject": self.subject}


@dataclass(slots=True)
class Diagnostics:
    """Ordered collector of diagnostics for one build."""

    entries: list[Diagnostic] = field(default_factory=list)

    def warn(
        self,
        kind: DiagnosticKind,
        message: str,
        subject: str = "",
        *,
        log: logging.Logger | None = None,
    ) -> Diagnostic:
        """Record a problem and log it.

        Args:
            kind: Problem category
            message: Human-readable description
            subject: Offending token or expression
            log: Logger of the reporting module (defaults to this module's)

        Returns:
            The recorded diagnostic
        """
        diagnostic = Diagnostic(kind=kind, message=message, subject=subject)
        self.entries.append(diagnostic)
        (log or logger).warning("%s", message)
        return diagnostic

    def kinds(self) -> list[DiagnosticKind]:
        return [d.kind for d in self.entries]

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.entries if d.kind == kind]

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        # An empty collector is still a valid sink
        return True
