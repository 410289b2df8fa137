"""Template interpolation for Lua files.

Replaces ``$VARIABLE_NAME$`` placeholders with supplied values, then
evaluates the small arithmetic expressions that substitution typically
produces, e.g. ``(0.75 / $HP_MULTIPLIER$)`` -> ``(0.75 / 1.5)`` -> ``(0.5)``.

Only two expression shapes are ever evaluated: one division or one
multiplication of two numeric operands. Everything else passes through
unchanged with a diagnostic. Nothing here calls ``eval``.
"""

import logging
import math
import re
from dataclasses import dataclass

from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\$(\w+)\$")
# Innermost parenthesized group, e.g. (0.75 / 1.5)
_GROUP_PATTERN = re.compile(r"\(([^()]+)\)")
_OPERATOR_PATTERN = re.compile(r"[+\-*/]")
_SAFE_EXPRESSION_PATTERN = re.compile(r"[\d\s+\-*/().]+", re.ASCII)


@dataclass(frozen=True, slots=True)
class Division:
    """``dividend / divisor``"""

    dividend: float
    divisor: float


@dataclass(frozen=True, slots=True)
class Multiplication:
    """``left * right``"""

    left: float
    right: float


@dataclass(frozen=True, slots=True)
class Unsupported:
    """Any expression that is not evaluated."""

    reason: str
    unsafe: bool = False


Expression = Division | Multiplication | Unsupported


def _parse_operand(text: str) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _split_binary(expression: str, operator: str) -> tuple[float, float] | None:
    parts = expression.split(operator)
    if len(parts) != 2:
        return None
    left, right = _parse_operand(parts[0]), _parse_operand(parts[1])
    if left is None or right is None:
        return None
    return left, right


def classify_expression(expression: str) -> Expression:
    """Decide which of the supported shapes an expression has.

    Division is checked before multiplication.

    Examples:
        >>> classify_expression("0.75 / 1.5")
        Division(dividend=0.75, divisor=1.5)
        >>> classify_expression("2 + 3")
        Unsupported(reason='unsupported expression format', unsafe=False)
    """
    if not _SAFE_EXPRESSION_PATTERN.fullmatch(expression):
        return Unsupported(reason="unsafe characters", unsafe=True)

    trimmed = expression.strip()

    if "/" in trimmed:
        operands = _split_binary(trimmed, "/")
        if operands is not None:
            return Division(*operands)

    if "*" in trimmed:
        operands = _split_binary(trimmed, "*")
        if operands is not None:
            return Multiplication(*operands)

    return Unsupported(reason="unsupported expression format")


def format_number(value: float) -> str:
    """Format a result the way it should appear in Lua source.

    >>> format_number(6.0)
    '6'
    >>> format_number(0.5)
    '0.5'
    """
    if value.is_integer():
        return str(int(value))
    return repr(value)


def evaluate_expression(expression: str, diagnostics: Diagnostics | None = None) -> str:
    """Evaluate a simple arithmetic expression.

    Args:
        expression: Expression text (without the surrounding parentheses)
        diagnostics: Sink for rejected expressions

    Returns:
        The result as decimal text, or the original expression if it was
        not evaluated

    Examples:
        >>> evaluate_expression("0.75 / 1.5")
        '0.5'
        >>> evaluate_expression("2 * 3")
        '6'
        >>> evaluate_expression("2 + 3")
        '2 + 3'
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()
    form = classify_expression(expression)

    match form:
        case Division(dividend, divisor):
            if divisor == 0:
                sink.warn(
                    DiagnosticKind.EVALUATION,
                    f"Division by zero, skipping evaluation: {expression}",
                    expression,
                    log=logger,
                )
                return expression
            return format_number(dividend / divisor)
        case Multiplication(left, right):
            return format_number(left * right)
        case Unsupported(unsafe=True):
            sink.warn(
                DiagnosticKind.EVALUATION,
                f"Unsafe expression detected, skipping evaluation: {expression}",
                expression,
                log=logger,
            )
            return expression
        case _:
            sink.warn(
                DiagnosticKind.EVALUATION,
                f"Expression format not supported for evaluation: {expression}",
                expression,
                log=logger,
            )
            return expression


def interpolate_template(
    template: str,
    variables: dict[str, str],
    diagnostics: Diagnostics | None = None,
) -> str:
    """Interpolate template placeholders with variable values.

    Two passes, in order: placeholder substitution, then evaluation of
    parenthesized arithmetic. Undefined placeholders stay in the text and
    variables nobody used are reported; neither stops interpolation.

    Args:
        template: The template string with $PLACEHOLDER$ markers
        variables: Variable name -> value
        diagnostics: Sink for undefined/unused variables and rejected expressions

    Returns:
        Interpolated template string

    Example:
        >>> interpolate_template(
        ...     "unitDef.metalcost = math.floor(unitDef.health * (0.75 / $HP_MULTIPLIER$))",
        ...     {"HP_MULTIPLIER": "1.5"},
        ... )
        'unitDef.metalcost = math.floor(unitDef.health * (0.5))'
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()
    used: set[str] = set()

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            used.add(name)
            return variables[name]
        sink.warn(
            DiagnosticKind.UNDEFINED_VARIABLE,
            f"Undefined template variable: {name} (placeholder: {match.group(0)})",
            match.group(0),
            log=logger,
        )
        return match.group(0)

    def evaluate(match: re.Match) -> str:
        expression = match.group(1)
        if _OPERATOR_PATTERN.search(expression):
            return f"({evaluate_expression(expression, sink)})"
        return match.group(0)

    interpolated = _PLACEHOLDER_PATTERN.sub(substitute, template)
    interpolated = _GROUP_PATTERN.sub(evaluate, interpolated)

    unused = [name for name in variables if name not in used]
    if unused:
        sink.warn(
            DiagnosticKind.UNUSED_VARIABLE,
            f"Template variables provided but not used: {', '.join(unused)}",
            ", ".join(unused),
            log=logger,
        )

    return interpolated
