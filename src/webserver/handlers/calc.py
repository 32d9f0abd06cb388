"""
=============================================================================
CALCULATION HANDLER
=============================================================================

    GET /calc/<op>/<a>/<b>

    <op>   1 to 9 BYTES (UTF-8), no "/"
    <a>    optionally signed base-10 integer (ASCII digits only)
    <b>    optionally signed base-10 integer (ASCII digits only)

Parsing stops at the first character after <b> that is not a digit, and
the rest of the path is ignored:

    /calc/add/1/2          → Result: 3\n
    /calc/add/1/2abc       → Result: 3\n
    /calc/add/1/2/9        → Result: 3\n
    /calc/add/1            → not found
    /calc/toolongopx/1/2   → not found   (10-byte operator)
    /calc/ééééé/1/2        → not found   (5 characters, 10 bytes)

=============================================================================
OPERATORS
=============================================================================

    ┌──────┬───────────────────────────────────────────────────────────┐
    │ add  │ a + b                                                     │
    │ sub  │ a - b                                                     │
    │ mul  │ a * b                                                     │
    │ div  │ a / b, truncated TOWARD ZERO (-7/2 = -3, not floor's -4)  │
    │      │ b == 0 → "Error: Division by zero" (no trailing newline)  │
    │ else │ result stays 0 → "Result: 0\n"                            │
    └──────┴───────────────────────────────────────────────────────────┘

Unknown operators are NOT rejected.

=============================================================================
"""

import re
import operator
from typing import Callable, Dict

from ..http.request import Request
from ..http.response import Response, DIVISION_BY_ZERO_BODY, text, not_found


CALC_PATTERN = re.compile(r"/calc/([^/]{1,9})/([+-]?[0-9]+)/([+-]?[0-9]+)")

# Operator width is limited in bytes, not characters
MAX_OP_BYTES = 9


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


OPERATIONS: Dict[str, Callable[[int, int], int]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": truncating_div,
}


def calculate(op: str, a: int, b: int) -> int:
    """
    Apply a named operator; unknown names give 0.

    The caller is responsible for rejecting div by zero first.
    """
    func = OPERATIONS.get(op)
    if func is None:
        return 0
    return func(a, b)


def handle_calc(request: Request) -> Response:
    """Handler for GET /calc... requests."""
    match = CALC_PATTERN.match(request.path)
    if not match:
        return not_found()

    op = match.group(1)
    if len(op.encode("utf-8", errors="surrogateescape")) > MAX_OP_BYTES:
        return not_found()

    a = int(match.group(2))
    b = int(match.group(3))

    if op == "div" and b == 0:
        return text(DIVISION_BY_ZERO_BODY)

    return text(f"Result: {calculate(op, a, b)}\n")
