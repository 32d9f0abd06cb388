"""
Unit tests for the calculation handler.
"""

import pytest

from webserver.handlers.calc import handle_calc, calculate, truncating_div
from webserver.http.request import Request
from webserver.http.response import HTTPStatus


def calc(path: str) -> bytes:
    """Run the handler on a path and return the body."""
    return handle_calc(Request(method="GET", path=path)).body


class TestHandleCalc:
    """Tests for handle_calc()."""

    @pytest.mark.parametrize("path, expected", [
        ("/calc/add/1/2", b"Result: 3\n"),
        ("/calc/sub/1/2", b"Result: -1\n"),
        ("/calc/mul/-4/5", b"Result: -20\n"),
        ("/calc/div/7/2", b"Result: 3\n"),
        ("/calc/div/-7/2", b"Result: -3\n"),
        ("/calc/div/7/-2", b"Result: -3\n"),
        ("/calc/div/-7/-2", b"Result: 3\n"),
        ("/calc/div/0/5", b"Result: 0\n"),
        ("/calc/add/+4/-6", b"Result: -2\n"),
    ])
    def test_operators(self, path: str, expected: bytes):
        assert calc(path) == expected

    def test_plain_text(self):
        response = handle_calc(Request(method="GET", path="/calc/add/1/2"))

        assert response.content_type == "text/plain"
        assert response.status == HTTPStatus.OK

    @pytest.mark.parametrize("a", [0, 1, -1, 123456])
    def test_division_by_zero(self, a: int):
        """Test the soft division-by-zero message (no newline)."""
        assert calc(f"/calc/div/{a}/0") == b"Error: Division by zero"

    def test_division_by_signed_zero(self):
        assert calc("/calc/div/5/-0") == b"Error: Division by zero"

    def test_zero_divisor_other_operators(self):
        assert calc("/calc/add/5/0") == b"Result: 5\n"
        assert calc("/calc/mul/5/0") == b"Result: 0\n"

    @pytest.mark.parametrize("op", ["pow", "mod", "ADD", "x", "123456789"])
    def test_unknown_operator_gives_zero(self, op: str):
        """Test that unknown operators fall through to result 0."""
        assert calc(f"/calc/{op}/6/3") == b"Result: 0\n"

    @pytest.mark.parametrize("path, expected", [
        ("/calc/add/1/2abc", b"Result: 3\n"),
        ("/calc/add/1/2/99", b"Result: 3\n"),
        ("/calc/mul/3/4?x=1", b"Result: 12\n"),
    ])
    def test_trailing_characters_ignored(self, path: str, expected: bytes):
        assert calc(path) == expected

    @pytest.mark.parametrize("path", [
        "/calc",
        "/calc/",
        "/calc/add",
        "/calc/add/1",
        "/calc/add/1/",
        "/calc/add/x/2",
        "/calc/add/1/y",
        "/calc//1/2",
        "/calc/toolongopx/1/2",
        "/calculator/add/1/2",
        "/calc/add/1.5/2",
    ])
    def test_malformed_paths_are_not_found(self, path: str):
        response = handle_calc(Request(method="GET", path=path))

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.body == b"<h1>404 Not Found</h1>"

    def test_nine_character_operator_accepted(self):
        assert calc("/calc/ninechars/1/2") == b"Result: 0\n"

    def test_operator_width_counts_bytes(self):
        """Test that a 5-character, 10-byte operator is too wide."""
        response = handle_calc(Request(method="GET", path="/calc/ééééé/1/2"))

        assert response.status == HTTPStatus.NOT_FOUND

    def test_multibyte_operator_within_nine_bytes(self):
        assert calc("/calc/éééé/1/2") == b"Result: 0\n"

    def test_non_ascii_digits_rejected(self):
        """Test that only ASCII digits count as operands."""
        response = handle_calc(Request(method="GET", path="/calc/add/١/2"))

        assert response.status == HTTPStatus.NOT_FOUND

    def test_idempotent(self):
        first = handle_calc(Request(method="GET", path="/calc/mul/6/7")).to_bytes()
        second = handle_calc(Request(method="GET", path="/calc/mul/6/7")).to_bytes()

        assert first == second


class TestArithmetic:
    """Tests for calculate() and truncating_div()."""

    @pytest.mark.parametrize("a, b, expected", [
        (7, 2, 3),
        (-7, 2, -3),
        (7, -2, -3),
        (-7, -2, 3),
        (6, 3, 2),
        (-6, 3, -2),
        (1, 2, 0),
        (-1, 2, 0),
    ])
    def test_truncating_div(self, a: int, b: int, expected: int):
        assert truncating_div(a, b) == expected

    def test_calculate(self):
        assert calculate("add", 2, 3) == 5
        assert calculate("sub", 2, 3) == -1
        assert calculate("mul", 2, 3) == 6
        assert calculate("div", 9, 2) == 4
        assert calculate("nope", 2, 3) == 0
