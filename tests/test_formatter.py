"""Tests for schema_bridge.formatter module."""

from __future__ import annotations

import pytest

from schema_bridge.formatter import format_error, format_results
from schema_bridge.models import ValidationError, ValidationResult


class TestFormatError:
    """Tests for the per-error branches."""

    @pytest.mark.parametrize(
        ("line", "path", "expected"),
        [
            (5, "replicas", '  line 5, field "replicas": must be >= 1'),
            (5, "", "  line 5: must be >= 1"),
            (0, "replicas", '  field "replicas": must be >= 1'),
            (0, "", "  must be >= 1"),
        ],
    )
    def test_branches(self, line: int, path: str, expected: str) -> None:
        error = ValidationError(line=line, column=3, path=path, message="must be >= 1")
        assert format_error(error) == expected

    def test_column_is_not_rendered(self) -> None:
        error = ValidationError(line=0, column=8, path="", message="oops")
        assert format_error(error) == "  oops"


class TestFormatResults:
    """Tests for format_results."""

    def test_valid_result(self) -> None:
        assert format_results([ValidationResult.success("config.yaml")]) == "config.yaml: ok\n"

    def test_invalid_result(self) -> None:
        result = ValidationResult.failure(
            "config.json",
            [
                ValidationError(line=5, path="replicas", message="value 0 does not satisfy >=1"),
                ValidationError(message="incomplete value"),
            ],
        )

        assert format_results([result]) == (
            "FAIL: config.json\n"
            '  line 5, field "replicas": value 0 does not satisfy >=1\n'
            "  incomplete value\n"
        )

    def test_preserves_result_order(self) -> None:
        results = [
            ValidationResult.success("b.yaml"),
            ValidationResult.failure("a.yaml", [ValidationError(path="name", message="required")]),
            ValidationResult.success("c.yaml"),
        ]

        assert format_results(results) == (
            "b.yaml: ok\n"
            "FAIL: a.yaml\n"
            '  field "name": required\n'
            "c.yaml: ok\n"
        )

    def test_duplicate_errors_are_kept(self) -> None:
        error = ValidationError(message="same")
        result = ValidationResult.failure("dup.yaml", [error, error])

        assert format_results([result]).count("  same\n") == 2

    def test_no_results(self) -> None:
        assert format_results([]) == ""

    def test_accepts_generator(self) -> None:
        assert format_results(ValidationResult.success(n) for n in ["x", "y"]) == "x: ok\ny: ok\n"


class TestValidationResult:
    """Tests for the result constructors."""

    def test_failure_requires_errors(self) -> None:
        with pytest.raises(ValueError):
            ValidationResult.failure("empty", [])

    def test_to_dict(self) -> None:
        result = ValidationResult.failure("x", [ValidationError(line=2, column=4, path="a", message="m")])

        assert result.to_dict() == {
            "name": "x",
            "valid": False,
            "errors": [{"line": 2, "column": 4, "path": "a", "message": "m"}],
        }
