# =============================================================================
# test_errors.py - Error Reporting Tests
# =============================================================================
# Tests for AssemblerError formatting and the ErrorCollector.
# =============================================================================

import pytest

from stamina_sdk.errors import (
    AssemblySyntaxError,
    ErrorCollector,
    Position,
    TooManyErrors,
)


def make_error(column: int) -> AssemblySyntaxError:
    return AssemblySyntaxError("Unknown character", Position("boot.s", 1, column))


class TestErrorCollector:
    """Batch error collection and reporting."""

    def test_empty(self):
        collector = ErrorCollector()
        assert not collector.has_errors()
        assert collector.error_count() == 0

    def test_add(self):
        collector = ErrorCollector()
        collector.add(make_error(1))
        collector.add(make_error(3))
        assert collector.has_errors()
        assert collector.error_count() == 2

    def test_limit_raises_on_last_error(self):
        collector = ErrorCollector(max_errors=2)
        collector.add(make_error(1))
        with pytest.raises(TooManyErrors):
            collector.add(make_error(2))
        assert collector.error_count() == 2

    def test_report_single_error(self):
        collector = ErrorCollector()
        collector.add(make_error(4))
        assert collector.report() == "boot.s:1:4: error: Unknown character\n\n1 error"

    def test_report_counts_errors(self):
        collector = ErrorCollector()
        for column in (1, 2, 3):
            collector.add(make_error(column))
        assert collector.report().endswith("\n3 errors")
