"""Tests for the OperationResult envelope."""

from book_catalog.core.errors import ErrorCode
from book_catalog.ops.result import OperationResult, start_timer


class TestOperationResult:
    def test_ok(self):
        result = OperationResult.ok({"id": 1}, elapsed_ms=1.234, metadata={"cache": "hit"})
        assert result.success
        assert result.code is None
        assert result.to_dict() == {
            "success": True,
            "data": {"id": 1},
            "elapsed_ms": 1.23,
            "metadata": {"cache": "hit"},
        }

    def test_fail(self):
        result = OperationResult.fail(ErrorCode.NOT_FOUND, "Book not found", details={"id": 7})
        assert not result.success
        assert result.code == ErrorCode.NOT_FOUND
        assert result.to_dict()["error"] == {
            "code": "NOT_FOUND",
            "message": "Book not found",
            "details": {"id": 7},
        }


def test_timer_counts_up():
    timer = start_timer()
    assert timer.elapsed_ms >= 0
