"""
Operations layer.

Transport-free request handling.  Every function takes an
:class:`~book_catalog.ops.context.OperationContext` and returns an
:class:`~book_catalog.ops.result.OperationResult`; none of them raise for
expected failures.
"""

from book_catalog.ops.context import OperationContext
from book_catalog.ops.result import OperationError, OperationResult

__all__ = ["OperationContext", "OperationError", "OperationResult"]
