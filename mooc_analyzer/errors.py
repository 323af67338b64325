"""Exceptions raised by the analyzer."""

from __future__ import annotations

from typing import Optional


class DatasetLoadError(ValueError):
    """The dataset could not be turned into a record store.

    ``row`` is the 1-based data row (header excluded) and ``column`` the
    canonical column name, when the failure can be pinned to a cell.
    """

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[str] = None) -> None:
        self.row = row
        self.column = column
        if row is not None:
            where = f"data row {row}" if column is None else f"data row {row}, column {column!r}"
            message = f"{message} ({where})"
        super().__init__(message)


class InvalidArgumentError(ValueError):
    """A query parameter is outside the accepted range or set."""
