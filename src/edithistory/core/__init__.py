# src/edithistory/core/__init__.py
"""Public facade for edithistory.core: re-export main classes from CamelCase modules."""

# Re-export classes/symbols from CamelCase modules
from .History import History, HistoryEntry, make_history  # noqa: F401
from .Operation import Delete, Insert, Operation, OperationKind, Replace, TextRange  # noqa: F401
from .SnapshotHistory import SnapshotHistory  # noqa: F401


__all__ = [
    "Delete",
    "History",
    "HistoryEntry",
    "Insert",
    "Operation",
    "OperationKind",
    "Replace",
    "SnapshotHistory",
    "TextRange",
    "make_history",
]
