"""Generic snapshot undo/redo."""

from .engine import (
    HistoryInfo,
    HistoryState,
    can_redo,
    can_undo,
    clear_history,
    create_history,
    history_info,
    record,
    redo,
    undo,
)

__all__ = [
    "HistoryInfo",
    "HistoryState",
    "can_redo",
    "can_undo",
    "clear_history",
    "create_history",
    "history_info",
    "record",
    "redo",
    "undo",
]
