"""
Snapshot Undo/Redo History

Generic over the snapshot type. Every function returns a new HistoryState;
states are never modified in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class HistoryState(Generic[T]):
    """Past snapshots (oldest first), the current one, and redo entries."""

    present: T
    past: tuple[T, ...] = field(default=())
    future: tuple[T, ...] = field(default=())


@dataclass(frozen=True)
class HistoryInfo:
    """Position within the history, as shown by an undo/redo indicator."""

    current_index: int
    total_steps: int
    can_undo: bool
    can_redo: bool


def create_history(initial: T) -> HistoryState[T]:
    return HistoryState(present=initial)


def record(history: HistoryState[T], new_present: T, limit: int | None = None) -> HistoryState[T]:
    """
    Commit a new snapshot.

    The old present moves onto the past and the redo future is discarded.

    Args:
        history: Current state
        new_present: Snapshot to install
        limit: Maximum past entries kept; oldest are dropped first.
            None or 0 keeps everything.
    """
    past = (*history.past, history.present)
    if limit and len(past) > limit:
        past = past[-limit:]
    return HistoryState(present=new_present, past=past, future=())


def undo(history: HistoryState[T]) -> HistoryState[T]:
    """Step back one snapshot; no-op when there is nothing to undo."""
    if not history.past:
        return history
    return HistoryState(
        present=history.past[-1],
        past=history.past[:-1],
        future=(history.present, *history.future),
    )


def redo(history: HistoryState[T]) -> HistoryState[T]:
    """Step forward one snapshot; no-op when there is nothing to redo."""
    if not history.future:
        return history
    return HistoryState(
        present=history.future[0],
        past=(*history.past, history.present),
        future=history.future[1:],
    )


def can_undo(history: HistoryState[T]) -> bool:
    return len(history.past) > 0


def can_redo(history: HistoryState[T]) -> bool:
    return len(history.future) > 0


def history_info(history: HistoryState[T]) -> HistoryInfo:
    return HistoryInfo(
        current_index=len(history.past),
        total_steps=len(history.past) + 1 + len(history.future),
        can_undo=can_undo(history),
        can_redo=can_redo(history),
    )


def clear_history(history: HistoryState[T]) -> HistoryState[T]:
    """Keep only the present snapshot."""
    return HistoryState(present=history.present)
