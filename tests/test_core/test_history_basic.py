"""History Basic Tests
========================

Unit tests for the History class (stack bookkeeping).

This test module verifies that the History class:

1. Records operations and clears both stacks on `clear()`.
2. Clears the redo stack whenever a new operation is pushed.
3. Evicts the oldest entry once `max_size` is exceeded.
4. Treats undo/redo on empty stacks as a repeatable no-op.
"""

import logging

import pytest

from edithistory.core.History import History, HistoryEntry
from edithistory.core.Operation import Delete, Insert, Operation, Replace, TextRange


def test_push_and_clear(history):
    """Test: Pushing operations and clearing the history."""
    ins = Insert(TextRange(0, 5), "hello")
    dele = Delete(TextRange(0, 1), "h")

    history.push(ins)
    history.push(dele)

    assert list(history._undo_stack) == [HistoryEntry(ins), HistoryEntry(dele)]
    assert history._redo_stack == []
    assert len(history) == 2

    history.clear()
    assert len(history._undo_stack) == 0
    assert history._redo_stack == []
    assert not history.can_undo() and not history.can_redo()


def test_default_and_explicit_capacity():
    assert History().max_size == 100
    assert History.with_capacity(7).max_size == 7


def test_negative_capacity_is_rejected():
    with pytest.raises(ValueError):
        History.with_capacity(-1)


def test_insert_then_delete_does_not_merge(history):
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Delete(TextRange(1, 2), "b"))

    assert history.undo_depth == 2


def test_push_clears_redo_stack(history):
    """Test: Any push after an undo invalidates redo history."""
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Replace(TextRange(0, 1), "a", "b"))
    history.undo()
    assert history.can_redo()

    history.push(Delete(TextRange(0, 1), "a"))

    assert history.redo_depth == 0
    assert history.redo() is None


def test_merging_push_also_clears_redo_stack(history):
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Replace(TextRange(0, 1), "a", "b"))
    history.undo()

    # Merges with the remaining top Insert(0..1, "a")
    history.push(Insert(TextRange(1, 2), "c"))

    assert history.undo_depth == 1
    assert history.peek_undo() == Insert(TextRange(0, 2), "ac")
    assert history.redo() is None


def test_capacity_evicts_oldest_entry(small_history):
    """Test: With max_size=2, the first of three separate edits is evicted."""
    first = Insert(TextRange(0, 1), "a")
    second = Delete(TextRange(5, 6), "x")
    third = Replace(TextRange(0, 1), "a", "b")

    for op in (first, second, third):
        small_history.push(op)

    assert small_history.undo_depth == 2
    assert [e.operation for e in small_history._undo_stack] == [second, third]

    assert small_history.undo() == third.invert()
    assert small_history.undo() == second.invert()
    assert small_history.undo() is None


def test_merge_does_not_grow_stack_at_capacity(small_history):
    small_history.push(Delete(TextRange(9, 10), "z"))
    small_history.push(Insert(TextRange(0, 1), "a"))
    small_history.push(Insert(TextRange(1, 2), "b"))

    assert small_history.undo_depth == 2
    assert small_history.peek_undo() == Insert(TextRange(0, 2), "ab")


def test_zero_capacity_keeps_nothing():
    history = History.with_capacity(0)
    history.push(Insert(TextRange(0, 1), "a"))

    assert history.undo_depth == 0
    assert history.undo() is None


def test_empty_history_undo_redo_are_idempotent(history):
    """Test: Undo/redo on a fresh history return None repeatedly without side effects."""
    for _ in range(3):
        assert history.undo() is None
        assert history.redo() is None

    assert history.undo_depth == 0 and history.redo_depth == 0
    assert history.peek_undo() is None and history.peek_redo() is None

    # Still fully usable afterwards
    op = Insert(TextRange(0, 1), "a")
    history.push(op)
    assert history.undo() == op.invert()


def test_coalesce_disabled_records_every_keystroke():
    history = History(coalesce=False)
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Insert(TextRange(1, 2), "b"))

    assert history.undo_depth == 2


def test_invalid_push_is_ignored_and_logged(history, caplog):
    history.push(Insert(TextRange(0, 1), "a"))
    history.undo()

    with caplog.at_level(logging.WARNING, logger="edithistory"):
        history.push({"type": "insert", "text": "x"})  # type: ignore[arg-type]

    assert "invalid operation" in caplog.text
    assert history.undo_depth == 0
    assert history.redo_depth == 1


def test_bare_base_operation_push_is_ignored(history, caplog):
    with caplog.at_level(logging.WARNING, logger="edithistory"):
        history.push(Operation(TextRange(0, 0)))

    assert "invalid operation" in caplog.text
    assert history.undo_depth == 0


def test_from_config_reads_history_table():
    history = History.from_config({"history": {"max_size": 3, "insert_merge_gap": 1, "coalesce": False}})

    assert history.max_size == 3
    assert history.insert_merge_gap == 1
    assert history.coalesce is False
