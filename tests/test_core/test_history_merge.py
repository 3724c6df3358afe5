"""History Merge Tests
======================

Merge-on-push behaviour of the History class: which consecutive pushes collapse
into the top entry, and which start a new undo step.
"""

from edithistory.core.History import History
from edithistory.core.Operation import Delete, Insert, Replace, TextRange
from tests.stubs import StubBuffer


def test_forward_typing_merges_into_one_entry(history):
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Insert(TextRange(1, 2), "b"))

    assert history.undo_depth == 1
    assert history.peek_undo() == Insert(TextRange(0, 2), "ab")


def test_backspacing_merges_into_one_entry(history):
    history.push(Delete(TextRange(4, 5), "o"))
    history.push(Delete(TextRange(3, 4), "l"))

    assert history.undo_depth == 1
    assert history.peek_undo() == Delete(TextRange(3, 5), "lo")


def test_one_unit_gap_starts_new_step_by_default(history):
    history.push(Insert(TextRange(0, 1), "("))
    history.push(Insert(TextRange(2, 3), "x"))

    assert history.undo_depth == 2


def test_one_unit_gap_stays_separate_with_configured_tolerance():
    history = History(insert_merge_gap=1)
    history.push(Insert(TextRange(0, 1), "("))
    history.push(Insert(TextRange(2, 3), "x"))

    assert history.undo_depth == 2
    assert history.peek_undo() == Insert(TextRange(2, 3), "x")


def test_gapped_typing_undoes_without_touching_skipped_text():
    """Test: Typing around an untouched unit undoes back to the original buffer."""
    buf = StubBuffer(History(insert_merge_gap=1), "Z")
    buf.move_to(0)
    buf.type("a")
    buf.move_to(2)
    buf.type("b")
    assert buf.text == "aZb"

    buf.undo()
    assert buf.text == "aZ"
    buf.undo()
    assert buf.text == "Z"

    buf.redo()
    buf.redo()
    assert buf.text == "aZb"


def test_replace_pushes_never_merge(history):
    history.push(Replace(TextRange(0, 1), "a", "b"))
    history.push(Replace(TextRange(1, 2), "c", "d"))

    assert history.undo_depth == 2


def test_merge_only_considers_top_entry(history):
    history.push(Insert(TextRange(0, 1), "a"))
    history.push(Delete(TextRange(5, 6), "z"))
    history.push(Insert(TextRange(1, 2), "b"))

    assert history.undo_depth == 3


def test_merged_entry_undoes_with_merged_inverse(history):
    for i, ch in enumerate("word"):
        history.push(Insert.at(i, ch))

    assert history.undo() == Delete(TextRange(0, 4), "word")
    assert history.redo() == Insert(TextRange(0, 4), "word")
