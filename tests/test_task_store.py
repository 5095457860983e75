# tests/test_task_store.py

from __future__ import annotations

import pytest

from tasklist.tasks.task_codec import LoadResult
from tasklist.tasks.task_models import SortKey, Task
from tasklist.tasks.task_store import TaskStore


def _ids(store: TaskStore) -> list[int]:
    return [t.id for t in store.list()]


def test_add_assigns_strictly_increasing_ids() -> None:
    store = TaskStore()
    ids = [store.add(f"task {i}") for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert store.next_id == 6
    assert len(set(ids)) == len(ids)


def test_add_accepts_empty_description() -> None:
    store = TaskStore()
    task_id = store.add("")
    task = store.get(task_id)
    assert task is not None
    assert task.description == ""
    assert task.completed is False
    assert task.deadline is None


def test_add_timed_shares_id_sequence_and_undo_stack() -> None:
    store = TaskStore()
    a = store.add("plain")
    b = store.add_timed("report", "Friday")
    assert b == a + 1

    task = store.get(b)
    assert task is not None and task.is_timed
    assert task.deadline == "Friday"

    assert store.undo() == b
    assert _ids(store) == [a]


def test_complete_is_idempotent() -> None:
    store = TaskStore()
    task_id = store.add("Buy milk")
    assert store.complete(task_id) is True
    assert store.complete(task_id) is True
    task = store.get(task_id)
    assert task is not None and task.completed is True


def test_complete_unknown_id_changes_nothing() -> None:
    store = TaskStore()
    store.add("a")
    before = [(t.id, t.completed) for t in store.list()]
    assert store.complete(99) is False
    assert [(t.id, t.completed) for t in store.list()] == before
    assert len(store) == 1


def test_undo_removes_last_addition_then_reports_empty() -> None:
    store = TaskStore()
    store.add("keep")
    last = store.add("drop")

    assert store.undo() == last
    assert _ids(store) == [1]
    assert store.undo() == 1
    assert store.list() == ()
    assert store.undo() is None


def test_undo_on_empty_store_is_noop() -> None:
    store = TaskStore()
    assert store.undo() is None
    assert store.undo_depth == 0


def test_undo_ignores_completed_flag() -> None:
    store = TaskStore()
    task_id = store.add("done already")
    store.complete(task_id)
    assert store.undo() == task_id
    assert store.get(task_id) is None


def test_undo_does_not_reuse_ids() -> None:
    store = TaskStore()
    store.add("a")
    store.undo()
    assert store.add("b") == 2


def test_sort_and_complete_do_not_touch_undo_stack() -> None:
    store = TaskStore()
    store.add("a")
    store.add("b")
    depth = store.undo_depth
    store.complete(1)
    store.sort(SortKey.STATUS)
    assert store.undo_depth == depth
    # Undo still targets the latest addition regardless of the new position.
    assert store.undo() == 2


def test_sort_by_status_is_stable() -> None:
    store = TaskStore()
    for name in ("a", "b", "c", "d", "e"):
        store.add(name)
    store.complete(2)
    store.complete(4)

    store.sort(SortKey.STATUS)

    assert [t.description for t in store.list()] == ["a", "c", "e", "b", "d"]


def test_sort_by_id_restores_insertion_order() -> None:
    store = TaskStore()
    for name in ("a", "b", "c"):
        store.add(name)
    store.complete(1)
    store.sort(SortKey.STATUS)
    assert _ids(store) == [2, 3, 1]

    store.sort(SortKey.ID)
    assert _ids(store) == [1, 2, 3]


def test_list_is_a_snapshot() -> None:
    store = TaskStore()
    store.add("a")
    snapshot = store.list()
    store.add("b")
    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1
    assert len(store.list()) == 2


def test_from_load_result_rebuilds_counter_without_undo_history() -> None:
    result = LoadResult(tasks=[Task(id=3, description="x"), Task(id=7, description="y", completed=True)])
    store = TaskStore.from_load_result(result)

    assert store.next_id == 8
    assert store.undo_depth == 0
    assert store.undo() is None
    assert store.add("z") == 8


def test_from_missing_file_starts_at_one() -> None:
    store = TaskStore.from_load_result(None)
    assert len(store) == 0
    assert store.next_id == 1


def test_next_id_never_below_loaded_ids() -> None:
    store = TaskStore([Task(id=5, description="x")], next_id=2)
    assert store.next_id == 6


def test_undo_with_missing_task_consumes_entry(caplog: pytest.LogCaptureFixture) -> None:
    store = TaskStore()
    store.add("a")
    store.add("b")
    # Simulate an inconsistency: the task vanished behind the store's back.
    store._tasks.pop()

    assert store.undo() is None
    assert store.undo_depth == 1
    assert "not in the list" in caplog.text
    assert store.undo() == 1


def test_sort_key_parse() -> None:
    assert SortKey.parse(None) is SortKey.ID
    assert SortKey.parse(" Status ") is SortKey.STATUS
    with pytest.raises(ValueError):
        SortKey.parse("priority")
