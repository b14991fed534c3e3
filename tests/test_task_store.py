# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from task_tracker.errors import StorageUnavailable, StorageWriteError
from task_tracker.tasks.task_store import TaskStore


def test_initialize_creates_file_and_schema(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "tasks.db"
    with TaskStore(db) as store:
        assert store.query_all() == []

    assert db.exists()
    conn = sqlite3.connect(db)
    try:
        cols = {row[1] for row in conn.execute("PRAGMA table_info(tasks)")}
    finally:
        conn.close()
    assert cols == {"id", "title", "priority", "due_date", "completed", "created_at", "completed_at"}


def test_insert_defaults_and_read_back(store: TaskStore) -> None:
    tid = store.insert("Buy milk")
    task = store.get(tid)
    assert task is not None
    assert task.title == "Buy milk"
    assert task.priority == 1
    assert task.completed is False
    assert task.completed_at is None
    assert task.due_date is None
    assert task.created_at is not None and task.created_at > 0


def test_ids_increase_monotonically(store: TaskStore) -> None:
    ids = [store.insert(f"t{i}", 2) for i in range(3)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 3


def test_query_all_orders_by_priority_then_newest(store: TaskStore) -> None:
    a = store.insert("A", 1)
    b = store.insert("B", 3)
    c = store.insert("C", 3)

    assert [t.id for t in store.query_all()] == [c, b, a]


def test_query_all_is_listing_view(store: TaskStore) -> None:
    store.insert("Write report", 3)
    (task,) = store.query_all()
    # timestamps are not part of the listing view
    assert task.created_at is None
    assert task.completed_at is None


def test_update_completion_is_one_way_and_keeps_first_timestamp(store: TaskStore) -> None:
    tid = store.insert("Fix bug", 5)

    store.update_completion(tid)
    first = store.get(tid)
    assert first is not None
    assert first.completed is True
    assert first.completed_at is not None

    store.update_completion(tid)
    second = store.get(tid)
    assert second is not None
    assert second.completed is True
    assert second.completed_at == first.completed_at


def test_update_completion_unknown_id_is_silent(store: TaskStore) -> None:
    store.insert("only one")
    store.update_completion(999)
    assert [t.completed for t in store.query_all()] == [False]


def test_aggregate_counts_empty(store: TaskStore) -> None:
    counts = store.aggregate_counts()
    assert counts.total == 0
    assert counts.completed == 0
    assert counts.by_priority == {}


def test_aggregate_counts_groups_by_priority(store: TaskStore) -> None:
    ids = [store.insert(f"t{p}", p) for p in (5, 1, 3, 1)]
    store.update_completion(ids[0])

    counts = store.aggregate_counts()
    assert counts.total == 4
    assert counts.completed == 1
    assert counts.by_priority == {1: 2, 3: 1, 5: 1}
    assert list(counts.by_priority) == [1, 3, 5]


def test_out_of_range_priority_is_stored_as_is(store: TaskStore) -> None:
    tid = store.insert("odd", 9)
    task = store.get(tid)
    assert task is not None and task.priority == 9


def test_failed_insert_leaves_no_row(store: TaskStore) -> None:
    with pytest.raises(StorageWriteError):
        store.insert(None)  # type: ignore[arg-type]
    assert store.aggregate_counts().total == 0


def test_unopenable_path_raises_unavailable(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", "utf-8")

    with pytest.raises(StorageUnavailable):
        TaskStore(blocker / "tasks.db").initialize()


def test_use_before_initialize_raises_unavailable(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.db")
    with pytest.raises(StorageUnavailable):
        store.query_all()


def test_reopen_keeps_rows_and_migrates_old_schema(tmp_path: Path) -> None:
    db = tmp_path / "old.db"
    conn = sqlite3.connect(db)
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT NOT NULL)")
    conn.execute("INSERT INTO tasks (title) VALUES ('legacy')")
    conn.commit()
    conn.close()

    with TaskStore(db) as store:
        (task,) = store.query_all()
        assert task.title == "legacy"
        assert task.priority == 1
        assert task.completed is False
        new_id = store.insert("fresh", 2)
        assert new_id > task.id


_LEGACY_SCHEMA = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    priority INTEGER DEFAULT 1,
    due_date DATETIME,
    completed BOOLEAN DEFAULT FALSE,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    completed_at DATETIME
)
"""


def test_text_timestamps_from_older_files_are_converted(tmp_path: Path) -> None:
    db = tmp_path / "legacy.db"
    conn = sqlite3.connect(db)
    conn.execute(_LEGACY_SCHEMA)
    conn.execute("INSERT INTO tasks (title, priority) VALUES ('old', 3)")
    conn.execute(
        "INSERT INTO tasks (title, priority, completed, created_at, completed_at) "
        "VALUES ('done', 1, TRUE, '2024-01-02 03:04:05', '2024-01-03 00:00:00')"
    )
    conn.commit()
    conn.close()

    with TaskStore(db) as store:
        new_id = store.insert("new", 3)
        assert [t.title for t in store.query_all()] == ["new", "old", "done"]

        old = store.get(1)
        assert old is not None
        assert isinstance(old.created_at, float)
        assert old.created_at <= store.get(new_id).created_at  # type: ignore[union-attr]

        done = store.get(2)
        assert done is not None
        assert done.completed is True
        assert done.created_at == 1704164645.0
        assert done.completed_at == 1704240000.0
