# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..errors import StorageUnavailable, StorageWriteError
from .task_models import DEFAULT_PRIORITY, Task, TaskCounts

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Connection lifetime:
    - one connection per process, opened by initialize() and released by close()
    - use it as a context manager so the connection is released on error paths too
    """

    def __init__(self, db_path: str | Path = "tasks.db") -> None:
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> TaskStore:
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- connection lifecycle ----

    def initialize(self) -> None:
        """Open (creating if necessary) the database file and ensure the schema exists."""
        if self._conn is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except (OSError, sqlite3.Error) as exc:
            raise StorageUnavailable(f"cannot open {self._db_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        try:
            self._ensure_schema(conn)
        except sqlite3.Error as exc:
            conn.close()
            raise StorageUnavailable(f"cannot initialize {self._db_path}: {exc}") from exc

        self._conn = conn
        logger.debug("TaskStore ready db=%s", self._db_path)

    def close(self) -> None:
        if self._conn is None:
            return
        with contextlib.suppress(sqlite3.Error):
            self._conn.close()
        self._conn = None

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageUnavailable(f"store {self._db_path} is not initialized")
        return self._conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        cur = conn.cursor()

        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                priority INTEGER DEFAULT 1,
                due_date REAL,
                completed BOOLEAN NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                completed_at REAL
            )
            """
        )

        # Migrations (safe): add missing columns.
        cur.execute("PRAGMA table_info(tasks)")
        cols = {row["name"] for row in cur.fetchall()}

        def add_col(name: str, decl: str) -> None:
            if name in cols:
                return
            cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
            logger.info("TaskStore migration: added column %s", name)

        add_col("priority", "INTEGER DEFAULT 1")
        add_col("due_date", "REAL")
        add_col("completed", "BOOLEAN NOT NULL DEFAULT 0")
        add_col("created_at", "REAL NOT NULL DEFAULT 0")
        add_col("completed_at", "REAL")

        # Older files hold CURRENT_TIMESTAMP text (UTC); store epoch seconds so ordering stays numeric.
        cur.execute(
            """
            UPDATE tasks
            SET created_at = COALESCE(CAST(strftime('%s', created_at) AS REAL), 0)
            WHERE typeof(created_at) = 'text'
            """
        )
        if cur.rowcount > 0:
            logger.info("TaskStore migration: converted created_at on %s rows", cur.rowcount)
        cur.execute(
            """
            UPDATE tasks
            SET completed_at = CAST(strftime('%s', completed_at) AS REAL)
            WHERE typeof(completed_at) = 'text'
            """
        )
        cur.execute(
            """
            UPDATE tasks
            SET due_date = CAST(strftime('%s', due_date) AS REAL)
            WHERE typeof(due_date) = 'text'
            """
        )

        cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_order ON tasks(priority, created_at)")

        conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        keys = row.keys()

        def opt_float(name: str) -> float | None:
            if name not in keys or row[name] is None:
                return None
            return float(row[name])

        return Task(
            id=int(row["id"]),
            title=str(row["title"]),
            priority=int(row["priority"]) if row["priority"] is not None else DEFAULT_PRIORITY,
            completed=bool(row["completed"]),
            created_at=opt_float("created_at"),
            completed_at=opt_float("completed_at"),
            due_date=opt_float("due_date"),
        )

    # ---- public API ----

    def insert(self, title: str, priority: int = DEFAULT_PRIORITY) -> int:
        conn = self._get_conn()
        now = time.time()
        try:
            with conn:
                cur = conn.execute(
                    "INSERT INTO tasks (title, priority, created_at) VALUES (?, ?, ?)",
                    (title, int(priority), now),
                )
        except sqlite3.Error as exc:
            raise StorageWriteError(f"insert failed: {exc}") from exc

        rowid = cur.lastrowid
        if rowid is None:
            raise StorageWriteError("SQLite did not return lastrowid for tasks insert")
        task_id = int(rowid)
        logger.debug("Task added id=%s priority=%s", task_id, priority)
        return task_id

    def query_all(self) -> list[Task]:
        """
        All tasks, highest priority first, newest first within a priority.

        id breaks ties between rows created within the same clock tick.
        """
        conn = self._get_conn()
        try:
            rows = conn.execute(
                """
                SELECT id, title, priority, completed
                FROM tasks
                ORDER BY priority DESC, created_at DESC, id DESC
                """
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"query failed: {exc}") from exc
        return [self._row_to_task(r) for r in rows]

    def get(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"query failed: {exc}") from exc
        return self._row_to_task(row) if row else None

    def update_completion(self, task_id: int) -> None:
        """
        Mark a task completed.

        Only an open task is touched, so completed_at keeps its first value.
        An unknown id is a silent no-op (no row-count check).
        """
        conn = self._get_conn()
        now = time.time()
        try:
            with conn:
                cur = conn.execute(
                    """
                    UPDATE tasks
                    SET completed = 1, completed_at = ?
                    WHERE id = ? AND completed = 0
                    """,
                    (now, int(task_id)),
                )
        except sqlite3.Error as exc:
            raise StorageWriteError(f"update failed: {exc}") from exc
        logger.debug("Task completion id=%s rows=%s", task_id, cur.rowcount)

    def aggregate_counts(self) -> TaskCounts:
        conn = self._get_conn()
        try:
            total, completed = conn.execute(
                """
                SELECT COUNT(*), COALESCE(SUM(CASE WHEN completed THEN 1 ELSE 0 END), 0)
                FROM tasks
                """
            ).fetchone()
            rows = conn.execute(
                """
                SELECT priority, COUNT(*) AS n
                FROM tasks
                GROUP BY priority
                ORDER BY priority
                """
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"aggregate query failed: {exc}") from exc

        by_priority: dict[int, int] = {}
        for r in rows:
            prio = int(r["priority"]) if r["priority"] is not None else DEFAULT_PRIORITY
            by_priority[prio] = by_priority.get(prio, 0) + int(r["n"])
        by_priority = dict(sorted(by_priority.items()))
        return TaskCounts(total=int(total), completed=int(completed), by_priority=by_priority)
