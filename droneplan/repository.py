"""Storage of estates and their trees in an SQLite database."""

from __future__ import annotations

import sqlite3
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

_SCHEMA = """
CREATE TABLE IF NOT EXISTS test (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS estate (
    id_estate TEXT PRIMARY KEY,
    width INTEGER NOT NULL,
    length INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS tree (
    id_tree TEXT PRIMARY KEY,
    id_estate TEXT NOT NULL REFERENCES estate (id_estate),
    x INTEGER NOT NULL,
    y INTEGER NOT NULL,
    height INTEGER NOT NULL
);
"""


class RepositoryError(Exception):
    """A database operation failed."""


class NotFoundError(RepositoryError, LookupError):
    """The requested record does not exist."""


@dataclass(frozen=True)
class TreeRecord:
    """A stored tree."""

    id: uuid.UUID
    x: int
    y: int
    height: int


@dataclass(frozen=True)
class EstateDetail:
    """A stored estate together with its trees."""

    id: uuid.UUID
    width: int
    length: int
    trees: list[TreeRecord] = field(default_factory=list)


class RepositoryProtocol(Protocol):
    """Operations the HTTP layer needs from storage."""

    def get_test_by_id(self, test_id: str) -> str: ...

    def create_estate(self, width: int, length: int) -> uuid.UUID: ...

    def create_tree(
        self, estate_id: uuid.UUID, x: int, y: int, height: int
    ) -> uuid.UUID: ...

    def get_detail_estate(self, estate_id: uuid.UUID) -> EstateDetail: ...


def _as_uuid(value: uuid.UUID | str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise RepositoryError(f"invalid identifier: {value!r}") from exc


class Repository:
    """SQLite-backed storage; ``dsn`` is a database file path or ``:memory:``."""

    def __init__(self, dsn: str) -> None:
        self._lock = threading.Lock()
        try:
            self.db = sqlite3.connect(dsn, check_same_thread=False)
            self.db.execute("PRAGMA foreign_keys = ON")
            self.db.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise RepositoryError(str(exc)) from exc

    def __enter__(self) -> Repository:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self.db.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self.db:
                    yield self.db
            except sqlite3.Error as exc:
                raise RepositoryError(str(exc)) from exc

    def get_test_by_id(self, test_id: str) -> str:
        """Return the name stored for a test record."""
        with self._transaction() as db:
            row = db.execute("SELECT name FROM test WHERE id = ?", (test_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"no test record with id {test_id!r}")
        return row[0]

    def create_estate(self, width: int, length: int) -> uuid.UUID:
        """Store a new estate and return its identifier."""
        estate_id = uuid.uuid4()
        with self._transaction() as db:
            db.execute(
                "INSERT INTO estate (id_estate, width, length) VALUES (?, ?, ?)",
                (str(estate_id), width, length),
            )
        return estate_id

    def create_tree(
        self, estate_id: uuid.UUID | str, x: int, y: int, height: int
    ) -> uuid.UUID:
        """Store a tree on an estate and return its identifier."""
        estate_key = _as_uuid(estate_id)
        tree_id = uuid.uuid4()
        with self._transaction() as db:
            db.execute(
                "INSERT INTO tree (id_tree, id_estate, x, y, height) VALUES (?, ?, ?, ?, ?)",
                (str(tree_id), str(estate_key), x, y, height),
            )
        return tree_id

    def get_detail_estate(self, estate_id: uuid.UUID | str) -> EstateDetail:
        """Return an estate with all of its trees."""
        estate_key = str(_as_uuid(estate_id))
        with self._transaction() as db:
            row = db.execute(
                "SELECT id_estate, width, length FROM estate WHERE id_estate = ?",
                (estate_key,),
            ).fetchone()
            if row is None:
                raise NotFoundError(f"no estate with id {estate_key}")
            tree_rows = db.execute(
                "SELECT id_tree, x, y, height FROM tree WHERE id_estate = ? ORDER BY rowid",
                (estate_key,),
            ).fetchall()
        trees = [
            TreeRecord(uuid.UUID(tree_id), x, y, height)
            for tree_id, x, y, height in tree_rows
        ]
        return EstateDetail(uuid.UUID(row[0]), row[1], row[2], trees)