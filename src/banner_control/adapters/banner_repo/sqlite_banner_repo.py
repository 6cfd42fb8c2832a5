# src/banner_control/adapters/banner_repo/sqlite_banner_repo.py
import logging
import sqlite3
from contextlib import closing
from datetime import datetime
from typing import Any, List, Optional, Sequence
from ...domain.models import Banner
from ...errors import DataAccessError
from ...ports.banner_repository import BannerRepository
from ...services.normalize.timestamps import to_storage_text, truncate_to_seconds

_CREATE_SQL = """
CREATE TABLE IF NOT EXISTS banner (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    url        TEXT NOT NULL,
    start_time TEXT NOT NULL,
    end_time   TEXT NOT NULL
)
"""
_INSERT_SQL = "INSERT INTO banner (url, start_time, end_time) VALUES (?, ?, ?)"
_DELETE_SQL = "DELETE FROM banner WHERE id = ?"
_SELECT_ONE_SQL = "SELECT id, url, start_time, end_time FROM banner WHERE id = ?"
_SELECT_ALL_SQL = "SELECT id, url, start_time, end_time FROM banner ORDER BY id"

class SqliteBannerRepository(BannerRepository):
    """
    Opens a fresh connection for every statement and closes it on every exit path.
    The path must name a file: ":memory:" would lose the table between calls.
    """
    def __init__(self, path: str):
        self._path = path

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> List[tuple]:
        logging.debug("sqlite path=%s sql=%s", self._path, " ".join(sql.split()))
        try:
            with closing(sqlite3.connect(self._path)) as con:
                with con:
                    return con.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise DataAccessError(f"sqlite statement failed: {e}") from e

    @staticmethod
    def _to_banner(row: tuple) -> Banner:
        return Banner(
            banner_id=int(row[0]),
            url=row[1],
            start_time=truncate_to_seconds(row[2]),
            end_time=truncate_to_seconds(row[3]),
        )

    def create_table_if_absent(self) -> None:
        self._execute(_CREATE_SQL)

    def insert(self, url: str, start_utc: datetime, end_utc: datetime) -> None:
        self._execute(_INSERT_SQL, (url, to_storage_text(start_utc), to_storage_text(end_utc)))

    def delete_by_id(self, banner_id: int) -> None:
        self._execute(_DELETE_SQL, (banner_id,))

    def select_by_id(self, banner_id: int) -> Optional[Banner]:
        rows = self._execute(_SELECT_ONE_SQL, (banner_id,))
        return self._to_banner(rows[0]) if rows else None

    def select_all(self) -> List[Banner]:
        return [self._to_banner(r) for r in self._execute(_SELECT_ALL_SQL)]
