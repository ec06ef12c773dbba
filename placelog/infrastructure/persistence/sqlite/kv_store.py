from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from placelog.core.errors import PersistenceError
from placelog.core.ports import KeyValueStore

from .db import make_engine

UPSERT_SQL = """
INSERT INTO kv_items (key, value, updated_at)
VALUES (:key, :value, datetime('now'))
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = datetime('now')
"""

SELECT_ONE_SQL = "SELECT value FROM kv_items WHERE key=:key;"

DELETE_SQL = "DELETE FROM kv_items WHERE key=:key;"


class SQLiteKeyValueStore(KeyValueStore):
    """String-keyed slots in a local SQLite file, the CLI's localStorage."""

    def __init__(self, path: str = "places.db"):
        self.engine = make_engine(path)

    def set_item(self, key: str, value: str) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(text(UPSERT_SQL), {"key": key, "value": value})
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to write slot {key!r}") from exc

    def get_item(self, key: str) -> str | None:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(text(SELECT_ONE_SQL), {"key": key}).one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to read slot {key!r}") from exc
        return row[0] if row else None

    def remove_item(self, key: str) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(text(DELETE_SQL), {"key": key})
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to remove slot {key!r}") from exc

    def close(self):
        self.engine.dispose()
