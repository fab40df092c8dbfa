from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from chefood.db import init_db, make_engine
from chefood.models.db_models import StoredValue


class KeyValueStorage(Protocol):
    """String key/value store the session persists itself into."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string or ``None`` if the key is absent."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""

    def keys(self) -> Iterable[str]:
        """Return every stored key."""


class MemoryStorage:
    """Process-local storage, used by tests and short-lived scripts."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._items)


class SQLStorage:
    """Storage persisted in a SQL database, one ``StoredValue`` row per key."""

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self._engine = engine or make_engine()
        init_db(self._engine)

    @classmethod
    def from_url(cls, url: str) -> "SQLStorage":
        return cls(make_engine(url))

    def get_item(self, key: str) -> Optional[str]:
        with Session(self._engine) as session:
            row = session.get(StoredValue, key)
            return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        with Session(self._engine) as session:
            row = session.get(StoredValue, key)
            if row is None:
                row = StoredValue(key=key, value=value)
            else:
                row.value = value
                row.updated_at = datetime.now(timezone.utc)
            session.add(row)
            session.commit()

    def remove_item(self, key: str) -> None:
        with Session(self._engine) as session:
            row = session.get(StoredValue, key)
            if row is not None:
                session.delete(row)
                session.commit()

    def keys(self) -> Iterable[str]:
        with Session(self._engine) as session:
            return list(session.exec(select(StoredValue.key)).all())


__all__ = ["KeyValueStorage", "MemoryStorage", "SQLStorage"]
