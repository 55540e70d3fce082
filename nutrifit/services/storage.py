"""
Durable key/value storage.

The fitness store and the client-side session cache both persist plain
strings under string keys. Two backends are provided: an in-memory dict
(tests, ephemeral clients) and a SQLAlchemy table (`storage_items`).
"""
import logging
from typing import Dict, Optional, Protocol

from sqlalchemy import create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from nutrifit.core.config import settings
from nutrifit.core.errors import StorageError
from nutrifit.models.storage_item import StorageItem

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class SqlStorage:
    """Key/value storage backed by the `storage_items` table."""

    def __init__(self, url: Optional[str] = None, engine=None):
        self.engine = engine or create_engine(url or settings.STORAGE_URL, future=True)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        try:
            StorageItem.__table__.create(bind=self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StorageError(f"Storage is unavailable: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                result = session.execute(select(StorageItem.value).where(StorageItem.key == key))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read storage key {key!r}: {e}")
            raise StorageError(f"Failed to read {key!r}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as session:
                item = session.get(StorageItem, key)
                if item is None:
                    session.add(StorageItem(key=key, value=str(value)))
                else:
                    item.value = str(value)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write storage key {key!r}: {e}")
            raise StorageError(f"Failed to write {key!r}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(StorageItem).where(StorageItem.key == key))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove {key!r}") from e

    def clear(self) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(StorageItem))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError("Failed to clear storage") from e
