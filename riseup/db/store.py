"""Key-value persistence of JSON documents on top of the ``stored_values`` table.

Every public method is total: storage and (de)serialization failures are
logged and turned into benign results (``None`` on load, ``False`` on
store/remove) instead of propagating to callers.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from riseup.db.models import StoredValue
from riseup.db.session import SessionLocal

LOGGER = logging.getLogger(__name__)


class KeyValueStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def store(self, key: str, value: Any) -> bool:
        """Serialize ``value`` and write it under ``key``, replacing any prior value."""
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError, RecursionError) as e:
            LOGGER.error("store %s: value is not JSON serializable: %s", key, e)
            return False

        try:
            with self._session_factory() as session:
                row = session.get(StoredValue, key)
                if row is None:
                    session.add(StoredValue(key=key, value=payload))
                else:
                    row.value = payload
                session.commit()
        except SQLAlchemyError as e:
            LOGGER.error("store %s failed: %s", key, e)
            return False
        return True

    def load(self, key: str) -> Optional[Any]:
        """Return the value stored at ``key``, or None if absent or unreadable."""
        try:
            with self._session_factory() as session:
                row = session.get(StoredValue, key)
                payload = row.value if row is not None else None
        except SQLAlchemyError as e:
            LOGGER.error("load %s failed: %s", key, e)
            return None

        if not payload:
            return None
        try:
            return json.loads(payload)
        except (ValueError, RecursionError) as e:
            LOGGER.warning("load %s: stored value is not readable JSON: %s", key, e)
            return None

    def remove(self, key: str) -> bool:
        """Delete ``key``. Removing a missing key is a no-op."""
        try:
            with self._session_factory() as session:
                session.query(StoredValue).filter(StoredValue.key == key).delete(synchronize_session=False)
                session.commit()
        except SQLAlchemyError as e:
            LOGGER.error("remove %s failed: %s", key, e)
            return False
        return True


__all__ = ["KeyValueStore"]
