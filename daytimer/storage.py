"""
Key-value storage the day store persists into.

Both implementations are synchronous and atomic per key: get() returns the
last value set() wrote, or None.
"""

import logging
from typing import Dict, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .models import KeyValue

logger = logging.getLogger(__name__)


class KeyValueStorage:
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class SQLStorage(KeyValueStorage):
    """Key-value rows in the key_values table, one commit per write."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(KeyValue, key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.db.get(KeyValue, key)
        if row is None:
            self.db.add(KeyValue(key=key, value=value))
        else:
            row.value = value
        self.db.commit()
        logger.debug(f"Stored {len(value)} bytes under {key!r}")


def get_storage(db: Session = Depends(get_db)) -> KeyValueStorage:
    return SQLStorage(db)
