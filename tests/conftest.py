import os

# keep the app off disk and without a background thread while testing
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENABLE_TICKER", "false")

from datetime import datetime

import pytest

from daytimer.storage import MemoryStorage


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 3, 14, 9, 30, 15)


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()
