from __future__ import annotations

import os
from datetime import datetime

import pytest

os.environ.setdefault("APP_ENV", "testing")


@pytest.fixture
def fixed_now() -> datetime:
    # a Monday morning, UTC
    return datetime(2026, 2, 2, 8, 0, 0)
