"""Root conftest — shared test configuration."""

import os
from datetime import datetime

import pytest

# Human-readable logs in test output
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-01-20 14:30 (renders as 'Jan 20, 2:30 PM')."""
    return lambda: datetime(2024, 1, 20, 14, 30)
