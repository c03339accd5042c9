"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from gigboard.logger import get_logger, reset_logger
from gigboard.models import GigPayload
from gigboard.service import open_service


class FakeClock:
    """Deterministic clock: every call advances by one second in ns."""

    def __init__(self, start: int = 1_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1_000_000_000
        return self.now


@pytest.fixture(autouse=True)
def quiet_logger():
    """Silence the global logger so tests write no files or console output."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "gigs.db"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(db_path, clock):
    """Service over a fresh temporary database."""
    svc = open_service(db_path, clock=clock)
    yield svc
    svc.store.session.close()


@pytest.fixture
def payload() -> GigPayload:
    return GigPayload(title="Fix bug", description="desc", deadline=1000)


@pytest.fixture
def valid_payload_dict() -> Dict[str, Any]:
    return {"title": "Fix bug", "description": "desc", "deadline": 1000}


@pytest.fixture
def payload_file(tmp_path, valid_payload_dict) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(valid_payload_dict))
    return path
