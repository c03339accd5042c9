"""
Tests for the persisted id allocator.
"""

import pytest
from sqlalchemy.exc import OperationalError

from gigboard.allocator import IdAllocator
from gigboard.database import init_database, get_session
from gigboard.errors import StorageFault


@pytest.fixture
def session(db_path):
    init_database(db_path)
    s = get_session(db_path)
    yield s
    s.close()


class TestIdAllocator:

    def test_first_id_is_one(self, session):
        assert IdAllocator(session).next() == 1

    def test_ids_strictly_increase(self, session):
        allocator = IdAllocator(session)
        ids = [allocator.next() for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_current_does_not_allocate(self, session):
        allocator = IdAllocator(session)
        assert allocator.current() == 0
        allocator.next()
        assert allocator.current() == 1
        assert allocator.current() == 1

    def test_counter_survives_restart(self, db_path, session):
        """A new session on the same file continues where the last stopped."""
        IdAllocator(session).next()
        IdAllocator(session).next()
        session.close()

        reopened = get_session(db_path)
        try:
            assert IdAllocator(reopened).next() == 3
        finally:
            reopened.close()

    def test_named_counters_are_independent(self, session):
        a = IdAllocator(session, name="a")
        b = IdAllocator(session, name="b")
        a.next()
        a.next()
        assert b.next() == 1

    def test_substrate_failure_raises_storage_fault(self, session, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(session, "commit", broken_commit)

        with pytest.raises(StorageFault):
            IdAllocator(session).next()
