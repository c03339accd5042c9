"""
Monotonic gig id allocation backed by a persisted counter cell.
"""

from sqlalchemy.exc import SQLAlchemyError

from .database import CounterCell
from .errors import StorageFault

GIG_ID_COUNTER = "gig_id"


class IdAllocator:
    """
    Issues strictly increasing ids from a counter row.

    The counter starts at 0 and every allocation commits before returning, so
    an id is never issued twice, including across restarts and after the gig
    holding it is deleted. Not safe for concurrent writers.
    """

    def __init__(self, session, name: str = GIG_ID_COUNTER):
        self.session = session
        self.name = name

    def _cell(self) -> CounterCell:
        cell = self.session.get(CounterCell, self.name)
        if cell is None:
            cell = CounterCell(name=self.name, value=0)
            self.session.add(cell)
        return cell

    def current(self) -> int:
        """Return the last issued id, 0 if none was issued yet."""
        try:
            cell = self.session.get(CounterCell, self.name)
        except SQLAlchemyError as e:
            raise StorageFault(f"Cannot read counter '{self.name}': {e}") from e
        return cell.value if cell is not None else 0

    def next(self) -> int:
        """Increment the counter and return the new value."""
        try:
            cell = self._cell()
            cell.value = cell.value + 1
            self.session.commit()
            return cell.value
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot increment counter '{self.name}': {e}") from e
