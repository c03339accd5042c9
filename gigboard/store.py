"""
Durable ordered map from gig id to Gig.

Records are stored as UTF-8 JSON bytes and must fit MAX_RECORD_SIZE.
"""

import json
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .database import GigRow
from .errors import RecordTooLarge, StorageFault, UnencodableRecord
from .models import Gig

MAX_RECORD_SIZE = 2048


def encode_gig(gig: Gig) -> bytes:
    """Serialize a gig, refusing anything over MAX_RECORD_SIZE or not valid UTF-8."""
    text = json.dumps(gig.to_dict(), ensure_ascii=False, separators=(",", ":"))
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnencodableRecord(f"Gig {gig.id} holds text that is not valid UTF-8") from e
    if len(data) > MAX_RECORD_SIZE:
        raise RecordTooLarge(len(data), MAX_RECORD_SIZE)
    return data


def decode_gig(data: bytes) -> Gig:
    return Gig.from_dict(json.loads(data.decode("utf-8")))


class GigStore:
    """Insert, point lookup, full scan and delete over the gigs table."""

    def __init__(self, session):
        self.session = session

    def insert(self, gig: Gig) -> None:
        """Upsert `gig` under its id. Nothing is written if it is too large."""
        data = encode_gig(gig)
        try:
            self.session.merge(GigRow(id=gig.id, data=data))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot write gig {gig.id}: {e}") from e

    def get(self, gig_id: int) -> Optional[Gig]:
        try:
            row = self.session.get(GigRow, gig_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot read gig {gig_id}: {e}") from e
        if row is None:
            return None
        return decode_gig(row.data)

    def list(self) -> List[Gig]:
        """All gigs in ascending id order."""
        try:
            rows = self.session.query(GigRow).order_by(GigRow.id).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot list gigs: {e}") from e
        return [decode_gig(row.data) for row in rows]

    def remove(self, gig_id: int) -> None:
        try:
            row = self.session.get(GigRow, gig_id)
            if row is not None:
                self.session.delete(row)
                self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot remove gig {gig_id}: {e}") from e

    def count(self) -> int:
        try:
            return self.session.query(GigRow).count()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageFault(f"Cannot count gigs: {e}") from e
