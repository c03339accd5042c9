"""
Gig operations: post, assign, approve, update, delete, get and list.

Every mutating operation follows the same order: look the gig up, check the
caller against its employer, check the status guard, then stamp `updated_at`
and write the whole record back under the same id. A failure at any step
leaves the stored record untouched.
"""

import functools
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional

from .allocator import IdAllocator
from .database import get_session, init_database
from .errors import GigError, InvalidState, NotFound, Unauthorized
from .logger import StructuredLogger, get_logger
from .models import Gig, GigPayload, GigStatus
from .store import GigStore, encode_gig

DELETED_MESSAGE = "Gig deleted successfully"


def _tracked(operation: str) -> Callable:
    """Record attempt/success/failure metrics for a service method."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            self.logger.record_attempt(operation)
            try:
                result = func(self, *args, **kwargs)
            except GigError as e:
                self.logger.record_failure(operation, type(e).__name__)
                self.logger.warning(
                    f"{operation} failed: {e}",
                    operation=operation,
                    error_type=type(e).__name__,
                )
                raise
            self.logger.record_success(operation)
            return result
        return wrapper
    return decorator


class GigService:
    """
    Owns the id allocator, the gig store and the clock.

    Args:
        store: Gig store
        allocator: Id allocator, only used by post
        clock: Zero-argument callable returning the current time (ns)
        logger: Logger for operation events and metrics (default: global)
    """

    def __init__(
        self,
        store: GigStore,
        allocator: IdAllocator,
        clock: Callable[[], int] = time.time_ns,
        logger: Optional[StructuredLogger] = None,
    ):
        self.store = store
        self.allocator = allocator
        self.clock = clock
        self.logger = logger if logger is not None else get_logger()

    def _owned(self, caller: str, gig_id: int, action: str) -> Gig:
        gig = self.store.get(gig_id)
        if gig is None:
            raise NotFound("Gig not found")
        if gig.employer != caller:
            raise Unauthorized(f"Only the employer can {action} this gig")
        return gig

    def _save(self, gig: Gig) -> Gig:
        gig = replace(gig, updated_at=self.clock())
        self.store.insert(gig)
        return gig

    @_tracked("post")
    def post(self, caller: str, payload: GigPayload) -> Gig:
        """Create an Open gig owned by `caller` under a freshly allocated id."""
        if not caller:
            raise Unauthorized("A caller identity is required to post a gig")
        draft = Gig(
            id=self.allocator.current() + 1,
            title=payload.title,
            description=payload.description,
            employer=caller,
            deadline=payload.deadline,
            status=GigStatus.OPEN,
            created_at=self.clock(),
        )
        # Reject unstorable records before an id is spent on them
        encode_gig(draft)
        gig = replace(draft, id=self.allocator.next())
        self.store.insert(gig)
        self.logger.info("Gig posted", gig_id=gig.id, employer=caller)
        return gig

    @_tracked("assign")
    def assign(self, caller: str, gig_id: int, worker: str) -> Gig:
        gig = self._owned(caller, gig_id, "assign")
        if gig.status != GigStatus.OPEN:
            raise InvalidState("Gig is not open for assignment")
        gig = self._save(replace(gig, assigned_to=worker, status=GigStatus.ASSIGNED))
        self.logger.info("Gig assigned", gig_id=gig_id, worker=worker)
        return gig

    @_tracked("approve")
    def approve(self, caller: str, gig_id: int) -> Gig:
        """
        Mark a gig Approved.

        There is no status guard: approving an Approved or Disputed gig
        succeeds and only refreshes `updated_at`.
        """
        gig = self._owned(caller, gig_id, "approve")
        gig = self._save(replace(gig, status=GigStatus.APPROVED))
        self.logger.info("Gig approved", gig_id=gig_id)
        return gig

    @_tracked("update")
    def update(self, caller: str, gig_id: int, payload: GigPayload) -> Gig:
        gig = self._owned(caller, gig_id, "update")
        if gig.status == GigStatus.APPROVED:
            raise InvalidState("Approved gigs cannot be updated")
        gig = self._save(replace(
            gig,
            title=payload.title,
            description=payload.description,
            deadline=payload.deadline,
        ))
        self.logger.info("Gig updated", gig_id=gig_id)
        return gig

    @_tracked("delete")
    def delete(self, caller: str, gig_id: int) -> str:
        self._owned(caller, gig_id, "delete")
        self.store.remove(gig_id)
        self.logger.info("Gig deleted", gig_id=gig_id)
        return DELETED_MESSAGE

    def get(self, gig_id: int) -> Optional[Gig]:
        return self.store.get(gig_id)

    def list(self) -> List[Gig]:
        return self.store.list()


def open_service(
    db_path: Path,
    clock: Callable[[], int] = time.time_ns,
    logger: Optional[StructuredLogger] = None,
) -> GigService:
    """
    Initialize the database at `db_path` and bind a service to one session.

    Raises:
        StorageFault: If the database cannot be initialized
    """
    init_database(db_path)
    session = get_session(db_path)
    return GigService(GigStore(session), IdAllocator(session), clock=clock, logger=logger)
