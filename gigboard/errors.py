"""
Error taxonomy for gig operations.

Every failure the core reports is a GigError subclass. Guard failures are
raised to the caller as-is and never retried here.
"""


class GigError(Exception):
    """Base class for all gig operation failures."""
    pass


class NotFound(GigError):
    """No gig stored under the requested id."""
    pass


class Unauthorized(GigError):
    """Caller is not the gig's employer."""
    pass


class InvalidState(GigError):
    """Operation is not permitted in the gig's current status."""
    pass


class RecordTooLarge(GigError):
    """Serialized record exceeds the per-record byte budget."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Record is {size} bytes, limit is {limit} bytes")
        self.size = size
        self.limit = limit


class StorageFault(GigError):
    """Persistence substrate is unavailable. Not recoverable by the caller."""
    pass


class UnencodableRecord(GigError):
    """Record text cannot be stored as UTF-8, e.g. it holds a lone surrogate."""
    pass
