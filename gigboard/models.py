"""
Gig domain types.

A Gig is stored as the JSON form of `to_dict()`; `from_dict()` is its inverse.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class GigStatus(Enum):
    OPEN = "Open"
    ASSIGNED = "Assigned"
    APPROVED = "Approved"
    # Declared but never entered or left by any operation.
    DISPUTED = "Disputed"


@dataclass(frozen=True)
class GigPayload:
    """Fields supplied by the employer when posting or updating a gig."""

    title: str
    description: str
    deadline: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GigPayload":
        return cls(
            title=data["title"],
            description=data.get("description", ""),
            deadline=int(data["deadline"]),
        )


@dataclass(frozen=True)
class Gig:
    """
    A task listing.

    `id`, `employer` and `created_at` never change after creation. The status
    has no default: the post operation sets GigStatus.OPEN explicitly.
    """

    id: int
    title: str
    description: str
    employer: str
    deadline: int
    status: GigStatus
    created_at: int
    assigned_to: Optional[str] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Gig":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            employer=data["employer"],
            deadline=data["deadline"],
            status=GigStatus(data["status"]),
            created_at=data["created_at"],
            assigned_to=data.get("assigned_to"),
            updated_at=data.get("updated_at"),
        )
