"""Aggregate counts for the admin NOC dashboard."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from hostel_noc.domain.models.noc_request import NocRequest, NocStatus


@dataclass(frozen=True)
class NocStatistics:
    """Request counts by status plus the number of deactivated students.

    Attributes:
        total: Number of requests.
        by_status: Count per status; every status is present, zero or not.
        deactivated_students: Distinct students deactivated through approval.
    """

    total: int
    by_status: dict[NocStatus, int] = field(default_factory=dict)
    deactivated_students: int = 0

    @classmethod
    def from_requests(cls, requests: Iterable[NocRequest]) -> NocStatistics:
        by_status = {status: 0 for status in NocStatus}
        deactivated: set[str] = set()
        total = 0
        for request in requests:
            total += 1
            by_status[request.status] += 1
            if request.student_deactivated:
                deactivated.add(request.student_id)
        return cls(
            total=total,
            by_status=by_status,
            deactivated_students=len(deactivated),
        )
