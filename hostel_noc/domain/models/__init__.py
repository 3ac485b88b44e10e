"""Domain models for the NOC workflow.

Immutable value objects and entities. Every change to a request or a
checklist item produces a new instance.
"""

from hostel_noc.domain.models.actor import Actor, ActorRole
from hostel_noc.domain.models.checklist_item import ChecklistItem
from hostel_noc.domain.models.noc_request import (
    ChecklistResponse,
    ChecklistResponseDraft,
    NocAction,
    NocHistoryEntry,
    NocRequest,
    NocStatus,
    RaisedBy,
    StudentSnapshot,
)
from hostel_noc.domain.models.noc_statistics import NocStatistics

__all__: list[str] = [
    "Actor",
    "ActorRole",
    "ChecklistItem",
    "ChecklistResponse",
    "ChecklistResponseDraft",
    "NocAction",
    "NocHistoryEntry",
    "NocRequest",
    "NocStatistics",
    "NocStatus",
    "RaisedBy",
    "StudentSnapshot",
]
