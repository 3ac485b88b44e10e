"""Domain services: pure workflow rules with no I/O."""

from hostel_noc.domain.services.noc_transition_engine import (
    MAX_REASON_LENGTH,
    MIN_REASON_LENGTH,
    TRANSITION_RULES,
    NocTransitionEngine,
    TransitionRule,
)

__all__: list[str] = [
    "MAX_REASON_LENGTH",
    "MIN_REASON_LENGTH",
    "NocTransitionEngine",
    "TRANSITION_RULES",
    "TransitionRule",
]
