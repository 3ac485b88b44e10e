"""Input validation errors.

Raised before any state mutation when a caller supplies malformed or
missing input. The caller must correct the input; retrying unchanged
input fails the same way.
"""

from __future__ import annotations

from hostel_noc.domain.exceptions import HostelNocError


class ValidationError(HostelNocError):
    """Raised when required input is missing or malformed.

    Attributes:
        field: Name of the offending input field, if one can be named.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
