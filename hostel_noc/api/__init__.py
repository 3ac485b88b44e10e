"""
API layer - FastAPI routes and HTTP concerns for the NOC workflow.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- HTTP middleware
- Actor authentication from request headers

IMPORT RULES:
- CAN import from: application, domain
- CANNOT import from: infrastructure directly
- Uses hostel_noc.bootstrap for infrastructure wiring
"""

__all__: list[str] = []
