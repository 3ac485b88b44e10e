"""
API routes for the NOC workflow.

Available routers:
- health: Health check endpoints
- noc: NOC request lifecycle, listings and dashboard
- checklist: Verification checklist configuration
"""

from hostel_noc.api.routes.checklist import router as checklist_router
from hostel_noc.api.routes.health import router as health_router
from hostel_noc.api.routes.noc import router as noc_router

__all__: list[str] = ["checklist_router", "health_router", "noc_router"]
