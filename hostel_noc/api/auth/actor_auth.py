"""Actor authentication from request headers.

The identity provider sits in front of this API and forwards the
authenticated user as two headers:
- X-Actor-Id: opaque user id (the student id for students)
- X-Actor-Role: one of student, warden, admin

Missing or malformed headers are 401. Whether the actor may perform a
particular operation is decided by the workflow service, not here.
"""

from typing import Annotated

import structlog
from fastapi import Header, HTTPException, Request, status

from hostel_noc.domain.models.actor import Actor, ActorRole

logger = structlog.get_logger(__name__)

VALID_ROLES = {role.value for role in ActorRole}


def _unauthorized(request: Request, detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "type": "urn:hostel-noc:error:unauthenticated",
            "title": "Unauthenticated",
            "status": 401,
            "detail": detail,
            "instance": str(request.url),
        },
    )


def get_current_actor(
    request: Request,
    x_actor_id: Annotated[
        str | None,
        Header(description="Authenticated user id."),
    ] = None,
    x_actor_role: Annotated[
        str | None,
        Header(description="Role of the user: 'student', 'warden' or 'admin'."),
    ] = None,
) -> Actor:
    """Extract the acting user from headers.

    Raises:
        HTTPException 401: If a header is missing or the role is unknown.
    """
    log = logger.bind(component="actor_auth")
    request_ip = request.client.host if request.client else "unknown"

    if not x_actor_id or not x_actor_id.strip():
        log.warning("auth_failed", reason="missing_actor_id", request_ip=request_ip)
        raise _unauthorized(request, "X-Actor-Id header is required")

    role = (x_actor_role or "").strip().lower()
    if role not in VALID_ROLES:
        log.warning(
            "auth_failed",
            reason="invalid_actor_role",
            actor_id=x_actor_id,
            actor_role=x_actor_role,
            request_ip=request_ip,
        )
        raise _unauthorized(
            request,
            f"X-Actor-Role header must be one of {sorted(VALID_ROLES)}",
        )

    return Actor(actor_id=x_actor_id.strip(), role=ActorRole(role))
