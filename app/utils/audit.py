"""Audit logging for privileged actions."""

import logging

from fastapi import Request

from app.auth.dependencies import CurrentUser

logger = logging.getLogger("audit")


def audit_logged(action: str):
    """Dependency factory that logs privileged actions.

    Place it after the role guard so rejected callers are never audited::

        @router.post(
            "/students/{student_id}",
            dependencies=[Depends(staff), Depends(audit_logged("update_student"))],
        )
    """

    async def _log(request: Request, current_user: CurrentUser) -> None:
        client_ip = request.client.host if request.client else "unknown"
        request_id = getattr(request.state, "request_id", "n/a")
        logger.info(
            "AUDIT action=%s user=%s role=%s jti=%s ip=%s request_id=%s path=%s",
            action,
            current_user.sub,
            current_user.role,
            current_user.jti,
            client_ip,
            request_id,
            request.url.path,
        )

    return _log
