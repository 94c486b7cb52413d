"""
Audit API Routes

Read-only view of the audit trail for business admins.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ADMIN_ERROR_STATUS, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.base_dto import CamelModel
from src.depends import get_current_principal, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(CamelModel):
    action: str
    username: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsPage(CamelModel):
    """GET /audit/auth-events payload; nextCursor is null on the last page"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get("/auth-events", status_code=status.HTTP_200_OK, response_model=AuditEventsPage)
async def get_auth_events(
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    cursor: Optional[str] = Query(None, description="nextCursor of the previous page"),
):
    """
    Authentication and account events of the admin's business, newest first.

    Raises:
        - 401 Unauthorized: Not signed in
        - 403 Forbidden: Not an admin of a business
        - 422 Unprocessable Entity: limit outside 1..100
    """
    result = await GetAuditEventsUseCase(uow).execute(
        actor_id=UUID(principal.id), limit=limit, cursor=cursor
    )

    if result.is_err():
        raise_for_error(result.error, ADMIN_ERROR_STATUS)

    return result.value
