"""
Get Audit Events Use Case

Business admins read the audit trail of their own business, page by page.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.access import load_business_admin


class GetAuditEventsUseCase:
    """
    Audit trail reader.

    Business Rules:
    - Only admins attached to a business may read, and only that business's events
    - Newest first, cursor paginated
    - Events carry the acting username, resolved at read time (None once the
      user has been deleted)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            actor_id: User UUID of the signed-in admin
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        async with self.uow:
            admin = await load_business_admin(self.uow, actor_id)
            if admin.is_err():
                return Return.err(admin.error)

            events, next_cursor = await self.uow.audit_events.get_by_business_paginated(
                admin.value.business_id, limit=limit, cursor=cursor
            )

            # Resolve usernames once per user; deleted users resolve to None
            usernames: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                username = None
                if event.user_id:
                    if event.user_id not in usernames:
                        user = await self.uow.users.get_by_id(event.user_id)
                        usernames[event.user_id] = user.username if user else None
                    username = usernames[event.user_id]

                events_list.append(
                    {
                        "action": event.action,
                        "username": username,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
