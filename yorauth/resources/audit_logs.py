"""Authorization audit log."""

from typing import List, Optional

from ..types import AuditLog
from .base import AsyncResource, Resource, parse_list


class AuditLogResource(Resource):
    """Audit log queries for sync client."""

    def list(
        self,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        target_user_id: Optional[str] = None,
        target_role_id: Optional[str] = None,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[AuditLog]:
        """
        List audit log entries, newest first.

        Args:
            action: Filter by action, e.g. ``role.assigned``
            user_id: Filter by acting user
            target_user_id: Filter by affected user
            target_role_id: Filter by affected role
            from_: Start date (ISO 8601), sent as ``from``
            to: End date (ISO 8601)
            page: Page number
            per_page: Page size
            limit: Maximum number of entries
        """
        response = self._http.request(
            "GET",
            self._http.build_scoped_url("audit-logs"),
            params={
                "action": action,
                "user_id": user_id,
                "target_user_id": target_user_id,
                "target_role_id": target_role_id,
                "from": from_,
                "to": to,
                "page": page,
                "per_page": per_page,
                "limit": limit,
            },
        )
        return parse_list(response, AuditLog.from_dict)


class AsyncAuditLogResource(AsyncResource):
    """Audit log queries for async client."""

    async def list(
        self,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        target_user_id: Optional[str] = None,
        target_role_id: Optional[str] = None,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[AuditLog]:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url("audit-logs"),
            params={
                "action": action,
                "user_id": user_id,
                "target_user_id": target_user_id,
                "target_role_id": target_role_id,
                "from": from_,
                "to": to,
                "page": page,
                "per_page": per_page,
                "limit": limit,
            },
        )
        return parse_list(response, AuditLog.from_dict)
