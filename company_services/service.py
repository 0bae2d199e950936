"""
Business logic for the company service catalog.
"""

import logging
from typing import Any, Dict, List, Optional
from shared.supabase_client import get_supabase_client, run_query
from shared.permissions import NotFoundError

logger = logging.getLogger(__name__)


class CompanyServiceService:
    """Service class for catalog CRUD operations. Deletes are soft (active=false)."""

    def __init__(self):
        self.client = get_supabase_client()

    async def list_services(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        active: Optional[bool] = None
    ) -> List[Dict]:
        """
        List services, newest first.

        Args:
            search: Sanitized text matched against name and description
            category: Exact category
            active: Only active / only inactive services

        Returns:
            List of service rows
        """
        query = self.client.table("services") \
            .select("*") \
            .order("created_at", desc=True)

        if search:
            query = query.or_(f"name.ilike.%{search}%,description.ilike.%{search}%")
        if category:
            query = query.eq("category", category)
        if active is not None:
            query = query.eq("active", active)

        result = await run_query(query)
        return result.data or []

    async def get_service(self, service_id: str) -> Dict:
        """
        Get a single service.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        query = self.client.table("services") \
            .select("*") \
            .eq("id", service_id)
        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Service not found")

        return result.data[0]

    async def create_service(self, data: Dict[str, Any]) -> Dict:
        """Create a catalog entry from name/category/description."""
        row = {
            "name": data["name"],
            "category": data.get("category"),
            "description": data.get("description"),
        }

        result = await run_query(self.client.table("services").insert(row))

        if not result.data:
            raise Exception("Failed to create service")

        logger.info(f"Created service {result.data[0].get('id')}")
        return result.data[0]

    async def update_service(self, service_id: str, data: Dict[str, Any]) -> Dict:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        query = self.client.table("services") \
            .update(data) \
            .eq("id", service_id)
        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Service not found")

        return result.data[0]

    async def deactivate_service(self, service_id: str) -> Dict:
        """Soft-delete a service by clearing its active flag."""
        service = await self.update_service(service_id, {"active": False})
        logger.info(f"Deactivated service {service_id}")
        return {"data": service, "message": "Service deactivated"}
