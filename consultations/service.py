"""
Business logic for consultation requests.
"""

import logging
from typing import Any, Dict, List, Optional
from shared.supabase_client import get_supabase_client, run_query
from shared.permissions import NotFoundError

logger = logging.getLogger(__name__)


class ConsultationService:
    """Service class for consultation operations."""

    def __init__(self):
        self.client = get_supabase_client()

    async def submit_consultation(self, data: Dict[str, Any], user_id: Optional[str] = None) -> Dict:
        """
        Store a new consultation request. Status defaults to NEW in the database.

        Args:
            data: Validated contact and request fields
            user_id: Submitting user, when the request was authenticated

        Returns:
            Created consultation
        """
        row = {
            "name": data["name"],
            "email": data["email"],
            "phone": data["phone"],
            "service": data.get("service"),
            "location": data.get("location"),
            "message": data.get("message"),
        }
        if user_id:
            row["user_id"] = user_id

        result = await run_query(self.client.table("consultations").insert(row))

        if not result.data:
            raise Exception("Failed to submit consultation")

        logger.info(f"Consultation submitted: {result.data[0].get('id')}")
        return result.data[0]

    async def list_consultations(
        self,
        statuses: Optional[List[str]] = None,
        search: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None
    ) -> List[Dict]:
        """
        List consultations for staff, newest first.

        Args:
            statuses: One status filters with eq, several with in
            search: Sanitized text matched against name, email and phone
            from_date: Lower bound on created_at (inclusive)
            to_date: Upper bound on created_at (inclusive)
        """
        query = self.client.table("consultations") \
            .select("*") \
            .order("created_at", desc=True)

        statuses = statuses or []
        if len(statuses) == 1:
            query = query.eq("status", statuses[0])
        elif len(statuses) > 1:
            query = query.in_("status", statuses)

        if search:
            query = query.or_(
                f"name.ilike.%{search}%,email.ilike.%{search}%,phone.ilike.%{search}%"
            )
        if from_date:
            query = query.gte("created_at", from_date)
        if to_date:
            query = query.lte("created_at", to_date)

        result = await run_query(query)
        return result.data or []

    async def update_status(self, consultation_id: str, status: str) -> Dict:
        """
        Set a consultation's status. Any status may follow any other.

        Raises:
            NotFoundError: If the consultation doesn't exist
        """
        query = self.client.table("consultations") \
            .update({"status": status}) \
            .eq("id", consultation_id)
        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Consultation not found")

        logger.info(f"Consultation {consultation_id} -> {status}")
        return result.data[0]

    async def list_my_consultations(self, user_id: str) -> List[Dict]:
        """Consultations submitted by a signed-in user, newest first."""
        query = self.client.table("consultations") \
            .select("*") \
            .eq("user_id", user_id) \
            .order("created_at", desc=True)
        result = await run_query(query)

        return result.data or []
