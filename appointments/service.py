"""
Business logic for appointment operations.
"""

import logging
from typing import Any, Dict, List, Optional
from shared.supabase_client import get_supabase_client, run_query
from shared.permissions import NotFoundError

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service class for appointment operations."""

    def __init__(self):
        self.client = get_supabase_client()

    async def create_appointment(self, user_id: str, data: Dict[str, Any]) -> Dict:
        """
        Request an appointment for a signed-in user. Status defaults to PENDING.

        Args:
            user_id: The authenticated user's ID
            data: Validated service, preferred_date and location

        Returns:
            Created appointment
        """
        query = self.client.table("appointments") \
            .insert({
                "user_id": user_id,
                "service": data["service"],
                "preferred_date": data["preferred_date"],
                "location": data.get("location"),
            })
        result = await run_query(query)

        if not result.data:
            raise Exception("Failed to create appointment")

        logger.info(f"Appointment requested by {user_id}: {result.data[0].get('id')}")
        return result.data[0]

    async def list_my_appointments(self, user_id: str) -> List[Dict]:
        """The user's appointments, soonest preferred date first."""
        query = self.client.table("appointments") \
            .select("*") \
            .eq("user_id", user_id) \
            .order("preferred_date")
        result = await run_query(query)

        return result.data or []

    async def list_appointments(self, statuses: Optional[List[str]] = None) -> List[Dict]:
        """
        All appointments with the requester's name, for staff.

        Args:
            statuses: One status filters with eq, several with in
        """
        query = self.client.table("appointments") \
            .select("*, profiles(full_name)") \
            .order("preferred_date")

        statuses = statuses or []
        if len(statuses) == 1:
            query = query.eq("status", statuses[0])
        elif len(statuses) > 1:
            query = query.in_("status", statuses)

        result = await run_query(query)
        return result.data or []

    async def update_status(self, appointment_id: str, status: str) -> Dict:
        """
        Set an appointment's status. Any status may follow any other.

        Raises:
            NotFoundError: If the appointment doesn't exist
        """
        query = self.client.table("appointments") \
            .update({"status": status}) \
            .eq("id", appointment_id)
        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Appointment not found")

        logger.info(f"Appointment {appointment_id} -> {status}")
        return result.data[0]
