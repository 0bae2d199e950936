"""
Dashboard analytics computed from small result sets.

Independent reads are fanned out concurrently and grouped in memory.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional
from shared.supabase_client import get_supabase_client, gather_queries

logger = logging.getLogger(__name__)

RECENT_DAYS = 30
POPULAR_SERVICES_LIMIT = 10


def _count_by(rows: Optional[Iterable[Dict]], field: str) -> Dict[str, int]:
    """Tally non-empty values of one column."""
    counts: Dict[str, int] = {}
    for row in rows or []:
        value = row.get(field)
        if value:
            counts[value] = counts.get(value, 0) + 1
    return counts


def _month_of(timestamp: str) -> str:
    """Calendar month of an ISO timestamp, e.g. "2024-03" (UTC)."""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp[:7]
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m")


class AnalyticsService:
    """Service class for dashboard statistics."""

    def __init__(self):
        self.client = get_supabase_client()

    def _count_query(self, table: str):
        return self.client.table(table).select("id", count="exact", head=True)

    async def get_stats(self) -> Dict:
        """
        Totals, breakdowns and last-30-day counts for the dashboard.

        Returns:
            dict with:
                - overview: totalProjects, totalConsultations, totalAppointments
                - projects: byStage
                - consultations: byStatus, last30Days
                - appointments: byStatus, last30Days
        """
        since = (datetime.now(timezone.utc) - timedelta(days=RECENT_DAYS)).isoformat()

        (
            total_projects,
            project_stages,
            total_consultations,
            consultation_statuses,
            total_appointments,
            appointment_statuses,
            recent_consultations,
            recent_appointments,
        ) = await gather_queries(
            self._count_query("projects"),
            self.client.table("projects").select("stage"),
            self._count_query("consultations"),
            self.client.table("consultations").select("status"),
            self._count_query("appointments"),
            self.client.table("appointments").select("status"),
            self._count_query("consultations").gte("created_at", since),
            self._count_query("appointments").gte("created_at", since),
        )

        return {
            "overview": {
                "totalProjects": total_projects.count,
                "totalConsultations": total_consultations.count,
                "totalAppointments": total_appointments.count,
            },
            "projects": {"byStage": _count_by(project_stages.data, "stage")},
            "consultations": {
                "byStatus": _count_by(consultation_statuses.data, "status"),
                "last30Days": recent_consultations.count,
            },
            "appointments": {
                "byStatus": _count_by(appointment_statuses.data, "status"),
                "last30Days": recent_appointments.count,
            },
        }

    async def get_trends(self) -> Dict[str, Dict[str, int]]:
        """Consultations and appointments per calendar month ("YYYY-MM")."""
        consultations, appointments = await gather_queries(
            self.client.table("consultations").select("created_at").order("created_at"),
            self.client.table("appointments").select("created_at").order("created_at"),
        )

        monthly: Dict[str, Dict[str, int]] = {}
        for key, rows in (("consultations", consultations.data), ("appointments", appointments.data)):
            for row in rows or []:
                if not row.get("created_at"):
                    continue
                month = monthly.setdefault(
                    _month_of(row["created_at"]), {"consultations": 0, "appointments": 0}
                )
                month[key] += 1

        return dict(sorted(monthly.items()))

    async def get_popular_services(self) -> List[Dict]:
        """Top services by combined consultation and appointment requests."""
        consultations, appointments = await gather_queries(
            self.client.table("consultations").select("service"),
            self.client.table("appointments").select("service"),
        )

        counts = Counter(_count_by(consultations.data, "service"))
        counts.update(_count_by(appointments.data, "service"))

        return [
            {"service": service, "count": count}
            for service, count in counts.most_common(POPULAR_SERVICES_LIMIT)
        ]
