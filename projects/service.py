"""
Business logic for portfolio project operations.
"""

import logging
from typing import Optional, List, Dict, Any
from shared.supabase_client import get_supabase_client, run_query
from shared.permissions import NotFoundError

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("title", "service_id", "location", "stage", "description", "images")


class ProjectService:
    """Service class for project CRUD operations."""

    def __init__(self):
        self.client = get_supabase_client()

    async def list_projects(
        self,
        search: Optional[str] = None,
        stage: Optional[str] = None,
        location: Optional[str] = None,
        service_id: Optional[str] = None
    ) -> List[Dict]:
        """
        List projects with their service name, newest first.

        Args:
            search: Sanitized text matched against title and description
            stage: Exact project stage
            location: Sanitized substring of the location
            service_id: Only projects for this service

        Returns:
            List of projects
        """
        query = self.client.table("projects") \
            .select("*, services(name)") \
            .order("created_at", desc=True)

        if search:
            query = query.or_(f"title.ilike.%{search}%,description.ilike.%{search}%")
        if stage:
            query = query.eq("stage", stage)
        if location:
            query = query.ilike("location", f"%{location}%")
        if service_id:
            query = query.eq("service_id", service_id)

        result = await run_query(query)
        return result.data or []

    async def get_project(self, project_id: str) -> Dict:
        """
        Get a single project with its service name.

        Raises:
            NotFoundError: If project doesn't exist
        """
        query = self.client.table("projects") \
            .select("*, services(name)") \
            .eq("id", project_id)
        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Project not found")

        return result.data[0]

    async def create_project(self, data: Dict[str, Any]) -> Dict:
        """
        Create a new project.

        Args:
            data: Validated project fields; images default to an empty list

        Returns:
            Created project
        """
        row = {field: data.get(field) for field in PROJECT_FIELDS}
        row["images"] = list(data.get("images") or [])

        result = await run_query(self.client.table("projects").insert(row))

        if not result.data:
            raise Exception("Failed to create project")

        logger.info(f"Created project {result.data[0].get('id')}")
        return result.data[0]

    async def update_project(self, project_id: str, data: Dict[str, Any]) -> Dict:
        """
        Update the given project fields.

        Raises:
            NotFoundError: If project doesn't exist
        """
        update_data = {k: v for k, v in data.items() if k in PROJECT_FIELDS}

        query = self.client.table("projects") \
            .update(update_data) \
            .eq("id", project_id)

        result = await run_query(query)

        if not result.data:
            raise NotFoundError("Project not found")

        return result.data[0]

    async def delete_project(self, project_id: str) -> None:
        """Hard-delete a project."""
        await run_query(self.client.table("projects").delete().eq("id", project_id))
        logger.info(f"Deleted project {project_id}")
