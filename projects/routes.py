"""
HTTP route handlers for /projects endpoints.
"""

import logging
import azure.functions as func
from shared.auth import authenticate
from shared.constants import ADMIN_ONLY, STAFF_ROLES
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role, RequestValidationError
from shared.responses import success_response, created_response
from shared.sanitize import sanitize_for_search
from shared.validation import parse_body, parse_query, parse_id
from .schemas import ProjectFilters, CreateProjectBody, UpdateProjectBody
from .service import ProjectService

logger = logging.getLogger(__name__)


@api_handler()
async def list_projects(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /projects - Public portfolio with search/stage/location/service filters."""
    filters = parse_query(req, ProjectFilters)

    projects = await ProjectService().list_projects(
        search=sanitize_for_search(filters.search) if filters.search is not None else None,
        stage=filters.stage,
        location=sanitize_for_search(filters.location) or None,
        service_id=filters.service_id,
    )

    return success_response(projects)


@api_handler()
async def get_project(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /projects/{id} - Single project."""
    project_id = parse_id(req)

    project = await ProjectService().get_project(project_id)

    return success_response(project)


@api_handler()
async def create_project(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /projects - Create a project (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    body = parse_body(req, CreateProjectBody)

    project = await ProjectService().create_project(body.model_dump(mode="json"))

    return created_response(project)


@api_handler()
async def update_project(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """PUT /projects/{id} - Update a project (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    project_id = parse_id(req)
    body = parse_body(req, UpdateProjectBody)

    changes = body.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise RequestValidationError("No fields to update")

    project = await ProjectService().update_project(project_id, changes)

    return success_response(project)


@api_handler()
async def delete_project(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """DELETE /projects/{id} - Delete a project (admin only)."""
    user = await authenticate(req)
    await require_role(user, ADMIN_ONLY)
    project_id = parse_id(req)

    await ProjectService().delete_project(project_id)

    return success_response({"message": "Project deleted"})


def register_project_routes(app: func.FunctionApp):
    """Register all /projects routes with the function app."""
    app.route(route="projects", methods=["GET"])(list_projects)
    app.route(route="projects/{id}", methods=["GET"])(get_project)
    app.route(route="projects", methods=["POST"])(create_project)
    app.route(route="projects/{id}", methods=["PUT"])(update_project)
    app.route(route="projects/{id}", methods=["DELETE"])(delete_project)
