"""
HTTP route handlers for /services endpoints.
"""

import logging
import azure.functions as func
from shared.auth import authenticate
from shared.constants import ADMIN_ONLY
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role, RequestValidationError
from shared.responses import success_response, created_response
from shared.sanitize import sanitize_for_search
from shared.validation import parse_body, parse_query, parse_id
from .schemas import ServiceFilters, CreateServiceBody, UpdateServiceBody
from .service import CompanyServiceService

logger = logging.getLogger(__name__)


def _parse_active(value):
    if value == "true":
        return True
    if value == "false":
        return False
    return None


@api_handler()
async def list_services(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /services - Public catalog with search/category/active filters."""
    filters = parse_query(req, ServiceFilters)

    services = await CompanyServiceService().list_services(
        search=sanitize_for_search(filters.search) if filters.search is not None else None,
        category=filters.category,
        active=_parse_active(filters.active),
    )

    return success_response(services)


@api_handler()
async def get_service(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /services/{id} - Single service."""
    service_id = parse_id(req)

    service = await CompanyServiceService().get_service(service_id)

    return success_response(service)


@api_handler()
async def create_service(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /services - Create a service (admin only)."""
    user = await authenticate(req)
    await require_role(user, ADMIN_ONLY)
    body = parse_body(req, CreateServiceBody)

    service = await CompanyServiceService().create_service(body.model_dump())

    return created_response(service)


@api_handler()
async def update_service(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """PUT /services/{id} - Update a service (admin only)."""
    user = await authenticate(req)
    await require_role(user, ADMIN_ONLY)
    service_id = parse_id(req)
    body = parse_body(req, UpdateServiceBody)

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise RequestValidationError("No fields to update")

    service = await CompanyServiceService().update_service(service_id, changes)

    return success_response(service)


@api_handler()
async def delete_service(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """DELETE /services/{id} - Deactivate a service (admin only)."""
    user = await authenticate(req)
    await require_role(user, ADMIN_ONLY)
    service_id = parse_id(req)

    result = await CompanyServiceService().deactivate_service(service_id)

    return success_response({"message": result["message"], "data": result["data"]})


def register_service_routes(app: func.FunctionApp):
    """Register all /services routes with the function app."""
    app.route(route="services", methods=["GET"])(list_services)
    app.route(route="services/{id}", methods=["GET"])(get_service)
    app.route(route="services", methods=["POST"])(create_service)
    app.route(route="services/{id}", methods=["PUT"])(update_service)
    app.route(route="services/{id}", methods=["DELETE"])(delete_service)
