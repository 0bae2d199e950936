"""
HTTP route handlers for /consultations endpoints.
"""

import logging
import azure.functions as func
from shared.auth import authenticate, authenticate_optional
from shared.constants import STAFF_ROLES
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role
from shared.responses import success_response, created_response
from shared.sanitize import sanitize_for_search
from shared.validation import parse_body, parse_query, parse_id, split_list_param
from .schemas import SubmitConsultationBody, ConsultationFilters, UpdateConsultationStatusBody
from .service import ConsultationService

logger = logging.getLogger(__name__)


@api_handler()
async def submit_consultation(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /consultations - Public request form; linked to the user when signed in."""
    user = await authenticate_optional(req)
    body = parse_body(req, SubmitConsultationBody)

    consultation = await ConsultationService().submit_consultation(
        body.model_dump(), user_id=user.id if user else None
    )

    return created_response({"message": "Consultation request submitted", "data": consultation})


@api_handler()
async def list_consultations(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /consultations - All requests with filters (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    filters = parse_query(req, ConsultationFilters)

    consultations = await ConsultationService().list_consultations(
        statuses=split_list_param(filters.status),
        search=sanitize_for_search(filters.search) if filters.search is not None else None,
        from_date=filters.from_date,
        to_date=filters.to_date,
    )

    return success_response(consultations)


@api_handler()
async def update_consultation_status(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """PATCH /consultations/{id} - Change status (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    consultation_id = parse_id(req)
    body = parse_body(req, UpdateConsultationStatusBody)

    consultation = await ConsultationService().update_status(consultation_id, body.status)

    return success_response(consultation)


@api_handler()
async def list_my_consultations(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /consultations/my - The caller's own requests."""
    user = await authenticate(req)

    consultations = await ConsultationService().list_my_consultations(user.id)

    return success_response(consultations)


def register_consultation_routes(app: func.FunctionApp):
    """Register all /consultations routes with the function app."""
    app.route(route="consultations", methods=["POST"])(submit_consultation)
    app.route(route="consultations", methods=["GET"])(list_consultations)
    app.route(route="consultations/my", methods=["GET"])(list_my_consultations)
    app.route(route="consultations/{id}", methods=["PATCH"])(update_consultation_status)
