"""
HTTP route handlers for /appointments endpoints.
"""

import logging
import azure.functions as func
from shared.auth import authenticate
from shared.constants import STAFF_ROLES
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role
from shared.responses import success_response, created_response
from shared.validation import parse_body, parse_query, parse_id, split_list_param
from .schemas import CreateAppointmentBody, AppointmentFilters, UpdateAppointmentStatusBody
from .service import AppointmentService

logger = logging.getLogger(__name__)


@api_handler()
async def create_appointment(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /appointments - Request an appointment (signed-in users)."""
    user = await authenticate(req)
    body = parse_body(req, CreateAppointmentBody)

    appointment = await AppointmentService().create_appointment(user.id, body.model_dump())

    return created_response({"message": "Appointment requested", "data": appointment})


@api_handler()
async def list_my_appointments(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /appointments/my - The caller's own appointments."""
    user = await authenticate(req)

    appointments = await AppointmentService().list_my_appointments(user.id)

    return success_response(appointments)


@api_handler()
async def list_appointments(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /appointments - All appointments, optionally by status (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    filters = parse_query(req, AppointmentFilters)

    appointments = await AppointmentService().list_appointments(split_list_param(filters.status))

    return success_response(appointments)


@api_handler()
async def update_appointment_status(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """PATCH /appointments/{id} - Change status (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)
    appointment_id = parse_id(req)
    body = parse_body(req, UpdateAppointmentStatusBody)

    appointment = await AppointmentService().update_status(appointment_id, body.status)

    return success_response(appointment)


def register_appointment_routes(app: func.FunctionApp):
    """Register all /appointments routes with the function app."""
    app.route(route="appointments", methods=["POST"])(create_appointment)
    app.route(route="appointments", methods=["GET"])(list_appointments)
    app.route(route="appointments/my", methods=["GET"])(list_my_appointments)
    app.route(route="appointments/{id}", methods=["PATCH"])(update_appointment_status)
