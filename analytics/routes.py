"""
HTTP route handlers for /analytics endpoints (admin/staff dashboard).
"""

import logging
import azure.functions as func
from shared.auth import authenticate
from shared.constants import STAFF_ROLES
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role
from shared.responses import success_response
from .service import AnalyticsService

logger = logging.getLogger(__name__)


@api_handler("Failed to fetch analytics")
async def get_stats(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /analytics/stats"""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    return success_response(await AnalyticsService().get_stats())


@api_handler("Failed to fetch trends")
async def get_trends(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /analytics/trends"""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    return success_response(await AnalyticsService().get_trends())


@api_handler("Failed to fetch popular services")
async def get_popular_services(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /analytics/popular-services"""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    return success_response(await AnalyticsService().get_popular_services())


def register_analytics_routes(app: func.FunctionApp):
    """Register all /analytics routes with the function app."""
    app.route(route="analytics/stats", methods=["GET"])(get_stats)
    app.route(route="analytics/trends", methods=["GET"])(get_trends)
    app.route(route="analytics/popular-services", methods=["GET"])(get_popular_services)
