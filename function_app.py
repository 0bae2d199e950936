"""
RECON Solutions Backend - Azure Functions Application

A Python-based Azure Functions backend for the RECON Solutions construction
and consulting site. Serves the service catalog and project portfolio,
takes consultation and appointment requests, powers the staff dashboard,
relays image uploads and answers assistant questions, with Supabase as the
database, storage and auth provider.
"""

import azure.functions as func
import datetime
import logging

from shared.config import validate_environment

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Refuse to start without the required settings
validate_environment()

# Create the main Function App instance
app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# Import routes
from accounts.routes import register_account_routes
from company_services.routes import register_service_routes
from projects.routes import register_project_routes
from consultations.routes import register_consultation_routes
from appointments.routes import register_appointment_routes
from assistant.routes import register_assistant_routes
from uploads.routes import register_upload_routes
from analytics.routes import register_analytics_routes
from shared.middleware import RequestContext, api_handler
from shared.responses import success_response

# =============================================================================
# Health Check Endpoint
# =============================================================================

@api_handler(rate_limit=None)
async def health_check(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /health - Liveness check."""
    return success_response({
        "status": "ok",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    })


app.route(route="health", methods=["GET"])(health_check)

# =============================================================================
# Resource Endpoints
# =============================================================================

register_account_routes(app)
register_service_routes(app)
register_project_routes(app)
register_consultation_routes(app)
register_appointment_routes(app)
register_assistant_routes(app)
register_upload_routes(app)
register_analytics_routes(app)

logger.info("RECON backend routes registered")
