"""
HTTP route handlers for /auth endpoints.
"""

import logging
import azure.functions as func
from shared.auth import authenticate
from shared.middleware import RequestContext, api_handler
from shared.rate_limit import AUTH
from shared.responses import success_response, created_response, error_response
from shared.validation import parse_body
from .schemas import RegisterBody, LoginBody
from .service import AccountService, REGISTRATION_FAILED

logger = logging.getLogger(__name__)


@api_handler("Registration failed", rate_limit=AUTH)
async def register(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /auth/register - Create an account with a USER profile."""
    body = parse_body(req, RegisterBody)

    result = await AccountService().register(body)

    if "error" in result:
        status = 500 if result["error"] == REGISTRATION_FAILED else 400
        return error_response(result["error"], status)

    return created_response({"message": "Registered successfully"})


@api_handler("Login failed", rate_limit=AUTH)
async def login(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /auth/login - Exchange credentials for a session."""
    body = parse_body(req, LoginBody)

    result = await AccountService().login(body)

    if "error" in result:
        return error_response(result["error"], 401)

    return success_response(result["data"])


@api_handler("Failed to load profile")
async def get_me(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """GET /auth/me - Current user and profile."""
    user = await authenticate(req)

    data = await AccountService().get_me(user)

    return success_response(data)


def register_account_routes(app: func.FunctionApp):
    """Register all /auth routes with the function app."""
    app.route(route="auth/register", methods=["POST"])(register)
    app.route(route="auth/login", methods=["POST"])(login)
    app.route(route="auth/me", methods=["GET"])(get_me)
