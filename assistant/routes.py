"""
HTTP route handlers for /ai endpoints.
"""

import logging
import azure.functions as func
from shared.middleware import RequestContext, api_handler
from shared.responses import success_response
from shared.validation import parse_body
from .schemas import AskBody, ChatBody
from .service import AssistantService

logger = logging.getLogger(__name__)


@api_handler("AI service unavailable")
async def ask_assistant(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /ai/ask - Single question, single answer."""
    body = parse_body(req, AskBody)

    result = await AssistantService().ask(body.question)

    return success_response(result)


@api_handler("AI service unavailable")
async def chat_with_assistant(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /ai/chat - Multi-turn chat; the client sends the whole transcript."""
    body = parse_body(req, ChatBody)

    result = await AssistantService().chat([m.model_dump() for m in body.messages])

    return success_response(result)


def register_assistant_routes(app: func.FunctionApp):
    """Register all /ai routes with the function app."""
    app.route(route="ai/ask", methods=["POST"])(ask_assistant)
    app.route(route="ai/chat", methods=["POST"])(chat_with_assistant)
