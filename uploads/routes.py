"""
HTTP route handlers for /upload endpoints (multipart image uploads).
"""

import logging
from typing import List
import azure.functions as func
from shared.auth import authenticate
from shared.constants import STAFF_ROLES, MAX_IMAGE_BYTES, MAX_IMAGES_PER_REQUEST
from shared.middleware import RequestContext, api_handler
from shared.permissions import require_role, RequestValidationError
from shared.responses import success_response
from .service import ImageFile, ImageUploadService

logger = logging.getLogger(__name__)


def _read_image(uploaded) -> ImageFile:
    """Read a multipart file into memory, enforcing type and size limits."""
    content_type = uploaded.content_type or ""
    if not content_type.startswith("image/"):
        raise RequestValidationError("Only image files are allowed")

    data = uploaded.read()
    if len(data) > MAX_IMAGE_BYTES:
        raise RequestValidationError("Image exceeds the 5 MB limit")

    return ImageFile(data=data, content_type=content_type.split(";")[0], filename=uploaded.filename or "")


def _files(req: func.HttpRequest, field: str) -> List:
    if "multipart/form-data" not in req.headers.get("Content-Type", ""):
        return []
    files = req.files
    if not files:
        return []
    return [f for f in files.getlist(field) if f and f.filename]


@api_handler("Failed to upload image")
async def upload_image(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /upload/image - One image in field "image" (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    files = _files(req, "image")
    if not files:
        raise RequestValidationError("No image file provided")

    result = await ImageUploadService().upload_image(_read_image(files[0]))

    return success_response({
        "message": "Image uploaded successfully",
        "url": result["url"],
        "public_id": result["public_id"],
    })


@api_handler("Failed to upload images")
async def upload_images(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """POST /upload/images - Up to 10 images in field "images" (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    files = _files(req, "images")
    if not files:
        raise RequestValidationError("No images provided")
    if len(files) > MAX_IMAGES_PER_REQUEST:
        raise RequestValidationError(f"At most {MAX_IMAGES_PER_REQUEST} images per request")

    images = [_read_image(f) for f in files]
    results = await ImageUploadService().upload_images(images)

    return success_response({"message": "Images uploaded successfully", "images": results})


@api_handler("Failed to delete image")
async def delete_image(req: func.HttpRequest, ctx: RequestContext) -> func.HttpResponse:
    """DELETE /upload/image/{public_id} - Remove an uploaded image (admin/staff)."""
    user = await authenticate(req)
    await require_role(user, STAFF_ROLES)

    public_id = (req.route_params.get("public_id") or "").strip()
    if not public_id:
        raise RequestValidationError("public_id: Image id is required")

    await ImageUploadService().delete_image(public_id)

    return success_response({"message": "Image deleted successfully"})


def register_upload_routes(app: func.FunctionApp):
    """Register all /upload routes with the function app."""
    app.route(route="upload/image", methods=["POST"])(upload_image)
    app.route(route="upload/images", methods=["POST"])(upload_images)
    app.route(route="upload/image/{public_id}", methods=["DELETE"])(delete_image)
