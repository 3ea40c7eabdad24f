"""Canvas API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import Response
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from canvas_builder.api.models import (
    Dimensions,
    DrawCircleRequest,
    DrawImageRequest,
    DrawRectangleRequest,
    DrawResponse,
    DrawTextRequest,
    InitializeRequest,
    InitializeResponse,
)
from canvas_builder.domain.errors import InvalidDrawParameters
from canvas_builder.services.drawing import UploadedImage

if TYPE_CHECKING:
    from canvas_builder.containers import AppContainer

router = APIRouter(prefix="/api", tags=["canvas"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post(
    "/initialize",
    status_code=status.HTTP_201_CREATED,
    response_model=InitializeResponse,
)
async def initialize(
    payload: InitializeRequest, request: Request
) -> InitializeResponse:
    """Create a new canvas session."""
    container = _container(request)
    session_id = container.session_store.create(payload.width, payload.height)
    return InitializeResponse(
        message="Canvas initialized successfully",
        id=session_id,
        dimensions=Dimensions(width=payload.width, height=payload.height),
    )


@router.post("/draw/rectangle", response_model=DrawResponse)
async def draw_rectangle(
    payload: DrawRectangleRequest, request: Request
) -> DrawResponse:
    """Append a filled rectangle to the canvas."""
    _container(request).drawing_service.draw_rectangle(
        payload.id or "",
        payload.x,
        payload.y,
        payload.width,
        payload.height,
        payload.color,
    )
    return DrawResponse(message="Rectangle drawn successfully")


@router.post("/draw/circle", response_model=DrawResponse)
async def draw_circle(payload: DrawCircleRequest, request: Request) -> DrawResponse:
    """Append a filled circle to the canvas."""
    _container(request).drawing_service.draw_circle(
        payload.id or "", payload.x, payload.y, payload.radius, payload.color
    )
    return DrawResponse(message="Circle drawn successfully")


@router.post("/draw/text", response_model=DrawResponse)
async def draw_text(payload: DrawTextRequest, request: Request) -> DrawResponse:
    """Append a text run to the canvas."""
    _container(request).drawing_service.draw_text(
        payload.id or "",
        payload.text,
        payload.x,
        payload.y,
        font_size=payload.font_size,
        font_family=payload.font_family,
        color=payload.color,
    )
    return DrawResponse(message="Text added successfully")


@router.post("/draw/image", response_model=DrawResponse)
async def draw_image(request: Request) -> DrawResponse:
    """Append an uploaded or remote image to the canvas.

    Accepts multipart/form-data with an ``imageFile`` part, or a JSON body
    carrying ``imageUrl``.
    """
    payload, upload = await _read_image_request(request)
    await _container(request).drawing_service.draw_image(
        payload.id or "",
        payload.x,
        payload.y,
        width=payload.width,
        height=payload.height,
        upload=upload,
        image_url=payload.image_url,
    )
    return DrawResponse(message="Image added successfully")


@router.get("/export/{session_id}")
async def export_pdf(session_id: str, request: Request) -> Response:
    """Return the scene as a PDF attachment."""
    pdf = await _container(request).export_service.export(session_id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="canvas-{session_id}.pdf"'
        },
    )


@router.get("/debug/{session_id}")
async def debug_log(session_id: str, request: Request) -> list[dict[str, object]]:
    """Return the raw command log for diagnostics."""
    container = _container(request)
    if not container.settings.debug_endpoint_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    commands = container.drawing_service.history(session_id)
    return [command.model_dump(mode="json") for command in commands]


@router.get("/preview/{session_id}")
async def preview_png(session_id: str, request: Request) -> Response:
    """Return the server-side raster of the canvas."""
    png = await _container(request).drawing_service.preview_png(session_id)
    return Response(content=png, media_type="image/png")


async def _read_image_request(
    request: Request,
) -> tuple[DrawImageRequest, UploadedImage | None]:
    content_type = request.headers.get("content-type", "")
    upload: UploadedImage | None = None
    if content_type.startswith("application/json"):
        try:
            raw = await request.json()
        except ValueError as exc:
            raise InvalidDrawParameters("Request body is not valid JSON.") from exc
        fields = raw if isinstance(raw, dict) else {}
    else:
        form = await request.form()
        fields = {}
        for key, value in form.items():
            if isinstance(value, UploadFile):
                if key == "imageFile":
                    data = await value.read()
                    if data:
                        upload = UploadedImage(data=data, mime_type=value.content_type)
                continue
            if value != "":
                fields[key] = value
    try:
        payload = DrawImageRequest.model_validate(fields)
    except ValidationError as exc:
        raise InvalidDrawParameters(_validation_message(exc)) from exc
    return payload, upload


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid {location or 'payload'}: {first.get('msg', 'invalid value')}."
