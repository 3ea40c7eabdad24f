"""ASGI entrypoint for the canvas builder API."""

from canvas_builder.api.app import create_app
from canvas_builder.containers import build_container

app = create_app(build_container())
