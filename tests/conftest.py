"""Shared test fixtures."""

import io
from dataclasses import dataclass, field

import httpx
import pytest
from PIL import Image

from canvas_builder.adapters.image_fetcher import ImageFetcher
from canvas_builder.adapters.pillow_raster import PillowRasterRenderer
from canvas_builder.adapters.reportlab_document import ReportlabDocument
from canvas_builder.config import Settings
from canvas_builder.containers import AppContainer
from canvas_builder.services.drawing import DrawingService
from canvas_builder.services.export import ExportService, PdfDocument
from canvas_builder.services.images import ImageResolver
from canvas_builder.services.sessions import InMemorySessionStore


def make_png(width: int, height: int, color: str = "#00FF00") -> bytes:
    """Return PNG bytes of a solid-color image."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@dataclass
class FakeImageFetcher(ImageFetcher):
    """Serves images from a dict; unknown URLs behave like dead links."""

    images: dict[str, bytes] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.images:
            request = httpx.Request("GET", url)
            raise httpx.HTTPStatusError(
                "Not Found",
                request=request,
                response=httpx.Response(404, request=request),
            )
        return self.images[url]


@dataclass
class RecordingDocument(PdfDocument):
    """PdfDocument that records primitives instead of writing a PDF."""

    width: int
    height: int
    title: str
    operations: list[tuple[object, ...]] = field(default_factory=list)
    finished: bool = False

    def draw_rectangle(
        self, x: float, y: float, width: float, height: float, color: str
    ) -> None:
        self.operations.append(("rectangle", x, y, width, height, color))

    def draw_circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.operations.append(("circle", x, y, radius, color))

    def draw_text(  # noqa: PLR0913
        self,
        text: str,
        x: float,
        y: float,
        font_name: str,
        font_size: float,
        color: str,
    ) -> None:
        self.operations.append(("text", text, x, y, font_name, font_size, color))

    def draw_image(
        self, content: bytes, x: float, y: float, width: float, height: float
    ) -> None:
        with Image.open(io.BytesIO(content)) as image:
            image.load()
        self.operations.append(("image", x, y, width, height))

    def finish(self) -> bytes:
        self.finished = True
        return b"%PDF-recorded"


@dataclass
class RecordingDocumentFactory:
    """Keeps every document the exporter opened."""

    documents: list[RecordingDocument] = field(default_factory=list)

    def __call__(self, width: int, height: int, title: str) -> RecordingDocument:
        document = RecordingDocument(width=width, height=height, title=title)
        self.documents.append(document)
        return document


@pytest.fixture
def settings() -> Settings:
    return Settings(
        max_sessions=10,
        session_ttl_seconds=None,
        pdf_compress=False,
        pdf_invariant=True,
    )


@pytest.fixture
def image_fetcher() -> FakeImageFetcher:
    return FakeImageFetcher()


@pytest.fixture
def raster_renderer() -> PillowRasterRenderer:
    return PillowRasterRenderer()


@pytest.fixture
def session_store(raster_renderer: PillowRasterRenderer) -> InMemorySessionStore:
    return InMemorySessionStore(
        max_sessions=10, preview_factory=raster_renderer.new_canvas
    )


@pytest.fixture
def image_resolver(image_fetcher: FakeImageFetcher) -> ImageResolver:
    return ImageResolver(image_fetcher)


@pytest.fixture
def drawing_service(
    session_store: InMemorySessionStore,
    image_resolver: ImageResolver,
    raster_renderer: PillowRasterRenderer,
) -> DrawingService:
    return DrawingService(
        store=session_store,
        image_resolver=image_resolver,
        raster_renderer=raster_renderer,
    )


@pytest.fixture
def document_factory() -> RecordingDocumentFactory:
    return RecordingDocumentFactory()


@pytest.fixture
def recording_export_service(
    session_store: InMemorySessionStore,
    image_resolver: ImageResolver,
    document_factory: RecordingDocumentFactory,
) -> ExportService:
    return ExportService(
        store=session_store,
        image_resolver=image_resolver,
        document_factory=document_factory,
    )


@pytest.fixture
def container(
    settings: Settings,
    session_store: InMemorySessionStore,
    image_resolver: ImageResolver,
    drawing_service: DrawingService,
) -> AppContainer:
    def pdf_factory(width: int, height: int, title: str) -> PdfDocument:
        return ReportlabDocument(
            width,
            height,
            title=title,
            compress=settings.pdf_compress,
            invariant=settings.pdf_invariant,
        )

    export_service = ExportService(
        store=session_store,
        image_resolver=image_resolver,
        document_factory=pdf_factory,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_store=session_store,
        image_resolver=image_resolver,
        drawing_service=drawing_service,
        export_service=export_service,
        close_resources=close_resources,
    )
