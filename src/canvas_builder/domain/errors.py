"""Domain errors raised by canvas operations."""


class CanvasError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Canvas operation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidDimensions(CanvasError):
    """Canvas width or height is missing or not positive."""

    status_code = 400
    default_message = "Width and height are required and must be positive."


class InvalidDrawParameters(CanvasError):
    """A draw request carries values that cannot be rendered."""

    status_code = 400
    default_message = "Invalid draw parameters."


class MissingImageSource(CanvasError):
    """Neither an uploaded file nor an image URL was supplied."""

    status_code = 400
    default_message = 'Provide either "imageUrl" or "imageFile".'


class SessionNotFound(CanvasError):
    """The session id does not refer to a live canvas session."""

    status_code = 404
    default_message = "Canvas session not found. Please initialize first."


class DecodeError(CanvasError):
    """Image bytes could not be fetched or decoded at draw time."""

    status_code = 500
    default_message = "Failed to load or draw image."


class ExportImageFetchError(CanvasError):
    """A stored image could not be re-derived during export."""

    default_message = "Failed to load image for export."


class ExportFailed(CanvasError):
    """PDF generation failed for reasons other than a single image."""

    default_message = "Failed to generate PDF."
