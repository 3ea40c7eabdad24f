"""Font substitution table shared by the raster and PDF renderers."""

from enum import StrEnum


class FontFace(StrEnum):
    """Generic faces every renderer is able to provide."""

    SANS = "sans"
    SERIF = "serif"
    MONO = "mono"


FALLBACK_FACE = FontFace.SERIF

FAMILY_FACES: dict[str, FontFace] = {
    "arial": FontFace.SANS,
    "helvetica": FontFace.SANS,
    "verdana": FontFace.SANS,
    "tahoma": FontFace.SANS,
    "trebuchet ms": FontFace.SANS,
    "segoe ui": FontFace.SANS,
    "roboto": FontFace.SANS,
    "open sans": FontFace.SANS,
    "dejavu sans": FontFace.SANS,
    "liberation sans": FontFace.SANS,
    "sans-serif": FontFace.SANS,
    "system-ui": FontFace.SANS,
    "times": FontFace.SERIF,
    "times new roman": FontFace.SERIF,
    "georgia": FontFace.SERIF,
    "garamond": FontFace.SERIF,
    "dejavu serif": FontFace.SERIF,
    "liberation serif": FontFace.SERIF,
    "serif": FontFace.SERIF,
    "courier": FontFace.MONO,
    "courier new": FontFace.MONO,
    "consolas": FontFace.MONO,
    "menlo": FontFace.MONO,
    "dejavu sans mono": FontFace.MONO,
    "liberation mono": FontFace.MONO,
    "monospace": FontFace.MONO,
}

PDF_FONTS: dict[FontFace, str] = {
    FontFace.SANS: "Helvetica",
    FontFace.SERIF: "Times-Roman",
    FontFace.MONO: "Courier",
}

# Tried in order; Pillow's built-in font is used when none can be loaded.
RASTER_FONT_FILES: dict[FontFace, tuple[str, ...]] = {
    FontFace.SANS: ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf"),
    FontFace.SERIF: (
        "DejaVuSerif.ttf",
        "LiberationSerif-Regular.ttf",
        "Times New Roman.ttf",
    ),
    FontFace.MONO: (
        "DejaVuSansMono.ttf",
        "LiberationMono-Regular.ttf",
        "Courier New.ttf",
    ),
}


def face_for_family(family: str) -> FontFace:
    """Map a requested font family to an available face.

    CSS-style family lists ("Helvetica, Arial, sans-serif") are tried left to
    right; quotes and case are ignored. Unmapped families use the serif face.
    """
    for candidate in family.split(","):
        name = candidate.strip().strip("\"'").lower()
        face = FAMILY_FACES.get(name)
        if face is not None:
            return face
    return FALLBACK_FACE


def pdf_font_for_family(family: str) -> str:
    """Return the PDF standard font used for a requested family."""
    return PDF_FONTS[face_for_family(family)]
