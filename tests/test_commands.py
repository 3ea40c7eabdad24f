"""Tests for draw command resolution."""

import pytest

from canvas_builder.domain.errors import InvalidDrawParameters
from canvas_builder.domain.images import DecodedImage, RemoteSource
from canvas_builder.services.commands import (
    build_circle,
    build_image,
    build_rectangle,
    build_text,
    normalize_color,
)


def test_rectangle_defaults_missing_values() -> None:
    command = build_rectangle(None, None, 50, 40)

    assert command.x == 0
    assert command.y == 0
    assert command.width == 50
    assert command.height == 40
    assert command.color == "#000000"


def test_text_defaults_font_size_and_family() -> None:
    command = build_text("Hello", 10, 20)

    assert command.font_size == 20
    assert command.font_family == "Arial"
    assert command.color == "#000000"


def test_text_keeps_caller_font() -> None:
    command = build_text("Hi", 0, 0, font_size=32, font_family="Courier New")

    assert command.font_size == 32
    assert command.font_family == "Courier New"


def test_text_requires_content() -> None:
    with pytest.raises(InvalidDrawParameters):
        build_text(None, 0, 0)


def test_text_rejects_non_positive_font_size() -> None:
    with pytest.raises(InvalidDrawParameters):
        build_text("Hi", 0, 0, font_size=0)


def test_circle_rejects_negative_radius() -> None:
    with pytest.raises(InvalidDrawParameters):
        build_circle(10, 10, -1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("#FF0000", "#FF0000"),
        ("#ff0000", "#FF0000"),
        ("#f00", "#FF0000"),
        ("red", "#FF0000"),
        ("  navy ", "#000080"),
        (None, "#000000"),
        ("", "#000000"),
    ],
)
def test_normalize_color(raw: str | None, expected: str) -> None:
    assert normalize_color(raw) == expected


def test_normalize_color_rejects_unknown_names() -> None:
    with pytest.raises(InvalidDrawParameters):
        normalize_color("not-a-color")


def test_image_uses_intrinsic_size_when_omitted() -> None:
    image = DecodedImage(
        pixel_width=64,
        pixel_height=32,
        source=RemoteSource(url="https://img.test/a.png"),
        content=b"",
    )

    command = build_image(image, 5, 6)

    assert (command.width, command.height) == (64, 32)
    assert command.source.url == "https://img.test/a.png"


def test_image_keeps_caller_size() -> None:
    image = DecodedImage(
        pixel_width=64,
        pixel_height=32,
        source=RemoteSource(url="https://img.test/a.png"),
        content=b"",
    )

    command = build_image(image, 0, 0, width=10, height=20)

    assert (command.width, command.height) == (10, 20)


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_rectangle_rejects_non_finite_numbers(value: float) -> None:
    with pytest.raises(InvalidDrawParameters):
        build_rectangle(value, 0, 10, 10)
    with pytest.raises(InvalidDrawParameters):
        build_rectangle(0, 0, 10, value)


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_circle_rejects_non_finite_numbers(value: float) -> None:
    with pytest.raises(InvalidDrawParameters):
        build_circle(0, value, 5)
    with pytest.raises(InvalidDrawParameters):
        build_circle(0, 0, value)


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_text_rejects_non_finite_numbers(value: float) -> None:
    with pytest.raises(InvalidDrawParameters):
        build_text("Hi", value, 0)
    with pytest.raises(InvalidDrawParameters):
        build_text("Hi", 0, 0, font_size=value)


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_image_rejects_non_finite_numbers(value: float) -> None:
    image = DecodedImage(
        pixel_width=8,
        pixel_height=8,
        source=RemoteSource(url="https://img.test/a.png"),
        content=b"",
    )

    with pytest.raises(InvalidDrawParameters):
        build_image(image, value, 0)
    with pytest.raises(InvalidDrawParameters):
        build_image(image, 0, 0, width=value)
