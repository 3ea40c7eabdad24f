"""Domain models for canvas scenes and their sessions."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from canvas_builder.domain.errors import InvalidDimensions

if TYPE_CHECKING:
    from PIL import Image

    from canvas_builder.domain.commands import Command


class Scene:
    """Canvas dimensions plus the append-only command log."""

    def __init__(self, width: int, height: int) -> None:
        if not _is_positive_int(width) or not _is_positive_int(height):
            raise InvalidDimensions()
        self._width = width
        self._height = height
        self._commands: list[Command] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def commands(self) -> tuple[Command, ...]:
        """Return the commands recorded so far, oldest first."""
        return tuple(self._commands)

    def append(self, command: Command) -> int:
        """Append a resolved command and return the new log length."""
        self._commands.append(command)
        return len(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


@dataclass
class CanvasSession:
    """A live scene with its per-session lock and optional raster preview."""

    id: str
    scene: Scene
    preview: Image.Image | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def snapshot(self) -> tuple[Command, ...]:
        """Return a consistent prefix of the log for read-only replay."""
        with self.lock:
            return self.scene.commands


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
