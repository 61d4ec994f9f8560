"""Presentation helpers for the 5x5 indicator matrix."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from threading import Lock
from typing import IO, Dict, FrozenSet, Iterable, Optional, Protocol, Set, Tuple

LOGGER = logging.getLogger(__name__)

GRID_SIZE = 5

Pixel = Tuple[int, int]


class Icon(str, Enum):
    YES = "yes"
    NO = "no"
    DIAMOND = "diamond"
    EIGHTH_NOTE = "eighth_note"


def _glyph(rows: str) -> FrozenSet[Pixel]:
    pixels: Set[Pixel] = set()
    for y, row in enumerate(rows.split()):
        for x, cell in enumerate(row):
            if cell == "#":
                pixels.add((x, y))
    return frozenset(pixels)


ICON_GLYPHS: Dict[Icon, FrozenSet[Pixel]] = {
    Icon.YES: _glyph(
        """
        .....
        ....#
        ...#.
        #.#..
        .#...
        """
    ),
    Icon.NO: _glyph(
        """
        #...#
        .#.#.
        ..#..
        .#.#.
        #...#
        """
    ),
    Icon.DIAMOND: _glyph(
        """
        ..#..
        .#.#.
        #...#
        .#.#.
        ..#..
        """
    ),
    Icon.EIGHTH_NOTE: _glyph(
        """
        ..#..
        ..##.
        ..#.#
        ###..
        ###..
        """
    ),
}


class Display(Protocol):
    def show_text(self, text: str) -> None:
        ...

    def show_icon(self, icon: Icon) -> None:
        ...

    def plot(self, x: int, y: int) -> None:
        ...

    def clear(self) -> None:
        ...


def _ensure_on_grid(x: int, y: int) -> Pixel:
    if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
        raise ValueError(f"Pixel ({x}, {y}) is outside the {GRID_SIZE}x{GRID_SIZE} matrix.")
    return (x, y)


def render_grid(pixels: Iterable[Pixel]) -> str:
    """Render lit *pixels* as five rows of ``#`` and ``.``."""

    lit = set(pixels)
    return "\n".join(
        "".join("#" if (x, y) in lit else "." for x in range(GRID_SIZE)) for y in range(GRID_SIZE)
    )


class ConsoleDisplay:
    """Draw the indicator matrix on a text stream."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream
        self._lock = Lock()
        self._pixels: Set[Pixel] = set()
        self.text: Optional[str] = None

    @property
    def pixels(self) -> FrozenSet[Pixel]:
        return frozenset(self._pixels)

    def show_text(self, text: str) -> None:
        self._pixels.clear()
        self.text = text
        self._write(f"[{text}]")

    def show_icon(self, icon: Icon) -> None:
        self.text = None
        self._pixels = set(ICON_GLYPHS[Icon(icon)])
        self._write(render_grid(self._pixels))

    def plot(self, x: int, y: int) -> None:
        self.text = None
        self._pixels.add(_ensure_on_grid(x, y))
        self._write(render_grid(self._pixels))

    def clear(self) -> None:
        if not self._pixels and self.text is None:
            return
        self._pixels.clear()
        self.text = None
        LOGGER.debug("Display cleared")
        self._write(render_grid(()))

    def _write(self, frame: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(f"{frame}\n")
            stream.flush()


__all__ = ["ConsoleDisplay", "Display", "GRID_SIZE", "ICON_GLYPHS", "Icon", "render_grid"]
