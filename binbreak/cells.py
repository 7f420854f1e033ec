"""Character-cell render target.

Screens draw into a ``CellGrid``; the pygame shell in app.py only blits the
finished grid. Nothing here knows about pygame.
"""

from __future__ import annotations

from dataclasses import dataclass

Color = tuple[int, int, int]

WHITE: Color = (235, 235, 245)
DARK_GRAY: Color = (96, 96, 104)
GREEN: Color = (90, 210, 90)
LIGHT_GREEN: Color = (140, 255, 140)
YELLOW: Color = (235, 215, 90)
RED: Color = (230, 80, 80)
CYAN: Color = (90, 210, 220)
LIGHT_CYAN: Color = (150, 240, 255)
BLUE: Color = (110, 140, 255)
MAGENTA: Color = (220, 110, 220)
BACKGROUND: Color = (10, 10, 14)
SELECTED_BG: Color = (40, 40, 40)


@dataclass(frozen=True, slots=True)
class Rect:
    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def sub(self, dx: int, dy: int, w: int, h: int) -> "Rect":
        """Sub-region relative to this rect, clipped to it."""
        x = self.x + max(0, dx)
        y = self.y + max(0, dy)
        return Rect(x, y, max(0, min(w, self.right - x)), max(0, min(h, self.bottom - y)))

    def inner(self) -> "Rect":
        return self.sub(1, 1, self.w - 2, self.h - 2)

    def split_rows(self, heights: list[int]) -> list["Rect"]:
        """Stack rows of the given heights, centred vertically."""
        total = sum(heights)
        y = self.y + max(0, (self.h - total) // 2)
        out: list[Rect] = []
        for h in heights:
            out.append(Rect(self.x, y, self.w, max(0, min(h, self.bottom - y))))
            y += h
        return out

    def split_columns(self, count: int) -> list["Rect"]:
        if count <= 0:
            return []
        base = self.w // count
        out: list[Rect] = []
        x = self.x
        for i in range(count):
            w = base if i < count - 1 else self.right - x
            out.append(Rect(x, self.y, w, self.h))
            x += w
        return out


@dataclass(slots=True)
class Cell:
    ch: str = " "
    fg: Color = WHITE
    bg: Color | None = None


class CellGrid:
    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("grid size must be >= 0")
        self._width = int(width)
        self._height = int(height)
        self._cells = [Cell() for _ in range(self._width * self._height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def area(self) -> Rect:
        return Rect(0, 0, self._width, self._height)

    def clear(self) -> None:
        for cell in self._cells:
            cell.ch = " "
            cell.fg = WHITE
            cell.bg = None

    def get(self, x: int, y: int) -> Cell | None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            return None
        return self._cells[y * self._width + x]

    def set(self, x: int, y: int, ch: str, fg: Color, bg: Color | None = None) -> None:
        cell = self.get(x, y)
        if cell is None:
            return
        cell.ch = ch[:1] or " "
        cell.fg = fg
        if bg is not None:
            cell.bg = bg

    def put_text(self, x: int, y: int, text: str, fg: Color, *, clip: Rect | None = None, bg: Color | None = None) -> None:
        for i, ch in enumerate(text):
            if clip is not None and not clip.contains(x + i, y):
                continue
            self.set(x + i, y, ch, fg, bg)

    def put_centered(self, area: Rect, y: int, text: str, fg: Color) -> None:
        if area.w <= 0:
            return
        text = text[: area.w]
        self.put_text(area.x + (area.w - len(text)) // 2, y, text, fg, clip=Rect(area.x, y, area.w, 1))

    def draw_box(self, area: Rect, fg: Color, *, double: bool = False, title: str = "", title_fg: Color = WHITE) -> None:
        if area.w < 2 or area.h < 2:
            return
        h, v, tl, tr, bl, br = ("═", "║", "╔", "╗", "╚", "╝") if double else ("─", "│", "┌", "┐", "└", "┘")
        for x in range(area.x + 1, area.right - 1):
            self.set(x, area.y, h, fg)
            self.set(x, area.bottom - 1, h, fg)
        for y in range(area.y + 1, area.bottom - 1):
            self.set(area.x, y, v, fg)
            self.set(area.right - 1, y, v, fg)
        self.set(area.x, area.y, tl, fg)
        self.set(area.right - 1, area.y, tr, fg)
        self.set(area.x, area.bottom - 1, bl, fg)
        self.set(area.right - 1, area.bottom - 1, br, fg)
        if title:
            self.put_centered(Rect(area.x + 1, area.y, area.w - 2, 1), area.y, title, title_fg)

    def rows(self) -> list[list[Cell]]:
        return [self._cells[y * self._width : (y + 1) * self._width] for y in range(self._height)]
