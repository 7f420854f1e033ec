"""Procedural title animation.

Nothing is pre-rendered: every call to ``render`` derives each cell's colour
and character from the elapsed clock time, so the animation costs no frame
buffers and can be paused and resumed exactly where it stopped.
"""

from __future__ import annotations

from typing import Protocol

from .cells import DARK_GRAY, CellGrid, Color, Rect
from .clock import Clock

_MASK64 = (1 << 64) - 1


class ColorEffect(Protocol):
    def color_at(self, x: int, y: int, progress: float, cycle: int, highlight: Color) -> Color: ...


class CharEffect(Protocol):
    def char_at(self, x: int, y: int, progress: float, cycle: int, original: str) -> str: ...


class ProceduralAnimation:
    def __init__(
        self,
        art: str,
        *,
        frame_count: int,
        frame_duration_s: float,
        color_effect: ColorEffect,
        clock: Clock,
        char_effect: CharEffect | None = None,
        pause_at_end_s: float = 0.0,
        highlight: Color = (255, 255, 255),
    ) -> None:
        if frame_count <= 0:
            raise ValueError("frame_count must be > 0")
        if frame_duration_s <= 0:
            raise ValueError("frame_duration_s must be > 0")
        if pause_at_end_s < 0:
            raise ValueError("pause_at_end_s must be >= 0")

        self._lines = art.splitlines()
        self._anim_s = frame_count * float(frame_duration_s)
        self._pause_s = float(pause_at_end_s)
        self._color_effect = color_effect
        self._char_effect = char_effect
        self._clock = clock
        self._highlight = highlight

        self._start_s = clock.now()
        self._paused = False
        self._paused_progress = 0.0
        self._paused_cycle = 0

    @property
    def width(self) -> int:
        return max((len(line) for line in self._lines), default=0)

    @property
    def height(self) -> int:
        return len(self._lines)

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def highlight(self) -> Color:
        return self._highlight

    def set_highlight_color(self, color: Color) -> None:
        self._highlight = color

    def state(self) -> tuple[float, int]:
        """Current ``(progress, cycle_index)``; frozen while paused."""

        if self._paused:
            return self._paused_progress, self._paused_cycle

        period = self._anim_s + self._pause_s
        elapsed = max(0.0, self._clock.now() - self._start_s)
        cycle = int(elapsed // period)
        in_cycle = elapsed - cycle * period
        # Progress holds at 1.0 through the trailing pause.
        progress = min(1.0, in_cycle / self._anim_s)
        return progress, cycle

    def pause(self) -> None:
        if self._paused:
            return
        self._paused_progress, self._paused_cycle = self.state()
        self._paused = True

    def resume(self) -> None:
        if not self._paused:
            return
        period = self._anim_s + self._pause_s
        offset = self._paused_cycle * period + self._paused_progress * self._anim_s
        self._start_s = self._clock.now() - offset
        self._paused = False

    def toggle_pause(self) -> None:
        if self._paused:
            self.resume()
        else:
            self.pause()

    def render(self, grid: CellGrid, area: Rect) -> None:
        progress, cycle = self.state()
        for y, line in enumerate(self._lines):
            for x, original in enumerate(line):
                # Blank art cells are transparent.
                if original == " ":
                    continue
                gx, gy = area.x + x, area.y + y
                if not area.contains(gx, gy):
                    continue
                ch = original
                if self._char_effect is not None:
                    ch = self._char_effect.char_at(x, y, progress, cycle, original)
                color = self._color_effect.color_at(x, y, progress, cycle, self._highlight)
                grid.set(gx, gy, ch, color)


class BinarySweep:
    """Diagonal highlight strip that rewrites the art into 0/1 and back.

    Even cycles turn every cell the strip has passed into a fixed
    position-hashed bit; odd cycles restore the original characters in the
    same order, so the loop never shows a seam.
    """

    def __init__(self, width: int, height: int, *, strip_width: float = 8.0, base: Color = DARK_GRAY) -> None:
        self._strip = float(strip_width)
        self._start = -self._strip
        self._range = (width + height + self._strip) - self._start
        self._base = base

    def _offset(self, progress: float) -> float:
        return self._start + progress * self._range

    def color_at(self, x: int, y: int, progress: float, cycle: int, highlight: Color) -> Color:
        if abs((x + y) - self._offset(progress)) < self._strip:
            return highlight
        return self._base

    def char_at(self, x: int, y: int, progress: float, cycle: int, original: str) -> str:
        passed = (x + y) < self._offset(progress)
        forward = cycle % 2 == 0
        if passed == forward:
            return bit_for_cell(x, y)
        return original


def bit_for_cell(x: int, y: int) -> str:
    h = (x * 2654435761) & _MASK64
    h ^= (y * 2246822519) & _MASK64
    h = (h * 668265263) & _MASK64
    h ^= h >> 15
    b = (h * 1597334677) & _MASK64
    b ^= b >> 16
    return "0" if b & 1 == 0 else "1"


TITLE_ART = r'''
 ,,        ,,              ,,
*MM        db             *MM      [a: toggle animation]     `7MM
 MM                        MM                                  MM
 MM,dMMb.`7MM  `7MMpMMMb.  MM,dMMb.`7Mb,od8 .gP"Ya   ,6"Yb.    MM  ,MP'
 MM    `Mb MM    MM    MM  MM    `Mb MM' "',M'   Yb 8)   MM    MM ;Y
 MM     M8 MM    MM    MM  MM     M8 MM    8M""""""  ,pm9MM    MM;Mm
 MM.   ,M9 MM    MM    MM  MM.   ,M9 MM    YM.    , 8M   MM    MM `Mb.
 P^YbmdP'.JMML..JMML  JMML.P^YbmdP'.JMML.   `Mbmmd' `Moo9^Yo..JMML. YA.
'''.strip("\n")


def title_animation(clock: Clock) -> ProceduralAnimation:
    lines = TITLE_ART.splitlines()
    width = max(len(line) for line in lines)
    sweep = BinarySweep(width, len(lines))
    return ProceduralAnimation(
        TITLE_ART,
        frame_count=50,
        frame_duration_s=0.05,
        color_effect=sweep,
        char_effect=sweep,
        clock=clock,
        pause_at_end_s=2.0,
    )
