"""Menu state and the cell-grid renderers for both screens.

Rendering is a pure function of state: the menu draws from ``StartMenu`` and
the playing screen draws from a ``SessionSnapshot``.
"""

from __future__ import annotations

from .animation import ProceduralAnimation, title_animation
from .bit_modes import MENU_ENTRIES, BitMode, MenuEntry, NumberMode, Preferences
from .cells import (
    BLUE,
    CYAN,
    DARK_GRAY,
    GREEN,
    LIGHT_CYAN,
    LIGHT_GREEN,
    MAGENTA,
    RED,
    SELECTED_BG,
    WHITE,
    YELLOW,
    CellGrid,
    Color,
    Rect,
)
from .clock import Clock
from .game_core import GameState, Outcome, SessionSnapshot
from .results import game_summary_from_snapshot

GAME_COLUMN_W = 65
MODE_LABEL_W = 8
MENU_SPACING = 3


class StartMenu:
    """Difficulty list plus the animated banner."""

    def __init__(
        self,
        prefs: Preferences,
        *,
        clock: Clock,
        entries: tuple[MenuEntry, ...] = MENU_ENTRIES,
        animation: ProceduralAnimation | None = None,
    ) -> None:
        if not entries:
            raise ValueError("entries must not be empty")
        prefs = prefs.clamped(len(entries))
        self._entries = entries
        self._selected = prefs.last_selected_index
        self._number_mode = prefs.last_number_mode
        self._animation = animation if animation is not None else title_animation(clock)

    @property
    def entries(self) -> tuple[MenuEntry, ...]:
        return self._entries

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def number_mode(self) -> NumberMode:
        return self._number_mode

    @property
    def animation(self) -> ProceduralAnimation:
        return self._animation

    def select_next(self) -> None:
        # Clamped at both ends, no wrap.
        self._selected = min(self._selected + 1, len(self._entries) - 1)

    def select_previous(self) -> None:
        self._selected = max(self._selected - 1, 0)

    def toggle_number_mode(self) -> None:
        self._number_mode = self._number_mode.toggled()

    def toggle_animation(self) -> None:
        self._animation.toggle_pause()

    def selected_mode(self) -> BitMode:
        return self._entries[self._selected].resolve(self._number_mode)

    def preferences(self) -> Preferences:
        return Preferences(last_selected_index=self._selected, last_number_mode=self._number_mode)

    def render(self, grid: CellGrid) -> None:
        area = grid.area()
        labels = [e.label.upper() for e in self._entries]
        max_len = max(len(s) for s in labels)
        list_w = 2 + max_len + 4 + MODE_LABEL_W
        anim_w, anim_h = self._animation.width, self._animation.height
        total_h = anim_h + MENU_SPACING + len(labels)

        top = area.y + max(0, (area.h - total_h) // 2)
        anim_area = Rect(area.x + max(0, (area.w - anim_w) // 2), top, min(anim_w, area.w), min(anim_h, area.h))

        self._animation.set_highlight_color(self._entries[self._selected].unsigned.color)
        self._animation.render(grid, anim_area)

        list_x = area.x + max(0, (area.w - list_w) // 2)
        list_y = top + anim_h + MENU_SPACING
        for i, label in enumerate(labels):
            is_selected = i == self._selected
            marker = "»" if is_selected else " "
            mode = self._number_mode.label.rjust(MODE_LABEL_W) if is_selected else " " * MODE_LABEL_W
            line = f"{marker} {label.ljust(max_len)}    {mode}"
            bg = SELECTED_BG if is_selected else None
            grid.put_text(list_x, list_y + i, line, self._entries[i].unsigned.color, clip=area, bg=bg)


def gauge_color(ratio: float) -> Color:
    if ratio > 0.6:
        return GREEN
    if ratio > 0.3:
        return YELLOW
    return RED


def render_ascii_gauge(grid: CellGrid, area: Rect, ratio: float, color: Color) -> None:
    if area.h <= 0:
        return
    fill = min(area.w, round(area.w * max(0.0, min(1.0, ratio))))
    for x in range(area.w):
        if x < fill:
            grid.set(area.x + x, area.y, "=", color)
        else:
            grid.set(area.x + x, area.y, " ", DARK_GRAY)


def render_playing(snap: SessionSnapshot, grid: CellGrid) -> None:
    area = grid.area()
    column = Rect(area.x + max(0, (area.w - GAME_COLUMN_W) // 2), area.y, min(GAME_COLUMN_W, area.w), area.h)
    stats, number, suggestions, timer_row, legend = column.split_rows([4, 5, 3, 4, 5])

    _render_stats(snap, grid, stats)

    if snap.state is GameState.GAME_OVER:
        combined = Rect(number.x, number.y, number.w, legend.bottom - number.y)
        _render_game_over(snap, grid, combined)
        return

    _render_number(snap, grid, number)
    _render_suggestions(snap, grid, suggestions)
    status, timer = timer_row.split_columns(2)
    _render_status(snap, grid, status)
    _render_timer(snap, grid, timer)
    _render_legend(grid, legend)


def _render_stats(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY)
    inner = area.inner()
    if inner.h <= 0:
        return

    if snap.new_high_score:
        high = (f"Hi-Score: {snap.score}*  ", LIGHT_GREEN)
    else:
        high = (f"Hi-Score: {snap.prev_high_score}  ", DARK_GRAY)
    line1 = [(f"Mode: {snap.bit_mode.label}  ", YELLOW), high]
    line2 = [
        (f"Score: {snap.score}  ", GREEN),
        (f"Streak: {snap.streak}  ", CYAN),
        (f"Max: {snap.max_streak}  ", BLUE),
        (f"Rounds: {snap.rounds_played}  ", MAGENTA),
        (f"Lives: {snap.hearts}  ", RED),
    ]
    for offset, spans in enumerate((line1, line2)):
        if offset >= inner.h:
            break
        _put_spans(grid, inner, inner.y + offset, spans)


def _put_spans(grid: CellGrid, area: Rect, y: int, spans: list[tuple[str, Color]]) -> None:
    width = sum(len(text) for text, _ in spans)
    x = area.x + max(0, (area.w - width) // 2)
    clip = Rect(area.x, y, area.w, 1)
    for text, color in spans:
        grid.put_text(x, y, text, color, clip=clip)
        x += len(text)


def _render_number(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY, double=True)
    inner = area.inner()
    if inner.h <= 0:
        return
    y = inner.y + inner.h // 2
    _put_spans(grid, inner, y, [(snap.binary_string, WHITE), (snap.bit_mode.scale_suffix, DARK_GRAY)])


def _render_suggestions(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    resolved = snap.outcome is not None
    boxes = area.split_columns(len(snap.candidates))
    for box, candidate in zip(boxes, snap.candidates):
        is_selected = snap.selected == candidate
        if is_selected:
            border = {
                Outcome.CORRECT: GREEN,
                Outcome.INCORRECT: RED,
                Outcome.TIMEOUT: YELLOW,
                None: LIGHT_CYAN,
            }[snap.outcome]
        else:
            border = DARK_GRAY
        grid.draw_box(box, border, double=is_selected)

        text = str(snap.bit_mode.display_value(candidate))
        is_answer = resolved and candidate == snap.target_value
        if is_answer:
            text = f"[{text}]"
        inner = box.inner()
        if inner.h > 0:
            grid.put_centered(inner, inner.y + inner.h // 2, text, LIGHT_GREEN if is_answer else WHITE)


def _render_status(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY, title="Status")
    if snap.outcome is None:
        return
    if snap.outcome is Outcome.CORRECT:
        lines, color = (":) success", f"gained {snap.points_awarded} points"), GREEN
    elif snap.outcome is Outcome.INCORRECT:
        lines, color = (":( incorrect", "lost a life"), RED
    else:
        lines, color = (":( time's up", "timeout"), YELLOW
    inner = area.inner()
    for i, text in enumerate(lines[: inner.h]):
        grid.put_centered(inner, inner.y + i, text, color)


def _render_timer(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY, title="Time Remaining")
    inner = area.inner()
    if inner.h <= 0:
        return
    ratio = 0.0 if snap.time_total_s <= 0 else snap.time_remaining_s / snap.time_total_s
    color = gauge_color(ratio)
    render_ascii_gauge(grid, Rect(inner.x, inner.y, inner.w, 1), ratio, color)
    if inner.h > 1:
        grid.put_centered(inner, inner.y + 1, f"{snap.time_remaining_s:.2f} seconds left", color)


def _render_legend(grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY)
    inner = area.inner()
    if inner.h <= 0:
        return
    spans: list[tuple[str, Color]] = []
    for key, desc in (("Left Right", "select  "), ("Enter", "confirm  "), ("S", "skip  "), ("Esc", "exit")):
        spans.extend([("<", WHITE), (key, LIGHT_CYAN), (f"> {desc}", WHITE)])
    _put_spans(grid, inner, inner.y + inner.h // 2, spans)


_SUMMARY_COLORS: dict[str, Color] = {
    "score": GREEN,
    "new_high": LIGHT_GREEN,
    "previous": YELLOW,
    "rounds": MAGENTA,
    "streak": CYAN,
    "lost": RED,
    "hint": YELLOW,
}


def _render_game_over(snap: SessionSnapshot, grid: CellGrid, area: Rect) -> None:
    grid.draw_box(area, DARK_GRAY)
    lines = game_summary_from_snapshot(snap).lines()
    inner = area.inner()
    top = inner.y + max(0, (inner.h - len(lines)) // 2)
    for i, (text, role) in enumerate(lines):
        grid.put_centered(inner, top + i, text, _SUMMARY_COLORS.get(role, WHITE))
