"""Pygame shell for binbreak.

The window is a fixed-pitch character grid: screens draw into a ``CellGrid``
and ``GridSurfaceRenderer`` blits it. Game state, timing and scoring live in
the core modules (bit_modes, puzzle, session, animation); this module owns
the application state variant and the frame loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .bit_modes import Preferences
from .cells import BACKGROUND, CellGrid, Color
from .clock import Clock, RealClock
from .config import GameConfig
from .game_core import Intent, SeededRng, new_seed
from .keybinds import intent_from_event
from .persistence import HighScoreStore
from .screens import StartMenu, render_playing
from .session import Session

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MenuState:
    menu: StartMenu
    prefs: Preferences


@dataclass(slots=True)
class PlayingState:
    session: Session
    prefs: Preferences


@dataclass(frozen=True, slots=True)
class ExitState:
    prefs: Preferences


AppState = MenuState | PlayingState | ExitState


class FrameClock(Clock, Protocol):
    def sleep(self, seconds: float) -> None:
        """Block for ``seconds`` (never negative)."""


class InputSource(Protocol):
    def poll(self, timeout_s: float) -> Intent | None:
        """Wait at most ``timeout_s`` for the next intent."""

    def wait(self) -> Intent | None:
        """Block until the next event arrives."""


class App:
    """Owns the current ``AppState`` and dispatches to it.

    Transitions are computed by ``_next_state`` and assigned back, so the
    state objects never alias each other.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        config: GameConfig,
        session_factory: Callable[[Preferences, StartMenu], Session] | None = None,
        prefs: Preferences | None = None,
    ) -> None:
        self._clock = clock
        self._config = config
        self._session_factory = session_factory or self._default_session
        start = prefs or Preferences()
        self._state: AppState = MenuState(menu=StartMenu(start, clock=clock), prefs=start)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def running(self) -> bool:
        return not isinstance(self._state, ExitState)

    def _default_session(self, prefs: Preferences, menu: StartMenu) -> Session:
        return Session(
            menu.selected_mode(),
            high_scores=HighScoreStore(self._config.high_scores_path),
            rng=SeededRng(new_seed()),
            max_lives=self._config.max_lives,
        )

    def _set_state(self, state: AppState) -> None:
        if type(state) is not type(self._state):
            logger.debug("App state %s -> %s", type(self._state).__name__, type(state).__name__)
        self._state = state

    def wants_realtime(self) -> bool:
        """True while something on screen changes without input."""

        state = self._state
        if isinstance(state, PlayingState):
            return state.session.is_timer_running()
        if isinstance(state, MenuState):
            return not state.menu.animation.is_paused
        return False

    def update(self, dt: float) -> None:
        state = self._state
        if not isinstance(state, PlayingState):
            return
        state.session.update(dt)
        if state.session.exit_intended:
            self._set_state(MenuState(menu=StartMenu(state.prefs, clock=self._clock), prefs=state.prefs))

    def render(self, grid: CellGrid) -> None:
        grid.clear()
        state = self._state
        if isinstance(state, MenuState):
            state.menu.render(grid)
        elif isinstance(state, PlayingState):
            render_playing(state.session.snapshot(), grid)

    def handle_intent(self, intent: Intent) -> None:
        self._set_state(self._next_state(self._state, intent))

    def _next_state(self, state: AppState, intent: Intent) -> AppState:
        if intent is Intent.HARD_EXIT:
            return ExitState(prefs=state.prefs)

        if isinstance(state, MenuState):
            return self._next_menu_state(state, intent)
        if isinstance(state, PlayingState):
            state.session.handle_intent(intent)
            return state
        return state

    def _next_menu_state(self, state: MenuState, intent: Intent) -> AppState:
        menu = state.menu
        if intent is Intent.UP:
            menu.select_previous()
        elif intent is Intent.DOWN:
            menu.select_next()
        elif intent in (Intent.LEFT, Intent.RIGHT):
            menu.toggle_number_mode()
        elif intent is Intent.TOGGLE_ANIMATION:
            menu.toggle_animation()
        elif intent is Intent.SELECT:
            prefs = menu.preferences()
            return PlayingState(session=self._session_factory(prefs, menu), prefs=prefs)
        elif intent is Intent.EXIT:
            return ExitState(prefs=state.prefs)
        return state


class FrameDriver:
    """Fixed-timestep loop: update, render, wait for input, sleep.

    While a puzzle timer or the title animation is running the input wait is
    a bounded poll; otherwise it blocks until the next event so an idle
    screen does no work.
    """

    def __init__(
        self,
        app: App,
        *,
        clock: FrameClock,
        input_source: InputSource,
        present: Callable[[App], None],
        target_frame_s: float = 0.033,
    ) -> None:
        if target_frame_s <= 0:
            raise ValueError("target_frame_s must be > 0")
        self._app = app
        self._clock = clock
        self._input = input_source
        self._present = present
        self._target_frame_s = float(target_frame_s)
        self._last_frame_s = clock.now()

    def tick(self) -> None:
        now = self._clock.now()
        dt = max(0.0, now - self._last_frame_s)
        self._last_frame_s = now

        # Advance before drawing so stats are current.
        self._app.update(dt)
        if not self._app.running:
            return

        self._present(self._app)

        if self._app.wants_realtime():
            intent = self._input.poll(min(dt, self._target_frame_s))
        else:
            intent = self._input.wait()
        if intent is not None:
            self._app.handle_intent(intent)

        spent = self._clock.now() - self._last_frame_s
        if spent < self._target_frame_s:
            self._clock.sleep(self._target_frame_s - spent)


class PygameClock:
    """Monotonic time for the core; frame pacing through pygame's timer."""

    def __init__(self) -> None:
        self._real = RealClock()

    def now(self) -> float:
        return self._real.now()

    def sleep(self, seconds: float) -> None:
        ms = int(round(seconds * 1000.0))
        if ms > 0:
            pygame.time.wait(ms)


# Window events that need a redraw even though they carry no intent.
_REPAINT_EVENTS = (pygame.VIDEORESIZE, pygame.VIDEOEXPOSE)


class PygameInput:
    """Returns the next classified intent, skipping events the game ignores.

    Mouse motion and other window-system noise never use up a frame's input
    slot, so a key press is seen on the frame after it arrives.
    """

    def poll(self, timeout_s: float) -> Intent | None:
        deadline = pygame.time.get_ticks() + max(0, int(round(timeout_s * 1000.0)))
        while True:
            remaining = deadline - pygame.time.get_ticks()
            event = pygame.event.poll() if remaining <= 0 else pygame.event.wait(remaining)
            if event.type == pygame.NOEVENT:
                return None
            intent = intent_from_event(event)
            if intent is not None:
                return intent

    def wait(self) -> Intent | None:
        while True:
            event = pygame.event.wait()
            if event.type in _REPAINT_EVENTS:
                return None
            intent = intent_from_event(event)
            if intent is not None:
                return intent


class GridSurfaceRenderer:
    """Blits a ``CellGrid`` onto a pygame surface with a monospace font."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        w, _ = font.size("M")
        self._cell_w = max(1, w)
        self._cell_h = max(1, font.get_linesize())
        self._glyphs: dict[tuple[str, Color], pygame.Surface] = {}

    def grid_for_surface(self) -> CellGrid:
        w, h = self._surface.get_size()
        return CellGrid(w // self._cell_w, h // self._cell_h)

    def present(self, app: App) -> None:
        self._surface = pygame.display.get_surface() or self._surface
        grid = self.grid_for_surface()
        app.render(grid)
        self.blit(grid)
        pygame.display.flip()

    def blit(self, grid: CellGrid) -> None:
        self._surface.fill(BACKGROUND)
        for y, row in enumerate(grid.rows()):
            for x, cell in enumerate(row):
                px, py = x * self._cell_w, y * self._cell_h
                if cell.bg is not None:
                    pygame.draw.rect(self._surface, cell.bg, pygame.Rect(px, py, self._cell_w, self._cell_h))
                if cell.ch == " ":
                    continue
                self._surface.blit(self._glyph(cell.ch, cell.fg), (px, py))

    def _glyph(self, ch: str, color: Color) -> pygame.Surface:
        key = (ch, color)
        glyph = self._glyphs.get(key)
        if glyph is None:
            glyph = self._font.render(ch, True, color)
            self._glyphs[key] = glyph
        return glyph


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: GameConfig | None = None,
) -> int:
    cfg = config or GameConfig.from_env()
    pygame.init()
    try:
        pygame.display.set_caption("binbreak")
        surface = pygame.display.set_mode(cfg.window_size, pygame.RESIZABLE)
        font = pygame.font.SysFont("dejavusansmono,menlo,consolas,monospace", cfg.font_size)

        clock = PygameClock()
        app = App(clock=clock, config=cfg)
        renderer = GridSurfaceRenderer(surface, font)
        driver = FrameDriver(
            app,
            clock=clock,
            input_source=PygameInput(),
            present=renderer.present,
            target_frame_s=cfg.target_frame_s,
        )

        frame = 0
        while app.running:
            if event_injector is not None:
                event_injector(frame)
            driver.tick()
            frame += 1
            if max_frames is not None and frame >= max_frames:
                break
    finally:
        pygame.quit()

    return 0
