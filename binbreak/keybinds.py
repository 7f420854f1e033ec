from __future__ import annotations

import pygame

from .game_core import Intent

_KEY_INTENTS: dict[int, Intent] = {
    pygame.K_UP: Intent.UP,
    pygame.K_k: Intent.UP,
    pygame.K_DOWN: Intent.DOWN,
    pygame.K_j: Intent.DOWN,
    pygame.K_LEFT: Intent.LEFT,
    pygame.K_h: Intent.LEFT,
    pygame.K_RIGHT: Intent.RIGHT,
    pygame.K_l: Intent.RIGHT,
    pygame.K_RETURN: Intent.SELECT,
    pygame.K_KP_ENTER: Intent.SELECT,
    pygame.K_ESCAPE: Intent.EXIT,
    pygame.K_q: Intent.EXIT,
    pygame.K_a: Intent.TOGGLE_ANIMATION,
    pygame.K_s: Intent.SKIP,
}


def intent_from_event(event: pygame.event.Event) -> Intent | None:
    """Classify a pygame event; None for anything the game ignores."""

    if event.type == pygame.QUIT:
        return Intent.HARD_EXIT
    if event.type != pygame.KEYDOWN:
        return None
    mods = getattr(event, "mod", 0)
    if event.key == pygame.K_c and mods & pygame.KMOD_CTRL:
        return Intent.HARD_EXIT
    return _KEY_INTENTS.get(event.key)
