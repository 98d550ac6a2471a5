"""Pygame window for the Nim board.

Draws the heaps the control loop lays out, fades counters towards the
hover colour while the pointer rests on them, and turns pygame events
into the loop's own input events.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from nimgame.config_loader import GameSettings
from nimgame.game_view import GameView, HeapView
from nimgame.input_state import (
    ButtonDownEvent,
    ButtonUpEvent,
    InputEvent,
    KeyDownEvent,
    PointerMoveEvent,
    QuitEvent,
)
from nimgame.layout import Rect

logger = logging.getLogger("nimgame")

Colour = Tuple[int, int, int]

COLOUR_BACKGROUND: Colour = (0, 255, 255)
COLOUR_HEAP_OUTLINE: Colour = (0, 0, 0)
COLOUR_NOT_HOVERED: Colour = (100, 100, 100)
COLOUR_HOVERED: Colour = (200, 100, 100)
COLOUR_TEXT: Colour = (20, 20, 20)
STONE_GAP = 1

_KEY_NAMES = {
    pygame.K_ESCAPE: "escape",
}


class PresentationError(RuntimeError):
    """The window or drawing surface could not be created."""


def translate_event(event: pygame.event.Event) -> Optional[InputEvent]:
    """Map a pygame event to an InputEvent, or None if the loop ignores it."""
    if event.type == pygame.QUIT:
        return QuitEvent()
    if event.type == pygame.KEYDOWN:
        return KeyDownEvent(key=_KEY_NAMES.get(event.key, f"key_{event.key}"))
    if event.type == pygame.MOUSEMOTION:
        return PointerMoveEvent(pos=tuple(event.pos))
    if event.type == pygame.MOUSEBUTTONDOWN:
        return ButtonDownEvent(button=event.button, pos=tuple(event.pos))
    if event.type == pygame.MOUSEBUTTONUP:
        return ButtonUpEvent(button=event.button, pos=tuple(event.pos))
    return None


def blend_colour(start: Colour, target: Colour, progress: float) -> Colour:
    progress = min(max(progress, 0.0), 1.0)
    return tuple(round(a + (b - a) * progress) for a, b in zip(start, target))


class HoverFade:
    """Tracks for how long each heap has been hovered at the same depth."""

    def __init__(self, change_time: float, clock: Callable[[], float] = time.monotonic):
        self.change_time = change_time
        self.clock = clock
        self._since: Dict[int, Tuple[int, float]] = {}

    def progress(self, heap_index: int, hover_offset: Optional[int]) -> float:
        if hover_offset is None:
            self._since.pop(heap_index, None)
            return 0.0
        now = self.clock()
        offset, since = self._since.get(heap_index, (None, now))
        if offset != hover_offset:
            since = now
        self._since[heap_index] = (hover_offset, since)
        if self.change_time <= 0:
            return 1.0
        return (now - since) / self.change_time


class PygameView:
    def __init__(self, settings: GameSettings, title: str = "Nim - the game"):
        self.settings = settings
        self.title = title
        self.fade = HoverFade(settings.colour_change_time)
        self._surface: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

    def open(self) -> None:
        pygame.init()
        try:
            self._surface = pygame.display.set_mode(
                (self.settings.window_width, self.settings.window_height), pygame.RESIZABLE
            )
            pygame.display.set_caption(self.title)
            self._font = pygame.font.SysFont(None, 36)
        except pygame.error as e:
            logger.error(f"Could not create the game window: {e}")
            pygame.quit()
            raise PresentationError(f"Could not create the game window: {e}") from e

    def close(self) -> None:
        pygame.quit()
        self._surface = None

    def __enter__(self) -> "PygameView":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def surface(self) -> pygame.Surface:
        if self._surface is None:
            raise PresentationError("The game window is not open")
        return self._surface

    def window_size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def poll_events(self) -> List[InputEvent]:
        events = []
        for event in pygame.event.get():
            translated = translate_event(event)
            if translated is not None:
                events.append(translated)
        return events

    def render(self, view: GameView) -> None:
        surface = self.surface
        surface.fill(COLOUR_BACKGROUND)
        for index, heap in enumerate(view.heaps):
            self._draw_heap(surface, index, heap)
        self._draw_status(surface, view.status_text())
        pygame.display.flip()

    def _draw_heap(self, surface: pygame.Surface, index: int, heap: HeapView) -> None:
        if heap.layout is None:
            return
        pygame.draw.rect(surface, COLOUR_HEAP_OUTLINE, _to_pygame_rect(heap.layout.area), 1)

        hovered_colour = blend_colour(
            COLOUR_NOT_HOVERED, COLOUR_HOVERED, self.fade.progress(index, heap.hover_offset)
        )
        for offset, rect in enumerate(heap.stone_rects()):
            colour = hovered_colour if heap.is_hovered(offset) else COLOUR_NOT_HOVERED
            stone = _to_pygame_rect(rect)
            if stone.height > 2 * STONE_GAP + 1:
                stone = stone.inflate(-2 * STONE_GAP, -2 * STONE_GAP)
            pygame.draw.rect(surface, colour, stone)

    def _draw_status(self, surface: pygame.Surface, text: str) -> None:
        if self._font is None:
            return
        label = self._font.render(text, True, COLOUR_TEXT)
        surface.blit(label, ((surface.get_width() - label.get_width()) // 2, 30))


def _to_pygame_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), max(int(rect.width), 1), max(int(rect.height), 1))
