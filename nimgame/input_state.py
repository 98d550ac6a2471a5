from dataclasses import dataclass
from typing import Tuple, Union

PRIMARY_BUTTON = 1
QUIT_KEYS = {"escape"}


@dataclass(frozen=True)
class QuitEvent:
    pass


@dataclass(frozen=True)
class KeyDownEvent:
    key: str


@dataclass(frozen=True)
class PointerMoveEvent:
    pos: Tuple[int, int]


@dataclass(frozen=True)
class ButtonDownEvent:
    button: int
    pos: Tuple[int, int]


@dataclass(frozen=True)
class ButtonUpEvent:
    button: int
    pos: Tuple[int, int]


InputEvent = Union[QuitEvent, KeyDownEvent, PointerMoveEvent, ButtonDownEvent, ButtonUpEvent]


def is_quit_event(event: InputEvent) -> bool:
    if isinstance(event, QuitEvent):
        return True
    return isinstance(event, KeyDownEvent) and event.key in QUIT_KEYS


class MouseState:
    """Pointer position and primary button transitions between ticks.

    A release of the primary button is remembered until it is consumed,
    so each click is acted on at most once.
    """

    def __init__(self):
        self.position: Tuple[int, int] = (-1, -1)
        self.primary_down = False
        self._released = False

    def update(self, event: InputEvent) -> None:
        if isinstance(event, PointerMoveEvent):
            self.position = event.pos
        elif isinstance(event, ButtonDownEvent):
            self.position = event.pos
            if event.button == PRIMARY_BUTTON:
                self.primary_down = True
        elif isinstance(event, ButtonUpEvent):
            self.position = event.pos
            if event.button == PRIMARY_BUTTON:
                if self.primary_down:
                    self._released = True
                self.primary_down = False

    def consume_release(self) -> bool:
        released = self._released
        self._released = False
        return released
