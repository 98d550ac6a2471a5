import pygame
import pytest

from nimgame.config_loader import GameSettings
from nimgame.game_view import GameView, HeapView
from nimgame.input_state import (
    ButtonDownEvent,
    ButtonUpEvent,
    KeyDownEvent,
    PointerMoveEvent,
    QuitEvent,
)
from nimgame.layout import compute_board_layout
from nimgame.nim_game import Player
from nimgame.players import PlayerRole
from nimgame.pygame_view import (
    COLOUR_HOVERED,
    COLOUR_NOT_HOVERED,
    HoverFade,
    PresentationError,
    PygameView,
    blend_colour,
    translate_event,
)


def test_translate_event():
    assert translate_event(pygame.event.Event(pygame.QUIT)) == QuitEvent()
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)) == KeyDownEvent(key="escape")
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)) == KeyDownEvent(
        key=f"key_{pygame.K_a}"
    )
    assert translate_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(3, 4))) == PointerMoveEvent(pos=(3, 4))
    assert translate_event(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 6))
    ) == ButtonDownEvent(button=1, pos=(5, 6))
    assert translate_event(
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=3, pos=(5, 6))
    ) == ButtonUpEvent(button=3, pos=(5, 6))
    assert translate_event(pygame.event.Event(pygame.USEREVENT)) is None


def test_blend_colour():
    assert blend_colour((0, 0, 0), (100, 200, 50), 0.0) == (0, 0, 0)
    assert blend_colour((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)
    assert blend_colour((0, 0, 0), (100, 200, 50), 1.0) == (100, 200, 50)
    # Progress is clamped
    assert blend_colour((0, 0, 0), (100, 200, 50), 3.0) == (100, 200, 50)
    assert blend_colour((0, 0, 0), (100, 200, 50), -1.0) == (0, 0, 0)


def test_hover_fade(clock):
    fade = HoverFade(change_time=0.5, clock=clock)

    assert fade.progress(0, None) == 0.0
    assert fade.progress(0, 2) == 0.0
    clock.advance(0.25)
    assert fade.progress(0, 2) == pytest.approx(0.5)

    # Moving to another counter starts over
    assert fade.progress(0, 1) == 0.0
    clock.advance(0.5)
    assert fade.progress(0, 1) == pytest.approx(1.0)

    # Leaving the heap resets it
    assert fade.progress(0, None) == 0.0
    assert fade.progress(0, 1) == 0.0


def test_hover_fade_instant(clock):
    fade = HoverFade(change_time=0, clock=clock)
    assert fade.progress(3, 0) == 1.0


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def make_view(size, counts, hover=None):
    layouts = compute_board_layout(size, len(counts), max(counts, default=0))
    return GameView(
        heaps=[
            HeapView(capacity=5, count=c, layout=layout, hover_offset=hover if i == 0 else None)
            for i, (c, layout) in enumerate(zip(counts, layouts))
        ],
        player_to_move=Player.ONE,
        role_to_move=PlayerRole.HUMAN,
        is_terminal=False,
    )


def test_render_draws_heaps(headless):
    settings = GameSettings(window_width=320, window_height=240, colour_change_time=0)
    with PygameView(settings) as view:
        assert view.window_size() == (320, 240)
        game_view = make_view(view.window_size(), [3, 1], hover=1)
        view.render(game_view)

        surface = view.surface
        first, second = game_view.heaps
        hovered = first.stone_rects()[0]
        idle = second.stone_rects()[0]
        assert tuple(surface.get_at((int(hovered.x) + 3, int(hovered.y) + 3)))[:3] == COLOUR_HOVERED
        assert tuple(surface.get_at((int(idle.x) + 3, int(idle.y) + 3)))[:3] == COLOUR_NOT_HOVERED

        assert view.poll_events() is not None


def test_open_failure_raises_presentation_error(headless, mocker):
    mocker.patch("pygame.display.set_mode", side_effect=pygame.error("no video device"))
    view = PygameView(GameSettings())
    with pytest.raises(PresentationError, match="no video device"):
        view.open()


def test_surface_before_open():
    with pytest.raises(PresentationError):
        PygameView(GameSettings()).window_size()
