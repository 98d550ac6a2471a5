import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

from nimgame.config_loader import GameSettings
from nimgame.game_view import GameView
from nimgame.input_state import InputEvent, MouseState, is_quit_event
from nimgame.layout import compute_board_layout
from nimgame.nim_game import NimGame, NimMove, Player
from nimgame.players import ComputerPlayer, HumanPlayer, PlayerRole, build_role_map

logger = logging.getLogger("nimgame")


class PresentationAdapter(Protocol):
    """Window, input and drawing, as seen by the control loop."""

    def window_size(self) -> Tuple[int, int]: ...

    def poll_events(self) -> Iterable[InputEvent]: ...

    def render(self, view: GameView) -> None: ...


@dataclass
class GameResult:
    winner: Optional[Player]
    winner_role: Optional[PlayerRole]
    moves_played: int


@dataclass
class GameContext:
    """Everything one game owns: settings, engine, roles and input state."""

    settings: GameSettings
    game: NimGame
    roles: Dict[Player, PlayerRole]
    computer: ComputerPlayer
    human: HumanPlayer = field(default_factory=HumanPlayer)
    mouse: MouseState = field(default_factory=MouseState)

    @classmethod
    def create(
        cls,
        settings: GameSettings,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "GameContext":
        rng = rng or random.Random(settings.seed)
        return cls(
            settings=settings,
            game=NimGame.from_settings(settings, rng=rng),
            roles=build_role_map(settings.human_player),
            computer=ComputerPlayer(settings.ai_move_delay, clock=clock),
        )


class GameRunner:
    """Fixed-cadence loop: input, one move at most per player path, render, pace."""

    def __init__(
        self,
        context: GameContext,
        adapter: PresentationAdapter,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.context = context
        self.adapter = adapter
        self.clock = clock
        self.sleep = sleep
        self.moves_played = 0
        self.result: Optional[GameResult] = None

    def run(self) -> GameResult:
        game = self.context.game
        logger.info(
            f"Starting Nim with {len(game.heaps)} heaps, "
            f"human is player {self.context.settings.human_player.value}"
        )
        logger.debug(f"Initial position: {game.heap_counts()}")
        # The window is open by now; the computer's delay counts from here
        self.context.computer.reset_timer()
        while self.tick():
            pass
        if game.is_over():
            self._show_result()
        return self.result

    def _show_result(self) -> None:
        """Keep redrawing the final position until quit or the display time ends."""
        deadline = self.clock() + self.context.settings.result_display_time
        while self.clock() < deadline:
            start_time = self.clock()
            for event in self.adapter.poll_events():
                if is_quit_event(event):
                    return
                self.context.mouse.update(event)
            self._render()
            self._wait_to_next_frame(start_time)

    def tick(self) -> bool:
        """Run one frame.

        Returns:
            False once the game is over or the user asked to quit
        """
        start_time = self.clock()
        context = self.context

        for event in self.adapter.poll_events():
            if is_quit_event(event):
                logger.info("Quit requested")
                self.result = GameResult(winner=None, winner_role=None, moves_played=self.moves_played)
                return False
            context.mouse.update(event)

        clicked = context.mouse.consume_release()
        if clicked and self._role_to_move() is PlayerRole.HUMAN:
            self._play_human_click()
        if self._role_to_move() is PlayerRole.COMPUTER:
            self._play_computer()

        self._render()

        if context.game.is_over():
            winner = context.game.get_winner()
            winner_role = context.roles[winner] if winner is not None else None
            self.result = GameResult(winner=winner, winner_role=winner_role, moves_played=self.moves_played)
            logger.info(
                f"Game over after {self.moves_played} moves: "
                f"player {winner.value if winner else '-'} ({winner_role.value if winner_role else '-'}) wins"
            )
            return False

        self._wait_to_next_frame(start_time)
        return True

    def _role_to_move(self) -> PlayerRole:
        return self.context.roles[self.context.game.player_to_move()]

    def _play_human_click(self) -> None:
        context = self.context
        move = context.human.resolve_click(context.game, context.mouse.position)
        if move is None:
            return
        if self._apply(move, PlayerRole.HUMAN):
            context.computer.reset_timer()

    def _play_computer(self) -> None:
        context = self.context
        if context.game.is_over():
            return
        move = context.computer.choose_move(context.game)
        if move is not None:
            self._apply(move, PlayerRole.COMPUTER)

    def _apply(self, move: NimMove, role: PlayerRole) -> bool:
        game = self.context.game
        player = game.player_to_move()
        if not game.attempt_move(move):
            return False
        self.moves_played += 1
        logger.info(f"Turn {self.moves_played}: player {player.value} ({role.value}) {move}")
        return True

    def _render(self) -> None:
        context = self.context
        game = context.game
        counts = game.heap_counts()
        layouts = compute_board_layout(
            self.adapter.window_size(), len(counts), max(counts, default=0)
        )
        for heap, layout in zip(game.heaps, layouts):
            heap.set_layout(layout.area, layout.stone_height)
        self.adapter.render(GameView.from_game(game, context.roles, context.mouse.position))

    def _wait_to_next_frame(self, start_time: float) -> None:
        elapsed = self.clock() - start_time
        remaining = self.context.settings.frame_interval - elapsed
        if remaining > 0:
            self.sleep(remaining)
