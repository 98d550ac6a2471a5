import logging
import time
from enum import Enum
from typing import Callable, Dict, Optional

from nimgame.layout import Point
from nimgame.nim_game import NimGame, NimMove, Player

logger = logging.getLogger("nimgame")


class PlayerRole(Enum):
    HUMAN = "human"
    COMPUTER = "computer"


def build_role_map(human_player: Player) -> Dict[Player, PlayerRole]:
    """Map both turn values to a role, with one human and one computer."""
    return {
        human_player: PlayerRole.HUMAN,
        human_player.other(): PlayerRole.COMPUTER,
    }


class HumanPlayer:
    """Turns a click into a move by hit-testing heaps in index order."""

    def resolve_click(self, game: NimGame, point: Point) -> Optional[NimMove]:
        for index, heap in enumerate(game.heaps):
            offset = heap.hit_test(point)
            if offset is not None:
                return NimMove(heap_index=index, count_to_remove=offset + 1)
        return None


class ComputerPlayer:
    """Plays the optimal move once a minimum delay has passed.

    The delay is measured from the last call to ``reset_timer`` (or from
    creation), so a human can follow what the computer does.
    """

    def __init__(self, move_delay: float, clock: Callable[[], float] = time.monotonic):
        self.move_delay = move_delay
        self.clock = clock
        self._last_move_time = clock()

    def reset_timer(self) -> None:
        self._last_move_time = self.clock()

    def is_ready(self) -> bool:
        return self.clock() - self._last_move_time >= self.move_delay

    def choose_move(self, game: NimGame) -> Optional[NimMove]:
        if not self.is_ready():
            return None
        move = game.compute_optimal_move()
        logger.debug(f"Computer chose {move} at Nim-sum {game.nim_sum()}")
        self.reset_timer()
        return move
