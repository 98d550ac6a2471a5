import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from operator import xor
from typing import Any, Dict, List, Optional, Tuple

from nimgame.heap import Heap

logger = logging.getLogger("nimgame")


class Player(Enum):
    ONE = "one"
    TWO = "two"

    def other(self) -> "Player":
        return Player.TWO if self is Player.ONE else Player.ONE


@dataclass(frozen=True)
class NimMove:
    """Represents a move in Nim: take counters from one heap."""

    heap_index: int
    count_to_remove: int

    def to_dict(self) -> dict:
        """Convert move to dictionary for logging."""
        return {"heap_index": self.heap_index, "count_to_remove": self.count_to_remove}

    def __str__(self) -> str:
        return f"take {self.count_to_remove} from heap {self.heap_index}"


class NimGame:
    """Heaps, turn order and move rules for a game of normal-play Nim.

    The player who takes the last counter wins. Whether the game is over
    and who won are derived from the heaps on every call rather than
    stored.
    """

    def __init__(
        self,
        heaps: Optional[List[Heap]] = None,
        default_heap: Optional[Heap] = None,
        first_player: Player = Player.ONE,
        rng: Optional[random.Random] = None,
    ):
        self.heaps: List[Heap] = list(heaps) if heaps else []
        self.default_heap = default_heap or Heap(capacity=1, count=1)
        self.player = first_player
        self.rng = rng or random.Random()

    @classmethod
    def from_counts(cls, counts: List[int], **kwargs: Any) -> "NimGame":
        """Create a game whose heaps are exactly full with the given counts."""
        return cls(heaps=[Heap(capacity=c, count=c) for c in counts], **kwargs)

    @classmethod
    def from_settings(cls, settings: Any, rng: Optional[random.Random] = None) -> "NimGame":
        """Start a new game with randomly filled heaps.

        Every heap has ``settings.max_stones_per_heap`` capacity and starts
        with between 1 and that many counters.
        """
        rng = rng or random.Random()
        capacity = settings.max_stones_per_heap
        game = cls(default_heap=Heap(capacity=capacity, count=capacity), rng=rng)
        for _ in range(settings.heaps_count):
            game.add_heap(capacity, rng.randint(1, max(capacity, 1)))
        return game

    def add_heap(self, capacity: int, count: int) -> None:
        self.heaps.append(Heap(capacity=capacity, count=count))

    def add_default_heap(self) -> None:
        self.heaps.append(self.default_heap.clone())

    def remove_last_heap(self) -> None:
        if self.heaps:
            self.heaps.pop()

    def heap_counts(self) -> List[int]:
        return [heap.remaining_count() for heap in self.heaps]

    def player_to_move(self) -> Player:
        return self.player

    def validate_move(self, move: NimMove) -> Tuple[bool, str]:
        """Validate if a move is legal in the current position.

        Args:
            move: The NimMove to validate

        Returns:
            Tuple of (is_valid, explanation_string)
        """
        if not 0 <= move.heap_index < len(self.heaps):
            return False, f"There is no heap {move.heap_index}."
        if move.count_to_remove < 1:
            return False, "You must take at least one counter."
        remaining = self.heaps[move.heap_index].remaining_count()
        if move.count_to_remove > remaining:
            return False, f"Heap {move.heap_index} only has {remaining} counters."
        return True, ""

    def attempt_move(self, move: NimMove) -> bool:
        """Apply a move for the player to move if it is legal.

        A rejected move leaves every heap and the turn untouched.

        Returns:
            True if the move was applied and the turn passed on
        """
        valid, reason = self.validate_move(move)
        if not valid:
            logger.debug(f"Rejected move by player {self.player.value} ({move}): {reason}")
            return False

        self.heaps[move.heap_index].apply_removal(move.count_to_remove)
        logger.debug(f"Player {self.player.value} played {move}")
        self.player = self.player.other()
        return True

    def is_over(self) -> bool:
        return all(heap.remaining_count() == 0 for heap in self.heaps)

    def get_winner(self) -> Optional[Player]:
        if not self.is_over():
            return None
        return self.player.other()  # Previous player took the last counter

    def nim_sum(self) -> int:
        return reduce(xor, self.heap_counts(), 0)

    def compute_optimal_move(self) -> Optional[NimMove]:
        """Pick a move following the Nim-sum strategy.

        From a winning position (non-zero Nim-sum) the move leaves a zero
        Nim-sum. From a losing position a single counter is taken from a
        random non-empty heap so the game still runs to its end. Ties are
        broken with ``self.rng``.

        Returns:
            A legal move, or None if every heap is empty
        """
        total = self.nim_sum()
        if total == 0:
            non_empty = [i for i, heap in enumerate(self.heaps) if heap.remaining_count() > 0]
            if not non_empty:
                return None
            return NimMove(heap_index=self.rng.choice(non_empty), count_to_remove=1)

        suitable = [
            i
            for i, heap in enumerate(self.heaps)
            if heap.remaining_count() > heap.remaining_count() ^ total
        ]
        index = self.rng.choice(suitable)
        count = self.heaps[index].remaining_count()
        return NimMove(heap_index=index, count_to_remove=count - (count ^ total))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heaps": [heap.to_dict() for heap in self.heaps],
            "player_to_move": self.player.value,
        }
