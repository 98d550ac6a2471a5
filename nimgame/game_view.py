from dataclasses import dataclass
from typing import Dict, List, Optional

from nimgame.layout import HeapLayout, Point, Rect
from nimgame.nim_game import NimGame, Player
from nimgame.players import PlayerRole


@dataclass(frozen=True)
class HeapView:
    """What the screen shows of a single heap.

    Attributes:
        capacity: Maximum number of counters the heap could hold
        count: Counters left in the heap
        layout: Geometry computed for this frame, if any
        hover_offset: Offset from the top of the counter under the pointer
    """

    capacity: int
    count: int
    layout: Optional[HeapLayout] = None
    hover_offset: Optional[int] = None

    def stone_rects(self) -> List[Rect]:
        if self.layout is None:
            return []
        return [self.layout.stone_rect(n, self.count) for n in range(self.count)]

    def is_hovered(self, offset: int) -> bool:
        """True if taking the hovered counter would also take this one."""
        return self.hover_offset is not None and offset <= self.hover_offset


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot of the game handed to the presentation layer.

    Attributes:
        heaps: One HeapView per heap, in heap order
        player_to_move: Player whose turn it is
        role_to_move: Whether that player is the human or the computer
        is_terminal: Whether every heap is empty
        winner: Player who took the last counter if the game is over
        winner_role: Role of the winner if the game is over
    """

    heaps: List[HeapView]
    player_to_move: Player
    role_to_move: PlayerRole
    is_terminal: bool
    winner: Optional[Player] = None
    winner_role: Optional[PlayerRole] = None

    @classmethod
    def from_game(
        cls, game: NimGame, roles: Dict[Player, PlayerRole], pointer: Point
    ) -> "GameView":
        heaps = [
            HeapView(
                capacity=heap.capacity,
                count=heap.remaining_count(),
                layout=heap.layout,
                hover_offset=heap.hit_test(pointer),
            )
            for heap in game.heaps
        ]
        winner = game.get_winner()
        player = game.player_to_move()
        return cls(
            heaps=heaps,
            player_to_move=player,
            role_to_move=roles[player],
            is_terminal=game.is_over(),
            winner=winner,
            winner_role=roles[winner] if winner is not None else None,
        )

    def status_text(self) -> str:
        if self.is_terminal and self.winner is not None:
            return f"Player {self.winner.value} ({self.winner_role.value}) wins!"
        return f"Player {self.player_to_move.value} to move ({self.role_to_move.value})"
