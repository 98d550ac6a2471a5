from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from nimgame.layout import HeapLayout, Point, Rect


@dataclass
class Heap:
    """A single pile of counters.

    ``count`` is clamped to ``capacity`` on creation and only ever goes
    down afterwards, through ``apply_removal``.
    """

    capacity: int
    count: int
    layout: Optional[HeapLayout] = field(default=None, compare=False)

    def __post_init__(self):
        self.count = min(self.capacity, self.count)

    def remaining_count(self) -> int:
        return self.count

    def apply_removal(self, n: int) -> None:
        # Bounds are checked by NimGame.validate_move
        self.count -= n

    def set_layout(self, area: Rect, stone_height: float) -> None:
        self.layout = HeapLayout(area=area, stone_height=stone_height)

    def hit_test(
        self, point: Point, layout: Optional[HeapLayout] = None
    ) -> Optional[int]:
        """Return the offset from the top of the counter under ``point``.

        Args:
            point: Pointer position in window coordinates
            layout: Geometry to test against; defaults to the last layout set

        Returns:
            0-based offset counted from the exposed end, or None on a miss.
            Taking the counter at offset ``i`` removes ``i + 1`` counters.
        """
        layout = layout or self.layout
        if layout is None:
            return None
        return layout.stone_at(point, self.count)

    def clone(self) -> "Heap":
        return Heap(capacity=self.capacity, count=self.count, layout=self.layout)

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "count": self.count}
