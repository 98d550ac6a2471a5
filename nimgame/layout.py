from dataclasses import dataclass
from typing import List, Optional, Tuple

Point = Tuple[float, float]

# Board geometry, in pixels
MARGIN_TOP = 100
GAME_AREA_FRACTION = 0.9
MARGIN_BETWEEN_HEAPS = 10.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: Point) -> bool:
        px, py = point
        return self.x <= px < self.right and self.y <= py < self.bottom


@dataclass(frozen=True)
class HeapLayout:
    """Screen geometry of one heap.

    Attributes:
        area: Bounding rectangle of the heap column
        stone_height: Vertical pitch of a single counter
    """

    area: Rect
    stone_height: float

    def stone_rect(self, offset: int, count: int) -> Rect:
        """Return the rectangle of a counter, counted from the top of the stack.

        Counters rest on the bottom edge of the area, so with ``count``
        counters left the exposed one (offset 0) sits ``count`` pitches
        above the bottom.
        """
        y = self.area.bottom - (count - offset) * self.stone_height
        return Rect(self.area.x, y, self.area.width, self.stone_height)

    def stone_at(self, point: Point, count: int) -> Optional[int]:
        """Return the offset from the top of the counter under ``point``.

        Returns None when the pointer is not over any of the ``count``
        remaining counters.
        """
        if count <= 0 or self.stone_height <= 0:
            return None
        px, py = point
        if not self.area.x <= px < self.area.right:
            return None
        stack_top = self.area.bottom - count * self.stone_height
        if py < stack_top or py >= self.area.bottom:
            return None
        return min(int((py - stack_top) // self.stone_height), count - 1)


def compute_board_layout(
    window_size: Tuple[int, int], heaps_count: int, tallest_heap: int
) -> List[HeapLayout]:
    """Split the window into one column per heap.

    Args:
        window_size: Current (width, height) of the drawing surface
        heaps_count: Number of heaps to lay out
        tallest_heap: Largest remaining count, used to size a counter

    Returns:
        One HeapLayout per heap, in heap order
    """
    if heaps_count <= 0:
        return []

    window_width, window_height = window_size
    game_area_width = window_width * GAME_AREA_FRACTION
    game_area_height = max(window_height - MARGIN_TOP, 0) * GAME_AREA_FRACTION
    margin_x = (window_width - game_area_width) / 2.0
    half_gap = MARGIN_BETWEEN_HEAPS * 0.5

    heap_width = max(game_area_width / heaps_count - MARGIN_BETWEEN_HEAPS, 1.0)
    stone_height = game_area_height / max(tallest_heap, 1)

    layouts = []
    for i in range(heaps_count):
        x = margin_x + half_gap + i * (heap_width + MARGIN_BETWEEN_HEAPS)
        area = Rect(x, float(MARGIN_TOP), heap_width, game_area_height)
        layouts.append(HeapLayout(area=area, stone_height=stone_height))
    return layouts
