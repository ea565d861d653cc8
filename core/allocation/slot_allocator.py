import logging
from typing import Iterable, List, Optional, Tuple
from core.allocation.shape import derive_shape
from core.allocation.slot_grid import SlotGrid
from core.models.schema import Placement

logger = logging.getLogger(__name__)


class SlotAllocator:
    """
    Lays cards out on a grid 'line_capacity' slots wide, growing downwards.

    Single forward pass in input order: each card takes the topmost, then leftmost
    free rectangle of its shape. A card that does not fit within max_rows_amount
    rows gets None instead of a Placement. Nothing is ever moved once placed.
    """
    def __init__(self, line_capacity: int, max_rows_amount: Optional[int] = None):
        # line_capacity >= 1 is the caller's job (see CardsPacker.update)
        self.line_capacity = line_capacity
        self.max_rows_amount = max_rows_amount
        self.grid = SlotGrid()
        self.min_free_line = 0

    def reset(self):
        self.grid = SlotGrid()
        self.min_free_line = 0

    def allocate(self, sizes: Iterable) -> List[Optional[Placement]]:
        """
        Input: raw footprint sizes, in display order.
        Output: one Placement (or None for 'hide it') per size, same order.
        """
        self.reset()
        results = []
        for index, size in enumerate(sizes):
            shape = derive_shape(size, self.line_capacity)
            placement = self.find_and_place(shape)
            if placement is None:
                logger.debug(f"Card #{index} ({shape[0]}x{shape[1]}) does not fit into {self.max_rows_amount} rows")
            results.append(placement)

        logger.debug(f"Allocated {len(results)} cards on {self.line_capacity} slots per line, "
                     f"{self.grid.rows_amount} rows touched")
        return results

    def find_and_place(self, shape: Tuple[int, int]) -> Optional[Placement]:
        width, height = shape
        if width > self.line_capacity:
            return None

        pos = self._find_free_slot(width, height)
        if pos is None:
            return None

        x, y = pos
        self.grid.occupy_region(x, y, width, height)
        if y == self.min_free_line:
            self.min_free_line = self.grid.first_free_line(self.line_capacity, self.min_free_line)
        return Placement(x=x, y=y, width=width, height=height)

    def _find_free_slot(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        y = self.min_free_line
        while self.max_rows_amount is None or y + height <= self.max_rows_amount:
            for x in range(self.line_capacity - width + 1):
                if self.grid.is_region_free(x, y, width, height):
                    return (x, y)
            y += 1
        return None


def _normalize_max_rows(max_rows_amount) -> Optional[float]:
    if isinstance(max_rows_amount, bool) or not isinstance(max_rows_amount, (int, float)):
        return None
    return max_rows_amount


def spread_card_slots(sizes: Iterable, slots_per_line: int, max_rows_amount=None) -> List[Optional[Placement]]:
    """Functional entry point: a fresh allocator per call, nothing shared between calls."""
    allocator = SlotAllocator(slots_per_line, _normalize_max_rows(max_rows_amount))
    return allocator.allocate(sizes)


def lines_amount(placements: Iterable[Optional[Placement]]) -> int:
    """Number of rows spanned by all placed cards."""
    return max((p.bottom for p in placements if p is not None), default=0)
