from typing import List


class SlotGrid:
    """
    Growable occupancy map of the card list.

    rows[y][x] is True when the slot is taken. Rows are appended lazily and may
    have different lengths; anything outside the allocated area reads as free.
    Nothing is ever released, a grid lives for exactly one allocation pass.
    """
    def __init__(self):
        self.rows: List[List[bool]] = []

    @property
    def rows_amount(self) -> int:
        return len(self.rows)

    def is_occupied(self, x: int, y: int) -> bool:
        if y >= len(self.rows):
            return False
        row = self.rows[y]
        return x < len(row) and row[x]

    def is_region_free(self, x: int, y: int, width: int, height: int) -> bool:
        for i in range(y, y + height):
            if i >= len(self.rows):
                break
            row = self.rows[i]
            for j in range(x, x + width):
                if j >= len(row):
                    break
                if row[j]:
                    return False
        return True

    def occupy_region(self, x: int, y: int, width: int, height: int):
        while len(self.rows) < y + height:
            self.rows.append([])

        for i in range(y, y + height):
            row = self.rows[i]
            # Pad the gap left of the region, the region itself is written below
            while len(row) < x:
                row.append(False)
            for j in range(x, x + width):
                if j < len(row):
                    row[j] = True
                else:
                    row.append(True)

    def first_free_line(self, line_capacity: int, from_row: int = 0) -> int:
        """
        First row at or after from_row with a free slot among the first line_capacity
        columns. Rows past the allocated area are empty, so the scan always stops.
        """
        line = from_row
        while line < len(self.rows):
            row = self.rows[line]
            if any(x >= len(row) or not row[x] for x in range(line_capacity)):
                break
            line += 1
        return line

    def snapshot(self) -> List[str]:
        """Text picture of the grid ('#' taken, '.' free), handy in logs and asserts."""
        width = max((len(r) for r in self.rows), default=0)
        return ["".join("#" if self.is_occupied(x, y) else "." for x in range(width))
                for y in range(len(self.rows))]
