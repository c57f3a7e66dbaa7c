"""Cinema halls and their seat maps."""

from __future__ import annotations


class Hall:
    """A hall with a grid of seats; invalid dimensions give a closed 1x1 hall."""

    def __init__(self, id: int, rows: int, cols: int) -> None:
        self.id = id
        self.is_open = True
        if rows <= 0 or cols <= 0:
            rows, cols = 1, 1
            self.is_open = False
        self.rows = rows
        self.cols = cols
        self._seats = [[True] * cols for _ in range(rows)]

    def __repr__(self) -> str:
        return f"Hall(id={self.id}, rows={self.rows}, cols={self.cols}, is_open={self.is_open})"

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def close(self) -> None:
        """Mark the hall as no longer usable."""
        self.is_open = False

    def reserve_seat(self, row: int, col: int) -> bool:
        """Take a seat; False if the hall is closed, the seat is out of bounds or taken."""
        if not self.is_open or not self._in_bounds(row, col):
            return False
        if not self._seats[row][col]:
            return False
        self._seats[row][col] = False
        return True

    def free_seat(self, row: int, col: int) -> bool:
        """Release a seat; False if it is out of bounds."""
        if not self._in_bounds(row, col):
            return False
        self._seats[row][col] = True
        return True

    def is_seat_free(self, row: int, col: int) -> bool:
        """Whether a seat is free; False if it is out of bounds."""
        return self._in_bounds(row, col) and self._seats[row][col]

    def layout(self) -> str:
        """ASCII seat map ('.' free, 'X' taken); empty for a closed hall."""
        if not self.is_open:
            return ""
        lines = [f"Hall {self.id} ({self.rows}×{self.cols}) seating:\n"]
        for row in self._seats:
            lines.append("".join(". " if free else "X " for free in row) + "\n")
        return "".join(lines)