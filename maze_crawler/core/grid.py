from array import array
from typing import Iterator, List, Optional, Tuple

Position = Tuple[int, int]

class Grid:
    # Cell kinds, stored as their ASCII byte
    WALL   = ord('1')
    FLOOR  = ord('0')
    BORDER = ord('B')
    START  = ord('S')
    END    = ord('E')

    KINDS = (WALL, FLOOR, BORDER, START, END)
    # Cells a corridor may not touch
    PATH_KINDS = (FLOOR, START, END)

    # Directions
    UP    = 'up'
    DOWN  = 'down'
    LEFT  = 'left'
    RIGHT = 'right'
    DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

    # Direction Helpers
    DX = {UP: 0, DOWN: 0, LEFT: -1, RIGHT: 1}
    DY = {UP: -1, DOWN: 1, LEFT: 0, RIGHT: 0}
    OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}
    PERPENDICULAR = {UP: (LEFT, RIGHT), DOWN: (LEFT, RIGHT), LEFT: (UP, DOWN), RIGHT: (UP, DOWN)}

    __slots__ = ('width', 'height', 'cells', 'start', 'end', 'event_writer')

    def __init__(self, width: int, height: int, event_writer=None):
        self.width = width
        self.height = height
        self.event_writer = event_writer
        self.start: Optional[Position] = None
        self.end: Optional[Position] = None
        # Initialize with all walls, 1 byte per cell
        self.cells = array('B', [self.WALL] * (width * height))

        if self.event_writer:
            self.event_writer.write_header(width, height)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        return self.cells[self.get_index(x, y)]

    def set(self, x: int, y: int, kind: int):
        self.cells[self.get_index(x, y)] = kind

    def step(self, x: int, y: int, direction: str, distance: int = 1) -> Position:
        return x + self.DX[direction] * distance, y + self.DY[direction] * distance

    def draw_border(self):
        """Turns the outermost ring of cells into BORDER."""
        for y in range(self.height):
            for x in range(self.width):
                if self.is_border(x, y):
                    self.cells[y * self.width + x] = self.BORDER

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def carve(self, x: int, y: int):
        self.set(x, y, self.FLOOR)
        if self.event_writer:
            self.event_writer.log_carve(x, y)

    def mark_start(self, x: int, y: int):
        self.set(x, y, self.START)
        self.start = (x, y)
        if self.event_writer:
            self.event_writer.log_start(x, y)

    def mark_end(self, x: int, y: int):
        self.set(x, y, self.END)
        self.end = (x, y)
        if self.event_writer:
            self.event_writer.log_end(x, y)

    def find(self, kind: int) -> Optional[Position]:
        """Position of the first cell of this kind in row-major order, or None."""
        try:
            idx = self.cells.index(kind)
        except ValueError:
            return None
        return idx % self.width, idx // self.width

    def count(self, kind: int) -> int:
        return self.cells.count(kind)

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, str]]:
        """
        Yields (nx, ny, direction_to_neighbor) for in-bounds cardinal neighbors,
        in UP, DOWN, LEFT, RIGHT order.
        """
        for direction in self.DIRECTIONS:
            nx, ny = self.step(x, y, direction)
            if self.in_bounds(nx, ny):
                yield (nx, ny, direction)

    def is_passable(self, x: int, y: int) -> bool:
        return self.cells[y * self.width + x] in self.PATH_KINDS

    def rows(self) -> List[bytes]:
        return [self.cells[y * self.width:(y + 1) * self.width].tobytes() for y in range(self.height)]

    def to_text(self) -> str:
        return "\n".join(row.decode('ascii') for row in self.rows())

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Grid":
        """Builds a grid from text rows, e.g. a test fixture. Start/End are picked up from the cells."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has length {len(row)}, expected {width}")
            grid.cells[y * width:(y + 1) * width] = array('B', row.encode('ascii'))
        grid.start = grid.find(cls.START)
        grid.end = grid.find(cls.END)
        return grid
