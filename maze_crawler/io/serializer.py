import logging
import struct
from array import array
from typing import BinaryIO
from maze_crawler.core.grid import Grid
from maze_crawler.core.errors import WriteFailure, ReadFailure, MazeFormatError

logger = logging.getLogger(__name__)

class MazeSerializer:
    """
    Maze file format:
    - WIDTH (1 byte)
    - HEIGHT (1 byte)
    - START_X (1 byte)
    - START_Y (1 byte)
    - CELLS (WIDTH * HEIGHT bytes, row-major, raw cell values)
    """
    HEADER = struct.Struct("BBBB")
    HEADER_SIZE = HEADER.size

    @staticmethod
    def encode_header(grid: Grid) -> bytes:
        if grid.start is None:
            raise MazeFormatError("Grid has no START cell to record in the header")
        sx, sy = grid.start
        try:
            return MazeSerializer.HEADER.pack(grid.width, grid.height, sx, sy)
        except struct.error as e:
            raise MazeFormatError(f"Header field out of byte range: {e}") from e

    @staticmethod
    def _write_all(sink: BinaryIO, data: bytes, phase: str):
        try:
            written = sink.write(data)
        except OSError as e:
            raise WriteFailure(phase, str(e)) from e
        # Raw streams may report a short write
        if written is not None and written != len(data):
            raise WriteFailure(phase, f"wrote {written} of {len(data)} bytes")

    @staticmethod
    def write(grid: Grid, sink: BinaryIO):
        header = MazeSerializer.encode_header(grid)
        MazeSerializer._write_all(sink, header, "header")
        MazeSerializer._write_all(sink, grid.cells.tobytes(), "grid")

    @staticmethod
    def save(grid: Grid, filepath: str):
        logger.debug(f"Saving {grid.width}x{grid.height} maze to {filepath}")
        # Fail on a bad grid before the file gets truncated
        header = MazeSerializer.encode_header(grid)
        try:
            f = open(filepath, "wb")
        except OSError as e:
            raise WriteFailure("header", str(e)) from e
        with f:
            MazeSerializer._write_all(f, header, "header")
            MazeSerializer._write_all(f, grid.cells.tobytes(), "grid")

    @staticmethod
    def _read_exact(source: BinaryIO, size: int, phase: str) -> bytes:
        try:
            data = source.read(size)
        except OSError as e:
            raise ReadFailure(phase, str(e)) from e
        if data is None or len(data) != size:
            got = 0 if data is None else len(data)
            raise ReadFailure(phase, f"expected {size} bytes, got {got}")
        return data

    @staticmethod
    def read(source: BinaryIO) -> Grid:
        header = MazeSerializer._read_exact(source, MazeSerializer.HEADER_SIZE, "header")
        width, height, sx, sy = MazeSerializer.HEADER.unpack(header)
        if width == 0 or height == 0:
            raise MazeFormatError(f"Invalid maze dimensions {width}x{height}")

        data = MazeSerializer._read_exact(source, width * height, "grid")

        grid = Grid(width, height)
        grid.cells = array('B', data)

        for value in set(data):
            if value not in Grid.KINDS:
                raise MazeFormatError(f"Unknown cell value {value!r} in maze data")

        if not (1 <= sx <= width - 2 and 1 <= sy <= height - 2):
            raise MazeFormatError(f"Start ({sx}, {sy}) is not an interior cell of the {width}x{height} maze")
        # A maze whose walk was stuck at once holds END on the start cell
        if grid.get(sx, sy) not in (Grid.START, Grid.END):
            raise MazeFormatError(f"Header start ({sx}, {sy}) is not a START cell")

        # The player must never be able to step off the grid
        for y in range(height):
            for x in range(width):
                if grid.is_border(x, y) and grid.get(x, y) not in (Grid.BORDER, Grid.WALL):
                    raise MazeFormatError(f"Outer ring cell ({x}, {y}) is passable")

        grid.start = (sx, sy)
        grid.end = grid.find(Grid.END)
        return grid

    @staticmethod
    def load(filepath: str) -> Grid:
        logger.debug(f"Loading maze from {filepath}")
        with open(filepath, "rb") as f:
            return MazeSerializer.read(f)
