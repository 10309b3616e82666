import logging
import random
import time
from typing import BinaryIO, Iterator, Optional
from maze_crawler.core.grid import Grid, Position
from maze_crawler.core.errors import InvalidDimensions
from maze_crawler.algo.base import Generator
from maze_crawler.algo.critical_path import CriticalPathCarver
from maze_crawler.algo.dead_ends import DeadEndFiller
from maze_crawler.io.serializer import MazeSerializer

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Random source for one program run. Without a seed, the current time is used."""
    if seed is None:
        seed = time.time_ns()
    logger.info(f"Random seed: {seed}")
    return random.Random(seed)


class MazeGenerator(Generator):
    """
    Full pipeline: all walls, border, random START, critical path to END,
    then dead-end branches until nothing else can be carved.
    """
    def __init__(self, width: int, height: int, rng: random.Random = None,
                 start: Optional[Position] = None, event_writer=None):
        InvalidDimensions.check(width, height)
        if start is not None:
            sx, sy = start
            if not (1 <= sx <= width - 2 and 1 <= sy <= height - 2):
                raise ValueError(f"Start {start} is not an interior cell of a {width}x{height} maze")

        if rng is None:
            rng = make_rng()
        super().__init__(Grid(width, height, event_writer=event_writer), rng)
        self.width = width
        self.height = height
        self.start = start
        self.carver: Optional[CriticalPathCarver] = None
        self.filler: Optional[DeadEndFiller] = None

    def pick_start(self) -> Position:
        # Interior only, the border ring is never a start
        x = self.rng.randint(1, self.width - 2)
        y = self.rng.randint(1, self.height - 2)
        return x, y

    def run(self) -> Iterator[str]:
        self.grid.draw_border()
        yield "Border drawn"

        if self.start is None:
            self.start = self.pick_start()
        self.grid.mark_start(*self.start)
        logger.debug(f"Start placed at {self.start}")

        self.carver = CriticalPathCarver(self.grid, self.start, self.rng)
        yield from self.carver.run()
        logger.debug(f"Critical path: {len(self.carver.path)} cells, End at {self.grid.end}")

        self.filler = DeadEndFiller(self.grid, self.rng)
        yield from self.filler.run()
        logger.debug(f"Dead ends: {self.filler.carved} cells carved in {self.filler.passes} passes")

        self.step_count = self.carver.step_count + self.filler.step_count

    def build(self) -> Grid:
        self.run_all()
        return self.grid


def generate(width: int, height: int, sink: BinaryIO, rng: random.Random = None) -> Grid:
    """
    Generates a maze and writes it to 'sink' as a complete maze file.
    Raises InvalidDimensions before doing any work, WriteFailure if the sink fails.
    """
    grid = MazeGenerator(width, height, rng=rng).build()
    MazeSerializer.write(grid, sink)
    return grid
