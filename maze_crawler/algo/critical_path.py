import logging
import random
from typing import Iterator, List
from maze_crawler.core.grid import Grid, Position
from maze_crawler.algo.base import Generator
from maze_crawler.algo.rules import legal_directions

logger = logging.getLogger(__name__)

class CriticalPathCarver(Generator):
    """
    Random walk from the start cell until no legal direction is left.
    The cell it gets stuck on becomes the END.
    """
    def __init__(self, grid: Grid, start: Position, rng: random.Random = None):
        super().__init__(grid, rng)
        self.start = start
        self.path: List[Position] = []

    def run(self) -> Iterator[str]:
        cx, cy = self.start
        self.path = [(cx, cy)]

        while True:
            directions = legal_directions(self.grid, cx, cy)
            if not directions:
                break

            direction = self.rng.choice(directions)
            cx, cy = self.grid.step(cx, cy, direction)
            self.grid.carve(cx, cy)
            self.path.append((cx, cy))
            self.step_count += 1

            if self.step_count % 10 == 0:
                yield f"Carving critical path... Length: {len(self.path)}"

        if (cx, cy) == self.start:
            logger.warning(f"Start {self.start} has no legal direction; End placed on Start")

        self.grid.mark_end(cx, cy)
        yield "Done"
