import unittest
import sys
import os
import io
import random

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_crawler.core.grid import Grid
from maze_crawler.core.errors import InvalidDimensions
from maze_crawler.core.analysis import MazeInspector
from maze_crawler.algo.critical_path import CriticalPathCarver
from maze_crawler.algo.dead_ends import DeadEndFiller
from maze_crawler.algo.maze_gen import MazeGenerator, generate, make_rng
from maze_crawler.io.serializer import MazeSerializer

class FirstChoiceRandom(random.Random):
    """Always takes the first option and always wins the coin flip."""
    def choice(self, seq):
        return seq[0]

    def random(self):
        return 0.0

# 10x10 from start (1, 8): critical path only
CRITICAL_PATH_10 = [
    "BBBBBBBBBB",
    "B00010001B",
    "B01010101B",
    "B01010101B",
    "B01010101B",
    "B01010101B",
    "B01010101B",
    "B01010101B",
    "BS100010EB",
    "BBBBBBBBBB",
]

# Same maze after dead-end filling
FULL_MAZE_10 = [
    "BBBBBBBBBB",
    "B00010000B",
    "B01010101B",
    "B01010100B",
    "B01010101B",
    "B01010100B",
    "B01010101B",
    "B01010101B",
    "BS100010EB",
    "BBBBBBBBBB",
]

def bordered_grid(width, height, start):
    grid = Grid(width, height)
    grid.draw_border()
    grid.mark_start(*start)
    return grid

class TestCriticalPath(unittest.TestCase):
    def test_deterministic_path(self):
        grid = bordered_grid(10, 10, (1, 8))
        carver = CriticalPathCarver(grid, (1, 8), FirstChoiceRandom())
        carver.run_all()

        self.assertEqual(grid.to_text().split("\n"), CRITICAL_PATH_10)
        self.assertEqual(grid.end, (8, 8))
        self.assertEqual(len(carver.path), 36)
        self.assertEqual(carver.path[:3], [(1, 8), (1, 7), (1, 6)])
        self.assertEqual(carver.path[-3:], [(7, 7), (7, 8), (8, 8)])

    def test_path_is_simple_and_cardinal(self):
        for seed in range(10):
            grid = bordered_grid(30, 20, (15, 10))
            carver = CriticalPathCarver(grid, (15, 10), random.Random(seed))
            carver.run_all()

            path = carver.path
            self.assertEqual(len(path), len(set(path)), "Critical path revisits a cell")
            for (x1, y1), (x2, y2) in zip(path, path[1:]):
                self.assertEqual(abs(x1 - x2) + abs(y1 - y2), 1)
            self.assertEqual(path[0], (15, 10))
            self.assertEqual(path[-1], grid.end)
            self.assertEqual(grid.get(*grid.end), Grid.END)
            # Every carved cell belongs to the path
            self.assertEqual(grid.count(Grid.FLOOR), len(path) - 2)

    def test_stuck_start_becomes_end(self):
        grid = bordered_grid(3, 3, (1, 1))
        carver = CriticalPathCarver(grid, (1, 1), random.Random(0))
        with self.assertLogs("maze_crawler.algo.critical_path", level="WARNING"):
            carver.run_all()
        self.assertEqual(grid.end, (1, 1))
        self.assertEqual(grid.get(1, 1), Grid.END)
        self.assertEqual(carver.path, [(1, 1)])

class TestDeadEndFiller(unittest.TestCase):
    def test_deterministic_fill(self):
        grid = Grid.from_rows(CRITICAL_PATH_10)
        filler = DeadEndFiller(grid, FirstChoiceRandom())
        filler.run_all()

        self.assertEqual(grid.to_text().split("\n"), FULL_MAZE_10)
        self.assertEqual(filler.carved, 3)
        self.assertEqual(filler.passes, 2)

    def test_fixed_point(self):
        grid = MazeGenerator(40, 25, rng=random.Random(7)).build()
        self.assertEqual(MazeInspector.carvable_cells(grid), [])

        before = grid.cells.tobytes()
        filler = DeadEndFiller(grid, random.Random(8))
        filler.run_all()
        self.assertEqual(grid.cells.tobytes(), before)
        self.assertEqual(filler.carved, 0)
        self.assertEqual(filler.passes, 1)

    def test_progress_counts_without_carving(self):
        # Odds of 0 mean no coin ever lands, but the first pass still registers progress
        class Stubborn(DeadEndFiller):
            passes_allowed = 3

            def run(self):
                for status in super().run():
                    if self.passes > self.passes_allowed:
                        return
                    yield status

        grid = Grid.from_rows(CRITICAL_PATH_10)
        filler = Stubborn(grid, FirstChoiceRandom())
        filler.COIN_ODDS = 0.0
        filler.run_all()
        self.assertEqual(grid.to_text().split("\n"), CRITICAL_PATH_10)
        self.assertGreater(filler.step_count, 0)
        # Failed coin flips kept the filler going for several passes
        self.assertGreater(filler.passes, 1)
        self.assertEqual(filler.carved, 0)

class TestMazeGenerator(unittest.TestCase):
    def assert_valid_maze(self, grid: Grid):
        w, h = grid.width, grid.height
        for y in range(h):
            for x in range(w):
                if x in (0, w - 1) or y in (0, h - 1):
                    self.assertEqual(grid.get(x, y), Grid.BORDER)
                else:
                    self.assertNotEqual(grid.get(x, y), Grid.BORDER)

        self.assertEqual(grid.count(Grid.START), 1)
        self.assertEqual(grid.count(Grid.END), 1)
        self.assertEqual(grid.find(Grid.START), grid.start)
        self.assertEqual(grid.find(Grid.END), grid.end)
        self.assertEqual(MazeInspector.find_wide_blocks(grid), [])
        self.assertEqual(MazeInspector.carvable_cells(grid), [])
        self.assertTrue(MazeInspector.trace_path(grid, grid.start, grid.end))

    def test_deterministic_fixture(self):
        grid = MazeGenerator(10, 10, rng=FirstChoiceRandom(), start=(1, 8)).build()
        self.assertEqual(grid.to_text().split("\n"), FULL_MAZE_10)
        self.assertEqual(grid.start, (1, 8))
        self.assertEqual(grid.end, (8, 8))

    def test_seeded_determinism(self):
        grid1 = MazeGenerator(30, 15, rng=random.Random(12345)).build()
        gen2 = MazeGenerator(30, 15, rng=random.Random(12345))
        for _ in gen2.run(): pass

        self.assertEqual(grid1.cells.tobytes(), gen2.grid.cells.tobytes())
        self.assertEqual(grid1.start, gen2.grid.start)

    def test_invariants_many_seeds(self):
        for seed in range(15):
            grid = MazeGenerator(20, 12, rng=random.Random(seed)).build()
            self.assert_valid_maze(grid)

    def test_start_is_interior(self):
        for seed in range(50):
            gen = MazeGenerator(10, 10, rng=random.Random(seed))
            x, y = gen.pick_start()
            self.assertTrue(1 <= x <= 8 and 1 <= y <= 8)

    def test_minimum_recommended_size(self):
        grid = MazeGenerator(10, 10, rng=random.Random(1)).build()
        self.assert_valid_maze(grid)

    def test_maximum_size(self):
        sink = io.BytesIO()
        grid = generate(255, 255, sink, rng=random.Random(2))
        self.assert_valid_maze(grid)

        data = sink.getvalue()
        self.assertEqual(len(data), 4 + 255 * 255)
        self.assertEqual(data[0], 255)
        self.assertEqual(data[1], 255)
        self.assertEqual((data[2], data[3]), grid.start)

    def test_invalid_dimensions(self):
        sink = io.BytesIO()
        for w, h in [(0, 10), (10, 2), (256, 10), (10, 300), (-5, 10)]:
            with self.assertRaises(InvalidDimensions):
                generate(w, h, sink, rng=random.Random(0))
        self.assertEqual(sink.getvalue(), b"")

    def test_invalid_start(self):
        with self.assertRaises(ValueError):
            MazeGenerator(10, 10, start=(0, 5))
        with self.assertRaises(ValueError):
            MazeGenerator(10, 10, start=(5, 9))

    def test_degenerate_maze(self):
        grid = MazeGenerator(3, 3, rng=random.Random(0)).build()
        # Start and End share the only interior cell
        self.assertEqual(grid.start, (1, 1))
        self.assertEqual(grid.end, (1, 1))
        self.assertEqual(grid.get(1, 1), Grid.END)

    def test_generate_round_trip(self):
        sink = io.BytesIO()
        grid = generate(25, 15, sink, rng=random.Random(3))
        sink.seek(0)
        loaded = MazeSerializer.read(sink)
        self.assertEqual(loaded.cells.tobytes(), grid.cells.tobytes())
        self.assertEqual(loaded.start, grid.start)
        self.assertEqual(loaded.end, grid.end)

    def test_make_rng(self):
        self.assertEqual(make_rng(5).random(), random.Random(5).random())
        self.assertIsInstance(make_rng(), random.Random)

    def test_default_rng_logs_seed(self):
        with self.assertLogs("maze_crawler.algo.maze_gen", level="INFO") as logs:
            generator = MazeGenerator(12, 12)
        self.assertTrue(any("Random seed" in line for line in logs.output))
        self.assertIsInstance(generator.rng, random.Random)

if __name__ == '__main__':
    unittest.main()
