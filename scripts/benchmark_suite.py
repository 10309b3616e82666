import sys
import os
import random
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_crawler.algo.maze_gen import MazeGenerator
from maze_crawler.core.analysis import MazeInspector
from maze_crawler.io.serializer import MazeSerializer

def benchmark_size(width: int, height: int, seed: int = 42):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")

    gen_start = time.time()
    generator = MazeGenerator(width, height, rng=random.Random(seed))
    grid = generator.build()
    gen_time = time.time() - gen_start

    print(f"Generation Time: {gen_time:.4f}s")
    print(f"Speed: {(width*height)/gen_time:,.0f} cells/sec")
    print(f"Critical path: {len(generator.carver.path)} cells")
    print(f"Dead-end passes: {generator.filler.passes} (carved {generator.filler.carved})")

    header = MazeSerializer.encode_header(grid)
    print(f"Header: {list(header)}")

    stats = MazeInspector.calculate_stats(grid)
    print(f"Fill: {stats['fill_percent']:.1f}%  Dead ends: {stats['dead_ends']}  Solution: {stats['solution_length']}")

def run_suite():
    sizes = [
        (10, 10),      # smallest recommended
        (150, 50),     # largest recommended
        (255, 255),    # header byte limit
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
