import argparse
import sys
import os
import logging
from typing import Callable

# Ensure project root is in path so we can import 'maze_crawler' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_crawler.core.errors import InvalidDimensions, WriteFailure, ReadFailure, MazeFormatError

logger = logging.getLogger("maze_crawler")

# Recommended size bounds for interactive mazes
MIN_WIDTH, MAX_WIDTH = 10, 150
MIN_HEIGHT, MAX_HEIGHT = 10, 50
MAX_FILENAME = 10
MAZE_EXTENSION = ".maze"

EXIT_OK = 0
EXIT_INPUT = 1
EXIT_WRITE = 2
EXIT_READ = 3
EXIT_FORMAT = 4

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def prompt_yes_no(question: str, input_fn: Callable[[str], str] = input) -> bool:
    answer = ""
    while answer not in ("y", "n"):
        answer = input_fn(question + " (y/n)\n").strip().lower()[:1]
    return answer == "y"

def prompt_int(label: str, low: int, high: int, input_fn: Callable[[str], str] = input) -> int:
    while True:
        raw = input_fn(f"Desired {label} ({low} - {high}): ")
        try:
            value = int(raw)
        except ValueError:
            continue
        if low <= value <= high:
            return value

def prompt_filename(input_fn: Callable[[str], str] = input) -> str:
    """Asks for a maze name until it is usable, confirming overwrites. Returns the path with extension."""
    while True:
        name = input_fn(f"Desired filename ({MAX_FILENAME} characters maximum, no spaces):\n").strip()
        if not name or len(name) > MAX_FILENAME or " " in name:
            continue
        path = name + MAZE_EXTENSION
        if not os.path.exists(path):
            return path
        if prompt_yes_no("A file with this filename already exists. Overwrite file?", input_fn):
            return path

def create_maze(args, input_fn: Callable[[str], str] = input) -> str:
    """Prompts for whatever 'args' leaves open, then generates and saves the maze. Returns its path."""
    from maze_crawler.algo.maze_gen import MazeGenerator, make_rng
    from maze_crawler.io.serializer import MazeSerializer

    if args.out:
        out = args.out if args.out.endswith(MAZE_EXTENSION) else args.out + MAZE_EXTENSION
    else:
        out = prompt_filename(input_fn)
    width = args.width if args.width is not None else prompt_int("width", MIN_WIDTH, MAX_WIDTH, input_fn)
    height = args.height if args.height is not None else prompt_int("height", MIN_HEIGHT, MAX_HEIGHT, input_fn)

    InvalidDimensions.check(width, height)

    evt_writer = None
    if getattr(args, "record_events", None):
        from maze_crawler.core.events import EventWriter
        try:
            evt_writer = EventWriter(args.record_events)
        except OSError as e:
            raise WriteFailure("header", f"cannot open event log: {e}") from e
        logger.info(f"Recording events to {args.record_events}...")

    try:
        logger.info(f"Generating {width}x{height} maze...")
        generator = MazeGenerator(width, height, rng=make_rng(args.seed), event_writer=evt_writer)

        if getattr(args, "visual", False):
            from maze_crawler.viz.renderer import Renderer
            renderer = Renderer(generator.grid, generator=generator)
            renderer.init_window()
            renderer.run_loop()
            # Window may close before the generator is done
            renderer.finish_generator()
        else:
            generator.run_all()
    finally:
        if evt_writer:
            evt_writer.close()

    grid = generator.grid
    logger.info(f"Start {grid.start}, End {grid.end}, "
                f"{generator.filler.carved} dead-end cells in {generator.filler.passes} passes")

    logger.info(f"Saving maze to {out}...")
    MazeSerializer.save(grid, out)
    logger.info("Save complete.")
    return out

def play_file(path: str, input_fn: Callable[[str], str] = input) -> bool:
    from maze_crawler.io.serializer import MazeSerializer
    from maze_crawler.game.play import play

    grid = MazeSerializer.load(path)
    logger.debug(f"Loaded {grid.width}x{grid.height} maze from {path}")
    return play(grid, input_fn=input_fn)

def cmd_new(args, input_fn=input) -> int:
    path = create_maze(args, input_fn)
    if not args.no_play:
        play_file(path, input_fn)
    return EXIT_OK

def cmd_play(args, input_fn=input) -> int:
    if not os.path.isfile(args.input_file):
        print("Invalid filename; could not open.")
        if not prompt_yes_no("Would you like to create a new maze instead?", input_fn):
            return EXIT_OK
        new_args = argparse.Namespace(out=None, width=None, height=None, seed=None,
                                      record_events=None, visual=False, no_play=False)
        return cmd_new(new_args, input_fn)

    play_file(args.input_file, input_fn)
    return EXIT_OK

def cmd_stats(args) -> int:
    from maze_crawler.io.serializer import MazeSerializer
    from maze_crawler.core.analysis import MazeInspector

    grid = MazeSerializer.load(args.input_file)
    stats = MazeInspector.calculate_stats(grid)
    print(f"\n{'STAT':<16} | {'VALUE':<10}")
    print("-" * 30)
    for key, value in stats.items():
        shown = f"{value:.1f}" if isinstance(value, float) else str(value)
        print(f"{key:<16} | {shown:<10}")

    wide = MazeInspector.find_wide_blocks(grid)
    if wide:
        logger.warning(f"Maze has {len(wide)} corridor blocks wider than one cell")
    return EXIT_OK

def cmd_view(args) -> int:
    from maze_crawler.io.serializer import MazeSerializer
    from maze_crawler.core.analysis import MazeInspector
    from maze_crawler.viz.renderer import Renderer
    from maze_crawler.viz.recorder import recording_path

    grid = MazeSerializer.load(args.input_file)
    solution = []
    if args.solution and grid.start and grid.end:
        solution = MazeInspector.trace_path(grid, grid.start, grid.end)

    renderer = Renderer(grid, solution=solution, record=args.record)
    if args.record:
        base_name = os.path.basename(args.input_file).replace(MAZE_EXTENSION, "")
        renderer.recorder.output_file = recording_path("view", base_name)
        logger.info(f"Recording video to {renderer.recorder.output_file}")
    renderer.init_window()
    renderer.run_loop()
    return EXIT_OK

def cmd_replay(args) -> int:
    from maze_crawler.core.events import EventReader
    from maze_crawler.viz.replay import EventAdapter
    from maze_crawler.viz.renderer import Renderer
    from maze_crawler.viz.recorder import recording_path

    with EventReader(args.event_file) as reader:
        w, h = reader.read_header()
        logger.info(f"Log Header: {w}x{h}")
        grid = EventAdapter.blank_grid(w, h)
        adapter = EventAdapter(grid, reader)

        renderer = Renderer(grid, generator=adapter, record=args.record)
        if args.record:
            base_name = os.path.basename(args.event_file).replace(".events", "")
            renderer.recorder.output_file = recording_path("replay", base_name)
            logger.info(f"Recording replay to {renderer.recorder.output_file}")
        renderer.init_window()
        renderer.run_loop()
    return EXIT_OK

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Crawler: explore a procedurally generated maze")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    new_parser = subparsers.add_parser("new", help="Generate a new maze and play it")
    new_parser.add_argument("--out", type=str, help=f"Maze name ({MAZE_EXTENSION} is appended)")
    new_parser.add_argument("--width", type=int, help=f"Maze Width ({MIN_WIDTH} - {MAX_WIDTH} when prompted)")
    new_parser.add_argument("--height", type=int, help=f"Maze Height ({MIN_HEIGHT} - {MAX_HEIGHT} when prompted)")
    new_parser.add_argument("--seed", type=int, default=None, help="Random Seed (default: current time)")
    new_parser.add_argument("--record-events", type=str, help="Save generation events to binary file")
    new_parser.add_argument("--visual", action="store_true", help="Show generation in a window")
    new_parser.add_argument("--no-play", action="store_true", help="Only generate and save the maze")

    play_parser = subparsers.add_parser("play", help="Play a saved maze")
    play_parser.add_argument("input_file", help="Path to maze file")

    stats_parser = subparsers.add_parser("stats", help="Print statistics for a saved maze")
    stats_parser.add_argument("input_file", help="Path to maze file")

    view_parser = subparsers.add_parser("view", help="Show a saved maze in a window")
    view_parser.add_argument("input_file", help="Path to maze file")
    view_parser.add_argument("--solution", action="store_true", help="Highlight the path from Start to End")
    view_parser.add_argument("--record", action="store_true", help="Record video")

    replay_parser = subparsers.add_parser("replay", help="Replay a generation event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--record", action="store_true", help="Record video")

    return parser

def run(args, input_fn: Callable[[str], str] = input) -> int:
    try:
        if args.command == "new":
            return cmd_new(args, input_fn)
        elif args.command == "play":
            return cmd_play(args, input_fn)
        elif args.command == "stats":
            return cmd_stats(args)
        elif args.command == "view":
            return cmd_view(args)
        elif args.command == "replay":
            return cmd_replay(args)
    except InvalidDimensions as e:
        logger.error(str(e))
        return EXIT_INPUT
    except WriteFailure as e:
        logger.error(f"Error {EXIT_WRITE}: {e}")
        return EXIT_WRITE
    except ReadFailure as e:
        logger.error(f"Error {EXIT_READ}: {e}")
        return EXIT_READ
    except MazeFormatError as e:
        logger.error(f"Error {EXIT_FORMAT}: Invalid maze file: {e}")
        return EXIT_FORMAT
    except EOFError:
        logger.error(f"Error {EXIT_INPUT}: Could not read input from stdin.")
        return EXIT_INPUT
    except OSError as e:
        logger.error(f"Error {EXIT_READ}: {e}")
        return EXIT_READ
    return EXIT_OK

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    logger.debug(f"Running command: {args.command}")
    return run(args)

if __name__ == "__main__":
    sys.exit(main())
