import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_stepper' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.config import MazeConfig
from maze_stepper.core.errors import MazeError


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def add_maze_arguments(parser: argparse.ArgumentParser, default_size: int = 20):
    parser.add_argument("--width", type=int, default=default_size, help="Maze Width")
    parser.add_argument("--height", type=int, default=default_size, help="Maze Height")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Start cell (default 0 0)")
    parser.add_argument("--end", type=int, nargs=2, metavar=("ROW", "COL"), help="End cell (default opposite corner)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Stepper: step-by-step maze generation and A* solving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run Command
    run_parser = subparsers.add_parser("run", help="Open a window and animate generation and solving")
    add_maze_arguments(run_parser, default_size=40)
    run_parser.add_argument("--delay", type=non_negative_float, default=0.001,
                            help="Seconds between steps (0 = one step per frame)")
    run_parser.add_argument("--autostart", action="store_true", help="Start generating immediately")
    run_parser.add_argument("--auto-solve", action="store_true", help="Solve as soon as generation finishes")
    run_parser.add_argument("--record", action="store_true", help="Record video")
    run_parser.add_argument("--out", type=str, help="Video output file (optional)")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate (and solve) a maze headlessly")
    add_maze_arguments(gen_parser)
    gen_parser.add_argument("--no-solve", action="store_true", help="Skip solving")
    gen_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the maze")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument("--size", type=int, default=300, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser


def cmd_run(args, logger):
    from maze_stepper.core.controller import MazeController
    from maze_stepper.viz.renderer import Renderer

    controller = MazeController(MazeConfig.from_args(args))
    logger.info("Keys: SPACE pause/resume, N single step, S solve, R reset, ESC quit")
    renderer = Renderer(controller, delay=args.delay, record=args.record, output_file=args.out)
    renderer.init_window()
    renderer.run_loop()

    if controller.path:
        logger.info(f"Solution length: {len(controller.path)}")


def cmd_generate(args, logger):
    from maze_stepper.core.complexity import MazeAnalyzer
    from maze_stepper.core.controller import MazeController
    from maze_stepper.viz.ascii_render import render_ascii

    config = MazeConfig.from_args(args)
    config.autostart = True
    config.auto_solve = not args.no_solve
    controller = MazeController(config)

    logger.info(f"Generating {config.width}x{config.height} maze (seed={config.seed})...")
    t0 = time.time()
    while not controller.step().is_terminal:
        pass
    if config.auto_solve:
        while not controller.step().is_terminal:
            pass
    logger.info(f"Finished in {time.time() - t0:.4f}s")

    snap = controller.snapshot()
    if not args.quiet:
        print(render_ascii(controller.grid, snap.path, snap.start, snap.end))
    if config.auto_solve:
        if controller.path:
            print(f"Path Length: {len(controller.path)}")
        else:
            print("No path.")
    logger.info(f"Stats: {MazeAnalyzer.calculate_stats(controller.grid)}")


def cmd_benchmark(args, logger):
    from maze_stepper.algo.dfs import RecursiveBacktracker
    from maze_stepper.algo.solvers import AStar
    from maze_stepper.core.grid import Grid

    logger.info(f"Running benchmark (Size: {args.size}x{args.size})...")
    grid = Grid(args.size, args.size)

    t0 = time.time()
    gen = RecursiveBacktracker(grid, seed=args.seed)
    gen.run_all()
    gen_time = time.time() - t0

    t0 = time.time()
    solver = AStar(grid, (0, 0), (grid.height - 1, grid.width - 1))
    solver.run_all()
    solve_time = time.time() - t0

    print(f"\n{'PHASE':<12} | {'TIME (s)':<10} | {'STEPS':<10} | {'CELLS/s':<12}")
    print("-" * 52)
    cells = grid.width * grid.height
    print(f"{'Generate':<12} | {gen_time:<10.4f} | {gen.step_count:<10} | {cells / max(gen_time, 1e-9):<12,.0f}")
    print(f"{'A*':<12} | {solve_time:<10.4f} | {solver.step_count:<10} | "
          f"{solver.visited_count / max(solve_time, 1e-9):<12,.0f}")
    print(f"\nPath Length: {len(solver.path)}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_stepper")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "run":
            cmd_run(args, logger)
        elif args.command == "generate":
            cmd_generate(args, logger)
        elif args.command == "benchmark":
            cmd_benchmark(args, logger)
    except MazeError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
