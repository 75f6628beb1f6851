"""Command-line interface for the glider watch simulation."""

import argparse
import sys
import time
from typing import Optional, Tuple

from ..core.board import Board
from ..core.compositor import TRAIL_STEP, write_ppm
from ..core.config import EngineConfig
from ..core.game import GameOfLife, initialize
from ..core.patterns import PatternLibrary


class CLIGliderWatch:
    """Command-line interface for running headless simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def run_simulation(
        self,
        config: EngineConfig,
        max_generations: int,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
        verbose: bool = False,
        show_grid: bool = False,
        save_frame: Optional[str] = None,
        report_interval: int = 10,
    ) -> Tuple[int, dict]:
        """Run a simulation for a fixed number of generations.

        Args:
            config: Engine configuration
            max_generations: Number of generations to run
            pattern: Optional pattern name to place instead of random population
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            verbose: Print progress updates
            show_grid: Show initial and final board states
            save_frame: Optional path for a PPM image of the final frame
            report_interval: Generations between verbose progress lines

        Returns:
            Tuple of (final_generation, statistics)
        """
        config.validate()

        if verbose:
            print(f"Initializing {config.width}x{config.height} toroidal board")

        board = None
        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern:
                if verbose:
                    print(f"Loading pattern '{pattern}' at ({pattern_x}, {pattern_y})")
                board = loaded_pattern.apply_to_board(Board(config.width, config.height), pattern_x, pattern_y)
            else:
                print(f"Warning: Pattern '{pattern}' not found, using random population")

        if board is None:
            if verbose:
                print(f"Generating random population (rate: {config.fill_probability:.2%})")
            board = initialize(config.width, config.height, config.fill_probability, config.seed)

        game = GameOfLife(
            board,
            self.pattern_library,
            history_capacity=config.history_capacity,
            trail_step=config.trail_step,
        )
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(game))

        if verbose:
            print(f"\nRunning simulation ({max_generations} generations)...")

        start_time = time.time()
        frame = game.render()

        for _ in range(max_generations):
            frame = game.tick(True)

            if verbose and game.generation % report_interval == 0:
                print(
                    f"Generation {game.generation}: population {game.population}, "
                    f"glider cells {len(game.detect())}"
                )

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = game.generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid:
            print(f"\nFinal grid (generation {game.generation}):")
            print(self._format_grid(game))

        if save_frame:
            write_ppm(save_frame, config.width, config.height, frame)
            stats["frame_path"] = save_frame
            if verbose:
                print(f"Saved final frame to {save_frame}")

        return game.generation, stats

    def _format_grid(self, game: GameOfLife, max_size: int = 50) -> str:
        """Format the current board, marking detected glider cells with '#'.

        Args:
            game: Engine whose current board is shown
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        board = game.board
        if board.width > max_size or board.height > max_size:
            return f"Grid too large to display ({board.width}x{board.height})"

        detected = game.detect()
        rows = []
        for y in range(board.height):
            row = []
            for x in range(board.width):
                if board.index(x, y) in detected:
                    row.append("#")
                else:
                    row.append("*" if board.at(x, y) else ".")
            rows.append("".join(row))
        return "\n".join(rows)

    def list_patterns(self) -> None:
        """List the motifs the detector looks for."""
        print("Detected patterns:")
        for pattern_name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(pattern_name)
            size = pattern.get_size()
            print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
            if pattern.description:
                print(f"    {pattern.description}")

        print(f"\n{len(self.pattern_library)} distinct window codes (all rotations)")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run a toroidal Game of Life with glider detection from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a random 100x100 board for 200 generations
  gliderwatch-cli --generations 200

  # Follow a single glider on a 20x20 board
  gliderwatch-cli -W 20 -H 20 --pattern Glider --pattern-x 5 --pattern-y 5 --show-grid

  # Reproducible run with progress output and a PPM snapshot
  gliderwatch-cli --seed 42 --verbose --save-frame frame.ppm

  # List the detected patterns
  gliderwatch-cli --list-patterns
        """,
    )

    # Board configuration
    parser.add_argument("-W", "--width", type=int, default=100, help="Grid width (default: 100)")

    parser.add_argument("-H", "--height", type=int, default=100, help="Grid height (default: 100)")

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.3,
        help="Initial random population rate 0.0-1.0 (default: 0.3)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible initial board",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Place a specific pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    # Simulation configuration
    parser.add_argument(
        "-m",
        "--generations",
        type=int,
        default=100,
        help="Generations to simulate (default: 100)",
    )

    parser.add_argument(
        "--trail-step",
        type=int,
        default=TRAIL_STEP,
        help=f"Gray increment per generation of trail age (default: {TRAIL_STEP})",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states (small grids only)",
    )

    parser.add_argument(
        "--save-frame",
        type=str,
        help="Save the final rendered frame as a PPM image",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List the detected patterns and exit",
    )

    return parser


def print_results(final_generation: int, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        stats: Simulation statistics
        verbose: Whether to show detailed statistics
    """
    if verbose:
        print("\nSimulation Results:")
        print(f"  Generations: {final_generation}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Glider cells: {stats['glider_cells']}")
        print(f"  Trail depth: {stats['history_depth']}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.1f} generations/second")
    else:
        print(
            "Generations: {}, Population: {} -> {}, Glider cells: {}, Duration: {:.3f}s".format(
                final_generation,
                stats["initial_population"],
                stats["population"],
                stats["glider_cells"],
                stats["duration_seconds"],
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = config_from_args(args).errors()

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def config_from_args(args: argparse.Namespace) -> EngineConfig:
    """Build the engine configuration from parsed arguments."""
    return EngineConfig(
        width=args.width,
        height=args.height,
        fill_probability=args.population,
        trail_step=args.trail_step,
        seed=args.seed,
    )


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    cli = CLIGliderWatch()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        final_generation, stats = cli.run_simulation(
            config_from_args(args),
            max_generations=args.generations,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            verbose=args.verbose,
            show_grid=args.show_grid,
            save_frame=args.save_frame,
        )

        print_results(final_generation, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
