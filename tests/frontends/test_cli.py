"""Tests for the CLI frontend."""

from io import StringIO
from unittest.mock import patch

from gliderwatch.core.board import Board
from gliderwatch.core.compositor import TRAIL_STEP
from gliderwatch.core.config import EngineConfig
from gliderwatch.core.game import GameOfLife
from gliderwatch.frontends.cli import (
    CLIGliderWatch,
    create_parser,
    main,
    print_results,
    validate_args,
)


class TestCLIGliderWatch:
    """Test cases for the CLI frontend class."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGliderWatch()
        assert len(cli.pattern_library) == 8

    def test_run_simulation_random(self):
        """Test running a random simulation."""
        cli = CLIGliderWatch()

        final_gen, stats = cli.run_simulation(EngineConfig(width=20, height=20, seed=3), max_generations=15)

        assert final_gen == 15
        assert stats["generation"] == 15
        assert stats["history_depth"] == 10
        assert "duration_seconds" in stats
        assert "initial_population" in stats

    def test_run_simulation_with_glider(self):
        """Test following a single glider."""
        cli = CLIGliderWatch()

        final_gen, stats = cli.run_simulation(
            EngineConfig(width=20, height=20),
            max_generations=8,
            pattern="Glider",
            pattern_x=5,
            pattern_y=5,
        )

        assert final_gen == 8
        assert stats["initial_population"] == 5
        assert stats["population"] == 5
        assert stats["glider_cells"] == 5

    def test_run_simulation_invalid_pattern(self):
        """Test that an unknown pattern falls back to random population."""
        cli = CLIGliderWatch()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            final_gen, stats = cli.run_simulation(
                EngineConfig(width=10, height=10, seed=1),
                max_generations=2,
                pattern="NonExistentPattern",
            )

        assert "Warning: Pattern 'NonExistentPattern' not found" in mock_stdout.getvalue()
        assert final_gen == 2

    def test_run_simulation_verbose(self):
        """Test verbose progress output."""
        cli = CLIGliderWatch()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.run_simulation(EngineConfig(width=10, height=10, seed=1), max_generations=20, verbose=True)

        output = mock_stdout.getvalue()
        assert "Initializing 10x10 toroidal board" in output
        assert "Generation 10:" in output
        assert "Generation 20:" in output

    def test_run_simulation_show_grid(self):
        """Test grid display marks glider cells."""
        cli = CLIGliderWatch()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.run_simulation(
                EngineConfig(width=8, height=8),
                max_generations=0,
                pattern="Glider",
                pattern_x=2,
                pattern_y=2,
                show_grid=True,
            )

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert "...#...." in output
        assert "..###..." in output

    def test_run_simulation_save_frame(self, tmp_path):
        """Test PPM export of the final frame."""
        cli = CLIGliderWatch()
        path = tmp_path / "final.ppm"

        _, stats = cli.run_simulation(EngineConfig(width=6, height=4, seed=2), max_generations=3, save_frame=str(path))

        content = path.read_bytes()
        assert content.startswith(b"P6 6 4 255\n")
        assert len(content) == len(b"P6 6 4 255\n") + 6 * 4 * 3
        assert stats["frame_path"] == str(path)

    def test_format_grid_too_large(self):
        """Test that large boards are not printed."""
        cli = CLIGliderWatch()

        assert "too large" in cli._format_grid(GameOfLife(Board(60, 10)))

    def test_list_patterns(self):
        """Test listing detected patterns."""
        cli = CLIGliderWatch()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Glider: 3x3, 5 cells" in output
        assert "Glider (phase 2)" in output
        assert "8 distinct window codes" in output


class TestArgumentHandling:
    """Test cases for argument parsing and validation."""

    def test_parser_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])

        assert args.width == 100
        assert args.height == 100
        assert args.population == 0.3
        assert args.generations == 100
        assert args.trail_step == TRAIL_STEP == 12
        assert args.seed is None
        assert not args.verbose

    def test_parser_options(self):
        """Test parsing explicit options."""
        args = create_parser().parse_args(
            ["-W", "30", "-H", "20", "-p", "0.2", "-m", "50", "--seed", "7", "--pattern", "Glider", "-v"]
        )

        assert (args.width, args.height) == (30, 20)
        assert args.population == 0.2
        assert args.generations == 50
        assert args.seed == 7
        assert args.pattern == "Glider"
        assert args.verbose

    def test_validate_args(self):
        """Test argument validation."""
        parser = create_parser()

        assert validate_args(parser.parse_args([])) is True

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert validate_args(parser.parse_args(["-W", "0", "-p", "1.5"])) is False

        output = mock_stdout.getvalue()
        assert "Width must be positive" in output
        assert "Population rate must be between 0.0 and 1.0" in output

    def test_validate_negative_generations(self):
        """Test that a negative generation count is rejected."""
        with patch("sys.stdout", new_callable=StringIO):
            assert validate_args(create_parser().parse_args(["-m", "-1"])) is False

    def test_print_results(self):
        """Test result output in both modes."""
        stats = {
            "initial_population": 30,
            "population": 12,
            "population_density": 0.12,
            "glider_cells": 5,
            "history_depth": 10,
            "duration_seconds": 0.5,
            "generations_per_second": 200.0,
        }

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            print_results(100, stats, verbose=False)
        assert "Population: 30 -> 12" in mock_stdout.getvalue()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            print_results(100, stats, verbose=True)
        assert "Glider cells: 5" in mock_stdout.getvalue()


class TestMain:
    """Test cases for the CLI entry point."""

    def test_main_runs(self):
        """Test a short run through main."""
        with patch("sys.argv", ["gliderwatch-cli", "-W", "12", "-H", "12", "-m", "5", "--seed", "1"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                assert main() == 0

        assert "Generations: 5" in mock_stdout.getvalue()

    def test_main_list_patterns(self):
        """Test --list-patterns."""
        with patch("sys.argv", ["gliderwatch-cli", "--list-patterns"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                assert main() == 0

        assert "Detected patterns:" in mock_stdout.getvalue()

    def test_main_invalid_args(self):
        """Test that invalid arguments return an error code."""
        with patch("sys.argv", ["gliderwatch-cli", "-H", "0"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                assert main() == 1

        assert "Error: Invalid arguments:" in mock_stdout.getvalue()

    def test_main_reports_errors(self):
        """Test that unexpected failures are reported, not raised."""
        with patch("sys.argv", ["gliderwatch-cli", "-W", "10", "-H", "10", "-m", "1"]):
            with patch.object(CLIGliderWatch, "run_simulation", side_effect=RuntimeError("boom")):
                with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                    assert main() == 1

        assert "Error: boom" in mock_stdout.getvalue()
