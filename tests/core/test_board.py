"""Tests for the Board class."""

import numpy as np
import pytest

from gliderwatch.core.board import Board


class TestBoard:
    """Test cases for the Board class."""

    def test_initialization(self):
        """Test board initialization."""
        board = Board(10, 20)
        assert board.width == 10
        assert board.height == 20
        assert board.shape == (10, 20)
        assert board.cells.shape == (20, 10)
        assert board.population == 0

    def test_zero_dimensions_rejected(self):
        """Test that empty boards cannot be created."""
        with pytest.raises(ValueError):
            Board(0, 10)

        with pytest.raises(ValueError):
            Board(10, 0)

        with pytest.raises(ValueError):
            Board(-3, 4)

        with pytest.raises(ValueError):
            Board.from_cells(0, 5, [(1, 1)])

        with pytest.raises(ValueError):
            Board.from_cells(5, 0, [])

    def test_cell_array_shape_checked(self):
        """Test that a cell array of the wrong shape is rejected."""
        with pytest.raises(ValueError):
            Board(3, 2, np.zeros((3, 2), dtype=bool))

    def test_cells_are_read_only(self):
        """Test that a board cannot be mutated through its cell array."""
        board = Board.from_cells(5, 5, [(1, 1)])

        with pytest.raises(ValueError):
            board.cells[0, 0] = True

    def test_constructor_copies_input(self):
        """Test that later changes to the source array don't leak into the board."""
        data = np.zeros((3, 3), dtype=bool)
        board = Board(3, 3, data)
        data[1, 1] = True

        assert not board.at(1, 1)

    def test_at(self):
        """Test reading cells by coordinate."""
        board = Board.from_cells(5, 4, [(1, 2), (4, 3)])

        assert board.at(1, 2) is True
        assert board.at(4, 3) is True
        assert board.at(2, 1) is False
        assert board.at(0, 0) is False

    def test_at_out_of_range(self):
        """Test that out-of-range coordinates are a caller error."""
        board = Board(3, 3)

        with pytest.raises(IndexError):
            board.at(-1, 0)

        with pytest.raises(IndexError):
            board.at(0, -1)

        with pytest.raises(IndexError):
            board.at(3, 0)

        with pytest.raises(IndexError):
            board.at(0, 3)

    def test_row_major_index(self):
        """Test that flat indices are y * width + x."""
        board = Board.from_cells(4, 3, [(3, 1)])

        assert board.index(3, 1) == 7
        assert board.live_indices() == [7]
        assert bool(board.cells.ravel()[7])

    def test_from_cells_wraps(self):
        """Test that coordinates outside the board wrap around."""
        board = Board.from_cells(3, 3, [(-1, -1), (3, 4)])

        assert board.at(2, 2)
        assert board.at(0, 1)
        assert board.population == 2

    def test_random(self):
        """Test random population."""
        assert Board.random(10, 10, 0.0).population == 0
        assert Board.random(10, 10, 1.0).population == 100

        board = Board.random(20, 20, 0.5, seed=1)
        assert 0 < board.population < 400

    def test_random_is_reproducible_with_seed(self):
        """Test that seeded boards are identical."""
        assert Board.random(30, 30, 0.3, seed=7) == Board.random(30, 30, 0.3, seed=7)

    def test_random_rejects_bad_probability(self):
        """Test probability validation."""
        with pytest.raises(ValueError):
            Board.random(5, 5, 1.5)

        with pytest.raises(ValueError):
            Board.random(5, 5, -0.1)

    def test_count_neighbors(self):
        """Test neighbor counting for a single cell."""
        board = Board.from_cells(5, 5, [(1, 1), (2, 1), (3, 3)])

        assert board.count_neighbors(2, 2) == 3
        assert board.count_neighbors(1, 1) == 1
        assert board.count_neighbors(0, 4) == 0

    def test_neighbors_wrap_horizontally(self):
        """Test that the left and right edges are adjacent."""
        board = Board.from_cells(6, 6, [(5, 2)])

        assert board.count_neighbors(0, 1) == 1
        assert board.count_neighbors(0, 2) == 1
        assert board.count_neighbors(0, 3) == 1

        board = Board.from_cells(6, 6, [(0, 2)])

        assert board.count_neighbors(5, 1) == 1
        assert board.count_neighbors(5, 2) == 1
        assert board.count_neighbors(5, 3) == 1

    def test_neighbors_wrap_at_corners(self):
        """Test that opposite corners are adjacent."""
        board = Board.from_cells(5, 5, [(4, 4)])

        assert board.count_neighbors(0, 0) == 1
        assert board.count_neighbors(0, 4) == 1
        assert board.count_neighbors(4, 0) == 1

    def test_count_all_neighbors_matches_single_cell_count(self):
        """Test that the convolution agrees with the per-cell count."""
        board = Board.random(13, 9, 0.4, seed=3)
        counts = board.count_all_neighbors()

        assert counts.shape == (9, 13)
        for y in range(board.height):
            for x in range(board.width):
                assert counts[y, x] == board.count_neighbors(x, y)

    def test_count_all_neighbors_full_board(self):
        """Test that every cell of a full board has eight neighbors."""
        board = Board.random(4, 4, 1.0)

        assert (board.count_all_neighbors() == 8).all()

    def test_equality(self):
        """Test board comparison."""
        a = Board.from_cells(4, 4, [(1, 1)])
        b = Board.from_cells(4, 4, [(1, 1)])
        c = Board.from_cells(4, 4, [(2, 1)])
        d = Board.from_cells(4, 5, [(1, 1)])

        assert a == b
        assert a != c
        assert a != d
        assert a != "not a board"

    def test_string_representation(self):
        """Test string output."""
        board = Board.from_cells(3, 2, [(0, 0), (2, 1)])

        assert str(board) == "*..\n..*"

    def test_to_list(self):
        """Test conversion to nested rows."""
        board = Board.from_cells(2, 2, [(1, 0)])

        assert board.to_list() == [[False, True], [False, False]]
