#!/usr/bin/env python3
"""
Example usage of the gliderwatch package.
"""

from gliderwatch import Board, GameOfLife, PatternLibrary
from gliderwatch.core.compositor import write_ppm


def main():
    """Follow a single glider and save the final frame."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    board = glider.apply_to_board(Board(20, 20), offset_x=8, offset_y=8)
    game = GameOfLife(board, library)

    print("Initial state:")
    print(game.board)
    print(f"Population: {game.population}, glider cells: {len(game.detect())}")
    print()

    for _ in range(12):
        game.step()
        print(f"Generation {game.generation}: glider cells {len(game.detect())}")

    print()
    print(game.board)

    write_ppm("glider.ppm", game.board.width, game.board.height, game.render())
    print("Saved frame to glider.ppm")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        if key != "population_history":
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
