# cli_driver.py
# This file is intended to be run to play the 2048 game on the CLI

from typing import Callable, Optional
import logging

from .core import DIRECTION, Game, Board

KEY_TO_DIRECTION = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}


def main(read_input: Callable[[str], str] = input, game: Optional[Game] = None) -> Game:
    logging.basicConfig(level=logging.WARNING)

    # 1. Initialize game
    if game is None:
        game = Game()
    display_board_state(game.board, game.score, game.won, game.game_over)

    # 2. Game Loop
    while not game.won and not game.game_over:
        try:
            move_input = read_input("Enter move (W/A/S/D for Up/Left/Down/Right, Q to quit): ").strip().upper()
        except EOFError:
            # Ctrl-D
            move_input = 'Q'

        if move_input == 'Q':
            print("Quitting game.")
            break

        chosen_direction = KEY_TO_DIRECTION.get(move_input)
        if not chosen_direction:
            print("Invalid input. Use W, A, S, D.")
            continue

        # 3. Process the move; spawning and status checks happen inside
        if not game.move(chosen_direction):
            print("Move did not change the board. Try a different direction.")
            continue

        display_board_state(game.board, game.score, game.won, game.game_over)

    # 4. Game Ended
    if game.won:
        print("Congratulations! You reached the 2048 tile!")
    elif game.game_over:
        print("No more moves possible. Better luck next time!")
    return game


def display_board_state(board: Board, score: int, won: bool, game_over: bool):
    """Prints the board, score, and game status to the console."""
    print(f"\nScore: {score}")
    if won:
        print("YOU WON!")
    elif game_over:
        print("GAME OVER!")

    for row in board:
        print("\t".join(map(str, row)))
    print("-" * (len(board) * 6))


if __name__ == "__main__":
    main()
