"""Command-line entry point: play a battle on a map file."""

from __future__ import annotations

import sys
from pathlib import Path

from tankbattle.algorithms import ChasingAlgorithm, ShootingAlgorithm
from tankbattle.game import GameManager
from tankbattle.parser import ERRORS_FILE, InputFileError, board_dimensions, parse_file, write_errors
from tankbattle.strategy import StrategyManager

MAX_STEPS = 100


def main(argv: list[str] | None = None) -> int:
    """Run a game on the map file given as the only argument."""
    args = sys.argv[1:] if argv is None else argv
    print("Program started...")

    if len(args) != 1:
        print("Usage: tankbattle <input_file>", file=sys.stderr)
        return 1
    input_file = args[0]

    try:
        board_dimensions(input_file)
    except InputFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("Failed to read board dimensions.", file=sys.stderr)
        return 1

    try:
        parsed = parse_file(input_file)
    except InputFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("Failed to parse input file.", file=sys.stderr)
        return 1

    if parsed.errors:
        write_errors(parsed.errors, ERRORS_FILE)
        print(f"Parsing completed with {len(parsed.errors)} recoverable errors.")
    else:
        print("Parsing completed with no errors.")
    print("Parsed input file")

    if not parsed.player1_tanks:
        print("Error: No tanks found for Player 1. Game cannot start.", file=sys.stderr)
        return 1
    if not parsed.player2_tanks:
        print("Error: No tanks found for Player 2. Game cannot start.", file=sys.stderr)
        return 1

    print("Starting game loop")
    sm1 = StrategyManager(True, False)
    sm2 = StrategyManager(True, False)
    sm1.assign_algorithm(0, ChasingAlgorithm())
    sm2.assign_algorithm(0, ShootingAlgorithm())

    manager = GameManager(
        parsed.board, sm1, sm2, parsed.player1_tanks, parsed.player2_tanks, False
    )
    manager.run(MAX_STEPS)
    source = Path(input_file)
    manager.write_log(source.with_name("output_" + source.name))

    print("GameManager finished running")
    print(manager.result_message)
    return 0


if __name__ == "__main__":
    sys.exit(main())