"""Reading game map files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from tankbattle.board import Board
from tankbattle.geometry import Direction, Position
from tankbattle.units import Tank

ERRORS_FILE = "input_errors.txt"

_HEADER = re.compile(r"\s*([+-]?\d+)(?!\d)\s*([+-]?\d+)")


class InputFileError(Exception):
    """The map file cannot be read or declares no usable board."""


@dataclass
class ParsedInput:
    """A board built from a map file, its tanks and any recoverable problems."""

    board: Board
    player1_tanks: list[Tank] = field(default_factory=list)
    player2_tanks: list[Tank] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _read(filename: str | PathLike[str]) -> tuple[int, int, list[str]]:
    try:
        text = Path(filename).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise InputFileError(f"Cannot open input file: {filename}") from exc

    match = _HEADER.match(text)
    if match is None:
        raise InputFileError("Invalid board dimensions.")
    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise InputFileError("Invalid board dimensions.")

    newline = text.find("\n", match.end())
    body = "" if newline == -1 else text[newline + 1 :]
    lines = body.split("\n")
    if lines[-1] == "":
        lines.pop()
    return width, height, lines


def board_dimensions(filename: str | PathLike[str]) -> tuple[int, int]:
    """The declared ``(width, height)`` of the board in a map file."""
    width, height, _ = _read(filename)
    return width, height


def parse_file(filename: str | PathLike[str]) -> ParsedInput:
    """Build the board and tanks described by a map file."""
    width, height, lines = _read(filename)
    parsed = ParsedInput(Board(width, height))
    board = parsed.board
    errors = parsed.errors

    row = 0
    for line in lines:
        if row >= height:
            errors.append(f"Extra row detected beyond declared board height at row {row}")
            continue

        for col, char in enumerate(line[:width].ljust(width)):
            pos = Position(col, row)
            if char == "#":
                board.place_wall(pos)
            elif char == "@":
                board.place_mine(pos)
            elif char == "1":
                if parsed.player1_tanks:
                    errors.append(f"Multiple tanks for player 1 detected at ({col},{row})")
                else:
                    parsed.player1_tanks.append(Tank(1, 0, pos, Direction.L))
                    board.place_tank(pos, 1)
            elif char == "2":
                if parsed.player2_tanks:
                    errors.append(f"Multiple tanks for player 2 detected at ({col},{row})")
                else:
                    parsed.player2_tanks.append(Tank(2, 0, pos, Direction.R))
                    board.place_tank(pos, 2)
            elif char != " ":
                errors.append(f"Unknown character '{char}' at ({col},{row})")
        row += 1

    if row < height:
        errors.append(
            f"Missing rows: Board height declared as {height} but only {row} rows found"
        )
    return parsed


def write_errors(errors: list[str], path: str | PathLike[str] = ERRORS_FILE) -> None:
    """Write one error per line."""
    with open(path, "w", encoding="utf-8") as out:
        out.writelines(f"{error}\n" for error in errors)