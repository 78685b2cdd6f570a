# tankbattle

A turn-based tank battle on a rectangular board whose edges wrap around. Two
players each command a tank. Walls take two hits to destroy, mines destroy any
tank that drives onto them, and shells travel two squares for every game step.

## Installation

```
pip install .
```

## Running a game

```
tankbattle board.txt
```

The game plays up to 100 steps. Player 1's tank is driven by
`ChasingAlgorithm` (breadth-first path towards the enemy) and player 2's by
`ShootingAlgorithm` (turn towards the nearest enemy and fire when lined up).
Both pass through the common-sense checks in `tankbattle.common_sense`, which
can replace a move that would lead into a shell, a mine or another tank.

Every action is logged, one line per tank per step, such as
`P1-T0: Move Forward` or `P2-T0: Shoot (BAD STEP)`. The log is written next to
the input file, named after it with `output_` in front (`output_board.txt`
here), and ends with a `Result:` line: `Player 1 wins!`, `Player 2 wins!`,
`Tie: Both tanks destroyed.` or `Tie: Max steps reached.`

Recoverable problems in the input file are written to `input_errors.txt` in
the current directory. The command exits with status 1 if the file cannot be
read, its dimensions are invalid, or either player has no tank.

## Board file format

The first line holds the width and the height. Each following line is one row
of the board:

| Character | Meaning                        |
|-----------|--------------------------------|
| `#`       | wall (destroyed after 2 hits)  |
| `@`       | mine                           |
| `1`       | player 1's tank (faces left)   |
| `2`       | player 2's tank (faces right)  |
| space     | empty square                   |

Short rows are padded with empty squares and characters beyond the width are
ignored. A second tank for the same player, unknown characters, extra rows and
missing rows are reported as recoverable errors; the game still runs.

Example:

```
10 5
##########
#1       #
#   @@   #
#       2#
##########
```

## Using it as a library

```python
from tankbattle.parser import parse_file
from tankbattle.strategy import StrategyManager
from tankbattle.algorithms import ChasingAlgorithm, ShootingAlgorithm
from tankbattle.game import GameManager

parsed = parse_file("board.txt")   # raises InputFileError on unusable files
print(parsed.errors)               # recoverable problems, if any

p1 = StrategyManager()             # common sense on, not verbose
p1.assign_algorithm(0, ChasingAlgorithm())
p2 = StrategyManager(use_common_sense=False)
p2.assign_algorithm(0, ShootingAlgorithm())

game = GameManager(parsed.board, p1, p2, parsed.player1_tanks, parsed.player2_tanks)
print(game.run(100))               # returns the result message
game.write_log("output.txt")
```

Write your own tank logic by subclassing `tankbattle.algorithms.Algorithm` and
implementing `decide_action(tank, board, shells)`, which returns an
`ActionRequest` from `tankbattle.geometry`. `UserInputAlgorithm` reads one key
per decision from standard input (or a given stream): `f` forward,
`b` backward, `l`/`r` turn 45°, `L`/`R` turn 90°, `s` shoot, `n` nothing.

Passing `verbose=True` to `GameManager` prints the board before each step,
with shells drawn as `*`.

## Limitations

- The `tankbattle` command always pits the chasing algorithm against the
  shooting one; there is no option to choose algorithms or to play by hand.
  Interactive play needs a small script using `UserInputAlgorithm`.
- `tankbattle.interfaces` only declares abstract classes (`Player`,
  `TankAlgorithm`, `SatelliteView` and their factories); no implementation is
  provided and the game loop does not use them.
- There is no graphical display; the board is only shown as text.