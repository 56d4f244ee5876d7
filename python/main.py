#!/usr/bin/env python3
"""Slide Puzzle.

Usage::

    python main.py play               # interactive Rich terminal game
    python main.py play -s 4          # start on the 4×4 board
    python main.py scores             # view the leaderboard
    python main.py hint 1,2,3,4,5,6,7,9,8 -s 3
    python main.py min-moves 4,1,3,7,2,6,9,5,8 -s 3
    python main.py shuffle -s 4 --seed 7
"""

import logging
import random
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_PATH = DATA_DIR / "config.json"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import GameConfig  # noqa: E402
from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.engine.gamesolver import (  # noqa: E402
    NOT_FOUND,
    SearchLimits,
    compute_minimum_moves,
    find_hint_move,
)
from backend.errors import PuzzleError  # noqa: E402
from backend.models.board import Board  # noqa: E402
from backend.models.highscore import Leaderboard  # noqa: E402

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(add_completion=False, help="Slide Puzzle.")

_state: dict[str, GameConfig] = {}


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _config() -> GameConfig:
    return _state.get("config") or GameConfig()


def _parse_board(tiles: str, size: int) -> Board:
    try:
        flat = [int(t) for t in tiles.replace(" ", "").split(",")]
    except ValueError:
        raise typer.BadParameter("Tiles must be comma-separated integers.")
    return Board.from_flat(size, flat)


def _fail(exc: Exception) -> None:
    err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


# -- commands -----------------------------------------------------------------


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config",
        help=f"JSON settings file (default: {CONFIG_PATH}).",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Slide Puzzle."""
    _setup_logging(verbose)
    try:
        _state["config"] = (
            GameConfig.load(config, required=True)
            if config is not None
            else GameConfig.load(CONFIG_PATH)
        )
    except PuzzleError as exc:
        _fail(exc)


@app.command()
def play(
    size: int = typer.Option(3, "-s", "--size", min=3, max=6, help="Grid size (3-6)."),
) -> None:
    """Play in the terminal."""
    from frontend.cli.rich.app import run

    run(data_dir=DATA_DIR, size=size, config=_config())


@app.command()
def scores() -> None:
    """Show the leaderboard and exit."""
    from frontend.cli.rich.app import render_leaderboard

    config = _config()
    board = Leaderboard(DATA_DIR / "leaderboard.json", config.leaderboard_size)
    console.print(render_leaderboard(board))


@app.command()
def hint(
    tiles: str = typer.Argument(..., help="Row-major labels, blank = size².", show_default=False),
    size: int = typer.Option(3, "-s", "--size", min=2, help="Grid size."),
    timeout: Optional[int] = typer.Option(
        None, "--hint-timeout", min=0, help="Search budget in milliseconds."
    ),
) -> None:
    """Print the next optimal move for a board."""
    try:
        board = _parse_board(tiles, size)
    except PuzzleError as exc:
        _fail(exc)
    if board.is_solved():
        console.print("[green]Already solved.[/green]")
        return

    limits = SearchLimits.for_size(size, timeout_ms=timeout, config=_config())
    move = find_hint_move(board.tiles, size, limits)
    if move is None:
        err_console.print("[yellow]Could not compute a hint within budget.[/yellow]")
        raise typer.Exit(code=2)
    tile = board.tiles[move.cell]
    console.print(
        f"Slide tile [bold]{tile}[/bold] (cell {move.cell}) "
        f"{move.direction.value} {move.direction.arrow}"
    )


@app.command("min-moves")
def min_moves(
    tiles: str = typer.Argument(..., help="Row-major labels, blank = size².", show_default=False),
    size: int = typer.Option(3, "-s", "--size", min=2, help="Grid size."),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", min=0, help="Search budget in milliseconds."
    ),
) -> None:
    """Print the optimal solution length for a board."""
    try:
        board = _parse_board(tiles, size)
    except PuzzleError as exc:
        _fail(exc)
    moves = compute_minimum_moves(board.tiles, size, timeout_ms=timeout, config=_config())
    if moves == NOT_FOUND:
        err_console.print("[yellow]Could not compute the minimum within budget.[/yellow]")
        raise typer.Exit(code=2)
    console.print(moves)


@app.command()
def shuffle(
    size: int = typer.Option(3, "-s", "--size", min=2, help="Grid size."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
) -> None:
    """Print a freshly shuffled, solvable board."""
    rng = random.Random(seed)
    board = GameGenerator.generate(size, moves=_config().shuffle_moves, rng=rng)
    console.print(",".join(map(str, board.tiles)))


if __name__ == "__main__":
    app()
