"""Rich terminal frontend: board table, hint arrows, and a scored leaderboard.

Uses the ``rich`` library for styled output and the shared single-key
input handler.  Includes a menu for size selection, play, study, and the
leaderboard.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay, GameResult
from backend.engine.gamesolver import Solver
from backend.engine.scoring import ScoreBasis
from backend.models.board import Direction
from backend.models.highscore import Leaderboard
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

MIN_SIZE, MAX_SIZE = 3, 6

_DIRECTION_KEYS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def _format_time(seconds: float) -> str:
    m, s = divmod(seconds, 60)
    return f"{int(m)}:{s:05.2f}"


# -- board rendering ----------------------------------------------------------


def _render_board(game: GamePlay) -> Table:
    """Return a Rich Table of the grid, with the hint arrow on its tile."""
    board = game.state.board
    width = len(str(board.size * board.size - 1)) + 2
    table = Table(
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width, justify="center")

    hint = game.hint
    for r in range(board.size):
        cells: list[str] = []
        for c in range(board.size):
            cell = r * board.size + c
            val = board.tiles[cell]
            if val == board.blank:
                cells.append("[dim]·[/dim]")
            elif hint is not None and hint.cell == cell:
                cells.append(f"[bold black on yellow]{val}{hint.direction.arrow}[/]")
            elif board.is_tile_correct(cell):
                cells.append(f"[bold green]{val}[/bold green]")
            else:
                cells.append(f"[bold white]{val}[/bold white]")
        table.add_row(*cells)
    return table


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Hints: ", style="dim")
    stats.append(str(game.state.hints), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    return stats


def _controls(*pairs: tuple[str, str]) -> Text:
    controls = Text()
    for key, label in pairs:
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f"  {label} ", style="dim")
    return controls


# -- solver helpers -----------------------------------------------------------


def _show_hint(game: GamePlay) -> str:
    with console.status("[cyan]Searching for a hint…[/cyan]"):
        hint = game.request_hint()
    if hint is None:
        return "[yellow]Could not compute a hint in time. Make a move and try again.[/yellow]"
    tile = game.state.board.tiles[hint.cell]
    return f"[cyan]Hint:[/cyan] slide [bold]{tile}[/bold] {hint.direction.value}"


def _auto_solve(game: GamePlay) -> str:
    board = game.state.board
    if board.is_solved():
        return "[green]Already solved![/green]"

    with console.status("[cyan]Solving…[/cyan]"):
        moves = Solver.solve(board.copy(), game.config)
    if not moves:
        return "[yellow]No solution found within the search budget.[/yellow]"

    for i, direction in enumerate(moves):
        game.move(direction)
        console.clear()
        progress = Text()
        progress.append(f"  Solving… move {i + 1}/{len(moves)} ", style="bold cyan")
        progress.append(f"({direction.value})", style="dim")
        panel = Panel(
            Align.center(_render_board(game)),
            title=f"[bold cyan]Auto-Solve  {game.size}×{game.size}[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(0.08)

    return f"[bold green]Solved in {len(moves)} moves![/bold green]"


# -- screens ------------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    console.clear()

    sizes = Text()
    for s in range(MIN_SIZE, MAX_SIZE + 1):
        if s > MIN_SIZE:
            sizes.append("  ")
        style = "bold green on #313244" if s == sel_size else "dim"
        sizes.append(f" {s}×{s} ", style=style)

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(Text("  ← →  change size", style="dim")),
        Text(""),
        Align.center(_controls(("1", "Play"), ("2", "Study"), ("3", "Leaderboard"), ("Q", "Quit"))),
        Text(""),
    )
    console.print()
    console.print(
        Align.center(
            Panel(
                body,
                title="[bold]S L I D E   P U Z Z L E[/bold]",
                border_style="bright_blue",
                padding=(1, 4),
            )
        )
    )


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()
    board_view: Table | Text
    if game.state.started:
        board_view = _render_board(game)
    else:
        # Tiles stay hidden until the clock starts.
        board_view = Text("\n  Press Enter to start  \n", style="bold yellow")

    panel = Panel(
        Align.center(board_view),
        title=f"[bold cyan]Slide Puzzle  {game.size}×{game.size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(
        Align.center(
            _controls(
                ("↑↓←→/WASD", "move"),
                ("N", "hint"),
                ("R", "restart"),
                ("X", "shuffle"),
                ("Q", "back"),
            )
        )
    )


def _draw_study(game: GamePlay, status: str = "") -> None:
    console.clear()
    panel = Panel(
        Align.center(_render_board(game)),
        title=f"[bold yellow]Study  {game.size}×{game.size}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(
        Align.center(
            _controls(
                ("↑↓←→/WASD", "move"),
                ("X", "scramble"),
                ("N", "hint"),
                ("V", "solve"),
                ("Q", "back"),
            )
        )
    )


def _draw_win(game: GamePlay, result: GameResult, rank: int | None) -> None:
    console.clear()
    b = result.breakdown

    score = Table(show_header=False, box=rich.box.SIMPLE)
    score.add_column(style="dim")
    score.add_column(justify="right", style="bold yellow")
    basis = "optimal" if b.basis is ScoreBasis.OPTIMAL else "estimated"
    score.add_row(f"Moves ({b.optimal} {basis})", f"{b.move_score:.1f} / 70")
    score.add_row("Time", f"{b.time_score:.1f} / 30")
    score.add_row("Hint penalty", f"-{b.hint_penalty}")
    score.add_row("[bold]Score[/bold]", f"{b.total}")

    ranking = (
        Text(f"  Leaderboard rank #{rank}", style="bold green")
        if rank is not None
        else Text("  Not in the top ten this time.", style="dim")
    )

    group = Group(
        Align.center(_render_board(game)),
        Align.center(Text("\n  ★ CONGRATULATIONS! ★\n", style="bold green")),
        Align.center(_stats(game)),
        Align.center(score),
        Align.center(ranking),
    )
    console.print()
    console.print(
        Align.center(
            Panel(
                group,
                title=f"[bold green]Slide Puzzle  {game.size}×{game.size}[/bold green]",
                border_style="bold green",
                padding=(1, 2),
            )
        )
    )


def render_leaderboard(leaderboard: Leaderboard) -> Panel:
    sizes = leaderboard.sizes()
    parts: list[Align] = []
    if not sizes:
        parts.append(Align.center(Text("  No records yet.", style="dim")))

    for size in sizes:
        table = Table(
            title=f"{size}×{size}",
            title_style="bold cyan",
            box=rich.box.ROUNDED,
            border_style="dim",
        )
        table.add_column("#", justify="right", style="dim", width=3)
        table.add_column("Score", justify="right", style="bold yellow")
        table.add_column("Time", justify="right", style="yellow")
        table.add_column("Moves", justify="right")
        table.add_column("Hints", justify="right")
        table.add_column("Date", style="dim")
        for i, e in enumerate(leaderboard.entries(size), 1):
            table.add_row(
                str(i),
                str(e.score),
                _format_time(e.time),
                str(e.moves),
                str(e.hints),
                e.date[:10],
            )
        parts.append(Align.center(table))

    return Panel(
        Group(*parts),
        title="[bold]LEADERBOARD[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )


def _draw_leaderboard(leaderboard: Leaderboard) -> None:
    console.clear()
    console.print()
    console.print(Align.center(render_leaderboard(leaderboard)))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loops ---------------------------------------------------------------


def _play_game(size: int, leaderboard: Leaderboard, config: GameConfig) -> None:
    """Play mode — timed, hints cost points."""
    while True:
        game = GamePlay(size, config)
        status = ""

        while not game.is_won:
            _draw_game(game, status)
            status = ""

            # Keep the clock ticking while waiting for a key.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                if game.state.started:
                    _draw_game(game, status)

            if key == "quit":
                return
            if key == "shuffle":
                game = GamePlay(size, config)
            elif not game.state.started:
                if key == "enter":
                    game.start()
            elif key in _DIRECTION_KEYS:
                game.move(_DIRECTION_KEYS[key])
            elif key == "hint":
                status = _show_hint(game)
            elif key == "restart":
                game.restart()
                status = "[yellow]Back to the starting layout.[/yellow]"

        with console.status("[cyan]Scoring…[/cyan]"):
            result = game.finish()
        rank = leaderboard.add(size, result.entry)
        _draw_win(game, result, rank)
        console.print(
            Align.center(Text("\n  Press X to play again, Q to go back.\n", style="dim"))
        )

        while True:
            key = get_key()
            if key == "shuffle":
                break
            if key == "quit":
                return


def _study_game(size: int, config: GameConfig) -> None:
    """Study mode — starts solved, scramble/hint/solve available."""
    game = GamePlay.from_board(GameGenerator.solved(size), config)
    game.start()
    status = ""

    while True:
        _draw_study(game, status)
        status = ""
        key = get_key()

        if key in _DIRECTION_KEYS:
            if game.move(_DIRECTION_KEYS[key]) and game.is_won:
                status = "[green]Solved![/green]"
        elif key == "shuffle":
            game = GamePlay(size, config)
            game.start()
            status = "[yellow]Scrambled![/yellow]"
        elif key == "hint":
            status = _show_hint(game)
        elif key == "solve":
            status = _auto_solve(game)
        elif key == "quit":
            return


def _menu_loop(data_dir: Path, size: int, config: GameConfig) -> None:
    leaderboard = Leaderboard(data_dir / "leaderboard.json", config.leaderboard_size)
    sel_size = min(max(size, MIN_SIZE), MAX_SIZE)

    while True:
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            sel_size = max(MIN_SIZE, sel_size - 1)
        elif key == "right":
            sel_size = min(MAX_SIZE, sel_size + 1)
        elif key in ("1", "enter"):
            _play_game(sel_size, leaderboard, config)
        elif key == "2":
            _study_game(sel_size, config)
        elif key in ("3", "help"):
            _draw_leaderboard(leaderboard)


# -- public entry point -------------------------------------------------------


def run(data_dir: Path, size: int = 3, config: GameConfig | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(data_dir, size, config or GameConfig())
