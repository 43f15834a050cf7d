"""
LogicDuel CLI - Command-line interface for the engine.

Usage:
    logicduel puzzle [--seed N] [--holes N] [--solution]   Print a generated puzzle
    logicduel play [--seed N] [--holes N]                  Play a fight in the terminal

Play commands:
    <row> <col> <digit>   Fill a cell
    d <row> <col>         Clear a cell
    u                     Undo the last fill
    h <row> <col>         Show candidate digits (needs Euler's Eye)
    r                     Restart with a new puzzle
    q                     Quit
"""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import replace
from typing import TextIO

from .api.service import GameService
from .config import GameConfig
from .grid.generator import generate_puzzle
from .utils.logger import LEVEL_NAMES, configure_logging, parse_level
from .utils.pretty import format_grid, pretty_print_snapshot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="LogicDuel - puzzle-combat engine",
        prog="logicduel",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LEVEL_NAMES,
        default=None,
        help="Logging level; defaults to LOGICDUEL_LOG_LEVEL",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    puzzle_parser = subparsers.add_parser("puzzle", help="Print a generated puzzle")
    puzzle_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    puzzle_parser.add_argument("--holes", type=int, default=None, help="Cells to carve out")
    puzzle_parser.add_argument("--solution", action="store_true", help="Also print the solution")

    play_parser = subparsers.add_parser("play", help="Play a fight in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--holes", type=int, default=None, help="Cells to carve out")
    play_parser.add_argument(
        "--euler", action="store_true", help="Start with Euler's Eye (candidate hints)"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = _config_from_args(args)
    if args.log_level:
        level = parse_level(args.log_level)
    else:
        level = config.log_level
    configure_logging(level)

    if args.command == "puzzle":
        cmd_puzzle(args, config)
    elif args.command == "play":
        cmd_play(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def _config_from_args(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.from_env()
    if getattr(args, "seed", None) is not None:
        config = replace(config, seed=args.seed)
    if getattr(args, "holes", None) is not None:
        config = replace(config, grid=replace(config.grid, holes=args.holes))
    if getattr(args, "euler", False):
        config = replace(config, starting_relics=config.starting_relics + ("euler",))
    return config


def cmd_puzzle(args, config: GameConfig, stream: TextIO | None = None):
    """Print a generated puzzle."""
    stream = stream or sys.stdout
    grid = config.grid
    puzzle = generate_puzzle(
        size=grid.size,
        box_dims=(grid.box_rows, grid.box_cols),
        hole_count=grid.holes,
        rng=random.Random(config.seed),
        retry_limit=grid.retry_limit,
    )

    print("Puzzle:", file=stream)
    print(format_grid(puzzle.puzzle, grid.box_rows, grid.box_cols), file=stream)
    if args.solution:
        print(file=stream)
        print("Solution:", file=stream)
        print(format_grid(puzzle.solution, grid.box_rows, grid.box_cols), file=stream)


def cmd_play(args, config: GameConfig, stdin: TextIO | None = None, stream: TextIO | None = None):
    """Run a fight against stdin."""
    stdin = stdin or sys.stdin
    stream = stream or sys.stdout
    box = (config.grid.box_rows, config.grid.box_cols)

    service = GameService()
    created = service.create_session(config=config)
    session_id = created.session_id
    pretty_print_snapshot(created.state, box_rows=box[0], box_cols=box[1], stream=stream)

    for line in stdin:
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()

        try:
            if command == "q":
                break
            elif command == "u":
                result = service.undo(session_id)
                print("Undone." if result.changed else "Nothing to undo.", file=stream)
                state = result.state
            elif command == "r":
                state = service.restart(session_id).state
                print("New puzzle.", file=stream)
            elif command == "d" and len(parts) == 3:
                result = service.delete_cell(session_id, int(parts[1]), int(parts[2]))
                print("Cleared." if result.changed else "That cell is fixed.", file=stream)
                state = result.state
            elif command == "h" and len(parts) == 3:
                hint = service.candidates(session_id, int(parts[1]), int(parts[2]))
                digits = " ".join(str(n) for n in hint.candidates) or "(no hints)"
                print(f"Candidates: {digits}", file=stream)
                continue
            elif len(parts) == 3:
                row, col, num = (int(p) for p in parts)
                outcome = service.apply_move(session_id, row, col, num)
                for message in describe_outcome(outcome):
                    print(message, file=stream)
                state = outcome.state
            else:
                print("Unknown command.", file=stream)
                continue
        except ValueError as exc:
            print(f"Error: {exc}", file=stream)
            continue

        print(file=stream)
        pretty_print_snapshot(state, box_rows=box[0], box_cols=box[1], stream=stream)
        if state.terminal:
            print("Victory!" if state.terminal == "win" else "Defeat...", file=stream)
            print("Type r to play again or q to quit.", file=stream)

    service.end_session(session_id)


def describe_outcome(outcome) -> list[str]:
    """Turn a MoveOutcomeResponse into terminal messages, in resolution order."""
    status = outcome.status.value
    if status == "rejected_fixed":
        return ["That cell is fixed."]
    if status == "game_over":
        return ["The fight is over. Type r to restart."]
    if status == "invalid_move":
        return [f"Invalid placement! You take {outcome.damage_to_player} damage."]

    messages = []
    band = outcome.band_effect
    if band.type == "defense":
        messages.append(f"+{band.value:g} shield")
    elif band.crit:
        messages.append(f"{band.damage:g} critical!")
    else:
        messages.append(f"{band.damage:g} damage")
    for relic in outcome.relic_effects:
        messages.append(f"{relic.relic_id}: +{relic.amount:g} HP")
    for chain in outcome.chain_events:
        suffix = " enemy frozen!" if chain.frozen else ""
        messages.append(f"{chain.kind} chain! {chain.damage} damage (combo {chain.combo}){suffix}")
    if outcome.enemy_turn is not None:
        if outcome.enemy_turn.frozen:
            messages.append("The enemy is frozen.")
        else:
            messages.append(f"The enemy hits you for {outcome.enemy_turn.damage:g}.")
    return messages


if __name__ == "__main__":
    main()
