"""
Move Outcome - What a single apply_move call did.

Outcomes are normal results, never exceptions:
1. rejected_fixed: the cell was pre-filled, nothing changed
2. invalid_move: the digit broke a rule and hurt the player
3. applied: the digit was written and the full turn resolved
4. game_over: the fight already ended, nothing changed
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable
from enum import Enum

from ..engine_core.events import BandEffect, ChainEvent, EnemyTurnEffect, RelicEffect


class OutcomeKind(Enum):
    """Types of move outcomes."""
    REJECTED_FIXED = "rejected_fixed"
    INVALID_MOVE = "invalid_move"
    APPLIED = "applied"
    GAME_OVER = "game_over"


class Terminal(Enum):
    """How a fight ended."""
    WIN = "win"
    LOSE = "lose"


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of applying a move.

    Events are listed in the order they were resolved so a presentation
    layer can replay them one by one.
    """
    kind: OutcomeKind
    row: int
    col: int
    num: int

    # invalid_move
    damage_to_player: int = 0

    # applied
    band_effect: BandEffect | None = None
    relic_effects: tuple[RelicEffect, ...] = ()
    chain_events: tuple[ChainEvent, ...] = ()
    enemy_turn: EnemyTurnEffect | None = None

    terminal: Terminal | None = None

    @property
    def changed_grid(self) -> bool:
        return self.kind == OutcomeKind.APPLIED

    @classmethod
    def rejected_fixed(cls, row: int, col: int, num: int) -> MoveOutcome:
        return cls(kind=OutcomeKind.REJECTED_FIXED, row=row, col=col, num=num)

    @classmethod
    def game_over(cls, row: int, col: int, num: int, terminal: Terminal | None) -> MoveOutcome:
        return cls(kind=OutcomeKind.GAME_OVER, row=row, col=col, num=num, terminal=terminal)

    @classmethod
    def invalid(
        cls, row: int, col: int, num: int, damage: int, terminal: Terminal | None = None
    ) -> MoveOutcome:
        return cls(
            kind=OutcomeKind.INVALID_MOVE,
            row=row,
            col=col,
            num=num,
            damage_to_player=damage,
            terminal=terminal,
        )

    @classmethod
    def applied(
        cls,
        row: int,
        col: int,
        num: int,
        band_effect: BandEffect,
        relic_effects: Iterable[RelicEffect] = (),
        chain_events: Iterable[ChainEvent] = (),
        enemy_turn: EnemyTurnEffect | None = None,
        terminal: Terminal | None = None,
    ) -> MoveOutcome:
        return cls(
            kind=OutcomeKind.APPLIED,
            row=row,
            col=col,
            num=num,
            band_effect=band_effect,
            relic_effects=tuple(relic_effects),
            chain_events=tuple(chain_events),
            enemy_turn=enemy_turn,
            terminal=terminal,
        )
