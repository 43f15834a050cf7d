"""
Events - Typed descriptions of what a transition did.

Every combat transition returns one of these next to the new state.
The presentation layer turns them into floating text, flashes and
sounds; the engine never renders anything itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Band(Enum):
    """Digit categories and the effect family each one triggers."""
    DEFENSE = "defense"  # 1-3: shield
    ARCANE = "arcane"  # 4-6: moderate damage
    POWER = "power"  # 7-9: heavy damage, 9 may crit

    @classmethod
    def of(cls, num: int) -> Band:
        if 1 <= num <= 3:
            return cls.DEFENSE
        if 4 <= num <= 6:
            return cls.ARCANE
        if 7 <= num <= 9:
            return cls.POWER
        raise ValueError(f"Digit must be in 1..9, got {num}")


class ChainKind(Enum):
    """Which line or region a chain completed."""
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


@dataclass(frozen=True)
class BandEffect:
    """
    Result of filling a digit.

    value is the shield gained (defense band), damage the enemy damage
    dealt (arcane and power bands).
    """
    band: Band
    number: int
    value: float = 0
    damage: float = 0
    crit: bool = False


@dataclass(frozen=True)
class ChainEvent:
    """A completed row, column or box and the damage it dealt."""
    kind: ChainKind
    index: int | tuple[int, int]  # Row/column index, or (box_row, box_col)
    damage: int
    combo: int  # Combo after the increment
    frozen: bool = False


@dataclass(frozen=True)
class RelicEffect:
    """An extra effect layered on a fill by an active relic."""
    relic_id: str
    kind: str  # "heal"
    amount: float


@dataclass(frozen=True)
class EnemyTurnEffect:
    """What the enemy did on its turn."""
    frozen: bool
    damage: float = 0
