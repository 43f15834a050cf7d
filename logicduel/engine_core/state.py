"""
Combat State - Explicit containers for everything a fight tracks.

Design principles:
- Immutable: transitions return a new CombatState, never mutate
- Clamped: HP and shield never drop below zero, attack never exceeds its cap
- Presentation-free: rendering reads snapshots, it never owns state
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from ..config import CombatConfig


@dataclass(frozen=True)
class CombatState:
    """
    Complete combat state at a point in time.

    HP values may be fractional: enemy attack grows in half steps and
    unblocked damage is applied as-is.
    """
    player_hp: float
    player_max_hp: int
    player_shield: float
    enemy_hp: float
    enemy_max_hp: int
    enemy_attack: float

    combo: int = 0
    last_filled_number: int = 0

    # Enemy status
    is_frozen: bool = False
    freeze_turns_remaining: int = 0

    @classmethod
    def initial(cls, config: CombatConfig | None = None) -> CombatState:
        """Fresh state for one fight with the configured enemy profile."""
        config = config or CombatConfig()
        return cls(
            player_hp=config.player_max_hp,
            player_max_hp=config.player_max_hp,
            player_shield=0,
            enemy_hp=config.enemy_max_hp,
            enemy_max_hp=config.enemy_max_hp,
            enemy_attack=config.enemy_attack,
        )

    @property
    def player_defeated(self) -> bool:
        return self.player_hp <= 0

    @property
    def enemy_defeated(self) -> bool:
        return self.enemy_hp <= 0

    def _copy_with(self, **kwargs) -> CombatState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Move:
    """One successful fill, kept for undo."""
    row: int
    col: int
    old_value: int
    new_value: int


@dataclass(frozen=True)
class Relic:
    """
    A passive modifier held by the player.

    Relics are created once at import time and never mutated; sessions
    hold references to the shared instances.
    """
    id: str
    name: str
    description: str


GOLDBACH = Relic(
    id="goldbach",
    name="Goldbach's Kiss",
    description="Two consecutive fills summing to 10 heal 5 HP",
)

EULER = Relic(
    id="euler",
    name="Euler's Eye",
    description="Reveals the digits that fit the current cell",
)

RELICS: dict[str, Relic] = {relic.id: relic for relic in (GOLDBACH, EULER)}


def get_relic(relic_id: str) -> Relic:
    """Look up a relic by id."""
    try:
        return RELICS[relic_id]
    except KeyError:
        raise ValueError(f"Unknown relic: {relic_id}") from None
