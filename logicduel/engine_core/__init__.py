"""
Engine Core - Deterministic combat state and transitions.

The engine is the runtime that:
1. Holds CombatState for one fight
2. Turns digit fills into band effects
3. Resolves row, column and box chains
4. Runs the enemy turn
5. Reports each step as a typed event
"""

from .state import CombatState, Move, Relic, RELICS, GOLDBACH, EULER, get_relic
from .events import Band, BandEffect, ChainKind, ChainEvent, RelicEffect, EnemyTurnEffect
from .combat import CombatEngine

__all__ = [
    "CombatState",
    "Move",
    "Relic",
    "RELICS",
    "GOLDBACH",
    "EULER",
    "get_relic",
    "Band",
    "BandEffect",
    "ChainKind",
    "ChainEvent",
    "RelicEffect",
    "EnemyTurnEffect",
    "CombatEngine",
]
