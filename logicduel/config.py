"""
Configuration - Tunable numbers for the grid and the enemy profile.

Defaults reproduce the single fixed enemy the game ships with. A hosting
app can override them through environment variables:

    LOGICDUEL_SEED       Integer seed for the session RNG
    LOGICDUEL_HOLES      Number of cells carved out of the solution
    LOGICDUEL_LOG_LEVEL  Logging level name (DEBUG, INFO, ...)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
import os

from .grid.shape import GridShape
from .utils.logger import parse_level


@dataclass(frozen=True)
class GridConfig:
    """Grid geometry and carving parameters."""
    size: int = 6
    box_rows: int = 2
    box_cols: int = 3
    holes: int = 18
    retry_limit: int = 3

    def shape(self) -> GridShape:
        return GridShape(size=self.size, box_rows=self.box_rows, box_cols=self.box_cols)


@dataclass(frozen=True)
class CombatConfig:
    """Player and enemy numbers for one fight."""
    player_max_hp: int = 100
    enemy_max_hp: int = 200
    enemy_attack: float = 12
    enemy_attack_cap: float = 50
    attack_growth: float = 0.5

    # Digit bands
    crit_chance: float = 0.3
    crit_multiplier: int = 2

    # Chains
    combo_scale: float = 0.15
    box_damage_multiplier: int = 2
    freeze_turns: int = 1

    # Wrong placement costs this fraction of the enemy attack
    invalid_move_ratio: float = 0.5

    # Goldbach relic
    goldbach_target: int = 10
    goldbach_heal: int = 5


@dataclass(frozen=True)
class GameConfig:
    """Everything a session needs to start."""
    grid: GridConfig = field(default_factory=GridConfig)
    combat: CombatConfig = field(default_factory=CombatConfig)
    seed: int | None = None
    starting_relics: tuple[str, ...] = ("goldbach",)
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> GameConfig:
        """Build a config from LOGICDUEL_* environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        seed = env.get("LOGICDUEL_SEED")
        if seed:
            config = replace(config, seed=int(seed))

        holes = env.get("LOGICDUEL_HOLES")
        if holes:
            config = replace(config, grid=replace(config.grid, holes=int(holes)))

        level_name = env.get("LOGICDUEL_LOG_LEVEL")
        if level_name:
            config = replace(config, log_level=parse_level(level_name))

        return config
