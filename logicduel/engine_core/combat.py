"""
Combat Engine - Applies grid events to combat state.

The engine is the single point of combat state change.
All HP, shield, combo and freeze updates go through it.

Design principles:
- Pure transitions: (state, event) -> (new_state, outcome)
- Clamps at the point of mutation instead of raising
- The crit roll is the only randomness and comes from the injected rng
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
import random

from ..config import CombatConfig
from ..grid.shape import EMPTY, Grid, GridShape
from ..utils.logger import get_logger
from .events import Band, BandEffect, ChainEvent, ChainKind, EnemyTurnEffect
from .state import CombatState

LOGGER = get_logger(__name__)

CRIT_DIGIT = 9
ARCANE_BONUS_DIGIT = 5


@dataclass
class CombatEngine:
    """
    Combat transitions for one enemy profile.

    Stateless apart from the rng - all fight data is in CombatState.
    """
    config: CombatConfig = field(default_factory=CombatConfig)
    shape: GridShape = field(default_factory=GridShape)
    rng: random.Random = field(default_factory=random.Random)

    def initial_state(self) -> CombatState:
        return CombatState.initial(self.config)

    # ------------------------------------------------------------------
    # Digit effects
    # ------------------------------------------------------------------
    def process_number(self, state: CombatState, num: int) -> tuple[CombatState, BandEffect]:
        """
        Apply the band effect of a successfully filled digit.

        Every call also raises the enemy attack by one growth step, up to
        the cap, whatever the band.
        """
        band = Band.of(num)

        if band == Band.DEFENSE:
            state = self.add_shield(state, num)
            effect = BandEffect(band=band, number=num, value=num)
        elif band == Band.ARCANE:
            damage = num * 5
            if num == ARCANE_BONUS_DIGIT:
                damage += 5
            state = self.deal_damage_to_enemy(state, damage)
            effect = BandEffect(band=band, number=num, damage=damage)
        else:
            damage = num * 10
            crit = num == CRIT_DIGIT and self.rng.random() < self.config.crit_chance
            if crit:
                damage *= self.config.crit_multiplier
            state = self.deal_damage_to_enemy(state, damage)
            effect = BandEffect(band=band, number=num, damage=damage, crit=crit)

        state = state._copy_with(
            enemy_attack=min(
                self.config.enemy_attack_cap,
                state.enemy_attack + self.config.attack_growth,
            )
        )
        return state, effect

    # ------------------------------------------------------------------
    # Primitive adjustments
    # ------------------------------------------------------------------
    def deal_damage_to_enemy(self, state: CombatState, damage: float) -> CombatState:
        return state._copy_with(enemy_hp=max(0, state.enemy_hp - damage))

    def damage_player(self, state: CombatState, damage: float) -> CombatState:
        """Damage that bypasses the shield."""
        return state._copy_with(player_hp=max(0, state.player_hp - damage))

    def add_shield(self, state: CombatState, amount: float) -> CombatState:
        return state._copy_with(player_shield=state.player_shield + amount)

    def heal(self, state: CombatState, amount: float) -> CombatState:
        return state._copy_with(player_hp=min(state.player_max_hp, state.player_hp + amount))

    def punish_invalid_move(self, state: CombatState) -> tuple[CombatState, int]:
        """
        Damage the player for an illegal placement.

        Costs ceil(enemy_attack * ratio) HP straight from the player, the
        shield is ignored and the enemy attack does not grow.
        """
        damage = math.ceil(state.enemy_attack * self.config.invalid_move_ratio)
        return self.damage_player(state, damage), damage

    # ------------------------------------------------------------------
    # Enemy turn
    # ------------------------------------------------------------------
    def enemy_turn(self, state: CombatState) -> tuple[CombatState, EnemyTurnEffect]:
        """
        Run the enemy's turn.

        A frozen enemy spends the turn thawing. Otherwise the shield
        absorbs what it can and is then reduced by the full attack, not by
        the damage that got through.
        """
        if state.is_frozen:
            remaining = state.freeze_turns_remaining - 1
            state = state._copy_with(
                freeze_turns_remaining=max(0, remaining),
                is_frozen=remaining > 0,
            )
            return state, EnemyTurnEffect(frozen=True)

        attack = state.enemy_attack
        damage = max(0, attack - state.player_shield)
        state = state._copy_with(
            player_hp=max(0, state.player_hp - damage),
            player_shield=max(0, state.player_shield - attack),
        )
        return state, EnemyTurnEffect(frozen=False, damage=damage)

    # ------------------------------------------------------------------
    # Chains
    # ------------------------------------------------------------------
    def check_row_complete(
        self, state: CombatState, grid: Grid, row: int
    ) -> tuple[CombatState, ChainEvent | None]:
        values = [grid[row][c] for c in range(self.shape.size)]
        return self._resolve_line(state, values, ChainKind.ROW, row)

    def check_col_complete(
        self, state: CombatState, grid: Grid, col: int
    ) -> tuple[CombatState, ChainEvent | None]:
        values = [grid[r][col] for r in range(self.shape.size)]
        return self._resolve_line(state, values, ChainKind.COLUMN, col)

    def check_box_complete(
        self, state: CombatState, grid: Grid, box_row: int, box_col: int
    ) -> tuple[CombatState, ChainEvent | None]:
        """
        Resolve a completed box.

        Deals twice the box sum, freezes the enemy for its next turn(s)
        and increments the combo. The combo does not scale box damage.
        """
        values = [grid[r][c] for r, c in self.shape.box_cells(box_row, box_col)]
        if any(value == EMPTY for value in values):
            return state, None

        damage = sum(values) * self.config.box_damage_multiplier
        state = self.deal_damage_to_enemy(state, damage)
        state = state._copy_with(
            is_frozen=True,
            freeze_turns_remaining=self.config.freeze_turns,
            combo=state.combo + 1,
        )
        LOGGER.debug("Box (%d,%d) complete: %d damage, enemy frozen", box_row, box_col, damage)
        return state, ChainEvent(
            kind=ChainKind.BOX,
            index=(box_row, box_col),
            damage=damage,
            combo=state.combo,
            frozen=True,
        )

    def _resolve_line(
        self, state: CombatState, values: list[int], kind: ChainKind, index: int
    ) -> tuple[CombatState, ChainEvent | None]:
        """Damage is the line sum scaled by the combo before it increments."""
        if any(value == EMPTY for value in values):
            return state, None

        multiplier = 1 + state.combo * self.config.combo_scale
        damage = math.floor(sum(values) * multiplier)
        state = self.deal_damage_to_enemy(state, damage)
        state = state._copy_with(combo=state.combo + 1)
        LOGGER.debug("%s %d complete: %d damage (combo %d)", kind.value, index, damage, state.combo)
        return state, ChainEvent(kind=kind, index=index, damage=damage, combo=state.combo)

    # ------------------------------------------------------------------
    # Terminal checks
    # ------------------------------------------------------------------
    def is_game_over(self, state: CombatState) -> bool:
        return state.player_defeated or state.enemy_defeated
