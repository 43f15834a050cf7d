"""
Game Session - One fight from puzzle generation to win or lose.

Turn order inside apply_move (fixed):
0. A finished fight answers game_over and changes nothing
1. Reject fixed cells
2. Validate the digit against the live grid
3. Invalid: damage the player, check defeat, stop
4. Valid: record history, write the digit
5. Digit band effect
6. Relic effects
7. Row, column, box chains (each may trigger)
8. Enemy defeated? The player wins and the enemy does not act
9. Enemy turn
10. Player defeated? The player loses

Undo is grid-only: it restores the previous cell value but never rewinds
combat effects that move already applied.
"""

from __future__ import annotations
from dataclasses import InitVar, dataclass, field
import random

from ..config import GameConfig
from ..engine_core.combat import CombatEngine
from ..engine_core.events import RelicEffect
from ..engine_core.state import CombatState, Move, Relic, GOLDBACH, EULER, get_relic
from ..grid.generator import Puzzle, generate_puzzle
from ..grid.shape import EMPTY, Cell, Grid, copy_grid
from ..grid.validator import MoveValidator
from ..utils.logger import get_logger
from .outcome import MoveOutcome, Terminal
from .snapshot import CombatStateInfo, RelicInfo, SessionSnapshot

LOGGER = get_logger(__name__)


@dataclass
class GameSession:
    """
    An explicit session object owned by the caller.

    Contains:
    - The solution, the puzzle and the player's working grid
    - Combat state and the active relics
    - Move history for undo
    - The terminal result once the fight ends

    All randomness (generation and crit rolls) comes from rng.
    """
    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random | None = None
    initial_puzzle: InitVar[Puzzle | None] = None

    def __post_init__(self, initial_puzzle: Puzzle | None):
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.shape = self.config.grid.shape()
        self.validator = MoveValidator(self.shape)
        self.engine = CombatEngine(config=self.config.combat, shape=self.shape, rng=self.rng)

        self.solution: Grid = []
        self.puzzle: Grid = []
        self.user_grid: Grid = []
        self.fixed_cells: frozenset[Cell] = frozenset()
        self.combat: CombatState = self.engine.initial_state()
        self.relics: tuple[Relic, ...] = ()
        self.history: list[Move] = []
        self.selected_cell: Cell | None = None
        self.terminal: Terminal | None = None

        if initial_puzzle is not None:
            self._load(initial_puzzle)
        else:
            self.init()

    @classmethod
    def from_puzzle(
        cls,
        puzzle: Puzzle,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> GameSession:
        """Start a session on a known puzzle instead of a generated one."""
        return cls(config=config or GameConfig(), rng=rng, initial_puzzle=puzzle)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> None:
        """Generate a puzzle and reset all per-fight state."""
        grid_config = self.config.grid
        puzzle = generate_puzzle(
            size=grid_config.size,
            box_dims=(grid_config.box_rows, grid_config.box_cols),
            hole_count=grid_config.holes,
            rng=self.rng,
            retry_limit=grid_config.retry_limit,
        )
        self._load(puzzle)

    def restart(self) -> None:
        """Discard combat, relics, selection and history, then regenerate."""
        LOGGER.info("Restarting session")
        self.init()

    def _load(self, puzzle: Puzzle) -> None:
        self.solution = copy_grid(puzzle.solution)
        self.puzzle = copy_grid(puzzle.puzzle)
        self.user_grid = copy_grid(puzzle.puzzle)
        self.fixed_cells = puzzle.fixed_cells
        self.combat = self.engine.initial_state()
        self.relics = ()
        for relic_id in self.config.starting_relics:
            self.grant_relic(relic_id)
        self.history = []
        self.selected_cell = None
        self.terminal = None

    # ------------------------------------------------------------------
    # Relics
    # ------------------------------------------------------------------
    def grant_relic(self, relic_id: str) -> bool:
        """Add a relic if it is not already held. Returns True if added."""
        relic = get_relic(relic_id)
        if self.has_relic(relic.id):
            return False
        self.relics = self.relics + (relic,)
        return True

    def has_relic(self, relic_id: str) -> bool:
        return any(relic.id == relic_id for relic in self.relics)

    def candidates(self, row: int, col: int) -> tuple[int, ...]:
        """Legal digits for a cell, revealed only while Euler's Eye is held."""
        self._check_cell(row, col)
        if not self.has_relic(EULER.id) or (row, col) in self.fixed_cells:
            return ()
        return self.validator.candidates(self.user_grid, row, col)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def apply_move(self, row: int, col: int, num: int) -> MoveOutcome:
        """Resolve one placement and the turn it triggers."""
        self._check_cell(row, col)
        if num not in self.shape.digits:
            raise ValueError(f"Digit must be in 1..{self.shape.size}, got {num}")

        if self.terminal is not None:
            return MoveOutcome.game_over(row, col, num, self.terminal)

        if self.is_fixed(row, col):
            return MoveOutcome.rejected_fixed(row, col, num)

        if not self.validator.is_valid_move(self.user_grid, row, col, num, exclude_self=True):
            return self._apply_invalid(row, col, num)

        self.history.append(
            Move(row=row, col=col, old_value=self.user_grid[row][col], new_value=num)
        )
        self.user_grid[row][col] = num

        state, band_effect = self.engine.process_number(self.combat, num)

        relic_effects: list[RelicEffect] = []
        if self.has_relic(GOLDBACH.id):
            if state.last_filled_number + num == self.config.combat.goldbach_target:
                healed = self.engine.heal(state, self.config.combat.goldbach_heal)
                relic_effects.append(
                    RelicEffect(
                        relic_id=GOLDBACH.id,
                        kind="heal",
                        amount=healed.player_hp - state.player_hp,
                    )
                )
                state = healed
        state = state._copy_with(last_filled_number=num)

        chain_events = []
        state, row_chain = self.engine.check_row_complete(state, self.user_grid, row)
        state, col_chain = self.engine.check_col_complete(state, self.user_grid, col)
        box_row, box_col = self.shape.box_of(row, col)
        state, box_chain = self.engine.check_box_complete(state, self.user_grid, box_row, box_col)
        for chain in (row_chain, col_chain, box_chain):
            if chain is not None:
                chain_events.append(chain)

        if state.enemy_defeated:
            self.combat = state
            return self._finish(
                MoveOutcome.applied(
                    row, col, num, band_effect, relic_effects, chain_events,
                    terminal=Terminal.WIN,
                )
            )

        state, enemy_turn = self.engine.enemy_turn(state)
        self.combat = state

        terminal = Terminal.LOSE if state.player_defeated else None
        return self._finish(
            MoveOutcome.applied(
                row, col, num, band_effect, relic_effects, chain_events,
                enemy_turn=enemy_turn, terminal=terminal,
            )
        )

    def _apply_invalid(self, row: int, col: int, num: int) -> MoveOutcome:
        self.combat, damage = self.engine.punish_invalid_move(self.combat)
        LOGGER.info("Invalid placement %d at (%d,%d): player takes %d", num, row, col, damage)
        terminal = Terminal.LOSE if self.combat.player_defeated else None
        return self._finish(MoveOutcome.invalid(row, col, num, damage, terminal))

    def _finish(self, outcome: MoveOutcome) -> MoveOutcome:
        if outcome.terminal is not None:
            self.terminal = outcome.terminal
            LOGGER.info(
                "Fight over: %s (combo %d, player HP %s, enemy HP %s)",
                outcome.terminal.value,
                self.combat.combo,
                self.combat.player_hp,
                self.combat.enemy_hp,
            )
        return outcome

    def delete_cell(self, row: int, col: int) -> bool:
        """Clear a non-fixed cell. No combat effect, no history entry."""
        self._check_cell(row, col)
        if self.is_fixed(row, col):
            return False
        self.user_grid[row][col] = EMPTY
        return True

    def undo(self) -> bool:
        """Restore the cell changed by the most recent fill. False if no history."""
        if not self.history:
            return False
        last_move = self.history.pop()
        self.user_grid[last_move.row][last_move.col] = last_move.old_value
        return True

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_cell(self, row: int, col: int) -> None:
        self._check_cell(row, col)
        self.selected_cell = (row, col)

    def fill_selected(self, num: int) -> MoveOutcome | None:
        """Apply a move at the selected cell. None if nothing is selected."""
        if self.selected_cell is None:
            return None
        return self.apply_move(*self.selected_cell, num)

    def delete_selected(self) -> bool:
        if self.selected_cell is None:
            return False
        return self.delete_cell(*self.selected_cell)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_fixed(self, row: int, col: int) -> bool:
        return (row, col) in self.fixed_cells

    def is_over(self) -> bool:
        return self.terminal is not None

    def get_state(self) -> SessionSnapshot:
        """Read-only snapshot for rendering."""
        return SessionSnapshot(
            user_grid=copy_grid(self.user_grid),
            fixed_cells=sorted(self.fixed_cells),
            combat=CombatStateInfo.model_validate(self.combat),
            relics=[RelicInfo.model_validate(relic) for relic in self.relics],
            history_length=len(self.history),
            selected_cell=self.selected_cell,
            terminal=self.terminal.value if self.terminal else None,
        )

    def _check_cell(self, row: int, col: int) -> None:
        if not self.shape.contains(row, col):
            raise ValueError(f"Cell ({row},{col}) is outside the {self.shape.size}x{self.shape.size} grid")


def apply_move(session: GameSession, row: int, col: int, num: int) -> MoveOutcome:
    """Convenience function to apply a move to a session."""
    return session.apply_move(row, col, num)


def undo(session: GameSession) -> bool:
    """Convenience function to undo the last fill of a session."""
    return session.undo()


def get_state(session: GameSession) -> SessionSnapshot:
    """Convenience function to snapshot a session."""
    return session.get_state()
