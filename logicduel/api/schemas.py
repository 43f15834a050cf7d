"""
Pydantic Schemas - Response models handed to a presentation layer.

These models define the contract between the engine and whatever draws
the game (browser page, terminal, test harness). Every model is JSON
serializable through model_dump()/model_dump_json().

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- INVALID_INPUT: Coordinates or digit out of range
- GENERATION_FAILED: A puzzle could not be generated
"""

from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from ..engine_core.events import BandEffect, ChainEvent, EnemyTurnEffect, RelicEffect
from ..session.outcome import MoveOutcome
from ..session.snapshot import SessionSnapshot


# =============================================================================
# Enums
# =============================================================================

class OutcomeStatus(str, Enum):
    """Outcome kinds as exposed to the presentation layer."""
    REJECTED_FIXED = "rejected_fixed"
    INVALID_MOVE = "invalid_move"
    APPLIED = "applied"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    GENERATION_FAILED = "GENERATION_FAILED"


# =============================================================================
# Event Models
# =============================================================================

class BandEffectInfo(BaseModel):
    """Effect of the filled digit."""
    model_config = ConfigDict(frozen=True)

    type: str = Field(description="defense, arcane or power")
    number: int
    value: float = 0
    damage: float = 0
    crit: bool = False

    @classmethod
    def from_event(cls, event: BandEffect) -> "BandEffectInfo":
        return cls(
            type=event.band.value,
            number=event.number,
            value=event.value,
            damage=event.damage,
            crit=event.crit,
        )


class RelicEffectInfo(BaseModel):
    """Extra effect from an active relic."""
    model_config = ConfigDict(frozen=True)

    relic_id: str
    kind: str
    amount: float

    @classmethod
    def from_event(cls, event: RelicEffect) -> "RelicEffectInfo":
        return cls(relic_id=event.relic_id, kind=event.kind, amount=event.amount)


class ChainEventInfo(BaseModel):
    """A completed row, column or box."""
    model_config = ConfigDict(frozen=True)

    kind: str = Field(description="row, column or box")
    index: Union[int, tuple[int, int]]
    damage: int
    combo: int
    frozen: bool = False

    @classmethod
    def from_event(cls, event: ChainEvent) -> "ChainEventInfo":
        return cls(
            kind=event.kind.value,
            index=event.index,
            damage=event.damage,
            combo=event.combo,
            frozen=event.frozen,
        )


class EnemyTurnInfo(BaseModel):
    """What the enemy did after the move."""
    model_config = ConfigDict(frozen=True)

    frozen: bool
    damage: float = 0

    @classmethod
    def from_event(cls, event: EnemyTurnEffect) -> "EnemyTurnInfo":
        return cls(frozen=event.frozen, damage=event.damage)


# =============================================================================
# Responses
# =============================================================================

class MoveOutcomeResponse(BaseModel):
    """Response for a move: the ordered events plus the state after them."""
    session_id: str
    status: OutcomeStatus
    row: int
    col: int
    num: int
    damage_to_player: int = 0
    band_effect: Optional[BandEffectInfo] = None
    relic_effects: list[RelicEffectInfo] = Field(default_factory=list)
    chain_events: list[ChainEventInfo] = Field(default_factory=list)
    enemy_turn: Optional[EnemyTurnInfo] = None
    terminal: Optional[str] = Field(default=None, description="win, lose or null")
    state: SessionSnapshot

    @classmethod
    def from_outcome(
        cls, session_id: str, outcome: MoveOutcome, state: SessionSnapshot
    ) -> "MoveOutcomeResponse":
        return cls(
            session_id=session_id,
            status=OutcomeStatus(outcome.kind.value),
            row=outcome.row,
            col=outcome.col,
            num=outcome.num,
            damage_to_player=outcome.damage_to_player,
            band_effect=(
                BandEffectInfo.from_event(outcome.band_effect)
                if outcome.band_effect else None
            ),
            relic_effects=[RelicEffectInfo.from_event(e) for e in outcome.relic_effects],
            chain_events=[ChainEventInfo.from_event(e) for e in outcome.chain_events],
            enemy_turn=(
                EnemyTurnInfo.from_event(outcome.enemy_turn)
                if outcome.enemy_turn else None
            ),
            terminal=outcome.terminal.value if outcome.terminal else None,
            state=state,
        )


class SessionResponse(BaseModel):
    """Response for session creation, restart and state queries."""
    session_id: str
    created_at: float
    state: SessionSnapshot
    api_version: str = "v1"


class GridEditResponse(BaseModel):
    """Response for delete and undo."""
    session_id: str
    changed: bool
    state: SessionSnapshot


class CandidatesResponse(BaseModel):
    """Digits revealed by Euler's Eye for one cell."""
    session_id: str
    row: int
    col: int
    candidates: list[int] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Structured error."""
    error_code: ErrorCode
    message: str
