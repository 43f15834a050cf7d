"""
Snapshots - Read-only views of a session for rendering.

Pydantic models so a presentation layer can serialize them directly.
Snapshots are frozen copies; mutating the session afterwards does not
change a snapshot already handed out.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CombatStateInfo(BaseModel):
    """Combat numbers for the HUD."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    player_hp: float
    player_max_hp: int
    player_shield: float
    enemy_hp: float
    enemy_max_hp: int
    enemy_attack: float
    combo: int = 0
    last_filled_number: int = 0
    is_frozen: bool = False
    freeze_turns_remaining: int = 0


class RelicInfo(BaseModel):
    """Relic information for display."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    description: str


class SessionSnapshot(BaseModel):
    """Everything the renderer needs after a turn."""
    model_config = ConfigDict(frozen=True)

    user_grid: list[list[int]]
    fixed_cells: list[tuple[int, int]] = Field(default_factory=list)
    combat: CombatStateInfo
    relics: list[RelicInfo] = Field(default_factory=list)
    history_length: int = 0
    selected_cell: Optional[tuple[int, int]] = None
    terminal: Optional[str] = Field(default=None, description="win, lose or null")
