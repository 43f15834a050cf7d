"""Plain-text rendering of grids and combat state for the terminal."""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..grid.shape import Cell, Grid
    from ..session.snapshot import SessionSnapshot


def format_grid(
    grid: Grid,
    box_rows: int = 2,
    box_cols: int = 3,
    fixed: Iterable[Cell] = (),
) -> str:
    """Render a grid with box separators. Fixed cells are bracketed."""
    fixed_cells = set(fixed)
    size = len(grid)
    header = "    " + " ".join(
        f"{c:>3}" + ("  " if (c + 1) % box_cols == 0 and c + 1 < size else "")
        for c in range(size)
    )
    lines = [header]
    rule = "    " + "-" * (len(header) - 4)
    lines.append(rule)
    for r, row in enumerate(grid):
        cells = []
        for c, value in enumerate(row):
            symbol = "." if value == 0 else str(value)
            if (r, c) in fixed_cells:
                symbol = f"[{symbol}]"
            cells.append(f"{symbol:>3}")
            if (c + 1) % box_cols == 0 and c + 1 < size:
                cells.append("|")
        lines.append(f"{r:>2} | " + " ".join(cells))
        if (r + 1) % box_rows == 0 and r + 1 < size:
            lines.append(rule)
    return "\n".join(lines)


def format_status(snapshot: SessionSnapshot) -> str:
    """One-block HUD: HP, shield, attack, combo, relics."""
    combat = snapshot.combat
    lines = [
        f"Player  HP {math.ceil(combat.player_hp)}/{combat.player_max_hp}"
        f"  Shield {combat.player_shield:g}",
        f"Enemy   HP {math.ceil(combat.enemy_hp)}/{combat.enemy_max_hp}"
        f"  Attack {math.floor(combat.enemy_attack)}"
        + ("  (frozen)" if combat.is_frozen else ""),
        f"Combo   {combat.combo}",
    ]
    if snapshot.relics:
        lines.append("Relics  " + ", ".join(relic.name for relic in snapshot.relics))
    return "\n".join(lines)


def pretty_print_snapshot(snapshot: SessionSnapshot, *, box_rows: int = 2, box_cols: int = 3,
                          stream=None) -> None:
    """Print the HUD and the grid."""

    stream = stream or sys.stdout
    print(format_status(snapshot), file=stream)
    print(file=stream)
    print(
        format_grid(snapshot.user_grid, box_rows, box_cols, fixed=snapshot.fixed_cells),
        file=stream,
    )
