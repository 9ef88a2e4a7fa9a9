"""Requested set data model.

A RequestedConfiguration is what a user asks for: species, form, moves,
level and ability, plus optional encounter filters and batch settings. It is
immutable; the analysis engine derives scratch copies when it needs a
different move list.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from set_analysis.models.batch import BatchSettings, StringInstruction
from set_analysis.models.constants import MAX_MOVES


@dataclass(frozen=True, slots=True)
class RequestedConfiguration:
    """A requested creature set."""

    species: int
    form: int = 0
    form_name: str = ""
    moves: tuple[int, ...] = (0, 0, 0, 0)    # 0 = empty slot
    level: int = 100
    ability: int | None = None               # ability id, None = unspecified
    ability_number: int | None = None        # explicit slot: 1, 2 or 4 (hidden)
    version: int | None = None               # overrides the target version
    encounter_filters: tuple[StringInstruction, ...] | None = None
    batch: BatchSettings = field(default_factory=BatchSettings)

    def __post_init__(self) -> None:
        moves = tuple(self.moves)
        if len(moves) > MAX_MOVES:
            raise ValueError(f"At most {MAX_MOVES} moves allowed, got {len(moves)}")
        # Right-pad so every copy carries a full slot list.
        object.__setattr__(self, "moves", moves + (0,) * (MAX_MOVES - len(moves)))

    @property
    def requested_moves(self) -> tuple[int, ...]:
        """Nonzero moves in slot order."""
        return tuple(m for m in self.moves if m != 0)

    def with_moves(self, moves: tuple[int, ...] | list[int]) -> RequestedConfiguration:
        """Return a scratch copy carrying *moves* instead of the requested ones."""
        return replace(self, moves=tuple(moves))
