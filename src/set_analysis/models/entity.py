"""Working creature record used while probing for encounters.

The analysis never touches a real save-file record. Instead each probe
builds a WorkingEntity from the requested set, adjusts it (record flags,
experience) and hands it to the encounter generator.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from set_analysis.models.constants import MAX_MOVES
from set_analysis.models.request import RequestedConfiguration


@dataclass
class WorkingEntity:
    """Scratch creature record."""

    version: int
    species: int = 0
    form: int = 0
    moves: list[int] = field(default_factory=lambda: [0] * MAX_MOVES)
    current_level: int = 1
    ability: int | None = None
    ability_number: int | None = None

    # Technical-record flags for moves the species learns by record item.
    record_flags: set[int] = field(default_factory=set)

    @classmethod
    def blank(cls, version: int) -> WorkingEntity:
        """An empty record for the given game version."""
        return cls(version=version)

    def copy(self) -> WorkingEntity:
        return copy.deepcopy(self)

    def apply_request(self, request: RequestedConfiguration) -> None:
        """Copy species, form, moves, level and ability from *request*."""
        self.species = request.species
        self.form = request.form
        self.moves = list(request.moves)
        self.current_level = request.level
        self.ability = request.ability
        self.ability_number = request.ability_number
        self.record_flags = set()

    def set_record_flags(self, record_moves: frozenset[int] | set[int]) -> None:
        """Flag every current move that is learnable by technical record."""
        self.record_flags = {m for m in self.moves if m != 0 and m in record_moves}

    def reset_experience(self) -> None:
        """Drop accumulated experience, leaving the record at level 1."""
        self.current_level = 1
