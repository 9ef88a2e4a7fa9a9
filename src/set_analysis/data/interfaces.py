"""Interfaces the analysis engine consumes.

The engine never loads game data itself. It talks to a GameData
implementation (species/form/version tables, encounter generator, name
lookup) and treats every encounter it receives as a read-only
CandidateEncounter.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from set_analysis.models.batch import StringInstruction
from set_analysis.models.constants import AbilityPermission
from set_analysis.models.entity import WorkingEntity


class CandidateEncounter(Protocol):
    """What the engine reads from an encounter."""

    @property
    def generation(self) -> int: ...

    @property
    def level_min(self) -> int: ...

    @property
    def ability(self) -> AbilityPermission: ...

    @property
    def is_static(self) -> bool: ...


class GameData(Protocol):
    """Species/version tables plus the encounter generator."""

    def exists_in_game(self, species: int, form: int, version: int) -> bool: ...

    def generation_of(self, version: int) -> int: ...

    def compatible_versions(
        self,
        entity: WorkingEntity,
        version: int,
        version_filter: Sequence[StringInstruction] | None,
    ) -> list[int]: ...

    def generate_encounters(
        self,
        entity: WorkingEntity,
        moves: Sequence[int],
        versions: Sequence[int],
    ) -> Iterable[CandidateEncounter]: ...

    def species_name(self, species: int, language: int, generation: int) -> str: ...

    def move_name(self, move: int) -> str: ...

    def record_moves(self, species: int, form: int) -> frozenset[int]: ...

    def abilities(self, species: int, form: int) -> tuple[int, ...]: ...


@dataclass(frozen=True, slots=True)
class AnalysisTarget:
    """The game an analysis is run against: data tables plus version info."""

    data: GameData
    version: int
    generation: int = 0             # 0 = derive from version

    @property
    def resolved_generation(self) -> int:
        if self.generation > 0:
            return self.generation
        return self.data.generation_of(self.version)
