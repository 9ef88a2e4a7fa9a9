"""Encounter data model.

An encounter is one concrete historical way to obtain a creature: a wild
slot, a gift, a fixed (static) encounter, an egg, a trade. The analysis
engine only reads a few fields; the rest exist so batch filters can
address them by name.
"""

from dataclasses import dataclass, field

from set_analysis.models.constants import AbilityPermission


@dataclass(frozen=True, slots=True)
class EncounterRecord:
    """A single encounter row from the game data tables."""

    species: int
    form: int
    version: int
    generation: int
    level_min: int
    level_max: int
    name: str = ""
    ability: AbilityPermission = AbilityPermission.ANY_12
    is_static: bool = False          # fixed encounter (gift, legendary, event)
    is_egg: bool = False
    is_shiny_locked: bool = False
    can_downlevel: bool = False      # obtainable below level_min (e.g. chain methods)
    location: int = 0
    ball: int = 0
    moves: frozenset[int] = field(default_factory=frozenset)  # learnable through this path

    def can_learn_all(self, moves: tuple[int, ...] | list[int]) -> bool:
        """True if every nonzero move in *moves* is learnable via this encounter."""
        return all(m in self.moves for m in moves if m != 0)
