"""Diagnosis result variants.

Each analysis produces exactly one of these. They carry every argument
their message needs, so rendering (engine.messages) is a pure lookup.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpeciesUnavailable:
    """The species (or species + form) does not exist in the target game."""

    species_name: str
    form_name: str | None = None


@dataclass(frozen=True, slots=True)
class InvalidMoves:
    """Some requested moves cannot be learned together with the rest."""

    species_name: str
    moves: tuple[int, ...]
    move_names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AllMovesInvalid:
    """No requested move yields any encounter."""


@dataclass(frozen=True, slots=True)
class LevelTooLow:
    """Requested level is below every encounter's minimum level."""

    species_name: str
    min_level: int


@dataclass(frozen=True, slots=True)
class HiddenAbilityOnly:
    """Only hidden-ability encounters remain, but a regular ability was asked for."""

    species_name: str


@dataclass(frozen=True, slots=True)
class HiddenAbilityUnavailable:
    """A hidden ability was asked for, but no remaining encounter can have one."""

    species_name: str


@dataclass(frozen=True, slots=True)
class NoAnalysis:
    """No specific defect found. Not a claim of legality."""


DiagnosisResult = (
    SpeciesUnavailable
    | InvalidMoves
    | AllMovesInvalid
    | LevelTooLow
    | HiddenAbilityOnly
    | HiddenAbilityUnavailable
    | NoAnalysis
)
