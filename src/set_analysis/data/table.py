"""In-memory game data tables and a table-driven encounter generator.

GameDataTable implements the GameData interface from plain dicts (usually
a JSON file). Layout:

    {
      "versions":   [{"id": 44, "name": "SW", "generation": 8, "origins": [..]}],
      "species":    [{"species": 25, "form": 0, "name": "Pikachu",
                      "names": {"1": "ピカチュウ"}, "form_name": "",
                      "versions": [44], "abilities": [9, 9, 31],
                      "record_moves": [85]}],
      "moves":      [{"id": 85, "name": "Thunderbolt"}],
      "abilities":  [{"id": 9, "name": "Static"}],
      "encounters": [{"species": 25, "form": 0, "version": 44,
                      "level_min": 5, "level_max": 10, "ability": 4,
                      "is_static": false, "moves": [84, 85]}]
    }

``origins`` is optional: by default a version accepts records from every
version of the same or an earlier generation. Encounter ``generation``
defaults to its version's generation.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from set_analysis.engine.filters import attribute_name, is_filter_match
from set_analysis.models.batch import StringInstruction
from set_analysis.models.constants import AbilityPermission, LanguageID
from set_analysis.models.encounter import EncounterRecord
from set_analysis.models.entity import WorkingEntity

# Batch filter properties that select game versions.
VERSION_FILTER_PROPERTIES = frozenset({"version", "generation"})


@dataclass(frozen=True, slots=True)
class VersionEntry:
    """A game version and the versions whose records it accepts."""

    version: int
    name: str
    generation: int
    origins: tuple[int, ...] = ()


@dataclass(slots=True)
class SpeciesEntry:
    """Per species-form data."""

    species: int
    form: int
    name: str
    form_name: str = ""
    names: dict[int, str] = field(default_factory=dict)   # language -> name
    versions: frozenset[int] = frozenset()
    abilities: tuple[int, ...] = ()                       # first, second, hidden
    record_moves: frozenset[int] = frozenset()


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{what}: bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            pass
    raise ValueError(f"{what}: expected integer-like value, got {value!r}")


def _int_list(values: Any, what: str) -> list[int]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise ValueError(f"{what}: expected a list, got {values!r}")
    return [_int(v, what) for v in values]


def _ability_permission(value: Any) -> AbilityPermission:
    if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
        key = value.strip().upper()
        try:
            return AbilityPermission[key]
        except KeyError:
            raise ValueError(f"Unknown ability permission: {value!r}") from None
    return AbilityPermission(_int(value, "ability"))


def _require(entry: dict[str, Any], key: str, what: str) -> Any:
    if key not in entry:
        raise ValueError(f"{what} entry missing {key!r}: {entry!r}")
    return entry[key]


# ---------------------------------------------------------------------------
# GameDataTable
# ---------------------------------------------------------------------------


class GameDataTable:
    """GameData backed by in-memory tables."""

    __slots__ = ("_versions", "_species", "_moves", "_abilities", "_encounters")

    def __init__(
        self,
        versions: list[VersionEntry],
        species: list[SpeciesEntry],
        moves: dict[int, str],
        encounters: list[EncounterRecord],
        abilities: dict[int, str] | None = None,
    ) -> None:
        self._versions: dict[int, VersionEntry] = {v.version: v for v in versions}
        self._species: dict[tuple[int, int], SpeciesEntry] = {
            (s.species, s.form): s for s in species
        }
        self._moves = dict(moves)
        self._abilities = dict(abilities or {})
        self._encounters = list(encounters)

    # --- Construction -------------------------------------------------------

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> GameDataTable:
        """Build tables from a JSON-style dict. Raises ValueError if malformed."""
        if not isinstance(payload, dict):
            raise ValueError("Game data payload must be an object")

        versions: list[VersionEntry] = []
        for entry in payload.get("versions", []):
            versions.append(VersionEntry(
                version=_int(_require(entry, "id", "version"), "version id"),
                name=str(entry.get("name", "")),
                generation=_int(_require(entry, "generation", "version"), "generation"),
                origins=tuple(_int_list(entry.get("origins"), "origins")),
            ))
        generations = {v.version: v.generation for v in versions}

        species: list[SpeciesEntry] = []
        for entry in payload.get("species", []):
            names_raw = entry.get("names") or {}
            species.append(SpeciesEntry(
                species=_int(_require(entry, "species", "species"), "species"),
                form=_int(entry.get("form", 0), "form"),
                name=str(_require(entry, "name", "species")),
                form_name=str(entry.get("form_name", "")),
                names={_int(k, "language"): str(v) for k, v in names_raw.items()},
                versions=frozenset(_int_list(entry.get("versions"), "versions")),
                abilities=tuple(_int_list(entry.get("abilities"), "abilities")),
                record_moves=frozenset(_int_list(entry.get("record_moves"), "record_moves")),
            ))

        moves = {
            _int(_require(m, "id", "move"), "move id"): str(m.get("name", ""))
            for m in payload.get("moves", [])
        }
        abilities = {
            _int(_require(a, "id", "ability"), "ability id"): str(a.get("name", ""))
            for a in payload.get("abilities", [])
        }

        encounters: list[EncounterRecord] = []
        for entry in payload.get("encounters", []):
            version = _int(_require(entry, "version", "encounter"), "version")
            if "generation" in entry:
                generation = _int(entry["generation"], "generation")
            elif version in generations:
                generation = generations[version]
            else:
                raise ValueError(f"Encounter references unknown version {version}")
            level_min = _int(entry.get("level_min", 1), "level_min")
            encounters.append(EncounterRecord(
                species=_int(_require(entry, "species", "encounter"), "species"),
                form=_int(entry.get("form", 0), "form"),
                version=version,
                generation=generation,
                level_min=level_min,
                level_max=_int(entry.get("level_max", level_min), "level_max"),
                name=str(entry.get("name", "")),
                ability=_ability_permission(entry.get("ability", 0)),
                is_static=bool(entry.get("is_static", False)),
                is_egg=bool(entry.get("is_egg", False)),
                is_shiny_locked=bool(entry.get("is_shiny_locked", False)),
                can_downlevel=bool(entry.get("can_downlevel", False)),
                location=_int(entry.get("location", 0), "location"),
                ball=_int(entry.get("ball", 0), "ball"),
                moves=frozenset(_int_list(entry.get("moves"), "moves")),
            ))

        return cls(versions, species, moves, encounters, abilities)

    @classmethod
    def load(cls, path: Path) -> GameDataTable:
        """Load tables from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    # --- Lookups ------------------------------------------------------------

    def version_entry(self, version: int) -> VersionEntry:
        entry = self._versions.get(version)
        if entry is None:
            raise ValueError(f"Unknown game version: {version}")
        return entry

    def version_by_name(self, name: str) -> int | None:
        lowered = name.strip().lower()
        for entry in self._versions.values():
            if entry.name.lower() == lowered:
                return entry.version
        return None

    def species_entry(self, species: int, form: int = 0) -> SpeciesEntry | None:
        return self._species.get((species, form))

    def find_species(self, name: str) -> tuple[int, int] | None:
        """Resolve a display name ("Raichu" or "Raichu-Alola") to (species, form)."""
        lowered = name.strip().lower()
        for entry in self._species.values():
            label = entry.name if not entry.form_name else f"{entry.name}-{entry.form_name}"
            if label.lower() == lowered:
                return entry.species, entry.form
        return None

    def find_move(self, name: str) -> int | None:
        lowered = name.strip().lower()
        for move, move_name in self._moves.items():
            if move_name.lower() == lowered:
                return move
        return None

    def find_ability(self, name: str) -> int | None:
        lowered = name.strip().lower()
        for ability, ability_name in self._abilities.items():
            if ability_name.lower() == lowered:
                return ability
        return None

    # --- GameData -----------------------------------------------------------

    def exists_in_game(self, species: int, form: int, version: int) -> bool:
        entry = self._species.get((species, form))
        return entry is not None and version in entry.versions

    def generation_of(self, version: int) -> int:
        return self.version_entry(version).generation

    def compatible_versions(
        self,
        entity: WorkingEntity,
        version: int,
        version_filter: Sequence[StringInstruction] | None,
    ) -> list[int]:
        """Versions a record could originate from, destination first."""
        target = self.version_entry(version)
        if target.origins:
            others = [v for v in target.origins if v != version]
        else:
            others = [
                v.version
                for v in sorted(
                    self._versions.values(),
                    key=lambda v: (-v.generation, v.version),
                )
                if v.version != version and v.generation <= target.generation
            ]
        result = [version] + others
        filters = self._version_filters(version_filter)
        if filters:
            result = [
                v for v in result
                if v in self._versions and is_filter_match(filters, self._versions[v])
            ]
        return result

    def _version_filters(
        self, version_filter: Sequence[StringInstruction] | None
    ) -> list[StringInstruction]:
        """Keep version-related filters; translate version names to ids."""
        if not version_filter:
            return []
        filters: list[StringInstruction] = []
        for f in version_filter:
            prop = attribute_name(f.property_name)
            if prop not in VERSION_FILTER_PROPERTIES:
                continue
            if prop == "version":
                resolved = self.version_by_name(f.value)
                if resolved is not None:
                    f = StringInstruction(f.property_name, str(resolved), f.operator)
            filters.append(f)
        return filters

    def generate_encounters(
        self,
        entity: WorkingEntity,
        moves: Sequence[int],
        versions: Sequence[int],
    ) -> Iterator[EncounterRecord]:
        """Lazily yield encounters that can carry every requested move.

        Moves flagged as technical records on the entity are learnable after
        capture, whatever the encounter.
        """
        wanted = [m for m in moves if m != 0 and m not in entity.record_flags]
        for version in versions:
            for enc in self._encounters:
                if enc.version != version:
                    continue
                if enc.species != entity.species or enc.form != entity.form:
                    continue
                if enc.can_learn_all(wanted):
                    yield enc

    def species_name(self, species: int, language: int, generation: int) -> str:
        entry = self._species.get((species, 0))
        if entry is None:
            entry = next((s for s in self._species.values() if s.species == species), None)
        if entry is None:
            return f"Species #{species}"
        name = entry.names.get(language, entry.name)
        # Names were stored in capitals before generation 5 (except Korean in gen 4).
        if generation < 5 and not (generation == 4 and language == LanguageID.KOREAN):
            return name.upper()
        return name

    def move_name(self, move: int) -> str:
        return self._moves.get(move) or f"Move #{move}"

    def record_moves(self, species: int, form: int) -> frozenset[int]:
        entry = self._species.get((species, form))
        return entry.record_moves if entry else frozenset()

    def abilities(self, species: int, form: int) -> tuple[int, ...]:
        entry = self._species.get((species, form))
        return entry.abilities if entry else ()
