"""Parse Showdown-style set text into a RequestedConfiguration.

Besides the usual set lines, regeneration lines are understood:

    Pikachu @ Light Ball
    Ability: Static
    Level: 50
    - Thunderbolt
    - Volt Tackle
    ~=Generation=8        encounter filter
    =Version=SW           batch filter (restricts origin versions)
    .Ball=4               batch instruction
    Version: SH           destination version override

Names are resolved through a GameDataTable; unknown names raise ValueError.
"""

from __future__ import annotations

import re

from set_analysis.data.table import GameDataTable
from set_analysis.models.batch import BatchSettings, parse_filters
from set_analysis.models.constants import MAX_MOVES
from set_analysis.models.request import RequestedConfiguration

ENCOUNTER_FILTER_PREFIX = "~"
BATCH_PREFIXES = ("=", "!", ">", "<", "≥", "≤", ".")

_GENDER_SUFFIX = re.compile(r"\s*\((?:M|F)\)\s*$")
_NICKNAMED = re.compile(r"^.*\(([^()]+)\)\s*$")
_MOVE_BRACKET = re.compile(r"\s*\[[^\]]*\]\s*$")

# Set lines that carry no information for the analysis.
_IGNORED_KEYS = frozenset({
    "evs", "ivs", "shiny", "gender", "happiness", "friendship", "tera type",
    "dynamax level", "gigantamax", "ball", "language", "ot", "tid", "sid",
})


def _species_label(line: str) -> str:
    """Extract "Species-Form" from the first set line."""
    text = line.split("@", 1)[0].strip()
    text = _GENDER_SUFFIX.sub("", text)
    match = _NICKNAMED.match(text)
    if match:
        text = match.group(1)
    return text.strip()


def _resolve_species(label: str, data: GameDataTable) -> tuple[int, int, str]:
    """Return (species, form, form_name) for a species label."""
    found = data.find_species(label)
    if found is not None:
        species, form = found
        entry = data.species_entry(species, form)
        return species, form, entry.form_name if entry else ""
    raise ValueError(f"Unknown species: {label!r}")


def _parse_level(value: str) -> int:
    try:
        level = int(value.strip())
    except ValueError:
        raise ValueError(f"Invalid level: {value!r}") from None
    if level < 1 or level > 100:
        raise ValueError(f"Level must be 1..100, got {level}")
    return level


def parse_showdown_set(text: str, data: GameDataTable) -> RequestedConfiguration:
    """Parse one set. Raises ValueError on unknown names or malformed lines."""
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not lines:
        raise ValueError("Empty set text")

    species, form, form_name = _resolve_species(_species_label(lines[0]), data)
    moves: list[int] = []
    level = 100
    ability: int | None = None
    version: int | None = None
    encounter_lines: list[str] = []
    batch_lines: list[str] = []

    for line in lines[1:]:
        if line.startswith(ENCOUNTER_FILTER_PREFIX):
            encounter_lines.append(line[1:])
            continue
        if line.startswith("-"):
            name = _MOVE_BRACKET.sub("", line[1:].strip())
            move = data.find_move(name)
            if move is None:
                raise ValueError(f"Unknown move: {name!r}")
            if move not in moves:
                moves.append(move)
            continue
        if line.startswith(BATCH_PREFIXES):
            batch_lines.append(line)
            continue
        if line.endswith(" Nature"):
            continue
        if ":" not in line:
            raise ValueError(f"Unrecognized set line: {line!r}")

        key, value = (part.strip() for part in line.split(":", 1))
        lowered = key.lower()
        if lowered == "ability":
            ability = data.find_ability(value)
            if ability is None:
                raise ValueError(f"Unknown ability: {value!r}")
        elif lowered == "level":
            level = _parse_level(value)
        elif lowered == "version":
            version = data.version_by_name(value)
            if version is None:
                raise ValueError(f"Unknown version: {value!r}")
        elif lowered not in _IGNORED_KEYS:
            raise ValueError(f"Unrecognized set line: {line!r}")

    if len(moves) > MAX_MOVES:
        raise ValueError(f"At most {MAX_MOVES} moves allowed, got {len(moves)}")

    return RequestedConfiguration(
        species=species,
        form=form,
        form_name=form_name,
        moves=tuple(moves),
        level=level,
        ability=ability,
        version=version,
        encounter_filters=tuple(parse_filters(encounter_lines)) if encounter_lines else None,
        batch=BatchSettings.from_lines(batch_lines),
    )
