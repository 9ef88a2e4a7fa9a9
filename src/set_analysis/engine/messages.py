"""English message templates for diagnosis results."""

from __future__ import annotations

from set_analysis.models.diagnosis import (
    AllMovesInvalid,
    DiagnosisResult,
    HiddenAbilityOnly,
    HiddenAbilityUnavailable,
    InvalidMoves,
    LevelTooLow,
    NoAnalysis,
    SpeciesUnavailable,
)

ANALYSIS_INVALID = (
    "No possible encounter could be found. "
    "Specific analysis for this set is unavailable."
)
SPECIES_UNAVAILABLE_FORM = "{0} with form {1} is unavailable in the game."
SPECIES_UNAVAILABLE = "{0} is unavailable in the game."
INVALID_MOVES = "{0} cannot learn the following move(s) in the game: {1}."
ALL_MOVES_INVALID = "All the requested moves for this Pokémon are invalid."
LEVEL_INVALID = (
    "Requested level is lower than the minimum possible level for {0}. "
    "Minimum required level is {1}"
)
ONLY_HIDDEN_ABILITY_AVAILABLE = "You can only obtain {0} with hidden ability in this game."
HIDDEN_ABILITY_UNAVAILABLE = "You cannot obtain {0} with hidden ability in this game."


def format_result(result: DiagnosisResult) -> str:
    """Render a diagnosis result as a user-facing message."""
    if isinstance(result, SpeciesUnavailable):
        if result.form_name is None:
            return SPECIES_UNAVAILABLE.format(result.species_name)
        return SPECIES_UNAVAILABLE_FORM.format(result.species_name, result.form_name)
    if isinstance(result, InvalidMoves):
        return INVALID_MOVES.format(result.species_name, ", ".join(result.move_names))
    if isinstance(result, AllMovesInvalid):
        return ALL_MOVES_INVALID
    if isinstance(result, LevelTooLow):
        return LEVEL_INVALID.format(result.species_name, result.min_level)
    if isinstance(result, HiddenAbilityOnly):
        return ONLY_HIDDEN_ABILITY_AVAILABLE.format(result.species_name)
    if isinstance(result, HiddenAbilityUnavailable):
        return HIDDEN_ABILITY_UNAVAILABLE.format(result.species_name)
    if isinstance(result, NoAnalysis):
        return ANALYSIS_INVALID
    raise TypeError(f"Not a diagnosis result: {result!r}")  # pragma: no cover


def result_code(result: DiagnosisResult) -> str:
    """Stable snake_case identifier for a result variant (for JSON output)."""
    codes = {
        SpeciesUnavailable: "species_unavailable",
        InvalidMoves: "invalid_moves",
        AllMovesInvalid: "all_moves_invalid",
        LevelTooLow: "level_too_low",
        HiddenAbilityOnly: "hidden_ability_only",
        HiddenAbilityUnavailable: "hidden_ability_unavailable",
        NoAnalysis: "no_analysis",
    }
    return codes[type(result)]
