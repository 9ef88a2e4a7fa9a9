"""Diagnosis controller: explains why a requested set has no encounter.

Runs a fixed pipeline of checks, each either returning a terminal
DiagnosisResult or narrowing the state for the next:

  1. species/form exists in the target game
  2. the largest legal subset of the requested moves (subset search)
  3. authoritative encounter set for the full move list
  4. requested level reachable from some encounter
  5. requested ability category available

The first failing check wins; later checks never revisit earlier ones.
Passing every check yields NoAnalysis, which is *not* a legality verdict.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from set_analysis.data.interfaces import AnalysisTarget, CandidateEncounter
from set_analysis.engine.analysis_config import AnalysisConfig
from set_analysis.engine.combinations import descending_subsets
from set_analysis.engine.filters import is_filter_match
from set_analysis.engine.messages import format_result
from set_analysis.engine.probe import FilterMatcher, LegalityProbe
from set_analysis.engine.rules import get_requested_ability, is_requested_level_valid
from set_analysis.models.constants import (
    NO_HIDDEN_ABILITY_GENERATIONS,
    AbilityPermission,
    AbilityRequest,
)
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
from set_analysis.models.entity import WorkingEntity
from set_analysis.models.request import RequestedConfiguration

logger = logging.getLogger(__name__)

LevelPredicate = Callable[[RequestedConfiguration, CandidateEncounter], bool]
AbilityClassifier = Callable[
    [WorkingEntity, RequestedConfiguration, Sequence[int]], AbilityRequest
]


class SetAnalyzer:
    """Diagnoses requested sets against one target game.

    Consumes an AnalysisTarget and AnalysisConfig without modifying either.
    The filter matcher, level predicate and ability classifier default to
    the rules in engine.filters / engine.rules and may be swapped out.
    """

    __slots__ = ("_target", "_config", "_matches", "_level_valid", "_ability_request")

    def __init__(
        self,
        target: AnalysisTarget,
        config: AnalysisConfig | None = None,
        *,
        filter_matcher: FilterMatcher = is_filter_match,
        level_predicate: LevelPredicate = is_requested_level_valid,
        ability_classifier: AbilityClassifier = get_requested_ability,
    ) -> None:
        self._target = target
        self._config = config or AnalysisConfig()
        self._matches = filter_matcher
        self._level_valid = level_predicate
        self._ability_request = ability_classifier

    # --- Setup --------------------------------------------------------------

    def destination_version(self, request: RequestedConfiguration) -> int:
        """The game version the set must be legal in."""
        if request.version is not None and request.version > 0:
            return request.version
        return self._target.version

    def build_probe(self, request: RequestedConfiguration) -> LegalityProbe:
        """Probe bound to the versions compatible with the destination game."""
        version = self.destination_version(request)
        blank = WorkingEntity.blank(version)
        batch = request.batch
        version_filter = None
        if self._config.allow_batch_commands and batch.has_batch_settings:
            version_filter = list(batch.filters)
        versions = self._target.data.compatible_versions(blank, version, version_filter)
        logger.debug("compatible versions for %d: %s", version, versions)
        return LegalityProbe(
            self._target, blank, versions, self._config, filter_matcher=self._matches
        )

    # --- Move search --------------------------------------------------------

    def best_move_combination(
        self,
        request: RequestedConfiguration,
        probe: LegalityProbe | None = None,
    ) -> tuple[int, ...]:
        """Largest subset of the requested moves with at least one encounter.

        A candidate only replaces the current best when strictly larger, so
        the first success of the largest successful size is kept.
        """
        best, _ = self._search_moves(request, probe or self.build_probe(request))
        return best

    def _search_moves(
        self, request: RequestedConfiguration, probe: LegalityProbe
    ) -> tuple[tuple[int, ...], bool]:
        """Return the best subset and whether every candidate was tried."""
        cap = self._config.max_probes
        best: tuple[int, ...] = ()
        for combination in descending_subsets(request.requested_moves):
            if len(combination) <= len(best):
                continue
            if cap is not None and probe.probe_count >= cap:
                logger.warning(
                    "move search stopped after %d probes; best so far %s",
                    probe.probe_count, list(best),
                )
                return best, False
            if probe.has_encounters(request, combination):
                best = combination
        return best, True

    # --- Diagnosis ----------------------------------------------------------

    def diagnose(self, request: RequestedConfiguration) -> DiagnosisResult:
        """Return the most specific reason *request* has no encounter."""
        data = self._target.data
        species_name = data.species_name(
            request.species, self._config.language, self._target.resolved_generation
        )
        version = self.destination_version(request)

        # 1. Species / form
        if not data.exists_in_game(request.species, request.form, version):
            form_name = None
            if request.form != 0:
                form_name = request.form_name or str(request.form)
            logger.debug("species %d-%d missing from %d", request.species, request.form, version)
            return SpeciesUnavailable(species_name, form_name)

        # 2. Moves
        probe = self.build_probe(request)
        requested = request.requested_moves
        best, exhausted = self._search_moves(request, probe)
        if set(best) != set(requested):
            if not exhausted:
                # A cut-short search proves nothing about the missing moves.
                return NoAnalysis()
            if not best:
                return AllMovesInvalid()
            invalid = tuple(dict.fromkeys(m for m in requested if m not in best))
            return InvalidMoves(
                species_name, invalid, tuple(data.move_name(m) for m in invalid)
            )

        # 3. Encounters for the full move list
        encounters = probe.final_encounters(request)
        logger.debug("%d encounters for full move set", len(encounters))
        if not encounters:
            return NoAnalysis()

        # 4. Level
        level_valid = [enc for enc in encounters if self._level_valid(request, enc)]
        if not level_valid:
            return LevelTooLow(species_name, min(enc.level_min for enc in encounters))

        # 5. Ability
        entity = probe.prepare_entity(request)
        wanted = self._ability_request(
            entity, request, data.abilities(request.species, request.form)
        )
        if wanted is AbilityRequest.NOT_HIDDEN and all(
            enc.is_static and enc.ability == AbilityPermission.ONLY_HIDDEN
            for enc in level_valid
        ):
            return HiddenAbilityOnly(species_name)
        if (
            wanted is AbilityRequest.HIDDEN
            and all(enc.generation in NO_HIDDEN_ABILITY_GENERATIONS for enc in level_valid)
            and data.generation_of(version) < self._config.hidden_ability_transfer_generation
        ):
            return HiddenAbilityUnavailable(species_name)

        return NoAnalysis()


def diagnose(
    request: RequestedConfiguration,
    target: AnalysisTarget,
    config: AnalysisConfig | None = None,
) -> DiagnosisResult:
    """Diagnose *request* against *target* with the default rules."""
    return SetAnalyzer(target, config).diagnose(request)


def analyze_set(
    request: RequestedConfiguration,
    target: AnalysisTarget,
    config: AnalysisConfig | None = None,
) -> str:
    """Diagnose *request* and render the result as an English message."""
    return format_result(diagnose(request, target, config))
