"""Legality probe: asks the encounter generator about one candidate set.

Every probe builds its own WorkingEntity from a copy of the base record, so
probes share no state and can be run in any order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from set_analysis.data.interfaces import AnalysisTarget, CandidateEncounter
from set_analysis.engine.analysis_config import AnalysisConfig
from set_analysis.engine.filters import is_filter_match
from set_analysis.models.batch import StringInstruction
from set_analysis.models.constants import MAX_MOVES
from set_analysis.models.entity import WorkingEntity
from set_analysis.models.request import RequestedConfiguration

logger = logging.getLogger(__name__)

FilterMatcher = Callable[[Sequence[StringInstruction], Any], bool]


def pad_moves(moves: Sequence[int]) -> tuple[int, ...]:
    """Right-pad *moves* with empty slots, validating the candidate list."""
    if len(moves) > MAX_MOVES:
        raise ValueError(f"At most {MAX_MOVES} moves allowed, got {len(moves)}")
    if any(m == 0 for m in moves):
        raise ValueError(f"Candidate moves must be nonzero, got {list(moves)}")
    if len(set(moves)) != len(moves):
        raise ValueError(f"Duplicate candidate moves: {list(moves)}")
    return tuple(moves) + (0,) * (MAX_MOVES - len(moves))


class LegalityProbe:
    """Runs candidate move sets through the encounter generator.

    Consumes the AnalysisTarget's GameData and a precomputed list of
    compatible game versions without modifying either.
    """

    __slots__ = ("_target", "_base", "_versions", "_config", "_matches", "probe_count")

    def __init__(
        self,
        target: AnalysisTarget,
        base_entity: WorkingEntity,
        versions: Sequence[int],
        config: AnalysisConfig | None = None,
        filter_matcher: FilterMatcher = is_filter_match,
    ) -> None:
        self._target = target
        self._base = base_entity
        self._versions = list(versions)
        self._config = config or AnalysisConfig()
        self._matches = filter_matcher
        self.probe_count = 0

    @property
    def versions(self) -> list[int]:
        return list(self._versions)

    # --- Entity preparation -------------------------------------------------

    def prepare_entity(self, request: RequestedConfiguration) -> WorkingEntity:
        """Fresh working record carrying the set details and record flags."""
        entity = self._base.copy()
        entity.apply_request(request)
        entity.set_record_flags(
            self._target.data.record_moves(request.species, request.form)
        )
        return entity

    def _is_low_generation(self) -> bool:
        return self._target.resolved_generation <= self._config.low_generation_ceiling

    # --- Generation ---------------------------------------------------------

    def _filtered(
        self,
        encounters: Iterable[CandidateEncounter],
        filters: Sequence[StringInstruction] | None,
    ) -> Iterator[CandidateEncounter]:
        if filters is None:
            return iter(encounters)
        return (enc for enc in encounters if self._matches(filters, enc))

    def encounters(
        self, request: RequestedConfiguration, moves: Sequence[int]
    ) -> Iterator[CandidateEncounter]:
        """Lazily generate encounters for *request* carrying *moves*."""
        padded = pad_moves(moves)
        scratch = request.with_moves(padded)
        entity = self.prepare_entity(scratch)
        if self._is_low_generation():
            # No move relearning this early; let the generator start from level 1.
            entity.reset_experience()
        self.probe_count += 1
        logger.debug("probe #%d: moves=%s", self.probe_count, list(moves))
        generated = self._target.data.generate_encounters(entity, padded, self._versions)
        return self._filtered(generated, request.encounter_filters)

    def probe(
        self, request: RequestedConfiguration, moves: Sequence[int]
    ) -> list[CandidateEncounter]:
        """Return every matching encounter for *request* carrying *moves*."""
        return list(self.encounters(request, moves))

    def has_encounters(
        self, request: RequestedConfiguration, moves: Sequence[int]
    ) -> bool:
        """True if at least one encounter matches; stops at the first."""
        return next(self.encounters(request, moves), None) is not None

    def final_encounters(
        self, request: RequestedConfiguration
    ) -> list[CandidateEncounter]:
        """Authoritative encounter set for the request's own move list.

        Unlike the search probes the record keeps its requested level.
        """
        entity = self.prepare_entity(request)
        generated = self._target.data.generate_encounters(
            entity, tuple(request.moves), self._versions
        )
        return list(self._filtered(generated, request.encounter_filters))
