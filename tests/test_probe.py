"""Tests for the legality probe.

Uses a recording fake in place of real game data so each call to the
encounter generator can be inspected.
"""

import pytest

from set_analysis.data.interfaces import AnalysisTarget
from set_analysis.engine.probe import LegalityProbe, pad_moves
from set_analysis.models.batch import parse_filters
from set_analysis.models.encounter import EncounterRecord
from set_analysis.models.entity import WorkingEntity
from set_analysis.models.request import RequestedConfiguration


class RecordingData:
    """GameData fake: every encounter learns `legal` moves; calls are recorded."""

    def __init__(self, encounters, legal, generation=8, record_moves=frozenset()):
        self.encounters = encounters
        self.legal = set(legal)
        self.generation = generation
        self._record_moves = frozenset(record_moves)
        self.calls = []

    def exists_in_game(self, species, form, version):
        return True

    def generation_of(self, version):
        return self.generation

    def compatible_versions(self, entity, version, version_filter):
        return [version]

    def generate_encounters(self, entity, moves, versions):
        self.calls.append((entity.copy(), tuple(moves), list(versions)))
        if all(m in self.legal for m in moves if m != 0):
            yield from self.encounters

    def species_name(self, species, language, generation):
        return "Pikachu"

    def move_name(self, move):
        return f"Move {move}"

    def record_moves(self, species, form):
        return self._record_moves

    def abilities(self, species, form):
        return (9, 9, 31)


def _enc(generation=8, level_min=5) -> EncounterRecord:
    return EncounterRecord(
        species=25, form=0, version=44, generation=generation,
        level_min=level_min, level_max=level_min,
    )


def _probe(data, generation=0, versions=(44,)) -> LegalityProbe:
    target = AnalysisTarget(data=data, version=44, generation=generation)
    return LegalityProbe(target, WorkingEntity.blank(44), list(versions))


REQUEST = RequestedConfiguration(species=25, moves=(85, 98, 344), level=50)


class TestPadMoves:
    def test_pads_to_four(self):
        assert pad_moves([85]) == (85, 0, 0, 0)
        assert pad_moves([]) == (0, 0, 0, 0)

    def test_rejects_too_many(self):
        with pytest.raises(ValueError, match="At most"):
            pad_moves([1, 2, 3, 4, 5])

    def test_rejects_zero(self):
        with pytest.raises(ValueError, match="nonzero"):
            pad_moves([85, 0])

    def test_rejects_duplicates(self):
        with pytest.raises(ValueError, match="Duplicate"):
            pad_moves([85, 85])


class TestProbe:
    def test_candidate_moves_are_applied_and_padded(self):
        data = RecordingData([_enc()], legal={85, 98})
        probe = _probe(data)
        result = probe.probe(REQUEST, (85, 98))
        assert len(result) == 1
        entity, moves, versions = data.calls[0]
        assert moves == (85, 98, 0, 0)
        assert entity.moves == [85, 98, 0, 0]
        assert entity.species == 25
        assert versions == [44]

    def test_absent_encounters_is_empty_not_error(self):
        data = RecordingData([_enc()], legal={85})
        assert _probe(data).probe(REQUEST, (85, 344)) == []

    def test_request_is_not_mutated(self):
        data = RecordingData([_enc()], legal={85})
        _probe(data).probe(REQUEST, (85,))
        assert REQUEST.moves == (85, 98, 344, 0)

    def test_low_generation_resets_level(self):
        data = RecordingData([_enc()], legal={85}, generation=2)
        _probe(data).probe(REQUEST, (85,))
        entity = data.calls[0][0]
        assert entity.current_level == 1

    def test_modern_generation_keeps_level(self):
        data = RecordingData([_enc()], legal={85}, generation=8)
        _probe(data).probe(REQUEST, (85,))
        assert data.calls[0][0].current_level == 50

    def test_target_generation_override(self):
        data = RecordingData([_enc()], legal={85}, generation=8)
        _probe(data, generation=1).probe(REQUEST, (85,))
        assert data.calls[0][0].current_level == 1

    def test_record_flags_follow_candidate_moves(self):
        data = RecordingData([_enc()], legal={85, 98}, record_moves={98, 344})
        _probe(data).probe(REQUEST, (85, 98))
        assert data.calls[0][0].record_flags == {98}

    def test_encounter_filter_applied(self):
        data = RecordingData([_enc(generation=7), _enc(generation=8)], legal={85})
        request = RequestedConfiguration(
            species=25, moves=(85,),
            encounter_filters=tuple(parse_filters(["=Generation=8"])),
        )
        result = _probe(data).probe(request, (85,))
        assert [e.generation for e in result] == [8]

    def test_has_encounters_and_probe_count(self):
        data = RecordingData([_enc()], legal={85})
        probe = _probe(data)
        assert probe.has_encounters(REQUEST, (85,)) is True
        assert probe.has_encounters(REQUEST, (98,)) is False
        assert probe.probe_count == 2

    def test_probes_do_not_share_entities(self):
        data = RecordingData([_enc()], legal={85, 98})
        probe = _probe(data)
        probe.probe(REQUEST, (85, 98))
        probe.probe(REQUEST, (85,))
        assert data.calls[0][0].moves == [85, 98, 0, 0]
        assert data.calls[1][0].moves == [85, 0, 0, 0]

    def test_final_encounters_keep_requested_level(self):
        data = RecordingData([_enc()], legal={85, 98, 344}, generation=2)
        result = _probe(data).final_encounters(REQUEST)
        assert len(result) == 1
        entity, moves, _ = data.calls[0]
        assert moves == (85, 98, 344, 0)
        assert entity.current_level == 50

    def test_final_encounters_apply_encounter_filter(self):
        data = RecordingData([_enc(generation=7), _enc(generation=8)], legal={85})
        request = RequestedConfiguration(
            species=25, moves=(85,),
            encounter_filters=tuple(parse_filters(["=Generation=8"])),
        )
        result = _probe(data).final_encounters(request)
        assert [e.generation for e in result] == [8]
