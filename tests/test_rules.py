"""Tests for the default level and ability rules."""

from set_analysis.engine.rules import get_requested_ability, is_requested_level_valid
from set_analysis.models.constants import AbilityRequest
from set_analysis.models.encounter import EncounterRecord
from set_analysis.models.entity import WorkingEntity
from set_analysis.models.request import RequestedConfiguration

STATIC, LIGHTNING_ROD, OVERGROW, CHLOROPHYLL = 9, 31, 65, 34


def _enc(level_min: int, can_downlevel: bool = False) -> EncounterRecord:
    return EncounterRecord(
        species=25, form=0, version=44, generation=8,
        level_min=level_min, level_max=level_min, can_downlevel=can_downlevel,
    )


def _classify(request: RequestedConfiguration, abilities=(STATIC, STATIC, LIGHTNING_ROD)):
    entity = WorkingEntity.blank(44)
    entity.apply_request(request)
    return get_requested_ability(entity, request, abilities)


class TestLevel:
    def test_at_or_above_minimum(self):
        request = RequestedConfiguration(species=25, level=10)
        assert is_requested_level_valid(request, _enc(10))
        assert is_requested_level_valid(request, _enc(5))

    def test_below_minimum(self):
        request = RequestedConfiguration(species=25, level=4)
        assert not is_requested_level_valid(request, _enc(5))
        assert is_requested_level_valid(request, _enc(5, can_downlevel=True))


class TestAbilityRequest:
    def test_unspecified_is_any(self):
        assert _classify(RequestedConfiguration(species=25)) is AbilityRequest.ANY

    def test_regular_ability(self):
        assert _classify(RequestedConfiguration(species=25, ability=STATIC)) is AbilityRequest.NOT_HIDDEN

    def test_hidden_ability(self):
        request = RequestedConfiguration(species=25, ability=LIGHTNING_ROD)
        assert _classify(request) is AbilityRequest.HIDDEN

    def test_ability_in_both_regular_and_hidden_slot(self):
        request = RequestedConfiguration(species=1, ability=OVERGROW)
        assert _classify(request, (OVERGROW, OVERGROW, OVERGROW)) is AbilityRequest.ANY

    def test_explicit_slot_wins(self):
        request = RequestedConfiguration(species=1, ability=OVERGROW, ability_number=4)
        assert _classify(request, (OVERGROW, OVERGROW, CHLOROPHYLL)) is AbilityRequest.HIDDEN
        request = RequestedConfiguration(species=1, ability_number=2)
        assert _classify(request, (OVERGROW, OVERGROW, CHLOROPHYLL)) is AbilityRequest.NOT_HIDDEN

    def test_species_without_hidden_slot(self):
        request = RequestedConfiguration(species=25, ability=STATIC)
        assert _classify(request, (STATIC, STATIC)) is AbilityRequest.ANY

    def test_reads_set_details_from_entity(self):
        entity = WorkingEntity.blank(44)
        entity.apply_request(RequestedConfiguration(species=25, ability=STATIC))
        entity.ability_number = 4
        request = RequestedConfiguration(species=25, ability=STATIC)
        abilities = (STATIC, STATIC, LIGHTNING_ROD)
        assert get_requested_ability(entity, request, abilities) is AbilityRequest.HIDDEN
