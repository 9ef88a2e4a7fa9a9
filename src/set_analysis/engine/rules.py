"""Default level and ability rules used by the diagnosis controller."""

from __future__ import annotations

from collections.abc import Sequence

from set_analysis.data.interfaces import CandidateEncounter
from set_analysis.models.constants import HIDDEN_ABILITY_NUMBER, AbilityRequest
from set_analysis.models.entity import WorkingEntity
from set_analysis.models.request import RequestedConfiguration


def is_requested_level_valid(
    request: RequestedConfiguration, encounter: CandidateEncounter
) -> bool:
    """True if the requested level is reachable from *encounter*."""
    if request.level >= encounter.level_min:
        return True
    return bool(getattr(encounter, "can_downlevel", False))


def get_requested_ability(
    entity: WorkingEntity,
    request: RequestedConfiguration,
    abilities: Sequence[int],
) -> AbilityRequest:
    """Classify what ability category the set asks for.

    *abilities* are the species' ability ids by slot: (first, second, hidden).
    The set details are read from *entity*, which already carries the
    request. An explicit ability number wins; otherwise the ability id is
    located in the slot list. An ability shared by a regular slot and the
    hidden slot stays ambiguous (ANY).
    """
    number = entity.ability_number
    if number == HIDDEN_ABILITY_NUMBER:
        return AbilityRequest.HIDDEN
    if number in (1, 2):
        return AbilityRequest.NOT_HIDDEN

    ability = entity.ability
    if ability is None or len(abilities) < 3:
        return AbilityRequest.ANY
    regular = abilities[:2]
    hidden = abilities[2]
    if ability == hidden and ability not in regular:
        return AbilityRequest.HIDDEN
    if ability in regular and ability != hidden:
        return AbilityRequest.NOT_HIDDEN
    return AbilityRequest.ANY
