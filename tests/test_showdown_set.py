"""Tests for Showdown-style set parsing."""

import pytest

from set_analysis.data.table import GameDataTable
from set_analysis.parser.showdown_set import parse_showdown_set


def _table() -> GameDataTable:
    return GameDataTable.from_dict({
        "versions": [{"id": 30, "name": "SN", "generation": 7}, {"id": 44, "name": "SW", "generation": 8}],
        "species": [
            {"species": 25, "form": 0, "name": "Pikachu", "versions": [30, 44]},
            {"species": 26, "form": 1, "name": "Raichu", "form_name": "Alola", "versions": [30]},
        ],
        "moves": [
            {"id": 85, "name": "Thunderbolt"},
            {"id": 98, "name": "Quick Attack"},
            {"id": 237, "name": "Hidden Power"},
            {"id": 344, "name": "Volt Tackle"},
        ],
        "abilities": [{"id": 9, "name": "Static"}, {"id": 31, "name": "Lightning Rod"}],
    })


BASIC_SET = """
Sparky (Pikachu) (M) @ Light Ball
Ability: Lightning Rod
Level: 50
Shiny: Yes
EVs: 252 Atk / 4 SpD / 252 Spe
Jolly Nature
- Volt Tackle
- Quick Attack
- Hidden Power [Ice]
"""


def test_basic_set():
    request = parse_showdown_set(BASIC_SET, _table())
    assert request.species == 25
    assert request.form == 0
    assert request.level == 50
    assert request.ability == 31
    assert request.moves == (344, 98, 237, 0)
    assert request.encounter_filters is None
    assert not request.batch.has_batch_settings


def test_form_species_and_defaults():
    request = parse_showdown_set("Raichu-Alola\n- Thunderbolt", _table())
    assert (request.species, request.form, request.form_name) == (26, 1, "Alola")
    assert request.level == 100
    assert request.ability is None


def test_regen_lines():
    text = """Pikachu
- Thunderbolt
~=Generation=8
=Version=SW
.Ball=4
Version: SN
"""
    request = parse_showdown_set(text, _table())
    assert [str(f) for f in request.encounter_filters] == ["=Generation=8"]
    assert [str(f) for f in request.batch.filters] == ["=Version=SW"]
    assert [str(i) for i in request.batch.instructions] == [".Ball=4"]
    assert request.version == 30


def test_repeated_move_is_kept_once():
    request = parse_showdown_set("Pikachu\n- Thunderbolt\n- Thunderbolt", _table())
    assert request.requested_moves == (85,)


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "Empty"),
        ("Mewtwo\n- Thunderbolt", "Unknown species"),
        ("Pikachu\n- Splash", "Unknown move"),
        ("Pikachu\nAbility: Pressure", "Unknown ability"),
        ("Pikachu\nLevel: 0", "Level must be"),
        ("Pikachu\nLevel: high", "Invalid level"),
        ("Pikachu\nVersion: XY", "Unknown version"),
        ("Pikachu\nFavorite: Cheese", "Unrecognized"),
        ("Pikachu\njust words", "Unrecognized"),
    ],
)
def test_invalid_sets(text, message):
    with pytest.raises(ValueError, match=message):
        parse_showdown_set(text, _table())
