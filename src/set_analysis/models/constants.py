"""Game constants used by the set analysis engine.

Version and species identifiers come from the loaded game data; only the
handful of values the diagnosis rules hard-code live here.
"""

from enum import Enum, IntEnum


# Number of move slots on a creature record.
MAX_MOVES = 4


class LanguageID(IntEnum):
    """Language indices used for name resolution."""
    JAPANESE = 1
    ENGLISH = 2
    FRENCH = 3
    ITALIAN = 4
    GERMAN = 5
    SPANISH = 7
    KOREAN = 8
    CHINESE_SIMPLIFIED = 9
    CHINESE_TRADITIONAL = 10


class AbilityPermission(IntEnum):
    """Which ability slots an encounter can produce.

    Values mirror the ability-number bit used on the record itself
    (1 = first, 2 = second, 4 = hidden).
    """
    ANY_12H = -1
    ANY_12 = 0
    ONLY_FIRST = 1
    ONLY_SECOND = 2
    ONLY_HIDDEN = 4


class AbilityRequest(Enum):
    """Category of ability a requested set asks for."""
    ANY = "any"
    NOT_HIDDEN = "not_hidden"
    HIDDEN = "hidden"


# Ability number of the hidden-ability slot.
HIDDEN_ABILITY_NUMBER = 4

# Origin generations that never carried hidden abilities and cannot gain one
# through transfer alone.
NO_HIDDEN_ABILITY_GENERATIONS = frozenset({3, 4})
