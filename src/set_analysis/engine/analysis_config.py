"""Configuration knobs for set analysis.

Defaults match the current mainline games. Tools embedding the engine may
disable batch commands or cap the move search.
"""

from dataclasses import dataclass

from set_analysis.models.constants import LanguageID


@dataclass(slots=True)
class AnalysisConfig:
    """Tuneable parameters that aren't stored in the game data tables."""

    allow_batch_commands: bool = True
    language: int = LanguageID.ENGLISH     # names in messages
    low_generation_ceiling: int = 2        # gens without move relearning
    hidden_ability_transfer_generation: int = 8
    max_probes: int | None = None          # cap on move-search probes; None = unbounded
