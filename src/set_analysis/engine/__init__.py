"""Set legality analysis interfaces."""

from set_analysis.engine.analysis_config import AnalysisConfig
from set_analysis.engine.diagnosis import SetAnalyzer, analyze_set, diagnose
from set_analysis.engine.messages import format_result

__all__ = [
    "AnalysisConfig",
    "SetAnalyzer",
    "analyze_set",
    "diagnose",
    "format_result",
]
