"""
Offseason AI.

Needs analysis plus the AI teams' behavior in free agency and the draft.
"""

from .team_needs_analyzer import TeamNeedsAnalyzer
from .draft_ai import DraftAI
from .free_agency_ai import FreeAgencyAI

__all__ = [
    "TeamNeedsAnalyzer",
    "DraftAI",
    "FreeAgencyAI",
]
