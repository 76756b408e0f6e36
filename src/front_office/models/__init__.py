"""
Front office domain models.

Plain dataclasses shared by every engine. Nested structures (annual
breakdowns, combine metrics, intangibles) are records, never JSON strings.
"""

from .money import round_half_up, floor_divide
from .player import Player, Team, PositionSummary, RosterStatus
from .contract import (
    Contract,
    ContractYear,
    ContractOffer,
    ContractStructure,
    ContractType,
)
from .negotiation import (
    PlayerDemands,
    NegotiationPriority,
    NegotiationDecision,
    NegotiationState,
    NegotiationContext,
    OfferEvaluation,
    OfferStatus,
    FreeAgentOffer,
)
from .cap import CapHit, DeadMoneyResult, RestructureResult, TeamCapSpace
from .draft import (
    DevelopmentTrait,
    CombineMetrics,
    Intangibles,
    ScoutedProspect,
    DraftProspect,
    DraftPick,
    DraftSelection,
    DraftStrategy,
    ProspectEvaluation,
    DraftBoardEntry,
    TradeEvaluation,
    CounterSuggestion,
)

__all__ = [
    "round_half_up",
    "floor_divide",
    "Player",
    "Team",
    "PositionSummary",
    "RosterStatus",
    "Contract",
    "ContractYear",
    "ContractOffer",
    "ContractStructure",
    "ContractType",
    "PlayerDemands",
    "NegotiationPriority",
    "NegotiationDecision",
    "NegotiationState",
    "NegotiationContext",
    "OfferEvaluation",
    "OfferStatus",
    "FreeAgentOffer",
    "CapHit",
    "DeadMoneyResult",
    "RestructureResult",
    "TeamCapSpace",
    "DevelopmentTrait",
    "CombineMetrics",
    "Intangibles",
    "ScoutedProspect",
    "DraftProspect",
    "DraftPick",
    "DraftSelection",
    "DraftStrategy",
    "ProspectEvaluation",
    "DraftBoardEntry",
    "TradeEvaluation",
    "CounterSuggestion",
]
