"""
Negotiation records: player demands, per-call context, evaluation results
and the persisted free agent offer row.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .contract import ContractOffer


class NegotiationPriority(Enum):
    """What the player cares about most."""
    MONEY = "money"
    YEARS = "years"
    WINNING = "winning"
    HOMETOWN = "hometown"


class NegotiationDecision(Enum):
    """Outcome of evaluating one offer."""
    ACCEPT = "accept"
    COUNTER = "counter"
    DECLINE = "decline"


class NegotiationState(Enum):
    """State of a negotiation between one player and one team."""
    OFFERED = "offered"
    ACCEPTED = "accepted"
    COUNTERED = "countered"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self in (NegotiationState.ACCEPTED, NegotiationState.DECLINED)


class OfferStatus(Enum):
    """Status of a persisted free agent offer."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    WITHDRAWN = "withdrawn"
    REJECTED = "rejected"
    DECLINED = "declined"


@dataclass
class PlayerDemands:
    """A free agent's asking terms."""

    apy: int
    years: int
    guaranteed: int
    priority: NegotiationPriority = NegotiationPriority.MONEY

    def __post_init__(self):
        if isinstance(self.priority, str):
            self.priority = NegotiationPriority(self.priority)
        if self.apy < 0:
            raise ValueError(f"Demanded APY cannot be negative, got {self.apy}")
        if self.years < 1:
            raise ValueError(f"Demanded years must be at least 1, got {self.years}")
        if self.guaranteed < 0:
            raise ValueError(f"Demanded guarantees cannot be negative, got {self.guaranteed}")

    @property
    def total_value(self) -> int:
        return self.apy * self.years

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apy": self.apy,
            "years": self.years,
            "guaranteed": self.guaranteed,
            "priority": self.priority.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerDemands":
        return cls(
            apy=int(data["apy"]),
            years=int(data["years"]),
            guaranteed=int(data["guaranteed"]),
            priority=NegotiationPriority(data.get("priority", NegotiationPriority.MONEY.value)),
        )


@dataclass
class NegotiationContext:
    """
    Everything the negotiation engine needs for one evaluation call.

    Built fresh per call and never persisted.
    """

    player_id: int
    player_name: str
    position: str
    overall_rating: int
    age: int
    demands: PlayerDemands
    competing_offers: List[ContractOffer] = field(default_factory=list)
    negotiation_round: int = 1
    previous_offers: List[ContractOffer] = field(default_factory=list)

    def __post_init__(self):
        if self.negotiation_round < 1:
            raise ValueError(f"negotiation_round must be >= 1, got {self.negotiation_round}")


@dataclass
class OfferEvaluation:
    """
    Result of scoring an offer.

    ``counter_offer`` is set only for COUNTER; ``reason`` only for DECLINE.
    """

    score: float
    decision: NegotiationDecision
    message: str
    counter_offer: Optional[ContractOffer] = None
    reason: Optional[str] = None
    apy_score: int = 0
    years_score: int = 0
    guaranteed_score: int = 0

    @property
    def accepted(self) -> bool:
        return self.decision == NegotiationDecision.ACCEPT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "decision": self.decision.value,
            "message": self.message,
            "counter_offer": self.counter_offer.to_dict() if self.counter_offer else None,
            "reason": self.reason,
            "apy_score": self.apy_score,
            "years_score": self.years_score,
            "guaranteed_score": self.guaranteed_score,
        }


@dataclass
class FreeAgentOffer:
    """An offer row as persisted by the league store."""

    player_id: int
    team_id: int
    offer: ContractOffer
    status: OfferStatus = OfferStatus.PENDING
    negotiation_round: int = 1
    is_user_offer: bool = False
    offer_id: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = OfferStatus(self.status)

    @property
    def is_pending(self) -> bool:
        return self.status == OfferStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offer_id": self.offer_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "offer": self.offer.to_dict(),
            "status": self.status.value,
            "negotiation_round": self.negotiation_round,
            "is_user_offer": self.is_user_offer,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FreeAgentOffer":
        return cls(
            offer_id=data.get("offer_id"),
            player_id=data["player_id"],
            team_id=data["team_id"],
            offer=ContractOffer.from_dict(data["offer"]),
            status=OfferStatus(data.get("status", OfferStatus.PENDING.value)),
            negotiation_round=data.get("negotiation_round", 1),
            is_user_offer=bool(data.get("is_user_offer", False)),
        )
