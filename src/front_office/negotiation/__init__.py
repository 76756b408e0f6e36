"""
Contract Negotiation.

Usage:
    from front_office.negotiation import NegotiationEngine, NegotiationSession

    session = NegotiationSession(player, team_id=1, demands=demands)
    evaluation = session.submit(offer)
"""

from .negotiation_engine import NegotiationEngine
from .negotiation_session import NegotiationSession

__all__ = [
    "NegotiationEngine",
    "NegotiationSession",
]
