"""
Front office services.

Services call the engines and then persist the outcome through a LeagueStore
in one transaction per operation.
"""

from .contract_service import ContractService
from .draft_service import DraftService
from .free_agency_service import FreeAgencyService, OfferOutcome

__all__ = [
    "ContractService",
    "DraftService",
    "FreeAgencyService",
    "OfferOutcome",
]
