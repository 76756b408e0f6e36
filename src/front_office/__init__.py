"""
Front Office Economic Engine

Salary cap accounting, free agent valuation and negotiation, draft pick
trade values and the AI teams that bid and draft against the user.

Core Components:
- PlayerValuationEngine: Contract demands from position, rating and age
- CapCalculator: Cap hits, dead money, restructures, top-51/53 cap space
- NegotiationEngine: Offer scoring and accept/counter/decline decisions
- trade_value: Draft pick value chart and trade balancing
- DraftAI / FreeAgencyAI: Synthetic drafters and bidders
- LeagueStore: Storage collaborator passed into every orchestration call

Engines perform no I/O; services apply their results through a LeagueStore
transaction.
"""

__version__ = "1.0.0"
