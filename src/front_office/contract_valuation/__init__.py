"""
Contract Valuation.

Usage:
    from front_office.contract_valuation import PlayerValuationEngine

    engine = PlayerValuationEngine()
    demands = engine.calculate_player_value(player)
    is_valid, errors = engine.validate_contract(80_000_000, 4, 48_000_000, 20_000_000)
"""

from .valuation_engine import PlayerValuationEngine

__all__ = [
    "PlayerValuationEngine",
]
