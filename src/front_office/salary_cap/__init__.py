"""
NFL Salary Cap System

Core Components:
- CapCalculator: Cap hits, dead money, restructures and top-N cap space
- ContractBuilder: Contract creation from offers and yearly aging
- cap_utils: Display formatting

Based on 2025 NFL CBA rules.
"""

from .cap_calculator import CapCalculator
from .contract_builder import ContractBuilder
from .cap_utils import (
    format_currency,
    format_cap_hit_breakdown,
    format_contract_details,
    format_team_cap_space,
    calculate_cap_percentage,
    format_cap_percentage,
)

__all__ = [
    "CapCalculator",
    "ContractBuilder",
    "format_currency",
    "format_cap_hit_breakdown",
    "format_contract_details",
    "format_team_cap_space",
    "calculate_cap_percentage",
    "format_cap_percentage",
]
