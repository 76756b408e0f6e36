"""
Draft pick values and draft class generation.

Usage:
    from front_office.draft import trade_value, ProspectGenerator

    verdict = trade_value.evaluate_trade([10], [20, 52])
    prospects = ProspectGenerator(rng).generate_draft_class(2025)
"""

from . import trade_value
from .prospect_generator import ProspectGenerator
from .trade_value import (
    PICK_VALUES,
    RoundPick,
    get_pick_value,
    calculate_total_pick_value,
    evaluate_trade,
    find_balancing_picks,
    suggest_counter_offer,
    get_round_and_pick,
    get_overall_pick,
    format_pick,
    get_pick_description,
    calculate_move_up_cost,
    calculate_picks_to_move_up,
)

__all__ = [
    "trade_value",
    "ProspectGenerator",
    "PICK_VALUES",
    "RoundPick",
    "get_pick_value",
    "calculate_total_pick_value",
    "evaluate_trade",
    "find_balancing_picks",
    "suggest_counter_offer",
    "get_round_and_pick",
    "get_overall_pick",
    "format_pick",
    "get_pick_description",
    "calculate_move_up_cost",
    "calculate_picks_to_move_up",
]
