"""
Draft Pick Trade Value

Point values for every draft slot (a modernized Jimmy Johnson chart, pick 1
= 3000 down to 1 point for pick 263) plus trade evaluation, greedy
balancing and round/pick conversions.

Balancing is greedy, highest-value picks first. It closes the gap the way
GMs haggle rather than finding the optimal package.
"""

import math
from typing import Dict, List, NamedTuple, Optional, Sequence

from front_office.config import DraftConstants
from front_office.models import CounterSuggestion, TradeEvaluation

DEFAULT_TRADE_TOLERANCE = 0.15
PICKS_PER_ROUND = DraftConstants.PICKS_PER_ROUND


class RoundPick(NamedTuple):
    """Round number and pick within the round."""
    round: int
    pick: int


PICK_VALUES: Dict[int, float] = {
    # Round 1
    1: 3000, 2: 2600, 3: 2200, 4: 1800, 5: 1700,
    6: 1600, 7: 1500, 8: 1400, 9: 1350, 10: 1300,
    11: 1250, 12: 1200, 13: 1150, 14: 1100, 15: 1050,
    16: 1000, 17: 950, 18: 900, 19: 875, 20: 850,
    21: 800, 22: 780, 23: 760, 24: 740, 25: 720,
    26: 700, 27: 680, 28: 660, 29: 640, 30: 620,
    31: 600, 32: 590,

    # Round 2
    33: 580, 34: 560, 35: 550, 36: 540, 37: 530,
    38: 520, 39: 510, 40: 500, 41: 490, 42: 480,
    43: 470, 44: 460, 45: 450, 46: 440, 47: 430,
    48: 420, 49: 410, 50: 400, 51: 390, 52: 380,
    53: 370, 54: 360, 55: 350, 56: 340, 57: 330,
    58: 320, 59: 310, 60: 300, 61: 292, 62: 284,
    63: 276, 64: 270,

    # Round 3
    65: 265, 66: 260, 67: 255, 68: 250, 69: 245,
    70: 240, 71: 235, 72: 230, 73: 225, 74: 220,
    75: 215, 76: 210, 77: 205, 78: 200, 79: 195,
    80: 190, 81: 185, 82: 180, 83: 175, 84: 170,
    85: 165, 86: 160, 87: 155, 88: 150, 89: 145,
    90: 140, 91: 136, 92: 132, 93: 128, 94: 124,
    95: 120, 96: 116,

    # Round 4
    97: 112, 98: 108, 99: 104, 100: 100, 101: 96,
    102: 92, 103: 88, 104: 86, 105: 84, 106: 82,
    107: 80, 108: 78, 109: 76, 110: 74, 111: 72,
    112: 70, 113: 68, 114: 66, 115: 64, 116: 62,
    117: 60, 118: 58, 119: 56, 120: 54, 121: 52,
    122: 50, 123: 49, 124: 48, 125: 47, 126: 46,
    127: 45, 128: 44, 129: 43, 130: 42, 131: 41,
    132: 40,

    # Round 5
    133: 39, 134: 38, 135: 37, 136: 36, 137: 35,
    138: 34, 139: 33, 140: 32, 141: 31, 142: 30,
    143: 29.5, 144: 29, 145: 28.5, 146: 28, 147: 27.5,
    148: 27, 149: 26.6, 150: 26.2, 151: 25.8, 152: 25.4,
    153: 25, 154: 24.6, 155: 24.2, 156: 23.8, 157: 23.4,
    158: 23, 159: 22.6, 160: 22.2, 161: 21.8, 162: 21.4,
    163: 21, 164: 20.8, 165: 20.6, 166: 20.4, 167: 20.2,
    168: 20, 169: 19.8, 170: 19.6, 171: 19.4, 172: 19.2,
    173: 19, 174: 18.8, 175: 18.6, 176: 18.4,

    # Round 6
    177: 18.2, 178: 18, 179: 17.8, 180: 17.6, 181: 17.4,
    182: 17.2, 183: 17, 184: 16.8, 185: 16.6, 186: 16.4,
    187: 16.2, 188: 16, 189: 15.8, 190: 15.6, 191: 15.4,
    192: 15.2, 193: 15, 194: 14.8, 195: 14.6, 196: 14.4,
    197: 14.2, 198: 14, 199: 13.8, 200: 13.6, 201: 13.4,
    202: 13.2, 203: 13, 204: 12.8, 205: 12.6, 206: 12.4,
    207: 12.2, 208: 12, 209: 11.8, 210: 11.6, 211: 11.4,
    212: 11.2, 213: 11, 214: 10.8, 215: 10.6, 216: 10.4,
    217: 10.2, 218: 10, 219: 9.8, 220: 9.6,

    # Round 7
    221: 9.4, 222: 9.2, 223: 9, 224: 8.8, 225: 8.6,
    226: 8.4, 227: 8.2, 228: 8, 229: 7.8, 230: 7.6,
    231: 7.4, 232: 7.2, 233: 7, 234: 6.8, 235: 6.6,
    236: 6.4, 237: 6.2, 238: 6, 239: 5.8, 240: 5.6,
    241: 5.4, 242: 5.2, 243: 5, 244: 4.8, 245: 4.6,
    246: 4.4, 247: 4.2, 248: 4, 249: 3.8, 250: 3.6,
    251: 3.4, 252: 3.2, 253: 3, 254: 2.8, 255: 2.6,
    256: 2.4, 257: 2.2, 258: 2, 259: 1.8, 260: 1.6,
    261: 1.4, 262: 1.2, 263: 1,
}


# ============================================================================
# PICK VALUES
# ============================================================================

def get_pick_value(overall_pick: int) -> float:
    """Chart value for a pick, 0 for slots outside the chart."""
    return PICK_VALUES.get(overall_pick, 0)


def calculate_total_pick_value(picks: Sequence[int]) -> float:
    """Sum of chart values for a package of picks."""
    return sum(get_pick_value(pick) for pick in picks)


# ============================================================================
# TRADE EVALUATION
# ============================================================================

def evaluate_trade(
    team1_picks: Sequence[int],
    team2_picks: Sequence[int],
    tolerance: float = DEFAULT_TRADE_TOLERANCE
) -> TradeEvaluation:
    """
    Compare two pick packages.

    Args:
        team1_picks: Picks team 1 sends
        team2_picks: Picks team 2 sends
        tolerance: Largest relative gap still considered fair

    Returns:
        TradeEvaluation. ``winner`` names the side whose package is worth more.
        The trade is fair iff |difference| / max(value1, value2) <= tolerance.
    """
    team1_value = calculate_total_pick_value(team1_picks)
    team2_value = calculate_total_pick_value(team2_picks)
    difference = team1_value - team2_value
    higher_value = max(team1_value, team2_value)
    percentage_diff = abs(difference) / higher_value if higher_value > 0 else 0.0

    if difference > 0:
        winner = "team1"
    elif difference < 0:
        winner = "team2"
    else:
        winner = "even"

    return TradeEvaluation(
        team1_value=team1_value,
        team2_value=team2_value,
        difference=difference,
        percentage_diff=percentage_diff,
        is_fair=percentage_diff <= tolerance,
        winner=winner,
    )


def find_balancing_picks(
    team1_picks: Sequence[int],
    team2_picks: Sequence[int],
    available_team2_picks: Sequence[int]
) -> List[int]:
    """
    Picks team 2 should add to cover its deficit.

    Adds team 2's most valuable unused picks until the deficit is closed or
    the pool runs out. Returns [] when team 2 is not behind.
    """
    deficit = calculate_total_pick_value(team1_picks) - calculate_total_pick_value(team2_picks)
    if deficit <= 0:
        return []

    candidates = sorted(
        (pick for pick in available_team2_picks if pick not in team2_picks),
        key=get_pick_value,
        reverse=True,
    )

    balancing_picks = []
    remaining_deficit = deficit
    for pick in candidates:
        if remaining_deficit <= 0:
            break
        balancing_picks.append(pick)
        remaining_deficit -= get_pick_value(pick)

    return balancing_picks


def suggest_counter_offer(
    team1_picks: Sequence[int],
    team2_picks: Sequence[int],
    all_team1_picks: Sequence[int],
    all_team2_picks: Sequence[int],
    tolerance: float = DEFAULT_TRADE_TOLERANCE
) -> Optional[CounterSuggestion]:
    """
    Suggest picks the trailing side should add.

    Returns:
        None when the trade is already fair, otherwise the side that adds
        picks, the picks, and the evaluation of the adjusted trade.
    """
    evaluation = evaluate_trade(team1_picks, team2_picks, tolerance)
    if evaluation.is_fair:
        return None

    if evaluation.winner == "team1":
        available = [pick for pick in all_team2_picks if pick not in team2_picks]
        added = find_balancing_picks(team1_picks, team2_picks, available)
        new_evaluation = evaluate_trade(team1_picks, list(team2_picks) + added, tolerance)
        return CounterSuggestion(team="team2", picks_to_add=added, new_evaluation=new_evaluation)

    available = [pick for pick in all_team1_picks if pick not in team1_picks]
    added = find_balancing_picks(team2_picks, team1_picks, available)
    new_evaluation = evaluate_trade(list(team1_picks) + added, team2_picks, tolerance)
    return CounterSuggestion(team="team1", picks_to_add=added, new_evaluation=new_evaluation)


# ============================================================================
# PICK CONVERSIONS AND DISPLAY
# ============================================================================

def get_round_and_pick(overall_pick: int) -> RoundPick:
    """Round and pick-in-round for an overall pick."""
    if overall_pick < 1:
        raise ValueError(f"Overall pick must be positive, got {overall_pick}")
    return RoundPick(
        round=math.ceil(overall_pick / PICKS_PER_ROUND),
        pick=((overall_pick - 1) % PICKS_PER_ROUND) + 1,
    )


def get_overall_pick(round_number: int, pick: int) -> int:
    """Overall pick for a round and pick-in-round."""
    return (round_number - 1) * PICKS_PER_ROUND + pick


def format_pick(overall_pick: int) -> str:
    """Short form, e.g. "1.05" for round 1, pick 5."""
    round_and_pick = get_round_and_pick(overall_pick)
    return f"{round_and_pick.round}.{round_and_pick.pick:02d}"


def get_ordinal_suffix(number: int) -> str:
    last_digit = number % 10
    last_two = number % 100

    if last_digit == 1 and last_two != 11:
        return "st"
    if last_digit == 2 and last_two != 12:
        return "nd"
    if last_digit == 3 and last_two != 13:
        return "rd"
    return "th"


def get_pick_description(overall_pick: int) -> str:
    """Long form, e.g. "Round 1, Pick 15 (15th overall)"."""
    round_and_pick = get_round_and_pick(overall_pick)
    return (
        f"Round {round_and_pick.round}, Pick {round_and_pick.pick} "
        f"({overall_pick}{get_ordinal_suffix(overall_pick)} overall)"
    )


# ============================================================================
# MOVING UP
# ============================================================================

def calculate_move_up_cost(from_pick: int, to_pick: int) -> float:
    """Chart points needed to move from ``from_pick`` up to ``to_pick``; 0 if not moving up."""
    if from_pick <= to_pick:
        return 0
    return get_pick_value(to_pick) - get_pick_value(from_pick)


def calculate_picks_to_move_up(
    from_pick: int,
    to_pick: int,
    available_picks: Sequence[int]
) -> List[int]:
    """
    Package needed to move up, starting with ``from_pick``.

    Adds the cheapest extra picks first. Returns [] when not moving up or
    when the available picks cannot cover the cost.
    """
    if calculate_move_up_cost(from_pick, to_pick) <= 0:
        return []

    package = [from_pick]
    current_value = get_pick_value(from_pick)
    target_value = get_pick_value(to_pick)

    for pick in sorted((p for p in available_picks if p != from_pick), key=get_pick_value):
        if current_value >= target_value:
            break
        package.append(pick)
        current_value += get_pick_value(pick)

    return package if current_value >= target_value else []
