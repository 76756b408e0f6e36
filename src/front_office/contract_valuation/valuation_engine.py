"""
Player Valuation Engine

Derives a free agent's contract demands (APY, years, guarantees and
negotiating priority) from position, overall rating and age, and provides
the contract arithmetic shared by negotiation and the AI bidders:
APY, year-1 cap hit, annual salary structure and offer validation.
"""

import logging
from typing import List, Optional, Tuple

from front_office.config import LeagueSettings
from front_office.exceptions import ValidationError
from front_office.models import (
    ContractOffer,
    ContractStructure,
    NegotiationPriority,
    Player,
    PlayerDemands,
    round_half_up,
)
from front_office.random_source import RandomSource


class PlayerValuationEngine:
    """
    Calculates contract demands for free agents.

    Based on:
    - Position salary scale
    - Overall rating tier
    - Position-specific peak age window
    - Market conditions (neutral until a market model exists)

    Example:
        >>> engine = PlayerValuationEngine(rng=RandomSource(seed=7))
        >>> demands = engine.calculate_player_value(player)
        >>> demands.apy, demands.years, demands.priority
        (62500000, 4, <NegotiationPriority.MONEY: 'money'>)
    """

    # Salary scale relative to a 1.0x position
    POSITION_MULTIPLIERS = {
        'QB': 2.5,
        'EDGE': 1.8,
        'WR': 1.6,
        'CB': 1.5,
        'OT': 1.5,
        'DT': 1.3,
        'S': 1.2,
        'LB': 1.2,
        'OG': 1.0,
        'C': 1.0,
        'TE': 1.0,
        'RB': 0.8,
        'K': 0.5,
        'P': 0.5,
        'LS': 0.4,
    }
    DEFAULT_POSITION_MULTIPLIER = 1.0

    # (minimum rating, base salary), checked top-down
    RATING_TIERS = [
        (90, 25_000_000),  # Elite
        (85, 18_000_000),  # Pro Bowl
        (80, 12_000_000),  # Above average starter
        (75, 8_000_000),   # Average starter
        (70, 5_000_000),   # Below average starter
        (65, 2_000_000),   # Backup/depth
    ]
    MINIMUM_TIER_SALARY = 1_000_000

    # Peak age windows [start, end], inclusive
    PEAK_AGES = {
        'QB': (27, 33),
        'RB': (23, 27),
        'WR': (26, 30),
        'TE': (26, 31),
        'OT': (27, 32),
        'OG': (27, 32),
        'C': (27, 32),
        'EDGE': (26, 30),
        'DT': (26, 30),
        'LB': (25, 29),
        'CB': (25, 29),
        'S': (26, 30),
        'K': (27, 35),
        'P': (27, 35),
        'LS': (27, 35),
    }
    DEFAULT_PEAK_AGES = (26, 30)

    # (minimum rating, guaranteed share), checked top-down
    GUARANTEE_TIERS = [
        (90, 0.7),
        (85, 0.6),
        (80, 0.5),
        (75, 0.45),
        (70, 0.4),
    ]
    BASE_GUARANTEE_PCT = 0.3
    MIN_GUARANTEE_PCT = 0.25
    MAX_GUARANTEE_PCT = 0.75

    HOMETOWN_PRIORITY_CHANCE = 0.3
    HOMETOWN_MIN_ACCRUED_SEASONS = 6

    FRONTLOADED_WEIGHTS = [1.5, 1.3, 1.1, 0.9, 0.8, 0.7, 0.6]
    BACKLOADED_WEIGHTS = [0.6, 0.7, 0.8, 0.9, 1.1, 1.3, 1.5]

    def __init__(
        self,
        settings: Optional[LeagueSettings] = None,
        rng: Optional[RandomSource] = None
    ):
        """
        Initialize valuation engine.

        Args:
            settings: League settings (contract bounds, proration limit)
            rng: Random source for the hometown priority roll and loyalty bonus
        """
        self.settings = settings or LeagueSettings.create_default_2025()
        self.rng = rng or RandomSource()
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # DEMANDS
    # ========================================================================

    def calculate_player_value(self, player: Player) -> PlayerDemands:
        """
        Calculate a free agent's contract demands.

        Args:
            player: Player to value

        Returns:
            PlayerDemands with APY, years, guaranteed money and priority

        Formula:
            apy = round(position_base × age_modifier × performance × market)
            guaranteed = round(apy × years × guaranteed_pct)
        """
        base_value = self.get_position_base_value(player.position, player.overall_rating)
        age_modifier = self.get_age_modifier(player.age, player.position)
        # Stats-driven performance modifier is not modeled yet
        performance_modifier = 1.0
        market_modifier = self.get_market_modifier(player.position)

        apy = round_half_up(base_value * age_modifier * performance_modifier * market_modifier)
        years = self.calculate_contract_years(player.age, player.position)
        guaranteed_pct = self.calculate_guaranteed_percentage(player.overall_rating, player.age)
        guaranteed = round_half_up(apy * years * guaranteed_pct)
        priority = self.determine_player_priority(player)

        self.logger.debug(
            f"Valued player {player.player_id} ({player.position}, {player.overall_rating} OVR, "
            f"age {player.age}): apy={apy:,} years={years} guaranteed={guaranteed:,} "
            f"priority={priority.value}"
        )

        return PlayerDemands(apy=apy, years=years, guaranteed=guaranteed, priority=priority)

    def get_position_base_value(self, position: str, rating: int) -> float:
        """Position multiplier times the rating tier salary."""
        multiplier = self.POSITION_MULTIPLIERS.get(position, self.DEFAULT_POSITION_MULTIPLIER)

        base_salary = self.MINIMUM_TIER_SALARY
        for min_rating, tier_salary in self.RATING_TIERS:
            if rating >= min_rating:
                base_salary = tier_salary
                break

        return base_salary * multiplier

    def get_age_modifier(self, age: int, position: str) -> float:
        """
        Position-specific age curve.

        Below the peak window value ramps up from 0.85 at age 22, inside the
        window it is 1.0, and past it value drops 8% a year with a 0.6 floor.
        """
        peak_start, peak_end = self.PEAK_AGES.get(position, self.DEFAULT_PEAK_AGES)

        if age < peak_start:
            return 0.85 + (age - 22) * 0.03
        if age <= peak_end:
            return 1.0
        years_past_peak = age - peak_end
        return max(0.6, 1.0 - years_past_peak * 0.08)

    def get_market_modifier(self, position: str) -> float:
        """
        Supply/demand adjustment for a position.

        Neutral for now. Subclasses can override this to feed free agent
        market conditions back into demands.
        """
        return 1.0

    def calculate_contract_years(self, age: int, position: str) -> int:
        """Contract length from age, with QB and RB exceptions."""
        if position == 'QB' and age < 30:
            return 4
        if position == 'RB' and age > 26:
            return 2

        if age < 26:
            return 4
        if age < 29:
            return 3
        if age < 32:
            return 2
        return 1

    def calculate_guaranteed_percentage(self, rating: int, age: int) -> float:
        """Share of total value a player expects guaranteed, clamped to [0.25, 0.75]."""
        pct = self.BASE_GUARANTEE_PCT
        for min_rating, tier_pct in self.GUARANTEE_TIERS:
            if rating >= min_rating:
                pct = tier_pct
                break

        if age < 27:
            pct += 0.05
        if age > 30:
            pct -= 0.1
        if age > 32:
            pct -= 0.15

        return max(self.MIN_GUARANTEE_PCT, min(self.MAX_GUARANTEE_PCT, pct))

    def determine_player_priority(self, player: Player) -> NegotiationPriority:
        """
        Player's top negotiating priority.

        Older players want security, elite players near their prime want to
        win, and long-tenured incumbents sometimes want to stay home.
        """
        if player.age > 30:
            return NegotiationPriority.YEARS

        if player.overall_rating >= 85 and 28 <= player.age <= 31:
            return NegotiationPriority.WINNING

        if (
            player.accrued_seasons >= self.HOMETOWN_MIN_ACCRUED_SEASONS
            and player.current_team_id
        ):
            if self.rng.random() < self.HOMETOWN_PRIORITY_CHANCE:
                return NegotiationPriority.HOMETOWN

        return NegotiationPriority.MONEY

    def calculate_loyalty_bonus(self, accrued_seasons: int, team_success: int) -> int:
        """
        Extra willingness to re-sign with the current team.

        Args:
            accrued_seasons: Player's accrued seasons
            team_success: 0-100 measure of recent team success

        Returns:
            Bonus points (0-25)
        """
        bonus = 0

        if accrued_seasons >= 8:
            bonus += 10
        elif accrued_seasons >= 5:
            bonus += 5

        if team_success >= 80:
            bonus += 10  # Contender
        elif team_success >= 60:
            bonus += 5   # Playoff team

        bonus += self.rng.randint(0, 5)

        return bonus

    # ========================================================================
    # CONTRACT ARITHMETIC
    # ========================================================================

    def calculate_apy(self, total_value: int, years: int) -> int:
        """Average per year, rounded half-up."""
        if years <= 0:
            raise ValueError(f"Contract years must be positive, got {years}")
        return round_half_up(total_value / years)

    def calculate_year1_cap_hit(self, total_value: int, years: int, signing_bonus: int) -> int:
        """
        Estimated first-year cap hit assuming an even salary split.

        Formula:
            round(signing_bonus / min(years, 5) + (total_value - signing_bonus) / years)
        """
        if years <= 0:
            raise ValueError(f"Contract years must be positive, got {years}")
        bonus_proration = signing_bonus / min(years, self.settings.max_proration_years)
        base_salary = (total_value - signing_bonus) / years
        return round_half_up(bonus_proration + base_salary)

    def calculate_offer_year1_cap_hit(self, offer: ContractOffer) -> int:
        """
        First-year cap hit of the salary schedule an offer would actually get.

        Uses the offer's structure, so a frontloaded deal reports its larger
        first year. Proration floors, matching the cap calculator.
        """
        salaries = self.generate_contract_structure(
            offer.total_value,
            offer.years,
            offer.guaranteed_money,
            offer.signing_bonus,
            offer.structure,
        )
        proration = offer.signing_bonus // min(offer.years, self.settings.max_proration_years)
        return salaries[0] + proration

    def generate_contract_structure(
        self,
        total_value: int,
        years: int,
        guaranteed_money: int,
        signing_bonus: int,
        structure: ContractStructure = ContractStructure.EVEN
    ) -> List[int]:
        """
        Annual salaries for the non-bonus money.

        Args:
            total_value: Total contract value
            years: Contract length
            guaranteed_money: Guaranteed money (kept for interface parity)
            signing_bonus: Signing bonus, excluded from the annual salaries
            structure: even, frontloaded or backloaded

        Returns:
            One salary per year. The list sums exactly to
            total_value - signing_bonus; rounding residue goes to the last year.
        """
        if not 1 <= years <= len(self.FRONTLOADED_WEIGHTS):
            raise ValueError(f"Contract years must be 1-{len(self.FRONTLOADED_WEIGHTS)}, got {years}")
        if isinstance(structure, str):
            structure = ContractStructure(structure)

        non_bonus_money = total_value - signing_bonus

        if structure == ContractStructure.EVEN:
            weights = [1.0] * years
        elif structure == ContractStructure.FRONTLOADED:
            weights = self.FRONTLOADED_WEIGHTS[:years]
        else:
            weights = self.BACKLOADED_WEIGHTS[:years]

        total_weight = sum(weights)
        salaries = [round_half_up(non_bonus_money * weight / total_weight) for weight in weights]
        salaries[-1] += non_bonus_money - sum(salaries)

        return salaries

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate_contract(
        self,
        total_value: int,
        years: int,
        guaranteed_money: int,
        signing_bonus: int
    ) -> Tuple[bool, List[str]]:
        """
        Check offer terms against league rules.

        Returns:
            Tuple of (is_valid, errors). Every violated rule is listed.
        """
        errors = []
        min_years = self.settings.min_contract_years
        max_years = self.settings.max_contract_years

        if years < min_years or years > max_years:
            errors.append(f"Contract must be between {min_years} and {max_years} years")

        if guaranteed_money > total_value:
            errors.append("Guaranteed money cannot exceed total value")

        if signing_bonus > total_value:
            errors.append("Signing bonus cannot exceed total value")

        if signing_bonus > guaranteed_money:
            errors.append("Signing bonus cannot exceed guaranteed money")

        if total_value < self.settings.min_total_value:
            errors.append(f"Total value must be at least ${self.settings.min_total_value:,}")

        return (len(errors) == 0, errors)

    def ensure_valid_offer(self, offer: ContractOffer) -> None:
        """
        Raise if an offer breaks any contract rule.

        Raises:
            ValidationError: With the itemized list of violations
        """
        is_valid, errors = self.validate_contract(
            offer.total_value,
            offer.years,
            offer.guaranteed_money,
            offer.signing_bonus,
        )
        if not is_valid:
            raise ValidationError(
                f"Invalid contract offer: {'; '.join(errors)}",
                errors=errors,
                context_dict={"offer": offer.to_dict()},
            )
