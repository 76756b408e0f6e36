"""
Draft Prospect Generator

Generates a draft class with a realistic position mix and rating
distribution. Every random draw goes through the injected RandomSource, so a
seeded source reproduces the same class.
"""

import logging
from typing import Dict, List, Optional, Tuple

from front_office.models import (
    CombineMetrics,
    DevelopmentTrait,
    DraftProspect,
    Intangibles,
    round_half_up,
)
from front_office.random_source import RandomSource


class ProspectGenerator:
    """
    Generates draft classes.

    Rating model:
    - True rating ~ Normal(72, 8), clamped to 54-99
    - Scouted rating = true rating ± up to 3 points of scouting error
    - Draft grade and projected round come from the scouted rating
    """

    DEFAULT_CLASS_SIZE = 280
    MIN_RATING = 54
    MAX_RATING = 99
    RATING_MEAN = 72
    RATING_STD_DEV = 8
    SCOUTING_ERROR_RANGE = 6  # ±3 points

    POSITION_DISTRIBUTION = {
        'QB': 15,
        'RB': 20,
        'WR': 35,
        'TE': 15,
        'OT': 25,
        'OG': 20,
        'C': 12,
        'EDGE': 30,
        'DT': 25,
        'LB': 25,
        'CB': 30,
        'S': 20,
        'K': 3,
        'P': 3,
        'LS': 2,
    }

    HEIGHT_RANGES = {
        'QB': (73, 77),
        'RB': (68, 73),
        'WR': (70, 77),
        'TE': (74, 79),
        'OT': (76, 80),
        'OG': (73, 77),
        'C': (72, 76),
        'EDGE': (74, 78),
        'DT': (73, 77),
        'LB': (72, 76),
        'CB': (69, 74),
        'S': (70, 75),
        'K': (70, 75),
        'P': (72, 77),
        'LS': (73, 77),
    }
    DEFAULT_HEIGHT_RANGE = (72, 76)

    WEIGHT_RANGES = {
        'QB': (210, 240),
        'RB': (200, 230),
        'WR': (180, 220),
        'TE': (240, 270),
        'OT': (300, 340),
        'OG': (300, 330),
        'C': (290, 320),
        'EDGE': (245, 275),
        'DT': (285, 330),
        'LB': (230, 260),
        'CB': (180, 205),
        'S': (195, 220),
        'K': (180, 210),
        'P': (190, 220),
        'LS': (240, 260),
    }
    DEFAULT_WEIGHT_RANGE = (200, 250)

    BASE_FORTY = {
        'QB': 4.85, 'RB': 4.55, 'WR': 4.50, 'TE': 4.70, 'OT': 5.30, 'OG': 5.25, 'C': 5.20,
        'EDGE': 4.75, 'DT': 5.00, 'LB': 4.70, 'CB': 4.48, 'S': 4.55, 'K': 4.80, 'P': 4.85, 'LS': 5.10,
    }
    BASE_BENCH = {
        'QB': 15, 'RB': 20, 'WR': 16, 'TE': 22, 'OT': 28, 'OG': 30, 'C': 28,
        'EDGE': 24, 'DT': 26, 'LB': 22, 'CB': 14, 'S': 16, 'K': 10, 'P': 12, 'LS': 20,
    }
    BASE_VERTICAL = {
        'QB': 30, 'RB': 35, 'WR': 36, 'TE': 32, 'OT': 26, 'OG': 27, 'C': 28,
        'EDGE': 32, 'DT': 28, 'LB': 32, 'CB': 37, 'S': 35, 'K': 28, 'P': 30, 'LS': 26,
    }

    NFL_COMPARISONS = {
        'QB': ['Patrick Mahomes', 'Josh Allen', 'Joe Burrow', 'Lamar Jackson', 'Jalen Hurts'],
        'RB': ['Christian McCaffrey', 'Derrick Henry', 'Nick Chubb', 'Jonathan Taylor'],
        'WR': ['Justin Jefferson', 'Tyreek Hill', 'Stefon Diggs', 'Davante Adams'],
        'TE': ['Travis Kelce', 'George Kittle', 'Mark Andrews', 'TJ Hockenson'],
        'EDGE': ['Micah Parsons', 'Nick Bosa', 'TJ Watt', 'Myles Garrett'],
        'CB': ['Jalen Ramsey', 'Patrick Surtain', 'Sauce Gardner', 'Denzel Ward'],
    }
    DEFAULT_COMPARISONS = ['Solid NFL Starter']

    COLLEGES = [
        'Alabama', 'Georgia', 'Ohio State', 'Michigan', 'LSU', 'Clemson', 'Oklahoma',
        'Texas', 'USC', 'Penn State', 'Florida', 'Notre Dame', 'Oregon', 'Miami',
        'Auburn', 'Florida State', 'Texas A&M', 'Tennessee', 'Wisconsin', 'Iowa',
        'Michigan State', 'Stanford', 'Washington', 'Ole Miss', 'Mississippi State',
        'Arkansas', 'Kentucky', 'South Carolina', 'UCLA', 'California', 'Arizona State',
        'Utah', 'Colorado', 'TCU', 'Baylor', 'Oklahoma State', 'Kansas State',
        'North Carolina', 'NC State', 'Virginia Tech', 'Pittsburgh', 'West Virginia',
        'Boston College', 'Syracuse', 'Louisville', 'Purdue', 'Minnesota', 'Nebraska',
        'Northwestern', 'Indiana', 'Illinois', 'Rutgers', 'Maryland', 'Duke', 'Wake Forest',
    ]

    FIRST_NAMES = [
        'James', 'Michael', 'Robert', 'John', 'David', 'William', 'Richard', 'Joseph',
        'Thomas', 'Christopher', 'Charles', 'Daniel', 'Matthew', 'Anthony', 'Mark',
        'Steven', 'Andrew', 'Kenneth', 'Joshua', 'Kevin', 'Brian', 'George', 'Ryan',
        'Jacob', 'Nicholas', 'Eric', 'Jonathan', 'Justin', 'Brandon', 'Benjamin',
        'Samuel', 'Alexander', 'Patrick', 'Tyler', 'Aaron', 'Nathan', 'Zachary',
        'Kyle', 'Ethan', 'Jeremy', 'Christian', 'Noah', 'Sean', 'Austin', 'Jordan',
        'Dylan', 'Gabriel', 'Logan', 'Elijah', 'Mason', 'Isaiah', 'Jamal', 'Darius',
        'Marcus', 'DeAndre', 'Malik', 'Terrell', 'Trevon', 'Jalen', 'Devin', 'Cordell',
    ]

    LAST_NAMES = [
        'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis',
        'Rodriguez', 'Martinez', 'Wilson', 'Anderson', 'Thomas', 'Taylor', 'Moore',
        'Jackson', 'Martin', 'Lee', 'Thompson', 'White', 'Harris', 'Clark', 'Lewis',
        'Robinson', 'Walker', 'Young', 'Allen', 'King', 'Wright', 'Scott', 'Hill',
        'Green', 'Adams', 'Nelson', 'Baker', 'Hall', 'Campbell', 'Mitchell', 'Carter',
        'Roberts', 'Phillips', 'Evans', 'Turner', 'Parker', 'Edwards', 'Collins',
        'Stewart', 'Morris', 'Murphy', 'Cook', 'Rogers', 'Morgan', 'Cooper', 'Peterson',
        'Bailey', 'Reed', 'Howard', 'Ward', 'Richardson', 'Watson', 'Brooks', 'Bennett',
        'Gray', 'Hughes', 'Price', 'Sanders', 'Myers', 'Ross', 'Foster', 'Washington', 'Jenkins',
    ]

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or RandomSource()
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # CLASS GENERATION
    # ========================================================================

    def generate_draft_class(
        self,
        draft_year: int,
        total_prospects: int = DEFAULT_CLASS_SIZE,
        first_prospect_id: int = 1
    ) -> List[DraftProspect]:
        """
        Generate a shuffled draft class.

        Every position gets its quota from POSITION_DISTRIBUTION, remaining
        slots get random positions.

        Args:
            draft_year: Draft year
            total_prospects: Class size (at least the sum of the quotas)
            first_prospect_id: Id of the first prospect; ids are sequential

        Returns:
            List of DraftProspect
        """
        positions: List[str] = []
        for position, count in self.POSITION_DISTRIBUTION.items():
            positions.extend([position] * count)

        all_positions = list(self.POSITION_DISTRIBUTION)
        while len(positions) < total_prospects:
            positions.append(self.rng.choice(all_positions))

        self.rng.shuffle(positions)

        prospects = [
            self.generate_prospect(position, draft_year, first_prospect_id + index)
            for index, position in enumerate(positions)
        ]

        self.logger.info(f"Generated {len(prospects)} prospects for {draft_year} draft")

        return prospects

    def generate_prospect(self, position: str, draft_year: int, prospect_id: int) -> DraftProspect:
        """
        Generate one prospect at a position.

        Grade, projected round, development trait and NFL comparison come from
        the scouted rating; only combine results track the true rating.
        """
        true_rating = self.generate_overall_rating()
        scouted_rating = self.generate_scouted_rating(true_rating)

        return DraftProspect(
            prospect_id=prospect_id,
            draft_year=draft_year,
            first_name=self.rng.choice(self.FIRST_NAMES),
            last_name=self.rng.choice(self.LAST_NAMES),
            position=position,
            college=self.rng.choice(self.COLLEGES),
            height_inches=self._random_in_range(self.HEIGHT_RANGES.get(position, self.DEFAULT_HEIGHT_RANGE)),
            weight=self._random_in_range(self.WEIGHT_RANGES.get(position, self.DEFAULT_WEIGHT_RANGE)),
            age=self.rng.randint(20, 23),
            true_overall_rating=true_rating,
            scouted_overall_rating=scouted_rating,
            draft_grade=self.get_draft_grade(scouted_rating),
            projected_round=self.get_projected_round(scouted_rating),
            combine=self.generate_combine_metrics(position, true_rating),
            intangibles=self.generate_intangibles(),
            development_trait=self.get_development_trait(scouted_rating),
            nfl_comparison=self.generate_comparison(position, scouted_rating),
        )

    # ========================================================================
    # RATINGS
    # ========================================================================

    def _clamp_rating(self, rating: float) -> int:
        return max(self.MIN_RATING, min(self.MAX_RATING, round_half_up(rating)))

    def generate_overall_rating(self) -> int:
        """True rating from a normal distribution, clamped to 54-99."""
        return self._clamp_rating(self.rng.gauss(self.RATING_MEAN, self.RATING_STD_DEV))

    def generate_scouted_rating(self, true_rating: int) -> int:
        """True rating plus uniform scouting error of up to ±3, clamped."""
        scouting_error = (self.rng.random() - 0.5) * self.SCOUTING_ERROR_RANGE
        return self._clamp_rating(true_rating + scouting_error)

    def get_draft_grade(self, rating: int) -> str:
        if rating >= 85:
            return '1st Round'
        if rating >= 78:
            return '2nd-3rd Round'
        if rating >= 70:
            return '4th-5th Round'
        if rating >= 65:
            return '6th-7th Round'
        return 'UDFA'

    def get_projected_round(self, rating: int) -> int:
        if rating >= 85:
            return 1
        if rating >= 80:
            return 2
        if rating >= 75:
            return 3
        if rating >= 70:
            return 4
        if rating >= 67:
            return 5
        if rating >= 64:
            return 6
        return 7

    def get_development_trait(self, rating: int) -> DevelopmentTrait:
        roll = self.rng.random()
        if rating >= 90:
            return DevelopmentTrait.STAR if roll < 0.4 else DevelopmentTrait.ELITE
        if rating >= 85:
            return DevelopmentTrait.ELITE if roll < 0.3 else DevelopmentTrait.QUICK
        if rating >= 75:
            return DevelopmentTrait.QUICK if roll < 0.5 else DevelopmentTrait.NORMAL
        if rating >= 70:
            return DevelopmentTrait.NORMAL
        return DevelopmentTrait.NORMAL if roll < 0.3 else DevelopmentTrait.SLOW

    # ========================================================================
    # MEASURABLES AND INTANGIBLES
    # ========================================================================

    def _random_in_range(self, bounds: Tuple[int, int]) -> int:
        return self.rng.randint(bounds[0], bounds[1])

    def generate_combine_metrics(self, position: str, rating: int) -> CombineMetrics:
        """Combine results; better prospects test better on average."""
        bonus = (rating - 70) * 0.015

        forty = self.BASE_FORTY.get(position, 4.75) - bonus * 0.1 + (self.rng.random() - 0.5) * 0.15
        bench = self.BASE_BENCH.get(position, 20) + bonus * 2 + (self.rng.random() - 0.5) * 5
        vertical = self.BASE_VERTICAL.get(position, 30) + bonus * 1.5 + (self.rng.random() - 0.5) * 4
        broad = 115 + (self.rng.random() - 0.5) * 15 + bonus * 3
        three_cone = 7.2 - (self.rng.random() - 0.5) * 0.4 - bonus * 0.1
        shuttle = 4.4 - (self.rng.random() - 0.5) * 0.3 - bonus * 0.08

        return CombineMetrics(
            forty_yard=round(forty, 2),
            bench_press=max(0, round_half_up(bench)),
            vertical_jump=round(vertical, 1),
            broad_jump=round_half_up(broad),
            three_cone=round(three_cone, 2),
            twenty_yard_shuttle=round(shuttle, 2),
        )

    def generate_intangibles(self) -> Intangibles:
        return Intangibles(
            work_ethic=self.rng.randint(1, 5),
            injury_risk=self.rng.randint(1, 5),
            character_grade=self.rng.randint(1, 5),
            football_iq=self.rng.randint(1, 5),
        )

    def generate_comparison(self, position: str, rating: int) -> Optional[str]:
        """NFL comparison for prospects rated 75+."""
        if rating < 75:
            return None

        comparison = self.rng.choice(self.NFL_COMPARISONS.get(position, self.DEFAULT_COMPARISONS))

        if rating >= 85:
            return comparison
        if rating >= 80:
            return f"Poor man's {comparison}"
        return f"{comparison}-lite"

    def get_position_counts(self, prospects: List[DraftProspect]) -> Dict[str, int]:
        """Number of prospects per position."""
        counts: Dict[str, int] = {}
        for prospect in prospects:
            counts[prospect.position] = counts.get(prospect.position, 0) + 1
        return counts
