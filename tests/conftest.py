"""
Pytest configuration and shared fixtures.

Provides fixtures for testing including:
- Seeded random sources and league settings
- Engines (valuation, cap calculator, negotiation, contract builder)
- Sample contracts
- In-memory and temporary-file SQLite stores populated with teams
"""

from typing import List, Optional, Sequence

import pytest

from front_office.config import LeagueSettings
from front_office.contract_valuation import PlayerValuationEngine
from front_office.database import InMemoryLeagueStore, SQLiteLeagueStore
from front_office.models import (
    Contract,
    ContractYear,
    Player,
    RosterStatus,
    Team,
)
from front_office.negotiation import NegotiationEngine
from front_office.random_source import RandomSource
from front_office.salary_cap import CapCalculator, ContractBuilder


# ============================================================================
# ENGINE FIXTURES
# ============================================================================

class FixedRandomSource(RandomSource):
    """
    Random source that replays a fixed list of ``random()`` values, cycling
    from the start when they run out. ``randint``, ``gauss`` and ``shuffle``
    still come from the seeded generator.
    """

    def __init__(self, values: Sequence[float], seed: Optional[int] = 0):
        super().__init__(seed)
        if not values:
            raise ValueError("FixedRandomSource requires at least one value")
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()


@pytest.fixture
def rng():
    """Seeded random source so randomized decisions repeat."""
    return RandomSource(seed=42)


@pytest.fixture
def fixed_rng():
    """
    Factory for random sources that force a branch, e.g.
    ``fixed_rng([0.95])`` for the third-choice draft pick.
    """
    return FixedRandomSource


@pytest.fixture
def settings():
    """2025 offseason league settings."""
    return LeagueSettings.create_default_2025()


@pytest.fixture
def valuation_engine(settings, rng):
    return PlayerValuationEngine(settings=settings, rng=rng)


@pytest.fixture
def cap_calculator(settings):
    return CapCalculator(settings)


@pytest.fixture
def negotiation_engine(rng):
    return NegotiationEngine(rng=rng)


@pytest.fixture
def contract_builder(valuation_engine, cap_calculator):
    return ContractBuilder(valuation_engine, cap_calculator)


# ============================================================================
# CONTRACT FIXTURES
# ============================================================================

@pytest.fixture
def make_contract():
    """
    Factory for contracts with an explicit per-season base salary schedule.

    Usage:
        contract = make_contract([6_000_000, 8_000_000], start_year=2025,
                                 signing_bonus=10_000_000)
    """
    def _make(
        base_salaries: List[int],
        start_year: int = 2025,
        signing_bonus: int = 0,
        current_year: Optional[int] = None,
        years_remaining: Optional[int] = None,
        signing_bonus_remaining: Optional[int] = None,
        guarantees: Optional[List[int]] = None,
        player_id: int = 1,
        team_id: int = 1,
        contract_id: Optional[int] = None,
    ) -> Contract:
        total_years = len(base_salaries)
        current_year = current_year if current_year is not None else start_year
        if years_remaining is None:
            years_remaining = total_years - (current_year - start_year)
        if signing_bonus_remaining is None:
            signing_bonus_remaining = signing_bonus
        guarantees = guarantees or [0] * total_years

        return Contract(
            contract_id=contract_id,
            player_id=player_id,
            team_id=team_id,
            total_years=total_years,
            current_year=current_year,
            years_remaining=years_remaining,
            total_value=sum(base_salaries) + signing_bonus,
            signing_bonus_total=signing_bonus,
            signing_bonus_remaining=signing_bonus_remaining,
            annual_breakdown=[
                ContractYear(year=start_year + index, base_salary=salary, guarantees=guaranteed)
                for index, (salary, guaranteed) in enumerate(zip(base_salaries, guarantees))
            ],
            guaranteed_money_remaining=sum(guarantees) + signing_bonus_remaining,
            guaranteed_at_signing=sum(guarantees) + signing_bonus,
        )

    return _make


@pytest.fixture
def restructure_contract(make_contract):
    """
    4-year contract from 2025 with a $10M signing bonus, now in year 2.

    Base salaries $6M / $8M / $9M / $10M, bonus prorated $2.5M a season.
    """
    return make_contract(
        [6_000_000, 8_000_000, 9_000_000, 10_000_000],
        start_year=2025,
        signing_bonus=10_000_000,
        current_year=2026,
        signing_bonus_remaining=7_500_000,
    )


# ============================================================================
# STORE FIXTURES
# ============================================================================

@pytest.fixture
def memory_store():
    return InMemoryLeagueStore()


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLite store on a temporary database file."""
    store = SQLiteLeagueStore(str(tmp_path / "league.db"))
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Every store implementation, for tests that must hold for both."""
    if request.param == "memory":
        yield InMemoryLeagueStore()
        return

    sqlite = SQLiteLeagueStore(str(tmp_path / "league.db"))
    yield sqlite
    sqlite.close()


def populate_teams(store, count: int = 4, cap_space: int = 100_000_000) -> List[Team]:
    """Create teams 1..count with identical cap space."""
    return [
        store.create_team(Team(team_id=team_id, name=f"Team {team_id}", current_cap_space=cap_space))
        for team_id in range(1, count + 1)
    ]


def add_roster(store, team_id: int, position: str, ratings: List[int], first_player_id: int) -> List[Player]:
    """Active players for one team at one position."""
    return [
        store.create_player(Player(
            player_id=first_player_id + index,
            position=position,
            age=26,
            overall_rating=rating,
            current_team_id=team_id,
            roster_status=RosterStatus.ACTIVE,
        ))
        for index, rating in enumerate(ratings)
    ]


@pytest.fixture
def league(store):
    """Store with four teams holding $100M of cap space each."""
    populate_teams(store)
    return store


@pytest.fixture
def roster():
    """Helper adding active players to a team: roster(store, team_id, position, ratings, first_player_id)."""
    return add_roster


@pytest.fixture
def teams():
    """Helper creating teams: teams(store, count=4, cap_space=100_000_000)."""
    return populate_teams
