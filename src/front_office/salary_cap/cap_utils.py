"""
Salary Cap Utilities

Display helpers for cap hits, contracts and cap percentages.
"""

from typing import Optional

from front_office.models import CapHit, Contract, TeamCapSpace


def format_currency(amount: int) -> str:
    """
    Format integer amount as currency string.

    Args:
        amount: Amount in dollars

    Returns:
        Formatted string (e.g., "$25,000,000" or "-$5,000,000")
    """
    if amount >= 0:
        return f"${amount:,}"
    else:
        return f"-${abs(amount):,}"


def format_cap_hit_breakdown(cap_hit: CapHit) -> str:
    """
    Format one season's cap hit for display.

    Args:
        cap_hit: CapHit from CapCalculator.calculate_cap_hit

    Returns:
        Formatted multi-line string
    """
    lines = []
    lines.append(f"CAP HIT - {cap_hit.year}")
    lines.append("-" * 40)
    lines.append(f"Base Salary:           {format_currency(cap_hit.base_salary)}")
    lines.append(f"Roster Bonus:          {format_currency(cap_hit.roster_bonus)}")
    lines.append(f"Workout Bonus:         {format_currency(cap_hit.workout_bonus)}")
    lines.append(f"Prorated Bonus:        {format_currency(cap_hit.prorated_bonus)}")
    if cap_hit.restructure_proration:
        lines.append(f"Restructure Proration: {format_currency(cap_hit.restructure_proration)}")
    lines.append("-" * 40)
    lines.append(f"Total Cap Hit:         {format_currency(cap_hit.total_cap_hit)}")

    return "\n".join(lines)


def format_contract_details(contract: Contract, calculator) -> str:
    """
    Format contract details for display.

    Args:
        contract: Contract to describe
        calculator: CapCalculator used for per-season cap hits

    Returns:
        Formatted multi-line string
    """
    first_season = min(contract.seasons) if contract.seasons else contract.current_year
    last_season = first_season + contract.total_years - 1

    lines = []
    lines.append("=" * 72)
    lines.append(f"CONTRACT #{contract.contract_id} - Player {contract.player_id}")
    lines.append(f"Type: {contract.contract_type.value} | Team: {contract.team_id}")
    lines.append(f"Years: {contract.total_years} ({first_season}-{last_season})")
    lines.append("=" * 72)
    lines.append("")

    lines.append("FINANCIAL OVERVIEW:")
    lines.append(f"  Total Value:         {format_currency(contract.total_value)}")
    lines.append(f"  APY:                 {format_currency(contract.apy)}")
    lines.append(f"  Signing Bonus:       {format_currency(contract.signing_bonus_total)}")
    lines.append(f"  Total Guaranteed:    {format_currency(contract.guaranteed_at_signing)}")
    lines.append(f"  Status:              {'Active' if contract.is_active else 'Inactive'}")
    lines.append("")

    lines.append("YEAR-BY-YEAR BREAKDOWN:")
    lines.append(f"{'Season':<8} {'Base Salary':<15} {'Bonuses':<15} {'Guaranteed':<15} {'Cap Hit':<15}")
    lines.append("-" * 72)

    for contract_year in sorted(contract.annual_breakdown, key=lambda y: y.year):
        cap_hit = calculator.calculate_cap_hit(contract, contract_year.year)
        bonuses = cap_hit.total_cap_hit - cap_hit.base_salary
        lines.append(
            f"{contract_year.year:<8} {format_currency(contract_year.base_salary):<15} "
            f"{format_currency(bonuses):<15} {format_currency(contract_year.guarantees):<15} "
            f"{format_currency(cap_hit.total_cap_hit):<15}"
        )

    lines.append("=" * 72)

    return "\n".join(lines)


def format_team_cap_space(cap_space: TeamCapSpace, mode_label: Optional[str] = None) -> str:
    """One-line summary of a team's cap position."""
    status = "COMPLIANT" if cap_space.is_compliant else "OVER CAP"
    label = f" ({mode_label})" if mode_label else ""
    return (
        f"Team {cap_space.team_id} {cap_space.season}{label}: "
        f"{format_currency(cap_space.used_cap_space)} used of "
        f"{format_currency(cap_space.total_cap)}, "
        f"{format_currency(cap_space.available_cap_space)} available "
        f"[{cap_space.top_players_count} counted] {status}"
    )


def calculate_cap_percentage(amount: int, cap_limit: int) -> float:
    """
    Calculate what percentage of the cap an amount represents.

    Args:
        amount: Dollar amount
        cap_limit: Salary cap limit

    Returns:
        Percentage (0.0 to 100.0)
    """
    if cap_limit <= 0:
        return 0.0

    return (amount / cap_limit) * 100.0


def format_cap_percentage(amount: int, cap_limit: int) -> str:
    """
    Format cap percentage for display.

    Returns:
        Formatted string (e.g., "10.5% of cap")
    """
    percentage = calculate_cap_percentage(amount, cap_limit)
    return f"{percentage:.1f}% of cap"
