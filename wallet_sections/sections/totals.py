"""Grand totals shared by both section trees."""
from __future__ import annotations

from collections.abc import Sequence

from ..arithmetic import add, sum_amounts
from ..models import Pool, SavingsBlock


def pools_total(uniswap: Sequence[Pool]) -> str:
    return sum_amounts(pool.total_native_value for pool in uniswap)


def grand_total(
    total_balances_value: str,
    savings_section: SavingsBlock | None,
    uniswap_total: str,
) -> str:
    """Coins + savings + pools, as an exact decimal string."""
    savings_total = savings_section.total_value if savings_section else "0"
    return add(add(total_balances_value, savings_total), uniswap_total)


__all__ = ["grand_total", "pools_total"]
