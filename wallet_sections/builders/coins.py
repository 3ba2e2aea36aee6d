"""Coin list builders — pinned, standard, small and hidden coin grouping."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..arithmetic import add, compare, multiply, sum_amounts, to_decimal
from ..cells import Cell, CoinCell, CoinDividerCell
from ..errors import MalformedAsset
from ..models import ETH_UNIQUE_ID, Asset, AssetRow, CoinsList, SmallBalancesRow

logger = logging.getLogger(__name__)

DEFAULT_SMALL_BALANCE_RATIO = "0.02"


def eth_placeholder() -> Asset:
    """Zero-balance ETH row shown when the wallet holds no ETH."""
    return Asset(
        unique_id=ETH_UNIQUE_ID,
        name="Ethereum",
        symbol="ETH",
        balance="0",
        native_value="0",
    )


@dataclass
class _CoinGroups:
    pinned: list[AssetRow] = field(default_factory=list)
    standard: list[AssetRow] = field(default_factory=list)
    small: list[AssetRow] = field(default_factory=list)
    hidden: list[AssetRow] = field(default_factory=list)


def validate_assets(assets: Iterable[Asset]) -> None:
    """Raise MalformedAsset on a missing or repeated ``unique_id``."""
    seen: set[str] = set()
    for asset in assets:
        unique_id = getattr(asset, "unique_id", None)
        if not isinstance(unique_id, str) or not unique_id:
            raise MalformedAsset(f"Asset is missing 'unique_id': {asset!r}")
        if unique_id in seen:
            raise MalformedAsset(f"Duplicate asset unique_id '{unique_id}'")
        seen.add(unique_id)
        to_decimal(asset.native_value)


def sort_by_native_value(rows: Sequence[AssetRow]) -> list[AssetRow]:
    """Descending native value; ties keep input order (sorted() is stable)."""
    return sorted(rows, key=lambda row: to_decimal(row.display_value), reverse=True)


def small_balance_threshold(
    assets: Iterable[Asset],
    hidden_coins: frozenset[str],
    ratio: str,
) -> str:
    """Absolute threshold below which a coin counts as a small balance."""
    visible_total = sum_amounts(
        a.native_value for a in assets if a.unique_id not in hidden_coins
    )
    return multiply(visible_total, ratio)


def group_coins(
    all_assets: Sequence[Asset],
    is_edit_mode: bool,
    pinned_coins: frozenset[str],
    hidden_coins: frozenset[str],
    small_balance_ratio: str,
) -> _CoinGroups:
    """Split assets into pinned, standard, small and hidden groups, sorted."""
    threshold = small_balance_threshold(all_assets, hidden_coins, small_balance_ratio)
    groups = _CoinGroups()

    for asset in all_assets:
        unique_id = asset.unique_id
        if unique_id in hidden_coins:
            groups.hidden.append(
                AssetRow(
                    asset,
                    is_pinned=unique_id in pinned_coins,
                    is_hidden=True,
                )
            )
        elif unique_id in pinned_coins:
            groups.pinned.append(AssetRow(asset, is_pinned=True))
        elif (
            unique_id == ETH_UNIQUE_ID
            or compare(asset.native_value, threshold) >= 0
        ):
            groups.standard.append(AssetRow(asset))
        else:
            groups.small.append(AssetRow(asset, is_small=True))

    groups.pinned = sort_by_native_value(groups.pinned)
    groups.standard = sort_by_native_value(groups.standard)
    groups.small = sort_by_native_value(groups.small)
    groups.hidden = sort_by_native_value(groups.hidden) if is_edit_mode else []
    return groups


def _insert_eth_placeholder(
    groups: _CoinGroups,
    all_assets: Sequence[Asset],
    pinned_coins: frozenset[str],
) -> bool:
    if not all_assets:
        return False
    if any(a.unique_id == ETH_UNIQUE_ID for a in all_assets):
        return False
    if ETH_UNIQUE_ID in pinned_coins:
        groups.pinned.insert(
            0, AssetRow(eth_placeholder(), is_pinned=True, is_placeholder=True)
        )
    else:
        groups.standard.insert(0, AssetRow(eth_placeholder(), is_placeholder=True))
    return True


def _prepare(
    all_assets: Sequence[Asset],
    is_edit_mode: bool,
    pinned_coins: Iterable[str] | None,
    hidden_coins: Iterable[str] | None,
    small_balance_ratio: str,
    add_eth_placeholder: bool,
) -> tuple[_CoinGroups, bool, str]:
    validate_assets(all_assets)
    pinned = frozenset(pinned_coins or ())
    hidden = frozenset(hidden_coins or ())
    groups = group_coins(all_assets, is_edit_mode, pinned, hidden, small_balance_ratio)
    added_eth = False
    if add_eth_placeholder:
        added_eth = _insert_eth_placeholder(groups, all_assets, pinned)
    small_value = sum_amounts(row.display_value for row in groups.small)
    return groups, added_eth, small_value


def build_coins_list(
    all_assets: Sequence[Asset],
    native_currency: str,
    is_edit_mode: bool,
    pinned_coins: Iterable[str] | None,
    hidden_coins: Iterable[str] | None,
    include_small_balances: bool = True,
    collapse_small_into_divider: bool = True,
    *,
    small_balance_ratio: str = DEFAULT_SMALL_BALANCE_RATIO,
    add_eth_placeholder: bool = False,
) -> CoinsList:
    """Build the full coin rows for the balances section.

    Args:
        all_assets: Account balances, in source order.
        native_currency: Currency the ``native_value`` amounts are in.
        is_edit_mode: Whether the coin list is being edited; hidden coins are
            only shown (last) in edit mode.
        pinned_coins: Unique ids pinned to the top.
        hidden_coins: Unique ids hidden by the user.
        include_small_balances: Keep small-balance coins in the rows.
        collapse_small_into_divider: Put the small block inside a single
            SmallBalancesRow instead of inlining it.
        small_balance_ratio: Fraction of the visible total under which a
            coin is a small balance.
        add_eth_placeholder: Insert a zero ETH row if the wallet has none.

    Returns:
        CoinsList: Rows plus exact totals.

    Raises:
        MalformedAsset: On a missing or duplicate ``unique_id``.
        InvalidAmount: On a non-numeric amount.
    """
    groups, added_eth, small_value = _prepare(
        all_assets,
        is_edit_mode,
        pinned_coins,
        hidden_coins,
        small_balance_ratio,
        add_eth_placeholder,
    )

    rows: list[AssetRow | SmallBalancesRow] = [*groups.pinned, *groups.standard]
    total = sum_amounts(row.display_value for row in rows)

    small_rows = groups.small if include_small_balances else []
    block_value = small_value if include_small_balances else "0"
    total = add(total, block_value)

    block = [*small_rows, *groups.hidden]
    if block:
        if collapse_small_into_divider:
            rows.append(SmallBalancesRow(rows=tuple(block), value=block_value))
        else:
            rows.extend(block)

    logger.debug(
        "Built %d coin rows (%s %s, small %s)",
        len(rows),
        total,
        native_currency,
        small_value,
    )
    return CoinsList(
        rows=tuple(rows),
        total_balances_value=total,
        small_balances_value=small_value,
        added_eth=added_eth,
    )


def _coin_cell(row: AssetRow, collapsed: bool = False) -> CoinCell:
    return CoinCell(
        unique_id=row.unique_id,
        value=row.display_value,
        is_pinned=row.is_pinned,
        is_hidden=row.is_hidden,
        is_small=row.is_small,
        is_placeholder=row.is_placeholder,
        collapsed=collapsed,
    )


def build_brief_coins_list(
    all_assets: Sequence[Asset],
    native_currency: str,
    is_edit_mode: bool,
    pinned_coins: Iterable[str] | None,
    hidden_coins: Iterable[str] | None,
    include_small_balances: bool = True,
    collapse_small_into_divider: bool = True,
    *,
    small_balance_ratio: str = DEFAULT_SMALL_BALANCE_RATIO,
    add_eth_placeholder: bool = False,
) -> CoinsList:
    """Flat-cell counterpart of :func:`build_coins_list`.

    The small block becomes a COIN_DIVIDER cell followed by its coin cells;
    outside edit mode those cells are flagged ``collapsed``.
    """
    groups, added_eth, small_value = _prepare(
        all_assets,
        is_edit_mode,
        pinned_coins,
        hidden_coins,
        small_balance_ratio,
        add_eth_placeholder,
    )

    top = [*groups.pinned, *groups.standard]
    cells: list[Cell] = [_coin_cell(row) for row in top]
    total = sum_amounts(row.display_value for row in top)

    small_rows = groups.small if include_small_balances else []
    block_value = small_value if include_small_balances else "0"
    total = add(total, block_value)

    block = [*small_rows, *groups.hidden]
    if block:
        if collapse_small_into_divider:
            cells.append(CoinDividerCell(value=block_value))
            collapsed = not is_edit_mode
            cells.extend(_coin_cell(row, collapsed=collapsed) for row in block)
        else:
            cells.extend(_coin_cell(row) for row in block)

    return CoinsList(
        rows=tuple(cells),
        total_balances_value=total,
        small_balances_value=small_value,
        added_eth=added_eth,
    )


__all__ = [
    "DEFAULT_SMALL_BALANCE_RATIO",
    "build_brief_coins_list",
    "build_coins_list",
    "eth_placeholder",
    "group_coins",
    "small_balance_threshold",
    "sort_by_native_value",
    "validate_assets",
]
