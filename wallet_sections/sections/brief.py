"""Flat cell assemblers for the brief wallet list."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..builders.coins import build_brief_coins_list
from ..builders.collectibles import families_to_cells
from ..cells import (
    AssetsHeaderCell,
    Cell,
    LoadingAssetsCell,
    NftsHeaderCell,
    PoolsHeaderCell,
    SavingsCell,
    SavingsHeaderCell,
    UniswapPoolCell,
)
from ..config import AppConfig
from ..currency import convert_amount_to_native_display
from ..errors import MalformedAsset
from ..models import Asset, Collectible, Family, Pool, SavingsBlock
from ..networks import NetworkType, supports_savings
from ..preload.prioritizer import ImagePreloader
from .totals import grand_total


def _require_unique(addresses: Iterable[str], kind: str) -> None:
    seen: set[str] = set()
    for address in addresses:
        if not address:
            raise MalformedAsset(f"{kind} is missing 'address'")
        if address in seen:
            raise MalformedAsset(f"Duplicate {kind} address '{address}'")
        seen.add(address)


def build_brief_wallet_sections(*blocks: Sequence[Cell]) -> tuple[Cell, ...]:
    """Concatenate the non-empty blocks in order."""
    return tuple(cell for block in blocks if block for cell in block)


def with_brief_balance_section(
    all_assets: Sequence[Asset],
    is_loading_assets: bool,
    native_currency: str,
    is_coin_list_edited: bool,
    pinned_coins: Sequence[str],
    hidden_coins: Sequence[str],
    savings_section: SavingsBlock,
    uniswap_total: str,
    config: AppConfig,
) -> tuple[Cell, ...]:
    """ASSETS_HEADER with the grand total, then coins or one loading cell."""
    coins = build_brief_coins_list(
        all_assets,
        native_currency,
        is_coin_list_edited,
        pinned_coins,
        hidden_coins,
        config.coins.include_small_balances,
        config.coins.collapse_small_balances,
        small_balance_ratio=config.coins.small_balance_ratio,
        add_eth_placeholder=True,
    )
    total_value = convert_amount_to_native_display(
        grand_total(coins.total_balances_value, savings_section, uniswap_total),
        native_currency,
    )
    header = AssetsHeaderCell(value=total_value)
    if is_loading_assets:
        return (header, LoadingAssetsCell())
    return (header, *coins.rows)


def with_brief_balance_savings_section(
    savings_section: SavingsBlock,
    network: NetworkType,
    native_currency: str = "USD",
) -> tuple[Cell, ...]:
    if not savings_section.rows or not supports_savings(network):
        return ()
    addresses = [row.position.address for row in savings_section.rows]
    _require_unique(addresses, "savings position")
    return (
        SavingsHeaderCell(
            value=convert_amount_to_native_display(
                savings_section.total_value, native_currency
            )
        ),
        *(SavingsCell(address=address) for address in addresses),
    )


def with_brief_uniswap_section(
    uniswap: Sequence[Pool],
    uniswap_total: str,
    native_currency: str,
) -> tuple[Cell, ...]:
    if not uniswap:
        return ()
    addresses = [pool.address for pool in uniswap]
    _require_unique(addresses, "pool")
    return (
        PoolsHeaderCell(
            value=convert_amount_to_native_display(uniswap_total, native_currency)
        ),
        *(UniswapPoolCell(address=address) for address in addresses),
    )


def with_brief_unique_token_families_section(
    unique_tokens: Sequence[Collectible],
    families: Sequence[Family],
    preloader: ImagePreloader | None = None,
) -> tuple[Cell, ...]:
    """NFT block; the first non-empty pass issues the image preload."""
    if not unique_tokens or not families:
        return ()
    if preloader is not None:
        preloader.preload_once(families)
    return (NftsHeaderCell(), *families_to_cells(families))


__all__ = [
    "build_brief_wallet_sections",
    "with_brief_balance_savings_section",
    "with_brief_balance_section",
    "with_brief_uniswap_section",
    "with_brief_unique_token_families_section",
]
