"""Structured section assemblers — balances, pools and collectibles."""
from __future__ import annotations

from collections.abc import Sequence

from ..arithmetic import add, multiply
from ..builders.coins import build_coins_list
from ..config import AppConfig
from ..currency import convert_amount_to_native_display
from ..languages import translate
from ..models import (
    Asset,
    Collectible,
    ContextMenu,
    Family,
    HeaderMeta,
    LoadingPlaceholder,
    Pool,
    SavingsBlock,
    SavingsPosition,
    SavingsRow,
    Section,
    SmallBalancesRow,
    WalletSections,
)
from ..networks import NetworkType, supports_savings
from ..preload.prioritizer import ImagePreloader
from .totals import grand_total


def filter_wallet_sections(sections: Sequence[Section]) -> tuple[Section, ...]:
    """Drop data-bearing sections whose header reports no items."""
    return tuple(
        section
        for section in sections
        if section.data is None or section.header.total_items
    )


def build_wallet_sections(
    balance_section: Section,
    unique_token_families_section: Section,
    uniswap_section: Section,
) -> WalletSections:
    sections = filter_wallet_sections(
        [balance_section, uniswap_section, unique_token_families_section]
    )
    return WalletSections(is_empty=not sections, sections=sections)


def with_balance_savings_section(
    savings: Sequence[SavingsPosition],
) -> SavingsBlock:
    """Savings rows with their accrued interest valued in native currency."""
    total = "0"
    rows: list[SavingsRow] = []
    for position in savings:
        total = add(total, position.underlying_balance_native_value)
        accrued_native = "0"
        if position.lifetime_supply_interest_accrued:
            accrued_native = multiply(
                position.lifetime_supply_interest_accrued,
                position.underlying_price,
            )
        rows.append(
            SavingsRow(
                position=position,
                lifetime_supply_interest_accrued_native=accrued_native,
            )
        )
    return SavingsBlock(rows=tuple(rows), total_value=total)


def with_uniswap_section(
    language: str,
    native_currency: str,
    uniswap: Sequence[Pool],
    uniswap_total: str,
) -> Section:
    return Section(
        name="pools",
        data=tuple(uniswap),
        header=HeaderMeta(
            title=translate("account.tab_pools", language),
            total_items=len(uniswap),
            total_value=convert_amount_to_native_display(uniswap_total, native_currency),
        ),
        render_item="uniswap",
        flags=frozenset({"pools"}),
    )


def coin_edit_context_menu(
    all_assets: Sequence[Asset],
    balance_section_data: Sequence[object],
    is_loading_assets: bool,
    all_assets_count: int,
    total_value: str,
    added_eth: bool,
    language: str = "en",
) -> HeaderMeta:
    """Balances header; the Edit action sheet is offered only without a divider."""
    total_items = 1 if is_loading_assets else int(added_eth) + all_assets_count
    no_small_balances = not any(
        isinstance(row, SmallBalancesRow) for row in balance_section_data
    )
    context_menu = None
    if all_assets and no_small_balances:
        context_menu = ContextMenu(
            cancel_index=0,
            options=(
                translate("button.cancel", language),
                translate("button.edit", language),
            ),
            total_items=total_items,
            total_value=total_value,
        )
    return HeaderMeta(
        title=None,
        total_items=total_items,
        total_value=total_value,
        context_menu=context_menu,
    )


def with_balance_section(
    all_assets: Sequence[Asset],
    savings_section: SavingsBlock,
    is_loading_assets: bool,
    language: str,
    native_currency: str,
    network: NetworkType,
    is_coin_list_edited: bool,
    pinned_coins: Sequence[str],
    hidden_coins: Sequence[str],
    uniswap_total: str,
    config: AppConfig,
) -> Section:
    """Balances section: coin rows, the savings block on mainnet, header totals."""
    coins = build_coins_list(
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
    data: list[object] = list(coins.rows)

    total_value = convert_amount_to_native_display(
        grand_total(coins.total_balances_value, savings_section, uniswap_total),
        native_currency,
    )

    if supports_savings(network):
        data.append(savings_section)

    if is_loading_assets:
        data = [LoadingPlaceholder()]

    all_assets_count = len({asset.unique_id for asset in all_assets})
    return Section(
        name="balances",
        data=tuple(data),
        header=coin_edit_context_menu(
            all_assets,
            data,
            is_loading_assets,
            all_assets_count,
            total_value,
            coins.added_eth,
            language,
        ),
        render_item="balances_skeleton" if is_loading_assets else "balances",
        flags=frozenset({"balances"}),
    )


def with_unique_token_families_section(
    language: str,
    unique_tokens: Sequence[Collectible],
    families: Sequence[Family],
    preloader: ImagePreloader | None = None,
) -> Section:
    """Collectibles section; the first non-empty pass issues the image preload."""
    if preloader is not None and families:
        preloader.preload_once(families)

    return Section(
        name="collectibles",
        data=tuple(families),
        header=HeaderMeta(
            title=translate("account.tab_collectibles", language),
            total_items=len(unique_tokens),
            total_value="",
        ),
        render_item="token_family",
        flags=frozenset({"collectibles", "big"}),
    )


__all__ = [
    "build_wallet_sections",
    "coin_edit_context_menu",
    "filter_wallet_sections",
    "with_balance_savings_section",
    "with_balance_section",
    "with_uniswap_section",
    "with_unique_token_families_section",
]
