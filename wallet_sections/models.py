"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .networks import NetworkType

ETH_UNIQUE_ID = "eth"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Asset:
    """Token balance held by the account."""

    unique_id: str
    name: str = ""
    symbol: str = ""
    balance: str = "0"
    native_value: str = "0"
    price_change: str | None = None


@dataclass(frozen=True)
class SavingsPosition:
    """Compound-style savings position keyed by its cToken address."""

    address: str
    name: str = ""
    symbol: str = ""
    underlying_balance_native_value: str | None = None
    lifetime_supply_interest_accrued: str | None = None
    underlying_price: str = "0"


@dataclass(frozen=True)
class Pool:
    """Liquidity-pool position."""

    address: str
    name: str = ""
    total_native_value: str = "0"


@dataclass(frozen=True)
class Collectible:
    """Single collectible token."""

    unique_id: str
    name: str = ""
    family_id: str = ""
    family_name: str = ""
    family_image: str | None = None
    image_preview_url: str | None = None

    @property
    def family_key(self) -> str:
        return self.family_id or self.family_name


@dataclass(frozen=True)
class WalletState:
    """Snapshot of everything the section builder reads.

    Replace fields with ``dataclasses.replace`` so untouched collections keep
    their identity between snapshots.
    """

    all_assets: tuple[Asset, ...] = ()
    savings: tuple[SavingsPosition, ...] = ()
    uniswap: tuple[Pool, ...] = ()
    unique_tokens: tuple[Collectible, ...] = ()
    showcase_tokens: tuple[str, ...] = ()
    native_currency: str = "USD"
    network: NetworkType = NetworkType.MAINNET
    is_coin_list_edited: bool = False
    pinned_coins: tuple[str, ...] = ()
    hidden_coins: tuple[str, ...] = ()
    is_loading_assets: bool = False
    language: str = "en"


# ---------------------------------------------------------------------------
# Full rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssetRow:
    """Coin row of the full balances section."""

    asset: Asset
    is_pinned: bool = False
    is_hidden: bool = False
    is_small: bool = False
    is_placeholder: bool = False

    @property
    def unique_id(self) -> str:
        return self.asset.unique_id

    @property
    def display_value(self) -> str:
        return self.asset.native_value


@dataclass(frozen=True)
class SmallBalancesRow:
    """Divider container holding the small (and, in edit mode, hidden) coins."""

    rows: tuple[AssetRow, ...]
    value: str

    @property
    def display_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class CoinsList:
    """Result of the coin list builders.

    Attributes:
        rows: Full rows or brief cells, in display order.
        total_balances_value: Exact sum of the displayed non-hidden values.
        small_balances_value: Exact sum of the small-balance coins.
        added_eth: True when a zero-value ETH placeholder row was inserted.
    """

    rows: tuple[Any, ...]
    total_balances_value: str
    small_balances_value: str = "0"
    added_eth: bool = False


@dataclass(frozen=True)
class SavingsRow:
    position: SavingsPosition
    lifetime_supply_interest_accrued_native: str = "0"


@dataclass(frozen=True)
class SavingsBlock:
    """Savings sub-block folded into the balances section."""

    rows: tuple[SavingsRow, ...]
    total_value: str


@dataclass(frozen=True)
class LoadingPlaceholder:
    """Skeleton row shown while balances are loading."""

    unique_id: str = "skeleton0"


@dataclass(frozen=True)
class Family:
    """Collectibles grouped by family, chunked into display rows."""

    family_id: str
    family_name: str
    family_image: str | None
    rows: tuple[tuple[Collectible, ...], ...]
    is_showcase: bool = False

    @property
    def child_count(self) -> int:
        return sum(len(row) for row in self.rows)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContextMenu:
    """Edit-mode action sheet attached to the balances header."""

    cancel_index: int
    options: tuple[str, ...]
    total_items: int
    total_value: str


@dataclass(frozen=True)
class HeaderMeta:
    title: str | None
    total_items: int
    total_value: str
    context_menu: ContextMenu | None = None


@dataclass(frozen=True)
class Section:
    """One logical group of the structured view."""

    name: str
    data: tuple[Any, ...] | None
    header: HeaderMeta
    render_item: str
    flags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class WalletSections:
    is_empty: bool
    sections: tuple[Section, ...]


# ---------------------------------------------------------------------------
# Preloading
# ---------------------------------------------------------------------------


class PreloadPriority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class PreloadRequest:
    id: str
    uri: str
    priority: PreloadPriority


__all__ = [
    "ETH_UNIQUE_ID",
    "Asset",
    "AssetRow",
    "Collectible",
    "CoinsList",
    "ContextMenu",
    "Family",
    "HeaderMeta",
    "LoadingPlaceholder",
    "Pool",
    "PreloadPriority",
    "PreloadRequest",
    "SavingsBlock",
    "SavingsPosition",
    "SavingsRow",
    "Section",
    "SmallBalancesRow",
    "WalletSections",
    "WalletState",
]
