"""Flat cells for the virtualized brief list.

Every ``CellType`` has exactly one frozen cell class listing the fields that
variant carries. ``uid`` is derived from the entity identity, so it stays
stable across derivations that do not change the entity.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar, Union


class CellType(str, Enum):
    ASSETS_HEADER = "ASSETS_HEADER"
    COIN = "COIN"
    COIN_DIVIDER = "COIN_DIVIDER"
    SAVINGS_HEADER = "SAVINGS_HEADER"
    SAVINGS = "SAVINGS"
    POOLS_HEADER = "POOLS_HEADER"
    UNISWAP_POOL = "UNISWAP_POOL"
    NFTS_HEADER = "NFTS_HEADER"
    FAMILY_HEADER = "FAMILY_HEADER"
    NFT = "NFT"
    LOADING_ASSETS = "LOADING_ASSETS"


@dataclass(frozen=True, kw_only=True)
class BaseCell:
    """Common cell fields; ``collapsed`` rows sit behind a closed divider."""

    type: ClassVar[CellType]
    collapsed: bool = False

    @property
    def uid(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, kw_only=True)
class AssetsHeaderCell(BaseCell):
    type: ClassVar[CellType] = CellType.ASSETS_HEADER
    value: str

    @property
    def uid(self) -> str:
        return "assets-header"


@dataclass(frozen=True, kw_only=True)
class LoadingAssetsCell(BaseCell):
    type: ClassVar[CellType] = CellType.LOADING_ASSETS

    @property
    def uid(self) -> str:
        return "loading-assets"


@dataclass(frozen=True, kw_only=True)
class CoinCell(BaseCell):
    type: ClassVar[CellType] = CellType.COIN
    unique_id: str
    value: str = "0"
    is_pinned: bool = False
    is_hidden: bool = False
    is_small: bool = False
    is_placeholder: bool = False

    @property
    def uid(self) -> str:
        return f"coin-{self.unique_id}"


@dataclass(frozen=True, kw_only=True)
class CoinDividerCell(BaseCell):
    type: ClassVar[CellType] = CellType.COIN_DIVIDER
    value: str

    @property
    def uid(self) -> str:
        return "coin-divider"


@dataclass(frozen=True, kw_only=True)
class SavingsHeaderCell(BaseCell):
    type: ClassVar[CellType] = CellType.SAVINGS_HEADER
    value: str

    @property
    def uid(self) -> str:
        return "savings-header"


@dataclass(frozen=True, kw_only=True)
class SavingsCell(BaseCell):
    type: ClassVar[CellType] = CellType.SAVINGS
    address: str

    @property
    def uid(self) -> str:
        return f"savings-{self.address}"


@dataclass(frozen=True, kw_only=True)
class PoolsHeaderCell(BaseCell):
    type: ClassVar[CellType] = CellType.POOLS_HEADER
    value: str

    @property
    def uid(self) -> str:
        return "pools-header"


@dataclass(frozen=True, kw_only=True)
class UniswapPoolCell(BaseCell):
    type: ClassVar[CellType] = CellType.UNISWAP_POOL
    address: str

    @property
    def uid(self) -> str:
        return f"pool-{self.address}"


@dataclass(frozen=True, kw_only=True)
class NftsHeaderCell(BaseCell):
    type: ClassVar[CellType] = CellType.NFTS_HEADER

    @property
    def uid(self) -> str:
        return "nfts-header"


@dataclass(frozen=True, kw_only=True)
class FamilyHeaderCell(BaseCell):
    type: ClassVar[CellType] = CellType.FAMILY_HEADER
    family_id: str
    name: str
    total: int
    image: str | None = None
    showcase: bool = False

    @property
    def uid(self) -> str:
        if self.showcase:
            return "showcase-family"
        return f"family-{self.family_id}"


@dataclass(frozen=True, kw_only=True)
class NftCell(BaseCell):
    """One display row of a family: 1..N co-displayed tokens."""

    type: ClassVar[CellType] = CellType.NFT
    family_id: str
    unique_ids: tuple[str, ...]
    showcase: bool = False

    @property
    def uid(self) -> str:
        if self.showcase:
            return f"showcase-nft-{self.unique_ids[0]}"
        return f"nft-{self.family_id}-{self.unique_ids[0]}"


Cell = Union[
    AssetsHeaderCell,
    LoadingAssetsCell,
    CoinCell,
    CoinDividerCell,
    SavingsHeaderCell,
    SavingsCell,
    PoolsHeaderCell,
    UniswapPoolCell,
    NftsHeaderCell,
    FamilyHeaderCell,
    NftCell,
]


def cell_type_from_tag(tag: str) -> CellType | None:
    """Map a wire tag to a CellType; unknown tags map to ``None``."""
    try:
        return CellType(tag)
    except ValueError:
        return None


def visible_cells(cells: Iterable[Cell]) -> list[Cell]:
    """Cells that are not collapsed behind the coin divider."""
    return [cell for cell in cells if not cell.collapsed]


def cell_to_dict(cell: Cell) -> dict[str, Any]:
    """Serialize a cell with its wire tag and uid."""
    payload = asdict(cell)
    payload["type"] = cell.type.value
    payload["uid"] = cell.uid
    if "unique_ids" in payload:
        payload["unique_ids"] = list(payload["unique_ids"])
    return payload


__all__ = [
    "AssetsHeaderCell",
    "BaseCell",
    "Cell",
    "CellType",
    "CoinCell",
    "CoinDividerCell",
    "FamilyHeaderCell",
    "LoadingAssetsCell",
    "NftCell",
    "NftsHeaderCell",
    "PoolsHeaderCell",
    "SavingsCell",
    "SavingsHeaderCell",
    "UniswapPoolCell",
    "cell_to_dict",
    "cell_type_from_tag",
    "visible_cells",
]
