"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wallet_sections.config import (
    AppConfig,
    CoinsConfig,
    CollectiblesConfig,
    DisplayConfig,
    PreloadConfig,
)
from wallet_sections.models import (
    Asset,
    Collectible,
    Family,
    Pool,
    SavingsPosition,
    WalletState,
)
from wallet_sections.networks import NetworkType


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        display=DisplayConfig(native_currency="USD", language="en"),
        coins=CoinsConfig(
            small_balance_ratio="0.02",
            collapse_small_balances=True,
            include_small_balances=True,
        ),
        collectibles=CollectiblesConfig(tokens_per_row=2),
        preload=PreloadConfig(batch_size=50),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_assets() -> tuple[Asset, ...]:
    # Nothing hidden: total 5000.00, small-balance threshold 100.00.
    return (
        Asset(unique_id="dai", name="Dai", symbol="DAI", balance="900", native_value="900.00"),
        Asset(unique_id="eth", name="Ethereum", symbol="ETH", balance="1.5", native_value="3000.00"),
        Asset(unique_id="uni", name="Uniswap", symbol="UNI", balance="40", native_value="1000.00"),
        Asset(unique_id="shib", name="Shiba", symbol="SHIB", balance="1000000", native_value="60.00"),
        Asset(unique_id="bat", name="BAT", symbol="BAT", balance="100", native_value="40.00"),
    )


@pytest.fixture()
def sample_savings() -> tuple[SavingsPosition, ...]:
    return (
        SavingsPosition(
            address="0xcdai",
            name="Dai",
            symbol="DAI",
            underlying_balance_native_value="250.50",
            lifetime_supply_interest_accrued="1.5",
            underlying_price="1.01",
        ),
        SavingsPosition(
            address="0xcusdc",
            name="USD Coin",
            symbol="USDC",
            underlying_balance_native_value="100",
        ),
    )


@pytest.fixture()
def sample_pools() -> tuple[Pool, ...]:
    return (
        Pool(address="0xpool1", name="ETH-DAI", total_native_value="500.25"),
        Pool(address="0xpool2", name="ETH-UNI", total_native_value="99.75"),
    )


@pytest.fixture()
def sample_collectibles() -> tuple[Collectible, ...]:
    return (
        Collectible(unique_id="punk-1", family_id="punks", family_name="CryptoPunks",
                    family_image="https://img.example.com/punks.png",
                    image_preview_url="https://img.example.com/punk-1.png"),
        Collectible(unique_id="kitty-1", family_id="kitties", family_name="CryptoKitties",
                    image_preview_url="https://img.example.com/kitty-1.png"),
        Collectible(unique_id="punk-2", family_id="punks", family_name="CryptoPunks",
                    image_preview_url="https://img.example.com/punk-2.png"),
        Collectible(unique_id="punk-3", family_id="punks", family_name="CryptoPunks",
                    image_preview_url=None),
    )


@pytest.fixture()
def sample_state(
    sample_assets: tuple[Asset, ...],
    sample_savings: tuple[SavingsPosition, ...],
    sample_pools: tuple[Pool, ...],
    sample_collectibles: tuple[Collectible, ...],
) -> WalletState:
    return WalletState(
        all_assets=sample_assets,
        savings=sample_savings,
        uniswap=sample_pools,
        unique_tokens=sample_collectibles,
        showcase_tokens=(),
        native_currency="USD",
        network=NetworkType.MAINNET,
        pinned_coins=("uni",),
        hidden_coins=("dai",),
    )


def _make_family(family_id: str, row_count: int, *, with_images: bool = True) -> Family:
    """Family with ``row_count`` single-token rows."""
    rows = tuple(
        (
            Collectible(
                unique_id=f"{family_id}-{i}",
                family_id=family_id,
                family_name=family_id.title(),
                image_preview_url=(
                    f"https://img.example.com/{family_id}/{i}.png" if with_images else None
                ),
            ),
        )
        for i in range(row_count)
    )
    return Family(family_id=family_id, family_name=family_id.title(), family_image=None, rows=rows)


@pytest.fixture()
def make_family():
    return _make_family


# ---------------------------------------------------------------------------
# YAML fixtures
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    display:
      native_currency: eur
      language: fr
    coins:
      small_balance_ratio: "0.05"
      collapse_small_balances: false
    collectibles:
      tokens_per_row: 3
      showcase_family_name: Vitrine
    preload:
      enabled: true
      batch_size: 100
      max_concurrency: 4
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


SAMPLE_STATE_YAML = textwrap.dedent("""\
    nativeCurrency: USD
    network: mainnet
    isCoinListEdited: false
    pinnedCoins: [uni]
    hiddenCoins: []
    allAssets:
      - uniqueId: eth
        name: Ethereum
        symbol: ETH
        balance: {amount: "1.5"}
        native: {balance: {amount: "3000.00"}, change: "2.5%"}
      - uniqueId: uni
        name: Uniswap
        symbol: UNI
        balance: {amount: "40"}
        native: {balance: {amount: "1000.00"}}
    savings:
      - cToken: {address: "0xcdai"}
        underlying: {name: Dai, symbol: DAI}
        underlyingBalanceNativeValue: "250.50"
        underlyingPrice: "1.01"
    uniswap:
      - address: "0xpool1"
        totalNativeValue: "500.25"
    uniqueTokens:
      - uniqueId: punk-1
        image_preview_url: "https://img.example.com/punk-1.png"
        asset_contract: {address: "0xpunks", name: CryptoPunks}
""")


@pytest.fixture()
def sample_state_path(tmp_path: Path) -> Path:
    state_file = tmp_path / "state.yaml"
    state_file.write_text(SAMPLE_STATE_YAML)
    return state_file
