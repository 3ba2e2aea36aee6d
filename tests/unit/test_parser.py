"""Unit tests for raw wallet state parsing."""
from __future__ import annotations

import pytest

from wallet_sections.errors import InvalidAmount, MalformedAsset, UnsupportedCurrency
from wallet_sections.networks import NetworkType
from wallet_sections.parser import (
    get_balance,
    get_native_value,
    parse_asset,
    parse_collectible,
    parse_pool,
    parse_savings_position,
    parse_state,
)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


class TestGetNativeValue:
    def test_nested_balance_amount(self) -> None:
        assert get_native_value({"native": {"balance": {"amount": "12.5"}}}) == "12.5"

    def test_flat_snake_case(self) -> None:
        assert get_native_value({"native_value": "3"}) == "3"

    def test_flat_camel_case(self) -> None:
        assert get_native_value({"nativeValue": "4"}) == "4"

    def test_missing(self) -> None:
        assert get_native_value({}) is None


class TestGetBalance:
    def test_nested(self) -> None:
        assert get_balance({"balance": {"amount": "1.5"}}) == "1.5"

    def test_flat(self) -> None:
        assert get_balance({"balance": "2"}) == "2"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class TestParseAsset:
    def test_camel_case_payload(self) -> None:
        asset = parse_asset(
            {
                "uniqueId": "eth",
                "name": "Ethereum",
                "symbol": "ETH",
                "balance": {"amount": "1.50"},
                "native": {"balance": {"amount": "3000"}, "change": "2.5%"},
            }
        )
        assert asset.unique_id == "eth"
        assert asset.balance == "1.50"
        assert asset.native_value == "3000"
        assert asset.price_change == "2.5%"

    def test_snake_case_payload(self) -> None:
        asset = parse_asset({"unique_id": "dai", "native_value": 12})
        assert asset.unique_id == "dai"
        assert asset.native_value == "12"
        assert asset.balance == "0"

    def test_missing_native_value_defaults_to_zero(self) -> None:
        assert parse_asset({"uniqueId": "x"}).native_value == "0"

    def test_missing_unique_id(self) -> None:
        with pytest.raises(MalformedAsset, match="uniqueId"):
            parse_asset({"name": "Nameless"})

    def test_float_amount_rejected(self) -> None:
        with pytest.raises(InvalidAmount):
            parse_asset({"uniqueId": "eth", "native_value": 1.5})


class TestParseSavingsPosition:
    def test_ctoken_address_and_underlying(self) -> None:
        position = parse_savings_position(
            {
                "cToken": {"address": "0xcdai"},
                "underlying": {"name": "Dai", "symbol": "DAI"},
                "underlyingBalanceNativeValue": "250.50",
                "lifetimeSupplyInterestAccrued": "1.5",
                "underlyingPrice": "1.01",
            }
        )
        assert position.address == "0xcdai"
        assert position.name == "Dai"
        assert position.symbol == "DAI"
        assert position.underlying_balance_native_value == "250.50"
        assert position.lifetime_supply_interest_accrued == "1.5"
        assert position.underlying_price == "1.01"

    def test_optional_amounts_stay_none(self) -> None:
        position = parse_savings_position({"address": "0xc"})
        assert position.underlying_balance_native_value is None
        assert position.lifetime_supply_interest_accrued is None
        assert position.underlying_price == "0"

    def test_missing_address(self) -> None:
        with pytest.raises(MalformedAsset):
            parse_savings_position({"underlying": {"name": "Dai"}})


class TestParsePool:
    def test_parses(self) -> None:
        pool = parse_pool({"address": "0xp", "tokenSymbol": "ETH-DAI", "totalNativeValue": "10"})
        assert pool.address == "0xp"
        assert pool.name == "ETH-DAI"
        assert pool.total_native_value == "10"

    def test_missing_address(self) -> None:
        with pytest.raises(MalformedAsset):
            parse_pool({"totalNativeValue": "10"})


class TestParseCollectible:
    def test_family_from_asset_contract(self) -> None:
        token = parse_collectible(
            {
                "uniqueId": "punk-1",
                "image_preview_url": "https://img/p1.png",
                "asset_contract": {
                    "address": "0xpunks",
                    "name": "CryptoPunks",
                    "image_url": "https://img/punks.png",
                },
            }
        )
        assert token.family_id == "0xpunks"
        assert token.family_name == "CryptoPunks"
        assert token.family_image == "https://img/punks.png"
        assert token.image_preview_url == "https://img/p1.png"

    def test_explicit_family_fields_win(self) -> None:
        token = parse_collectible(
            {
                "uniqueId": "a",
                "familyId": "fam",
                "familyName": "Family",
                "asset_contract": {"address": "0xother", "name": "Other"},
            }
        )
        assert token.family_id == "fam"
        assert token.family_name == "Family"

    def test_missing_unique_id(self) -> None:
        with pytest.raises(MalformedAsset):
            parse_collectible({"familyId": "fam"})


# ---------------------------------------------------------------------------
# Full snapshot
# ---------------------------------------------------------------------------


class TestParseState:
    def test_camel_case_snapshot(self) -> None:
        state = parse_state(
            {
                "nativeCurrency": "eur",
                "network": "goerli",
                "isCoinListEdited": True,
                "pinnedCoins": ["uni"],
                "hiddenCoins": ["dai"],
                "showcaseTokens": ["punk-1"],
                "allAssets": [{"uniqueId": "eth", "native_value": "1"}],
                "uniqueTokens": [{"uniqueId": "punk-1", "familyId": "punks"}],
            }
        )
        assert state.native_currency == "EUR"
        assert state.network is NetworkType.GOERLI
        assert state.is_coin_list_edited is True
        assert state.pinned_coins == ("uni",)
        assert state.hidden_coins == ("dai",)
        assert state.showcase_tokens == ("punk-1",)
        assert [a.unique_id for a in state.all_assets] == ["eth"]
        assert [t.unique_id for t in state.unique_tokens] == ["punk-1"]

    def test_defaults(self) -> None:
        state = parse_state({})
        assert state.all_assets == ()
        assert state.network is NetworkType.MAINNET
        assert state.native_currency == "USD"
        assert state.language == "en"

    def test_display_defaults(self) -> None:
        state = parse_state({}, native_currency="EUR", language="fr")
        assert state.native_currency == "EUR"
        assert state.language == "fr"
        assert parse_state({"nativeCurrency": "gbp"}, native_currency="EUR").native_currency == "GBP"

    def test_unknown_network(self) -> None:
        with pytest.raises(ValueError, match="Unknown network"):
            parse_state({"network": "moonnet"})

    def test_unsupported_currency(self) -> None:
        with pytest.raises(UnsupportedCurrency, match="CHF"):
            parse_state({"nativeCurrency": "CHF"})

    def test_unsupported_default_currency(self) -> None:
        with pytest.raises(UnsupportedCurrency):
            parse_state({}, native_currency="XYZ")

    @pytest.mark.parametrize(
        "raw, expected",
        [("false", False), ("False", False), ("0", False), ("true", True), ("yes", True)],
    )
    def test_string_flags(self, raw: str, expected: bool) -> None:
        state = parse_state({"isCoinListEdited": raw, "isLoadingAssets": raw})
        assert state.is_coin_list_edited is expected
        assert state.is_loading_assets is expected

    def test_non_boolean_flag_rejected(self) -> None:
        with pytest.raises(ValueError, match="isLoadingAssets"):
            parse_state({"isLoadingAssets": "maybe"})
        with pytest.raises(ValueError, match="isCoinListEdited"):
            parse_state({"isCoinListEdited": 2})
