"""Pure parsing functions for raw wallet state — no I/O.

Raw payloads come from the data-fetch layer and may use either camelCase
(``uniqueId``) or snake_case (``unique_id``) keys. Nested native values
follow the ``native.balance.amount`` shape of the balances API.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .arithmetic import to_amount_string, to_decimal
from .currency import get_native_currency
from .errors import MalformedAsset
from .models import Asset, Collectible, Pool, SavingsPosition, WalletState
from .networks import NetworkType


def _get(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key among *keys*."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _amount(value: Any, default: str | None = "0") -> str | None:
    """Validate an amount and normalize it to a canonical decimal string."""
    if value is None:
        return default
    return to_amount_string(to_decimal(value))


def _require_id(raw: Mapping[str, Any], kind: str, *keys: str) -> str:
    value = _get(raw, *keys)
    if not isinstance(value, str) or not value:
        raise MalformedAsset(f"{kind} is missing '{keys[0]}': {dict(raw)!r}")
    return value


_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def _flag(raw: Mapping[str, Any], *keys: str) -> bool:
    """Read a boolean flag; string spellings such as ``"false"`` are parsed."""
    value = _get(raw, *keys, default=False)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"'{keys[0]}' must be a boolean, got {value!r}")


def get_native_value(raw: Mapping[str, Any]) -> Any:
    """Extract the native-currency value from a raw asset.

    Examples:
        {"native": {"balance": {"amount": "12.5"}}} → "12.5"
        {"native_value": "12.5"} → "12.5"
    """
    native = raw.get("native")
    if isinstance(native, Mapping):
        balance = native.get("balance")
        if isinstance(balance, Mapping):
            return balance.get("amount")
    return _get(raw, "native_value", "nativeValue")


def get_balance(raw: Mapping[str, Any]) -> Any:
    balance = raw.get("balance")
    if isinstance(balance, Mapping):
        return balance.get("amount")
    return balance


def parse_asset(raw: Mapping[str, Any]) -> Asset:
    """Parse a raw token balance."""
    unique_id = _require_id(raw, "Asset", "uniqueId", "unique_id")
    native = raw.get("native")
    change = native.get("change") if isinstance(native, Mapping) else None
    return Asset(
        unique_id=unique_id,
        name=_get(raw, "name", default=""),
        symbol=_get(raw, "symbol", default=""),
        balance=_amount(get_balance(raw)),
        native_value=_amount(get_native_value(raw)),
        price_change=change or _get(raw, "price_change", "priceChange"),
    )


def parse_savings_position(raw: Mapping[str, Any]) -> SavingsPosition:
    """Parse a raw savings position; the identity is the cToken address."""
    ctoken = raw.get("cToken")
    address = ctoken.get("address") if isinstance(ctoken, Mapping) else None
    if not address:
        address = _require_id(raw, "Savings position", "address")
    underlying = raw.get("underlying")
    underlying = underlying if isinstance(underlying, Mapping) else {}
    return SavingsPosition(
        address=address,
        name=_get(underlying, "name", default=_get(raw, "name", default="")),
        symbol=_get(underlying, "symbol", default=_get(raw, "symbol", default="")),
        underlying_balance_native_value=_amount(
            _get(
                raw,
                "underlyingBalanceNativeValue",
                "underlying_balance_native_value",
            ),
            default=None,
        ),
        lifetime_supply_interest_accrued=_amount(
            _get(
                raw,
                "lifetimeSupplyInterestAccrued",
                "lifetime_supply_interest_accrued",
            ),
            default=None,
        ),
        underlying_price=_amount(
            _get(raw, "underlyingPrice", "underlying_price")
        ),
    )


def parse_pool(raw: Mapping[str, Any]) -> Pool:
    """Parse a raw liquidity-pool position."""
    return Pool(
        address=_require_id(raw, "Pool", "address"),
        name=_get(raw, "name", "tokenSymbol", default=""),
        total_native_value=_amount(
            _get(raw, "totalNativeValue", "total_native_value")
        ),
    )


def parse_collectible(raw: Mapping[str, Any]) -> Collectible:
    """Parse a raw collectible; family fields may sit under ``asset_contract``."""
    contract = raw.get("asset_contract")
    contract = contract if isinstance(contract, Mapping) else {}
    family_name = _get(raw, "familyName", "family_name", default="") or _get(
        contract, "name", default=""
    )
    return Collectible(
        unique_id=_require_id(raw, "Collectible", "uniqueId", "unique_id"),
        name=_get(raw, "name", default=""),
        family_id=_get(raw, "familyId", "family_id", default="")
        or _get(contract, "address", default=""),
        family_name=family_name,
        family_image=_get(raw, "familyImage", "family_image")
        or _get(contract, "image_url"),
        image_preview_url=_get(raw, "image_preview_url", "imagePreviewUrl"),
    )


def parse_state(
    raw: Mapping[str, Any],
    *,
    native_currency: str = "USD",
    language: str = "en",
) -> WalletState:
    """Build a WalletState snapshot from a raw mapping.

    ``native_currency`` and ``language`` fill in for a snapshot that omits them.
    """
    network = _get(raw, "network", default=NetworkType.MAINNET.value)
    try:
        network_type = NetworkType(network)
    except ValueError as e:
        raise ValueError(f"Unknown network '{network}'") from e
    currency = get_native_currency(
        _get(raw, "nativeCurrency", "native_currency", default=native_currency)
    )

    return WalletState(
        all_assets=tuple(
            parse_asset(a) for a in _get(raw, "allAssets", "all_assets", default=[])
        ),
        savings=tuple(
            parse_savings_position(s) for s in _get(raw, "savings", default=[])
        ),
        uniswap=tuple(parse_pool(p) for p in _get(raw, "uniswap", default=[])),
        unique_tokens=tuple(
            parse_collectible(t)
            for t in _get(raw, "uniqueTokens", "unique_tokens", default=[])
        ),
        showcase_tokens=tuple(
            _get(raw, "showcaseTokens", "showcase_tokens", default=[])
        ),
        native_currency=currency.code,
        network=network_type,
        is_coin_list_edited=_flag(raw, "isCoinListEdited", "is_coin_list_edited"),
        pinned_coins=tuple(_get(raw, "pinnedCoins", "pinned_coins", default=[])),
        hidden_coins=tuple(_get(raw, "hiddenCoins", "hidden_coins", default=[])),
        is_loading_assets=_flag(raw, "isLoadingAssets", "is_loading_assets"),
        language=_get(raw, "language", default=language),
    )


__all__ = [
    "get_balance",
    "get_native_value",
    "parse_asset",
    "parse_collectible",
    "parse_pool",
    "parse_savings_position",
    "parse_state",
]
