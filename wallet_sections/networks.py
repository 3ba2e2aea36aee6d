"""Network identifiers."""
from __future__ import annotations

from enum import Enum


class NetworkType(str, Enum):
    MAINNET = "mainnet"
    ROPSTEN = "ropsten"
    KOVAN = "kovan"
    RINKEBY = "rinkeby"
    GOERLI = "goerli"


def supports_savings(network: NetworkType | str) -> bool:
    """Savings positions only exist on mainnet."""
    return NetworkType(network) is NetworkType.MAINNET


__all__ = ["NetworkType", "supports_savings"]
