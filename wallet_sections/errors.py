"""Exception hierarchy for the wallet section builder."""
from __future__ import annotations


class WalletSectionsError(Exception):
    """Base class for every error raised by this package."""


class InvalidAmount(WalletSectionsError, ValueError):
    """A decimal amount is not a plain base-10 number."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid decimal amount: {value!r}")
        self.value = value


class MalformedAsset(WalletSectionsError, ValueError):
    """An input entity is missing its identity or duplicates another one."""


class PreloadSinkUnavailable(WalletSectionsError, RuntimeError):
    """The image preload sink cannot accept a batch."""


class GraphError(WalletSectionsError, RuntimeError):
    """The derivation graph was declared or queried incorrectly."""


class ConfigError(WalletSectionsError, ValueError):
    """Configuration values are out of range."""


class UnsupportedCurrency(WalletSectionsError, ValueError):
    """A native currency code has no display settings."""

    def __init__(self, code: object) -> None:
        super().__init__(f"Unsupported native currency: {code!r}")
        self.code = code
