"""Wallet section and list builder."""
from .arithmetic import add, multiply
from .cells import Cell, CellType
from .config import AppConfig, load_config
from .errors import (
    InvalidAmount,
    MalformedAsset,
    PreloadSinkUnavailable,
    WalletSectionsError,
)
from .models import WalletSections, WalletState
from .preload import PreloadSession
from .selectors import WalletSectionsBuilder

__all__ = [
    "AppConfig",
    "Cell",
    "CellType",
    "InvalidAmount",
    "MalformedAsset",
    "PreloadSession",
    "PreloadSinkUnavailable",
    "WalletSections",
    "WalletSectionsBuilder",
    "WalletSectionsError",
    "WalletState",
    "add",
    "load_config",
    "multiply",
]
