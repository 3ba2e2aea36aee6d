"""List builders for coins and collectibles."""
from .coins import build_brief_coins_list, build_coins_list
from .collectibles import build_brief_unique_token_list, build_unique_token_list

__all__ = [
    "build_brief_coins_list",
    "build_brief_unique_token_list",
    "build_coins_list",
    "build_unique_token_list",
]
