"""Section assemblers for the structured and brief views."""
from .brief import build_brief_wallet_sections
from .full import build_wallet_sections, filter_wallet_sections

__all__ = [
    "build_brief_wallet_sections",
    "build_wallet_sections",
    "filter_wallet_sections",
]
