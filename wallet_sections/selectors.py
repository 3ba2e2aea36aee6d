"""Wallet section selectors — both published views wired into one graph."""
from __future__ import annotations

import logging
from functools import partial

from .builders.coins import build_coins_list
from .builders.collectibles import build_unique_token_list
from .cells import Cell
from .config import AppConfig
from .graph import DerivationGraph
from .interfaces.preload_sink import PreloadSink
from .models import WalletSections, WalletState
from .preload.prioritizer import ImagePreloader, PreloadSession
from .preload.sink import LoggingPreloadSink
from .sections import brief, full
from .sections.totals import pools_total

logger = logging.getLogger(__name__)

STATE_FIELDS = (
    "all_assets",
    "savings",
    "uniswap",
    "unique_tokens",
    "showcase_tokens",
    "native_currency",
    "network",
    "is_coin_list_edited",
    "pinned_coins",
    "hidden_coins",
    "is_loading_assets",
    "language",
)

SECTIONS_NODE = "wallet_sections"
BRIEF_NODE = "brief_wallet_sections"
SMALL_BALANCES_NODE = "small_balances_value"


def build_wallet_graph(
    config: AppConfig, preloader: ImagePreloader | None = None
) -> DerivationGraph:
    """Declare the state sources, shared nodes and both view trees."""
    graph = DerivationGraph()
    for name in STATE_FIELDS:
        graph.source(name)

    # Shared leaves
    graph.node("uniswap_total", ["uniswap"], pools_total)
    graph.node(
        "unique_token_families",
        ["unique_tokens", "showcase_tokens"],
        partial(
            build_unique_token_list,
            tokens_per_row=config.collectibles.tokens_per_row,
            showcase_family_name=config.collectibles.showcase_family_name,
        ),
    )
    graph.node(
        "balance_savings_section", ["savings"], full.with_balance_savings_section
    )

    # Structured view
    graph.node(
        "uniswap_section",
        ["language", "native_currency", "uniswap", "uniswap_total"],
        full.with_uniswap_section,
    )
    graph.node(
        "balance_section",
        [
            "all_assets",
            "balance_savings_section",
            "is_loading_assets",
            "language",
            "native_currency",
            "network",
            "is_coin_list_edited",
            "pinned_coins",
            "hidden_coins",
            "uniswap_total",
        ],
        partial(full.with_balance_section, config=config),
    )
    graph.node(
        "unique_token_families_section",
        ["language", "unique_tokens", "unique_token_families"],
        partial(full.with_unique_token_families_section, preloader=preloader),
    )
    graph.node(
        SECTIONS_NODE,
        ["balance_section", "unique_token_families_section", "uniswap_section"],
        full.build_wallet_sections,
    )

    # Brief view
    graph.node(
        "brief_balance_section",
        [
            "all_assets",
            "is_loading_assets",
            "native_currency",
            "is_coin_list_edited",
            "pinned_coins",
            "hidden_coins",
            "balance_savings_section",
            "uniswap_total",
        ],
        partial(brief.with_brief_balance_section, config=config),
    )
    graph.node(
        "brief_balance_savings_section",
        ["balance_savings_section", "network", "native_currency"],
        brief.with_brief_balance_savings_section,
    )
    graph.node(
        "brief_uniswap_section",
        ["uniswap", "uniswap_total", "native_currency"],
        brief.with_brief_uniswap_section,
    )
    graph.node(
        "brief_unique_token_families_section",
        ["unique_tokens", "unique_token_families"],
        partial(brief.with_brief_unique_token_families_section, preloader=preloader),
    )
    graph.node(
        BRIEF_NODE,
        [
            "brief_balance_section",
            "brief_balance_savings_section",
            "brief_uniswap_section",
            "brief_unique_token_families_section",
        ],
        brief.build_brief_wallet_sections,
    )

    graph.node(
        SMALL_BALANCES_NODE,
        [
            "all_assets",
            "native_currency",
            "is_coin_list_edited",
            "pinned_coins",
            "hidden_coins",
        ],
        lambda assets, currency, edited, pinned, hidden: build_coins_list(
            assets,
            currency,
            edited,
            pinned,
            hidden,
            small_balance_ratio=config.coins.small_balance_ratio,
        ).small_balances_value,
    )
    return graph


class WalletSectionsBuilder:
    """Publishes the structured and brief wallet views for state snapshots.

    The preload session is injected so several builders (or a rebuilt one)
    can share the once-per-process preload gate.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        sink: PreloadSink | None = None,
        session: PreloadSession | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self.session = session or PreloadSession()
        self._preloader = ImagePreloader(
            sink or LoggingPreloadSink(), self.session, self._config.preload
        )
        self.graph = build_wallet_graph(self._config, self._preloader)
        logger.debug("Wallet graph declared with %d nodes", len(self.graph.names))

    def sections(self, state: WalletState) -> WalletSections:
        """Structured view: ``{is_empty, sections}``."""
        return self.graph.evaluate(SECTIONS_NODE, state)

    def brief(self, state: WalletState) -> tuple[Cell, ...]:
        """Flat cell list, starting with the assets header."""
        return self.graph.evaluate(BRIEF_NODE, state)

    def small_balances_value(self, state: WalletState) -> str:
        return self.graph.evaluate(SMALL_BALANCES_NODE, state)


__all__ = [
    "BRIEF_NODE",
    "SECTIONS_NODE",
    "SMALL_BALANCES_NODE",
    "STATE_FIELDS",
    "WalletSectionsBuilder",
    "build_wallet_graph",
]
