"""Collectible family builders."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..cells import Cell, FamilyHeaderCell, NftCell, NftsHeaderCell
from ..errors import MalformedAsset
from ..models import Collectible, Family

SHOWCASE_FAMILY_ID = "showcase"
DEFAULT_TOKENS_PER_ROW = 2


def chunk_tokens(
    tokens: Sequence[Collectible], tokens_per_row: int
) -> tuple[tuple[Collectible, ...], ...]:
    """Split tokens into display rows of ``tokens_per_row``, keeping order."""
    if tokens_per_row < 1:
        raise ValueError("tokens_per_row must be at least 1")
    return tuple(
        tuple(tokens[i : i + tokens_per_row])
        for i in range(0, len(tokens), tokens_per_row)
    )


def group_by_family(
    unique_tokens: Iterable[Collectible],
) -> dict[str, list[Collectible]]:
    """Group tokens by family key, families in order of first occurrence."""
    grouped: dict[str, list[Collectible]] = {}
    for token in unique_tokens:
        if not getattr(token, "unique_id", None):
            raise MalformedAsset(f"Collectible is missing 'unique_id': {token!r}")
        grouped.setdefault(token.family_key, []).append(token)
    return grouped


def build_unique_token_list(
    unique_tokens: Sequence[Collectible],
    showcase_tokens: Iterable[str] | None = (),
    *,
    tokens_per_row: int = DEFAULT_TOKENS_PER_ROW,
    showcase_family_name: str = "Showcase",
) -> tuple[Family, ...]:
    """Group collectibles into families.

    A synthetic showcase family with the showcased tokens comes first when
    any token is showcased; the showcased tokens also stay in their own
    family. Other families keep the order of their first token.
    """
    grouped = group_by_family(unique_tokens)
    families: list[Family] = []

    showcase_ids = frozenset(showcase_tokens or ())
    showcased = [t for t in unique_tokens if t.unique_id in showcase_ids]
    if showcased:
        families.append(
            Family(
                family_id=SHOWCASE_FAMILY_ID,
                family_name=showcase_family_name,
                family_image=None,
                rows=chunk_tokens(showcased, tokens_per_row),
                is_showcase=True,
            )
        )

    for key, tokens in grouped.items():
        first = tokens[0]
        families.append(
            Family(
                family_id=key,
                family_name=first.family_name or key,
                family_image=first.family_image,
                rows=chunk_tokens(tokens, tokens_per_row),
            )
        )
    return tuple(families)


def families_to_cells(families: Iterable[Family]) -> list[Cell]:
    """Flatten families into FAMILY_HEADER and NFT cells.

    Showcase cells get their own uid namespace, so a real family keyed
    ``"showcase"`` cannot collide with the synthetic one.
    """
    cells: list[Cell] = []
    for family in families:
        cells.append(
            FamilyHeaderCell(
                family_id=family.family_id,
                name=family.family_name,
                total=family.child_count,
                image=family.family_image,
                showcase=family.is_showcase,
            )
        )
        for row in family.rows:
            cells.append(
                NftCell(
                    family_id=family.family_id,
                    unique_ids=tuple(token.unique_id for token in row),
                    showcase=family.is_showcase,
                )
            )
    return cells


def build_brief_unique_token_list(
    unique_tokens: Sequence[Collectible],
    showcase_tokens: Iterable[str] | None = (),
    *,
    tokens_per_row: int = DEFAULT_TOKENS_PER_ROW,
    showcase_family_name: str = "Showcase",
) -> tuple[Cell, ...]:
    """NFTS_HEADER followed by each family's header and rows; empty if none."""
    families = build_unique_token_list(
        unique_tokens,
        showcase_tokens,
        tokens_per_row=tokens_per_row,
        showcase_family_name=showcase_family_name,
    )
    if not families:
        return ()
    return (NftsHeaderCell(), *families_to_cells(families))


__all__ = [
    "DEFAULT_TOKENS_PER_ROW",
    "SHOWCASE_FAMILY_ID",
    "build_brief_unique_token_list",
    "build_unique_token_list",
    "chunk_tokens",
    "families_to_cells",
    "group_by_family",
]
