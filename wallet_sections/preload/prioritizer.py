"""Collectible image preload prioritization and the one-shot session gate."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..config import PreloadConfig
from ..errors import PreloadSinkUnavailable
from ..interfaces.preload_sink import PreloadSink
from ..models import Family, PreloadPriority, PreloadRequest

logger = logging.getLogger(__name__)

LARGE_FAMILY_THRESHOLD = 4
MIN_TOP_FOLD_THRESHOLD = 10


def row_priority(
    row_index: int,
    *,
    is_top_fold: bool,
    is_large: bool,
    is_jumbo: bool,
    large_family_threshold: int = LARGE_FAMILY_THRESHOLD,
) -> PreloadPriority:
    """Priority of one token row of a family.

    Top-fold families load ``high``, the rest ``normal``. Rows of a large
    top-fold family past ``large_family_threshold`` drop to ``normal``, and
    for jumbo families rows past twice the threshold drop to ``low``.
    """
    if not is_top_fold:
        return PreloadPriority.NORMAL
    if not is_large or row_index <= large_family_threshold:
        return PreloadPriority.HIGH
    if is_jumbo and row_index > large_family_threshold * 2:
        return PreloadPriority.LOW
    return PreloadPriority.NORMAL


def build_family_preload_requests(
    family: Family,
    index: int,
    family_count: int,
    *,
    large_family_threshold: int = LARGE_FAMILY_THRESHOLD,
    min_top_fold_threshold: int = MIN_TOP_FOLD_THRESHOLD,
) -> list[PreloadRequest]:
    """Requests for every token image of one family, in row order."""
    row_count = len(family.rows)
    is_large = row_count > large_family_threshold
    is_jumbo = row_count >= large_family_threshold * 2
    is_top_fold = index < max(family_count / 2, min_top_fold_threshold)

    requests: list[PreloadRequest] = []
    for row_index, row in enumerate(family.rows):
        priority = row_priority(
            row_index,
            is_top_fold=is_top_fold,
            is_large=is_large,
            is_jumbo=is_jumbo,
            large_family_threshold=large_family_threshold,
        )
        for token in row:
            if not token.image_preview_url:
                continue
            requests.append(
                PreloadRequest(
                    id=token.unique_id,
                    uri=token.image_preview_url,
                    priority=priority,
                )
            )
    return requests


def sort_images_to_preload(
    requests: Sequence[PreloadRequest],
) -> list[PreloadRequest]:
    """Stable three-bucket ordering: high, then normal, then low."""
    buckets: dict[PreloadPriority, list[PreloadRequest]] = {
        PreloadPriority.HIGH: [],
        PreloadPriority.NORMAL: [],
        PreloadPriority.LOW: [],
    }
    for request in requests:
        buckets[request.priority].append(request)
    return [
        *buckets[PreloadPriority.HIGH],
        *buckets[PreloadPriority.NORMAL],
        *buckets[PreloadPriority.LOW],
    ]


def build_images_to_preload(
    families: Sequence[Family],
    *,
    large_family_threshold: int = LARGE_FAMILY_THRESHOLD,
    min_top_fold_threshold: int = MIN_TOP_FOLD_THRESHOLD,
) -> list[PreloadRequest]:
    """Single priority-ordered preload queue for all families.

    A showcased token also sits in its own family; only its first,
    highest-tier request is kept.
    """
    discovered: list[PreloadRequest] = []
    for index, family in enumerate(families):
        discovered.extend(
            build_family_preload_requests(
                family,
                index,
                len(families),
                large_family_threshold=large_family_threshold,
                min_top_fold_threshold=min_top_fold_threshold,
            )
        )
    seen: set[str] = set()
    queue: list[PreloadRequest] = []
    for request in sort_images_to_preload(discovered):
        if request.id in seen:
            continue
        seen.add(request.id)
        queue.append(request)
    return queue


@dataclass
class PreloadSession:
    """Process-wide preload gate: starts unissued and is never reset."""

    issued: bool = False


class ImagePreloader:
    """Issues the collectible preload batch at most once per session."""

    def __init__(
        self,
        sink: PreloadSink,
        session: PreloadSession | None = None,
        config: PreloadConfig | None = None,
    ) -> None:
        self._sink = sink
        self.session = session or PreloadSession()
        self._config = config or PreloadConfig()

    def preload_once(self, families: Sequence[Family]) -> bool:
        """Send the preload queue to the sink unless the session already did.

        Returns True if this call issued the batch. Sink errors are logged
        and never propagate.
        """
        if self.session.issued:
            return False

        queue = build_images_to_preload(
            families,
            large_family_threshold=self._config.large_family_threshold,
            min_top_fold_threshold=self._config.min_top_fold_threshold,
        )
        if not queue:
            return False

        # Set before calling out so a concurrent derivation skips the burst.
        self.session.issued = True
        try:
            self._sink.preload(queue, self._config.batch_size)
        except PreloadSinkUnavailable as e:
            logger.warning("Image preload sink unavailable: %s", e)
        except Exception as e:
            logger.error("Image preload failed: %s", e)
        else:
            logger.info(
                "Issued preload of %d collectible images across %d families",
                len(queue),
                len(families),
            )
        return True


__all__ = [
    "ImagePreloader",
    "LARGE_FAMILY_THRESHOLD",
    "MIN_TOP_FOLD_THRESHOLD",
    "PreloadSession",
    "build_family_preload_requests",
    "build_images_to_preload",
    "row_priority",
    "sort_images_to_preload",
]
