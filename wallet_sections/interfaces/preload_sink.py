"""Preload sink protocol — image preloading abstraction."""
from collections.abc import Sequence
from typing import Protocol

from ..models import PreloadRequest


class PreloadSink(Protocol):
    """Accepts one priority-ordered batch of images to warm.

    ``preload`` must return without waiting for the fetches; raise
    ``PreloadSinkUnavailable`` when the batch cannot be scheduled.
    """

    def preload(self, requests: Sequence[PreloadRequest], batch_size: int) -> None: ...
