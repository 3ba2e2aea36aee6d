"""Protocol interfaces for the wallet section builder."""
from .preload_sink import PreloadSink

__all__ = ["PreloadSink"]
