"""Collectible image preloading."""
from .prioritizer import ImagePreloader, PreloadSession, build_images_to_preload
from .sink import HttpImagePreloader, LoggingPreloadSink

__all__ = [
    "HttpImagePreloader",
    "ImagePreloader",
    "LoggingPreloadSink",
    "PreloadSession",
    "build_images_to_preload",
]
