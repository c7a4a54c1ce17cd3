"""Pixel buffer conversions."""

from .image import ImageCodec

__all__ = ["ImageCodec"]
