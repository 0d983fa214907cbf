"""Header field encoding."""

from .encoder import HeaderEncoder

__all__ = ["HeaderEncoder"]
