"""Utility functions"""

from .charset_utils import base_charset, charset_key

__all__ = ["base_charset", "charset_key"]
