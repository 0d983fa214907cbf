"""Data models for MIME message composition"""

from .options import FlowedOptions
from .params import MimeParams, TransferEncoding

__all__ = [
    "FlowedOptions",
    "MimeParams",
    "TransferEncoding",
]
