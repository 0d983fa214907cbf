"""Business logic services"""

from .charset import CharsetRegistry, CharsetTranscoder, default_registry
from .header import HeaderEncoder

__all__ = [
    "CharsetRegistry",
    "CharsetTranscoder",
    "HeaderEncoder",
    "default_registry",
]
