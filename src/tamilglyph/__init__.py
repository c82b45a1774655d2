"""
Unicode Tamil to legacy 8-bit glyph font converter.
"""

import threading
from typing import Optional

from .engine import (
    MarkKind, Vowel, Consonant, SeparateEntity, ComposedEntity, SpecialEntity, Other,
    Transliterator, GlyphLookupError, match_entity, segment
)
from .utils.config import Config, get_config

__version__ = "0.1.0"

_default_transliterator: Optional[Transliterator] = None
_default_lock = threading.Lock()


def get_transliterator() -> Transliterator:
    """Get the shared transliterator built from the packaged tables."""
    global _default_transliterator
    with _default_lock:
        if _default_transliterator is None:
            _default_transliterator = Transliterator()
    return _default_transliterator


def convert(text: str) -> str:
    """Convert Unicode Tamil text to the legacy glyph font encoding."""
    return get_transliterator().transliterate(text)
