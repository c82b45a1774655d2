# src/tamilglyph/engine/__init__.py
from .segmenter import (
    MarkKind, Vowel, Consonant, SeparateEntity, ComposedEntity, SpecialEntity, Other,
    match_entity, segment
)

from .transliterator import Transliterator, GlyphLookupError
