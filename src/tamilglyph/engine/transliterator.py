"""
Glyph transliteration engine.
Maps segmented Tamil entities to the code points of an 8-bit glyph font,
reordering vowel signs into visual order.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .segmenter import (
    CONSONANTS, NON_RIDING_MARKS, RIDING_MARKS, SPECIAL_TOKENS, VOWELS,
    ComposedEntity, Consonant, Entity, MarkKind, Other, SeparateEntity,
    SpecialEntity, Vowel, segment,
)
from ..utils.config import Config, get_config

logger = logging.getLogger(__name__)


class GlyphLookupError(LookupError):
    """A segmented entity has no glyph in the loaded tables."""


class Transliterator:
    """
    Convert Unicode Tamil into a legacy glyph font encoding.
    Letters and riding ligatures map 1:1; other vowel signs are split into
    prefix and suffix glyphs placed around the consonant.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize transliterator with the font's glyph tables.

        Args:
            config: Configuration to read tables from (global config if None)

        Raises:
            ValueError: If the tables do not cover every entity the
                segmenter can produce
        """
        self.config = config or get_config()
        self._load_mappings()

        missing = self.validate_tables()
        if missing:
            logger.warning("Glyph tables in %s are incomplete", self.config.config_dir)
            raise ValueError(f"Incomplete glyph tables: {', '.join(missing)}")

    def _load_mappings(self):
        """Load glyph mappings from configuration."""
        glyphs = self.config.glyphs

        # Vowels, aytham and bare consonants
        self.letter_map: Dict[str, str] = dict(glyphs.get('letters') or {})

        # (consonant, riding mark) -> ligature glyph
        self.pair_map: Dict[Tuple[str, str], str] = {}
        for mark, ligatures in (glyphs.get('riding_marks') or {}).items():
            for consonant, glyph in (ligatures or {}).items():
                self.pair_map[(consonant, mark)] = glyph

        # Non-riding mark -> (prefix, suffix) placed around the consonant
        self.mark_templates: Dict[str, Tuple[str, str]] = {}
        # Malformed templates keep a None kind so validation reports them
        self.mark_kinds: Dict[str, Optional[MarkKind]] = {}
        for mark, template in (glyphs.get('non_riding_marks') or {}).items():
            if not isinstance(template, dict):
                template = {}
            self.mark_kinds[mark] = self._parse_kind(template.get('kind'))
            self.mark_templates[mark] = (template.get('prefix') or '', template.get('suffix') or '')

        self.special_map: Dict[str, str] = dict(glyphs.get('special_tokens') or {})

        logger.debug(
            "Built glyph tables: %d letters, %d ligatures, %d mark templates",
            len(self.letter_map), len(self.pair_map), len(self.mark_templates)
        )

    def transliterate(self, text: str) -> str:
        """
        Convert Unicode text to the legacy font encoding.

        Args:
            text: Input text, Tamil mixed with anything else

        Returns:
            Glyph-encoded text; non-Tamil characters are kept as they are
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")

        return ''.join(self.transliterate_entity(entity) for entity in segment(text))

    def transliterate_entity(self, entity: Entity) -> str:
        """
        Emit the glyphs for one entity in visual order.

        Args:
            entity: Entity produced by the segmenter

        Returns:
            Zero or more glyph code points
        """
        if isinstance(entity, (Vowel, Consonant)):
            return self._letter_glyph(entity.letter)

        if isinstance(entity, SeparateEntity):
            glyph = self.pair_map.get((entity.consonant, entity.mark))
            if glyph is None:
                raise GlyphLookupError(
                    f"No ligature for {entity.consonant!r} + U+{ord(entity.mark):04X}"
                )
            return glyph

        if isinstance(entity, ComposedEntity):
            if self.mark_kinds.get(entity.mark) is not entity.kind:
                raise GlyphLookupError(
                    f"Vowel sign U+{ord(entity.mark):04X} is not {entity.kind.value}"
                )
            return self._reorder(self._letter_glyph(entity.consonant), entity.mark)

        if isinstance(entity, SpecialEntity):
            glyph = self.special_map.get(entity.token)
            if glyph is None:
                raise GlyphLookupError(f"No glyph for token {entity.token!r}")
            return glyph

        if isinstance(entity, Other):
            return entity.char

        raise TypeError(f"Not an entity: {entity!r}")

    def _letter_glyph(self, letter: str) -> str:
        """Look up the glyph of a single vowel or consonant letter."""
        glyph = self.letter_map.get(letter)
        if glyph is None:
            raise GlyphLookupError(f"No glyph for letter {letter!r}")
        return glyph

    def _reorder(self, consonant_glyph: str, mark: str) -> str:
        """
        Place a non-riding vowel sign around a consonant glyph.

        Preceding signs become a prefix, following signs a suffix, and the
        two-part signs (o, oo, au) both.
        """
        template = self.mark_templates.get(mark)
        if template is None:
            raise GlyphLookupError(f"No glyph template for vowel sign U+{ord(mark):04X}")
        prefix, suffix = template
        return prefix + consonant_glyph + suffix

    def validate_tables(self) -> List[str]:
        """
        Check the loaded tables against the segmenter's character classes.

        Returns:
            Descriptions of every missing entry (empty if complete)
        """
        missing = []

        for letter in sorted(VOWELS | CONSONANTS):
            if letter not in self.letter_map:
                missing.append(f"letter {letter}")

        for mark in sorted(RIDING_MARKS):
            for consonant in sorted(CONSONANTS):
                if (consonant, mark) not in self.pair_map:
                    missing.append(f"ligature {consonant}+U+{ord(mark):04X}")

        for mark, kind in sorted(NON_RIDING_MARKS.items()):
            if mark not in self.mark_templates:
                missing.append(f"template U+{ord(mark):04X}")
            elif self.mark_kinds[mark] is not kind:
                missing.append(f"template U+{ord(mark):04X} ({kind.value})")
            elif not self._template_matches_kind(self.mark_templates[mark], kind):
                missing.append(f"template U+{ord(mark):04X} affixes")

        for token in SPECIAL_TOKENS:
            if token not in self.special_map:
                missing.append(f"token {token}")

        return missing

    @staticmethod
    def _parse_kind(value) -> Optional[MarkKind]:
        try:
            return MarkKind(value)
        except (ValueError, TypeError):
            return None

    @staticmethod
    def _template_matches_kind(template: Tuple[str, str], kind: MarkKind) -> bool:
        prefix, suffix = template
        if kind is MarkKind.FOLLOWING:
            return not prefix and bool(suffix)
        if kind is MarkKind.PRECEDING:
            return bool(prefix) and not suffix
        return bool(prefix) and bool(suffix)

    def get_coverage_stats(self, text: str) -> dict:
        """
        Get statistics on table coverage for debugging.

        Args:
            text: Input text

        Returns:
            Dictionary with entity counts and the share of characters
            converted through the glyph tables
        """
        counts = Counter()
        converted_chars = 0
        for entity in segment(text):
            counts[type(entity).__name__] += 1
            if not isinstance(entity, Other):
                converted_chars += len(entity.source)

        total_chars = len(text)
        return {
            'total_characters': total_chars,
            'entity_counts': dict(counts),
            'converted_characters': converted_chars,
            'passthrough_characters': total_chars - converted_chars,
            'tamil_coverage': converted_chars / max(1, total_chars) * 100,
        }
