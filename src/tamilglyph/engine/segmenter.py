"""
Tamil text segmenter.
Groups Unicode Tamil code points into the units a glyph font draws:
letters, consonant + vowel sign pairs and the ஸ்ரீ token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union


class MarkKind(Enum):
    """Visual placement of a vowel sign relative to its consonant."""
    RIDING = 'riding'
    PRECEDING = 'preceding'
    FOLLOWING = 'following'
    PRECEDING_AND_FOLLOWING = 'preceding_and_following'


# Independent vowels (uyir) and the aytham
VOWELS = frozenset('அஆஇஈஉஊஎஏஐஒஓஔஃ')

# Consonants (mei), Grantha letters included
CONSONANTS = frozenset('கஙசஜஞடணதநனபமயரறலளழவஶஷஸஹ')

VIRAMA = '்'

# Marks that change the consonant's own glyph: pulli, i, ii, u, uu
RIDING_MARKS = frozenset([VIRAMA, 'ி', 'ீ', 'ு', 'ூ'])

# Vowel signs drawn beside the consonant
NON_RIDING_MARKS: Dict[str, MarkKind] = {
    'ா': MarkKind.FOLLOWING,                # aa
    'ெ': MarkKind.PRECEDING,                # e
    'ே': MarkKind.PRECEDING,                # ee
    'ை': MarkKind.PRECEDING,                # ai
    'ொ': MarkKind.PRECEDING_AND_FOLLOWING,  # o
    'ோ': MarkKind.PRECEDING_AND_FOLLOWING,  # oo
    'ௌ': MarkKind.PRECEDING_AND_FOLLOWING,  # au
}

SRI = 'ஸ்ரீ'  # sa, pulli, ra, ii

SPECIAL_TOKENS = (SRI,)


@dataclass(frozen=True)
class Vowel:
    """An independent vowel letter."""
    letter: str

    @property
    def source(self) -> str:
        return self.letter


@dataclass(frozen=True)
class Consonant:
    """A bare consonant carrying its inherent vowel."""
    letter: str

    @property
    def source(self) -> str:
        return self.letter


@dataclass(frozen=True)
class SeparateEntity:
    """A consonant fused with a riding mark into one glyph."""
    consonant: str
    mark: str

    @property
    def source(self) -> str:
        return self.consonant + self.mark


@dataclass(frozen=True)
class ComposedEntity:
    """A consonant followed by a vowel sign drawn around it."""
    consonant: str
    kind: MarkKind
    mark: str

    @property
    def source(self) -> str:
        return self.consonant + self.mark


@dataclass(frozen=True)
class SpecialEntity:
    """A multi-letter token drawn as a single glyph."""
    token: str

    @property
    def source(self) -> str:
        return self.token


@dataclass(frozen=True)
class Other:
    """Anything else; passed through untouched."""
    char: str

    @property
    def source(self) -> str:
        return self.char


Entity = Union[Vowel, Consonant, SeparateEntity, ComposedEntity, SpecialEntity, Other]

Match = Optional[Tuple[Entity, int]]


def _match_special_token(text: str, pos: int) -> Match:
    for token in SPECIAL_TOKENS:
        if text.startswith(token, pos):
            return SpecialEntity(token), len(token)
    return None


def _match_separate(text: str, pos: int) -> Match:
    if text[pos] in CONSONANTS and pos + 1 < len(text) and text[pos + 1] in RIDING_MARKS:
        return SeparateEntity(text[pos], text[pos + 1]), 2
    return None


def _match_composed(text: str, pos: int) -> Match:
    if text[pos] in CONSONANTS and pos + 1 < len(text):
        kind = NON_RIDING_MARKS.get(text[pos + 1])
        if kind is not None:
            return ComposedEntity(text[pos], kind, text[pos + 1]), 2
    return None


def _match_vowel(text: str, pos: int) -> Match:
    if text[pos] in VOWELS:
        return Vowel(text[pos]), 1
    return None


def _match_consonant(text: str, pos: int) -> Match:
    if text[pos] in CONSONANTS:
        return Consonant(text[pos]), 1
    return None


# Tried in order; the first rule that matches wins
RULES: List[Callable[[str, int], Match]] = [
    _match_special_token,
    _match_separate,
    _match_composed,
    _match_vowel,
    _match_consonant,
]


def match_entity(text: str, pos: int = 0) -> Tuple[Entity, int]:
    """
    Match the single best entity at a position.

    Args:
        text: Input text
        pos: Index of the first unconsumed character

    Returns:
        Tuple of (entity, characters_consumed)
    """
    if not 0 <= pos < len(text):
        raise ValueError(f"Position {pos} is outside text of length {len(text)}")

    for rule in RULES:
        matched = rule(text, pos)
        if matched is not None:
            return matched

    # Digits, punctuation, other scripts and stray vowel signs
    return Other(text[pos]), 1


def segment(text: str) -> Iterator[Entity]:
    """
    Lazily split text into entities, greedy and left to right.

    Every character of the input ends up in exactly one entity, so joining
    the ``source`` of each yielded entity gives back the input.
    """
    pos = 0
    while pos < len(text):
        entity, consumed = match_entity(text, pos)
        yield entity
        pos += consumed
