"""Lexicon-driven descriptor extraction with intensity estimation."""

import logging
import re
from typing import Iterable, Optional

from flavorwheel.models.descriptor import DescriptorType, normalize_descriptor
from flavorwheel.schemas.descriptor import ExtractedDescriptor, StructuredNotes
from flavorwheel.services.keywords.lexicon import (
    ALIASES,
    CLAUSE_BREAKS,
    DEFAULT_INTENSITY,
    INTENSITY_MODIFIERS,
    LEXICON,
    MAX_PHRASE_WORDS,
    NEGATIONS,
    LexiconEntry,
)

logger = logging.getLogger(__name__)

_CLAUSE_SPLIT = re.compile(r"[.,;:!?()\n]+")
_WORD = re.compile(r"[a-z]+(?:'[a-z]+)?")

# Look-back distance for modifiers and negations
MODIFIER_WINDOW = 3


def _tokenize(clause: str) -> list[str]:
    return _WORD.findall(clause.lower().replace("-", " "))


def reduce_term(token: str) -> Optional[str]:
    """Map a token onto a lexicon term.

    Handles adjectival and plural forms: ``chocolatey`` -> ``chocolate``,
    ``nutty`` -> ``nut``, ``berries`` -> ``berry``.
    """
    if token in LEXICON:
        return token
    if token in ALIASES:
        return ALIASES[token]

    candidates = []
    if token.endswith("ies"):
        candidates.append(token[:-3] + "y")
    if token.endswith("es"):
        candidates.append(token[:-2])
    if token.endswith("s") and not token.endswith("ss"):
        candidates.append(token[:-1])
    if token.endswith("y"):
        candidates.append(token[:-1])
        # nutty -> nut
        if len(token) > 3 and token[-2] == token[-3]:
            candidates.append(token[:-2])

    for candidate in candidates:
        if candidate in LEXICON:
            return candidate
    return None


def _match_at(tokens: list[str], i: int) -> Optional[tuple[str, int]]:
    """Longest lexicon match starting at ``tokens[i]``.

    Returns:
        (term, number of tokens consumed), or None
    """
    for size in range(min(MAX_PHRASE_WORDS, len(tokens) - i), 1, -1):
        words = tokens[i:i + size]
        phrase = " ".join(words)
        if phrase in LEXICON:
            return phrase, size
        last = reduce_term(words[-1])
        if last:
            phrase = " ".join(words[:-1] + [last])
            if phrase in LEXICON:
                return phrase, size

    term = reduce_term(tokens[i])
    if term:
        return term, 1
    return None


def _modifier_context(tokens: list[str], start: int, boundary: int) -> tuple[bool, int]:
    """Scan the words before a match for negation and intensity modifiers.

    Returns:
        (negated, intensity delta)
    """
    negated = False
    delta = 0
    for j in range(start - 1, max(boundary, start - MODIFIER_WINDOW) - 1, -1):
        word = tokens[j]
        if word in CLAUSE_BREAKS:
            break
        if word in NEGATIONS:
            negated = True
        delta += INTENSITY_MODIFIERS.get(word, 0)
    return negated, delta


def _clamp(value: int) -> int:
    return max(0, min(10, value))


def _scan(text: str) -> Iterable[tuple[str, LexiconEntry, int]]:
    """Yield (term, lexicon entry, modifier intensity) for each non-negated match."""
    for clause in _CLAUSE_SPLIT.split(text):
        tokens = _tokenize(clause)
        i = 0
        boundary = 0
        while i < len(tokens):
            match = _match_at(tokens, i)
            if match is None:
                i += 1
                continue

            term, size = match
            negated, delta = _modifier_context(tokens, i, boundary)
            i += size
            boundary = i
            if negated:
                logger.debug("Skipping negated term '%s'", term)
                continue
            yield term, LEXICON[term], _clamp(DEFAULT_INTENSITY + delta)


def _collect(
    found: Iterable[ExtractedDescriptor],
    into: dict[tuple[str, DescriptorType], ExtractedDescriptor],
) -> None:
    # First mention of a (term, type) pair wins
    for descriptor in found:
        key = (normalize_descriptor(descriptor.text), descriptor.type)
        into.setdefault(key, descriptor)


def _descriptors_from(
    text: str,
    type_override: Optional[DescriptorType] = None,
    intensity_override: Optional[int] = None,
) -> list[ExtractedDescriptor]:
    descriptors = []
    for term, entry, intensity in _scan(text):
        descriptors.append(
            ExtractedDescriptor(
                text=term,
                type=type_override or entry.type,
                category=entry.category,
                subcategory=entry.subcategory,
                confidence=1.0,
                intensity=intensity if intensity_override is None else intensity_override,
            )
        )
    return descriptors


def extract_descriptors_with_intensity(text: Optional[str]) -> list[ExtractedDescriptor]:
    """Extract descriptors from free text.

    Each known lexicon term yields one descriptor typed by the lexicon.
    Intensity starts at 5 and is moved by nearby modifiers ("slightly",
    "very", "extremely"). Negated terms ("no smoke") are skipped.

    Args:
        text: Free-text tasting note

    Returns:
        Descriptors in order of first mention, one per (term, type)
    """
    if not text or not text.strip():
        return []

    unique: dict[tuple[str, DescriptorType], ExtractedDescriptor] = {}
    _collect(_descriptors_from(text), unique)
    return list(unique.values())


def extract_from_structured(notes: StructuredNotes) -> list[ExtractedDescriptor]:
    """Extract descriptors from per-field tasting notes.

    Terms found in a field take that field's type; ``other_notes`` keeps
    the lexicon type. A field's own intensity number replaces the
    modifier-derived estimate.

    Args:
        notes: Structured tasting notes

    Returns:
        Descriptors in field order, one per (term, type)
    """
    fields = [
        (notes.aroma_notes, DescriptorType.AROMA, notes.aroma_intensity),
        (notes.flavor_notes, DescriptorType.FLAVOR, notes.flavor_intensity),
        (notes.texture_notes, DescriptorType.TEXTURE, None),
        (notes.other_notes, None, None),
    ]

    unique: dict[tuple[str, DescriptorType], ExtractedDescriptor] = {}
    for text, descriptor_type, intensity in fields:
        if not text or not text.strip():
            continue
        _collect(_descriptors_from(text, descriptor_type, intensity), unique)
    return list(unique.values())
