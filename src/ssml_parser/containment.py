"""Which SSML elements may contain which.

Pure predicates over tag kinds; attribute data is never consulted.  Custom
elements are permissive in both directions: they may contain anything, and
may appear inside any element that accepts child elements at all.

Spec reference: SSML 1.1, Sections 3.1.7-3.3 ("content model" notes).
"""

from __future__ import annotations

from .elements import CustomTag, SsmlTag, TagKind

_CONTAINERS = frozenset({
    SsmlTag.SPEAK,
    SsmlTag.PARAGRAPH,
    SsmlTag.SENTENCE,
    SsmlTag.VOICE,
    SsmlTag.EMPHASIS,
    SsmlTag.TOKEN,
    SsmlTag.WORD,
    SsmlTag.LANG,
    SsmlTag.PROSODY,
    SsmlTag.AUDIO,
})

_ALLOWED_IN_SENTENCE = frozenset({
    SsmlTag.AUDIO,
    SsmlTag.BREAK,
    SsmlTag.EMPHASIS,
    SsmlTag.LANG,
    SsmlTag.LOOKUP,
    SsmlTag.MARK,
    SsmlTag.PHONEME,
    SsmlTag.PROSODY,
    SsmlTag.SAY_AS,
    SsmlTag.SUB,
    SsmlTag.TOKEN,
    SsmlTag.VOICE,
    SsmlTag.WORD,
})

_ALLOWED_IN_PARAGRAPH = _ALLOWED_IN_SENTENCE | {SsmlTag.SENTENCE}

_ALLOWED_IN_TOKEN = frozenset({
    SsmlTag.AUDIO,
    SsmlTag.BREAK,
    SsmlTag.EMPHASIS,
    SsmlTag.MARK,
    SsmlTag.PHONEME,
    SsmlTag.PROSODY,
    SsmlTag.SAY_AS,
    SsmlTag.SUB,
})

# Everything except <speak> itself.
_OPEN_CONTAINERS = frozenset({SsmlTag.VOICE, SsmlTag.LANG, SsmlTag.PROSODY, SsmlTag.AUDIO})

_RESTRICTED: dict[SsmlTag, frozenset[SsmlTag]] = {
    SsmlTag.PARAGRAPH: _ALLOWED_IN_PARAGRAPH,
    SsmlTag.SENTENCE: _ALLOWED_IN_SENTENCE,
    SsmlTag.EMPHASIS: _ALLOWED_IN_SENTENCE,
    SsmlTag.TOKEN: _ALLOWED_IN_TOKEN,
    SsmlTag.WORD: _ALLOWED_IN_TOKEN,
}

# Text directly inside these is never spoken.
_NON_SYNTHESISABLE = frozenset({
    SsmlTag.DESCRIPTION,
    SsmlTag.METADATA,
    SsmlTag.MARK,
    SsmlTag.BREAK,
    SsmlTag.LEXICON,
    SsmlTag.META,
})


def can_contain_tags(kind: TagKind) -> bool:
    """Return True if *kind* may have child elements at all."""
    return isinstance(kind, CustomTag) or kind in _CONTAINERS


def can_contain(parent: TagKind, child: TagKind) -> bool:
    """Return True if *child* may appear directly inside *parent*."""
    if not can_contain_tags(parent):
        return False
    if isinstance(child, CustomTag):
        return True
    if child is SsmlTag.SPEAK:
        return False
    if isinstance(parent, CustomTag) or parent is SsmlTag.SPEAK or parent in _OPEN_CONTAINERS:
        return True
    return child in _RESTRICTED[parent]


def is_synthesisable(kind: TagKind) -> bool:
    """Return True if text directly inside *kind* is meant to be spoken."""
    return kind not in _NON_SYNTHESISABLE
