"""SSML element model.

Two parallel views of an element:

* the *tag kind* (:class:`SsmlTag` or :class:`CustomTag`) -- identity only,
  used for containment checks and for emitting tag names;
* the *parsed element* -- an immutable dataclass per tag kind carrying the
  element's typed attributes.

``element.kind`` projects a parsed element onto its tag kind without
looking at attribute data.

Spec reference: SSML 1.1, Sections 3.1-3.3.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias, Union

from .values import (
    CustomAlphabet,
    EmphasisLevel,
    FetchHint,
    Gender,
    LanguageAccentPair,
    OnLanguageFailure,
    PhonemeAlphabet,
    PitchContour,
    PitchRange,
    RateRange,
    Strength,
    TimeDesignation,
    VolumeRange,
)


class SsmlTag(Enum):
    """The twenty elements defined by SSML 1.1, valued by their tag names."""

    SPEAK = "speak"
    LEXICON = "lexicon"
    LOOKUP = "lookup"
    META = "meta"
    METADATA = "metadata"
    PARAGRAPH = "p"
    SENTENCE = "s"
    TOKEN = "token"
    WORD = "w"
    SAY_AS = "say-as"
    PHONEME = "phoneme"
    SUB = "sub"
    LANG = "lang"
    VOICE = "voice"
    EMPHASIS = "emphasis"
    BREAK = "break"
    PROSODY = "prosody"
    AUDIO = "audio"
    MARK = "mark"
    DESCRIPTION = "desc"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CustomTag:
    """Any element outside SSML, identified by its raw (prefixed) name."""

    name: str

    def __str__(self) -> str:
        return self.name


TagKind: TypeAlias = Union[SsmlTag, CustomTag]

_TAGS_BY_NAME: dict[str, SsmlTag] = {tag.value: tag for tag in SsmlTag}


def tag_kind(name: str) -> TagKind:
    """Map an element name to its tag kind; unknown names become custom."""
    tag = _TAGS_BY_NAME.get(name)
    if tag is None:
        return CustomTag(name)
    return tag


def tag_name(kind: TagKind) -> str:
    if isinstance(kind, CustomTag):
        return kind.name
    return kind.value


# ---------------------------------------------------------------------------
# Parsed elements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class _Element:
    """Base of every parsed element.

    ``namespaces`` holds the ``xmlns`` declarations made on an SSML element
    as (name, uri) pairs. Speak and Custom keep theirs among their other
    attributes instead.
    """

    tag: ClassVar[SsmlTag]

    namespaces: tuple[tuple[str, str], ...] = ()

    @property
    def kind(self) -> TagKind:
        return self.tag


@dataclass(frozen=True)
class Speak(_Element):
    """The ``<speak>`` root.

    ``extra_attributes`` keeps every root attribute that is not one of the
    four SSML ones (namespace declarations, ``xsi:schemaLocation``, ...)
    as (name, value) pairs in document order, so the document can be
    written back faithfully.
    """

    tag: ClassVar[SsmlTag] = SsmlTag.SPEAK

    version: str = "1.1"
    lang: str | None = None
    base: str | None = None
    on_lang_failure: OnLanguageFailure | None = None
    extra_attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Lexicon(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.LEXICON

    uri: str
    xml_id: str
    type: str | None = None
    fetch_timeout: TimeDesignation | None = None


@dataclass(frozen=True)
class Lookup(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.LOOKUP

    ref: str


@dataclass(frozen=True)
class Meta(_Element):
    """``<meta>``: exactly one of ``name`` / ``http_equiv`` is set."""

    tag: ClassVar[SsmlTag] = SsmlTag.META

    content: str
    name: str | None = None
    http_equiv: str | None = None


@dataclass(frozen=True)
class Metadata(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.METADATA


@dataclass(frozen=True)
class Paragraph(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.PARAGRAPH


@dataclass(frozen=True)
class Sentence(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.SENTENCE


@dataclass(frozen=True)
class Token(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.TOKEN

    role: str | None = None


@dataclass(frozen=True)
class Word(_Element):
    """``<w>``, an alias of ``<token>``."""

    tag: ClassVar[SsmlTag] = SsmlTag.WORD

    role: str | None = None


@dataclass(frozen=True)
class SayAs(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.SAY_AS

    interpret_as: str
    format: str | None = None
    detail: str | None = None


@dataclass(frozen=True)
class Phoneme(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.PHONEME

    ph: str
    alphabet: PhonemeAlphabet | CustomAlphabet | None = None


@dataclass(frozen=True)
class Sub(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.SUB

    alias: str


@dataclass(frozen=True)
class Lang(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.LANG

    lang: str
    on_lang_failure: OnLanguageFailure | None = None


@dataclass(frozen=True)
class Voice(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.VOICE

    gender: Gender | None = None
    age: int | None = None
    variant: int | None = None
    name: tuple[str, ...] = ()
    languages: tuple[LanguageAccentPair, ...] = ()

    @property
    def has_attributes(self) -> bool:
        return any((
            self.gender is not None,
            self.age is not None,
            self.variant is not None,
            self.name,
            self.languages,
        ))


@dataclass(frozen=True)
class Emphasis(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.EMPHASIS

    level: EmphasisLevel | None = None


@dataclass(frozen=True)
class Break(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.BREAK

    strength: Strength | None = None
    time: TimeDesignation | None = None


@dataclass(frozen=True)
class Prosody(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.PROSODY

    pitch: PitchRange | None = None
    contour: PitchContour | None = None
    range: PitchRange | None = None
    rate: RateRange | None = None
    duration: TimeDesignation | None = None
    volume: VolumeRange | None = None


@dataclass(frozen=True)
class Audio(_Element):
    """``<audio>``.  Defaults follow SSML 1.1 Section 3.3.1.

    ``sound_level`` is in decibels; ``speed`` is a ratio (``"150%"`` is 1.5).
    """

    tag: ClassVar[SsmlTag] = SsmlTag.AUDIO

    src: str | None = None
    fetch_timeout: TimeDesignation | None = None
    fetch_hint: FetchHint = FetchHint.PREFETCH
    max_age: int | None = None
    max_stale: int | None = None
    clip_begin: TimeDesignation = TimeDesignation(0.0, "s")
    clip_end: TimeDesignation | None = None
    repeat_count: int = 1
    repeat_dur: TimeDesignation | None = None
    sound_level: float = 0.0
    speed: float = 1.0


@dataclass(frozen=True)
class Mark(_Element):
    tag: ClassVar[SsmlTag] = SsmlTag.MARK

    name: str


@dataclass(frozen=True)
class Description(_Element):
    """``<desc>``; its body is kept here and never synthesised."""

    tag: ClassVar[SsmlTag] = SsmlTag.DESCRIPTION

    text: str = ""


@dataclass(frozen=True)
class Custom(_Element):
    """A non-SSML element with its raw attributes as (name, value) pairs in document order."""

    name: str
    attributes: tuple[tuple[str, str], ...] = ()

    @property
    def kind(self) -> TagKind:
        return CustomTag(self.name)


ParsedElement: TypeAlias = Union[
    Speak,
    Lexicon,
    Lookup,
    Meta,
    Metadata,
    Paragraph,
    Sentence,
    Token,
    Word,
    SayAs,
    Phoneme,
    Sub,
    Lang,
    Voice,
    Emphasis,
    Break,
    Prosody,
    Audio,
    Mark,
    Description,
    Custom,
]
