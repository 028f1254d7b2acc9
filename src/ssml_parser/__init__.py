"""SSML Parser -- structured parsing and rewriting of SSML 1.1 documents.

Public API re-exports for convenient access::

    from ssml_parser import parse_ssml, SSMLParser, SSMLValidator
"""

from ._version import __version__
from .containment import can_contain, can_contain_tags, is_synthesisable
from .document import AsyncTransform, Span, SSMLDocument, TransformedSSML
from .elements import (
    Audio,
    Break,
    Custom,
    CustomTag,
    Description,
    Emphasis,
    Lang,
    Lexicon,
    Lookup,
    Mark,
    Meta,
    Metadata,
    Paragraph,
    ParsedElement,
    Phoneme,
    Prosody,
    SayAs,
    Sentence,
    Speak,
    SsmlTag,
    Sub,
    TagKind,
    Token,
    Voice,
    Word,
    tag_kind,
    tag_name,
)
from .events import Close, Empty, Open, ParserEvent, Text
from .exceptions import (
    AmbiguousMetaAttributesError,
    InvalidAttributeValueError,
    InvalidNestingError,
    InvalidValueError,
    MismatchedCloseError,
    MissingRequiredAttributeError,
    MissingSpeakRootError,
    NestedSpeakError,
    SSMLError,
    SSMLParseError,
    UnclosedTagError,
    UnsupportedSsmlVersionError,
    XmlMalformedError,
)
from .parser import SSMLParser, parse_ssml
from .validator import SSMLValidator, ValidationIssue, ValidationResult
from .values import (
    ContourElement,
    CustomAlphabet,
    Decibel,
    EmphasisLevel,
    FetchHint,
    Frequency,
    Gender,
    LanguageAccentPair,
    OnLanguageFailure,
    Percentage,
    PhonemeAlphabet,
    PitchContour,
    PitchRange,
    PitchStrength,
    RateRange,
    RateStrength,
    RelativeChange,
    Sign,
    Strength,
    TimeDesignation,
    Unit,
    VolumeRange,
    VolumeStrength,
    parse_phoneme_alphabet,
    parse_pitch_range,
    parse_rate_range,
    parse_volume_range,
)

__all__ = [
    "__version__",
    # Core
    "parse_ssml",
    "SSMLParser",
    "SSMLDocument",
    "Span",
    "TransformedSSML",
    "AsyncTransform",
    "SSMLValidator",
    "ValidationIssue",
    "ValidationResult",
    # Events
    "Text",
    "Open",
    "Close",
    "Empty",
    "ParserEvent",
    # Elements
    "SsmlTag",
    "CustomTag",
    "TagKind",
    "tag_kind",
    "tag_name",
    "ParsedElement",
    "Speak",
    "Lexicon",
    "Lookup",
    "Meta",
    "Metadata",
    "Paragraph",
    "Sentence",
    "Token",
    "Word",
    "SayAs",
    "Phoneme",
    "Sub",
    "Lang",
    "Voice",
    "Emphasis",
    "Break",
    "Prosody",
    "Audio",
    "Mark",
    "Description",
    "Custom",
    # Containment
    "can_contain",
    "can_contain_tags",
    "is_synthesisable",
    # Values
    "TimeDesignation",
    "Strength",
    "EmphasisLevel",
    "PitchStrength",
    "VolumeStrength",
    "RateStrength",
    "Gender",
    "OnLanguageFailure",
    "FetchHint",
    "Sign",
    "Unit",
    "PhonemeAlphabet",
    "CustomAlphabet",
    "Frequency",
    "RelativeChange",
    "PitchRange",
    "Decibel",
    "VolumeRange",
    "Percentage",
    "RateRange",
    "ContourElement",
    "PitchContour",
    "LanguageAccentPair",
    "parse_pitch_range",
    "parse_volume_range",
    "parse_rate_range",
    "parse_phoneme_alphabet",
    # Exceptions
    "SSMLError",
    "InvalidValueError",
    "SSMLParseError",
    "XmlMalformedError",
    "MismatchedCloseError",
    "UnclosedTagError",
    "NestedSpeakError",
    "MissingSpeakRootError",
    "InvalidNestingError",
    "MissingRequiredAttributeError",
    "InvalidAttributeValueError",
    "UnsupportedSsmlVersionError",
    "AmbiguousMetaAttributesError",
]
