"""Attribute value grammars for SSML 1.1.

Every value type has a parser that either returns a value or raises
:class:`~ssml_parser.exceptions.InvalidValueError`, and ``str(value)``
serialises it back into a string the parser accepts.  Round-trips are
semantic: ``"+02.50st"`` re-serialises as ``"+2.5st"``.

Closed label sets are :class:`enum.Enum` subclasses with a ``parse``
classmethod.  Composite values are frozen dataclasses.  Values that are a
choice between several shapes (``PitchRange``, ``VolumeRange``,
``RateRange``, ``PhonemeAlphabet``) are unions with a module-level
``parse_*`` function.

Grammar reference: SSML 1.1, Sections 2.2.4 (time designations) and
3.2.4 (prosody).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Literal, TypeAlias, TypeVar, Union

from .exceptions import InvalidValueError

# "5", "2.5" and ".5" but not "5." or "1e3".
_NUMBER = r"(?:\d*\.)?\d+"

_TIME_RE = re.compile(rf"\+?({_NUMBER})(s|ms)")
_POSITIVE_NUMBER_RE = re.compile(rf"\+?({_NUMBER})")
_INTEGER_RE = re.compile(r"\+?(\d+)")
_DECIBEL_RE = re.compile(rf"([+-]?{_NUMBER})dB")
_UNSIGNED_PERCENT_RE = re.compile(rf"\+?({_NUMBER})%")
_PITCH_RE = re.compile(rf"([+-])?({_NUMBER})(Hz|st|%)")
_CONTOUR_ELEMENT_RE = re.compile(rf"\(\s*({_NUMBER})%\s*,\s*(\S+?)\s*\)")
_CONTOUR_TOKEN_RE = re.compile(r"\([^()]*\)")

_DISALLOWED_LANGUAGES = frozenset({"und", "zxx"})

_L = TypeVar("_L", bound="_Label")


def format_number(value: float) -> str:
    """Render a number in positional notation without a trailing ``.0``."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# ---------------------------------------------------------------------------
# Label enums
# ---------------------------------------------------------------------------


class _Label(Enum):
    """Enum whose values are the canonical SSML spellings."""

    @classmethod
    def parse(cls: type[_L], text: str) -> _L:
        member = cls.lookup(text)
        if member is None:
            raise InvalidValueError(cls.expected(), text)
        return member

    @classmethod
    def lookup(cls: type[_L], text: str) -> _L | None:
        for member in cls:
            if member.value == text:
                return member
        return None

    @classmethod
    def expected(cls) -> str:
        return "one of " + ", ".join(repr(m.value) for m in cls)

    def __str__(self) -> str:
        return str(self.value)


class Strength(_Label):
    """Prosodic break strength for ``<break strength="...">``."""

    NONE = "none"
    X_WEAK = "x-weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    X_STRONG = "x-strong"

    @classmethod
    def lookup(cls, text: str) -> Strength | None:
        return super().lookup(text.lower())


class EmphasisLevel(_Label):
    STRONG = "strong"
    MODERATE = "moderate"
    NONE = "none"
    REDUCED = "reduced"


class PitchStrength(_Label):
    X_LOW = "x-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    X_HIGH = "x-high"
    DEFAULT = "default"


class VolumeStrength(_Label):
    SILENT = "silent"
    X_SOFT = "x-soft"
    SOFT = "soft"
    MEDIUM = "medium"
    LOUD = "loud"
    X_LOUD = "x-loud"
    DEFAULT = "default"


class RateStrength(_Label):
    X_SLOW = "x-slow"
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    X_FAST = "x-fast"
    DEFAULT = "default"


class Gender(_Label):
    MALE = "male"
    FEMALE = "female"
    NEUTRAL = "neutral"


class OnLanguageFailure(_Label):
    """Behaviour requested when a voice cannot speak the declared language."""

    CHANGE_VOICE = "changevoice"
    IGNORE_TEXT = "ignoretext"
    IGNORE_LANG = "ignorelang"
    PROCESSOR_CHOICE = "processorchoice"


class FetchHint(_Label):
    PREFETCH = "prefetch"
    SAFE = "safe"


class Sign(_Label):
    PLUS = "+"
    MINUS = "-"


class Unit(_Label):
    HZ = "Hz"
    ST = "st"
    PERCENTAGE = "%"


class PhonemeAlphabet(_Label):
    IPA = "ipa"


@dataclass(frozen=True)
class CustomAlphabet:
    """A phoneme alphabet other than IPA, kept verbatim (e.g. ``x-sampa``)."""

    name: str

    def __str__(self) -> str:
        return self.name


def parse_phoneme_alphabet(text: str) -> PhonemeAlphabet | CustomAlphabet:
    return PhonemeAlphabet.lookup(text) or CustomAlphabet(text)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

PositiveNumber: TypeAlias = Union[int, float]


def parse_positive_number(text: str) -> PositiveNumber:
    """Parse ``[+]number``; an integer unless the text contains a ``.``."""
    m = _POSITIVE_NUMBER_RE.fullmatch(text)
    if m is None:
        raise InvalidValueError("a non-negative number", text)
    number = m.group(1)
    return float(number) if "." in number else int(number)


def parse_non_negative_integer(text: str) -> int:
    m = _INTEGER_RE.fullmatch(text)
    if m is None:
        raise InvalidValueError("a non-negative integer", text)
    return int(m.group(1))


def parse_positive_integer(text: str) -> int:
    value = parse_non_negative_integer(text)
    if value == 0:
        raise InvalidValueError("a positive integer", text)
    return value


def parse_age(text: str) -> int:
    value = parse_non_negative_integer(text)
    if value > 255:
        raise InvalidValueError("an integer between 0 and 255", text)
    return value


def parse_decibel(text: str) -> float:
    """Parse a signed or unsigned decibel value such as ``-6dB``."""
    m = _DECIBEL_RE.fullmatch(text)
    if m is None:
        raise InvalidValueError("a decibel value such as '+6dB'", text)
    return float(m.group(1))


def parse_unsigned_percentage(text: str) -> float:
    """Parse ``[+]number%`` and return the number as written."""
    m = _UNSIGNED_PERCENT_RE.fullmatch(text)
    if m is None:
        raise InvalidValueError("a non-negative percentage such as '80%'", text)
    return float(m.group(1))


# ---------------------------------------------------------------------------
# Time designations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeDesignation:
    """A duration in seconds or milliseconds, e.g. ``3s`` or ``250ms``.

    The unit is kept so that serialisation preserves what the author wrote.
    """

    value: float
    unit: Literal["s", "ms"] = "s"

    @classmethod
    def parse(cls, text: str) -> TimeDesignation:
        m = _TIME_RE.fullmatch(text)
        if m is None:
            raise InvalidValueError("a time designation such as '250ms' or '1.5s'", text)
        return cls(value=float(m.group(1)), unit=m.group(2))  # type: ignore[arg-type]

    @property
    def seconds(self) -> float:
        if self.unit == "ms":
            return self.value / 1000
        return self.value

    def to_timedelta(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


# ---------------------------------------------------------------------------
# Prosody ranges
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Frequency:
    """An absolute pitch in hertz (``200Hz``)."""

    hertz: float

    def __str__(self) -> str:
        return f"{format_number(self.hertz)}Hz"


@dataclass(frozen=True)
class RelativeChange:
    """A signed pitch change: ``+10%``, ``-2st`` or ``+30Hz``."""

    value: float
    sign: Sign
    unit: Unit

    @property
    def signed_value(self) -> float:
        return -self.value if self.sign is Sign.MINUS else self.value

    def __str__(self) -> str:
        return f"{self.sign}{format_number(self.value)}{self.unit}"


PitchRange: TypeAlias = Union[PitchStrength, Frequency, RelativeChange]


def parse_pitch_range(text: str) -> PitchRange:
    """Parse a ``pitch`` or ``range`` value.

    Percentages and semitones need an explicit sign; hertz may be unsigned
    (absolute frequency) or signed (relative change).
    """
    label = PitchStrength.lookup(text)
    if label is not None:
        return label
    m = _PITCH_RE.fullmatch(text)
    expected = f"{PitchStrength.expected()}, 'NHz', or a signed change such as '+10%', '-2st', '+30Hz'"
    if m is None:
        raise InvalidValueError(expected, text)
    sign, number, unit = m.groups()
    if sign is None:
        if unit != Unit.HZ.value:
            raise InvalidValueError(expected, text)
        return Frequency(float(number))
    return RelativeChange(float(number), Sign.parse(sign), Unit.parse(unit))


@dataclass(frozen=True)
class Decibel:
    """A volume change in decibels, ``+6dB`` or ``-3dB``."""

    value: float

    def __str__(self) -> str:
        return f"{format_number(self.value)}dB"


VolumeRange: TypeAlias = Union[VolumeStrength, Decibel]


def parse_volume_range(text: str) -> VolumeRange:
    label = VolumeStrength.lookup(text)
    if label is not None:
        return label
    try:
        return Decibel(parse_decibel(text))
    except InvalidValueError:
        raise InvalidValueError(f"{VolumeStrength.expected()} or a decibel value such as '-6dB'", text) from None


@dataclass(frozen=True)
class Percentage:
    """A non-negative rate percentage, ``80%``."""

    value: PositiveNumber

    def __str__(self) -> str:
        return f"{format_number(self.value)}%"


RateRange: TypeAlias = Union[RateStrength, Percentage]


def parse_rate_range(text: str) -> RateRange:
    label = RateStrength.lookup(text)
    if label is not None:
        return label
    expected = f"{RateStrength.expected()} or a non-negative percentage such as '80%'"
    if not text.endswith("%"):
        raise InvalidValueError(expected, text)
    try:
        return Percentage(parse_positive_number(text[:-1]))
    except InvalidValueError:
        raise InvalidValueError(expected, text) from None


# ---------------------------------------------------------------------------
# Pitch contours
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContourElement:
    """One ``(position%,target)`` point of a pitch contour."""

    position: float
    target: PitchRange

    @classmethod
    def parse(cls, text: str) -> ContourElement:
        m = _CONTOUR_ELEMENT_RE.fullmatch(text)
        if m is None:
            raise InvalidValueError("a contour point such as '(20%,+30Hz)'", text)
        return cls(float(m.group(1)), parse_pitch_range(m.group(2)))

    def __str__(self) -> str:
        return f"({format_number(self.position)}%,{self.target})"


@dataclass(frozen=True)
class PitchContour:
    """Whitespace separated contour points; may be empty."""

    elements: tuple[ContourElement, ...] = ()

    @classmethod
    def parse(cls, text: str) -> PitchContour:
        elements: list[ContourElement] = []
        pos = 0
        for m in _CONTOUR_TOKEN_RE.finditer(text):
            if text[pos:m.start()].strip():
                raise InvalidValueError("whitespace separated contour points such as '(0%,+20Hz) (50%,-10Hz)'", text)
            elements.append(ContourElement.parse(m.group(0)))
            pos = m.end()
        if text[pos:].strip():
            raise InvalidValueError("whitespace separated contour points such as '(0%,+20Hz) (50%,-10Hz)'", text)
        return cls(tuple(elements))

    def __iter__(self):
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __str__(self) -> str:
        return " ".join(str(e) for e in self.elements)


# ---------------------------------------------------------------------------
# Voice languages
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LanguageAccentPair:
    """A ``language[:accent]`` entry of ``<voice languages="...">``."""

    language: str
    accent: str | None = None

    @classmethod
    def parse(cls, text: str) -> LanguageAccentPair:
        expected = "'language' or 'language:accent' (not 'und' or 'zxx')"
        if not text or text in _DISALLOWED_LANGUAGES:
            raise InvalidValueError(expected, text)
        parts = text.split(":")
        if len(parts) > 2 or not all(parts) or parts[0] in _DISALLOWED_LANGUAGES:
            raise InvalidValueError(expected, text)
        return cls(parts[0], parts[1] if len(parts) == 2 else None)

    def __str__(self) -> str:
        if self.accent is None:
            return self.language
        return f"{self.language}:{self.accent}"
