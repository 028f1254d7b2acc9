"""SSML parser -- converts SSML strings into ``document.SSMLDocument`` objects.

Uses ``lxml.etree`` in parser-target mode: lxml tokenises the XML and calls
back into :class:`_SSMLTarget` for every start tag, end tag and text run,
so the document is processed as a stream rather than as a tree.  The
target enforces the SSML containment rules, normalises whitespace into a
single text buffer, and records the event log and element spans.

Spec reference: SSML 1.1, Sections 2.1 (document form) and 3.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TypeVar

from lxml import etree

from .containment import can_contain, is_synthesisable
from .document import Span, SSMLDocument
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
)
from .events import Close, Empty, LogEvent, Open, TextRange
from .exceptions import (
    AmbiguousMetaAttributesError,
    InvalidAttributeValueError,
    InvalidNestingError,
    InvalidValueError,
    MismatchedCloseError,
    MissingRequiredAttributeError,
    MissingSpeakRootError,
    NestedSpeakError,
    SSMLParseError,
    UnclosedTagError,
    UnsupportedSsmlVersionError,
    XmlMalformedError,
)
from .values import (
    EmphasisLevel,
    FetchHint,
    Gender,
    LanguageAccentPair,
    OnLanguageFailure,
    PitchContour,
    Strength,
    TimeDesignation,
    parse_age,
    parse_decibel,
    parse_non_negative_integer,
    parse_phoneme_alphabet,
    parse_pitch_range,
    parse_positive_integer,
    parse_rate_range,
    parse_unsigned_percentage,
    parse_volume_range,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_SUPPORTED_VERSIONS = frozenset({"1.0", "1.1"})

# Root attributes with a typed field on Speak; everything else is kept verbatim.
_SPEAK_ATTRIBUTES = frozenset({"version", "xml:lang", "xml:base", "onlangfailure"})

# libxml2 messages for the two structural errors that have their own exception.
_MISMATCH_RE = re.compile(r"tag mismatch: \S+ line \d+ and ([^\s,]+)")
_UNFINISHED_RE = re.compile(r"end of data in tag (\S+) line")


# ---------------------------------------------------------------------------
# Attribute parsing
# ---------------------------------------------------------------------------


class _AttributeReader:
    """Typed access to one element's attributes.

    Grammar failures are re-raised as :class:`InvalidAttributeValueError`
    naming the element and attribute.
    """

    def __init__(self, element: str, attributes: dict[str, str]) -> None:
        self.element = element
        self.attributes = attributes

    def get(self, name: str) -> str | None:
        return self.attributes.get(name)

    def require(self, name: str) -> str:
        value = self.attributes.get(name)
        if value is None:
            raise MissingRequiredAttributeError(self.element, name)
        return value

    def optional(
        self,
        name: str,
        parse: Callable[[str], _T],
        default: _T | None = None,
        *,
        empty_is_none: bool = False,
    ) -> _T | None:
        raw = self.attributes.get(name)
        if raw is None or (empty_is_none and raw == ""):
            return default
        return self._convert(name, raw, parse)

    def _convert(self, name: str, raw: str, parse: Callable[[str], _T]) -> _T:
        try:
            return parse(raw)
        except InvalidValueError as exc:
            raise InvalidAttributeValueError(self.element, name, raw, exc.expected) from exc


def _parse_speak(attrs: _AttributeReader) -> Speak:
    version = attrs.get("version")
    if version is None:
        # Many TTS vendors omit it; treat as the current version.
        version = "1.1"
    elif version not in _SUPPORTED_VERSIONS:
        raise UnsupportedSsmlVersionError(version)
    return Speak(
        version=version,
        lang=attrs.get("xml:lang"),
        base=attrs.get("xml:base"),
        on_lang_failure=attrs.optional("onlangfailure", OnLanguageFailure.parse),
        extra_attributes=tuple(
            (name, value)
            for name, value in attrs.attributes.items()
            if name not in _SPEAK_ATTRIBUTES
        ),
    )


def _parse_lexicon(attrs: _AttributeReader) -> Lexicon:
    return Lexicon(
        uri=attrs.require("uri"),
        xml_id=attrs.require("xml:id"),
        type=attrs.get("type"),
        fetch_timeout=attrs.optional("fetchtimeout", TimeDesignation.parse),
    )


def _parse_lookup(attrs: _AttributeReader) -> Lookup:
    return Lookup(ref=attrs.require("ref"))


def _parse_meta(attrs: _AttributeReader) -> Meta:
    content = attrs.require("content")
    name = attrs.get("name")
    http_equiv = attrs.get("http-equiv")
    if (name is None) == (http_equiv is None):
        raise AmbiguousMetaAttributesError()
    return Meta(content=content, name=name, http_equiv=http_equiv)


def _parse_say_as(attrs: _AttributeReader) -> SayAs:
    return SayAs(
        interpret_as=attrs.require("interpret-as"),
        format=attrs.get("format"),
        detail=attrs.get("detail"),
    )


def _parse_phoneme(attrs: _AttributeReader) -> Phoneme:
    return Phoneme(
        ph=attrs.require("ph"),
        alphabet=attrs.optional("alphabet", parse_phoneme_alphabet),
    )


def _parse_lang(attrs: _AttributeReader) -> Lang:
    return Lang(
        lang=attrs.require("xml:lang"),
        on_lang_failure=attrs.optional("onlangfailure", OnLanguageFailure.parse),
    )


def _parse_languages(text: str) -> tuple[LanguageAccentPair, ...]:
    return tuple(LanguageAccentPair.parse(token) for token in text.split())


def _parse_voice(attrs: _AttributeReader) -> Voice:
    name = attrs.get("name")
    return Voice(
        gender=attrs.optional("gender", Gender.parse, empty_is_none=True),
        age=attrs.optional("age", parse_age, empty_is_none=True),
        variant=attrs.optional("variant", parse_positive_integer, empty_is_none=True),
        name=tuple(name.split()) if name else (),
        languages=attrs.optional("languages", _parse_languages, ()),
    )


def _parse_break(attrs: _AttributeReader) -> Break:
    return Break(
        strength=attrs.optional("strength", Strength.parse),
        time=attrs.optional("time", TimeDesignation.parse),
    )


def _parse_prosody(attrs: _AttributeReader) -> Prosody:
    return Prosody(
        pitch=attrs.optional("pitch", parse_pitch_range),
        contour=attrs.optional("contour", PitchContour.parse),
        range=attrs.optional("range", parse_pitch_range),
        rate=attrs.optional("rate", parse_rate_range),
        duration=attrs.optional("duration", TimeDesignation.parse),
        volume=attrs.optional("volume", parse_volume_range),
    )


def _parse_speed(text: str) -> float:
    return parse_unsigned_percentage(text) / 100


def _parse_audio(attrs: _AttributeReader) -> Audio:
    return Audio(
        src=attrs.get("src"),
        fetch_timeout=attrs.optional("fetchtimeout", TimeDesignation.parse),
        fetch_hint=attrs.optional("fetchhint", FetchHint.parse, FetchHint.PREFETCH),
        max_age=attrs.optional("maxage", parse_non_negative_integer),
        max_stale=attrs.optional("maxstale", parse_non_negative_integer),
        clip_begin=attrs.optional("clipBegin", TimeDesignation.parse, TimeDesignation(0.0, "s")),
        clip_end=attrs.optional("clipEnd", TimeDesignation.parse),
        repeat_count=attrs.optional("repeatCount", parse_positive_integer, 1),
        repeat_dur=attrs.optional("repeatDur", TimeDesignation.parse),
        sound_level=attrs.optional("soundLevel", parse_decibel, 0.0),
        speed=attrs.optional("speed", _parse_speed, 1.0),
    )


_ELEMENT_PARSERS: dict[SsmlTag, Callable[[_AttributeReader], ParsedElement]] = {
    SsmlTag.SPEAK: _parse_speak,
    SsmlTag.LEXICON: _parse_lexicon,
    SsmlTag.LOOKUP: _parse_lookup,
    SsmlTag.META: _parse_meta,
    SsmlTag.METADATA: lambda attrs: Metadata(),
    SsmlTag.PARAGRAPH: lambda attrs: Paragraph(),
    SsmlTag.SENTENCE: lambda attrs: Sentence(),
    SsmlTag.TOKEN: lambda attrs: Token(role=attrs.get("role")),
    SsmlTag.WORD: lambda attrs: Word(role=attrs.get("role")),
    SsmlTag.SAY_AS: _parse_say_as,
    SsmlTag.PHONEME: _parse_phoneme,
    SsmlTag.SUB: lambda attrs: Sub(alias=attrs.require("alias")),
    SsmlTag.LANG: _parse_lang,
    SsmlTag.VOICE: _parse_voice,
    SsmlTag.EMPHASIS: lambda attrs: Emphasis(level=attrs.optional("level", EmphasisLevel.parse)),
    SsmlTag.BREAK: _parse_break,
    SsmlTag.PROSODY: _parse_prosody,
    SsmlTag.AUDIO: _parse_audio,
    SsmlTag.MARK: lambda attrs: Mark(name=attrs.require("name")),
    # The body is filled in when </desc> is reached.
    SsmlTag.DESCRIPTION: lambda attrs: Description(),
}


def _parse_element(name: str, attributes: dict[str, str]) -> ParsedElement:
    kind = tag_kind(name)
    if isinstance(kind, CustomTag):
        return Custom(name=name, attributes=tuple(attributes.items()))
    return _ELEMENT_PARSERS[kind](_AttributeReader(name, attributes))


# ---------------------------------------------------------------------------
# Streaming state
# ---------------------------------------------------------------------------


class _TextBuffer:
    """The synthesisable text, built up from normalised runs."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def ends_with_whitespace(self) -> bool:
        return bool(self._parts) and self._parts[-1][-1].isspace()

    def append(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._length += len(text)

    def push(self, raw: str) -> tuple[int, int]:
        """Append a raw text run with whitespace normalised.

        Lines are trimmed and joined with single spaces; leading and trailing
        whitespace on the run collapse to one space each, and never double
        up with whitespace already at the end of the buffer.
        """
        start = self._length
        trimmed = raw.strip()
        ends_ws = self.ends_with_whitespace()
        if not trimmed:
            if self._parts and not ends_ws:
                self.append(" ")
        else:
            if raw[0].isspace() and not ends_ws:
                self.append(" ")
            self.append(" ".join(line.strip() for line in trimmed.split("\n") if line.strip()))
            if raw[-1].isspace():
                self.append(" ")
        return start, self._length

    def getvalue(self) -> str:
        return "".join(self._parts)


@dataclass
class _OpenTag:
    name: str
    element: ParsedElement
    # Index into the span list when the tag opened.
    position: int
    start: int
    log_index: int = -1
    expanded: bool = False
    description: list[str] | None = None

    @property
    def kind(self) -> TagKind:
        return self.element.kind


class _SSMLTarget:
    """lxml parser target that builds an :class:`SSMLDocument`.

    Element starts (other than ``<speak>``) are held back until the next
    event: if that event is the matching end tag the element is recorded as
    :class:`Empty`, otherwise as :class:`Open`.
    """

    def __init__(self, expand_sub: bool) -> None:
        self._expand_sub = expand_sub
        self._text = _TextBuffer()
        self._open: list[_OpenTag] = []
        self._spans: list[Span] = []
        self._log: list[LogEvent] = []
        self._started = False
        self._finished = False
        self._pending: _OpenTag | None = None
        self._pending_text: list[str] = []
        self._declared: dict[str | None, str] = {}
        self._scopes: list[dict[str | None, str]] = []

    # -- lxml target interface ----------------------------------------------

    def start_ns(self, prefix: str | None, uri: str) -> None:
        self._declared[prefix or None] = uri

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        scope, self._declared = self._declared, {}
        if self._finished:
            return
        self._flush()
        self._scopes.append(scope)

        name = self._qualify(tag, element=True)
        if not self._started and name != SsmlTag.SPEAK.value:
            raise MissingSpeakRootError(name)

        declarations = [
            ("xmlns" if prefix is None else f"xmlns:{prefix}", uri)
            for prefix, uri in scope.items()
        ]
        attributes = dict(declarations)
        for key, value in attrib.items():
            attributes[self._qualify(key, element=False)] = value
        element = _parse_element(name, attributes)
        if declarations and not isinstance(element, (Speak, Custom)):
            element = replace(element, namespaces=tuple(declarations))

        if isinstance(element, Speak):
            if self._started:
                raise NestedSpeakError()
            self._started = True
            self._push_open(_OpenTag(name, element, len(self._spans), len(self._text)))
            return

        parent = self._open[-1]
        if not can_contain(parent.kind, element.kind):
            raise InvalidNestingError(parent.kind, element.kind)

        if isinstance(element, (Paragraph, Sentence)) and len(self._text) and not self._text.ends_with_whitespace():
            start = len(self._text)
            self._text.append(" ")
            self._log.append(TextRange(start, len(self._text)))

        if self._expand_sub and isinstance(element, Sub):
            start = len(self._text)
            self._text.append(f" {element.alias} ")
            self._log.append(TextRange(start, len(self._text)))
            self._open.append(_OpenTag(name, element, len(self._spans), start, expanded=True))
            logger.debug("Expanded <sub> to alias %r", element.alias)
            return

        self._pending = _OpenTag(name, element, len(self._spans), len(self._text))

    def end(self, tag: str) -> None:
        if self._finished:
            return
        self._flush_text()
        name = self._qualify(tag, element=True)
        self._scopes.pop()

        pending, self._pending = self._pending, None
        if pending is not None and pending.name == name:
            self._log.append(Empty(pending.element))
            self._spans.append(Span(pending.start, pending.start, pending.element))
            return
        if pending is not None:
            self._push_open(pending)

        if not self._open or self._open[-1].name != name:
            raise MismatchedCloseError(name)
        top = self._open.pop()
        if top.expanded:
            return

        element = top.element
        if top.description is not None:
            element = replace(element, text="".join(top.description))
            self._log[top.log_index] = Open(element)
        self._log.append(Close(element))
        self._spans.insert(top.position, Span(top.start, len(self._text), element))

        if isinstance(element, Speak) and not self._open:
            self._finished = True

    def data(self, text: str) -> None:
        if self._finished:
            return
        self._resolve_pending()
        self._pending_text.append(text)

    def comment(self, text: str) -> None:
        self._flush()

    def pi(self, target: str, data: str | None = None) -> None:
        self._flush()

    def close(self) -> None:
        # Also called by lxml before it raises a syntax error, so no checks here.
        self._flush()

    @property
    def finished(self) -> bool:
        """True once the root ``</speak>`` has been seen."""
        return self._finished

    # -- helpers -------------------------------------------------------------

    def document(self) -> SSMLDocument:
        """Return the finished document once lxml has consumed all input."""
        if self._open:
            raise UnclosedTagError(self._open[-1].name)
        if not self._started:
            raise XmlMalformedError("Document has no root element")
        spans = sorted(self._spans, key=Span.sort_key)
        return SSMLDocument(text=self._text.getvalue(), spans=tuple(spans), event_log=tuple(self._log))

    def _qualify(self, name: str, *, element: bool) -> str:
        """Turn lxml's ``{uri}local`` back into the ``prefix:local`` written."""
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        if uri == _XML_NAMESPACE:
            return f"xml:{local}"
        shadowed: set[str | None] = set()
        for scope in reversed(self._scopes):
            for prefix, declared in scope.items():
                if prefix in shadowed or declared != uri:
                    continue
                # The default namespace applies to element names only.
                if prefix is None and element:
                    return local
                if prefix is not None:
                    return f"{prefix}:{local}"
            shadowed.update(scope)
        return local

    def _flush(self) -> None:
        if self._finished:
            return
        self._flush_text()
        self._resolve_pending()

    def _resolve_pending(self) -> None:
        pending, self._pending = self._pending, None
        if pending is not None:
            self._push_open(pending)

    def _push_open(self, tag: _OpenTag) -> None:
        tag.log_index = len(self._log)
        self._log.append(Open(tag.element))
        if isinstance(tag.element, Description):
            tag.description = []
        self._open.append(tag)

    def _flush_text(self) -> None:
        if not self._pending_text:
            return
        raw = "".join(self._pending_text)
        self._pending_text.clear()
        if not self._open:
            return
        top = self._open[-1]
        if top.description is not None:
            top.description.append(raw)
            return
        if top.expanded or not is_synthesisable(top.kind):
            return
        start, end = self._text.push(raw)
        self._log.append(TextRange(start, end))


def _namespace_error(error_log) -> XmlMalformedError | None:
    # libxml2 reports an undeclared prefix as a recoverable error and hands
    # the target the bare local name, so it has to be picked up from the log.
    for entry in error_log:
        if entry.domain == etree.ErrorDomains.NAMESPACE:
            return XmlMalformedError(entry.message, line=entry.line, column=entry.column)
    return None


def _syntax_error(exc: etree.XMLSyntaxError) -> SSMLParseError:
    line = getattr(exc, "lineno", None)
    column = exc.position[1] if getattr(exc, "position", None) else None
    message = str(exc.msg or exc)
    if exc.code == etree.ErrorTypes.ERR_TAG_NAME_MISMATCH:
        m = _MISMATCH_RE.search(message)
        if m is not None:
            return MismatchedCloseError(m.group(1), line=line, column=column)
    if exc.code == etree.ErrorTypes.ERR_TAG_NOT_FINISHED:
        m = _UNFINISHED_RE.search(message)
        if m is not None:
            return UnclosedTagError(m.group(1), line=line, column=column)
    return XmlMalformedError(message, line=line, column=column)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class SSMLParser:
    """Parse SSML into :class:`SSMLDocument` objects.

    Args:
        expand_sub: Replace each ``<sub>`` by its ``alias`` in the text and
            drop its open/close events from the event log.
    """

    def __init__(self, expand_sub: bool = False) -> None:
        self.expand_sub = expand_sub

    def parse(self, ssml: str) -> SSMLDocument:
        """Parse an SSML string.

        Raises a subclass of :class:`~ssml_parser.exceptions.SSMLParseError`
        at the first violation found.
        """
        if not ssml.strip():
            raise XmlMalformedError("Document is empty")
        target = _SSMLTarget(self.expand_sub)
        parser = etree.XMLParser(target=target, encoding="utf-8", resolve_entities=False, no_network=True)
        try:
            try:
                etree.fromstring(ssml.encode("utf-8"), parser)  # noqa: S320
            except etree.XMLSyntaxError as exc:
                if not (target.finished and exc.code == etree.ErrorTypes.ERR_DOCUMENT_END):
                    raise _namespace_error(parser.error_log) or _syntax_error(exc) from exc
                logger.debug("Ignored content after the root element: %s", exc.msg)
            except SSMLParseError as exc:
                # An undeclared prefix is logged before the callback that failed.
                error = _namespace_error(parser.error_log)
                if error is not None:
                    raise error from exc
                raise
            error = _namespace_error(parser.error_log)
            if error is not None:
                raise error
            doc = target.document()
        except SSMLParseError as exc:
            logger.debug("Rejected SSML document: %s", exc)
            raise

        logger.debug(
            "Parsed SSML document: %d characters, %d tags, %d events",
            len(doc.text),
            len(doc.spans),
            len(doc.event_log),
        )
        return doc

    def parse_file(self, path: str | Path) -> SSMLDocument:
        """Parse an SSML file from disk."""
        p = Path(path)
        return self.parse(p.read_text(encoding="utf-8"))


def parse_ssml(ssml: str, *, expand_sub: bool = False) -> SSMLDocument:
    """Parse *ssml* with a default-configured :class:`SSMLParser`."""
    return SSMLParser(expand_sub=expand_sub).parse(ssml)
