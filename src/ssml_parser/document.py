"""The parsed SSML document and its transformation pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from .containment import can_contain
from .elements import ParsedElement
from .events import LogEvent, ParserEvent, Text, TextRange


@dataclass(frozen=True)
class Span:
    """The ``[start, end)`` range of the document text covered by an element.

    Offsets count characters (Unicode code points) of ``SSMLDocument.text``.
    Empty elements have ``start == end``.
    """

    start: int
    end: int
    element: ParsedElement

    def maybe_contains(self, other: Span) -> bool:
        """Return True if *other* could be nested inside this span's element.

        Uses offsets and containment rules only; two sibling zero-width spans
        at the same offset are indistinguishable from nesting here.
        """
        return (
            can_contain(self.element.kind, other.element.kind)
            and self.start <= other.start
            and self.end >= other.end
        )

    def sort_key(self) -> tuple[int, int]:
        """Start ascending, then end descending: outer spans come first."""
        return (self.start, -self.end)


@dataclass(frozen=True)
class TransformedSSML:
    """Result of :meth:`SSMLDocument.transform`."""

    ssml: str
    synthesisable_text: str


class AsyncTransform(Protocol):
    """An event rewriter that may suspend between events.

    ``apply`` returns the replacement event, or ``None`` to drop it.
    """

    async def apply(self, event: ParserEvent) -> ParserEvent | None: ...


@dataclass(frozen=True)
class SSMLDocument:
    """A parsed SSML document.

    Attributes:
        text: Whitespace-normalised synthesisable text.
        spans: One span per element, sorted by :meth:`Span.sort_key`.
        event_log: Open/close/empty/text events in document order.
    """

    text: str
    spans: tuple[Span, ...] = ()
    event_log: tuple[LogEvent, ...] = ()

    def tags(self) -> Iterator[Span]:
        return iter(self.spans)

    def text_in_span(self, span: Span) -> str:
        if not 0 <= span.start <= span.end <= len(self.text):
            raise IndexError(
                f"Span [{span.start}, {span.end}) is outside text of length {len(self.text)}"
            )
        return self.text[span.start:span.end]

    def events(self) -> Iterator[ParserEvent]:
        """Yield the event log with text ranges resolved to strings."""
        for event in self.event_log:
            if isinstance(event, TextRange):
                yield Text(self.text[event.start:event.end])
            else:
                yield event

    def write(self) -> str:
        """Serialise the document back to SSML."""
        return "".join(str(event) for event in self.events())

    def transform(self, func: Callable[[ParserEvent], ParserEvent | None]) -> TransformedSSML:
        """Rewrite the document event by event.

        *func* receives every event in order and returns a replacement or
        ``None`` to drop it.  Dropping an open tag without its close tag
        produces invalid SSML; keeping them paired is up to the caller.
        """
        ssml: list[str] = []
        text: list[str] = []
        for event in self.events():
            result = func(event)
            if result is not None:
                _emit(result, ssml, text)
        return TransformedSSML("".join(ssml), "".join(text))

    async def atransform(self, transform: AsyncTransform) -> TransformedSSML:
        """Asynchronous :meth:`transform`; events are awaited one at a time."""
        ssml: list[str] = []
        text: list[str] = []
        for event in self.events():
            result = await transform.apply(event)
            if result is not None:
                _emit(result, ssml, text)
        return TransformedSSML("".join(ssml), "".join(text))


def _emit(event: ParserEvent, ssml: list[str], text: list[str]) -> None:
    ssml.append(str(event))
    if isinstance(event, Text):
        text.append(event.text)

