"""Parser events.

The parser records a *log* of :class:`TextRange`, :class:`Open`,
:class:`Close` and :class:`Empty` events in document order.  Text in the log
is stored as offsets into the document's synthesisable text; when events
are handed to callers (``SSMLDocument.events()`` or a transformation) the
ranges are resolved into :class:`Text` events carrying the actual string.

``str(event)`` renders the event as SSML markup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from .elements import ParsedElement
from .writer import empty_tag, end_tag, escape_text, start_tag


@dataclass(frozen=True)
class TextRange:
    """A run of synthesisable text, as offsets into ``SSMLDocument.text``."""

    start: int
    end: int


@dataclass(frozen=True)
class Text:
    text: str

    def __str__(self) -> str:
        return escape_text(self.text)


@dataclass(frozen=True)
class Open:
    element: ParsedElement

    def __str__(self) -> str:
        return start_tag(self.element)


@dataclass(frozen=True)
class Close:
    element: ParsedElement

    def __str__(self) -> str:
        return end_tag(self.element)


@dataclass(frozen=True)
class Empty:
    """A self-closing element (``<break/>``) or one with no content."""

    element: ParsedElement

    def __str__(self) -> str:
        return empty_tag(self.element)


LogEvent: TypeAlias = Union[TextRange, Open, Close, Empty]
ParserEvent: TypeAlias = Union[Text, Open, Close, Empty]
