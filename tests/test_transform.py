"""Tests for SSMLDocument.transform and SSMLDocument.atransform."""

from __future__ import annotations

import asyncio

import pytest

from ssml_parser import parse_ssml
from ssml_parser.document import TransformedSSML
from ssml_parser.elements import Break, Custom, Prosody
from ssml_parser.events import Close, Empty, Open, ParserEvent, Text
from ssml_parser.values import Percentage, RateStrength

from samples import GOOGLE_TTS_EXAMPLE


def _identity(event: ParserEvent) -> ParserEvent:
    return event


def _strip_custom(event: ParserEvent) -> ParserEvent | None:
    if isinstance(event, (Open, Close, Empty)) and isinstance(event.element, Custom):
        return None
    return event


class TestTransform:
    def test_identity(self, simple_example: str) -> None:
        doc = parse_ssml(simple_example)
        result = doc.transform(_identity)
        assert isinstance(result, TransformedSSML)
        assert result.ssml == doc.write()
        assert result.synthesisable_text == doc.text

    def test_events_seen_in_order(self) -> None:
        doc = parse_ssml(GOOGLE_TTS_EXAMPLE)
        seen: list[ParserEvent] = []

        def record(event: ParserEvent) -> ParserEvent:
            seen.append(event)
            return event

        doc.transform(record)
        assert seen == list(doc.events())

    def test_strip_custom_tags(self, custom_tags_example: str) -> None:
        result = parse_ssml(custom_tags_example).transform(_strip_custom)
        assert result.ssml == '<speak version="1.1" xmlns:mstts="https://www.w3.org/2001/mstts">Hello <break/>world</speak>'
        assert result.synthesisable_text == "Hello world"

    def test_drop_breaks(self) -> None:
        doc = parse_ssml("<speak>one <break/>two</speak>")
        result = doc.transform(lambda e: None if isinstance(e, Empty) and isinstance(e.element, Break) else e)
        assert result.ssml == '<speak version="1.1">one two</speak>'

    def test_rewrite_text(self) -> None:
        doc = parse_ssml("<speak><s>hello</s></speak>")
        result = doc.transform(lambda e: Text(e.text.upper()) if isinstance(e, Text) else e)
        assert result.ssml == '<speak version="1.1"><s>HELLO</s></speak>'
        assert result.synthesisable_text == "HELLO"

    def test_replace_element(self) -> None:
        doc = parse_ssml('<speak><prosody rate="20%">slow</prosody></speak>')
        fast = Prosody(rate=RateStrength.FAST)

        def speed_up(event: ParserEvent) -> ParserEvent:
            if isinstance(event, Open) and event.element == Prosody(rate=Percentage(20)):
                return Open(fast)
            if isinstance(event, Close) and isinstance(event.element, Prosody):
                return Close(fast)
            return event

        result = doc.transform(speed_up)
        assert result.ssml == '<speak version="1.1"><prosody rate="fast">slow</prosody></speak>'

    def test_document_is_unchanged(self, simple_example: str) -> None:
        doc = parse_ssml(simple_example)
        before = doc.write()
        doc.transform(lambda e: None)
        assert doc.write() == before

    def test_drop_everything(self, simple_example: str) -> None:
        result = parse_ssml(simple_example).transform(lambda e: None)
        assert result == TransformedSSML("", "")


class _AsyncStripCustom:
    def __init__(self) -> None:
        self.calls = 0

    async def apply(self, event: ParserEvent) -> ParserEvent | None:
        self.calls += 1
        await asyncio.sleep(0)
        return _strip_custom(event)


class _AsyncIdentity:
    async def apply(self, event: ParserEvent) -> ParserEvent | None:
        return event


class TestAsyncTransform:
    @pytest.mark.asyncio
    async def test_identity(self, simple_example: str) -> None:
        doc = parse_ssml(simple_example)
        result = await doc.atransform(_AsyncIdentity())
        assert result == doc.transform(_identity)

    @pytest.mark.asyncio
    async def test_matches_sync_transform(self, custom_tags_example: str) -> None:
        doc = parse_ssml(custom_tags_example)
        transform = _AsyncStripCustom()
        result = await doc.atransform(transform)
        assert result == doc.transform(_strip_custom)
        assert transform.calls == len(doc.event_log)

    @pytest.mark.asyncio
    async def test_concurrent_transforms(self, custom_tags_example: str) -> None:
        doc = parse_ssml(custom_tags_example)
        first, second = await asyncio.gather(
            doc.atransform(_AsyncStripCustom()),
            doc.atransform(_AsyncIdentity()),
        )
        assert first.synthesisable_text == second.synthesisable_text == "Hello world"
        assert "mstts" not in first.ssml.split(">", 1)[1]
        assert "<mstts:express-as" in second.ssml
