"""Tests for ssml_parser.elements and ssml_parser.containment."""

from __future__ import annotations

import pytest

from ssml_parser.containment import can_contain, can_contain_tags, is_synthesisable
from ssml_parser.elements import (
    Audio,
    Break,
    Custom,
    CustomTag,
    Description,
    Paragraph,
    Sentence,
    SsmlTag,
    Voice,
    Word,
    tag_kind,
    tag_name,
)
from ssml_parser.values import FetchHint, Gender, TimeDesignation


class TestTagKinds:
    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("p", SsmlTag.PARAGRAPH),
            ("s", SsmlTag.SENTENCE),
            ("w", SsmlTag.WORD),
            ("desc", SsmlTag.DESCRIPTION),
            ("say-as", SsmlTag.SAY_AS),
            ("speak", SsmlTag.SPEAK),
        ],
    )
    def test_name_round_trip(self, name: str, kind: SsmlTag) -> None:
        assert tag_kind(name) is kind
        assert tag_name(kind) == name

    def test_every_tag_maps_back_to_itself(self) -> None:
        for tag in SsmlTag:
            assert tag_kind(tag_name(tag)) is tag

    def test_unknown_name_is_custom(self) -> None:
        assert tag_kind("mstts:express-as") == CustomTag("mstts:express-as")
        assert tag_name(CustomTag("bookmark")) == "bookmark"

    def test_names_are_case_sensitive(self) -> None:
        assert tag_kind("Speak") == CustomTag("Speak")

    def test_element_kind_projection(self) -> None:
        assert Paragraph().kind is SsmlTag.PARAGRAPH
        assert Word(role="x").kind is SsmlTag.WORD
        assert Custom("mstts:silence", (("type", "x"),)).kind == CustomTag("mstts:silence")


class TestElementDefaults:
    def test_audio_defaults(self) -> None:
        audio = Audio()
        assert audio.fetch_hint is FetchHint.PREFETCH
        assert audio.clip_begin == TimeDesignation(0.0, "s")
        assert audio.repeat_count == 1
        assert audio.sound_level == 0.0
        assert audio.speed == 1.0

    def test_voice_has_attributes(self) -> None:
        assert not Voice().has_attributes
        assert Voice(gender=Gender.FEMALE).has_attributes
        assert Voice(name=("Alice",)).has_attributes

    def test_description_defaults_to_empty_body(self) -> None:
        assert Description().text == ""

    def test_elements_are_immutable(self) -> None:
        with pytest.raises(AttributeError):
            Break().strength = None  # type: ignore[misc]


class TestContainment:
    @pytest.mark.parametrize(
        "kind",
        [
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
            CustomTag("x"),
        ],
    )
    def test_containers(self, kind) -> None:
        assert can_contain_tags(kind)

    @pytest.mark.parametrize(
        "kind",
        [
            SsmlTag.MARK,
            SsmlTag.BREAK,
            SsmlTag.META,
            SsmlTag.METADATA,
            SsmlTag.LEXICON,
            SsmlTag.SAY_AS,
            SsmlTag.PHONEME,
            SsmlTag.SUB,
            SsmlTag.DESCRIPTION,
            SsmlTag.LOOKUP,
        ],
    )
    def test_leaves(self, kind: SsmlTag) -> None:
        assert not can_contain_tags(kind)
        assert not can_contain(kind, CustomTag("x"))
        assert not can_contain(kind, SsmlTag.BREAK)

    def test_speak_never_nests(self) -> None:
        for parent in [SsmlTag.SPEAK, SsmlTag.VOICE, SsmlTag.AUDIO, CustomTag("x")]:
            assert not can_contain(parent, SsmlTag.SPEAK)

    def test_speak_contains_anything_else(self) -> None:
        for child in SsmlTag:
            if child is not SsmlTag.SPEAK:
                assert can_contain(SsmlTag.SPEAK, child)

    def test_paragraph(self) -> None:
        assert can_contain(SsmlTag.PARAGRAPH, SsmlTag.SENTENCE)
        assert can_contain(SsmlTag.PARAGRAPH, SsmlTag.BREAK)
        assert not can_contain(SsmlTag.PARAGRAPH, SsmlTag.PARAGRAPH)
        assert not can_contain(SsmlTag.PARAGRAPH, SsmlTag.META)

    def test_sentence(self) -> None:
        assert can_contain(SsmlTag.SENTENCE, SsmlTag.LOOKUP)
        assert can_contain(SsmlTag.SENTENCE, SsmlTag.WORD)
        assert not can_contain(SsmlTag.SENTENCE, SsmlTag.SENTENCE)
        assert not can_contain(SsmlTag.SENTENCE, SsmlTag.PARAGRAPH)
        assert not can_contain(SsmlTag.SENTENCE, SsmlTag.DESCRIPTION)

    def test_emphasis_matches_sentence(self) -> None:
        for child in SsmlTag:
            assert can_contain(SsmlTag.EMPHASIS, child) == can_contain(SsmlTag.SENTENCE, child)

    def test_token_and_word(self) -> None:
        for parent in (SsmlTag.TOKEN, SsmlTag.WORD):
            assert can_contain(parent, SsmlTag.PHONEME)
            assert can_contain(parent, SsmlTag.SAY_AS)
            assert can_contain(parent, CustomTag("x"))
            assert not can_contain(parent, SsmlTag.TOKEN)
            assert not can_contain(parent, SsmlTag.LANG)
            assert not can_contain(parent, SsmlTag.VOICE)

    def test_open_containers(self) -> None:
        for parent in (SsmlTag.VOICE, SsmlTag.LANG, SsmlTag.PROSODY, SsmlTag.AUDIO):
            assert can_contain(parent, SsmlTag.PARAGRAPH)
            assert can_contain(parent, SsmlTag.DESCRIPTION)

    def test_custom_parent_contains_anything_but_speak(self) -> None:
        assert can_contain(CustomTag("x"), SsmlTag.PARAGRAPH)
        assert can_contain(CustomTag("x"), CustomTag("y"))

    def test_synthesisable(self) -> None:
        for kind in (SsmlTag.DESCRIPTION, SsmlTag.METADATA, SsmlTag.MARK, SsmlTag.BREAK, SsmlTag.LEXICON, SsmlTag.META):
            assert not is_synthesisable(kind)
        assert is_synthesisable(SsmlTag.SUB)
        assert is_synthesisable(SsmlTag.AUDIO)
        assert is_synthesisable(CustomTag("mstts:express-as"))
        assert is_synthesisable(Sentence().kind)
