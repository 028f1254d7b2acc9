"""Tests for ssml_parser.validator.

Covers every rule:
- S1 (document parses)
- S2 (voice has attributes)
- S3 (desc only inside audio)
- S4 (custom elements)
"""

from __future__ import annotations

import pytest

from ssml_parser.validator import SSMLValidator, ValidationResult

from samples import AUDIO_EXAMPLE, DESC_EXAMPLE, MICROSOFT_EXAMPLE


@pytest.fixture()
def validator() -> SSMLValidator:
    return SSMLValidator()


def _rules(result: ValidationResult) -> list[str]:
    return [issue.rule for issue in result.issues]


class TestValidDocuments:
    def test_simple_example(self, validator: SSMLValidator, simple_example: str) -> None:
        result = validator.validate(simple_example)
        assert result.valid
        assert result.issues == []

    @pytest.mark.parametrize("ssml", [AUDIO_EXAMPLE, DESC_EXAMPLE], ids=["audio", "desc"])
    def test_w3c_examples(self, validator: SSMLValidator, ssml: str) -> None:
        result = validator.validate(ssml)
        assert result.valid
        assert result.issues == []

    def test_validate_file(self, validator: SSMLValidator, ssml_file) -> None:
        assert validator.validate_file(ssml_file).valid


class TestS1Parse:
    def test_malformed_xml(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak><p>unclosed")
        assert not result.valid
        assert _rules(result) == ["S1"]
        assert result.issues[0].severity == "error"

    def test_invalid_nesting(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak><s><p>x</p></s></speak>")
        assert not result.valid
        assert "<p> cannot be placed inside <s>" in result.issues[0].message

    def test_invalid_attribute(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak><prosody rate="-10%">x</prosody></speak>')
        assert not result.valid
        assert 'rate="-10%"' in result.issues[0].message

    def test_line_reported_for_syntax_errors(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak>\n<p a=1>x</p></speak>")
        assert result.issues[0].line == 2

    def test_undeclared_prefix(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak version="1.1"><mstts:express-as style="cheerful">hi</mstts:express-as></speak>')
        assert not result.valid
        assert _rules(result) == ["S1"]
        assert "mstts" in result.issues[0].message


class TestS2Voice:
    def test_voice_without_attributes(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak><voice>hello</voice></speak>")
        assert result.valid
        assert _rules(result) == ["S2"]
        assert result.issues[0].severity == "warning"

    def test_voice_with_empty_gender_only(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak><voice gender="">hello</voice></speak>')
        assert _rules(result) == ["S2"]

    def test_voice_with_name(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak><voice name="Alice">hello</voice></speak>')
        assert result.issues == []


class TestS3Description:
    def test_desc_outside_audio(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak><voice gender=\"male\">hi<desc>stray</desc></voice></speak>")
        assert result.valid
        assert _rules(result) == ["S3"]

    def test_empty_desc_outside_audio(self, validator: SSMLValidator) -> None:
        result = validator.validate("<speak><desc/>hi</speak>")
        assert _rules(result) == ["S3"]

    def test_desc_inside_audio(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak><audio src="a.wav">x<desc>laugh</desc></audio></speak>')
        assert result.issues == []


class TestS4Custom:
    def test_one_issue_per_custom_name(self, validator: SSMLValidator, custom_tags_example: str) -> None:
        result = validator.validate(custom_tags_example)
        assert result.valid
        assert _rules(result) == ["S4", "S4"]
        assert all(issue.severity == "info" for issue in result.issues)
        assert "mstts:express-as" in result.issues[0].message

    def test_repeated_custom_reported_once(self, validator: SSMLValidator) -> None:
        result = validator.validate('<speak xmlns:x="urn:x"><x:a/><x:a/>hi</speak>')
        assert _rules(result) == ["S4"]

    def test_microsoft_example(self, validator: SSMLValidator) -> None:
        result = validator.validate(MICROSOFT_EXAMPLE)
        assert result.valid
        assert sorted(_rules(result)) == ["S4"] * 6
