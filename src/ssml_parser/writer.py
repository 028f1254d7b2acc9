"""Render parsed SSML elements back into markup.

Each element type has a fixed attribute emission order so that writing a
document is deterministic.  Optional attributes that are unset are omitted;
``<audio>`` always writes its defaulted attributes.
"""

from __future__ import annotations

from .elements import (
    Audio,
    Break,
    Custom,
    Description,
    Emphasis,
    Lang,
    Lexicon,
    Lookup,
    Mark,
    Meta,
    ParsedElement,
    Phoneme,
    Prosody,
    SayAs,
    Speak,
    Sub,
    Token,
    Voice,
    Word,
    tag_name,
)
from .values import format_number


def escape_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def escape_attribute(value: str) -> str:
    # Literal newlines and tabs would be normalised to spaces on re-parse.
    return (
        escape_text(value)
        .replace("\n", "&#10;")
        .replace("\r", "&#13;")
        .replace("\t", "&#9;")
    )


def _attr(name: str, value: object | None) -> str:
    if value is None:
        return ""
    return f' {name}="{escape_attribute(str(value))}"'


def _attribute_pairs(element: ParsedElement) -> list[tuple[str, object | None]]:
    if isinstance(element, Speak):
        return [
            ("version", element.version),
            ("xml:lang", element.lang),
            ("xml:base", element.base),
            ("onlangfailure", element.on_lang_failure),
            *element.extra_attributes,
        ]
    if isinstance(element, Lexicon):
        return [
            ("uri", element.uri),
            ("xml:id", element.xml_id),
            ("type", element.type),
            ("fetchtimeout", element.fetch_timeout),
        ]
    if isinstance(element, Lookup):
        return [("ref", element.ref)]
    if isinstance(element, Meta):
        return [
            ("content", element.content),
            ("http-equiv", element.http_equiv),
            ("name", element.name),
        ]
    if isinstance(element, (Token, Word)):
        return [("role", element.role)]
    if isinstance(element, SayAs):
        return [
            ("interpret-as", element.interpret_as),
            ("format", element.format),
            ("detail", element.detail),
        ]
    if isinstance(element, Phoneme):
        return [("ph", element.ph), ("alphabet", element.alphabet)]
    if isinstance(element, Sub):
        return [("alias", element.alias)]
    if isinstance(element, Lang):
        return [("xml:lang", element.lang), ("onlangfailure", element.on_lang_failure)]
    if isinstance(element, Voice):
        return [
            ("gender", element.gender),
            ("age", element.age),
            ("variant", element.variant),
            ("name", " ".join(element.name) if element.name else None),
            ("languages", " ".join(str(pair) for pair in element.languages) if element.languages else None),
        ]
    if isinstance(element, Emphasis):
        return [("level", element.level)]
    if isinstance(element, Break):
        return [("strength", element.strength), ("time", element.time)]
    if isinstance(element, Prosody):
        return [
            ("pitch", element.pitch),
            ("contour", element.contour),
            ("range", element.range),
            ("rate", element.rate),
            ("duration", element.duration),
            ("volume", element.volume),
        ]
    if isinstance(element, Audio):
        return [
            ("fetchhint", element.fetch_hint),
            ("clipBegin", element.clip_begin),
            ("repeatCount", element.repeat_count),
            ("soundLevel", f"{format_number(element.sound_level)}dB"),
            ("speed", f"{format_number(round(element.speed * 100, 10))}%"),
            ("src", element.src),
            ("fetchtimeout", element.fetch_timeout),
            ("maxage", element.max_age),
            ("maxstale", element.max_stale),
            ("clipEnd", element.clip_end),
            ("repeatDur", element.repeat_dur),
        ]
    if isinstance(element, Mark):
        return [("name", element.name)]
    if isinstance(element, Custom):
        return list(element.attributes)
    # Metadata, Paragraph, Sentence and Description carry no attributes.
    return []


def attribute_string(element: ParsedElement) -> str:
    """Return the element's attributes as ``' name="value"'`` pairs.

    Namespace declarations made on the element come first.
    """
    pairs = [*element.namespaces, *_attribute_pairs(element)]
    return "".join(_attr(name, value) for name, value in pairs)


def start_tag(element: ParsedElement) -> str:
    tag = f"<{tag_name(element.kind)}{attribute_string(element)}>"
    if isinstance(element, Description):
        tag += escape_text(element.text)
    return tag


def end_tag(element: ParsedElement) -> str:
    return f"</{tag_name(element.kind)}>"


def empty_tag(element: ParsedElement) -> str:
    if isinstance(element, Description) and element.text:
        return start_tag(element) + end_tag(element)
    return f"<{tag_name(element.kind)}{attribute_string(element)}/>"
