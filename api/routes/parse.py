"""Parse endpoint: SSML to normalised text and element spans."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ssml_parser import SSMLParser, tag_name

from ..config import Settings, get_settings

router = APIRouter()


class ParseRequest(BaseModel):
    ssml: str
    expand_sub: bool | None = None


class SpanResponse(BaseModel):
    tag: str
    start: int
    end: int
    text: str


class ParseResponse(BaseModel):
    text: str
    tags: list[SpanResponse]
    event_count: int


@router.post("/parse", response_model=ParseResponse)
async def parse_ssml(
    request: ParseRequest,
    settings: Settings = Depends(get_settings),
) -> ParseResponse:
    expand_sub = settings.expand_sub if request.expand_sub is None else request.expand_sub
    doc = SSMLParser(expand_sub=expand_sub).parse(request.ssml)

    tags = [
        SpanResponse(
            tag=tag_name(span.element.kind),
            start=span.start,
            end=span.end,
            text=doc.text_in_span(span),
        )
        for span in doc.tags()
    ]

    return ParseResponse(text=doc.text, tags=tags, event_count=len(doc.event_log))
