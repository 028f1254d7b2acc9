"""Rewrite endpoint: re-serialise SSML, optionally dropping custom elements."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ssml_parser import Close, Custom, Empty, Open, ParserEvent, SSMLParser

from ..config import Settings, get_settings

router = APIRouter()


class RewriteRequest(BaseModel):
    ssml: str
    expand_sub: bool | None = None
    strip_custom: bool = False


class RewriteResponse(BaseModel):
    ssml: str
    synthesisable_text: str


def _drop_custom(event: ParserEvent) -> ParserEvent | None:
    if isinstance(event, (Open, Close, Empty)) and isinstance(event.element, Custom):
        return None
    return event


@router.post("/rewrite", response_model=RewriteResponse)
async def rewrite_ssml(
    request: RewriteRequest,
    settings: Settings = Depends(get_settings),
) -> RewriteResponse:
    expand_sub = settings.expand_sub if request.expand_sub is None else request.expand_sub
    doc = SSMLParser(expand_sub=expand_sub).parse(request.ssml)

    if request.strip_custom:
        result = doc.transform(_drop_custom)
    else:
        result = doc.transform(lambda event: event)

    return RewriteResponse(ssml=result.ssml, synthesisable_text=result.synthesisable_text)
