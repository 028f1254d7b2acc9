"""Validation endpoint: lint SSML documents."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ssml_parser import SSMLValidator

from ..config import Settings, get_settings

router = APIRouter()


class ValidateRequest(BaseModel):
    ssml: str
    expand_sub: bool | None = None


class ValidationIssueResponse(BaseModel):
    severity: str
    rule: str
    message: str
    line: int | None = None
    column: int | None = None


class ValidateResponse(BaseModel):
    valid: bool
    issues: list[ValidationIssueResponse]


@router.post("/validate", response_model=ValidateResponse)
async def validate_ssml(
    request: ValidateRequest,
    settings: Settings = Depends(get_settings),
) -> ValidateResponse:
    expand_sub = settings.expand_sub if request.expand_sub is None else request.expand_sub
    validator = SSMLValidator(expand_sub=expand_sub)
    result = validator.validate(request.ssml)

    issues = [
        ValidationIssueResponse(
            severity=issue.severity,
            rule=issue.rule,
            message=issue.message,
            line=issue.line,
            column=issue.column,
        )
        for issue in result.issues
    ]

    return ValidateResponse(valid=result.valid, issues=issues)
