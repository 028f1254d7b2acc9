"""SSML validator -- reports problems in SSML documents without raising.

Rules:

  S1  Document parses (well-formed XML, valid nesting and attributes)  ERROR
  S2  <voice> has at least one attribute                               WARNING
  S3  <desc> appears only inside <audio>                               WARNING
  S4  No custom (non-SSML) elements present                            INFO

S1 covers everything :class:`~ssml_parser.parser.SSMLParser` rejects.  The
remaining rules run over the parsed event log, so they see exactly the
structure the parser accepted.

Spec reference: SSML 1.1, Sections 3.2.1 (voice) and 3.3.3 (desc).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .document import SSMLDocument
from .elements import Audio, Custom, Description, ParsedElement, Voice
from .events import Close, Empty, Open
from .exceptions import SSMLParseError
from .parser import SSMLParser


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding."""

    severity: Literal["error", "warning", "info"]
    rule: str
    message: str
    line: int | None = None
    column: int | None = None


@dataclass
class ValidationResult:
    """Outcome of validating an SSML document."""

    valid: bool = True
    issues: list[ValidationIssue] = field(default_factory=list)


class _Walker:
    """Replays a document's event log and accumulates validation issues."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []
        self._stack: list[ParsedElement] = []
        self._custom_seen: set[str] = set()

    def _add(self, severity: Literal["error", "warning", "info"], rule: str, message: str) -> None:
        self.issues.append(ValidationIssue(severity=severity, rule=rule, message=message))

    def walk(self, doc: SSMLDocument) -> None:
        for event in doc.event_log:
            if isinstance(event, (Open, Empty)):
                self.check(event.element)
                if isinstance(event, Open):
                    self._stack.append(event.element)
            elif isinstance(event, Close):
                self._stack.pop()

    def check(self, element: ParsedElement) -> None:
        if isinstance(element, Voice) and not element.has_attributes:
            self._add("warning", "S2", "<voice> should have at least one attribute")
        elif isinstance(element, Description):
            parent = self._stack[-1] if self._stack else None
            if not isinstance(parent, Audio):
                self._add("warning", "S3", "<desc> is only meaningful inside <audio>")
        elif isinstance(element, Custom) and element.name not in self._custom_seen:
            self._custom_seen.add(element.name)
            self._add("info", "S4", f"Custom element <{element.name}> is not part of SSML 1.1")


class SSMLValidator:
    """Validate SSML documents and collect every finding."""

    def __init__(self, expand_sub: bool = False) -> None:
        self._parser = SSMLParser(expand_sub=expand_sub)

    def validate(self, ssml: str) -> ValidationResult:
        """Validate an SSML string.

        Returns a :class:`ValidationResult` with ``valid=True`` when no
        errors are found (warnings and info issues are allowed).
        """
        result = ValidationResult()

        # S1: the document parses
        try:
            doc = self._parser.parse(ssml)
        except SSMLParseError as exc:
            result.valid = False
            result.issues.append(
                ValidationIssue(
                    severity="error",
                    rule="S1",
                    message=str(exc),
                    line=exc.line,
                    column=exc.column,
                )
            )
            return result

        walker = _Walker()
        walker.walk(doc)
        result.issues = walker.issues
        result.valid = not any(i.severity == "error" for i in result.issues)
        return result

    def validate_file(self, path: str | Path) -> ValidationResult:
        """Validate an SSML file from disk."""
        p = Path(path)
        return self.validate(p.read_text(encoding="utf-8"))
