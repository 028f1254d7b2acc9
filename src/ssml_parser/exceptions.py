"""Custom exception hierarchy for the ssml_parser package."""

from __future__ import annotations


class SSMLError(Exception):
    """Base exception for all ssml_parser errors."""


class InvalidValueError(SSMLError, ValueError):
    """Raised when an attribute value does not match its grammar."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid value {actual!r}: expected {expected}")


class SSMLParseError(SSMLError):
    """Raised when an SSML document cannot be parsed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        location = ""
        if line is not None:
            location = f" (line {line}"
            if column is not None:
                location += f", column {column}"
            location += ")"
        super().__init__(f"{message}{location}")


class XmlMalformedError(SSMLParseError):
    """Raised when the underlying XML is not well-formed."""


class MismatchedCloseError(SSMLParseError):
    """Raised for a close tag without a matching open tag."""

    def __init__(self, name: str, line: int | None = None, column: int | None = None) -> None:
        self.name = name
        super().__init__(f"Close tag </{name}> does not match any open tag", line, column)


class UnclosedTagError(SSMLParseError):
    """Raised when the document ends with tags still open."""

    def __init__(self, name: str, line: int | None = None, column: int | None = None) -> None:
        self.name = name
        super().__init__(f"Tag <{name}> was never closed", line, column)


class NestedSpeakError(SSMLParseError):
    """Raised when a <speak> element appears inside another <speak>."""

    def __init__(self) -> None:
        super().__init__("<speak> cannot be placed inside another <speak>")


class MissingSpeakRootError(SSMLParseError):
    """Raised when the document root is not a <speak> element."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Expected root element <speak>, got <{name}>")


class InvalidNestingError(SSMLParseError):
    """Raised when an element is placed inside a parent that cannot contain it."""

    def __init__(self, parent: object, child: object) -> None:
        # Tag kinds; typed loosely to keep this module free of model imports.
        self.parent = parent
        self.child = child
        super().__init__(f"<{_display(child)}> cannot be placed inside <{_display(parent)}>")


class MissingRequiredAttributeError(SSMLParseError):
    """Raised when a required attribute is absent."""

    def __init__(self, element: str, attribute: str) -> None:
        self.element = element
        self.attribute = attribute
        super().__init__(f"<{element}> is missing required attribute '{attribute}'")


class InvalidAttributeValueError(SSMLParseError):
    """Raised when an attribute value fails its grammar."""

    def __init__(self, element: str, attribute: str, value: str, expected: str) -> None:
        self.element = element
        self.attribute = attribute
        self.value = value
        self.expected = expected
        super().__init__(f'<{element}> {attribute}="{value}" is invalid: expected {expected}')


class UnsupportedSsmlVersionError(InvalidAttributeValueError):
    """Raised when <speak> declares a version other than 1.0 or 1.1."""

    def __init__(self, value: str) -> None:
        super().__init__("speak", "version", value, '"1.0" or "1.1"')


class AmbiguousMetaAttributesError(SSMLParseError):
    """Raised when <meta> has both or neither of name and http-equiv."""

    def __init__(self) -> None:
        super().__init__("<meta> requires exactly one of 'name' or 'http-equiv'")


def _display(kind: object) -> str:
    name = getattr(kind, "value", None) or getattr(kind, "name", None)
    return str(name) if name is not None else str(kind)
