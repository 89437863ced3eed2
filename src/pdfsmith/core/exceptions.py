"""Custom exception hierarchy for the markup-to-PDF pipeline."""

from __future__ import annotations


class PdfsmithError(RuntimeError):
    """Base exception for rendering failures."""


class MalformedMarkupError(PdfsmithError):
    """Raised when the markup cannot be parsed into an element tree."""


class InvalidAttributeError(PdfsmithError):
    """Raised when an attribute value fails its expected coercion."""

    def __init__(self, tag: str, attribute: str, value: str, expected: str) -> None:
        self.tag = tag
        self.attribute = attribute
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid value {value!r} for attribute '{attribute}' on <{tag}>: expected {expected}."
        )


class DocumentBuilderError(PdfsmithError):
    """Base class for conditions raised by a document session."""


class FontNotFoundError(DocumentBuilderError):
    """Raised when a session is asked to select a font it does not know."""

    def __init__(self, font: str) -> None:
        self.font = font
        super().__init__(f"Font '{font}' is not available.")


class UnsupportedColorError(DocumentBuilderError):
    """Raised when a colour value uses a syntax the session does not accept."""


class UnsupportedOptionError(DocumentBuilderError):
    """Raised when a drawing option carries a value the session rejects."""


class NoPageError(DocumentBuilderError):
    """Raised when content is drawn before any page exists."""


class SessionStateError(PdfsmithError):
    """Raised when a session is used outside of the state allowing the call."""


class HandlerRegistrationError(PdfsmithError):
    """Raised when a handler cannot be added to a registry."""


class CompletionError(PdfsmithError):
    """Raised when the completion channel is misused or closed early."""


class RenderTimeoutError(PdfsmithError):
    """Raised when the session does not complete within the allotted time."""


class ConfigurationError(PdfsmithError):
    """Raised when configuration values cannot be loaded or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "CompletionError",
    "ConfigurationError",
    "DocumentBuilderError",
    "FontNotFoundError",
    "HandlerRegistrationError",
    "InvalidAttributeError",
    "MalformedMarkupError",
    "NoPageError",
    "PdfsmithError",
    "RenderTimeoutError",
    "SessionStateError",
    "UnsupportedColorError",
    "UnsupportedOptionError",
    "exception_messages",
]
