"""
Exception types raised by layoutassist.

Missing data (unknown widget, absent styleable, unregistered namespace) is
never an error; it simply contributes no completions. These exceptions are
reserved for malformed requests and unreadable input files.
"""


class LayoutAssistError(Exception):
    """Base class for all layoutassist errors."""


class InvalidRequestError(LayoutAssistError):
    """The completion request does not point at an attribute in the document."""

    def __init__(self, message: str, offset: int = -1):
        super().__init__(message)
        self.offset = offset


class ResourceLoadError(LayoutAssistError):
    """A resource table file could not be read or parsed."""


class WidgetTableError(LayoutAssistError):
    """A widget table file could not be read or parsed."""


class InflateError(LayoutAssistError):
    """A layout could not be inflated into a view tree."""
