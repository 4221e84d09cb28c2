"""
layoutassist - Attribute completion for Android layout XML

Resolves which declared attributes (styleables) apply to a widget tag, taking
the widget's superclass chain and its parent's layout params into account.
"""

__version__ = "0.1.0"
__author__ = "layoutassist Team"

from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.errors import InvalidRequestError, LayoutAssistError

__all__ = [
    "LayoutAttributeCompletionProvider",
    "InvalidRequestError",
    "LayoutAssistError",
    "__version__",
]
