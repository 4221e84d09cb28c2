"""
Utilities module - logging helpers.
"""

from layoutassist.utils.logger import JsonFormatter, LayoutAssistLogger, logger

__all__ = ["JsonFormatter", "LayoutAssistLogger", "logger"]
