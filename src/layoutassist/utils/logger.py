"""
Structured logging for layoutassist.

Tracks each completion request as it flows through namespace resolution,
styleable resolution and candidate assembly, without cluttering the
engine code with formatting.

Logs are organized in date-stamped folders with separate files for each
log level:
  logs/YYYY-MM-DD/debug.log
  logs/YYYY-MM-DD/info.log
  logs/YYYY-MM-DD/warning.log
  logs/YYYY-MM-DD/error.log
"""

import json
import logging
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional


class LayoutAssistLogger:
    """Centralized logger for completion requests."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.logger = logging.getLogger("layoutassist")
            self.json_mode = False
            self.session_start = time.time()
            self.log_dir = None
            self._initialized = True

    def _get_default_log_dir(self) -> Path:
        """Get the default log directory path with today's date."""
        today = datetime.now().strftime("%Y-%m-%d")
        return Path("logs") / today

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[str] = None,
        json_mode: bool = False,
        enable_logging: bool = True,
    ):
        """
        Configure logging output.

        Args:
            level: DEBUG, INFO, WARNING, ERROR (minimum level to log)
            log_dir: Optional directory for logs (default: logs/YYYY-MM-DD/)
            json_mode: Use JSON format for structured parsing
            enable_logging: Enable file logging (default: True)
        """
        if not enable_logging:
            return

        self.json_mode = json_mode
        self.logger.handlers.clear()
        self.logger.setLevel(logging.DEBUG)

        if log_dir:
            self.log_dir = Path(log_dir)
        else:
            self.log_dir = self._get_default_log_dir()

        self.log_dir.mkdir(parents=True, exist_ok=True)

        if json_mode:
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(component)-9s] %(message)s',
                datefmt='%H:%M:%S'
            )

        min_level = getattr(logging, level.upper(), logging.INFO)

        log_levels = [
            (logging.DEBUG, 'debug.log'),
            (logging.INFO, 'info.log'),
            (logging.WARNING, 'warning.log'),
            (logging.ERROR, 'error.log'),
        ]

        for log_level, filename in log_levels:
            if log_level >= min_level:
                log_path = self.log_dir / filename
                handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
                handler.setLevel(log_level)
                handler.setFormatter(formatter)
                handler.addFilter(ComponentFilter())
                # Each file holds exactly one level
                handler.addFilter(lambda record, level=log_level: record.levelno == level)
                self.logger.addHandler(handler)

    def _log(self, level: str, component: str, msg: str, **data):
        """Core logging with structured data."""
        extra = {'component': component, **data}
        getattr(self.logger, level)(msg, extra=extra)

    # === REQUESTS ===

    def completion_request(self, offset: int, tag: Optional[str], attr_name: str):
        self._log('info', 'REQUEST', f"Complete '{attr_name}' on <{tag}> at offset {offset}",
                  offset=offset, tag=tag, attr_name=attr_name)

    def completion_result(self, count: int, incomplete: bool, elapsed: float):
        suffix = " (truncated)" if incomplete else ""
        self._log('info', 'REQUEST', f"Returned {count} items in {elapsed * 1000:.1f}ms{suffix}",
                  count=count, incomplete=incomplete, elapsed=elapsed)

    # === RESOLUTION ===

    def namespaces_resolved(self, namespaces: Iterable):
        pairs = list(namespaces)
        rendered = ', '.join(f"{prefix}={uri}" for prefix, uri in pairs) or "(none)"
        self._log('debug', 'NAMESPACE', f"Fan-out over {len(pairs)} namespaces: {rendered}",
                  namespace_count=len(pairs))

    def packages_resolved(self, namespace: str, packages: Iterable[str]):
        names = list(packages)
        self._log('debug', 'NAMESPACE', f"{namespace} -> {names or '(no packages)'}",
                  namespace=namespace, packages=names)

    def widget_unresolved(self, tag: str, fallback: bool):
        mode = "name-convention fallback" if fallback else "no styleables"
        self._log('debug', 'HIERARCHY', f"Unknown widget <{tag}>, {mode}",
                  tag=tag, fallback=fallback)

    def styleables_resolved(self, tag: str, package: str, names: Iterable[str]):
        names = sorted(names)
        self._log('debug', 'HIERARCHY', f"<{tag}> in {package}: {len(names)} styleables {names}",
                  tag=tag, package=package, styleable_count=len(names))

    # === ERRORS & WARNINGS ===

    def error(self, component: str, message: str, exception: Optional[Exception] = None):
        error_details = message
        if exception:
            tb_str = ''.join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            error_details = f"{message}\n{tb_str}"

        self._log('error', component.upper(), f"ERROR: {error_details}",
                  error=str(exception) if exception else message)

    def warning(self, component: str, message: str):
        self._log('warning', component.upper(), f"WARNING: {message}")


class ComponentFilter(logging.Filter):
    """Tags records from plain module loggers with a component name."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'component'):
            record.component = record.name.rsplit('.', 1)[-1].upper()
        return True


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for machine parsing."""

    _RESERVED = {'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
                 'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
                 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
                 'thread', 'threadName', 'processName', 'process', 'message',
                 'component', 'asctime', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        data = {
            'time': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', 'SYSTEM'),
            'message': record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k not in self._RESERVED:
                data[k] = v
        return json.dumps(data, default=str)


# Global instance
logger = LayoutAssistLogger()
