from __future__ import annotations

import logging
from typing import Any, Optional

from .debug import FunctionInfo, format_raw_traceback, frames_from_traceback, get_function_info, raw_traceback

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Error"


def format_header(name: Optional[str], message: Optional[str]) -> str:
    name = name or DEFAULT_NAME
    if message:
        return f"{name}: {message}"
    return name


def format_stack(name: Optional[str], message: Optional[str], raw_trace: Optional[str]) -> str:
    """Build the display stack: header line, then one ``\\tat `` line per frame."""
    lines = (raw_trace or "").split("\n")
    if lines[-1] == "":
        lines.pop()
    return "\n".join([format_header(name, message), *(f"\tat {line}" for line in lines)])


def trim_raw_trace(raw_trace: str, info: Optional[FunctionInfo]) -> str:
    """Drop the frame of ``info`` and every frame above it from ``raw_trace``.

    A frame line matches when it reads ``<source>:<digits>: in function '<name>'``.
    The comparison is literal; ``raw_trace`` comes back unchanged when nothing
    matches or ``info`` is unknown.
    """
    if info is None:
        return raw_trace
    prefix = f"{info.source}:"
    suffix = f": in function '{info.name}'"
    offset = 0
    for line in raw_trace.split("\n"):
        offset += len(line) + 1
        if len(line) <= len(prefix) + len(suffix):
            continue
        if line.startswith(prefix) and line.endswith(suffix) and line[len(prefix) : -len(suffix)].isdigit():
            return raw_trace[offset:]
    return raw_trace


def _limit_raw_trace(raw_trace: str, limit: Optional[int]) -> str:
    if limit is None:
        return raw_trace
    return "\n".join(raw_trace.split("\n")[: max(limit, 0)])


class ErrorObject(Exception):
    """Error value with a JavaScript-style ``name``, ``message`` and ``stack``.

    ``stack`` is a snapshot taken at capture time. Renaming an error after it was
    captured only shows up in ``stack`` after ``capture_stack_trace`` runs again.
    """

    stack_trace_limit: Optional[int] = None

    def __init__(self, message: Any = None) -> None:  # noqa: ANN401
        text = "" if message is None else str(message)
        super().__init__(text)
        self.message = text
        self.name = DEFAULT_NAME
        self._raw_trace: Optional[str] = None
        self._stack: Optional[str] = None
        capture_stack_trace(self, ErrorObject.__init__)

    @property
    def stack(self) -> Optional[str]:
        return self._stack

    def _store_trace(self, raw_trace: str) -> None:
        raw_trace = _limit_raw_trace(raw_trace, self.stack_trace_limit)
        self._raw_trace = raw_trace
        self._stack = format_stack(self.name, self.message, raw_trace)

    def __str__(self) -> str:
        return to_display_string(self)


def _lookup_origin(origin: Any) -> Optional[FunctionInfo]:  # noqa: ANN401
    try:
        return get_function_info(origin)
    except Exception as exc:
        logger.debug("cannot introspect capture origin %r: %s", origin, exc)
        return None


def capture_stack_trace(error: ErrorObject, origin: Any = None) -> None:  # noqa: ANN401
    """Recapture ``error``'s stack from the caller of this function.

    When ``origin`` is given, its frame and everything inside it are hidden, so
    the trace starts at whoever called ``origin``.
    """
    raw_trace = raw_traceback(1)
    if origin is not None:
        info = _lookup_origin(origin)
        trimmed = trim_raw_trace(raw_trace, info)
        if trimmed == raw_trace:
            logger.debug("capture origin %r not found on the stack; keeping full trace", origin)
        raw_trace = trimmed
    error._store_trace(raw_trace)


def create(message: Any = None) -> ErrorObject:  # noqa: ANN401
    error = ErrorObject(message)
    capture_stack_trace(error, create)
    return error


def to_display_string(error: Any) -> str:  # noqa: ANN401
    stack = getattr(error, "stack", None)
    if stack:
        return stack
    name = getattr(error, "name", None)
    if name is None:
        return DEFAULT_NAME
    return format_header(name, getattr(error, "message", None))


def as_error(exc: BaseException) -> ErrorObject:
    """Adapt any raised exception into an ErrorObject carrying its traceback."""
    if isinstance(exc, ErrorObject):
        return exc
    error = ErrorObject(exc)
    error.name = type(exc).__name__
    error._store_trace(format_raw_traceback(frames_from_traceback(exc.__traceback__)))
    return error


__all__ = [
    "DEFAULT_NAME",
    "ErrorObject",
    "as_error",
    "capture_stack_trace",
    "create",
    "format_header",
    "format_stack",
    "to_display_string",
    "trim_raw_trace",
]
