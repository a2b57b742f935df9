from .error import (
    DEFAULT_NAME,
    ErrorObject,
    as_error,
    capture_stack_trace,
    create,
    format_header,
    format_stack,
    to_display_string,
    trim_raw_trace,
)

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
