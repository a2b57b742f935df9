from .traceback import (
    FunctionInfo,
    TraceFrame,
    collect_frames,
    describe_frame,
    format_raw_traceback,
    frames_from_traceback,
    get_function_info,
    raw_traceback,
)

__all__ = [
    "FunctionInfo",
    "TraceFrame",
    "collect_frames",
    "describe_frame",
    "format_raw_traceback",
    "frames_from_traceback",
    "get_function_info",
    "raw_traceback",
]
