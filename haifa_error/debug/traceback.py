from __future__ import annotations

import pathlib
import sys
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class TraceFrame:
    """Represents a single frame of a raw stack dump."""

    function_name: str
    file: str
    line: int


@dataclass(frozen=True)
class FunctionInfo:
    """What ``get_function_info`` knows about where a function was declared."""

    name: str
    source: str
    short_src: str
    line_defined: int


def _frame_from(frame: FrameType, line: Optional[int]) -> TraceFrame:
    code = frame.f_code
    return TraceFrame(
        function_name=code.co_qualname,
        file=code.co_filename,
        # line numbers can be missing on synthetic instructions
        line=code.co_firstlineno if line is None else line,
    )


def collect_frames(level: int = 0) -> list[TraceFrame]:
    """Frames of the live stack, innermost first.

    ``level`` 0 starts at the caller of ``collect_frames``.
    """
    try:
        frame: Optional[FrameType] = sys._getframe(level + 1)
    except ValueError:
        return []
    frames: list[TraceFrame] = []
    while frame is not None:
        frames.append(_frame_from(frame, frame.f_lineno))
        frame = frame.f_back
    return frames


def frames_from_traceback(tb: Optional[TracebackType]) -> list[TraceFrame]:
    frames: list[TraceFrame] = []
    while tb is not None:
        frames.append(_frame_from(tb.tb_frame, tb.tb_lineno))
        tb = tb.tb_next
    # traceback objects run outermost first
    frames.reverse()
    return frames


def describe_frame(frame: TraceFrame) -> str:
    location = f"{frame.file}:{frame.line}"
    if frame.function_name == "<module>":
        return f"{location}: in main chunk"
    return f"{location}: in function '{frame.function_name}'"


def format_raw_traceback(frames: Iterable[TraceFrame]) -> str:
    return "".join(f"{describe_frame(frame)}\n" for frame in frames)


def raw_traceback(level: int = 0) -> str:
    return format_raw_traceback(collect_frames(level + 1))


def get_function_info(func: Any) -> Optional[FunctionInfo]:  # noqa: ANN401
    """Declared name and source of ``func``, or ``None`` when unknown.

    Builtins, C extensions and callables without a code object have no
    retrievable source and yield ``None``.
    """
    target = getattr(func, "__func__", func)
    code = getattr(target, "__code__", None)
    if code is None:
        return None
    source = code.co_filename
    return FunctionInfo(
        name=code.co_qualname,
        source=source,
        short_src=pathlib.Path(source).name if source else source,
        line_defined=code.co_firstlineno,
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
