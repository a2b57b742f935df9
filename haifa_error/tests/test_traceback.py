from __future__ import annotations

import pathlib
import sys
from types import SimpleNamespace

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from haifa_error.debug import (
    TraceFrame,
    collect_frames,
    describe_frame,
    format_raw_traceback,
    frames_from_traceback,
    get_function_info,
    raw_traceback,
)


class Sample:
    def method(self) -> None:
        pass


def _frames_above_me() -> list[TraceFrame]:
    return collect_frames(1)


def _fail() -> None:
    raise ValueError("bad")


def test_collect_frames_starts_at_caller() -> None:
    frames = collect_frames()
    assert frames[0].function_name == "test_collect_frames_starts_at_caller"
    assert frames[0].file == get_function_info(test_collect_frames_starts_at_caller).source
    assert len(frames) > 1


def test_collect_frames_level_skips_frames() -> None:
    frames = _frames_above_me()
    assert frames[0].function_name == "test_collect_frames_level_skips_frames"


def test_collect_frames_beyond_stack_depth_is_empty() -> None:
    assert collect_frames(100_000) == []


def test_describe_frame() -> None:
    assert describe_frame(TraceFrame("run", "app.py", 7)) == "app.py:7: in function 'run'"
    assert describe_frame(TraceFrame("<module>", "app.py", 20)) == "app.py:20: in main chunk"


def test_format_raw_traceback_terminates_every_line() -> None:
    frames = [TraceFrame("Box.open", "box.py", 3), TraceFrame("<module>", "main.py", 1)]
    assert format_raw_traceback(frames) == "box.py:3: in function 'Box.open'\nmain.py:1: in main chunk\n"
    assert format_raw_traceback([]) == ""


def test_raw_traceback_starts_at_caller() -> None:
    raw = raw_traceback()
    first = raw.split("\n")[0]
    assert first.endswith(": in function 'test_raw_traceback_starts_at_caller'")
    assert raw.endswith("\n")


def test_frames_from_traceback_innermost_first() -> None:
    try:
        _fail()
    except ValueError as exc:
        frames = frames_from_traceback(exc.__traceback__)
    assert [frame.function_name for frame in frames] == ["_fail", "test_frames_from_traceback_innermost_first"]
    assert frames_from_traceback(None) == []


def test_function_info_for_plain_function() -> None:
    info = get_function_info(_fail)
    assert info is not None
    assert info.name == "_fail"
    assert info.source == _fail.__code__.co_filename
    assert info.short_src == "test_traceback.py"
    assert info.line_defined == _fail.__code__.co_firstlineno


def test_function_info_for_methods_and_closures() -> None:
    def inner() -> None:
        pass

    assert get_function_info(Sample().method).name == "Sample.method"
    assert get_function_info(Sample.method).name == "Sample.method"
    assert get_function_info(inner).name == "test_function_info_for_methods_and_closures.<locals>.inner"
    assert get_function_info(lambda: None).name.endswith("<lambda>")


def test_function_info_unknown_for_builtins() -> None:
    assert get_function_info(len) is None
    assert get_function_info(object()) is None
    assert get_function_info(None) is None


def test_frames_from_traceback_without_line_number_uses_definition_line() -> None:
    code = SimpleNamespace(co_qualname="load", co_filename="app.py", co_firstlineno=12)
    tb = SimpleNamespace(tb_frame=SimpleNamespace(f_code=code, f_lineno=None), tb_lineno=None, tb_next=None)
    assert frames_from_traceback(tb) == [TraceFrame("load", "app.py", 12)]
    assert format_raw_traceback(frames_from_traceback(tb)) == "app.py:12: in function 'load'\n"
