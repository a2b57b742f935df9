from __future__ import annotations

import argparse
import logging
import pathlib
import runpy
import sys
from typing import Optional

from .debug import get_function_info
from .error import ErrorObject, as_error, format_header, format_stack

logger = logging.getLogger(__name__)

_RUNNER_SOURCES = tuple(source for source in ("<frozen runpy>", getattr(runpy, "__file__", None)) if source)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="haifa-error",
        description="Run a Python script and report uncaught errors with JavaScript-style stacks",
    )
    parser.add_argument("script", nargs="?", help="Path to Python script (.py)")
    parser.add_argument("-e", "--execute", dest="inline", help="Execute Python code string")
    parser.add_argument("--stack", action="store_true", help="Print the full stack of an uncaught error")
    parser.add_argument("--stack-limit", type=int, help="Keep at most this many frames per captured stack")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.inline and args.script:
        parser.error("cannot use script path and --execute together")
    if not args.inline and not args.script:
        parser.error("missing script or --execute")
    if args.stack_limit is not None and args.stack_limit < 0:
        parser.error("--stack-limit must be zero or positive")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    previous_limit = ErrorObject.stack_trace_limit
    if args.stack_limit is not None:
        ErrorObject.stack_trace_limit = args.stack_limit
    try:
        if args.inline:
            _execute_inline(args.inline)
        else:
            _execute_script(args.script)
        return 0
    except SystemExit as exc:
        if exc.code is None or isinstance(exc.code, int):
            return exc.code or 0
        print(exc.code, file=sys.stderr)
        return 1
    except Exception as exc:
        error = as_error(exc)
        if args.stack:
            print(_user_stack(error), file=sys.stderr)
        else:
            print(f"Execution failed: {format_header(error.name, error.message)}", file=sys.stderr)
        return 1
    finally:
        ErrorObject.stack_trace_limit = previous_limit


def _execute_inline(source: str) -> None:
    logger.debug("executing inline source (%d chars)", len(source))
    code = compile(source, "<inline>", "exec")
    exec(code, {"__name__": "__main__"})


def _execute_script(path: str) -> None:
    script = pathlib.Path(path)
    logger.debug("executing script %s", script)
    saved_path = list(sys.path)
    saved_argv = sys.argv
    sys.path.insert(0, str(script.resolve().parent))
    sys.argv = [path]
    try:
        runpy.run_path(str(script), run_name="__main__")
    finally:
        sys.path[:] = saved_path
        sys.argv = saved_argv


def _user_stack(error: ErrorObject) -> str:
    """Display stack of ``error`` without the frames of this runner."""
    runner_prefixes = tuple(f"{source}:" for source in (*_RUNNER_SOURCES, get_function_info(main).source))
    frames: list[str] = []
    for line in (error._raw_trace or "").split("\n"):
        if line.startswith(runner_prefixes):
            break
        frames.append(line)
    return format_stack(error.name, error.message, "\n".join(frames))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
