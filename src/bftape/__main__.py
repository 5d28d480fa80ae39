from __future__ import annotations

import argparse
import logging
import sys
import time

from typing import List, Optional

import structlog

from .api import compile_file, run_program
from .config import RunConfig
from .errors import BFError
from .interpreter import Status
from .ir import emit
from .logsetup import configure_logging
from .stats import format_stats

log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Run a Brainfuck program. Program input is read from stdin, output goes to stdout.",
    )
    parser.add_argument("file", help="Brainfuck source file")
    parser.add_argument("-d", "--debug", action="store_true", help="Log every executed instruction to stderr")
    parser.add_argument("-m", "--memory-size", type=int, default=30000, help="Tape size in cells (default 30000)")
    parser.add_argument("--no-optimize", action="store_true", help="Disable run-length folding")
    parser.add_argument("--step-limit", type=int, default=0, help="Stop after N instructions (0 = no limit)")
    parser.add_argument("-s", "--stats", action="store_true", help="Print program statistics to stderr")
    parser.add_argument("--emit", action="store_true", help="Print the compiled program as source and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.debug else "WARNING")

    try:
        config = RunConfig(
            tape_size=args.memory_size,
            optimize=not args.no_optimize,
            step_limit=args.step_limit,
            debug=args.debug,
        )
        program = compile_file(args.file, config=config)
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Couldn't read {args.file}: {e}", file=sys.stderr)
        return 1

    if args.emit:
        sys.stdout.write(emit(program) + "\n")
        return 0

    stdout = sys.stdout.buffer
    start = time.perf_counter()
    try:
        result = run_program(program, config=config, input_data=sys.stdin.buffer, stdout=stdout)
    except BFError as e:
        stdout.flush()
        print(f"\n{e}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start

    log.debug(
        "run complete",
        status=result.execution.status.value,
        steps=result.execution.steps,
        ms=round(elapsed * 1000, 2),
    )
    if result.execution.status is Status.INTERRUPTED:
        print(f"\nStopped after {result.execution.steps} steps (step limit reached)", file=sys.stderr)

    if args.stats:
        print("\n" + format_stats(program, result.execution.tape, result.execution.data_pointer), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
