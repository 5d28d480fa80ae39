from __future__ import annotations

import io
import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, Union

import structlog

from .config import RunConfig
from .errors import BFRuntimeError
from .interpreter import ExecutionResult, Interpreter
from .ir import Program
from .lexer import tokenize
from .optimizer import optimize
from .parser import parse

log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


@dataclass(frozen=True)
class RunResult:
    program: Program
    execution: ExecutionResult
    output: bytes  # collected output; empty when the caller passed its own stdout


def compile_string(source: str, *, config: Optional[RunConfig] = None) -> Program:
    cfg = config or RunConfig()
    program = parse(tokenize(source), source_length=len(source), source=source)
    if cfg.optimize:
        program = optimize(program)
    return program


def compile_file(path: str | Path, *, config: Optional[RunConfig] = None, encoding: str = "utf-8") -> Program:
    p = Path(path)
    # Undecodable bytes can only be comments; replace them rather than fail.
    return compile_string(p.read_bytes().decode(encoding, errors="replace"), config=config)


def run_program(
    program: Program,
    *,
    config: Optional[RunConfig] = None,
    input_data: Union[bytes, BinaryIO, None] = b"",
    stdout: Any = None,
    interrupt: Optional[Callable[[], bool]] = None,
) -> RunResult:
    """
    Execute an already compiled program.

    ``input_data`` is either the whole input as bytes or a binary stream.
    Without ``stdout`` the output is collected and returned in the result;
    if the run fails, the output produced so far is attached to the error.
    """
    cfg = config or RunConfig()
    stdin = io.BytesIO(input_data) if isinstance(input_data, (bytes, bytearray)) else input_data
    sink = stdout if stdout is not None else io.BytesIO()

    interp = Interpreter(
        program,
        tape_size=cfg.tape_size,
        stdin=stdin,
        stdout=sink,
        step_limit=cfg.step_limit,
        interrupt=interrupt,
        poll_interval=cfg.poll_interval,
        debug=cfg.debug,
    )
    try:
        execution = interp.run()
    except BFRuntimeError as err:
        if stdout is None:
            err.output = sink.getvalue()
        log.warning(
            "run failed",
            error=type(err).__name__,
            steps=interp.steps,
            ip=interp.instruction_pointer,
            ptr=interp.data_pointer,
        )
        raise

    output = sink.getvalue() if stdout is None else b""
    return RunResult(program=program, execution=execution, output=output)


def run_string(
    source: str,
    *,
    config: Optional[RunConfig] = None,
    input_data: Union[bytes, BinaryIO, None] = b"",
    stdout: Any = None,
    interrupt: Optional[Callable[[], bool]] = None,
) -> RunResult:
    program = compile_string(source, config=config)
    return run_program(program, config=config, input_data=input_data, stdout=stdout, interrupt=interrupt)


def run_file(
    path: str | Path,
    *,
    config: Optional[RunConfig] = None,
    input_data: Union[bytes, BinaryIO, None] = b"",
    stdout: Any = None,
    interrupt: Optional[Callable[[], bool]] = None,
    encoding: str = "utf-8",
) -> RunResult:
    program = compile_file(path, config=config, encoding=encoding)
    return run_program(program, config=config, input_data=input_data, stdout=stdout, interrupt=interrupt)
