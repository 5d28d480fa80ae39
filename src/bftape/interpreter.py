from __future__ import annotations

import enum
import logging

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import structlog

from .errors import BFRuntimeError, make_io_error, make_pointer_error
from .ir import OpKind, Program

log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)

DEFAULT_TAPE_SIZE = 30000
DEFAULT_POLL_INTERVAL = 1024

# Small ints for the dispatch loop; comparing ints is cheaper than enum members.
_RIGHT, _LEFT, _INC, _DEC, _OUT, _IN, _OPEN, _CLOSE = range(8)
_CODES = {
    OpKind.RIGHT: _RIGHT,
    OpKind.LEFT: _LEFT,
    OpKind.INC: _INC,
    OpKind.DEC: _DEC,
    OpKind.OUTPUT: _OUT,
    OpKind.INPUT: _IN,
    OpKind.OPEN: _OPEN,
    OpKind.CLOSE: _CLOSE,
}


class Status(enum.Enum):
    COMPLETED = 'completed'
    INTERRUPTED = 'interrupted'


@dataclass(frozen=True)
class ExecutionResult:
    status: Status
    steps: int
    data_pointer: int
    instruction_pointer: int
    tape: bytes


class Interpreter:
    """
    Runs a Program against a private tape.

    The tape is a bytearray of ``tape_size`` zero cells owned by this
    instance, so separate interpreters can run side by side in threads.

    I/O goes through injected channels: ``stdin`` needs ``read(n) -> bytes``
    and ``stdout`` needs ``write(bytes)``. Reading past end of input stores 0.

    Runaway programs are bounded from outside: ``step_limit`` caps executed
    instructions, and ``interrupt`` is polled every ``poll_interval``
    instructions. Either one ends the run with Status.INTERRUPTED.
    """

    def __init__(
        self,
        program: Program,
        *,
        tape_size: int = DEFAULT_TAPE_SIZE,
        stdin: Any = None,
        stdout: Any = None,
        step_limit: Optional[int] = None,
        interrupt: Optional[Callable[[], bool]] = None,
        poll_interval: int = DEFAULT_POLL_INTERVAL,
        debug: bool = False,
    ):
        if tape_size <= 0:
            raise ValueError(f"tape_size must be positive, got {tape_size}")
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self.program = program
        self.tape = bytearray(tape_size)
        self.data_pointer = 0
        self.instruction_pointer = 0
        self.steps = 0
        self.stdin = stdin
        self.stdout = stdout
        self.step_limit = step_limit or None
        self.interrupt = interrupt
        self.poll_interval = poll_interval
        self.debug = debug

        # Decoded once; the loop never touches Instruction objects.
        self._codes: List[int] = [_CODES[ins.op] for ins in program]
        self._args: List[int] = [
            ins.target if ins.target is not None else ins.count for ins in program
        ]

    # ===== I/O =====

    def _read_byte(self) -> int:
        if self.stdin is None:
            return 0
        try:
            data = self.stdin.read(1)
        except (OSError, ValueError) as exc:
            raise make_io_error(operation='read', exc=exc) from exc
        return data[0] if data else 0

    def _write_byte(self, value: int) -> None:
        if self.stdout is None:
            return
        try:
            self.stdout.write(bytes((value,)))
        except (OSError, ValueError) as exc:
            raise make_io_error(operation='write', exc=exc) from exc

    def _flush(self) -> None:
        flush = getattr(self.stdout, 'flush', None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError) as exc:
            raise make_io_error(operation='write', exc=exc) from exc

    # ===== Execution =====

    def run(self) -> ExecutionResult:
        """
        Execute until the instruction pointer runs off the end.

        Returns:
            ExecutionResult with Status.COMPLETED, or Status.INTERRUPTED when
            the step limit or interrupt hook stopped the run

        Raises:
            PointerOutOfBoundsError: a move would leave the tape
            IOChannelError: the input or output channel failed
        """
        if self.debug:
            log.debug(
                "execution started",
                instructions=len(self.program),
                tape_size=len(self.tape),
                step_limit=self.step_limit,
            )
        try:
            status = self._loop()
        except BFRuntimeError:
            log.debug("execution failed", steps=self.steps, ip=self.instruction_pointer, ptr=self.data_pointer)
            # The run's own error wins over a failing flush.
            try:
                self._flush()
            except BFRuntimeError as flush_err:
                log.warning("flush failed after runtime error", error=str(flush_err))
            raise
        self._flush()

        log.debug("execution finished", status=status.value, steps=self.steps)
        return ExecutionResult(
            status=status,
            steps=self.steps,
            data_pointer=self.data_pointer,
            instruction_pointer=self.instruction_pointer,
            tape=bytes(self.tape),
        )

    def _trace(self, ip: int, ptr: int) -> None:
        log.debug("step", ip=ip, ptr=ptr, cell=self.tape[ptr], ins=str(self.program[ip]))

    def _loop(self) -> Status:
        codes = self._codes
        args = self._args
        mem = self.tape
        mem_len = len(mem)
        length = len(codes)
        limit = self.step_limit
        interrupt = self.interrupt
        poll = self.poll_interval
        debug = self.debug

        ip = self.instruction_pointer
        ptr = self.data_pointer
        steps = self.steps
        status = Status.COMPLETED
        try:
            while ip < length:
                if limit is not None and steps >= limit:
                    status = Status.INTERRUPTED
                    break
                if interrupt is not None and steps % poll == 0 and steps and interrupt():
                    status = Status.INTERRUPTED
                    break
                if debug:
                    self._trace(ip, ptr)

                cmd = codes[ip]
                arg = args[ip]
                steps += 1

                if cmd == _INC:
                    mem[ptr] = (mem[ptr] + arg) & 0xFF
                elif cmd == _DEC:
                    mem[ptr] = (mem[ptr] - arg) & 0xFF
                elif cmd == _RIGHT:
                    if ptr + arg >= mem_len:
                        raise make_pointer_error(attempted_index=ptr + arg, tape_size=mem_len, ip=ip)
                    ptr += arg
                elif cmd == _LEFT:
                    if ptr - arg < 0:
                        raise make_pointer_error(attempted_index=ptr - arg, tape_size=mem_len, ip=ip)
                    ptr -= arg
                elif cmd == _OPEN:
                    if mem[ptr] == 0:
                        ip = arg
                elif cmd == _CLOSE:
                    if mem[ptr] != 0:
                        ip = arg
                        continue
                elif cmd == _OUT:
                    self._write_byte(mem[ptr])
                elif cmd == _IN:
                    mem[ptr] = self._read_byte()
                ip += 1
        finally:
            self.instruction_pointer = ip
            self.data_pointer = ptr
            self.steps = steps
        return status
