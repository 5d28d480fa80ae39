from __future__ import annotations

import logging

from typing import Iterable, List, Optional

import structlog

from .errors import make_unmatched_close_error, make_unmatched_open_error
from .ir import Instruction, OpKind, Program
from .lexer import Token

# Silent until logsetup.configure_logging (or the embedding app) sets up logging.
log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


def parse(tokens: Iterable[Token], *, source_length: int = 0, source: Optional[str] = None) -> Program:
    """
    Turn a token stream into an unoptimized Program with resolved jumps.

    Each "[" and its "]" get each other's instruction index as target.
    Passing the program text as ``source`` adds context to error messages.

    Raises:
        UnmatchedCloseBracketError: a "]" with no open loop
        UnmatchedOpenBracketError: input ended with loops still open; the
            innermost one is reported, the rest are in ``pending``
    """
    out: List[Instruction] = []
    stack: List[int] = []

    for tok in tokens:
        op = OpKind.from_token(tok.kind)
        if op is OpKind.OPEN:
            stack.append(len(out))
            out.append(Instruction(op, line=tok.line, column=tok.column))
        elif op is OpKind.CLOSE:
            if not stack:
                raise make_unmatched_close_error(line=tok.line, column=tok.column, source=source)
            start = stack.pop()
            here = len(out)
            out[start] = out[start].with_target(here)
            out.append(Instruction(op, target=start, line=tok.line, column=tok.column))
        else:
            out.append(Instruction(op, line=tok.line, column=tok.column))

    if stack:
        pending = tuple((out[i].line, out[i].column) for i in stack)
        innermost = out[stack[-1]]
        raise make_unmatched_open_error(
            line=innermost.line, column=innermost.column, pending=pending, source=source
        )

    log.debug("program parsed", instructions=len(out), source_length=source_length)
    return Program(instructions=tuple(out), source_length=source_length)
