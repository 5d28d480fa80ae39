from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def _build_context(lines: List[str], line_no_1: int, column: int = 0, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column > 0:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched_open':
        return 'Every "[" needs a "]" later in the program. Check the loop nesting.'
    if kind == 'unmatched_close':
        return 'This "]" closes a loop that was never opened. Remove it or add a "[" before it.'
    if kind == 'pointer':
        return 'Raise the tape size or check the pointer arithmetic around this loop.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigError(BFError, ValueError):
    option: str = ''


@dataclass
class BFSyntaxError(BFError):
    line: int
    column: int
    context: str = ''


@dataclass
class UnmatchedOpenBracketError(BFSyntaxError):
    # (line, column) of every "[" still open at end of input, outermost first
    pending: Tuple[Tuple[int, int], ...] = ()


@dataclass
class UnmatchedCloseBracketError(BFSyntaxError):
    pass


@dataclass
class BFRuntimeError(BFError):
    # Output produced before the failure; filled in by callers that buffer it.
    output: bytes = field(default=b'', compare=False)


@dataclass
class PointerOutOfBoundsError(BFRuntimeError):
    attempted_index: int = 0
    tape_size: int = 0
    ip: int = 0


@dataclass
class IOChannelError(BFRuntimeError):
    operation: str = ''


def _render(kind: str, message: str, source: Optional[str], line: int, column: int) -> Tuple[str, str]:
    if source is None:
        return f"SyntaxError: {message} (line {line}, column {column})", ''
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return f"SyntaxError: {message} (line {line}, column {column})\n{ctx}{hint_block}", ctx


def make_unmatched_open_error(
    *, line: int, column: int, pending: Tuple[Tuple[int, int], ...] = (), source: Optional[str] = None
) -> UnmatchedOpenBracketError:
    text, ctx = _render('unmatched_open', 'unmatched "["', source, line, column)
    return UnmatchedOpenBracketError(message=text, line=line, column=column, context=ctx, pending=pending)


def make_unmatched_close_error(*, line: int, column: int, source: Optional[str] = None) -> UnmatchedCloseBracketError:
    text, ctx = _render('unmatched_close', 'unmatched "]"', source, line, column)
    return UnmatchedCloseBracketError(message=text, line=line, column=column, context=ctx)


def make_pointer_error(*, attempted_index: int, tape_size: int, ip: int) -> PointerOutOfBoundsError:
    hint = _hint_for('pointer')
    return PointerOutOfBoundsError(
        message=(
            f"RuntimeError: data pointer moved to {attempted_index}, outside tape [0, {tape_size})"
            f" (instruction {ip})\nHint: {hint}"
        ),
        attempted_index=attempted_index,
        tape_size=tape_size,
        ip=ip,
    )


def make_io_error(*, operation: str, exc: BaseException) -> IOChannelError:
    direction = 'from input' if operation == 'read' else 'to output'
    return IOChannelError(
        message=f"IOError: failed to {operation} {direction}: {exc}",
        operation=operation,
    )
