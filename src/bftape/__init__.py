
from .api import RunResult, compile_file, compile_string, run_file, run_program, run_string
from .config import RunConfig
from .errors import (
    BFError,
    BFRuntimeError,
    BFSyntaxError,
    ConfigError,
    IOChannelError,
    PointerOutOfBoundsError,
    UnmatchedCloseBracketError,
    UnmatchedOpenBracketError,
)
from .interpreter import ExecutionResult, Interpreter, Status
from .ir import Instruction, OpKind, Program, emit
from .lexer import Token, TokenKind, tokenize
from .optimizer import optimize
from .parser import parse

__all__ = [
    'BFError',
    'BFRuntimeError',
    'BFSyntaxError',
    'ConfigError',
    'ExecutionResult',
    'IOChannelError',
    'Instruction',
    'Interpreter',
    'OpKind',
    'PointerOutOfBoundsError',
    'Program',
    'RunConfig',
    'RunResult',
    'Status',
    'Token',
    'TokenKind',
    'UnmatchedCloseBracketError',
    'UnmatchedOpenBracketError',
    'compile_file',
    'compile_string',
    'emit',
    'optimize',
    'parse',
    'run_file',
    'run_program',
    'run_string',
    'tokenize',
]
