from __future__ import annotations

import enum

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from .lexer import TokenKind


# ---------------- Instruction set ----------------
class OpKind(enum.Enum):
    RIGHT = '>'
    LEFT = '<'
    INC = '+'
    DEC = '-'
    OUTPUT = '.'
    INPUT = ','
    OPEN = '['
    CLOSE = ']'

    @classmethod
    def from_token(cls, kind: TokenKind) -> 'OpKind':
        return cls(kind.value)

    @property
    def foldable(self) -> bool:
        return self in FOLDABLE


FOLDABLE = frozenset({OpKind.RIGHT, OpKind.LEFT, OpKind.INC, OpKind.DEC})


@dataclass(frozen=True)
class Instruction:
    op: OpKind
    count: int = 1  # repeat count; >1 only for folded RIGHT/LEFT/INC/DEC
    target: Optional[int] = None  # index of the matching bracket
    line: int = 0
    column: int = 0

    def with_target(self, target: int) -> 'Instruction':
        return replace(self, target=target)

    def __str__(self) -> str:
        if self.target is not None:
            return f"{self.op.name} -> {self.target}"
        if self.count != 1:
            return f"{self.op.name} x{self.count}"
        return self.op.name


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...]
    source_length: int = 0
    optimized: bool = False

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    @property
    def op_count(self) -> int:
        """Number of single-step source operations this program stands for."""
        return sum(ins.count for ins in self.instructions)

    def check_brackets(self) -> None:
        """Raise AssertionError unless every bracket points at its partner and back."""
        n = len(self.instructions)
        seen_targets = set()
        for i, ins in enumerate(self.instructions):
            if ins.op is OpKind.OPEN:
                j = ins.target
                if j is None or not 0 <= j < n:
                    raise AssertionError(f"OPEN at {i} has bad target {j}")
                partner = self.instructions[j]
                if partner.op is not OpKind.CLOSE:
                    raise AssertionError(f"OPEN at {i} targets {partner.op.name} at {j}")
                if partner.target != i:
                    raise AssertionError(f"CLOSE at {j} points at {partner.target}, expected {i}")
                if j in seen_targets:
                    raise AssertionError(f"target {j} shared by two loops")
                if j <= i:
                    raise AssertionError(f"OPEN at {i} targets earlier index {j}")
                seen_targets.add(j)
            elif ins.op is OpKind.CLOSE:
                k = ins.target
                if k is None or not 0 <= k < n:
                    raise AssertionError(f"CLOSE at {i} has bad target {k}")
                if self.instructions[k].op is not OpKind.OPEN:
                    raise AssertionError(f"CLOSE at {i} targets non-OPEN at {k}")
            else:
                if ins.target is not None:
                    raise AssertionError(f"{ins.op.name} at {i} carries a jump target")
                if ins.count < 1:
                    raise AssertionError(f"{ins.op.name} at {i} has count {ins.count}")


def link_brackets(instructions: Iterable[Instruction]) -> List[Instruction]:
    """
    Fill in jump targets for an already balanced instruction list.

    Used after rewrites that change indices; the parser does its own matching
    because it has to report unbalanced input.
    """
    out = list(instructions)
    stack: List[int] = []
    for i, ins in enumerate(out):
        if ins.op is OpKind.OPEN:
            stack.append(i)
        elif ins.op is OpKind.CLOSE:
            if not stack:
                raise ValueError(f"Unbalanced ']' at instruction {i}")
            j = stack.pop()
            out[j] = out[j].with_target(i)
            out[i] = ins.with_target(j)
    if stack:
        raise ValueError(f"Unbalanced '[' at instruction {stack[-1]}")
    return out


# ---------------- Emit + counts ----------------
def emit(program: Iterable[Instruction]) -> str:
    """Render instructions back to canonical source text."""
    return "".join(ins.op.value * ins.count for ins in program)


def loop_depth(program: Iterable[Instruction]) -> int:
    depth = 0
    deepest = 0
    for ins in program:
        if ins.op is OpKind.OPEN:
            depth += 1
            deepest = max(deepest, depth)
        elif ins.op is OpKind.CLOSE:
            depth -= 1
    return deepest
