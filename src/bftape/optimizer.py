#
# Run-length folding for parsed programs.
#
# Consecutive RIGHT/LEFT/INC/DEC instructions of the same kind become one
# instruction with a count. Brackets and I/O are never merged and end a run.
# Counts are left as plain sums: INC x300 stays 300 and wraps at run time
# exactly like 300 single increments would.
#
from __future__ import annotations

import logging

from typing import Dict, List

import structlog

from .ir import Instruction, Program, link_brackets

log = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


def pack(instructions: List[Instruction]) -> List[Instruction]:
    """Combine adjacent foldable instructions of the same kind. Jump targets are left stale."""
    out: List[Instruction] = []
    i = 0
    while i < len(instructions):
        ins = instructions[i]
        if ins.op.foldable:
            n = 0
            while i < len(instructions) and instructions[i].op is ins.op:
                n += instructions[i].count
                i += 1
            out.append(Instruction(ins.op, count=n, line=ins.line, column=ins.column))
            continue
        out.append(ins)
        i += 1
    return out


def _index_map(instructions: List[Instruction]) -> Dict[int, int]:
    """old index -> new index, for the instructions that survive packing (brackets)."""
    mapping: Dict[int, int] = {}
    new = -1
    prev_op = None
    for old, ins in enumerate(instructions):
        if not (ins.op.foldable and ins.op is prev_op):
            new += 1
        mapping[old] = new
        prev_op = ins.op
    return mapping


def retarget(packed: List[Instruction], mapping: Dict[int, int]) -> List[Instruction]:
    out: List[Instruction] = []
    for ins in packed:
        if ins.target is not None:
            ins = ins.with_target(mapping[ins.target])
        out.append(ins)
    return out


def optimize(program: Program) -> Program:
    """
    Fold repeated operations and recompute jump targets.

    The returned program behaves exactly like the input: same tape writes,
    same I/O, same termination. Only the number of dispatched instructions
    goes down.
    """
    before = list(program.instructions)
    packed = pack(before)
    instructions = retarget(packed, _index_map(before))

    # Targets must agree with a fresh matching of the shorter list.
    if instructions != link_brackets(instructions):
        raise AssertionError("jump targets diverged after folding")

    log.debug(
        "program optimized",
        before=len(before),
        after=len(instructions),
        ops=program.op_count,
    )
    return Program(
        instructions=tuple(instructions),
        source_length=program.source_length,
        optimized=True,
    )
