from __future__ import annotations

from typing import Any, Dict, List, Union

import numpy as np

from .ir import OpKind, Program, loop_depth

_KIND_ORDER = list(OpKind)


def program_stats(program: Program) -> Dict[str, Any]:
    codes = np.fromiter((_KIND_ORDER.index(ins.op) for ins in program), dtype=np.int64, count=len(program))
    per_kind = np.bincount(codes, minlength=len(_KIND_ORDER))
    return {
        'instructions': len(program),
        'operations': program.op_count,
        'optimized': program.optimized,
        'max_loop_depth': loop_depth(program),
        'by_kind': {kind.name: int(n) for kind, n in zip(_KIND_ORDER, per_kind) if n},
    }


def tape_stats(tape: Union[bytes, bytearray], data_pointer: int) -> Dict[str, Any]:
    cells = np.frombuffer(bytes(tape), dtype=np.uint8)
    nonzero = np.flatnonzero(cells)
    return {
        'tape_size': int(cells.size),
        'nonzero_cells': int(nonzero.size),
        'highest_nonzero': int(nonzero[-1]) if nonzero.size else None,
        'cell_sum': int(cells.sum(dtype=np.int64)),
        'data_pointer': data_pointer,
    }


def dump_cells(tape: Union[bytes, bytearray], *, limit: int = 100, width: int = 8) -> List[str]:
    """First ``limit`` cells, ``width`` per row."""
    cells = np.frombuffer(bytes(tape[:limit]), dtype=np.uint8)
    rows: List[str] = []
    for start in range(0, cells.size, width):
        row = cells[start:start + width]
        rows.append(f"{start:5d}: " + " ".join(f"{int(v):3d}" for v in row))
    return rows


def format_stats(program: Program, tape: Union[bytes, bytearray, None] = None, data_pointer: int = 0) -> str:
    p = program_stats(program)
    lines = [
        "=== Program Statistics ===",
        f"Total instructions: {p['instructions']}",
        f"Source operations: {p['operations']}",
        f"Optimized: {p['optimized']}",
        f"Max loop depth: {p['max_loop_depth']}",
        "",
        "Instruction breakdown:",
    ]
    for name, n in p['by_kind'].items():
        lines.append(f"  {name}: {n}")
    if tape is not None:
        t = tape_stats(tape, data_pointer)
        lines += [
            "",
            f"Tape size: {t['tape_size']}",
            f"Non-zero cells: {t['nonzero_cells']}",
            f"Highest non-zero cell: {t['highest_nonzero']}",
            f"Final pointer position: {t['data_pointer']}",
            "",
        ]
        lines += dump_cells(tape)
    return "\n".join(lines)
