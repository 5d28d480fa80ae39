#!/usr/bin/env python3
"""
Program and tape statistics.
"""

from bftape import compile_string, run_string
from bftape.stats import dump_cells, format_stats, program_stats, tape_stats


def test_program_stats():
    stats = program_stats(compile_string("+++[>++<-]."))
    assert stats["instructions"] == 8
    assert stats["operations"] == 11
    assert stats["optimized"] is True
    assert stats["max_loop_depth"] == 1
    assert stats["by_kind"] == {
        "RIGHT": 1,
        "LEFT": 1,
        "INC": 2,
        "DEC": 1,
        "OUTPUT": 1,
        "OPEN": 1,
        "CLOSE": 1,
    }


def test_program_stats_empty():
    stats = program_stats(compile_string("no code"))
    assert stats["instructions"] == 0
    assert stats["by_kind"] == {}
    assert stats["max_loop_depth"] == 0


def test_tape_stats():
    stats = tape_stats(bytes([0, 3, 0, 7, 0]), 3)
    assert stats == {
        "tape_size": 5,
        "nonzero_cells": 2,
        "highest_nonzero": 3,
        "cell_sum": 10,
        "data_pointer": 3,
    }


def test_tape_stats_blank():
    assert tape_stats(bytearray(4), 0)["highest_nonzero"] is None


def test_dump_cells():
    rows = dump_cells(bytes(range(10)), limit=10, width=4)
    assert rows[0] == "    0:   0   1   2   3"
    assert len(rows) == 3


def test_format_stats(hello_world):
    result = run_string(hello_world)
    text = format_stats(result.program, result.execution.tape, result.execution.data_pointer)
    assert "Total instructions:" in text
    assert "Instruction breakdown:" in text
    assert "Final pointer position: 6" in text
