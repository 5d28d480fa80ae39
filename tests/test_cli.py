#!/usr/bin/env python3
"""
Command line entry point.
"""

import io
import sys

import pytest

from bftape.__main__ import build_parser, main


class _Stdin:
    def __init__(self, data):
        self.buffer = io.BytesIO(data)


@pytest.fixture
def run_cli(monkeypatch, capsysbinary):
    def _run(argv, stdin=b""):
        monkeypatch.setattr(sys, "stdin", _Stdin(stdin))
        code = main(argv)
        out, err = capsysbinary.readouterr()
        return code, out, err

    return _run


def _write(tmp_path, text, name="prog.bf"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_parser_defaults():
    args = build_parser().parse_args(["test.bf"])
    assert args.file == "test.bf"
    assert not args.debug
    assert args.memory_size == 30000
    assert not args.no_optimize
    assert not args.stats
    assert args.step_limit == 0


def test_parser_with_options():
    args = build_parser().parse_args(
        ["--debug", "--memory-size", "50000", "--no-optimize", "--stats", "test.bf"]
    )
    assert args.debug
    assert args.memory_size == 50000
    assert args.no_optimize
    assert args.stats


def test_runs_hello_world(tmp_path, run_cli, hello_world):
    code, out, _ = run_cli([_write(tmp_path, hello_world)])
    assert code == 0
    assert out == b"Hello World!\n"


def test_reads_program_input_from_stdin(tmp_path, run_cli):
    code, out, _ = run_cli([_write(tmp_path, ",[.,]")], stdin=b"abc")
    assert code == 0
    assert out == b"abc"


def test_syntax_error_exit_code(tmp_path, run_cli):
    code, out, err = run_cli([_write(tmp_path, "[[")])
    assert code == 1
    assert out == b""
    assert b"unmatched" in err


def test_runtime_error_exit_code(tmp_path, run_cli):
    code, _, err = run_cli([_write(tmp_path, ">>>"), "--memory-size", "2"])
    assert code == 1
    assert b"outside tape" in err


def test_invalid_memory_size(tmp_path, run_cli):
    code, _, err = run_cli([_write(tmp_path, "+"), "--memory-size", "0"])
    assert code == 1
    assert b"tape_size" in err


def test_missing_file(tmp_path, run_cli):
    code, _, err = run_cli([str(tmp_path / "nope.bf")])
    assert code == 1
    assert b"Couldn't read" in err


def test_step_limit(tmp_path, run_cli):
    code, _, err = run_cli([_write(tmp_path, "+[]"), "--step-limit", "500"])
    assert code == 0
    assert b"Stopped after 500 steps" in err


def test_stats(tmp_path, run_cli):
    code, _, err = run_cli([_write(tmp_path, "+++>++"), "--stats"])
    assert code == 0
    assert b"Program Statistics" in err
    assert b"Total instructions: 3" in err


def test_emit(tmp_path, run_cli):
    code, out, _ = run_cli([_write(tmp_path, "+ + + comment > >"), "--emit"])
    assert code == 0
    assert out == b"+++>>\n"


def test_usage_error_exits_2():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_undecodable_comment_bytes(tmp_path, run_cli):
    path = tmp_path / "latin1.bf"
    path.write_bytes(b"caf\xe9 ++++++++[>++++++++<-]>+.")
    code, out, err = run_cli([str(path)])
    assert code == 0
    assert out == b"A"
    assert b"Traceback" not in err
