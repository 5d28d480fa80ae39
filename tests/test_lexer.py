#!/usr/bin/env python3
"""
Tokenizer tests: instruction characters become tokens, everything else is a comment.
"""

import io

from bftape.lexer import CHUNK_SIZE, Token, TokenKind, tokenize


def test_all_eight_instructions():
    kinds = [t.kind for t in tokenize("><+-.,[]")]
    assert kinds == [
        TokenKind.RIGHT,
        TokenKind.LEFT,
        TokenKind.INC,
        TokenKind.DEC,
        TokenKind.OUTPUT,
        TokenKind.INPUT,
        TokenKind.OPEN,
        TokenKind.CLOSE,
    ]


def test_comments_are_skipped():
    tokens = list(tokenize("add one: + and print it ."))
    assert [t.kind for t in tokens] == [TokenKind.INC, TokenKind.OUTPUT]


def test_empty_and_comment_only_source():
    assert list(tokenize("")) == []
    assert list(tokenize("hello world\n no code here")) == []


def test_positions_are_one_based():
    tokens = list(tokenize("+ x\n  ]\n\n."))
    assert tokens == [
        Token(TokenKind.INC, 1, 1),
        Token(TokenKind.CLOSE, 2, 3),
        Token(TokenKind.OUTPUT, 4, 1),
    ]


def test_from_char():
    assert TokenKind.from_char('[') is TokenKind.OPEN
    assert TokenKind.from_char('a') is None
    assert TokenKind.from_char(' ') is None
    assert TokenKind.CLOSE.char == ']'


def test_stream_source_across_chunks():
    """A stream longer than one read chunk gives the same tokens as the string."""
    text = ("+" * (CHUNK_SIZE - 1)) + "\n>" + ("-" * 10)
    from_stream = list(tokenize(io.StringIO(text)))
    assert from_stream == list(tokenize(text))
    assert from_stream[CHUNK_SIZE - 1] == Token(TokenKind.RIGHT, 2, 1)


def test_tokenize_is_lazy():
    it = tokenize("+-")
    assert next(it).kind is TokenKind.INC
    assert next(it).kind is TokenKind.DEC
