from __future__ import annotations

from typing import List

import pytest

from monkey_ref.ast_nodes import ExpressionStatement, LetStatement
from monkey_ref.lexer_rd import Lexer
from monkey_ref.parser_rd import Parser, Precedence
from monkey_ref.runtime import MonkeyParseError
from monkey_ref.token_types import TT
from tests.support.harness import parse_program, parse_with_errors

FIRST_ERROR_CASES = [
    pytest.param("let x 5;", "expected next token to be =, got INT instead", id="let-missing-assign"),
    pytest.param("let = 10;", "expected next token to be IDENT, got = instead", id="let-missing-name"),
    pytest.param("let 838383;", "expected next token to be IDENT, got INT instead", id="let-int-name"),
    pytest.param(")", "no prefix parse function for ) found", id="stray-rparen"),
    pytest.param("@", "no prefix parse function for ILLEGAL found", id="illegal-char"),
    pytest.param("(1 + 2", "expected next token to be ), got EOF instead", id="unclosed-group"),
    pytest.param("if x { 1 }", "expected next token to be (, got IDENT instead", id="if-no-paren"),
    pytest.param("if (x) 1", "expected next token to be {, got INT instead", id="if-no-brace"),
    pytest.param("fn(x, 1) {}", "expected next token to be IDENT, got INT instead", id="fn-int-param"),
    pytest.param("fn x {}", "expected next token to be (, got IDENT instead", id="fn-no-paren"),
    pytest.param("[1, 2", "expected next token to be ], got EOF instead", id="unclosed-array"),
    pytest.param("add(1, 2", "expected next token to be ), got EOF instead", id="unclosed-call"),
    pytest.param("a[1", "expected next token to be ], got EOF instead", id="unclosed-index"),
    pytest.param('{"a" 1}', "expected next token to be :, got INT instead", id="hash-no-colon"),
    pytest.param('{"a": 1,}', "no prefix parse function for } found", id="hash-trailing-comma"),
    pytest.param('{"a": 1 "b": 2}', "expected next token to be ,, got STRING instead", id="hash-no-comma"),
    pytest.param(
        "9223372036854775808",
        "could not parse 9223372036854775808 as integer",
        id="int-overflow",
    ),
    pytest.param("1 +", "no prefix parse function for EOF found", id="dangling-infix"),
]


@pytest.mark.parametrize("source, message", FIRST_ERROR_CASES)
def test_first_parse_error(source: str, message: str) -> None:
    _, errors = parse_with_errors(source)
    assert errors, f"expected parse errors for {source!r}"
    assert errors[0] == message


def test_errors_accumulate_across_statements() -> None:
    program, errors = parse_with_errors("let x 5; let = 1; let y = 3;")
    assert errors == [
        "expected next token to be =, got INT instead",
        "expected next token to be IDENT, got = instead",
        "no prefix parse function for = found",
    ]
    # Broken statements are dropped; the parse resumes at the next token
    last = program.statements[-1]
    assert isinstance(last, LetStatement)
    assert last.name.value == "y"


def test_single_error_for_bad_let() -> None:
    program, errors = parse_with_errors("let x 5;")
    assert errors == ["expected next token to be =, got INT instead"]
    assert [str(s) for s in program.statements] == ["5"]


def test_largest_int64_literal_parses() -> None:
    program = parse_program("9223372036854775807")
    assert str(program) == "9223372036854775807"


def test_parse_program_raises_with_all_errors() -> None:
    with pytest.raises(MonkeyParseError) as exc_info:
        parse_program("let = 1; )")

    assert exc_info.value.errors == [
        "expected next token to be IDENT, got = instead",
        "no prefix parse function for = found",
        "no prefix parse function for ) found",
    ]
    assert "no prefix parse function for ) found" in str(exc_info.value)


def test_semicolons_are_optional_between_expressions() -> None:
    program = parse_program("5 y")
    assert len(program.statements) == 2
    assert all(isinstance(s, ExpressionStatement) for s in program.statements)


def test_statement_ends_on_its_last_token() -> None:
    parser = Parser(Lexer("let x = 5; y"))
    stmt = parser.parse_statement()
    assert isinstance(stmt, LetStatement)
    assert parser.cur_token.type == TT.SEMICOLON
    assert parser.peek_token.type == TT.IDENT


def test_expression_ends_on_last_token_without_semicolon() -> None:
    parser = Parser(Lexer("1 + 2 y"))
    expr = parser.parse_expression(Precedence.LOWEST)
    assert str(expr) == "(1 + 2)"
    assert parser.cur_token.literal == "2"
    assert parser.peek_token.literal == "y"


def test_parser_primes_two_tokens() -> None:
    parser = Parser(Lexer("a b"))
    assert parser.cur_token.literal == "a"
    assert parser.peek_token.literal == "b"


def test_parse_program_leaves_parser_on_eof() -> None:
    parser = Parser(Lexer("let a = 1; a"))
    program = parser.parse_program()
    assert parser.errors == []
    assert parser.cur_token.type == TT.EOF
    assert len(program.statements) == 2


def test_precedence_order() -> None:
    ordered: List[Precedence] = [
        Precedence.LOWEST,
        Precedence.EQUALS,
        Precedence.LESSGREATER,
        Precedence.SUM,
        Precedence.PRODUCT,
        Precedence.PREFIX,
        Precedence.CALL,
        Precedence.INDEX,
    ]
    assert ordered == sorted(ordered)


def test_empty_source_parses_to_empty_program() -> None:
    program, errors = parse_with_errors("")
    assert errors == []
    assert program.statements == []
    assert program.token_literal() == ""
