from __future__ import annotations

from textwrap import dedent

import pytest

from monkey_ref.runtime import MkyError, MonkeyParseError
from tests.support.harness import run_program, run_runtime_case

SCENARIOS = [
    pytest.param("5 + true;", ("error", "type mismatch: INTEGER + BOOLEAN"), None, id="int-plus-bool"),
    pytest.param("5 + true; 5;", ("error", "type mismatch: INTEGER + BOOLEAN"), None, id="error-stops-program"),
    pytest.param("-true", ("error", "unknown operator: -BOOLEAN"), None, id="negate-bool"),
    pytest.param('-"a"', ("error", "unknown operator: -STRING"), None, id="negate-string"),
    pytest.param("true + false;", ("error", "unknown operator: BOOLEAN + BOOLEAN"), None, id="bool-plus-bool"),
    pytest.param(
        "5; true + false; 5",
        ("error", "unknown operator: BOOLEAN + BOOLEAN"),
        None,
        id="error-mid-program",
    ),
    pytest.param(
        "if (10 > 1) { true + false; }",
        ("error", "unknown operator: BOOLEAN + BOOLEAN"),
        None,
        id="error-in-block",
    ),
    pytest.param(
        dedent(
            """\
            if (10 > 1) {
              if (10 > 1) {
                return true + false;
              }
              return 1;
            }
            """
        ),
        ("error", "unknown operator: BOOLEAN + BOOLEAN"),
        None,
        id="error-in-nested-return",
    ),
    pytest.param("foobar", ("error", "identifier not found: foobar"), None, id="unknown-ident"),
    pytest.param('"Hello" - "World"', ("error", "unknown operator: STRING - STRING"), None, id="string-minus"),
    pytest.param(
        '{"name": "Monkey"}[fn(x) { x }];',
        ("error", "unusable as hash key: FUNCTION"),
        None,
        id="fn-hash-key-index",
    ),
    pytest.param(
        "{[1]: 2}",
        ("error", "unusable as hash key: ARRAY"),
        None,
        id="array-hash-key-literal",
    ),
    pytest.param('1 + "a"', ("error", "type mismatch: INTEGER + STRING"), None, id="int-plus-string"),
    pytest.param("[1] + [2]", ("error", "unknown operator: ARRAY + ARRAY"), None, id="array-plus-array"),
    pytest.param("if (-true) { 1 }", ("error", "unknown operator: -BOOLEAN"), None, id="error-in-condition"),
    pytest.param("let x = -true; 1", ("error", "unknown operator: -BOOLEAN"), None, id="error-in-let"),
    pytest.param("[1, -true, 3]", ("error", "unknown operator: -BOOLEAN"), None, id="error-in-array"),
    pytest.param("[1, 2][-true]", ("error", "unknown operator: -BOOLEAN"), None, id="error-in-index"),
    pytest.param(
        "let f = fn() { x }; f()",
        ("error", "identifier not found: x"),
        None,
        id="error-inside-call",
    ),
    pytest.param("let x 5;", None, MonkeyParseError, id="parse-error-raises"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_error_scenarios(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_error_inspect_prefix() -> None:
    result = run_program("foobar")
    assert isinstance(result, MkyError)
    assert result.inspect() == "ERROR: identifier not found: foobar"


def test_let_does_not_bind_on_error() -> None:
    result = run_program("let x = -true; x")
    assert isinstance(result, MkyError)
    assert result.message == "unknown operator: -BOOLEAN"
