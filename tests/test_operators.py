from __future__ import annotations

import pytest

from monkey_ref.eval.expr import wrap_int64
from tests.support.harness import run_runtime_case

SCENARIOS = [
    pytest.param("5", ("integer", 5), None, id="int-literal"),
    pytest.param("-10", ("integer", -10), None, id="negate"),
    pytest.param("--5", ("integer", 5), None, id="double-negate"),
    pytest.param("5 + 5 + 5 + 5 - 10", ("integer", 10), None, id="sum-chain"),
    pytest.param("2 * 2 * 2 * 2 * 2", ("integer", 32), None, id="product-chain"),
    pytest.param("-50 + 100 + -50", ("integer", 0), None, id="negatives"),
    pytest.param("5 * 2 + 10", ("integer", 20), None, id="mul-before-add"),
    pytest.param("5 + 2 * 10", ("integer", 25), None, id="mul-binds-tighter"),
    pytest.param("20 + 2 * -10", ("integer", 0), None, id="mul-negative"),
    pytest.param("50 / 2 * 2 + 10", ("integer", 60), None, id="div-mul-left-assoc"),
    pytest.param("2 * (5 + 10)", ("integer", 30), None, id="grouping"),
    pytest.param("3 * 3 * 3 + 10", ("integer", 37), None, id="cube-plus"),
    pytest.param("3 * (3 * 3) + 10", ("integer", 37), None, id="group-inner"),
    pytest.param("(5 + 10 * 2 + 15 / 3) * 2 + -10", ("integer", 50), None, id="mixed"),
    pytest.param("7 / 2", ("integer", 3), None, id="div-truncates"),
    pytest.param("-7 / 2", ("integer", -3), None, id="div-truncates-toward-zero"),
    pytest.param("7 / -2", ("integer", -3), None, id="div-negative-divisor"),
    pytest.param("-7 / -2", ("integer", 3), None, id="div-both-negative"),
    pytest.param("1 / 0", ("error", "division by zero: 1 / 0"), None, id="div-by-zero"),
    pytest.param(
        "9223372036854775807 + 1",
        ("integer", -9223372036854775808),
        None,
        id="add-wraps",
    ),
    pytest.param(
        "-9223372036854775807 - 2",
        ("integer", 9223372036854775807),
        None,
        id="sub-wraps",
    ),
    pytest.param("true", ("bool", True), None, id="true"),
    pytest.param("false", ("bool", False), None, id="false"),
    pytest.param("1 < 2", ("bool", True), None, id="lt"),
    pytest.param("1 > 2", ("bool", False), None, id="gt"),
    pytest.param("1 < 1", ("bool", False), None, id="lt-equal"),
    pytest.param("1 == 1", ("bool", True), None, id="int-eq"),
    pytest.param("1 != 1", ("bool", False), None, id="int-neq"),
    pytest.param("1 != 2", ("bool", True), None, id="int-neq-true"),
    pytest.param("true == true", ("bool", True), None, id="bool-eq"),
    pytest.param("true == false", ("bool", False), None, id="bool-eq-false"),
    pytest.param("true != false", ("bool", True), None, id="bool-neq"),
    pytest.param("(1 < 2) == true", ("bool", True), None, id="compare-result-eq"),
    pytest.param("(1 > 2) == true", ("bool", False), None, id="compare-result-neq"),
    pytest.param("1 == true", ("bool", False), None, id="mixed-eq-is-false"),
    pytest.param("1 != true", ("bool", True), None, id="mixed-neq-is-true"),
    pytest.param("!true", ("bool", False), None, id="bang-true"),
    pytest.param("!false", ("bool", True), None, id="bang-false"),
    pytest.param("!5", ("bool", False), None, id="bang-int"),
    pytest.param("!0", ("bool", False), None, id="bang-zero-is-truthy"),
    pytest.param("!!true", ("bool", True), None, id="bang-bang-true"),
    pytest.param("!!5", ("bool", True), None, id="bang-bang-int"),
    pytest.param('!""', ("bool", False), None, id="bang-empty-string"),
    pytest.param("![]", ("bool", False), None, id="bang-empty-array"),
    pytest.param("![][0]", ("bool", True), None, id="bang-null"),
    pytest.param("[1] == [1]", ("bool", False), None, id="arrays-compare-identity"),
    pytest.param("let a = [1]; a == a", ("bool", True), None, id="same-array-eq"),
    pytest.param('"a" == "a"', ("error", "unknown operator: STRING == STRING"), None, id="string-eq"),
    pytest.param('"a" != "b"', ("error", "unknown operator: STRING != STRING"), None, id="string-neq"),
    pytest.param("-true", ("error", "unknown operator: -BOOLEAN"), None, id="negate-bool"),
    pytest.param("true < false", ("error", "unknown operator: BOOLEAN < BOOLEAN"), None, id="bool-lt"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_operator_scenarios(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(0, 0, id="zero"),
        pytest.param(2**63 - 1, 2**63 - 1, id="max"),
        pytest.param(2**63, -(2**63), id="max-plus-one"),
        pytest.param(-(2**63) - 1, 2**63 - 1, id="min-minus-one"),
        pytest.param(2**64 + 5, 5, id="full-turn"),
    ],
)
def test_wrap_int64(value: int, expected: int) -> None:
    assert wrap_int64(value) == expected


def test_negating_int64_min_wraps() -> None:
    # -9223372036854775808 does not parse as a literal; build it by overflow
    run_runtime_case(
        "let m = 9223372036854775807 + 1; -m",
        ("integer", -9223372036854775808),
        None,
    )
