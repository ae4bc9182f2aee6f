from __future__ import annotations

from typing import Callable

from ..ast_nodes import InfixExpression, Node, PrefixExpression
from ..runtime import (
    FALSE,
    TRUE,
    Environment,
    MkyInteger,
    MkyString,
    MkyValue,
    is_error,
    native_bool,
    new_error,
)
from .helpers import is_truthy

EvalFunc = Callable[[Node, Environment], MkyValue]

_INT64_SPAN = 2**64
_INT64_MIN = -2**63

def wrap_int64(value: int) -> int:
    """Two's complement wrap, integers never grow past 64 bits."""
    return (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN

def eval_prefix(node: PrefixExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    right = eval_func(node.right, env)
    if is_error(right):
        return right

    return apply_prefix_operator(node.operator, right)

def apply_prefix_operator(op: str, right: MkyValue) -> MkyValue:
    match op:
        case '!':
            return FALSE if is_truthy(right) else TRUE
        case '-':
            if not isinstance(right, MkyInteger):
                return new_error(f"unknown operator: -{right.type_name}")
            return MkyInteger(wrap_int64(-right.value))
        case _:
            return new_error(f"unknown operator: {op}{right.type_name}")

def eval_infix(node: InfixExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    left = eval_func(node.left, env)
    if is_error(left):
        return left

    right = eval_func(node.right, env)
    if is_error(right):
        return right

    return apply_binary_operator(node.operator, left, right)

def apply_binary_operator(op: str, lhs: MkyValue, rhs: MkyValue) -> MkyValue:
    match (lhs, rhs):
        case (MkyInteger(value=a), MkyInteger(value=b)):
            return _integer_infix(op, a, b)
        case (MkyString(value=a), MkyString(value=b)):
            if op != '+':
                return new_error(f"unknown operator: STRING {op} STRING")
            return MkyString(a + b)

    # Booleans and null are singletons, so identity is equality for them
    if op == '==':
        return native_bool(lhs is rhs)
    if op == '!=':
        return native_bool(lhs is not rhs)

    if lhs.type_name != rhs.type_name:
        return new_error(f"type mismatch: {lhs.type_name} {op} {rhs.type_name}")

    return new_error(f"unknown operator: {lhs.type_name} {op} {rhs.type_name}")

def _integer_infix(op: str, a: int, b: int) -> MkyValue:
    match op:
        case '+':
            return MkyInteger(wrap_int64(a + b))
        case '-':
            return MkyInteger(wrap_int64(a - b))
        case '*':
            return MkyInteger(wrap_int64(a * b))
        case '/':
            if b == 0:
                return new_error(f"division by zero: {a} / {b}")
            return MkyInteger(wrap_int64(_truncated_div(a, b)))
        case '<':
            return native_bool(a < b)
        case '>':
            return native_bool(a > b)
        case '==':
            return native_bool(a == b)
        case '!=':
            return native_bool(a != b)
        case _:
            return new_error(f"unknown operator: INTEGER {op} INTEGER")

def _truncated_div(a: int, b: int) -> int:
    # Rounds toward zero, unlike Python's floor division
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q
