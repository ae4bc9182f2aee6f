from __future__ import annotations

from typing import Callable, List

from ..ast_nodes import ArrayLiteral, Boolean, Expression, HashLiteral, IntegerLiteral, Node, StringLiteral
from ..runtime import (
    Environment,
    MkyArray,
    MkyError,
    MkyHash,
    MkyInteger,
    MkyString,
    MkyValue,
    is_error,
    is_hashable,
    native_bool,
    new_error,
)

EvalFunc = Callable[[Node, Environment], MkyValue]

def eval_integer_literal(node: IntegerLiteral, _env: Environment) -> MkyValue:
    return MkyInteger(node.value)

def eval_string_literal(node: StringLiteral, _env: Environment) -> MkyValue:
    return MkyString(node.value)

def eval_boolean_literal(node: Boolean, _env: Environment) -> MkyValue:
    return native_bool(node.value)

def eval_expressions(exprs: List[Expression], env: Environment, eval_func: EvalFunc) -> List[MkyValue] | MkyError:
    """Evaluate left to right; the first Error short-circuits the rest."""
    values: List[MkyValue] = []

    for expr in exprs:
        val = eval_func(expr, env)
        if is_error(val):
            return val
        values.append(val)

    return values

def eval_array_literal(node: ArrayLiteral, env: Environment, eval_func: EvalFunc) -> MkyValue:
    elements = eval_expressions(node.elements, env, eval_func)
    if is_error(elements):
        return elements

    return MkyArray(elements)

def eval_hash_literal(node: HashLiteral, env: Environment, eval_func: EvalFunc) -> MkyValue:
    result = MkyHash()

    for key_node, value_node in node.pairs:
        key = eval_func(key_node, env)
        if is_error(key):
            return key

        if not is_hashable(key):
            return new_error(f"unusable as hash key: {key.type_name}")

        value = eval_func(value_node, env)
        if is_error(value):
            return value

        result.pairs[key.hash_key()] = (key, value)

    return result
