from __future__ import annotations

from typing import Callable

from ..ast_nodes import Identifier, LetStatement, Node
from ..runtime import Environment, MkyValue, NULL, is_error, lookup_builtin, new_error

EvalFunc = Callable[[Node, Environment], MkyValue]

def eval_let_statement(stmt: LetStatement, env: Environment, eval_func: EvalFunc) -> MkyValue:
    value = eval_func(stmt.value, env)
    if is_error(value):
        return value

    env.set(stmt.name.value, value)

    return NULL

def eval_identifier(node: Identifier, env: Environment) -> MkyValue:
    """Environment chain first, then the builtin table."""
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = lookup_builtin(node.value)
    if builtin is not None:
        return builtin

    return new_error(f"identifier not found: {node.value}")
