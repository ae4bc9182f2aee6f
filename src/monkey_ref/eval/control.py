from __future__ import annotations

from typing import Callable

from ..ast_nodes import IfExpression, Node, ReturnStatement
from ..runtime import NULL, Environment, MkyReturnValue, MkyValue, is_error
from .helpers import is_truthy as _is_truthy

EvalFunc = Callable[[Node, Environment], MkyValue]

def eval_if_expression(node: IfExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    condition = eval_func(node.condition, env)
    if is_error(condition):
        return condition

    if _is_truthy(condition):
        return eval_func(node.consequence, env)

    if node.alternative is not None:
        return eval_func(node.alternative, env)

    return NULL

def eval_return_stmt(node: ReturnStatement, env: Environment, eval_func: EvalFunc) -> MkyValue:
    value = eval_func(node.return_value, env)
    if is_error(value):
        return value

    return MkyReturnValue(value)
