from __future__ import annotations

from typing import Callable

from ..ast_nodes import CallExpression, IndexExpression, Node
from ..runtime import NULL, Environment, MkyArray, MkyHash, MkyInteger, MkyValue, call_function, is_error, is_hashable, new_error
from .literals import eval_expressions

EvalFunc = Callable[[Node, Environment], MkyValue]

def eval_call_expression(node: CallExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    fn = eval_func(node.function, env)
    if is_error(fn):
        return fn

    args = eval_expressions(node.arguments, env, eval_func)
    if is_error(args):
        return args

    return call_function(fn, args)

def eval_index_expression(node: IndexExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    left = eval_func(node.left, env)
    if is_error(left):
        return left

    index = eval_func(node.index, env)
    if is_error(index):
        return index

    return apply_index(left, index)

def apply_index(left: MkyValue, index: MkyValue) -> MkyValue:
    match left:
        case MkyArray(elements=elements):
            if not isinstance(index, MkyInteger):
                return NULL
            if index.value < 0 or index.value >= len(elements):
                return NULL
            return elements[index.value]
        case MkyHash(pairs=pairs):
            if not is_hashable(index):
                return new_error(f"unusable as hash key: {index.type_name}")
            pair = pairs.get(index.hash_key())
            return NULL if pair is None else pair[1]
        case _:
            return NULL
