from __future__ import annotations

from typing import Callable, List

from ..ast_nodes import Node, Statement
from ..runtime import NULL, Environment, MkyError, MkyReturnValue, MkyValue

EvalFunc = Callable[[Node, Environment], MkyValue]

def eval_program(statements: List[Statement], env: Environment, eval_func: EvalFunc) -> MkyValue:
    """Run top-level statements, returning the last value.

    A `return` at top level ends the program and is unwrapped here.
    """
    result: MkyValue = NULL

    for stmt in statements:
        result = eval_func(stmt, env)

        match result:
            case MkyReturnValue(value=value):
                return value
            case MkyError():
                return result

    return result

def eval_block_statement(statements: List[Statement], env: Environment, eval_func: EvalFunc) -> MkyValue:
    """Run a block in the enclosing environment (blocks open no scope).

    ReturnValue is passed up still wrapped so it keeps bubbling to the
    nearest call boundary.
    """
    result: MkyValue = NULL

    for stmt in statements:
        result = eval_func(stmt, env)

        match result:
            case MkyReturnValue() | MkyError():
                return result

    return result
