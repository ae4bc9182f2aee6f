from __future__ import annotations

from ..ast_nodes import FunctionLiteral
from ..runtime import Environment, MkyFn

def eval_function_literal(node: FunctionLiteral, env: Environment) -> MkyFn:
    # Capture the defining environment by reference; the body runs at call time
    return MkyFn(parameters=list(node.parameters), body=node.body, env=env)
