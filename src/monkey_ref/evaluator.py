from __future__ import annotations

from typing import Callable, Dict, Optional

from .ast_nodes import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from .runtime import Environment, MkyValue, init_stdlib

from .eval.blocks import eval_block_statement, eval_program
from .eval.chains import eval_call_expression, eval_index_expression
from .eval.control import eval_if_expression, eval_return_stmt
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_function_literal
from .eval.let import eval_identifier, eval_let_statement
from .eval.literals import (
    eval_array_literal,
    eval_boolean_literal,
    eval_hash_literal,
    eval_integer_literal,
    eval_string_literal,
)

EvalFunc = Callable[[Node, Environment], MkyValue]

# ---------------- Public API ----------------

def eval_expr(ast: Node, env: Optional[Environment]=None) -> MkyValue:
    """Evaluate a parsed tree; a fresh top-level environment when none is given."""
    init_stdlib()

    if env is None:
        env = Environment()

    return eval_node(ast, env)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> MkyValue:
    handler = _NODE_DISPATCH.get(type(n))
    if handler is None:
        raise TypeError(f"Unknown node: {type(n).__name__}")

    return handler(n, env)

# ---------------- Grouping / dispatch ----------------

_NODE_DISPATCH: Dict[type, Callable[..., MkyValue]] = {
    # Statements
    Program: lambda n, env: eval_program(n.statements, env, eval_node),
    BlockStatement: lambda n, env: eval_block_statement(n.statements, env, eval_node),
    ExpressionStatement: lambda n, env: eval_node(n.expression, env),
    LetStatement: lambda n, env: eval_let_statement(n, env, eval_node),
    ReturnStatement: lambda n, env: eval_return_stmt(n, env, eval_node),

    # Expressions
    Identifier: eval_identifier,
    IntegerLiteral: eval_integer_literal,
    StringLiteral: eval_string_literal,
    Boolean: eval_boolean_literal,
    PrefixExpression: lambda n, env: eval_prefix(n, env, eval_node),
    InfixExpression: lambda n, env: eval_infix(n, env, eval_node),
    IfExpression: lambda n, env: eval_if_expression(n, env, eval_node),
    FunctionLiteral: eval_function_literal,
    CallExpression: lambda n, env: eval_call_expression(n, env, eval_node),
    ArrayLiteral: lambda n, env: eval_array_literal(n, env, eval_node),
    IndexExpression: lambda n, env: eval_index_expression(n, env, eval_node),
    HashLiteral: lambda n, env: eval_hash_literal(n, env, eval_node),
}
