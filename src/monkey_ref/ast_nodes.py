"""AST node classes produced by the Pratt parser.

Nodes are plain dataclasses split under two capability bases, ``Statement``
and ``Expression``. Each keeps the token that started it so error messages
can quote ``token_literal()``, and renders a canonical, fully parenthesised
source form through ``str()``.

``to_tree`` converts any node into a Lark ``Tree`` for indented debug dumps.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from lark import Token, Tree

from .token_types import Tok


class Node:
    token: Tok

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


# --- Program Structure ---

@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# --- Statements ---

@dataclass
class LetStatement(Statement):
    token: Tok
    name: Identifier
    value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"


@dataclass
class ReturnStatement(Statement):
    token: Tok
    return_value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.return_value)};"


@dataclass
class ExpressionStatement(Statement):
    token: Tok
    expression: Optional[Expression] = None

    def __str__(self) -> str:
        return _render(self.expression)


@dataclass
class BlockStatement(Statement):
    token: Tok
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# --- Expressions ---

@dataclass
class Identifier(Expression):
    token: Tok
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    token: Tok
    value: int

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class StringLiteral(Expression):
    token: Tok
    value: str

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class Boolean(Expression):
    token: Tok
    value: bool

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class PrefixExpression(Expression):
    token: Tok
    operator: str
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


@dataclass
class InfixExpression(Expression):
    token: Tok
    left: Expression
    operator: str
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {_render(self.right)})"


@dataclass
class IfExpression(Expression):
    token: Tok
    condition: Optional[Expression] = None
    consequence: Optional[BlockStatement] = None
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if{_render(self.condition)} {_render(self.consequence)}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Tok
    parameters: List[Identifier] = field(default_factory=list)
    body: Optional[BlockStatement] = None

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {_render(self.body)}"


@dataclass
class CallExpression(Expression):
    token: Tok
    function: Expression
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class ArrayLiteral(Expression):
    token: Tok
    elements: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass
class IndexExpression(Expression):
    token: Tok
    left: Expression
    index: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.left}[{_render(self.index)}])"


@dataclass
class HashLiteral(Expression):
    token: Tok
    pairs: List[Tuple[Expression, Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"


def _render(node: Optional[Node]) -> str:
    return "" if node is None else str(node)


# ---------------- Debug dumps ----------------

LarkNode = Union[Tree, Token]


def to_tree(node: Optional[Node]) -> LarkNode:
    """Convert an AST node into a Lark Tree; leaves become Lark Tokens."""
    match node:
        case None:
            return Tree('missing', [])
        case Program(statements=stmts):
            return Tree('program', [to_tree(s) for s in stmts])
        case LetStatement(name=name, value=value):
            return Tree('let', [Token('IDENT', name.value), to_tree(value)])
        case ReturnStatement(return_value=value):
            return Tree('return', [to_tree(value)])
        case ExpressionStatement(expression=expr):
            return Tree('expr', [to_tree(expr)])
        case BlockStatement(statements=stmts):
            return Tree('block', [to_tree(s) for s in stmts])
        case Identifier(value=name):
            return Token('IDENT', name)
        case IntegerLiteral() | StringLiteral() | Boolean():
            return Token(node.token.type.name, node.token.literal)
        case PrefixExpression(operator=op, right=right):
            return Tree('prefix', [Token('OP', op), to_tree(right)])
        case InfixExpression(left=left, operator=op, right=right):
            return Tree('infix', [to_tree(left), Token('OP', op), to_tree(right)])
        case IfExpression(condition=cond, consequence=conseq, alternative=alt):
            children = [to_tree(cond), to_tree(conseq)]
            if alt is not None:
                children.append(to_tree(alt))
            return Tree('if', children)
        case FunctionLiteral(parameters=params, body=body):
            param_tree = Tree('params', [Token('IDENT', p.value) for p in params])
            return Tree('fn', [param_tree, to_tree(body)])
        case CallExpression(function=fn, arguments=args):
            return Tree('call', [to_tree(fn), Tree('args', [to_tree(a) for a in args])])
        case ArrayLiteral(elements=elements):
            return Tree('array', [to_tree(e) for e in elements])
        case IndexExpression(left=left, index=index):
            return Tree('index', [to_tree(left), to_tree(index)])
        case HashLiteral(pairs=pairs):
            return Tree('hash', [Tree('pair', [to_tree(k), to_tree(v)]) for k, v in pairs])
        case _:
            raise TypeError(f"Unknown node: {type(node).__name__}")


def pretty(node: Node) -> str:
    tree = to_tree(node)
    if isinstance(tree, Token):
        return f"{tree.type}\t{tree.value!r}\n"
    return tree.pretty()
