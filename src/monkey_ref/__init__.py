"""Monkey language reference interpreter: lexer, Pratt parser and tree-walking evaluator."""

from .evaluator import eval_expr
from .parser_rd import parse_source
from .runner import run
from .types import Environment, MonkeyParseError

__all__ = ["Environment", "MonkeyParseError", "eval_expr", "parse_source", "run"]
