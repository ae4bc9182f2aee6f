"""
Pratt Parser for Monkey

Structure:
- Lexer: token stream pulled on demand (two-token lookahead window)
- Parser: statement dispatch plus Pratt parsing for expressions
- AST: dataclass nodes from ast_nodes

Parse errors never raise. They are collected on ``Parser.errors`` and the
broken statement is skipped, so later statements still get a chance to parse.

Every parse rule starts with ``cur_token`` on the first token of its
construct and returns with ``cur_token`` on the last token it consumed.
Callers do the next advance.
"""

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast_nodes import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from .lexer_rd import Lexer
from .token_types import TT, Tok

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]

INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding power, lowest to highest"""

    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -X or !X
    CALL = 7         # myFunction(X)
    INDEX = 8        # array[index]


PRECEDENCES: Dict[TT, Precedence] = {
    TT.EQ: Precedence.EQUALS,
    TT.NOT_EQ: Precedence.EQUALS,
    TT.LT: Precedence.LESSGREATER,
    TT.GT: Precedence.LESSGREATER,
    TT.PLUS: Precedence.SUM,
    TT.MINUS: Precedence.SUM,
    TT.SLASH: Precedence.PRODUCT,
    TT.ASTERISK: Precedence.PRODUCT,
    TT.LPAREN: Precedence.CALL,
    TT.LBRACKET: Precedence.INDEX,
}

# ============================================================================
# Parser
# ============================================================================

class Parser:
    """
    Pratt parser for Monkey.

    Expression precedence (lowest to highest):
    1. equality (==, !=)
    2. comparison (<, >)
    3. sum (+, -)
    4. product (*, /)
    5. prefix (-, !)
    6. call (fn(args))
    7. index (arr[i])
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.cur_token: Tok = Tok(TT.EOF, "")
        self.peek_token: Tok = Tok(TT.EOF, "")

        self.prefix_parse_fns: Dict[TT, PrefixParseFn] = {
            TT.IDENT: self.parse_identifier,
            TT.INT: self.parse_integer_literal,
            TT.STRING: self.parse_string_literal,
            TT.TRUE: self.parse_boolean,
            TT.FALSE: self.parse_boolean,
            TT.BANG: self.parse_prefix_expression,
            TT.MINUS: self.parse_prefix_expression,
            TT.LPAREN: self.parse_grouped_expression,
            TT.IF: self.parse_if_expression,
            TT.FUNCTION: self.parse_function_literal,
            TT.LBRACKET: self.parse_array_literal,
            TT.LBRACE: self.parse_hash_literal,
        }

        self.infix_parse_fns: Dict[TT, InfixParseFn] = {
            TT.PLUS: self.parse_infix_expression,
            TT.MINUS: self.parse_infix_expression,
            TT.SLASH: self.parse_infix_expression,
            TT.ASTERISK: self.parse_infix_expression,
            TT.EQ: self.parse_infix_expression,
            TT.NOT_EQ: self.parse_infix_expression,
            TT.LT: self.parse_infix_expression,
            TT.GT: self.parse_infix_expression,
            TT.LPAREN: self.parse_call_expression,
            TT.LBRACKET: self.parse_index_expression,
        }

        # Prime cur_token and peek_token
        self.next_token()
        self.next_token()

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TT) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TT) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TT) -> bool:
        """Advance if the next token is token_type, else record a peek error"""
        if self.peek_token_is(token_type):
            self.next_token()
            return True

        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # ========================================================================
    # Errors
    # ========================================================================

    def peek_error(self, token_type: TT) -> None:
        self.errors.append(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: TT) -> None:
        self.errors.append(f"no prefix parse function for {token_type} found")

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse_program(self) -> Program:
        """Parse statements until EOF, skipping the ones that failed"""
        program = Program()

        while not self.cur_token_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()

        return program

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TT.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TT.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        """let <ident> = <expr>[;]"""
        let_tok = self.cur_token

        if not self.expect_peek(TT.IDENT):
            return None

        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TT.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        """return <expr>[;]"""
        return_tok = self.cur_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        start_tok = self.cur_token
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None

        # Optional so bare expressions work in the REPL
        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        return ExpressionStatement(start_tok, expr)

    def parse_block_statement(self) -> BlockStatement:
        """Starting at '{', parse statements up to the closing '}' (or EOF)"""
        block = BlockStatement(self.cur_token)
        self.next_token()

        while not self.cur_token_is(TT.RBRACE) and not self.cur_token_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        return block

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """
        Pratt loop: parse a prefix, then fold in infix operators that bind
        tighter than `precedence`.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left = prefix()

        while not self.peek_token_is(TT.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None or left is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal

        try:
            value = int(literal, 10)
        except ValueError:
            value = None

        if value is None or value > INT64_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None

        return IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self.cur_token_is(TT.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        """!<expr> or -<expr>"""
        tok = self.cur_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None

        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        """( <expr> )"""
        self.next_token()

        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None

        if not self.expect_peek(TT.RPAREN):
            return None

        return expr

    def parse_if_expression(self) -> Optional[Expression]:
        """if (<cond>) { ... } [else { ... }]"""
        tok = self.cur_token

        if not self.expect_peek(TT.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(TT.RPAREN):
            return None

        if not self.expect_peek(TT.LBRACE):
            return None

        consequence = self.parse_block_statement()
        alternative = None

        if self.peek_token_is(TT.ELSE):
            self.next_token()

            if not self.expect_peek(TT.LBRACE):
                return None

            alternative = self.parse_block_statement()

        return IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        """fn(<params>) { ... }"""
        tok = self.cur_token

        if not self.expect_peek(TT.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TT.LBRACE):
            return None

        body = self.parse_block_statement()

        return FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        """Starting at '(', parse identifiers up to ')'"""
        identifiers: List[Identifier] = []

        if self.peek_token_is(TT.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TT.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TT.COMMA):
            self.next_token()
            if not self.expect_peek(TT.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TT.RPAREN):
            return None

        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        tok = self.cur_token

        arguments = self.parse_expression_list(TT.RPAREN)
        if arguments is None:
            return None

        return CallExpression(tok, function, arguments)

    def parse_array_literal(self) -> Optional[Expression]:
        tok = self.cur_token

        elements = self.parse_expression_list(TT.RBRACKET)
        if elements is None:
            return None

        return ArrayLiteral(tok, elements)

    def parse_expression_list(self, end: TT) -> Optional[List[Expression]]:
        """Comma separated expressions, ending with cur_token on `end`"""
        items: List[Expression] = []

        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(TT.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None

        return items

    def parse_index_expression(self, left: Expression) -> Optional[Expression]:
        """<left>[<index>]"""
        tok = self.cur_token

        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None:
            return None

        if not self.expect_peek(TT.RBRACKET):
            return None

        return IndexExpression(tok, left, index)

    def parse_hash_literal(self) -> Optional[Expression]:
        """{ <key>: <value>, ... }"""
        tok = self.cur_token
        pairs: List[Tuple[Expression, Expression]] = []

        if self.peek_token_is(TT.RBRACE):
            self.next_token()
            return HashLiteral(tok, pairs)

        while True:
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None:
                return None

            if not self.expect_peek(TT.COLON):
                return None

            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None

            pairs.append((key, value))

            if self.peek_token_is(TT.RBRACE):
                self.next_token()
                return HashLiteral(tok, pairs)

            if not self.expect_peek(TT.COMMA):
                return None


# ============================================================================
# Entry Points
# ============================================================================

def parse_source(source: str) -> Tuple[Program, List[str]]:
    """
    Parse Monkey source code to AST.

    Returns the Program together with the accumulated parse errors; an empty
    error list means the Program is complete.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


if __name__ == '__main__':
    import sys

    from .ast_nodes import pretty

    program, errors = parse_source(sys.stdin.read())

    for err in errors:
        print(f"Parse error: {err}", file=sys.stderr)

    print(pretty(program))
    sys.exit(1 if errors else 0)
