"""
Lexer for Monkey - feeds the Pratt parser

Turns Monkey source code into tokens, one at a time.

Features:
- On-demand scanning (next_token), infinite EOF once exhausted
- Position tracking (line, column)
- Unknown characters become ILLEGAL tokens instead of raising
"""

from typing import List

from .token_types import TT, Tok, lookup_ident

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Monkey lexer.

    The parser pulls tokens with next_token(); after the end of input every
    call returns an EOF token, so callers never see an exhausted stream.
    """

    # Operator mapping: longest matches first to handle prefixes correctly
    OPERATORS = [
        # Two-character operators
        ('==', TT.EQ),
        ('!=', TT.NOT_EQ),

        # Single-character operators
        ('=', TT.ASSIGN),
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('!', TT.BANG),
        ('*', TT.ASTERISK),
        ('/', TT.SLASH),
        ('<', TT.LT),
        ('>', TT.GT),
        (',', TT.COMMA),
        (';', TT.SEMICOLON),
        (':', TT.COLON),
        ('(', TT.LPAREN),
        (')', TT.RPAREN),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('[', TT.LBRACKET),
        (']', TT.RBRACKET),
    ]

    WHITESPACE = (' ', '\t', '\r', '\n')

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    # ========================================================================
    # Character Navigation
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character, '\\0' past the end"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, count: int = 1) -> str:
        """Consume characters, keeping line/column current"""
        consumed = self.source[self.pos:self.pos + count]
        for ch in consumed:
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += len(consumed)
        return consumed

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def next_token(self) -> Tok:
        """Scan and return the next token"""
        self.skip_whitespace()

        line, column = self.line, self.column

        if self.pos >= len(self.source):
            return Tok(TT.EOF, "", line, column)

        ch = self.peek()

        if ch == '"':
            return Tok(TT.STRING, self.scan_string(), line, column)

        if ch.isascii() and ch.isdigit():
            return Tok(TT.INT, self.scan_number(), line, column)

        if is_letter(ch):
            ident = self.scan_identifier()
            return Tok(lookup_ident(ident), ident, line, column)

        for op, token_type in self.OPERATORS:
            if self.source.startswith(op, self.pos):
                self.advance(len(op))
                return Tok(token_type, op, line, column)

        return Tok(TT.ILLEGAL, self.advance(), line, column)

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list ending with one EOF"""
        tokens: List[Tok] = []

        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TT.EOF:
                return tokens

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def skip_whitespace(self):
        """Skip whitespace and # comments"""
        while self.pos < len(self.source):
            ch = self.peek()
            if ch in self.WHITESPACE:
                self.advance()
            elif ch == '#':
                while self.pos < len(self.source) and self.peek() != '\n':
                    self.advance()
            else:
                return

    def scan_string(self) -> str:
        """Scan string literal "...", returning its contents"""
        self.advance()  # Opening quote
        start = self.pos

        # Unterminated strings run to end of input
        while self.pos < len(self.source) and self.peek() != '"':
            self.advance()

        content = self.source[start:self.pos]
        if self.pos < len(self.source):
            self.advance()  # Closing quote

        return content

    def scan_number(self) -> str:
        start = self.pos
        while self.peek().isascii() and self.peek().isdigit():
            self.advance()
        return self.source[start:self.pos]

    def scan_identifier(self) -> str:
        start = self.pos
        while is_letter(self.peek()) or (self.peek().isascii() and self.peek().isdigit()):
            self.advance()
        return self.source[start:self.pos]


def is_letter(ch: str) -> bool:
    return ch == '_' or (ch.isascii() and ch.isalpha())


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()


if __name__ == '__main__':
    import sys

    for tok in tokenize(sys.stdin.read()):
        print(tok)
