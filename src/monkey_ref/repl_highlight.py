"""Live syntax highlighting for the Monkey REPL prompt."""

from __future__ import annotations

from typing import Callable, Iterator, Tuple

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as MkyLexer
from .runtime import Builtins, init_stdlib
from .token_types import TT, Tok

# Highlight group → prompt_toolkit style string
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "builtin": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansibrightblack",
    "error": "bold ansired",
}

_KEYWORDS = (TT.FUNCTION, TT.LET, TT.IF, TT.ELSE, TT.RETURN)
_OPERATORS = (
    TT.ASSIGN, TT.PLUS, TT.MINUS, TT.BANG, TT.ASTERISK, TT.SLASH,
    TT.LT, TT.GT, TT.EQ, TT.NOT_EQ,
)

_TT_GROUP = {
    **{tt: "keyword" for tt in _KEYWORDS},
    **{tt: "operator" for tt in _OPERATORS},
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.INT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.ILLEGAL: "error",
}


def _group_for(tok: Tok) -> str:
    if tok.type == TT.IDENT and tok.literal in Builtins.functions:
        return "builtin"
    return _TT_GROUP.get(tok.type, "punctuation")


def _token_spans(text: str) -> Iterator[Tuple[Tok, int, int]]:
    """Yield (token, start, end) offsets for one line of source."""
    lexer = MkyLexer(text)

    while True:
        tok = lexer.next_token()
        if tok.type == TT.EOF:
            return
        # Single line, so the column is the offset (1-based)
        yield tok, tok.column - 1, lexer.pos


def _plain_gap(gap: str) -> StyleAndTextTuples:
    # Whatever the lexer skipped is whitespace or a trailing comment
    hash_at = gap.find("#")
    if hash_at < 0:
        return [("", gap)]

    out: StyleAndTextTuples = []
    if hash_at:
        out.append(("", gap[:hash_at]))
    out.append((GROUP_STYLE["comment"], gap[hash_at:]))
    return out


def highlight_line(text: str) -> StyleAndTextTuples:
    """Split one line into styled fragments; joined, they give back *text*."""
    if not text:
        return [("", "")]

    init_stdlib()
    fragments: StyleAndTextTuples = []
    pos = 0

    for tok, start, end in _token_spans(text):
        if start > pos:
            fragments.extend(_plain_gap(text[pos:start]))
        fragments.append((GROUP_STYLE[_group_for(tok)], text[start:end]))
        pos = end

    if pos < len(text):
        fragments.extend(_plain_gap(text[pos:]))

    return fragments


class MonkeyLexer(Lexer):
    """prompt_toolkit Lexer backed by the Monkey tokenizer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines
        styled = [highlight_line(line) for line in lines]

        def get_line(lineno: int) -> StyleAndTextTuples:
            if 0 <= lineno < len(styled):
                return styled[lineno]
            return [("", "")]

        return get_line
