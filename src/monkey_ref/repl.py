"""Interactive Monkey REPL on top of prompt_toolkit.

Each submitted chunk is parsed and evaluated in one environment that lives
for the whole session, so ``let`` bindings carry over between prompts.
Lines starting with ``/`` are REPL commands, not Monkey code.
"""

from __future__ import annotations

import getpass
import re
import sys
import traceback
from typing import Callable, Dict, List, NamedTuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .ast_nodes import LetStatement, pretty
from .lexer_rd import tokenize
from .repl_highlight import MonkeyLexer
from .runner import repl_eval
from .runtime import NULL, Environment, MonkeyParseError, init_stdlib
from .token_types import TT
from .utils import debug_py_trace_enabled, set_debug_py_trace

PROMPT = ">> "
CONTINUATION = "... "

# BOM, zero-width spaces/joiners, NBSP and stray CRs from pasted text
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

_NESTING = {
    TT.LPAREN: 1, TT.LBRACKET: 1, TT.LBRACE: 1,
    TT.RPAREN: -1, TT.RBRACKET: -1, TT.RBRACE: -1,
}

_ON_WORDS = ("on", "1", "true", "yes")
_OFF_WORDS = ("off", "0", "false", "no")


class ReplState:
    """Session state; commands may replace the environment."""

    def __init__(self) -> None:
        self.env = Environment()
        self.show_ast = False


class SlashCommand(NamedTuple):
    help: str
    usage: str
    run: Callable[[ReplState, str], None]


def open_depth(text: str) -> int:
    """Count the (, [ and { in *text* that are still waiting for a closer."""
    depth = 0

    for tok in tokenize(text):
        depth = max(depth + _NESTING.get(tok.type, 0), 0)

    return depth


def normalize(text: str) -> str:
    return _INVISIBLE_RE.sub("", text)


# ---------------- Slash commands ----------------

def _cmd_ast(state: ReplState, _arg: str) -> None:
    state.show_ast = not state.show_ast
    print(f"AST dump: {'on' if state.show_ast else 'off'}")


def _cmd_clear(_state: ReplState, _arg: str) -> None:
    clear()


def _cmd_py_traceback(_state: ReplState, arg: str) -> None:
    choice = arg.lower()

    if choice in _ON_WORDS:
        set_debug_py_trace(True)
    elif choice in _OFF_WORDS:
        set_debug_py_trace(False)
    elif not choice:
        set_debug_py_trace(not debug_py_trace_enabled())
    else:
        print(f"Usage: /py-traceback {SLASH_COMMANDS['/py-traceback'].usage}", file=sys.stderr)
        return

    print(f"Python traceback: {'on' if debug_py_trace_enabled() else 'off'}")


def _cmd_reset(state: ReplState, _arg: str) -> None:
    state.env = Environment()
    print("Environment reset.")


SLASH_COMMANDS: Dict[str, SlashCommand] = {
    "/ast": SlashCommand("Toggle printing the parsed AST", "", _cmd_ast),
    "/clear": SlashCommand("Clear the terminal screen", "", _cmd_clear),
    "/py-traceback": SlashCommand("Toggle Python traceback on errors", "[on|off]", _cmd_py_traceback),
    "/reset": SlashCommand("Start over with an empty environment", "", _cmd_reset),
}


def handle_slash(line: str, state: ReplState) -> bool:
    """Run *line* if it is a slash command; False means it is Monkey code."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    name, _, arg = stripped.partition(" ")
    command = SLASH_COMMANDS.get(name)

    if command is None:
        print(f"Unknown command: {name}", file=sys.stderr)
        return True

    command.run(state, arg.strip())
    return True


class _SlashCompleter(Completer):
    def get_completions(self, document, complete_event):
        typed = document.text_before_cursor
        if not typed.startswith("/") or " " in typed:
            return

        for name, command in SLASH_COMMANDS.items():
            if name.startswith(typed):
                display = f"{name} {command.usage}".rstrip()
                yield Completion(
                    name,
                    start_position=-len(typed),
                    display=display,
                    display_meta=command.help,
                )


# ---------------- Evaluation ----------------

def print_parser_errors(errors: List[str]) -> None:
    print("Woops! We ran into some monkey business here!", file=sys.stderr)
    print(" parser errors:", file=sys.stderr)
    for err in errors:
        print(f"\t{err}", file=sys.stderr)


def eval_turn(text: str, state: ReplState) -> None:
    """Evaluate one submitted chunk and print what it produced."""
    try:
        result, program = repl_eval(text, state.env)
    except MonkeyParseError as exc:
        print_parser_errors(exc.errors)
        return
    except RecursionError as exc:
        # Evaluation recursed past Python's stack limit; keep the session alive
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            print("Python traceback:", file=sys.stderr)
            traceback.print_tb(exc.__traceback__, file=sys.stderr)
        return

    if state.show_ast:
        print(pretty(program), end="")

    # A trailing `let` (or an empty chunk) has nothing to show; any other null is printed
    last = program.statements[-1] if program.statements else None
    if result is NULL and (last is None or isinstance(last, LetStatement)):
        return

    print(result.inspect())


# ---------------- Session ----------------

def _key_bindings() -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add("enter")
    def _submit_or_continue(event):
        buf = event.app.current_buffer
        last_line = buf.document.current_line

        # Unclosed brackets keep the chunk open; a blank line submits anyway
        if open_depth(buf.text) > 0 and last_line.strip():
            buf.insert_text("\n")
            return

        buf.validate_and_handle()

    @bindings.add("backspace")
    def _backspace(event):
        buf = event.app.current_buffer
        buf.delete_before_cursor(1)
        if buf.text.startswith("/"):
            buf.start_completion()

    return bindings


def _make_session() -> PromptSession:
    return PromptSession(
        history=InMemoryHistory(),
        lexer=MonkeyLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=_key_bindings(),
        multiline=True,
        prompt_continuation=CONTINUATION,
    )


def repl() -> None:
    init_stdlib()
    state = ReplState()
    session = _make_session()

    print(f"Hello {getpass.getuser()}! This is the Monkey programming language!")
    print("Feel free to type in commands")

    while True:
        try:
            text = normalize(session.prompt(PROMPT))
        except KeyboardInterrupt:
            continue
        except EOFError:
            print()
            return

        if not text.strip() or handle_slash(text, state):
            continue

        eval_turn(text, state)


if __name__ == "__main__":
    repl()
