from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import List, Optional, Tuple

from .ast_nodes import Program, pretty
from .evaluator import eval_expr
from .parser_rd import parse_source
from .runtime import Environment, MkyValue, MonkeyParseError, init_stdlib
from .utils import debug_py_trace_enabled

USAGE = "usage: monkey [--ast] [FILE | SOURCE | -]"

def parse(src: str) -> Program:
    """Parse source, raising MonkeyParseError with every collected message."""
    program, errors = parse_source(src)

    if errors:
        raise MonkeyParseError(errors)

    return program

def run(src: str, env: Optional[Environment]=None) -> MkyValue:
    init_stdlib()
    program = parse(src)

    return eval_expr(program, env if env is not None else Environment())

def repl_eval(text: str, env: Environment) -> Tuple[MkyValue, Program]:
    """Evaluate one REPL turn; let-bindings land in the shared env."""
    init_stdlib()
    program = parse(text)

    return eval_expr(program, env), program

def _read_source(target: str) -> str:
    """`-` reads stdin, an existing path reads that file, anything else is code."""
    if target == "-":
        text = sys.stdin.read()
        if not text:
            raise SystemExit("No input provided on stdin")
        return text

    path = Path(target)
    if path.is_file():
        return path.read_text(encoding="utf-8")

    return target

def _split_args(argv: List[str]) -> Tuple[bool, str]:
    flags = [a for a in argv if a.startswith("--")]
    positional = [a for a in argv if not a.startswith("--")]

    for flag in flags:
        if flag != "--ast":
            raise SystemExit(f"Unknown option: {flag}\n{USAGE}")

    if len(positional) > 1:
        raise SystemExit(f"Unexpected argument: {positional[1]}")

    return bool(flags), positional[0] if positional else "-"

def main() -> None:
    dump_ast, target = _split_args(sys.argv[1:])
    source = _read_source(target)

    try:
        program = parse(source)
    except MonkeyParseError as exc:
        for err in exc.errors:
            print(f"Parse error: {err}", file=sys.stderr)
        raise SystemExit(1) from None

    if dump_ast:
        print(pretty(program), end="")
        return

    try:
        result = eval_expr(program, Environment())
    except RecursionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            print("Python traceback:", file=sys.stderr)
            traceback.print_tb(exc.__traceback__, file=sys.stderr)
        raise SystemExit(1) from None

    print(result.inspect())

if __name__ == "__main__":
    main()
