from __future__ import annotations

import importlib
from typing import Dict, List, Optional

from .types import (
    NULL, TRUE, FALSE, HashKey,
    MkyNull, MkyInteger, MkyBool, MkyString, MkyArray, MkyHash,
    MkyFn, MkyBuiltin, MkyReturnValue, MkyError,
    MkyValue, BuiltinFn, Hashable, Environment, MonkeyParseError,
    native_bool, is_error, is_hashable, new_error, new_enclosed_environment,
)

_STDLIB_INITIALIZED = False


class Builtins:
    functions: Dict[str, MkyBuiltin] = {}


def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("monkey_ref.stdlib")
    _STDLIB_INITIALIZED = True


def register_builtin(name: str):
    def dec(fn: BuiltinFn):
        Builtins.functions[name] = MkyBuiltin(name=name, fn=fn)
        return fn

    return dec


def lookup_builtin(name: str) -> Optional[MkyBuiltin]:
    init_stdlib()
    return Builtins.functions.get(name)


def wrong_arity(args: List[MkyValue], want: int) -> Optional[MkyError]:
    if len(args) != want:
        return new_error(f"wrong number of arguments. got={len(args)}, want={want}")

    return None


def call_function(fn: MkyValue, args: List[MkyValue]) -> MkyValue:
    """
    Apply a callable value:
    - MkyFn: bind parameters in a scope enclosed by the closure environment,
      evaluate the body and unwrap a ReturnValue so it stops at this call.
    - MkyBuiltin: hand the evaluated args to the native callable.
    """
    match fn:
        case MkyFn():
            return _call_mkyfn(fn, args)
        case MkyBuiltin():
            return fn.fn(args)
        case _:
            return new_error(f"not a function: {fn.type_name}")


def _call_mkyfn(fn: MkyFn, args: List[MkyValue]) -> MkyValue:
    from .evaluator import eval_node  # local import to avoid cycle

    if len(args) < len(fn.parameters):
        return new_error(
            f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
        )

    callee_env = new_enclosed_environment(fn.env)

    for param, val in zip(fn.parameters, args):
        callee_env.set(param.value, val)

    result = eval_node(fn.body, callee_env)

    if isinstance(result, MkyReturnValue):
        return result.value

    return result
