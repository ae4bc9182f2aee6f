"""Built-in functions (len, puts, etc.) registered via monkey_ref.runtime."""

from __future__ import annotations

from typing import List

from .runtime import register_builtin, wrong_arity, NULL, MkyArray, MkyInteger, MkyString, MkyValue, new_error


def _require_array(name: str, arg: MkyValue):
    if isinstance(arg, MkyArray):
        return None

    return new_error(f"argument to `{name}` must be ARRAY, got {arg.type_name}")


@register_builtin("len")
def std_len(args: List[MkyValue]) -> MkyValue:
    err = wrong_arity(args, 1)
    if err is not None:
        return err

    match args[0]:
        case MkyString(value=s):
            return MkyInteger(len(s))
        case MkyArray(elements=elements):
            return MkyInteger(len(elements))
        case other:
            return new_error(f"argument to `len` not supported, got {other.type_name}")


@register_builtin("first")
def std_first(args: List[MkyValue]) -> MkyValue:
    err = wrong_arity(args, 1) or _require_array("first", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[0] if elements else NULL


@register_builtin("last")
def std_last(args: List[MkyValue]) -> MkyValue:
    err = wrong_arity(args, 1) or _require_array("last", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[-1] if elements else NULL


@register_builtin("rest")
def std_rest(args: List[MkyValue]) -> MkyValue:
    err = wrong_arity(args, 1) or _require_array("rest", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    if not elements:
        return NULL

    return MkyArray(list(elements[1:]))


@register_builtin("push")
def std_push(args: List[MkyValue]) -> MkyValue:
    err = wrong_arity(args, 2) or _require_array("push", args[0])
    if err is not None:
        return err

    # New array; arrays are never mutated in place
    return MkyArray(list(args[0].elements) + [args[1]])


@register_builtin("puts")
def std_puts(args: List[MkyValue]) -> MkyValue:
    for arg in args:
        print(arg.inspect())

    return NULL
