from __future__ import annotations

from ..runtime import MkyBool, MkyNull, MkyValue

def is_truthy(val: MkyValue) -> bool:
    # Only null and false are falsy; 0, "" and [] are truthy
    match val:
        case MkyNull():
            return False
        case MkyBool(value=b):
            return b
        case _:
            return True
