from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, Tuple, Union

from typing_extensions import TypeAlias, TypeGuard

from .ast_nodes import BlockStatement, Identifier

# ---------- Value Model ----------

# Type names, as shown in error messages
INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"


@dataclass(frozen=True)
class HashKey:
    """Content key for hash storage; the type tag keeps 1 and true apart."""
    type_name: str
    value: Union[int, str]


@dataclass(eq=False)
class MkyNull:
    type_name: ClassVar[str] = NULL_OBJ

    def inspect(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class MkyInteger:
    value: int
    type_name: ClassVar[str] = INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)

    def __repr__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class MkyBool:
    value: bool
    type_name: ClassVar[str] = BOOLEAN_OBJ

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, 1 if self.value else 0)

    def __repr__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class MkyString:
    value: str
    type_name: ClassVar[str] = STRING_OBJ

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)

    def __repr__(self) -> str:
        return f'"{self.value}"'


@dataclass(eq=False)
class MkyArray:
    elements: List['MkyValue']
    type_name: ClassVar[str] = ARRAY_OBJ

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"

    def __repr__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class MkyHash:
    # HashKey -> (original key, value); insertion ordered
    pairs: Dict[HashKey, Tuple['Hashable', 'MkyValue']] = field(default_factory=dict)
    type_name: ClassVar[str] = HASH_OBJ

    def inspect(self) -> str:
        items = [f"{k.inspect()}: {v.inspect()}" for k, v in self.pairs.values()]
        return "{" + ", ".join(items) + "}"

    def __repr__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class MkyFn:
    parameters: List[Identifier]
    body: BlockStatement
    env: 'Environment'                 # Closure environment
    type_name: ClassVar[str] = FUNCTION_OBJ

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"

    def __repr__(self) -> str:
        return self.inspect()


BuiltinFn = Callable[[List['MkyValue']], 'MkyValue']


@dataclass(eq=False)
class MkyBuiltin:
    name: str
    fn: BuiltinFn
    type_name: ClassVar[str] = BUILTIN_OBJ

    def inspect(self) -> str:
        return "builtin function"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass(eq=False)
class MkyReturnValue:
    """Internal control-flow wrapper used to implement `return`."""
    value: 'MkyValue'
    type_name: ClassVar[str] = RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()

    def __repr__(self) -> str:
        return f"<return {self.value!r}>"


@dataclass(eq=False)
class MkyError:
    """Evaluation failure, propagated as a value."""
    message: str
    type_name: ClassVar[str] = ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"

    def __repr__(self) -> str:
        return self.inspect()


MkyValue: TypeAlias = (
    MkyNull
    | MkyInteger
    | MkyBool
    | MkyString
    | MkyArray
    | MkyHash
    | MkyFn
    | MkyBuiltin
    | MkyReturnValue
    | MkyError
)

Hashable: TypeAlias = MkyInteger | MkyBool | MkyString

# Process-wide singletons; `==` on these compares identity
NULL = MkyNull()
TRUE = MkyBool(True)
FALSE = MkyBool(False)


def native_bool(value: bool) -> MkyBool:
    return TRUE if value else FALSE


def is_error(value: Optional[MkyValue]) -> TypeGuard[MkyError]:
    return isinstance(value, MkyError)


def is_hashable(value: MkyValue) -> TypeGuard[Hashable]:
    return isinstance(value, (MkyInteger, MkyBool, MkyString))


def new_error(message: str) -> MkyError:
    return MkyError(message)


# ---------- Environment ----------

class Environment:
    def __init__(self, outer: Optional['Environment']=None):
        self.store: Dict[str, MkyValue] = {}
        self.outer = outer

    def get(self, name: str) -> Optional[MkyValue]:
        if name in self.store:
            return self.store[name]

        if self.outer is not None:
            return self.outer.get(name)

        return None

    def set(self, name: str, val: MkyValue) -> MkyValue:
        # Always the innermost scope: inner lets shadow, never rebind outer names
        self.store[name] = val
        return val


def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)


# ---------- Exceptions ----------

class MonkeyParseError(Exception):
    """Raised at the host boundary when a program has syntax errors."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))
