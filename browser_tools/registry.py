"""
Tool catalog: ordered name -> (descriptor, handler) table.

Descriptors are plain immutable data (name, description, parameters). Handlers
are registered next to their descriptor with the Catalog.tool decorator and
share one signature: handler(page, arguments) -> outcome.
"""
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

Handler = Callable[[Any, dict], Any]

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


class ToolInputError(ValueError):
    """Arguments missing or not coercible to the declared type."""


@dataclass(frozen=True)
class Param:
    name: str
    type: str  # JSON-Schema primitive: string, number, boolean
    description: str
    required: bool = False
    default: Any = None

    def schema(self) -> dict:
        out = {"type": self.type, "description": self.description}
        if self.default is not None:
            out["default"] = self.default
        return out


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    params: tuple[Param, ...] = ()

    @property
    def required(self) -> list[str]:
        return [p.name for p in self.params if p.required]

    def input_schema(self) -> dict:
        schema: dict = {
            "type": "object",
            "properties": {p.name: p.schema() for p in self.params},
        }
        if self.required:
            schema["required"] = self.required
        return schema

    def to_dict(self) -> dict:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}

    def bind(self, arguments: Mapping[str, Any] | None) -> dict:
        """Check required parameters and fill declared defaults. Undeclared keys pass through."""
        if arguments is None:
            if self.required:
                raise ToolInputError("Arguments are required for tool execution")
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ToolInputError("Arguments must be an object")
        bound = dict(arguments)
        for p in self.params:
            if bound.get(p.name) is not None:
                continue
            if p.required:
                raise ToolInputError(f"Missing required argument: {p.name}")
            if p.default is not None:
                bound[p.name] = p.default
        return bound


class Entry(NamedTuple):
    descriptor: ToolDescriptor
    handler: Handler


class Catalog:
    """Ordered registry; populated once at import time, read-only afterwards."""

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: dict[str, Entry] = {}
        for entry in entries:
            self._add(entry)

    def _add(self, entry: Entry) -> None:
        name = entry.descriptor.name
        if name in self._entries:
            raise ValueError(f"Duplicate tool name: {name}")
        self._entries[name] = entry

    def tool(self, name: str, description: str, *params: Param) -> Callable[[Handler], Handler]:
        def register(handler: Handler) -> Handler:
            self._add(Entry(ToolDescriptor(name, description, tuple(params)), handler))
            return handler
        return register

    def list(self) -> list[ToolDescriptor]:
        return [e.descriptor for e in self._entries.values()]

    def get(self, name: str) -> Entry | None:
        return self._entries.get(name)

    def without(self, names: Iterable[str]) -> "Catalog":
        """Copy of this catalog with the given tools removed."""
        drop = set(names)
        return Catalog(e for n, e in self._entries.items() if n not in drop)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# --- Argument coercion (handlers own their types) ---

def as_str(args: Mapping, name: str) -> str:
    value = args.get(name)
    if value is None:
        raise ToolInputError(f"Missing required argument: {name}")
    return value if isinstance(value, str) else str(value)


def as_int(args: Mapping, name: str) -> int:
    value = args.get(name)
    if isinstance(value, bool):
        raise ToolInputError(f"Argument '{name}' must be a number, got {value!r}")
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise ToolInputError(f"Argument '{name}' must be a number, got {value!r}") from None


def as_float(args: Mapping, name: str) -> float:
    value = args.get(name)
    if isinstance(value, bool):
        raise ToolInputError(f"Argument '{name}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ToolInputError(f"Argument '{name}' must be a number, got {value!r}") from None


def as_bool(args: Mapping, name: str) -> bool:
    value = args.get(name)
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ToolInputError(f"Argument '{name}' must be a boolean, got {value!r}")
