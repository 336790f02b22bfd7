"""
Reconstructed literal values.

Values rebuilt syntactically from expressions (variant configs, nested call
arguments) are represented as a closed set of tagged variants instead of an
untyped tree, so consumers dispatch on the concrete class.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class StringValue:
    value: str

    def to_plain(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: int | float

    def to_plain(self) -> int | float:
        return self.value


@dataclass(frozen=True)
class BooleanValue:
    value: bool

    def to_plain(self) -> bool:
        return self.value


@dataclass(frozen=True)
class NullValue:
    def to_plain(self) -> None:
        return None


@dataclass(frozen=True)
class IdentifierValue:
    """A reference to a binding, kept by name only."""

    name: str

    def to_plain(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayValue:
    items: tuple[Value, ...] = ()

    def to_plain(self) -> list[Any]:
        return [item.to_plain() for item in self.items]


@dataclass(frozen=True)
class MappingValue:
    entries: dict[str, Value] = field(default_factory=dict)

    def to_plain(self) -> dict[str, Any]:
        return {key: item.to_plain() for key, item in self.entries.items()}

    def get(self, key: str) -> Value | None:
        return self.entries.get(key)


@dataclass(frozen=True)
class CallValue:
    callee: Value
    arguments: tuple[Value, ...] = ()

    def to_plain(self) -> dict[str, Any]:
        return {
            "type": "call",
            "callee": self.callee.to_plain(),
            "arguments": [arg.to_plain() for arg in self.arguments],
        }


Value = Union[
    StringValue,
    NumberValue,
    BooleanValue,
    NullValue,
    IdentifierValue,
    ArrayValue,
    MappingValue,
    CallValue,
]

EMPTY_STRING = StringValue("")


def iter_strings(value: Value) -> Iterator[str]:
    """Yield every string leaf of a reconstructed value, depth first."""
    if isinstance(value, StringValue):
        yield value.value
    elif isinstance(value, ArrayValue):
        for item in value.items:
            yield from iter_strings(item)
    elif isinstance(value, MappingValue):
        for item in value.entries.values():
            yield from iter_strings(item)
    elif isinstance(value, CallValue):
        yield from iter_strings(value.callee)
        for arg in value.arguments:
            yield from iter_strings(arg)
