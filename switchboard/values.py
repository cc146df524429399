"""
Switchboard parsed values.

A parsed value is a small tagged union over the three argument kinds:

    Value
    ├── StringValue   payload: str
    ├── BoolValue     payload: bool
    └── IntValue      payload: int

Each value references the definition it was parsed for, and its payload type
is checked on construction, so a value can never disagree with its kind.
Values support structural matching:

    match board["Count"]:
        case IntValue(_, count): ...
        case EmptyType(): ...

Empty is the falsy singleton returned for names that have no value; its typed
readers give the zero value of each kind ("", 0, False).

coerce(argument, raw) converts raw parser input (token text, or True for a
boolean switch) into the matching Value, raising ValueError/TypeError when the
input does not fit the kind. The registry wraps those into parse faults.
"""
import functools
from typing import final

from .arguments import Argument, Kind
from .utils import mirror


class Value:
    """
    Base of the parsed-value union. Instantiate one of the subclasses.
    """
    __kind__ = None
    __payload__ = object
    __slots__ = ("_definition", "_payload")
    __match_args__ = ("definition", "payload")

    definition = mirror("definition")
    payload = mirror("payload")

    def __init__(self, definition, payload, /):
        if type(self).__kind__ is None:
            raise TypeError(f"type {type(self).__name__!r} cannot be instantiated directly")
        if not isinstance(definition, Argument):
            raise TypeError(f"{type(self).__name__} definition must be an argument")
        if definition.kind is not type(self).__kind__:
            raise TypeError(f"{type(self).__name__} cannot hold a value for a {definition.kind.value} argument")
        if not isinstance(payload, type(self).__payload__) or type(self).__payload__ is int and isinstance(payload, bool):
            raise TypeError(f"{type(self).__name__} payload must be {type(self).__payload__.__name__}")
        self._definition = definition
        self._payload = payload

    @property
    def kind(self):
        return type(self).__kind__

    def as_string(self):
        """
        Textual form of the payload, whatever the kind.
        """
        return str(self._payload)

    def as_int(self):
        raise TypeError(f"{self.definition.name!r} holds a {self.kind.value} value, not an int")

    def as_bool(self):
        raise TypeError(f"{self.definition.name!r} holds a {self.kind.value} value, not a bool")

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) is type(other) and self._definition is other._definition and self._payload == other._payload

    def __hash__(self):
        return hash((type(self), id(self._definition), self._payload))

    def __repr__(self):
        return f"{type(self).__name__}({self._definition.name!r}, {self._payload!r})"

    def __rich_repr__(self):
        yield "name", self._definition.name
        yield "payload", self._payload


class StringValue(Value):
    __kind__ = Kind.STRING
    __payload__ = str
    __slots__ = ()

    def as_string(self):
        return self._payload


class BoolValue(Value):
    __kind__ = Kind.BOOL
    __payload__ = bool
    __slots__ = ()

    def as_bool(self):
        return self._payload


class IntValue(Value):
    __kind__ = Kind.INT
    __payload__ = int
    __slots__ = ()

    def as_int(self):
        return self._payload


@final
class EmptyType:
    """
    Falsy singleton standing for "no value parsed and no default".

    It answers every typed reader with the zero value of the kind, so callers
    that only want a plain value never have to branch on absence.
    """
    __match_args__ = ("definition", "payload")

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    definition = None
    payload = None
    kind = None

    def as_string(self):
        return ""

    def as_int(self):
        return 0

    def as_bool(self):
        return False

    def __bool__(self):
        return False

    def __repr__(self):
        return "Empty"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'EmptyType' is not an acceptable base type")


Empty = EmptyType()


def _parse_bool(text):
    match text.strip().casefold():
        case "true":
            return True
        case "false":
            return False
        case _:
            raise ValueError(f"invalid literal for bool: {text!r}")


def coerce(argument, raw, /):
    """
    Build the Value of 'argument' from raw parser input.

    - STRING: text is kept verbatim (other inputs are converted with str()).
    - BOOL: True/False, or the words "true"/"false" (any case).
    - INT: int() of the text; booleans are rejected.

    Raises
    - ValueError / TypeError when 'raw' cannot be converted.
    """
    match argument.kind:
        case Kind.STRING:
            return StringValue(argument, raw if isinstance(raw, str) else str(raw))
        case Kind.BOOL:
            if isinstance(raw, bool):
                return BoolValue(argument, raw)
            if isinstance(raw, str):
                return BoolValue(argument, _parse_bool(raw))
            raise TypeError(f"cannot convert {type(raw).__name__} to bool")
        case Kind.INT:
            if isinstance(raw, bool):
                raise TypeError("cannot convert bool to int")
            return IntValue(argument, int(raw))
        case _:
            raise TypeError(f"unknown argument kind {argument.kind!r}")


__all__ = (
    "Value",
    "StringValue",
    "BoolValue",
    "IntValue",
    "EmptyType",
    "Empty",
    "coerce",
)
