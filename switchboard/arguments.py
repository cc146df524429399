r"""
Switchboard argument definitions.

Overview
- Kind: the closed set of value kinds (STRING, BOOL, INT). Every definition
  and every parsed value is tagged with one of them.
- Definitions
  • StringArgument: a switch followed by free text.
  • IntArgument: a switch followed by an integer.
  • BoolArgument: a presence-only switch; its presence is the value.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: str, the lookup key into parsed values (case-sensitive). Emptiness is
  reported by the registry, not here.
- short / long: Unset | None | str, the switch texts without prefix ("v",
  "verbose"). Blank values mean "unassigned". A leading "-" or "/" or any
  whitespace is rejected.
- descr: Unset | str, multi-line help text.
- default: Unset | value matching the kind.
- mandatory: bool, forced to False for BoolArgument.
- unswitched: bool, marks the definition that absorbs a bare token.
- order: int, help display rank (lower first).

Registration-time rules (duplicate names, switch collisions, a single
unswitched definition) belong to the registry; see switchboard.registry.

Quick example:
    >>> from switchboard.arguments import StringArgument, BoolArgument
    >>> out = StringArgument("OutFile", "o", "out", "the output file", unswitched=True)
    >>> verbose = BoolArgument("Verbose", "v", "verbose", "chatty output")
"""
import functools
import operator
import re
from enum import Enum

from .utils import *


class Kind(Enum):
    """
    tag of a definition and of its parsed values.
    """
    STRING = "string"
    BOOL = "bool"
    INT = "int"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class ArgumentType(type):
    """
    Metaclass that turns definitions into introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics (rich.pretty) and fault context.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - string-argument(name='OutFile', short='o', long='out', ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_switch(cls, which, switch, /):
    """
    Internal: normalize one switch text.

    - Unset, None and blank strings mean "unassigned" and become Unset.
    - Other strings are trimmed and must not carry a prefix or whitespace.
    """
    if switch is Unset or switch is None:
        return Unset
    if not isinstance(switch, str):
        raise TypeError(f"{cls.__typename__} {which!r} switch must be a string")
    if not (switch := switch.strip()):
        return Unset
    if switch.startswith(("-", "/")):
        raise ValueError(f"{cls.__typename__} {which!r} switch must be given without its prefix (got {switch!r})")
    if re.search(r"\s", switch):
        raise ValueError(f"{cls.__typename__} {which!r} switch cannot contain whitespace")
    return switch


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize shared definition metadata.

    Raises
    - TypeError: wrong types for name/descr/default/order.
    - ValueError: malformed switches.

    Notes
    - Mutates the provided metadata dict in place.
    - Missing switches, empty names and help placeholders are left for the
      registry; a definition is only complete once registered.
    """
    if not isinstance(metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")

    metadata["short"] = _sanitize_switch(cls, "short", metadata["short"])
    metadata["long"] = _sanitize_switch(cls, "long", metadata["long"])

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")

    if isinstance(order := metadata["order"], bool) or not isinstance(order, int):
        raise TypeError(f"{cls.__typename__} 'order' must be an integer")

    metadata["descr"] = descr
    metadata["mandatory"] = bool(metadata["mandatory"])
    metadata["unswitched"] = bool(metadata["unswitched"])


class Argument(metaclass=ArgumentType):
    """
    Base of every argument definition.

    Subclasses fix __kind__ and may override _sanitize_default(). A definition
    is mutable only through its private fields, and only the registry touches
    them (to fill registration-time inferences). The public surface is the
    read-only properties listed in __introspectable__.
    """
    __kind__ = None
    __introspectable__ = (
        "name",
        "kind",
        "short",
        "long",
        "descr",
        "default",
        "mandatory",
        "unswitched",
        "order",
    )

    def __init__(
            self,
            name,
            short=Unset,
            long=Unset,
            /,
            descr=Unset,
            *,
            default=Unset,
            mandatory=False,
            unswitched=False,
            order=0
    ):
        """
        Construct a definition with the provided metadata.

        Parameters
        - name: str
          Lookup key of the parsed value (case-sensitive).
        - short, long: str | None
          Switch texts without prefix. At least one is required once the
          definition is registered.
        - descr: str
          Help text; may span several lines.
        - default: value of the definition's kind
          Applied before every parse. Booleans always default to False.
        - mandatory: bool
          The parse fails unless a value is supplied (ignored for booleans,
          moot when an explicit default exists).
        - unswitched: bool
          Absorb the first bare token of a parse.
        - order: int
          Help display rank; the built-in Help/WhatIf use 1000/1001.
        """
        if type(self).__kind__ is None:
            raise TypeError(f"type {type(self).__name__!r} cannot be instantiated directly")

        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "descr": descr,
            "default": default,
            "mandatory": mandatory,
            "unswitched": unswitched,
            "order": order,
        }
        _sanitize_metadata(type(self), metadata)
        metadata["default"] = self._sanitize_default(metadata["default"])

        # Booleans cannot be mandatory; presence is the value.
        if type(self).__kind__ is Kind.BOOL:
            metadata["mandatory"] = False

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._inferred = False

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def switches(self):
        """
        Assigned switch texts, short first.
        """
        return tuple(switch for switch in (self._short, self._long) if switch is not Unset)

    @property
    def display(self):
        """
        Preferred prefixed spelling used in messages ("-o" or "--out").
        """
        if self._short is not Unset:
            return "-" + self._short
        if self._long is not Unset:
            return "--" + self._long
        return self._name

    @property
    def explicit(self):
        """
        True when the definition carries a caller-supplied default.
        """
        return self._default is not Unset and not self._inferred

    def _sanitize_default(self, default):
        return default


class StringArgument(Argument):
    """
    A switch whose following token is stored verbatim.
    """
    __kind__ = Kind.STRING

    def _sanitize_default(self, default):
        if not isinstance(default, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'default' must be a string")
        return default


class IntArgument(Argument):
    """
    A switch whose following token is converted with int().

    Without an explicit default the registry infers 0.
    """
    __kind__ = Kind.INT

    def _sanitize_default(self, default):
        if default is Unset:
            return default
        if isinstance(default, bool) or not isinstance(default, int):
            raise TypeError(f"{type(self).__typename__} 'default' must be an integer")
        return default


class BoolArgument(Argument):
    """
    A presence-only switch: False until seen, True afterwards.
    """
    __kind__ = Kind.BOOL

    def _sanitize_default(self, default):
        return False


__all__ = (
    # Public API surface for consumers of switchboard.arguments.
    # These names are re-exported from the package __init__.

    # Tags
    "Kind",

    # Classes (definitions)
    "Argument",
    "StringArgument",
    "IntArgument",
    "BoolArgument",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
