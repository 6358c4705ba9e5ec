r"""
Sextant argument declarations (options and positional slots).

Overview
- Option: a named switch declared on a leaf command. It carries an identifier
  (the key under which the parsed value is stored), an optional short flag
  character, an optional long flag name, an optional converter/default pair and
  a help text rendered in usage.
- Argument slots: a leaf declares an ordered list of positional slots. Each slot
  is either an identifier (binds exactly one token) or the variadic marker
  `...` which must come last and captures every remaining token under the
  reserved identifier "others".
- HELP / VERSION: the universal options injected by the dispatcher. HELP is
  prepended to every leaf's options; HELP and VERSION form the top-level table.

Metadata (sanitized on construction)
- identifier: non-empty Python identifier.
- short: Unset | single character other than "-".
- long: Unset | name without leading dashes and without whitespace.
- type: Unset (presence-only flag) | callable converter. `bool` is a flag
  that carries a default.
- default: Unset | any value. When given without a type the converter is
  inferred from the default (str for None).
- help: str, trimmed.

Quick example:
    >>> from sextant.arguments import Option
    >>> Option("output", "o", "output", type=str, default="table", help="Output format.")
    option(identifier='output', short='o', long='output', ...)
"""
import builtins
import functools
import operator
import re

from .utils import *


class SpecType(type):
    """
    Metaclass for declaration objects (options and commands).

    Responsibilities
    - Derive a human-friendly __typename__ from the class name ("Leaf" -> "leaf")
      used as the prefix of validation messages.
    - Expose every name in __introspectable__ as a read-only property backed by
      the private "_{name}" attribute (see utils.mirror).
    - Provide a stable __repr__/__rich_repr__ built from __introspectable__.
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
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


# Marker for the variadic slot; "..." is accepted as a spelling of it.
VARIADIC = Ellipsis

# Reserved binding identifier for the tokens captured by the variadic slot.
OTHERS = "others"


def is_variadic(slot, /):
    """
    Return True when `slot` is the variadic marker (`...` or "...").
    """
    return slot is Ellipsis or slot == "..."


def sanitize_slots(cls, slots, /):
    """
    Internal: validate and normalize a leaf's positional slots.

    Rules
    - Named slots are non-empty identifiers, unique within the leaf, and may not
      use the reserved identifier "others".
    - The variadic marker appears at most once and only as the last slot.
      It is normalized to Ellipsis.

    Returns
    - tuple of slots (identifier strings and, possibly, a trailing Ellipsis).
    """
    sanitized = []
    for index, slot in enumerate(slots):
        if is_variadic(slot):
            if index != len(slots) - 1:
                raise ValueError(f"{cls.__typename__} variadic slot must be the last slot")
            sanitized.append(VARIADIC)
            continue
        if not isinstance(slot, str):
            raise TypeError(f"{cls.__typename__} slots must be strings or '...'")
        elif not (slot := slot.strip()).isidentifier():
            raise ValueError(f"{cls.__typename__} slot {slot!r} must be a valid identifier")
        elif slot == OTHERS:
            raise ValueError(f"{cls.__typename__} slot name {OTHERS!r} is reserved for the variadic capture")
        elif slot in sanitized:
            raise ValueError(f"{cls.__typename__} slot {slot!r} is declared more than once")
        sanitized.append(slot)
    return tuple(sanitized)


def _sanitize_flags(cls, metadata, /):
    """
    Internal: validate the short/long flag spellings of an option.

    - At least one of short/long is required.
    - short must be exactly one character and cannot be "-".
    - long must be non-empty, must not start with "-" and must not contain
      whitespace or "=".
    """
    short, long = metadata["short"], metadata["long"]

    if short is Unset and long is Unset:
        raise TypeError(f"{cls.__typename__} must specify a short or a long flag")

    if not isinstance(short, str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and (len(short) != 1 or short == "-" or short.isspace()):
        raise ValueError(f"{cls.__typename__} 'short' must be a single non-dash character")

    if not isinstance(long, str | Unset):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not re.fullmatch(r"[^\s=-][^\s=]*", long):
        raise ValueError(f"{cls.__typename__} 'long' must be a flag name without leading dashes")


def _sanitize_value(cls, metadata, /):
    """
    Internal: validate the converter/default pair.

    When a default is given without a type, the converter is inferred from the
    default (None infers str).
    """
    type, default = metadata["type"], metadata["default"]

    if type is Unset and default is not Unset:
        type = builtins.type(default) if default is not None else str
    if type is not Unset and not callable(type):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")
    metadata["type"] = type


class Option(metaclass=SpecType):
    """
    Named option specification.

    Properties
    - identifier, short, long, type, default, help: sanitized metadata.
    - flag: True when the option takes no value (no type, or bool).
    - defaulted: True when a default value is declared.
    """

    __introspectable__ = (
        "identifier",
        "short",
        "long",
        "type",
        "default",
        "help",
    )

    def __init__(
            self,
            identifier,
            /,
            short=Unset,
            long=Unset,
            *,
            type=Unset,
            default=Unset,
            help="",
    ):
        cls = builtins.type(self)
        if not isinstance(identifier, str):
            raise TypeError(f"{cls.__typename__} 'identifier' must be a string")
        elif not (identifier := identifier.strip()).isidentifier():
            raise ValueError(f"{cls.__typename__} 'identifier' must be a valid identifier")
        if not isinstance(help, str):
            raise TypeError(f"{cls.__typename__} 'help' must be a string")

        metadata = {
            "identifier": identifier,
            "short": short,
            "long": long,
            "type": type,
            "default": default,
            "help": help.strip(),
        }
        _sanitize_flags(cls, metadata)
        _sanitize_value(cls, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def flag(self):
        return self._type is Unset or self._type is bool

    @property
    def defaulted(self):
        return self._default is not Unset

    @property
    def spellings(self):
        """
        Return the command-line spellings of this option, short first.
        """
        spellings = []
        if self._short is not Unset:
            spellings.append("-" + self._short)
        if self._long is not Unset:
            spellings.append("--" + self._long)
        return tuple(spellings)


HELP = Option("help", "h", "help", help="Print this help.")
VERSION = Option("version", "v", "version", help="Print the version and exit.")


__all__ = (
    "Option",
    "HELP",
    "VERSION",
    "VARIADIC",
    "OTHERS",
    "is_variadic",
)
