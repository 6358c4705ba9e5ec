"""
Sextant command layer: declare the command tree a program dispatches into.

What this module provides
- Collection: a named group of child commands (a subcommand namespace).
- Leaf: a runnable command with positional slots, a handler and its options.
- Program: the host declaration (script name, version, optional config file and
  the root list of commands). It is the only configuration surface of a
  sextant program.

Core ideas
- Declarations are immutable: children, slots and options are stored as
  tuples and exposed through read-only properties.
- Declaration order is significant: resolution scans siblings left to right and
  the first matching name wins. Duplicate sibling names are kept (later ones
  are unreachable) and reported with a ShadowedCommandWarning.
- Handlers are either callables taking a single Context, or objects (usually
  modules) exposing a callable `run(context)`.

Quick start
    from sextant import Program, Collection, Leaf, Option, start

    def show(context):
        print(context.binding("id"), context.option("verbose", False))

    program = Program("tool", "1.0.0", [
        Collection("user", [
            Leaf("show", ["id"], show, [Option("verbose", "V", "verbose", help="Chatty.")]),
        ]),
    ])

    if __name__ == "__main__":
        start(program)
"""
import builtins
from collections.abc import Iterable

from .arguments import HELP, Option, SpecType, sanitize_slots
from .faults import shadowed
from .utils import *


def _sanitize_name(cls, name, /):
    """
    Internal: validate a command name.

    Names cannot be empty, cannot contain whitespace and cannot start with "-"
    (such a token is treated as the first option and would never be matched).
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif name.startswith("-") or any(char.isspace() for char in name):
        raise ValueError(f"{cls.__typename__} 'name' {name!r} is not a valid command name")
    return name


def _sanitize_children(cls, children, /):
    """
    Internal: validate an ordered list of sibling commands.

    Returns a tuple preserving declaration order. Each repeated name triggers a
    ShadowedCommandWarning once.
    """
    if not isinstance(children, Iterable) or isinstance(children, str):
        raise TypeError(f"{cls.__typename__} 'children' must be an iterable of commands")

    sanitized = tuple(children)
    seen = set()
    for child in sanitized:
        if not isinstance(child, Collection | Leaf):
            raise TypeError(f"{cls.__typename__} children must be collections or leaves")
        if child.name in seen:
            shadowed(child.name, stacklevel=4)
        seen.add(child.name)
    return sanitized


def _sanitize_options(cls, options, /):
    """
    Internal: validate a leaf's option specs.

    Spellings and identifiers must be unique and must not collide with the
    universal help option which is prepended at dispatch time.
    """
    if not isinstance(options, Iterable) or isinstance(options, str):
        raise TypeError(f"{cls.__typename__} 'options' must be an iterable of options")

    sanitized = tuple(options)
    identifiers = {HELP.identifier}
    spellings = set(HELP.spellings)
    for option in sanitized:
        if not isinstance(option, Option):
            raise TypeError(f"{cls.__typename__} options must be Option instances")
        if option.identifier in identifiers:
            raise ValueError(f"{cls.__typename__} option identifier {option.identifier!r} is already in use")
        identifiers.add(option.identifier)
        for spelling in option.spellings:
            if spelling in spellings:
                raise ValueError(f"{cls.__typename__} option flag {spelling!r} is already in use")
            spellings.add(spelling)
    return sanitized


class Collection(metaclass=SpecType):
    """
    Named group of child commands.

    Properties
    - name: the token that selects this collection.
    - children: tuple of Collection | Leaf in declaration order.
    """

    __introspectable__ = (
        "name",
        "children",
    )

    def __init__(self, name, children, /):
        cls = type(self)
        self._name = _sanitize_name(cls, name)
        self._children = _sanitize_children(cls, children)


class Leaf(metaclass=SpecType):
    """
    Runnable command.

    Properties
    - name: the token that selects this command.
    - slots: tuple of identifiers, optionally ending with Ellipsis (variadic).
    - handler: callable(context) or object exposing run(context).
    - options: tuple of Option specs (without the universal help option).
    """

    __introspectable__ = (
        "name",
        "slots",
        "handler",
        "options",
    )

    def __init__(self, name, slots, handler, options=(), /):
        cls = type(self)
        if isinstance(slots, str) or not isinstance(slots, Iterable):
            raise TypeError(f"{cls.__typename__} 'slots' must be an iterable of slot names")
        if not callable(handler) and not callable(getattr(handler, "run", None)):
            raise TypeError(f"{cls.__typename__} 'handler' must be callable or expose a run() callable")

        self._name = _sanitize_name(cls, name)
        self._slots = sanitize_slots(cls, tuple(slots))
        self._handler = handler
        self._options = _sanitize_options(cls, options)

    @property
    def variadic(self):
        return bool(self._slots) and self._slots[-1] is Ellipsis

    def run(self, context, /):
        """
        Invoke the handler with the dispatch context and return its result.
        """
        if callable(self._handler):
            return self._handler(context)
        return self._handler.run(context)


class Program(metaclass=SpecType):
    """
    Host declaration.

    Properties
    - script: display name used in usage and version output.
    - version: version string printed by -v/--version.
    - commands: root tuple of Collection | Leaf.
    - config_file: Unset | path of a YAML file whose entries overlay the options
      parsed for a resolved leaf.
    """

    __introspectable__ = (
        "script",
        "version",
        "commands",
        "config_file",
    )

    def __init__(self, script=Unset, version=Unset, commands=(), /, config_file=Unset):
        cls = type(self)
        for name, object in (("script", script), ("version", version)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        if not isinstance(config_file, str | builtins.type(None) | Unset) and not hasattr(config_file, "__fspath__"):
            raise TypeError(f"{cls.__typename__} 'config_file' must be a path")

        self._script = coalesce(script, "undef_script_name")
        self._version = coalesce(version, "undef_script_ver")
        self._commands = _sanitize_children(cls, commands)
        self._config_file = Unset if config_file is None else config_file

    def __invoke__(self, prompt=Unset):
        from .dispatcher import start
        return start(self, prompt)


__all__ = (
    "Collection",
    "Leaf",
    "Program",
)
