"""
Sextant dispatcher: resolve an invocation and run it, or show usage.

What this module provides
- dispatch(program, tokens): one resolve-then-act pass returning an Outcome
  instead of terminating the process, so every terminal point can be tested.
- start(program, prompt) / invoke(object, prompt): process entry points that
  turn an Outcome into an exit status.
- Context: the single value handed to a leaf's handler (bindings + options).
- halt_with(...): exit helper for handlers.
- output(data, context): print handler results as a rich table or pretty repr.

Control flow
- Resolved leaf: parse option tokens against [help] + the leaf's options,
  overlay the config file, then either show the leaf's usage (help given) or
  run the handler.
- Leaf that failed to bind: show the leaf's usage. An almost-right invocation
  is answered with usage, not with an error.
- No match, or stopped inside a collection: parse option tokens against
  [help, version]; print the version when asked, otherwise the usage of the
  tree level that was reached.
- A malformed option sequence or an unreadable config file is fatal: the
  message goes to the error console and the status is 1.

Outcomes
- UsageDisplayed(text)      status 0
- VersionDisplayed(text)    status 0
- Dispatched(result)        status 0 (the handler owns whatever happens next)
- Fatal(fault)              status 1
"""
import logging
import shlex
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from rich.console import Console
from rich.pretty import pprint
from rich.table import Table

from . import config, delegate, layout, matching
from .arguments import HELP, VERSION, SpecType
from .commands import Leaf, Program
from .faults import CommandException
from .utils import *

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UsageDisplayed:
    text: str
    status: ClassVar[int] = 0


@dataclass(frozen=True, slots=True)
class VersionDisplayed:
    text: str
    status: ClassVar[int] = 0


@dataclass(frozen=True, slots=True)
class Dispatched:
    result: Any
    status: ClassVar[int] = 0


@dataclass(frozen=True, slots=True)
class Fatal:
    fault: CommandException

    @property
    def status(self):
        return self.fault.status


class Context(metaclass=SpecType):
    """
    Dispatch context handed to a handler.

    Properties
    - bindings: read-only mapping of slot identifiers to tokens; the variadic
      capture is stored under "others" as a list.
    - options: read-only mapping of option identifiers to parsed values, after
      the config-file overlay.
    """

    __introspectable__ = (
        "bindings",
        "options",
    )

    def __init__(self, bindings=Unset, options=Unset, /):
        self._bindings = dict(coalesce(bindings, {}))
        self._options = dict(coalesce(options, {}))

    def binding(self, name, default=None, /):
        """
        Return the token bound to slot `name`, or `default` when unbound.
        """
        return self._bindings.get(name, default)

    def option(self, name, default=None, /):
        """
        Return the parsed value of option `name`, or `default` when absent.
        """
        return self._options.get(name, default)


def _show(console, outcome, /):
    console.out(outcome.text, end="", highlight=False)
    return outcome


def _options(program, specs, remaining, /, *, overlay=False):
    options, extras = delegate.parse(specs, remaining)
    if extras:
        logger.debug("ignoring non-option tokens %r", extras)
    if overlay and program.config_file is not Unset:
        options = config.overlay(options, config.load(program.config_file))
    return options


def dispatch(program, tokens, /, *, console=Unset, errors=Unset):
    """
    Resolve `tokens` against `program` and act on the result.

    Parameters
    - program: Program declaration.
    - tokens: argv without the script name.
    - console: rich Console receiving usage and version text (stdout by default).
    - errors: rich Console receiving fatal messages (stderr by default).

    Returns
    - UsageDisplayed | VersionDisplayed | Dispatched | Fatal
    """
    if not isinstance(program, Program):
        raise TypeError("dispatch() first argument must be a program")

    console = Console(highlight=False) if console is Unset else console
    errors = Console(stderr=True, highlight=False) if errors is Unset else errors

    candidates, remaining = matching.targets(tokens)
    result = matching.match(program.commands, candidates)
    length = layout.line_length(console)

    try:
        match result:
            case matching.Resolved(leaf=leaf, bindings=bindings, path=path):
                options = _options(program, (HELP, *leaf.options), remaining, overlay=True)
                if options.get(HELP.identifier):
                    return _show(console, UsageDisplayed(layout.leaf_usage(program, leaf, path, length)))
            case matching.PartialMatch(node=Leaf() as leaf, path=path):
                return _show(console, UsageDisplayed(layout.leaf_usage(program, leaf, path, length)))
            case _:
                options = _options(program, (HELP, VERSION), remaining)
                if options.get(VERSION.identifier):
                    return _show(console, VersionDisplayed(layout.version_line(program)))
                return _show(console, UsageDisplayed(layout.tree_usage(program, result.path, length)))
    except CommandException as fault:
        logger.debug("dispatch failed: %s", fault)
        errors.print(fault, soft_wrap=True)
        return Fatal(fault)

    logger.debug("running %r under %r", leaf.name, path)
    return Dispatched(leaf.run(Context(bindings, options)))


def _tokenize(prompt, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like splitting via shlex.split.
    - Iterable[str]: items are used as-is.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("start() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("start() prompt must be a string or an iterable of strings")


def start(program, prompt=Unset, /):
    """
    Process entry point: dispatch and exit.

    Returns the handler result for a dispatched invocation; every other
    outcome ends the process with its status (0 for usage/version, 1 for a
    fatal fault).
    """
    outcome = dispatch(program, _tokenize(prompt))
    if isinstance(outcome, Dispatched):
        return outcome.result
    sys.exit(outcome.status)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for programs or any object exposing __invoke__(prompt).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


def halt_with(*parameters, code=Unset, console=Unset):
    """
    Exit the process from a handler.

    Forms
    - halt_with(status): exit with `status`.
    - halt_with(message, *args, code=1): print `message % args` and exit with
      `code`. The message goes to stderr for a non-zero code, stdout otherwise.
    """
    match parameters:
        case (int() as status,):
            sys.exit(status)
        case (str() as message, *args):
            status = coalesce(code, 1)
            console = Console(stderr=status != 0, highlight=False) if console is Unset else console
            console.out(message % tuple(args) if args else message, highlight=False)
            sys.exit(status)
        case _:
            raise TypeError("halt_with() takes a status or a message followed by its arguments")


def output(data, context, /, columns=(), *, console=Unset):
    """
    Print handler data according to the "output" option.

    - output == "table": a rich Table. Rows are mappings (columns default to the
      keys of the first row) or sequences (columns must be given).
    - anything else: rich's pretty printer.
    """
    console = Console() if console is Unset else console

    if context.option("output") != "table":
        pprint(data, console=console, expand_all=False)
        return

    rows = list(data)
    columns = list(columns)
    if not columns and rows and isinstance(rows[0], Mapping):
        columns = list(rows[0].keys())

    table = Table(*columns)
    for row in rows:
        if isinstance(row, Mapping):
            table.add_row(*(str(row.get(column, "")) for column in columns))
        else:
            table.add_row(*map(str, row))
    console.print(table)


__all__ = (
    "UsageDisplayed",
    "VersionDisplayed",
    "Dispatched",
    "Fatal",
    "Context",
    "dispatch",
    "start",
    "invoke",
    "halt_with",
    "output",
)
