"""
Option delegate: turn option tokens into a parsed option mapping.

Sextant does not parse option values itself. This module adapts a list of
Option specs onto the standard library's argparse and exposes the call
contract the dispatcher relies on:

    parse(options, tokens) -> (parsed, extras)

- parsed: dict mapping option identifiers to values. Presence-only flags are
  present (True) only when given; valued options are present when given or
  when they declare a default.
- extras: leftover tokens that are not options (kept in order). The first
  "--" ends option parsing: it and every token after it are returned as
  extras unchanged.
- Any malformed sequence (unknown flag, missing value, failed conversion)
  raises OptionParseError whose detail names the offending token.

Long flags are never abbreviated, and argparse never prints or exits on its
own: every failure comes back as an exception.
"""
import argparse
import logging

from .faults import OptionParseError

logger = logging.getLogger(__name__)


class _DelegateParser(argparse.ArgumentParser):
    """
    argparse parser that reports failures as OptionParseError.
    """

    def error(self, message):
        raise OptionParseError.from_detail(message)

    def exit(self, status=0, message=None):
        raise OptionParseError.from_detail((message or "").strip() or "parser exited with status %d" % status)


def build_parser(options, /):
    """
    Build an argparse parser accepting exactly `options`.
    """
    parser = _DelegateParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    for option in options:
        # Help text is rendered by layout; argparse never formats it.
        keywords = {"dest": option.identifier}
        if option.flag:
            keywords["action"] = "store_true"
            keywords["default"] = option.default if option.defaulted else argparse.SUPPRESS
        else:
            keywords["type"] = option.type
            keywords["default"] = option.default if option.defaulted else argparse.SUPPRESS
        parser.add_argument(*option.spellings, **keywords)
    return parser


def parse(options, tokens, /):
    """
    Parse `tokens` against `options`.

    Returns
    - (parsed, extras) as described in the module docstring.

    Raises
    - OptionParseError: on any malformed option sequence.
    """
    tokens = list(tokens)
    # Everything from the first "--" on is plain arguments.
    index = tokens.index("--") if "--" in tokens else len(tokens)
    head, tail = tokens[:index], tokens[index:]

    parser = build_parser(options)
    try:
        namespace, extras = parser.parse_known_args(head)
    except argparse.ArgumentError as error:
        raise OptionParseError.from_detail(str(error)) from None

    unknown = [token for token in extras if token.startswith("-") and token != "-"]
    if unknown:
        raise OptionParseError.from_detail("unrecognized arguments: %s" % " ".join(unknown))

    parsed, extras = vars(namespace), extras + tail
    logger.debug("parsed options %r (extras %r)", parsed, extras)
    return parsed, extras


__all__ = (
    "build_parser",
    "parse",
)
