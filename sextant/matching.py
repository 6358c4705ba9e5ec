"""
Command resolution: match user tokens against a declared command tree.

Contract
- targets(tokens) splits argv into the candidate command path (every token
  before the first one starting with "-") and the remaining option tokens.
- match(commands, candidates) walks the tree and returns one of:
  • Resolved(leaf, bindings, path): a leaf matched and its slots were bound.
  • PartialMatch(node, path): the deepest node reached before failing; either
    the Leaf whose binding failed or the last Collection matched.
  • NoMatch(path=()): the first token names no root command.

Resolution rules
- Siblings are scanned in declaration order; the first one whose name equals
  the current token wins. There is no backtracking: once a name matched, a
  failure below it never retries a later sibling with the same name.
- `path` only ever holds Collection names. For a Resolved or a leaf
  PartialMatch the leaf's own name is not part of it.

Binding rules (bind)
- A named slot consumes exactly one token.
- The variadic slot binds every remaining token, possibly none, under "others".
- Tokens left once the slots are exhausted make the binding fail; so do slots
  left once the tokens are exhausted.
"""
import logging
from dataclasses import dataclass
from typing import Any

from .arguments import OTHERS, is_variadic
from .commands import Collection, Leaf

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolved:
    """
    A leaf fully matched, with its slot bindings.

    Attributes
    - leaf: the matched command.
    - bindings: slot identifier -> token, plus "others" -> list[str] for a variadic leaf.
    - path: Collection names traversed to reach the leaf.
    """

    leaf: Leaf
    bindings: dict[str, Any]
    path: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PartialMatch:
    """
    Resolution stopped at `node` (a Leaf that failed to bind, or a Collection).
    """

    node: Leaf | Collection
    path: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class NoMatch:
    """
    No root command matched the first candidate token.
    """

    path: tuple[str, ...] = ()


def targets(tokens, /):
    """
    Split `tokens` at the first option-like token.

    Returns
    - (candidates, remaining): `remaining` starts with the first token beginning
      with "-" and keeps everything after it, flags or not.

    Example
        targets(["user", "show", "42", "-V", "extra"])
        # (["user", "show", "42"], ["-V", "extra"])
    """
    tokens = list(tokens)
    for index, token in enumerate(tokens):
        if token.startswith("-"):
            return tokens[:index], tokens[index:]
    return tokens, []


def bind(slots, tokens, /):
    """
    Bind positional `tokens` to a leaf's `slots`.

    Returns the bindings dict, or None when the tokens do not fit the slots.
    """
    bindings = {}
    tokens = list(tokens)
    for index, slot in enumerate(slots):
        if is_variadic(slot):
            bindings[OTHERS] = tokens[index:]
            return bindings
        if index >= len(tokens):
            return None
        bindings[slot] = tokens[index]
    if len(tokens) > len(slots):
        return None
    return bindings


def match(commands, candidates, /):
    """
    Resolve `candidates` against the root `commands`.

    Example
        tree = [Collection("a", [Leaf("x", ["id"], handler)]), Leaf("b", [...], handler)]
        match(tree, ["a", "x", "42"])
        # Resolved(leaf=<x>, bindings={"id": "42"}, path=("a",))
    """
    candidates = list(candidates)
    path = []
    siblings = commands
    parent = None

    for depth, token in enumerate(candidates):
        node = next((node for node in siblings if node.name == token), None)

        if node is None:
            break

        if isinstance(node, Leaf):
            bindings = bind(node.slots, candidates[depth + 1:])
            if bindings is None:
                logger.debug("leaf %r matched at %r but its slots did not bind", node.name, path)
                return PartialMatch(node, tuple(path))
            logger.debug("resolved %r under %r with %r", node.name, path, bindings)
            return Resolved(node, bindings, tuple(path))

        path.append(node.name)
        siblings = node.children
        parent = node

    if parent is None:
        logger.debug("no root command matched %r", candidates[:1])
        return NoMatch()

    logger.debug("resolution stopped inside collection %r", path)
    return PartialMatch(parent, tuple(path))


__all__ = (
    "Resolved",
    "PartialMatch",
    "NoMatch",
    "targets",
    "bind",
    "match",
)
