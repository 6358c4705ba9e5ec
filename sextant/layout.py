"""
Usage rendering: word-wrap and the aligned option table.

Scope
- wrap(width, text): greedy word-wrap producing lines lazily.
- line_length(console): usable line width derived from the rich console.
- render_options(options, length): the two-column option table.
- leaf_usage / tree_usage: complete usage screens for a leaf command and for a
  level of the command tree.

Layout policy
- The flag column is as wide as the widest flag text of the table plus one.
- While that column takes less than half the line, help text is written to
  the right of it and continuation lines align under the help column.
- Otherwise every flag is written on its own line and its help goes below,
  indented by six spaces.

Output format (byte-exact, scripts and tests compare it verbatim)
    Usage: <script> <path> [options]
    <blank>
      <flag>  <help>
    <blank>
    Available subcommands:
    <blank>
      <name>
    <blank>
    For help on any individual command run `<script> COMMAND -h`
"""
from .arguments import HELP, VERSION
from .commands import Collection
from .utils import Unset

# Upper bound of the rendered line width, also used when the terminal is unusable.
LINE_LENGTH = 75

# Terminals narrower than this are treated as unknown.
MIN_COLUMNS = 20

_BLANKS = " \t"


def wrap(width, text, /):
    """
    Greedy word-wrap of `text` to `width` columns.

    Behavior
    - Characters accumulate until the line holds `width` of them; the line is
      then broken after its last blank (space or tab). The blank stays at the
      end of the emitted line and the partial word moves to the next one.
    - A full line without any blank is a single token wider than `width`: it
      keeps growing until the token ends and is emitted unbroken on its own
      line. The blank that ends it is dropped.
    - Leftover text is emitted as a final, shorter line. Empty text yields
      nothing.

    Yields
    - str: each line, in order.
    """
    line = []
    for char in text:
        if len(line) >= width:
            blanks = [index for index, previous in enumerate(line) if previous in _BLANKS]
            if blanks:
                cut = blanks[-1] + 1
                yield "".join(line[:cut])
                del line[:cut]
            elif char in _BLANKS:
                yield "".join(line)
                line.clear()
                continue
        line.append(char)
    if line:
        yield "".join(line)


def line_length(console=Unset, /):
    """
    Return the usable line width for usage output.

    - width >= 75 columns: 75.
    - 20 <= width < 75: width - 1 (keeps the last column free).
    - unknown or narrower than 20 columns: 75.
    """
    columns = getattr(console, "width", None)
    if not isinstance(columns, int) or columns < MIN_COLUMNS:
        return LINE_LENGTH
    if columns < LINE_LENGTH:
        return columns - 1
    return LINE_LENGTH


def option_text(option, /):
    """
    Return the flag column text of an option: "-x", "--long" or "-x, --long".
    """
    return ", ".join(option.spellings)


def help_text(option, /):
    """
    Return the help column text of an option, with its default when declared.
    """
    if option.help and option.defaulted:
        return "%s [default: %s]" % (option.help, option.default)
    return option.help


def column_width(options, /):
    """
    Return the widest flag text of `options` (0 for no options).
    """
    return max((len(option_text(option)) for option in options), default=0)


def render_options(options, length=LINE_LENGTH, /):
    """
    Render the option table of `options` for a `length`-column line.

    Returns the table followed by a blank line, or "" when there are no options.
    """
    options = tuple(options)
    if not options:
        return ""

    column = column_width(options) + 1
    lines = []
    for option in options:
        flag, help = option_text(option), help_text(option)
        if not help:
            lines.append("  " + flag + "\n")
        elif column < length // 2:
            head, *tail = wrap(length - column - 3, help)
            indent = "\n" + " " * (column + 3)
            lines.append("  " + flag + " " * (column - len(flag) + 1) + head + "".join(indent + line for line in tail) + "\n")
        else:
            lines.append("  " + flag + "".join("\n      " + line for line in wrap(length - 6, help)) + "\n")
    return "".join(lines) + "\n"


def slot_placeholders(leaf, /):
    """
    Return the usage placeholders of a leaf: <name> per named slot, then [...]
    when the leaf is variadic.
    """
    named = leaf.slots[:-1] if leaf.variadic else leaf.slots
    placeholders = ["<%s>" % slot for slot in named]
    if leaf.variadic:
        placeholders.append("[...]")
    return placeholders


def subcommand_names(commands, path, /):
    """
    Return the names available below `path`, in declaration order.

    `path` is walked from the root with first-match-wins; when it does not lead
    to a Collection the root names are returned. Shadowed duplicates are listed
    once.
    """
    siblings = commands
    for name in path:
        node = next((node for node in siblings if node.name == name), None)
        if not isinstance(node, Collection):
            siblings = commands
            break
        siblings = node.children
    return list(dict.fromkeys(node.name for node in siblings))


def render_command_line(script, path, /):
    return "Usage: %s %s [options]\n\n" % (script, path)


def render_subcommands(names, /):
    names = list(names)
    if not names:
        return ""
    return "Available subcommands: \n\n" + "".join("  %s\n" % name for name in names) + "\n"


def render_footer(script, /):
    return "For help on any individual command run `%s COMMAND -h`\n" % script


def leaf_usage(program, leaf, path=(), length=LINE_LENGTH, /):
    """
    Render the usage screen of a leaf: its command line and its own options.
    """
    line = " ".join([*path, leaf.name, *slot_placeholders(leaf)])
    return render_command_line(program.script, line) + render_options(leaf.options, length)


def tree_usage(program, path=(), length=LINE_LENGTH, /):
    """
    Render the usage screen of a tree level: the universal options and the
    subcommands available at `path`.

    Layout notes
    - Parts are joined with single spaces, the root line included:
      "Usage: tool <command> [<arg>] [options]", with no double space after
      the script name.
    - The help/version table is printed at every depth, below a collection
      too, since -h and -v are accepted there as well.
    """
    line = " ".join([*path, "<command>", "[<arg>]"])
    return (
        render_command_line(program.script, line)
        + render_options((HELP, VERSION), length)
        + render_subcommands(subcommand_names(program.commands, path))
        + render_footer(program.script)
    )


def version_line(program, /):
    return "%s %s\n" % (program.script, program.version)


__all__ = (
    "LINE_LENGTH",
    "wrap",
    "line_length",
    "option_text",
    "help_text",
    "column_width",
    "render_options",
    "slot_placeholders",
    "subcommand_names",
    "render_command_line",
    "render_subcommands",
    "render_footer",
    "leaf_usage",
    "tree_usage",
    "version_line",
)
