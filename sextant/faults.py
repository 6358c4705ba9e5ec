"""
Sextant faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
- CommandException / CommandWarning: base types that carry a message plus
  read-only options and know how to render themselves through rich.
- OptionParseError / ConfigLoadError: the two fatal faults of a dispatch; both
  end the process with status 1.
- ShadowedCommandWarning: emitted when sibling commands share a name, since only
  the first declared one can ever be reached.

Rendering contract
- Fatal messages are fixed-format single lines (see the classmethods below) so
  that scripts wrapping a sextant program can match on them.
- Rendering never styles the message text; the fault code is available on
  `options["code"]` for hosts that want to log it.
"""
import warnings
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - options (1111x)
      • OPTION_PARSE
    - configuration (1115x)
      • CONFIG_LOAD
    - declarations (1210x, warnings)
      • SHADOWED_COMMAND
    """
    # --- option errors (11xxx) ---
    OPTION_PARSE                = 11111

    # --- configuration errors (11xxx) ---
    CONFIG_LOAD                 = 11151

    # --- declaration warnings (12xxx) ---
    SHADOWED_COMMAND            = 12101


class CommandException(Exception):
    """
    base type for fatal dispatch faults.

    the message is the exact text shown to the user; options carry structured
    context (code, path, detail, ...) as a read-only mapping.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return Text(str(self))

    @property
    def status(self):
        return 1


class OptionParseError(CommandException):
    """
    raised by the option delegate when a token sequence cannot be parsed
    against an option spec list (unknown flag, missing value, bad type).
    """

    @classmethod
    def from_detail(cls, detail, /):
        return cls(
            "Invalid option sequence given: %s" % detail,
            code=FaultCode.OPTION_PARSE,
            detail=detail,
        )


class ConfigLoadError(CommandException):
    """
    raised when a config file exists but cannot be read or decoded.
    """

    @classmethod
    def from_cause(cls, path, cause, /):
        return cls(
            "Failed to load %s: %s" % (path, cause),
            code=FaultCode.CONFIG_LOAD,
            path=path,
            cause=cause,
        )


class CommandWarning(Warning):
    """
    base type for declaration-time warnings.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""


class ShadowedCommandWarning(CommandWarning): ...


def shadowed(name, /, *, stacklevel=3):
    """
    warn that a sibling command named `name` can never be reached.

    the first declared sibling always wins during resolution; later ones are
    kept (hosts may rely on declaration order) but are unreachable.
    """
    warnings.warn(
        ShadowedCommandWarning(
            "command name %r is declared more than once; only the first declaration is reachable" % name,
            code=FaultCode.SHADOWED_COMMAND,
            name=name,
        ),
        stacklevel=stacklevel,
    )


__all__ = (
    "FaultCode",
    "CommandException",
    "OptionParseError",
    "ConfigLoadError",
    "CommandWarning",
    "ShadowedCommandWarning",
    "shadowed",
)
