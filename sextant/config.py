"""
Config-file overlay for parsed options.

A program may declare a config file. When a leaf resolves, the file's entries
are merged into the options parsed from the command line before the handler
runs:

- The file is YAML. Its document is either a mapping (`output: table`) or a
  sequence of two-item pairs (`- [output, table]`). An empty document counts as
  no entries.
- A missing file is not an error: it contributes no entries.
- A file that exists but cannot be read or decoded is fatal (ConfigLoadError,
  naming the path and the underlying cause).

Overlay semantics (keyed replace, last writer wins)
- Every entry replaces the value stored under the same key, whether it came
  from an explicit flag or from a declared default; new keys are added.
- Entries are applied in file order, so a key repeated in a pair sequence keeps
  its last value.
"""
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

import yaml

from .faults import ConfigLoadError

logger = logging.getLogger(__name__)


def load(path, /):
    """
    Load the config entries stored at `path`.

    Returns
    - list[tuple[str, Any]]: the entries in file order ([] for a missing file).

    Raises
    - ConfigLoadError: when the file cannot be read or is not a valid document.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("config file %s not found, no overlay", path)
        return []

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as error:
        raise ConfigLoadError.from_cause(str(path), error) from error

    if data is None:
        return []
    if isinstance(data, Mapping):
        entries = list(data.items())
    elif isinstance(data, Sequence) and not isinstance(data, str):
        entries = []
        for item in data:
            if not isinstance(item, Sequence) or isinstance(item, str) or len(item) != 2:
                raise ConfigLoadError.from_cause(str(path), "expected a key/value pair, got %r" % (item,))
            entries.append((item[0], item[1]))
    else:
        raise ConfigLoadError.from_cause(str(path), "expected a mapping or a list of pairs, got %s" % type(data).__name__)

    for key, _ in entries:
        if not isinstance(key, str):
            raise ConfigLoadError.from_cause(str(path), "keys must be strings, got %r" % (key,))

    logger.debug("loaded %d config entries from %s", len(entries), path)
    return entries


def overlay(options, entries, /):
    """
    Return a copy of `options` with `entries` applied by keyed replace.

    Example
        overlay({"verbose": True}, [("verbose", False), ("output", "table")])
        # {"verbose": False, "output": "table"}
    """
    merged = dict(options)
    for key, value in entries:
        merged[key] = value
    return merged


__all__ = (
    "load",
    "overlay",
)
