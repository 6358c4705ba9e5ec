"""
Config module behavioral tests (config-file overlay).

Scope
- Validate loading YAML mappings and pair sequences.
- Validate missing, empty and malformed files.
- Validate keyed-replace overlay semantics.

Conventions
- Test method names follow CamelCase per project convention.
- Files are written to a temporary directory per test.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import TestCase

from sextant import ConfigLoadError, FaultCode
from sextant.config import load, overlay


class TestLoad(TestCase):
    """Behavioral tests for load(path)."""

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def write(self, text):
        path = Path(self.directory.name) / "tool.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def testMissingFileHasNoEntries(self):
        self.assertEqual(load(Path(self.directory.name) / "absent.yaml"), [])

    def testEmptyFileHasNoEntries(self):
        self.assertEqual(load(self.write("")), [])

    def testMappingEntries(self):
        self.assertEqual(load(self.write("verbose: false\noutput: table\n")), [("verbose", False), ("output", "table")])

    def testPairEntriesKeepOrder(self):
        path = self.write("- [output, table]\n- [output, json]\n")
        self.assertEqual(load(path), [("output", "table"), ("output", "json")])

    def testAcceptsStringPath(self):
        self.assertEqual(load(str(self.write("count: 3\n"))), [("count", 3)])

    def testMalformedFileIsFatal(self):
        path = self.write("output: [unclosed\n")
        with self.assertRaises(ConfigLoadError) as caught:
            load(path)
        self.assertTrue(str(caught.exception).startswith("Failed to load %s: " % path))
        self.assertEqual(caught.exception.options["code"], FaultCode.CONFIG_LOAD)

    def testScalarDocumentIsFatal(self):
        with self.assertRaises(ConfigLoadError):
            load(self.write("just a string\n"))

    def testBadPairIsFatal(self):
        with self.assertRaises(ConfigLoadError):
            load(self.write("- [output, table, extra]\n"))

    def testNonStringKeyIsFatal(self):
        with self.assertRaises(ConfigLoadError):
            load(self.write("1: one\n"))


class TestOverlay(TestCase):
    """Behavioral tests for overlay(options, entries)."""

    def testEntriesReplaceParsedValues(self):
        self.assertEqual(
            overlay({"verbose": True, "count": 1}, [("verbose", False)]),
            {"verbose": False, "count": 1},
        )

    def testEntriesAddNewKeys(self):
        self.assertEqual(overlay({}, [("output", "table")]), {"output": "table"})

    def testLastEntryWins(self):
        self.assertEqual(overlay({}, [("output", "table"), ("output", "json")]), {"output": "json"})

    def testOverlayReturnsCopy(self):
        options = {"verbose": True}
        overlay(options, [("verbose", False)])
        self.assertEqual(options, {"verbose": True})


if __name__ == "__main__":
    unittest.main()
