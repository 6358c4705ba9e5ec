"""
Commands module behavioral tests (declarations of the command tree).

Scope
- Validate Collection/Leaf/Program construction and their read-only views.
- Validate option conflicts with the universal help option.
- Validate handler forms (callables and objects exposing run()).
- Validate the shadowed-sibling warning (declaration order is kept).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
import warnings
from types import SimpleNamespace
from unittest import TestCase

from sextant import Collection, Leaf, Program, Option, Context, ShadowedCommandWarning, FaultCode


def handler(context):
    return context.binding("id")


class TestLeaf(TestCase):
    """Behavioral tests for Leaf declarations."""

    def testLeafExposesTuples(self):
        option = Option("verbose", "V")
        leaf = Leaf("show", ["id"], handler, [option])
        self.assertEqual(leaf.name, "show")
        self.assertEqual(leaf.slots, ("id",))
        self.assertEqual(leaf.options, (option,))
        self.assertIs(leaf.handler, handler)

    def testLeafNameCannotStartWithDash(self):
        with self.assertRaises(ValueError):
            Leaf("-show", [], handler)

    def testLeafNameCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            Leaf("  ", [], handler)

    def testLeafNameCannotContainWhitespace(self):
        with self.assertRaises(ValueError):
            Leaf("show all", [], handler)

    def testLeafHandlerMustBeRunnable(self):
        with self.assertRaises(TypeError):
            Leaf("show", [], object())

    def testLeafSlotsCannotBeString(self):
        with self.assertRaises(TypeError):
            Leaf("show", "id", handler)

    def testLeafRejectsHelpSpelling(self):
        with self.assertRaises(ValueError):
            Leaf("show", [], handler, [Option("host", "h")])

    def testLeafRejectsHelpIdentifier(self):
        with self.assertRaises(ValueError):
            Leaf("show", [], handler, [Option("help", long="assist")])

    def testLeafRejectsDuplicateOptionIdentifiers(self):
        with self.assertRaises(ValueError):
            Leaf("show", [], handler, [Option("verbose", "V"), Option("verbose", long="verbose")])

    def testLeafRejectsDuplicateSpellings(self):
        with self.assertRaises(ValueError):
            Leaf("show", [], handler, [Option("verbose", "V"), Option("version", "V")])

    def testLeafRejectsNonOptions(self):
        with self.assertRaises(TypeError):
            Leaf("show", [], handler, ["--verbose"])

    def testLeafRunsCallableHandler(self):
        leaf = Leaf("show", ["id"], handler)
        self.assertEqual(leaf.run(Context({"id": "42"})), "42")

    def testLeafRunsModuleLikeHandler(self):
        module = SimpleNamespace(run=lambda context: ("module", context.binding("id")))
        leaf = Leaf("show", ["id"], module)
        self.assertEqual(leaf.run(Context({"id": "7"})), ("module", "7"))


class TestCollection(TestCase):
    """Behavioral tests for Collection declarations."""

    def testCollectionKeepsDeclarationOrder(self):
        first, second = Leaf("b", [], handler), Leaf("a", [], handler)
        collection = Collection("group", [first, second])
        self.assertEqual(collection.children, (first, second))

    def testCollectionRejectsNonCommands(self):
        with self.assertRaises(TypeError):
            Collection("group", ["show"])

    def testCollectionChildrenCannotBeString(self):
        with self.assertRaises(TypeError):
            Collection("group", "show")

    def testDuplicateSiblingsWarnButAreKept(self):
        first, second = Leaf("show", [], handler), Leaf("show", ["id"], handler)
        with self.assertWarns(ShadowedCommandWarning) as caught:
            collection = Collection("group", [first, second])
        self.assertEqual(collection.children, (first, second))
        self.assertEqual(caught.warning.options["code"], FaultCode.SHADOWED_COMMAND)
        self.assertIn("'show'", str(caught.warning))

    def testDistinctSiblingsDoNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Collection("group", [Leaf("a", [], handler), Collection("b", [])])


class TestProgram(TestCase):
    """Behavioral tests for Program declarations."""

    def testProgramDefaults(self):
        program = Program()
        self.assertEqual(program.script, "undef_script_name")
        self.assertEqual(program.version, "undef_script_ver")
        self.assertEqual(program.commands, ())
        self.assertFalse(program.config_file)

    def testProgramNoneConfigFileMeansNone(self):
        self.assertFalse(Program("tool", "1.0", [], config_file=None).config_file)

    def testProgramRejectsNonStringScript(self):
        with self.assertRaises(TypeError):
            Program(42, "1.0", [])

    def testProgramRejectsBadConfigFile(self):
        with self.assertRaises(TypeError):
            Program("tool", "1.0", [], config_file=42)

    def testProgramRootDuplicatesWarn(self):
        with self.assertWarns(ShadowedCommandWarning):
            Program("tool", "1.0", [Leaf("a", [], handler), Collection("a", [])])


if __name__ == "__main__":
    unittest.main()
