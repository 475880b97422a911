"""
Arguments module behavioral tests (descriptors and the options-bag marker).

Scope
- Validate Positional and Option construction, normalization and read-only fields.
- Validate Options: declared names/defaults, flag detection, mapping behavior,
  name validation and the nesting guard.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Positional, Option, Options, DuplicateOptionsError).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from funcli import Positional, Option, Options, DuplicateOptionsError
from funcli.utils import Unset


class TestPositional(TestCase):
    """Behavioral tests for Positional descriptors."""

    def testRequiredByDefault(self):
        p = Positional("path")
        self.assertEqual(p.name, "path")
        self.assertTrue(p.required)
        self.assertIsNone(p.default)

    def testOptionalKeepsDefault(self):
        p = Positional("mode", required=False, default="debug")
        self.assertFalse(p.required)
        self.assertEqual(p.default, "debug")

    def testRequiredDropsDefault(self):
        p = Positional("path", required=True, default="ignored")
        self.assertIsNone(p.default)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Positional(3)

    def testNameCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            Positional("  ")

    def testFieldsAreReadOnly(self):
        p = Positional("path")
        with self.assertRaises(AttributeError):
            p.name = "other"

    def testStructuralEquality(self):
        self.assertEqual(Positional("a"), Positional("a"))
        self.assertNotEqual(Positional("a"), Positional("a", required=False))
        self.assertEqual(hash(Positional("a")), hash(Positional("a")))

    def testRepr(self):
        self.assertEqual(repr(Positional("a")), "Positional(name='a', required=True, default=None)")


class TestOption(TestCase):
    """Behavioral tests for Option descriptors."""

    def testValueTakingByDefault(self):
        o = Option("out")
        self.assertEqual(o.name, "out")
        self.assertTrue(o.has_arg)

    def testFlag(self):
        self.assertFalse(Option("verbose", has_arg=False).has_arg)

    def testDefault(self):
        self.assertIs(Option("out").default, Unset)
        self.assertEqual(Option("mode", default="0644").default, "0644")
        self.assertNotEqual(Option("mode"), Option("mode", default="0644"))

    def testNameFollowsLongOptionGrammar(self):
        Option("dry_run2")
        with self.assertRaises(ValueError):
            Option("dry-run")
        with self.assertRaises(ValueError):
            Option("--out")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Option(None)


class TestOptions(TestCase):
    """Behavioral tests for the Options marker."""

    def testDescriptorsInDeclarationOrder(self):
        bag = Options("out", verbose=False, level="info")
        self.assertEqual(bag.__options__(), (
            Option("out"),
            Option("verbose", has_arg=False, default=False),
            Option("level", default="info"),
        ))

    def testOnlyLiteralFalseMarksAFlag(self):
        bag = Options(quiet=0, strict=None, verbose=False)
        options = {option.name: option.has_arg for option in bag.__options__()}
        self.assertEqual(options, {"quiet": True, "strict": True, "verbose": False})

    def testMappingOfDefaults(self):
        bag = Options("out", verbose=False)
        self.assertEqual(dict(bag), {"verbose": False})
        self.assertEqual(bag, {"verbose": False})
        self.assertIsNone(bag.get("out"))
        self.assertNotIn("out", bag)
        self.assertEqual(len(bag), 1)

    def testNamesAndDefaultsExposed(self):
        bag = Options("out", verbose=False)
        self.assertEqual(bag.names, ("out",))
        self.assertEqual(dict(bag.defaults), {"verbose": False})

    def testDefaultsAreReadOnly(self):
        bag = Options(verbose=False)
        with self.assertRaises(TypeError):
            bag.defaults["verbose"] = True

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            Options("out", "out")

    def testInvalidNameRejected(self):
        with self.assertRaises(ValueError):
            Options("dry-run")

    def testNestedOptionsRejected(self):
        with self.assertRaises(DuplicateOptionsError) as context:
            Options(inner=Options(verbose=False))
        self.assertEqual(str(context.exception), "Can't nest/repeat options")

    def testEmptyBag(self):
        bag = Options()
        self.assertEqual(bag.__options__(), ())
        self.assertEqual(len(bag), 0)


if __name__ == "__main__":
    unittest.main()
