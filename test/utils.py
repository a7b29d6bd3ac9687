"""
Utils module behavioral tests (sentinel, position wording, plural forms).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from treeline.utils import Unset, UnsetType, coalesce, ordinal, pluralize


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel and coalesce."""

    def testSingleton(self):
        self.assertIs(Unset, UnsetType())

    def testFalsyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("set", "fallback"), "set")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal position wording."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(13), "13th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(101), "101st")
        self.assertEqual(ordinal(111), "111th")

    def testRejectsNonPositive(self):
        with self.assertRaises(ValueError):
            ordinal(0)

    def testRejectsNonIntegers(self):
        with self.assertRaises(TypeError):
            ordinal("1")
        with self.assertRaises(TypeError):
            ordinal(True)


class TestPluralize(TestCase):
    """Behavioral tests for pluralize."""

    def testSingularKept(self):
        self.assertEqual(pluralize("argument", 1), "argument")

    def testRegularPlurals(self):
        self.assertEqual(pluralize("argument", 2), "arguments")
        self.assertEqual(pluralize("token", 0), "tokens")
        self.assertEqual(pluralize("box"), "boxes")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("key"), "keys")

    def testUppercaseKept(self):
        self.assertEqual(pluralize("TOKEN"), "TOKENS")


if __name__ == "__main__":
    unittest.main()
