# python
"""
Arguments module behavioral tests (descriptor construction, matching, assignment).

Scope
- Validate metadata sanitization (names, kinds, attachment, counts, choices, defaults).
- Validate matching rules (exact, attached prefix, case-insensitive).
- Validate value assignment through the kind dispatch table.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argtable import Argument, Kind, Flags


class TestArgumentMetadata(TestCase):
    """Behavioral tests for Argument construction."""

    def testDefaultsPerKind(self):
        self.assertIs(Argument("-b").default, False)
        self.assertEqual(Argument("-i", Kind.INTEGER).default, 0)
        self.assertEqual(Argument("-r", Kind.REAL).default, 0.0)
        self.assertEqual(Argument("-s", Kind.STRING).default, "")
        self.assertEqual(Argument("-c", Kind.CHOICE, choices=["a"]).default, 0)

    def testInitialState(self):
        argument = Argument("-i", Kind.INTEGER, default=3)
        self.assertEqual(argument.value, 3)
        self.assertFalse(argument.isset)
        self.assertEqual(argument.nargs, 1)

    def testStringListStartsEmpty(self):
        argument = Argument("-s", Kind.STRING_LIST, default="seed")
        self.assertEqual(argument.value, [])
        self.assertEqual(argument.default, "seed")

    def testRealDefaultIsFloat(self):
        argument = Argument("-r", Kind.REAL, default=3)
        self.assertIsInstance(argument.default, float)

    def testChoicesBecomeTuple(self):
        argument = Argument("-c", Kind.CHOICE, choices=["a", "b"])
        self.assertEqual(argument.choices, ("a", "b"))

    def testFlagsAcceptIntegers(self):
        argument = Argument("-v", flags=Flags.NOCASE | Flags.SKIP)
        self.assertTrue(argument.nocase)
        self.assertTrue(argument.skip)
        self.assertFalse(argument.required)

    def testAttachedNargsIsZero(self):
        self.assertEqual(Argument("-I", Kind.INTEGER, attached=True).nargs, 0)
        self.assertEqual(Argument("-b").nargs, 0)

    def testDefinitionIsReadOnly(self):
        argument = Argument("-v")
        with self.assertRaises(AttributeError):
            argument.name = "-w"  # type: ignore[misc]

    def testMalformedNameRejected(self):
        for name in ("v", "-", "-_v", "-v-w", "- v"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Argument(name)

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Argument(7)  # type: ignore[arg-type]

    def testKindMustBeKind(self):
        with self.assertRaises(TypeError):
            Argument("-v", "boolean")  # type: ignore[arg-type]

    def testAttachedBooleanRejected(self):
        with self.assertRaises(ValueError):
            Argument("-v", Kind.BOOLEAN, attached=True)

    def testCountRules(self):
        with self.assertRaises(TypeError):
            Argument("-i", Kind.INTEGER, count=True)
        with self.assertRaises(ValueError):
            Argument("-i", Kind.INTEGER, count=0)
        with self.assertRaises(ValueError):
            Argument("-i", Kind.INTEGER, count=2)

    def testChoicesOnlyForChoiceKind(self):
        with self.assertRaises(ValueError):
            Argument("-i", Kind.INTEGER, choices=["a"])

    def testChoicesMustBeNonEmptyStrings(self):
        with self.assertRaises(TypeError):
            Argument("-c", Kind.CHOICE, choices=["a", ""])

    def testDefaultTypeChecked(self):
        with self.assertRaises(TypeError):
            Argument("-i", Kind.INTEGER, default="3")
        with self.assertRaises(TypeError):
            Argument("-i", Kind.INTEGER, default=True)
        with self.assertRaises(TypeError):
            Argument("-b", Kind.BOOLEAN, default=1)

    def testDescrMustBeString(self):
        with self.assertRaises(TypeError):
            Argument("-v", descr=5)  # type: ignore[arg-type]
        self.assertIsNone(Argument("-v").descr)

    def testRepr(self):
        self.assertTrue(repr(Argument("-v")).startswith("argument(name='-v'"))


class TestArgumentMatching(TestCase):
    """Behavioral tests for token matching."""

    def testUnattachedRequiresEquality(self):
        argument = Argument("-i", Kind.INTEGER)
        self.assertTrue(argument.matches("-i"))
        self.assertFalse(argument.matches("-i3"))
        self.assertFalse(argument.matches("-I"))

    def testAttachedRequiresLongerToken(self):
        argument = Argument("-I", Kind.INTEGER, attached=True)
        self.assertFalse(argument.matches("-I"))
        self.assertTrue(argument.matches("-I42"))
        self.assertFalse(argument.matches("-i42"))

    def testCaseInsensitiveNames(self):
        argument = Argument("-verbose", flags=Flags.NOCASE)
        self.assertTrue(argument.matches("-VERBOSE"))
        self.assertTrue(argument.named("-Verbose"))

    def testCaseInsensitiveAttached(self):
        argument = Argument("-L", Kind.STRING, attached=True, flags=Flags.NOCASE)
        self.assertTrue(argument.matches("-lpath"))

    def testNamedIsExact(self):
        argument = Argument("-v")
        self.assertTrue(argument.named("-v"))
        self.assertFalse(argument.named("-V"))


class TestArgumentAssignment(TestCase):
    """Behavioral tests for value assignment."""

    def testBooleanAssignment(self):
        argument = Argument("-v")
        self.assertTrue(argument.assign("-v"))
        self.assertIs(argument.value, True)
        self.assertTrue(argument.isset)

    def testIntegerAssignment(self):
        argument = Argument("-i", Kind.INTEGER, default=3)
        self.assertTrue(argument.assign("-i", ["42"]))
        self.assertEqual(argument.value, 42)
        self.assertTrue(argument.isset)

    def testAttachedAssignment(self):
        argument = Argument("-R", Kind.REAL, attached=True)
        self.assertTrue(argument.assign("-R2.5"))
        self.assertEqual(argument.value, 2.5)

    def testInvalidValueLeavesStateUntouched(self):
        argument = Argument("-i", Kind.INTEGER, default=3)
        self.assertFalse(argument.assign("-i", ["x"]))
        self.assertEqual(argument.value, 3)
        self.assertFalse(argument.isset)

    def testChoiceResolvesLabelIndex(self):
        argument = Argument("-m", Kind.CHOICE, choices=["fast", "slow"])
        self.assertTrue(argument.assign("-m", ["slow"]))
        self.assertEqual(argument.value, 1)

    def testRepeatedChoiceUsesFirstIndex(self):
        argument = Argument("-m", Kind.CHOICE, choices=["fast", "slow", "fast"])
        self.assertTrue(argument.assign("-m", ["fast"]))
        self.assertEqual(argument.value, 0)

    def testUnknownChoiceRejected(self):
        argument = Argument("-m", Kind.CHOICE, choices=["fast", "slow"])
        self.assertFalse(argument.assign("-m", ["medium"]))
        self.assertEqual(argument.value, 0)
        self.assertFalse(argument.isset)

    def testStringListAccumulates(self):
        argument = Argument("-s", Kind.STRING_LIST)
        argument.assign("-s", ["a"])
        argument.assign("-s", ["b"])
        self.assertEqual(argument.value, ["a", "b"])

    def testStringAcceptsAnything(self):
        argument = Argument("-s", Kind.STRING)
        self.assertTrue(argument.assign("-s", ["-x"]))
        self.assertEqual(argument.value, "-x")


if __name__ == "__main__":
    unittest.main()
