"""
Utils module behavioral tests (sentinel, helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argtable.utils import Unset, UnsetType, coalesce, rename, mirror, unescape, same


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", Unset | str)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 3), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestHelpers(TestCase):
    """Behavioral tests for rename, mirror, unescape and same."""

    def testRenameDecorator(self):
        @rename("other")
        def function():
            pass
        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(3)
        with self.assertRaises(TypeError):
            rename("x")(3)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testUnescape(self):
        self.assertEqual(unescape(r"a\ b"), "a b")
        self.assertEqual(unescape(r"\\"), "\\")
        self.assertEqual(unescape(r"\)"), ")")
        self.assertEqual(unescape("end\\"), "end\\")
        self.assertEqual(unescape("plain"), "plain")

    def testSame(self):
        self.assertTrue(same("-v", "-v"))
        self.assertFalse(same("-v", "-V"))
        self.assertTrue(same("-v", "-V", nocase=True))


if __name__ == "__main__":
    unittest.main()
