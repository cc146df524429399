"""
Utility tests (Unset sentinel, coalesce, rename, mirror, pluralize).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from switchboard.utils import Unset, UnsetType, coalesce, rename, mirror, pluralize


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIs(copy.copy(Unset), Unset)

    def testUnion(self):
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 7), 0)
        self.assertIsNone(coalesce(None, 7))


class TestHelpers(TestCase):

    def testRename(self):
        @rename("renamed")
        def original():
            pass
        self.assertEqual(original.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")
            missing = mirror("missing")

            def __init__(self):
                self._items = ["a", "b"]
                self._missing = Unset

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsNone(holder.missing)

    def testPluralize(self):
        self.assertEqual(pluralize("switch"), "switches")
        self.assertEqual(pluralize("argument", 1), "argument")
        self.assertEqual(pluralize("argument", 3), "arguments")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("key"), "keys")
        self.assertEqual(pluralize("BOX"), "BOXES")
        self.assertEqual(pluralize("mandatory argument"), "mandatory arguments")


if __name__ == "__main__":
    unittest.main()
