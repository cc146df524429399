"""
Parsed value tests (tagged union, coercion, Empty sentinel).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from switchboard import (
    Kind,
    StringArgument,
    IntArgument,
    BoolArgument,
    Value,
    StringValue,
    IntValue,
    BoolValue,
    EmptyType,
    Empty,
    coerce,
)


class TestCoerce(TestCase):
    """Raw parser input to typed values."""

    def setUp(self):
        self.out = StringArgument("OutFile", "o", "out")
        self.count = IntArgument("Count", "c", "count")
        self.verbose = BoolArgument("Verbose", "v", "verbose")

    def testStringKeptVerbatim(self):
        value = coerce(self.out, "  report.txt ")
        self.assertIsInstance(value, StringValue)
        self.assertEqual(value.payload, "  report.txt ")
        self.assertIs(value.definition, self.out)
        self.assertIs(value.kind, Kind.STRING)

    def testIntFromText(self):
        value = coerce(self.count, "42")
        self.assertIsInstance(value, IntValue)
        self.assertEqual(value.as_int(), 42)
        self.assertEqual(value.as_string(), "42")

    def testIntFromBadTextRaises(self):
        with self.assertRaises(ValueError):
            coerce(self.count, "seven")

    def testIntRejectsBool(self):
        with self.assertRaises(TypeError):
            coerce(self.count, True)

    def testBoolFromTrue(self):
        self.assertIs(coerce(self.verbose, True).as_bool(), True)

    def testBoolFromWords(self):
        self.assertIs(coerce(self.verbose, "TRUE").as_bool(), True)
        self.assertIs(coerce(self.verbose, "false").as_bool(), False)
        with self.assertRaises(ValueError):
            coerce(self.verbose, "maybe")

    def testBoolRejectsNumbers(self):
        with self.assertRaises(TypeError):
            coerce(self.verbose, 1)


class TestValue(TestCase):
    """Construction checks and typed readers."""

    def testBaseCannotBeInstantiated(self):
        with self.assertRaises(TypeError):
            Value(StringArgument("OutFile", "o"), "x")

    def testKindMismatchRejected(self):
        with self.assertRaises(TypeError):
            StringValue(IntArgument("Count", "c"), "3")

    def testPayloadTypeEnforced(self):
        with self.assertRaises(TypeError):
            IntValue(IntArgument("Count", "c"), True)
        with self.assertRaises(TypeError):
            BoolValue(BoolArgument("Verbose", "v"), "yes")

    def testMismatchedReaderRaises(self):
        value = StringValue(StringArgument("OutFile", "o"), "report.txt")
        with self.assertRaises(TypeError):
            value.as_int()
        with self.assertRaises(TypeError):
            value.as_bool()

    def testStructuralMatching(self):
        count = IntArgument("Count", "c")
        match coerce(count, "7"):
            case IntValue(definition, payload):
                self.assertIs(definition, count)
                self.assertEqual(payload, 7)
            case _:
                self.fail("an int value was expected")

    def testEquality(self):
        count = IntArgument("Count", "c")
        self.assertEqual(coerce(count, "7"), IntValue(count, 7))
        self.assertNotEqual(coerce(count, "7"), IntValue(IntArgument("Count", "c"), 7))


class TestEmpty(TestCase):
    """The no-value sentinel."""

    def testZeroValues(self):
        self.assertEqual(Empty.as_string(), "")
        self.assertEqual(Empty.as_int(), 0)
        self.assertIs(Empty.as_bool(), False)

    def testFalsySingleton(self):
        self.assertFalse(Empty)
        self.assertIs(EmptyType(), Empty)
        self.assertIs(copy.deepcopy(Empty), Empty)
        self.assertEqual(repr(Empty), "Empty")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Other(EmptyType):
                pass


if __name__ == "__main__":
    unittest.main()
