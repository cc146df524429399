"""
Token classification and switch matching tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from switchboard import StringArgument, BoolArgument
from switchboard.tokens import Match, classify, fold, match, collision


class TestClassify(TestCase):

    def testPrefixes(self):
        self.assertEqual(classify("/out"), (Match.EITHER, "out"))
        self.assertEqual(classify("--out"), (Match.LONG, "out"))
        self.assertEqual(classify("-o"), (Match.SHORT, "o"))

    def testBareToken(self):
        self.assertEqual(classify("report.txt"), (None, "report.txt"))

    def testDoubleDashIsLong(self):
        self.assertEqual(classify("--"), (Match.LONG, ""))

    def testFold(self):
        self.assertEqual(fold("Out"), "out")
        self.assertEqual(fold("Out", True), "Out")


class TestMatch(TestCase):

    def setUp(self):
        self.out = StringArgument("OutFile", "o", "out")
        self.verbose = BoolArgument("Verbose", "v", "verbose")
        self.arguments = [self.out, self.verbose]

    def testShortOnly(self):
        self.assertIs(match(self.arguments, "-o"), self.out)
        self.assertIsNone(match(self.arguments, "-out"))

    def testLongOnly(self):
        self.assertIs(match(self.arguments, "--verbose"), self.verbose)
        self.assertIsNone(match(self.arguments, "--v"))

    def testSlashMatchesEither(self):
        self.assertIs(match(self.arguments, "/v"), self.verbose)
        self.assertIs(match(self.arguments, "/out"), self.out)

    def testBareTokenNeverMatches(self):
        self.assertIsNone(match(self.arguments, "o"))

    def testCaseMode(self):
        self.assertIs(match(self.arguments, "-V"), self.verbose)
        self.assertIsNone(match(self.arguments, "-V", sensitive=True))

    def testFirstMatchWins(self):
        shadow = BoolArgument("Shadow", "o")
        self.assertIs(match([self.out, shadow], "-o"), self.out)


class TestCollision(TestCase):

    def setUp(self):
        self.arguments = [StringArgument("OutFile", "o", "out")]

    def testShortAgainstLong(self):
        other = BoolArgument("Other", "OUT")
        self.assertEqual(collision(other, self.arguments), (self.arguments[0], "OUT"))

    def testCaseSensitiveIsFree(self):
        self.assertIsNone(collision(BoolArgument("Other", "O"), self.arguments, sensitive=True))

    def testFreeSwitches(self):
        self.assertIsNone(collision(BoolArgument("Other", "x", "xray"), self.arguments))


if __name__ == "__main__":
    unittest.main()
